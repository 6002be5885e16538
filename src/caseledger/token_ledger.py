from __future__ import annotations

import logging

from .store import KeyValueStore

logger = logging.getLogger(__name__)

TABLE = "balances"


class TokenLedger:
    """Per-investor claim token balances. Tokens are only ever minted."""

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def balance_of(self, investor: str) -> int:
        row = self._store.get(TABLE, investor)
        return int(row["balance"]) if row else 0

    def mint(self, investor: str, amount: int) -> int:
        """Credit ``amount`` tokens to ``investor`` and return the new balance."""
        if amount < 0:
            raise ValueError(f"cannot mint a negative amount: {amount}")
        balance = self.balance_of(investor) + amount
        self._store.put(TABLE, investor, {"balance": balance})
        logger.debug(
            "Minted tokens",
            extra={"extra": {"investor": investor, "minted": amount, "balance": balance}},
        )
        return balance

    def total_supply(self) -> int:
        return sum(int(row["balance"]) for _, row in self._store.items(TABLE))
