"""Per-case investment pools and pro-rata claim token minting.

Each case has at most one pool holding the cumulative amount invested, the
cumulative tokens minted against it, and an open/closed gate controlled by the
administrator. Pools refer to cases by id only; whether a case is verified has
no bearing on whether its pool accepts money.

Minting rate:

* the first contribution to a pool (``total_invested == 0``) mints tokens 1:1;
* every later contribution mints ``amount * total_tokens // total_invested``,
  i.e. the contribution priced at the pool's current tokens-per-unit rate,
  truncated toward zero.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from .errors import InvalidAmountError, InvalidInputError, PoolClosedError, UnauthorizedError
from .investment_log import InvestmentLog
from .models import CaseId, CaseInvestmentPool, Investment, is_identity
from .store import KeyValueStore
from .token_ledger import TokenLedger

logger = logging.getLogger(__name__)

TABLE = "pools"

Clock = Callable[[], int]


def unix_now() -> int:
    return int(time.time())


def tokens_for_contribution(amount: int, pool: CaseInvestmentPool) -> int:
    """Tokens to mint for ``amount`` at the pool's current rate."""
    if pool.total_invested == 0:
        return amount
    # Python ints do not overflow, so the product is exact before flooring
    return amount * pool.total_tokens // pool.total_invested


def _is_valid_amount(amount: Any) -> bool:
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0


class InvestmentPool:
    def __init__(
        self,
        store: KeyValueStore,
        admin: str,
        tokens: TokenLedger,
        log: InvestmentLog,
        clock: Clock = unix_now,
    ) -> None:
        self._store = store
        self._admin = admin
        self._tokens = tokens
        self._log = log
        self._clock = clock

    def get_case_investment_data(self, case_id: CaseId) -> CaseInvestmentPool:
        row = self._store.get(TABLE, case_id)
        if row is None:
            return CaseInvestmentPool()
        return CaseInvestmentPool.model_validate(row)

    def open_case_for_investment(self, case_id: CaseId, caller: str) -> CaseInvestmentPool:
        return self._set_open(case_id, caller, True)

    def close_case_for_investment(self, case_id: CaseId, caller: str) -> CaseInvestmentPool:
        return self._set_open(case_id, caller, False)

    def invest(self, case_id: CaseId, amount: int, caller: str) -> Investment:
        pool = self.get_case_investment_data(case_id)
        if not pool.is_open:
            raise PoolClosedError(case_id)
        if not _is_valid_amount(amount):
            raise InvalidAmountError(amount)
        if not is_identity(caller):
            raise InvalidInputError("investor", caller, "identities are non-empty strings")

        minted = tokens_for_contribution(amount, pool)
        investment = self._log.append(
            investor=caller,
            case_id=case_id,
            amount=amount,
            tokens_issued=minted,
            investment_date=self._clock(),
        )
        updated = pool.model_copy(
            update={
                "total_invested": pool.total_invested + amount,
                "total_tokens": pool.total_tokens + minted,
            }
        )
        self._store.put(TABLE, case_id, updated.model_dump())
        self._tokens.mint(caller, minted)

        logger.info(
            "Recorded investment",
            extra={
                "extra": {
                    "investment_id": investment.investment_id,
                    "case_id": case_id,
                    "investor": caller,
                    "amount": amount,
                    "tokens_issued": minted,
                }
            },
        )
        return investment

    def _set_open(self, case_id: CaseId, caller: str, is_open: bool) -> CaseInvestmentPool:
        if caller != self._admin:
            action = "open" if is_open else "close"
            raise UnauthorizedError(caller, f"{action} the investment pool for case {case_id!r}")
        # Totals survive re-opening and closing; a missing pool starts at zero
        pool = self.get_case_investment_data(case_id).model_copy(update={"is_open": is_open})
        self._store.put(TABLE, case_id, pool.model_dump())
        logger.info(
            "Pool opened" if is_open else "Pool closed",
            extra={"extra": {"case_id": case_id, "total_invested": pool.total_invested}},
        )
        return pool
