from __future__ import annotations

import logging
from typing import List, Optional

from .models import CaseId, Investment
from .store import KeyValueStore

logger = logging.getLogger(__name__)

TABLE = "investments"


class InvestmentLog:
    """Append-only record of investments keyed by sequential id.

    Records are never updated or removed, so the next id is always the
    number of stored records plus one. Reading the count from the store
    (inside the caller's transaction) keeps the counter in step with
    commits: an append that rolls back does not consume an id.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def next_id(self) -> int:
        return self._store.count(TABLE) + 1

    def append(
        self,
        investor: str,
        case_id: CaseId,
        amount: int,
        tokens_issued: int,
        investment_date: int,
    ) -> Investment:
        investment = Investment(
            investment_id=self.next_id(),
            investor=investor,
            case_id=case_id,
            amount=amount,
            tokens_issued=tokens_issued,
            investment_date=investment_date,
        )
        self._store.put(TABLE, investment.investment_id, investment.model_dump(mode="json"))
        logger.debug("Appended investment", extra={"extra": {"investment_id": investment.investment_id}})
        return investment

    def get(self, investment_id: int) -> Optional[Investment]:
        row = self._store.get(TABLE, investment_id)
        if row is None:
            return None
        return Investment.model_validate(row)

    def all(self) -> List[Investment]:
        records = [Investment.model_validate(row) for _, row in self._store.items(TABLE)]
        return sorted(records, key=lambda inv: inv.investment_id)

    def for_case(self, case_id: CaseId) -> List[Investment]:
        return [inv for inv in self.all() if inv.case_id == case_id]

    def for_investor(self, investor: str) -> List[Investment]:
        return [inv for inv in self.all() if inv.investor == investor]
