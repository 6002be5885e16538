from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from .errors import AlreadyExistsError, InvalidInputError, InvalidStateError, NotFoundError, UnauthorizedError
from .models import Case, CaseId, CaseStatus, is_identity
from .store import KeyValueStore

logger = logging.getLogger(__name__)

TABLE = "cases"


class CaseRegistry:
    """Owns case records and their verification state machine.

    A case starts ``PENDING`` and is resolved exactly once, by the
    administrator, to either ``VERIFIED`` or ``REJECTED``.
    """

    def __init__(self, store: KeyValueStore, admin: str) -> None:
        self._store = store
        self._admin = admin

    def register_case(
        self,
        case_id: CaseId,
        defendant: str,
        jurisdiction: str,
        details: str,
        filing_date: int,
        caller: str,
    ) -> Case:
        if not is_identity(caller):
            raise InvalidInputError("caller", caller, "identities are non-empty strings")
        if not is_identity(defendant):
            raise InvalidInputError("defendant", defendant, "identities are non-empty strings")
        try:
            case = Case(
                case_id=case_id,
                plaintiff=caller,
                defendant=defendant,
                jurisdiction=jurisdiction,
                details=details,
                filing_date=filing_date,
            )
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(p) for p in first["loc"]) or "case"
            raise InvalidInputError(field, first.get("input"), first["msg"]) from e
        if self._store.get(TABLE, case_id) is not None:
            raise AlreadyExistsError(case_id)
        self._store.put(TABLE, case_id, case.model_dump(mode="json"))
        logger.info(
            "Registered case",
            extra={"extra": {"case_id": case_id, "plaintiff": caller, "jurisdiction": jurisdiction}},
        )
        return case

    def verify_case(self, case_id: CaseId, caller: str) -> Case:
        return self._resolve(case_id, caller, CaseStatus.VERIFIED)

    def reject_case(self, case_id: CaseId, caller: str) -> Case:
        return self._resolve(case_id, caller, CaseStatus.REJECTED)

    def get_case(self, case_id: CaseId) -> Optional[Case]:
        row = self._store.get(TABLE, case_id)
        if row is None:
            return None
        return Case.model_validate(row)

    def list_cases(self) -> List[Case]:
        return [Case.model_validate(row) for _, row in self._store.items(TABLE)]

    def _resolve(self, case_id: CaseId, caller: str, outcome: CaseStatus) -> Case:
        # Guard order: existence, then authorization, then state
        case = self.get_case(case_id)
        if case is None:
            raise NotFoundError(case_id)
        if caller != self._admin:
            raise UnauthorizedError(caller, f"mark case {case_id!r} {outcome.value}")
        if case.is_resolved:
            raise InvalidStateError(case_id, case.status)

        resolved = case.model_copy(update={"status": outcome, "verifier": caller})
        self._store.put(TABLE, case_id, resolved.model_dump(mode="json"))
        logger.info(
            "Resolved case",
            extra={"extra": {"case_id": case_id, "status": outcome.value, "verifier": caller}},
        )
        return resolved
