from __future__ import annotations

from .errors import (
    AlreadyExistsError,
    ErrorKind,
    InvalidAmountError,
    InvalidInputError,
    InvalidStateError,
    LedgerError,
    NotFoundError,
    PoolClosedError,
    Result,
    UnauthorizedError,
)
from .models import Case, CaseInvestmentPool, CaseStatus, Investment
from .sdk import CaseLedger, build_ledger

__all__ = [
    "CaseLedger",
    "build_ledger",
    "Case",
    "CaseStatus",
    "CaseInvestmentPool",
    "Investment",
    "Result",
    "ErrorKind",
    "LedgerError",
    "AlreadyExistsError",
    "NotFoundError",
    "UnauthorizedError",
    "InvalidStateError",
    "PoolClosedError",
    "InvalidAmountError",
    "InvalidInputError",
]
