"""Error kinds, exceptions and the result type returned at the ledger boundary.

Components raise :class:`LedgerError` subclasses from their guard checks.
:class:`~caseledger.sdk.CaseLedger` converts them into :class:`Result` values
so callers always get an explicit success/failure outcome.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    INVALID_STATE = "invalid_state"
    POOL_CLOSED = "pool_closed"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_INPUT = "invalid_input"


class LedgerError(Exception):
    """Base class for recoverable ledger rejections."""

    kind: ErrorKind

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.context: Dict[str, Any] = context


class AlreadyExistsError(LedgerError):
    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, case_id: Any) -> None:
        self.case_id = case_id
        super().__init__(f"Case already registered: {case_id!r}", case_id=case_id)


class NotFoundError(LedgerError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, case_id: Any) -> None:
        self.case_id = case_id
        super().__init__(f"Case not found: {case_id!r}", case_id=case_id)


class UnauthorizedError(LedgerError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, caller: Any, action: str) -> None:
        self.caller = caller
        self.action = action
        super().__init__(f"Caller {caller!r} may not {action}", caller=caller, action=action)


class InvalidStateError(LedgerError):
    kind = ErrorKind.INVALID_STATE

    def __init__(self, case_id: Any, status: Any) -> None:
        self.case_id = case_id
        self.status = status
        super().__init__(
            f"Case {case_id!r} is already resolved ({getattr(status, 'value', status)})",
            case_id=case_id,
            status=status,
        )


class PoolClosedError(LedgerError):
    kind = ErrorKind.POOL_CLOSED

    def __init__(self, case_id: Any) -> None:
        self.case_id = case_id
        super().__init__(f"Investment pool for case {case_id!r} is not open", case_id=case_id)


class InvalidAmountError(LedgerError):
    kind = ErrorKind.INVALID_AMOUNT

    def __init__(self, amount: Any) -> None:
        self.amount = amount
        super().__init__(f"Investment amount must be a positive integer, got {amount!r}", amount=amount)


class InvalidInputError(LedgerError):
    """A caller identity or case field does not have the expected type."""

    kind = ErrorKind.INVALID_INPUT

    def __init__(self, field: str, value: Any, reason: str = "") -> None:
        self.field = field
        self.value = value
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid {field} {value!r}{detail}", field=field, value=value)


class ResultError(LedgerError):
    """Raised by :meth:`Result.unwrap` when the original exception is not available."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(message)


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: Optional[str] = None
    exception: Optional[LedgerError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error=kind, message=message or kind.value)

    @classmethod
    def from_error(cls, exc: LedgerError) -> "Result[T]":
        return cls(error=exc.kind, message=str(exc), exception=exc)

    def unwrap(self) -> Optional[T]:
        """Return the success value or raise the error this result carries."""
        if self.error is None:
            return self.value
        if self.exception is not None:
            raise self.exception
        raise ResultError(self.error, self.message or self.error.value)

