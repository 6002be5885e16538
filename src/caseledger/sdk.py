"""SDK-style facade over the ledger components (no web server required).

Usage (example):

    from caseledger.sdk import CaseLedger

    ledger = CaseLedger(admin="ST1-ADMIN")
    ledger.register_case(1, "ST2-DEFENDANT", "New York", "Personal injury case", 1617235200, caller="ST3-PLAINTIFF")
    ledger.verify_case(1, caller="ST1-ADMIN")
    ledger.open_case_for_investment(1, caller="ST1-ADMIN")
    result = ledger.invest(1, 1000, caller="ST4-INVESTOR")
    if result.ok:
        investment = ledger.get_investment(result.value)

Mutating operations return a :class:`~caseledger.errors.Result`; reads return
their value directly. Operations are applied one at a time and each either
commits all of its writes or none of them.

Environment variables: see caseledger.config.Settings for all available options.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List, Optional, TypeVar

from .config import Settings, get_settings
from .case_registry import CaseRegistry
from .errors import LedgerError, Result
from .investment_log import InvestmentLog
from .investment_pool import Clock, InvestmentPool, unix_now
from .logging_conf import init_logging
from .models import Case, CaseId, CaseInvestmentPool, Investment
from .store import InMemoryStore, KeyValueStore, SqliteStore
from .token_ledger import TokenLedger

__all__ = [
    "CaseLedger",
    "build_ledger",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CaseLedger:
    """Single-writer entry point for case verification and investment pools."""

    def __init__(
        self,
        admin: str,
        *,
        store: Optional[KeyValueStore] = None,
        clock: Clock = unix_now,
    ) -> None:
        if not admin:
            raise ValueError("an administrator identity is required")
        self._admin = admin
        self._store = store if store is not None else InMemoryStore()
        self._lock = threading.RLock()
        self._cases = CaseRegistry(self._store, admin)
        self._tokens = TokenLedger(self._store)
        self._log = InvestmentLog(self._store)
        self._pools = InvestmentPool(self._store, admin, self._tokens, self._log, clock=clock)

    @property
    def admin(self) -> str:
        return self._admin

    # --- case verification ---

    def register_case(
        self,
        case_id: CaseId,
        defendant: str,
        jurisdiction: str,
        details: str,
        filing_date: int,
        caller: str,
    ) -> Result[None]:
        return self._apply(
            "register_case",
            lambda: self._cases.register_case(case_id, defendant, jurisdiction, details, filing_date, caller),
            returns_value=False,
        )

    def verify_case(self, case_id: CaseId, caller: str) -> Result[None]:
        return self._apply("verify_case", lambda: self._cases.verify_case(case_id, caller), returns_value=False)

    def reject_case(self, case_id: CaseId, caller: str) -> Result[None]:
        return self._apply("reject_case", lambda: self._cases.reject_case(case_id, caller), returns_value=False)

    def get_case(self, case_id: CaseId) -> Optional[Case]:
        return self._read(lambda: self._cases.get_case(case_id))

    def list_cases(self) -> List[Case]:
        return self._read(self._cases.list_cases)

    # --- investment pools ---

    def open_case_for_investment(self, case_id: CaseId, caller: str) -> Result[None]:
        return self._apply(
            "open_case_for_investment",
            lambda: self._pools.open_case_for_investment(case_id, caller),
            returns_value=False,
        )

    def close_case_for_investment(self, case_id: CaseId, caller: str) -> Result[None]:
        return self._apply(
            "close_case_for_investment",
            lambda: self._pools.close_case_for_investment(case_id, caller),
            returns_value=False,
        )

    def invest(self, case_id: CaseId, amount: int, caller: str) -> Result[int]:
        return self._apply("invest", lambda: self._pools.invest(case_id, amount, caller).investment_id)

    def get_investment(self, investment_id: int) -> Optional[Investment]:
        return self._read(lambda: self._log.get(investment_id))

    def get_case_investment_data(self, case_id: CaseId) -> CaseInvestmentPool:
        return self._read(lambda: self._pools.get_case_investment_data(case_id))

    def investments_for_case(self, case_id: CaseId) -> List[Investment]:
        return self._read(lambda: self._log.for_case(case_id))

    def investments_for_investor(self, investor: str) -> List[Investment]:
        return self._read(lambda: self._log.for_investor(investor))

    # --- claim tokens ---

    def balance_of(self, investor: str) -> int:
        return self._read(lambda: self._tokens.balance_of(investor))

    def total_supply(self) -> int:
        return self._read(self._tokens.total_supply)

    def close(self) -> None:
        with self._lock:
            self._store.close()

    def _apply(self, operation: str, fn: Callable[[], Any], *, returns_value: bool = True) -> Result[Any]:
        with self._lock:
            try:
                with self._store.transaction():
                    value = fn()
            except LedgerError as e:
                logger.warning(
                    "Rejected %s: %s",
                    operation,
                    e,
                    extra={"extra": {"operation": operation, "error": e.kind.value}},
                )
                return Result.from_error(e)
        return Result.success(value if returns_value else None)

    def _read(self, fn: Callable[[], T]) -> T:
        with self._lock:
            return fn()


def build_ledger(
    settings: Optional[Settings] = None,
    *,
    clock: Clock = unix_now,
    configure_logging: bool = True,
) -> CaseLedger:
    """Construct a ledger from settings (environment by default).

    Unless ``configure_logging`` is false, the root logger is switched to JSON
    output at ``settings.log_level``. Pass false when the host application owns
    logging configuration.
    """
    settings = settings or get_settings()
    if not settings.admin_identity:
        raise ValueError("LEDGER_ADMIN_IDENTITY must be set to build a ledger")
    if configure_logging:
        init_logging(settings.log_level)
    store: KeyValueStore
    if settings.storage_backend == "sqlite":
        store = SqliteStore(settings.db_path)
    else:
        store = InMemoryStore()
    logger.info(
        "Initialized case ledger",
        extra={"extra": {"environment": settings.environment, "storage": settings.storage_backend}},
    )
    return CaseLedger(settings.admin_identity, store=store, clock=clock)
