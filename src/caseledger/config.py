# Configuration and settings for the case ledger
#
# Like the rest of the package this keeps configuration to a small dataclass
# and a cached factory function that reads values from environment variables.

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


STORAGE_BACKENDS = ("memory", "sqlite")
DEFAULT_DB_PATH = str(Path("data") / "ledger.db")


# Helper to fetch the first-present environment variable among several keys
# (e.g., support both UPPERCASE and lowercase variants)
def _get_env_any(keys: list[str], default: Optional[str] = None) -> Optional[str]:
    for k in keys:
        v = os.getenv(k)
        if v is not None:
            return v
    return default


def _get_choice(keys: list[str], choices: tuple[str, ...], default: str) -> str:
    raw = _get_env_any(keys)
    if raw is None:
        return default
    lower = raw.strip().lower()
    if lower in choices:
        return lower
    return default


@dataclass(frozen=True)
class Settings:
    """Runtime configuration for the case ledger.

    Environment variables (case-insensitive aliases shown):
    - ENVIRONMENT / environment
    - LEDGER_ADMIN_IDENTITY / ledger_admin_identity
    - LEDGER_STORAGE / ledger_storage ("memory" or "sqlite")
    - LEDGER_DB_PATH / ledger_db_path
    - LOG_LEVEL / log_level
    """

    # General
    environment: str = "development"

    # The single identity allowed to resolve cases and gate pools
    admin_identity: Optional[str] = None

    # Storage
    storage_backend: str = "memory"
    db_path: str = DEFAULT_DB_PATH

    # Logging
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment with sensible defaults.

    Values are cached for the process lifetime. Clear the cache if you need to
    pick up changes (get_settings.cache_clear()).
    """
    admin = (_get_env_any(["LEDGER_ADMIN_IDENTITY", "ledger_admin_identity"], "") or "").strip()
    return Settings(
        environment=_get_env_any(["ENVIRONMENT", "environment"], "development") or "development",
        admin_identity=admin or None,
        storage_backend=_get_choice(["LEDGER_STORAGE", "ledger_storage"], STORAGE_BACKENDS, "memory"),
        db_path=_get_env_any(["LEDGER_DB_PATH", "ledger_db_path"], DEFAULT_DB_PATH) or DEFAULT_DB_PATH,
        log_level=(_get_env_any(["LOG_LEVEL", "log_level"], "INFO") or "INFO").upper(),
    )
