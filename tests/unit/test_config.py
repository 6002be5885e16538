"""
Settings loading tests
"""
import pytest

from caseledger.config import DEFAULT_DB_PATH, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    for key in ("ENVIRONMENT", "LEDGER_ADMIN_IDENTITY", "LEDGER_STORAGE", "LEDGER_DB_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
        monkeypatch.delenv(key.lower(), raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults():
    settings = get_settings()
    assert settings.environment == "development"
    assert settings.admin_identity is None
    assert settings.storage_backend == "memory"
    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.log_level == "INFO"


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("LEDGER_ADMIN_IDENTITY", "  ST1ADMIN  ")
    monkeypatch.setenv("LEDGER_STORAGE", "SQLite")
    monkeypatch.setenv("LEDGER_DB_PATH", "/tmp/x.db")
    monkeypatch.setenv("log_level", "debug")

    settings = get_settings()
    assert settings.admin_identity == "ST1ADMIN"
    assert settings.storage_backend == "sqlite"
    assert settings.db_path == "/tmp/x.db"
    assert settings.log_level == "DEBUG"


def test_unknown_storage_falls_back_to_memory(monkeypatch):
    monkeypatch.setenv("LEDGER_STORAGE", "postgres")
    assert get_settings().storage_backend == "memory"


def test_blank_admin_is_unset(monkeypatch):
    monkeypatch.setenv("LEDGER_ADMIN_IDENTITY", "   ")
    assert get_settings().admin_identity is None


def test_settings_are_cached(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("ENVIRONMENT", "production")
    assert get_settings() is first
