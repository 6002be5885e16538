"""
Pytest configuration and shared ledger fixtures
"""
import pytest

from caseledger.case_registry import CaseRegistry
from caseledger.investment_log import InvestmentLog
from caseledger.investment_pool import InvestmentPool
from caseledger.sdk import CaseLedger
from caseledger.store import InMemoryStore, SqliteStore
from caseledger.token_ledger import TokenLedger

ADMIN = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
OTHER = "ST3NBRSFKX28FQ2ZJ1MAKX58HKHSDGNV5N7R21XCP"
DEFENDANT = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
BLOCK_TIME = 1617235200


@pytest.fixture
def admin():
    return ADMIN


@pytest.fixture
def other():
    return OTHER


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def sqlite_store(tmp_path):
    s = SqliteStore(tmp_path / "ledger.db")
    yield s
    s.close()


@pytest.fixture
def registry(store):
    return CaseRegistry(store, ADMIN)


@pytest.fixture
def tokens(store):
    return TokenLedger(store)


@pytest.fixture
def investment_log(store):
    return InvestmentLog(store)


@pytest.fixture
def pool(store, tokens, investment_log):
    return InvestmentPool(store, ADMIN, tokens, investment_log, clock=lambda: BLOCK_TIME)


@pytest.fixture
def ledger():
    return CaseLedger(ADMIN, clock=lambda: BLOCK_TIME)
