"""
InvestmentLog unit tests: sequential ids and immutable records
"""
import pytest
from pydantic import ValidationError

from caseledger.investment_log import InvestmentLog


def _append(log, investor="alice", case_id=1, amount=100, tokens=100):
    return log.append(investor, case_id, amount, tokens, 1617235200)


def test_ids_start_at_one_and_increase(investment_log):
    ids = [_append(investment_log).investment_id for _ in range(3)]
    assert ids == [1, 2, 3]
    assert investment_log.next_id() == 4


def test_get_returns_stored_record(investment_log):
    created = _append(investment_log, investor="bob", case_id="x", amount=42, tokens=40)

    fetched = investment_log.get(created.investment_id)

    assert fetched == created
    assert fetched.case_id == "x"
    assert fetched.tokens_issued == 40


def test_get_missing_returns_none(investment_log):
    assert investment_log.get(1) is None


def test_records_are_immutable(investment_log):
    record = _append(investment_log)
    with pytest.raises(ValidationError):
        record.amount = 5


def test_rolled_back_append_does_not_consume_an_id(store, investment_log):
    _append(investment_log)

    with pytest.raises(RuntimeError):
        with store.transaction():
            _append(investment_log)
            raise RuntimeError("boom")

    assert investment_log.get(2) is None
    assert _append(investment_log).investment_id == 2


def test_filters_by_case_and_investor(investment_log):
    _append(investment_log, investor="alice", case_id=1)
    _append(investment_log, investor="bob", case_id=2)
    _append(investment_log, investor="alice", case_id=2)

    assert [i.investment_id for i in investment_log.for_case(2)] == [2, 3]
    assert [i.investment_id for i in investment_log.for_investor("alice")] == [1, 3]


def test_ids_resume_from_persisted_log(sqlite_store):
    _append(InvestmentLog(sqlite_store))
    _append(InvestmentLog(sqlite_store))

    assert _append(InvestmentLog(sqlite_store)).investment_id == 3
