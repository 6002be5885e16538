"""
TokenLedger unit tests
"""
import pytest


def test_unknown_investor_has_zero_balance(tokens):
    assert tokens.balance_of("nobody") == 0


def test_mint_accumulates(tokens):
    assert tokens.mint("alice", 1000) == 1000
    assert tokens.mint("alice", 250) == 1250
    tokens.mint("bob", 5)

    assert tokens.balance_of("alice") == 1250
    assert tokens.balance_of("bob") == 5
    assert tokens.total_supply() == 1255


def test_mint_zero_is_allowed(tokens):
    tokens.mint("alice", 0)
    assert tokens.balance_of("alice") == 0


def test_mint_negative_is_rejected(tokens):
    tokens.mint("alice", 10)

    with pytest.raises(ValueError):
        tokens.mint("alice", -1)

    assert tokens.balance_of("alice") == 10
