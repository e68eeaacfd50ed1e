from dataclasses import replace
from decimal import Decimal

import pytest

from friend_ledger import (
    calculate_friend_balance,
    calculate_friend_balances,
    calculate_net_balance,
    calculate_total_owed,
    calculate_total_owing,
    is_settled,
    summarize_ledger,
)
from friend_ledger.balances import balance_delta, counterparty, is_relevant
from tests.helpers.ledger import friend_paid, make_tx, me_paid


def _meal_scenario():
    return [
        me_paid("45.00", type="Meal", id="t1", days_ago=3),
        friend_paid("12.50", type="Meal", id="t2", days_ago=2),
    ]


def test_expenses_in_both_directions_net_out():
    assert calculate_friend_balance("F", _meal_scenario()) == Decimal("32.50")


def test_settlement_from_friend_clears_balance():
    txs = _meal_scenario() + [friend_paid("32.50", settlement=True, id="t3", days_ago=1)]
    assert calculate_friend_balance("F", txs) == 0


def test_settlement_from_me_reduces_what_i_owe():
    txs = [friend_paid("20"), me_paid("15", settlement=True)]
    assert calculate_friend_balance("F", txs) == Decimal("-5")


def test_settlement_type_is_ignored_for_balance():
    a = [me_paid("10", settlement=True, type="Meal")]
    b = [me_paid("10", settlement=True, type="Whatever")]
    assert calculate_friend_balance("F", a) == calculate_friend_balance("F", b) == Decimal("10")


def test_only_transactions_with_me_on_the_other_side_count():
    txs = [
        me_paid("10", friend="F"),
        make_tx("99", payer="F", friend="G"),  # between two friends
        make_tx("77", payer="me", friend="me"),  # both sides me
        me_paid("5", friend="G"),
    ]
    assert calculate_friend_balance("F", txs) == Decimal("10")
    assert calculate_friend_balance("G", txs) == Decimal("5")
    assert calculate_friend_balances(txs) == {"F": Decimal("10"), "G": Decimal("5")}


@pytest.mark.parametrize("friend_id", ["", "me", "nobody"])
def test_unknown_or_degenerate_friend_is_zero(friend_id):
    assert calculate_friend_balance(friend_id, _meal_scenario()) == 0


def test_empty_ledger():
    assert calculate_friend_balance("F", []) == 0
    assert calculate_friend_balances([]) == {}
    assert calculate_total_owed([]) == 0
    assert calculate_total_owing([]) == 0
    assert calculate_net_balance([]) == 0


def test_swapping_sides_negates_balance():
    txs = [
        me_paid("45", days_ago=4),
        friend_paid("12.5", days_ago=3),
        friend_paid("7", settlement=True, days_ago=2),
        me_paid("3.25", settlement=True, days_ago=1),
        me_paid("100", friend="G"),
    ]

    def swap(tx):
        if counterparty(tx) != "F":
            return tx
        return replace(tx, payer_id=tx.friend_id, friend_id=tx.payer_id)

    swapped = [swap(tx) for tx in txs]
    assert calculate_friend_balance("F", swapped) == -calculate_friend_balance("F", txs)
    assert calculate_friend_balance("G", swapped) == calculate_friend_balance("G", txs)


def test_settlement_pair_cancels_out():
    base = _meal_scenario()
    before = calculate_friend_balance("F", base)
    txs = base + [
        friend_paid("20", settlement=True, days_ago=1),
        me_paid("20", settlement=True, days_ago=0),
    ]
    assert calculate_friend_balance("F", txs) == before


def test_rollups_partition_positive_and_negative_balances():
    txs = [
        me_paid("50", friend="A"),
        friend_paid("20", friend="A"),  # A: +30
        friend_paid("40", friend="B"),  # B: -40
        me_paid("15.75", friend="C"),  # C: +15.75
        friend_paid("10", friend="D"),
        me_paid("10", friend="D"),  # D: 0
    ]
    assert calculate_total_owed(txs) == Decimal("45.75")
    assert calculate_total_owing(txs) == Decimal("40")
    assert calculate_net_balance(txs) == Decimal("5.75")

    totals = summarize_ledger(txs)
    assert totals.total_owed == Decimal("45.75")
    assert totals.total_owing == Decimal("40")
    assert totals.net_balance == Decimal("5.75")


def test_net_is_exactly_owed_minus_owing():
    txs = [
        me_paid("0.10", friend="A"),
        me_paid("0.20", friend="A"),
        friend_paid("0.30", friend="B"),
        friend_paid("1000.01", friend="C"),
        me_paid("333.33", friend="D"),
    ]
    assert calculate_net_balance(txs) == calculate_total_owed(txs) - calculate_total_owing(txs)


def test_functions_are_idempotent():
    txs = _meal_scenario()
    assert calculate_friend_balances(txs) == calculate_friend_balances(txs)
    assert summarize_ledger(txs) == summarize_ledger(txs)


@pytest.mark.parametrize(
    ("balance", "expected"),
    [
        (Decimal("0"), True),
        (Decimal("0.009"), True),
        (Decimal("-0.009"), True),
        (Decimal("0.01"), False),
        (Decimal("0.011"), False),
        (Decimal("-0.011"), False),
        (0.009, True),
    ],
)
def test_is_settled_epsilon_boundary(balance, expected):
    assert is_settled(balance) is expected


def test_balance_delta_and_relevance_on_malformed_rows():
    bad = make_tx("5", payer="F", friend="G")
    assert counterparty(bad) is None
    assert balance_delta(bad) == 0
    assert not is_relevant(bad, "F")
    assert is_relevant(me_paid("1"), "F")
    assert not is_relevant(me_paid("1"), "me")


def test_float_amounts_are_coerced_to_decimal():
    tx = make_tx(Decimal("1"))
    float_tx = replace(tx, amount=12.5)
    assert float_tx.amount == Decimal("12.5")
    assert calculate_friend_balance("F", [float_tx]) == Decimal("12.5")
