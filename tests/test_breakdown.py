from friend_ledger import calculate_debt_origins
from friend_ledger.constants import DEFAULT_COLOR, TRANSACTION_COLORS
from friend_ledger.models import ChartSlice
from tests.helpers.ledger import friend_paid, me_paid


def test_even_split_keeps_first_seen_order_on_ties():
    txs = [
        me_paid("60", type="Meal"),
        friend_paid("100", type="Loan"),
        me_paid("40", type="Meal"),
    ]
    assert calculate_debt_origins(txs) == [
        ChartSlice(name="Meal", value=50, color=TRANSACTION_COLORS["Meal"]),
        ChartSlice(name="Loan", value=50, color=TRANSACTION_COLORS["Loan"]),
    ]


def test_sorted_descending_and_settlements_excluded():
    txs = [
        me_paid("10", type="Transport"),
        me_paid("30", type="Poker"),
        me_paid("60", type="Meal"),
        friend_paid("500", type="Meal", settlement=True),
    ]
    result = calculate_debt_origins(txs)
    assert [(s.name, s.value) for s in result] == [("Meal", 60), ("Poker", 30), ("Transport", 10)]


def test_custom_type_gets_default_color():
    result = calculate_debt_origins([me_paid("5", type="Concert tickets")])
    assert result == [ChartSlice(name="Concert tickets", value=100, color=DEFAULT_COLOR)]


def test_types_are_not_merged():
    txs = [me_paid("50", type="Poker"), me_paid("50", type="Shopping")]
    assert {s.name for s in calculate_debt_origins(txs)} == {"Poker", "Shopping"}


def test_independent_rounding_may_not_sum_to_100():
    txs = [me_paid("1", type="A"), me_paid("1", type="B"), me_paid("1", type="C")]
    values = [s.value for s in calculate_debt_origins(txs)]
    assert values == [33, 33, 33]
    assert sum(values) == 99


def test_half_percent_rounds_up():
    # 1/8 = 12.5% -> 13, 7/8 = 87.5% -> 88
    txs = [me_paid("1", type="Small"), me_paid("7", type="Big")]
    assert [(s.name, s.value) for s in calculate_debt_origins(txs)] == [("Big", 88), ("Small", 13)]


def test_zero_percent_slices_are_dropped():
    txs = [me_paid("1000", type="Loan"), me_paid("1", type="Meal")]
    assert [s.name for s in calculate_debt_origins(txs)] == ["Loan"]


def test_empty_when_no_expenses():
    assert calculate_debt_origins([]) == []
    assert calculate_debt_origins([friend_paid("10", settlement=True)]) == []
    assert calculate_debt_origins([me_paid("0", type="Meal")]) == []
