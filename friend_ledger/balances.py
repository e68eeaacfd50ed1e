"""Balance accumulation and aggregate rollups.

Sign convention: a positive balance means the friend owes the user; a negative
balance means the user owes the friend.

Only well-formed two-party transactions count: ``"me"`` on exactly one side
and a friend id on the other. Anything else is skipped without error.

Every "is this zero?" decision in the package goes through :func:`is_settled`
so the tolerance stays consistent across status, graying and rollups.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from .constants import SELF_ID, SETTLED_EPSILON
from .logging_setup import get_logger
from .models import LedgerTotals, Transaction

_logger = get_logger("friend_ledger.balances")

_ZERO = Decimal(0)


def is_settled(balance: Decimal | float) -> bool:
    """Return ``True`` when ``balance`` is within the settlement tolerance of zero."""

    return abs(balance) < SETTLED_EPSILON


def counterparty(tx: Transaction) -> str | None:
    """Return the friend id on the non-``"me"`` side, or ``None`` when malformed."""

    payer_is_me = tx.payer_id == SELF_ID
    friend_is_me = tx.friend_id == SELF_ID
    if payer_is_me == friend_is_me:
        return None
    return tx.friend_id if payer_is_me else tx.payer_id


def is_relevant(tx: Transaction, friend_id: str) -> bool:
    """Two-party filter: ``friend_id`` on one side and ``"me"`` on the other."""

    if not friend_id or friend_id == SELF_ID:
        return False
    return counterparty(tx) == friend_id


def balance_delta(tx: Transaction) -> Decimal:
    """Signed effect of ``tx`` on its counterparty's balance.

    When the user pays (an expense or a settlement), the friend's balance goes
    up; when the friend pays, it goes down. Expenses and settlements share the
    same direction rule; ``is_settlement`` only changes what the payment means,
    not which way it moves the balance. Malformed transactions contribute zero.
    """

    if counterparty(tx) is None:
        return _ZERO
    return tx.amount if tx.payer_id == SELF_ID else -tx.amount


def calculate_friend_balances(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """Fold all transactions into a ``{friend_id: balance}`` map in one pass."""

    balances: dict[str, Decimal] = {}
    for tx in transactions:
        friend = counterparty(tx)
        if friend is None:
            continue
        balances[friend] = balances.get(friend, _ZERO) + balance_delta(tx)
    return balances


def calculate_friend_balance(friend_id: str, transactions: Iterable[Transaction]) -> Decimal:
    """Return the signed balance between the user and ``friend_id``.

    Returns ``Decimal(0)`` for an empty or unknown friend id.
    """

    total = _ZERO
    for tx in transactions:
        if is_relevant(tx, friend_id):
            total += balance_delta(tx)
    return total


def _positive_total(balances: Iterable[Decimal]) -> Decimal:
    return sum((b for b in balances if b > 0), _ZERO)


def _negative_total(balances: Iterable[Decimal]) -> Decimal:
    return abs(sum((b for b in balances if b < 0), _ZERO))


def calculate_total_owed(transactions: Iterable[Transaction]) -> Decimal:
    """Sum of all positive per-friend balances (what friends owe the user)."""

    return _positive_total(calculate_friend_balances(transactions).values())


def calculate_total_owing(transactions: Iterable[Transaction]) -> Decimal:
    """Absolute sum of all negative per-friend balances (what the user owes)."""

    return _negative_total(calculate_friend_balances(transactions).values())


def calculate_net_balance(transactions: Iterable[Transaction]) -> Decimal:
    return summarize_ledger(transactions).net_balance


def summarize_ledger(transactions: Iterable[Transaction]) -> LedgerTotals:
    """Compute owed, owing and net totals from a single balance map."""

    balances = list(calculate_friend_balances(transactions).values())
    owed = _positive_total(balances)
    owing = _negative_total(balances)
    _logger.debug(
        "ledger totals: friends=%d owed=%s owing=%s", len(balances), owed, owing
    )
    return LedgerTotals(total_owed=owed, total_owing=owing, net_balance=owed - owing)


__all__ = [
    "is_settled",
    "counterparty",
    "is_relevant",
    "balance_delta",
    "calculate_friend_balances",
    "calculate_friend_balance",
    "calculate_total_owed",
    "calculate_total_owing",
    "calculate_net_balance",
    "summarize_ledger",
]
