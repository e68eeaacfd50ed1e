"""Settlement graying: which past transactions render as already reconciled.

The decision is made by replaying a friend's history in date order and finding
the last point at which the running balance was settled. Everything up to and
including that point is grayed; everything after it is what the current
outstanding balance is made of. Nothing about the outcome is stored on the
transactions themselves, so adding or deleting a transaction anywhere in the
history changes the answer on the next call.

Transactions without a usable date cannot be placed on the timeline. They are
left out of the replay and are therefore only grayed when the friend's current
balance is settled.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .balances import balance_delta, calculate_friend_balance, is_relevant, is_settled
from .logging_setup import get_logger
from .models import Transaction

_logger = get_logger("friend_ledger.graying")


def chronological_history(friend_id: str, transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return the friend's dated transactions, oldest first.

    The sort is stable, so transactions sharing a timestamp keep input order.
    """

    dated = [tx for tx in transactions if tx.date is not None and is_relevant(tx, friend_id)]
    return sorted(dated, key=lambda tx: tx.date)


def last_settled_index(history: Sequence[Transaction]) -> int | None:
    """Index of the last transaction after which the running balance was settled."""

    running = Decimal(0)
    last: int | None = None
    for i, tx in enumerate(history):
        running += balance_delta(tx)
        if is_settled(running):
            last = i
    return last


def _replayed_grayed_ids(friend_id: str, transactions: Iterable[Transaction]) -> frozenset[str]:
    history = chronological_history(friend_id, transactions)
    cutoff = last_settled_index(history)
    _logger.debug(
        "graying replay: friend=%s history=%d cutoff=%s", friend_id, len(history), cutoff
    )
    if cutoff is None:
        return frozenset()
    return frozenset(tx.id for tx in history[: cutoff + 1])


def should_gray_transaction(
    tx: Transaction, friend_id: str, transactions: Iterable[Transaction]
) -> bool:
    """Return ``True`` when ``tx`` should render as already settled.

    - A friend whose current balance is settled has every transaction grayed.
    - Otherwise ``tx`` is grayed when it sits at or before the last point in
      the chronological replay where the running balance was settled.
    - With no such point, nothing is grayed.
    """

    if not friend_id:
        return False
    txs = list(transactions)
    if is_settled(calculate_friend_balance(friend_id, txs)):
        return True
    return tx.id in _replayed_grayed_ids(friend_id, txs)


def grayed_transaction_ids(friend_id: str, transactions: Iterable[Transaction]) -> frozenset[str]:
    """Ids of the friend's transactions that :func:`should_gray_transaction` grays.

    Runs the replay once, for rendering a whole list.
    """

    if not friend_id:
        return frozenset()
    txs = list(transactions)
    if is_settled(calculate_friend_balance(friend_id, txs)):
        return frozenset(tx.id for tx in txs if is_relevant(tx, friend_id))
    return _replayed_grayed_ids(friend_id, txs)


__all__ = [
    "chronological_history",
    "last_settled_index",
    "should_gray_transaction",
    "grayed_transaction_ids",
]
