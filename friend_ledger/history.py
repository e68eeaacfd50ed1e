"""History list helpers: filtering, search, sorting and recency grouping."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import StrEnum
from typing import Literal

from .activity import calendar_days_between
from .balances import counterparty
from .logging_setup import get_logger
from .models import HistoryGroup, Transaction

_logger = get_logger("friend_ledger.history")


class HistoryFilter(StrEnum):
    ALL = "All"
    POKER = "Poker"
    MEALS = "Meals"
    LOANS = "Loans"
    UNSETTLED = "Unsettled"


# Filter chip -> transaction ``type`` it selects.
_FILTER_TYPES: dict[HistoryFilter, str] = {
    HistoryFilter.POKER: "Poker",
    HistoryFilter.MEALS: "Meal",
    HistoryFilter.LOANS: "Loan",
}

TODAY = "Today"
YESTERDAY = "Yesterday"
THIS_WEEK = "This Week"
THIS_MONTH = "This Month"
_FIXED_GROUPS: tuple[str, ...] = (TODAY, YESTERDAY, THIS_WEEK, THIS_MONTH)


def filter_transactions(
    transactions: Iterable[Transaction], history_filter: HistoryFilter | str
) -> list[Transaction]:
    """Apply one of the history filter chips.

    ``Unsettled`` keeps every non-settlement transaction; it does not consult
    balances or graying.
    """

    chip = HistoryFilter(history_filter)
    if chip is HistoryFilter.ALL:
        return list(transactions)
    if chip is HistoryFilter.UNSETTLED:
        return [tx for tx in transactions if not tx.is_settlement]
    wanted = _FILTER_TYPES[chip]
    return [tx for tx in transactions if tx.type == wanted]


def _amount_text(tx: Transaction) -> str:
    # 45.00 -> "45", 12.50 -> "12.5"
    return f"{tx.amount.normalize():f}"


def search_transactions(
    transactions: Iterable[Transaction],
    query: str,
    *,
    friend_names: Mapping[str, str] | None = None,
) -> list[Transaction]:
    """Case-insensitive substring search over friend name, title, note and amount.

    A blank query returns every transaction.
    """

    items = list(transactions)
    q = query.strip().lower()
    if not q:
        return items
    names = friend_names or {}

    def _matches(tx: Transaction) -> bool:
        friend = counterparty(tx)
        haystacks = (
            names.get(friend, "") if friend else "",
            tx.title or "",
            tx.note or "",
            _amount_text(tx),
        )
        return any(q in h.lower() for h in haystacks)

    return [tx for tx in items if _matches(tx)]


def _date_key(tx: Transaction) -> tuple[bool, datetime]:
    # Undated transactions sort as oldest.
    return (tx.date is not None, tx.date or datetime.min)


def sort_transactions(
    transactions: Iterable[Transaction], by: Literal["date", "type"] = "date"
) -> list[Transaction]:
    """Newest first, or grouped by ``type`` (A-Z) and newest first within a type."""

    newest_first = sorted(transactions, key=_date_key, reverse=True)
    if by == "date":
        return newest_first
    if by == "type":
        return sorted(newest_first, key=lambda tx: tx.type.casefold())
    raise ValueError(f"Unsupported sort key: {by!r}. Allowed: ['date', 'type']")


def recency_label(dt: datetime, *, now: datetime | None = None) -> str:
    current = now if now is not None else datetime.now()
    days = calendar_days_between(dt, current)
    if days <= 0:
        return TODAY
    if days == 1:
        return YESTERDAY
    if days < 7:
        return THIS_WEEK
    if days < 30:
        return THIS_MONTH
    return f"{dt:%B %Y}"


def group_by_recency(
    transactions: Iterable[Transaction], *, now: datetime | None = None
) -> list[HistoryGroup]:
    """Bucket transactions for the history screen.

    Groups come out as Today, Yesterday, This Week, This Month (whichever are
    present), followed by one group per older calendar month, newest month
    first. Within a group transactions are newest first. Transactions without
    a usable date are skipped.
    """

    current = now if now is not None else datetime.now()
    buckets: dict[str, list[Transaction]] = {}
    month_keys: dict[str, tuple[int, int]] = {}
    for tx in transactions:
        if tx.date is None:
            _logger.warning("skipping transaction with invalid date: id=%s", tx.id)
            continue
        label = recency_label(tx.date, now=current)
        buckets.setdefault(label, []).append(tx)
        if label not in _FIXED_GROUPS:
            month_keys[label] = (tx.date.year, tx.date.month)

    ordered = [label for label in _FIXED_GROUPS if label in buckets]
    ordered += sorted(month_keys, key=lambda label: month_keys[label], reverse=True)
    return [
        HistoryGroup(label=label, transactions=tuple(sort_transactions(buckets[label])))
        for label in ordered
    ]


__all__ = [
    "HistoryFilter",
    "filter_transactions",
    "search_transactions",
    "sort_transactions",
    "recency_label",
    "group_by_recency",
]
