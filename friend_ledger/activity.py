"""Activity recency strings ("Today", "3 days ago", "Oct 24").

Ages are measured in calendar days (midnight to midnight, local time), not in
elapsed 24-hour periods: something logged at 23:50 yesterday is "Yesterday"
at 00:10 today.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from .balances import is_relevant
from .models import Transaction, to_local_naive

NEVER = "Never"


def calendar_days_between(earlier: datetime, later: datetime) -> int:
    """Return the number of calendar-day boundaries between two timestamps.

    Negative when ``earlier`` is actually after ``later``.
    """

    return (to_local_naive(later).date() - to_local_naive(earlier).date()).days


def format_short_date(dt: datetime) -> str:
    """Short month/day label, e.g. ``"Oct 24"``."""

    return f"{dt:%b} {dt.day}"


def describe_age(dt: datetime, *, now: datetime | None = None) -> str:
    """Bucket the age of ``dt`` relative to ``now`` into a display string.

    Future timestamps are reported as ``"Today"``.
    """

    current = now if now is not None else datetime.now()
    days = calendar_days_between(dt, current)
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        weeks = days // 7
        return f"{weeks} week{'s' if weeks > 1 else ''} ago"
    return format_short_date(dt)


def get_last_activity(
    friend_id: str,
    transactions: Iterable[Transaction],
    *,
    now: datetime | None = None,
) -> str:
    """Return how long ago the latest transaction with ``friend_id`` happened.

    Settlements count as activity. Transactions without a usable date are
    ignored; when nothing dated remains the result is ``"Never"``.
    """

    latest: datetime | None = None
    for tx in transactions:
        if tx.date is None or not is_relevant(tx, friend_id):
            continue
        if latest is None or tx.date > latest:
            latest = tx.date
    if latest is None:
        return NEVER
    return describe_age(latest, now=now)


__all__ = [
    "NEVER",
    "calendar_days_between",
    "format_short_date",
    "describe_age",
    "get_last_activity",
]
