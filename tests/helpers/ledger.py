"""Small builders for ledger tests.

``make_tx`` keeps test bodies short: only the fields a test cares about need
to be spelled out, and dates are given as day offsets from ``NOW``.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta
from decimal import Decimal

from friend_ledger.models import Transaction

# Fixed reference point for recency assertions.
NOW = datetime(2024, 3, 15, 12, 0, 0)

_ids = itertools.count(1)


def make_tx(
    amount: str | int | Decimal,
    *,
    payer: str = "me",
    friend: str = "F",
    days_ago: int | None = 0,
    type: str = "General",
    settlement: bool = False,
    id: str | None = None,
    title: str | None = None,
    note: str | None = None,
    at: datetime | None = None,
) -> Transaction:
    """Build a transaction between ``payer`` and ``friend``.

    ``friend`` is the other party: for a friend-paid expense pass
    ``payer="F", friend="me"``. ``days_ago=None`` produces an undated
    transaction; ``at`` overrides the computed date entirely.
    """

    if at is None and days_ago is not None:
        at = NOW - timedelta(days=days_ago)
    return Transaction(
        id=id or f"t{next(_ids)}",
        amount=Decimal(str(amount)),
        date=at,
        payer_id=payer,
        friend_id=friend,
        type=type,
        is_settlement=settlement,
        title=title,
        note=note,
    )


def me_paid(amount, friend: str = "F", **kw) -> Transaction:
    return make_tx(amount, payer="me", friend=friend, **kw)


def friend_paid(amount, friend: str = "F", **kw) -> Transaction:
    return make_tx(amount, payer=friend, friend="me", **kw)
