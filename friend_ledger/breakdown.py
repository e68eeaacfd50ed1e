"""Category breakdown of shared expenses for charting."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from .constants import DEFAULT_COLOR, TRANSACTION_COLORS
from .logging_setup import get_logger
from .models import ChartSlice, Transaction

_logger = get_logger("friend_ledger.breakdown")

_HUNDRED = Decimal(100)


def _percent(part: Decimal, total: Decimal) -> int:
    # Half-up: 12.5% -> 13.
    return int((part / total * _HUNDRED).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_debt_origins(
    transactions: Iterable[Transaction],
    *,
    colors: Mapping[str, str] = TRANSACTION_COLORS,
    default_color: str = DEFAULT_COLOR,
) -> list[ChartSlice]:
    """Return the share of each expense ``type`` as integer percentages.

    - Settlements are excluded; every other transaction counts regardless of
      who paid.
    - Percentages are rounded independently and may not add up to exactly 100.
    - Zero-percent slices are dropped.
    - Slices are sorted by percentage, largest first; ties keep the order in
      which each type first appeared.
    - An empty list means "no chart data" (no expenses, or a zero total).
    """

    totals: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.is_settlement:
            continue
        totals[tx.type] = totals.get(tx.type, Decimal(0)) + tx.amount

    grand_total = sum(totals.values(), Decimal(0))
    if grand_total == 0:
        return []

    slices = [
        ChartSlice(
            name=name,
            value=_percent(amount, grand_total),
            color=colors.get(name, default_color),
        )
        for name, amount in totals.items()
    ]
    kept = [s for s in slices if s.value > 0]
    _logger.debug("debt origins: types=%d kept=%d", len(slices), len(kept))
    # sorted() is stable, so equal percentages stay in first-seen order.
    return sorted(kept, key=lambda s: s.value, reverse=True)


__all__ = ["calculate_debt_origins"]
