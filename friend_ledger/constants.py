"""Fixed configuration tables for ``friend_ledger``.

Values here are not read from the environment. Anything a deployment may want
to tune (log level, default ledger path) lives in environment variables read
by :mod:`friend_ledger.logging_setup` and :mod:`friend_ledger.cli`.
"""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType

# Sentinel party id for the current user on either side of a transaction.
SELF_ID: str = "me"

# Balances strictly inside (-0.01, 0.01) count as settled everywhere.
SETTLED_EPSILON: Decimal = Decimal("0.01")

DEFAULT_TYPE: str = "General"

# Chart colors by transaction ``type``. Every type is its own category; custom
# user-defined types fall back to ``DEFAULT_COLOR``.
TRANSACTION_COLORS: MappingProxyType[str, str] = MappingProxyType(
    {
        "Meal": "#FF90E8",
        "Transport": "#FFDE59",
        "Groceries": "#90A8ED",
        "Poker": "#C3F53C",
        "Movies": "#A388EE",
        "Loan": "#4ADE80",
        "Shopping": "#FF7A5C",
        "General": "#B8B8B8",
    }
)

DEFAULT_COLOR: str = TRANSACTION_COLORS[DEFAULT_TYPE]


__all__ = [
    "SELF_ID",
    "SETTLED_EPSILON",
    "DEFAULT_TYPE",
    "TRANSACTION_COLORS",
    "DEFAULT_COLOR",
]
