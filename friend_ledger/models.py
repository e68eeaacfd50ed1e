"""Data models and type aliases for ``friend_ledger``.

Two families of types live here:

- Engine values (frozen dataclasses): :class:`Transaction` and the derived
  views returned by the engine (:class:`FriendSummary`, :class:`ChartSlice`,
  :class:`LedgerTotals`, :class:`SettlementTerms`, :class:`HistoryGroup`).
- Boundary DTOs (pydantic models): :class:`TransactionRecord`,
  :class:`FriendRecord` and :class:`LedgerFile` mirror the JSON written by the
  host application and convert into engine values.

All timestamps held by engine values are naive local datetimes. Aware inputs
are converted to local time on construction so that sorting and calendar-day
arithmetic never mix naive and aware values.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_TYPE

# ---------------------------------------------------------------------------
# Timestamp helpers
# ---------------------------------------------------------------------------


def to_local_naive(dt: datetime) -> datetime:
    """Return ``dt`` as a naive datetime in local time.

    Naive values are assumed to already be local and are returned unchanged.
    """

    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_timestamp(raw: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp leniently.

    Accepts ``datetime`` instances, ``YYYY-MM-DD`` dates and full timestamps
    (including a trailing ``Z``). Returns ``None`` for anything else rather than
    raising; callers decide whether to log or skip.
    """

    if isinstance(raw, datetime):
        return to_local_naive(raw)
    if not isinstance(raw, str):
        return None
    s = raw.strip()
    if not s:
        return None
    try:
        return to_local_naive(datetime.fromisoformat(s))
    except ValueError:
        return None


def _to_decimal(raw: Any) -> Decimal:
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, bool):
        raise TypeError("amount must be numeric, not bool")
    if isinstance(raw, float):
        # Go through str() so 12.5 becomes Decimal("12.5"), not the binary expansion.
        return Decimal(str(raw))
    try:
        return Decimal(raw)
    except (InvalidOperation, TypeError) as exc:
        raise TypeError(f"invalid amount: {raw!r}") from exc


# ---------------------------------------------------------------------------
# Engine values
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single two-party money movement between the user and a friend.

    Attributes
    ----------
    id:
        Opaque unique identifier assigned by the host application.
    amount:
        Positive monetary value. Ints, floats and numeric strings are coerced
        to :class:`~decimal.Decimal`.
    date:
        When the transaction happened, or ``None`` when the stored timestamp
        could not be parsed. Strings are parsed as ISO-8601.
    type:
        Category label (``"Meal"``, ``"Loan"``, or any user-defined string).
        Ignored for balance purposes; drives the category breakdown.
    payer_id:
        Who paid: ``"me"`` or a friend id.
    friend_id:
        The other party: ``"me"`` or a friend id.
    is_settlement:
        ``True`` for a balance-clearing payment rather than a shared expense.
    title, note:
        Free text for display and search only.
    """

    id: str
    amount: Decimal
    date: datetime | None
    payer_id: str
    friend_id: str
    type: str = DEFAULT_TYPE
    is_settlement: bool = False
    title: str | None = None
    note: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", _to_decimal(self.amount))
        if self.date is not None:
            object.__setattr__(self, "date", parse_timestamp(self.date))


Transactions: TypeAlias = Sequence[Transaction]
"""An ordered collection of transactions; functions may iterate it more than once."""


FriendStatus = Literal["settled", "active"]


@dataclass(frozen=True, slots=True)
class FriendSummary:
    """Derived per-friend view. Never mutated; rebuilt from transactions."""

    friend_id: str
    balance: Decimal
    last_activity: str
    status: FriendStatus


@dataclass(frozen=True, slots=True)
class ChartSlice:
    name: str
    value: int
    color: str


@dataclass(frozen=True, slots=True)
class LedgerTotals:
    total_owed: Decimal
    total_owing: Decimal
    net_balance: Decimal


@dataclass(frozen=True, slots=True)
class SettlementTerms:
    """Direction and amount of a payment that would clear a friend's balance."""

    payer_id: str
    friend_id: str
    amount: Decimal


@dataclass(frozen=True, slots=True)
class HistoryGroup:
    label: str
    transactions: tuple[Transaction, ...]


# ---------------------------------------------------------------------------
# Boundary DTOs for the ledger JSON file
# ---------------------------------------------------------------------------


class TransactionRecord(BaseModel):
    """Typed model of one transaction as stored by the host application.

    Field names accept both the stored camelCase spelling (``payerId``,
    ``isSettlement``) and snake_case. Unknown keys are ignored. ``date`` is
    kept as raw text here; conversion to ``datetime`` happens in
    :meth:`to_transaction` and never fails.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    id: str
    amount: Decimal
    date: str | None = None
    type: str = DEFAULT_TYPE
    payer_id: str
    friend_id: str
    is_settlement: bool = False
    title: str | None = None
    note: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_TYPE
        return v

    @field_validator("is_settlement", mode="before")
    @classmethod
    def _null_is_false(cls, v: Any) -> Any:
        return False if v is None else v

    def to_transaction(self) -> Transaction:
        return Transaction(
            id=self.id,
            amount=self.amount,
            date=parse_timestamp(self.date),
            payer_id=self.payer_id,
            friend_id=self.friend_id,
            type=self.type,
            is_settlement=self.is_settlement,
            title=self.title,
            note=self.note,
        )


class FriendRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    id: str
    name: str = ""


class LedgerFile(BaseModel):
    """Top-level schema for a ledger JSON file."""

    model_config = ConfigDict(extra="ignore")

    transactions: list[TransactionRecord] = Field(default_factory=list)
    friends: list[FriendRecord] = Field(default_factory=list)


__all__ = [
    "Transaction",
    "Transactions",
    "FriendStatus",
    "FriendSummary",
    "ChartSlice",
    "LedgerTotals",
    "SettlementTerms",
    "HistoryGroup",
    "TransactionRecord",
    "FriendRecord",
    "LedgerFile",
    "parse_timestamp",
    "to_local_naive",
]
