"""Per-friend derived views: balance, recency, status and settle-up terms.

Friend records held by the host application must take ``balance`` and
``status`` from here after every change to the transaction list, never from a
previously stored copy.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import Decimal

from .activity import get_last_activity
from .balances import calculate_friend_balance, calculate_friend_balances, is_settled
from .constants import SELF_ID
from .logging_setup import get_logger
from .models import FriendStatus, FriendSummary, SettlementTerms, Transaction

_logger = get_logger("friend_ledger.friends")


def friend_status(balance: Decimal) -> FriendStatus:
    return "settled" if is_settled(balance) else "active"


def summarize_friend(
    friend_id: str,
    transactions: Iterable[Transaction],
    *,
    now: datetime | None = None,
) -> FriendSummary:
    txs = list(transactions)
    balance = calculate_friend_balance(friend_id, txs)
    return FriendSummary(
        friend_id=friend_id,
        balance=balance,
        last_activity=get_last_activity(friend_id, txs, now=now),
        status=friend_status(balance),
    )


def summarize_friends(
    friend_ids: Iterable[str],
    transactions: Iterable[Transaction],
    *,
    now: datetime | None = None,
) -> list[FriendSummary]:
    """Rebuild the summary for each friend, preserving ``friend_ids`` order.

    Balances come from one pass over the transactions. Friends without any
    transactions get a zero balance and ``"Never"`` as last activity.
    """

    txs = list(transactions)
    balances = calculate_friend_balances(txs)
    out: list[FriendSummary] = []
    for fid in friend_ids:
        balance = balances.get(fid, Decimal(0))
        out.append(
            FriendSummary(
                friend_id=fid,
                balance=balance,
                last_activity=get_last_activity(fid, txs, now=now),
                status=friend_status(balance),
            )
        )
    _logger.debug("summarized %d friends over %d transactions", len(out), len(txs))
    return out


def active_balances(
    summaries: Sequence[FriendSummary], *, limit: int | None = None
) -> list[FriendSummary]:
    """Unsettled friends ordered by absolute balance, largest first."""

    active = [s for s in summaries if not is_settled(s.balance)]
    active.sort(key=lambda s: abs(s.balance), reverse=True)
    return active if limit is None else active[:limit]


def settlement_terms(friend_id: str, transactions: Iterable[Transaction]) -> SettlementTerms | None:
    """Describe the payment that would bring ``friend_id`` back to zero.

    When the friend owes the user, the friend is the payer; otherwise the user
    pays. Returns ``None`` when the balance is already settled.
    """

    balance = calculate_friend_balance(friend_id, transactions)
    if is_settled(balance):
        return None
    if balance > 0:
        return SettlementTerms(payer_id=friend_id, friend_id=SELF_ID, amount=balance)
    return SettlementTerms(payer_id=SELF_ID, friend_id=friend_id, amount=-balance)


__all__ = [
    "friend_status",
    "summarize_friend",
    "summarize_friends",
    "active_balances",
    "settlement_terms",
]
