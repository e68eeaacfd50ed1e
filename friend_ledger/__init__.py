"""Public interface for the ``friend_ledger`` package.

This module exposes the ledger engine functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .activity import get_last_activity
from .balances import (
    calculate_friend_balance,
    calculate_friend_balances,
    calculate_net_balance,
    calculate_total_owed,
    calculate_total_owing,
    counterparty,
    is_settled,
    summarize_ledger,
)
from .breakdown import calculate_debt_origins
from .constants import SELF_ID, SETTLED_EPSILON
from .friends import active_balances, settlement_terms, summarize_friend, summarize_friends
from .graying import grayed_transaction_ids, should_gray_transaction
from .history import (
    HistoryFilter,
    filter_transactions,
    group_by_recency,
    search_transactions,
    sort_transactions,
)
from .loader import Ledger, load_ledger, parse_ledger
from .models import (
    ChartSlice,
    FriendSummary,
    HistoryGroup,
    LedgerTotals,
    SettlementTerms,
    Transaction,
    TransactionRecord,
    Transactions,
)

__all__ = [
    # Engine
    "calculate_friend_balance",
    "calculate_friend_balances",
    "calculate_total_owed",
    "calculate_total_owing",
    "calculate_net_balance",
    "summarize_ledger",
    "calculate_debt_origins",
    "get_last_activity",
    "should_gray_transaction",
    "grayed_transaction_ids",
    "is_settled",
    "counterparty",
    # Friends / history views
    "summarize_friend",
    "summarize_friends",
    "active_balances",
    "settlement_terms",
    "HistoryFilter",
    "filter_transactions",
    "search_transactions",
    "sort_transactions",
    "group_by_recency",
    # Loading
    "Ledger",
    "load_ledger",
    "parse_ledger",
    # Models / types
    "Transaction",
    "Transactions",
    "TransactionRecord",
    "FriendSummary",
    "ChartSlice",
    "LedgerTotals",
    "SettlementTerms",
    "HistoryGroup",
    # Constants
    "SELF_ID",
    "SETTLED_EPSILON",
]
