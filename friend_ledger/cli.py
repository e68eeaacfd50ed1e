"""CLI for the ``friend_ledger`` package.

This module exposes callable command handlers (``cmd_balances``,
``cmd_summary``, ``cmd_breakdown``, ``cmd_history``) and a Typer-based console
interface rendering their results as rich tables. Environment variables
(notably ``FRIEND_LEDGER_FILE`` and ``FRIEND_LEDGER_LOG_LEVEL``) are loaded
from a local ``.env`` using ``python-dotenv`` before any command runs.

Handlers print errors to stderr and return a non-zero exit status instead of
raising; the Typer commands turn that status into the process exit code.
"""

from __future__ import annotations

import sys
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .balances import counterparty, summarize_ledger
from .breakdown import calculate_debt_origins
from .constants import SELF_ID
from .friends import summarize_friends
from .graying import grayed_transaction_ids
from .history import (
    HistoryFilter,
    filter_transactions,
    group_by_recency,
    search_transactions,
)
from .loader import Ledger, load_ledger
from .logging_setup import configure_logging

app = typer.Typer(
    name="friend-ledger",
    help="Balances, totals and history for a shared-expense ledger.",
    no_args_is_help=True,
)
console = Console()

LEDGER_ENV_VAR = "FRIEND_LEDGER_FILE"


# ---- Small module-level helpers ---------------------------------------------


def format_money(amount: Decimal) -> str:
    """Render ``amount`` as US dollars with two decimals, e.g. ``-$12.50``."""

    q = amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if q < 0 else ""
    return f"{sign}${abs(q):,.2f}"


def _load_or_report(ledger_path: str) -> Ledger | None:
    try:
        return load_ledger(ledger_path)
    except FileNotFoundError:
        print(f"Error: File not found: {ledger_path}", file=sys.stderr)
    except PermissionError:
        print(f"Error: Permission denied: {ledger_path}", file=sys.stderr)
    except ValueError as e:
        print(f"Error: Failed to load ledger: {e}", file=sys.stderr)
    return None


def _display_name(ledger: Ledger, friend_id: str | None) -> str:
    if friend_id is None:
        return "?"
    return ledger.friend_names.get(friend_id) or friend_id


# ---- Command handlers --------------------------------------------------------


def cmd_balances(ledger_path: str, *, now: datetime | None = None) -> int:
    """Print one row per friend: balance, status and last activity."""

    ledger = _load_or_report(ledger_path)
    if ledger is None:
        return 1

    table = Table(title="Balances")
    table.add_column("Friend")
    table.add_column("Balance", justify="right")
    table.add_column("Status")
    table.add_column("Last activity")
    for s in summarize_friends(ledger.friend_ids, ledger.transactions, now=now):
        style = None
        if s.status == "active":
            style = "green" if s.balance > 0 else "red"
        table.add_row(
            _display_name(ledger, s.friend_id),
            format_money(s.balance),
            s.status,
            s.last_activity,
            style=style,
        )
    console.print(table)
    return 0


def cmd_summary(ledger_path: str) -> int:
    """Print what friends owe the user, what the user owes, and the net."""

    ledger = _load_or_report(ledger_path)
    if ledger is None:
        return 1

    totals = summarize_ledger(ledger.transactions)
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric")
    table.add_column("Amount", justify="right")
    table.add_row("Owed to you", format_money(totals.total_owed))
    table.add_row("You owe", format_money(totals.total_owing))
    table.add_row("Net", format_money(totals.net_balance))
    console.print(table)
    return 0


def cmd_breakdown(ledger_path: str) -> int:
    """Print the percentage of shared expenses per transaction type."""

    ledger = _load_or_report(ledger_path)
    if ledger is None:
        return 1

    slices = calculate_debt_origins(ledger.transactions)
    if not slices:
        console.print("No expenses to chart.")
        return 0
    table = Table(title="Debt origins")
    table.add_column("Type")
    table.add_column("Share", justify="right")
    table.add_column("Color")
    for s in slices:
        table.add_row(s.name, f"{s.value}%", f"[{s.color}]{s.color}[/]")
    console.print(table)
    return 0


def cmd_history(
    ledger_path: str,
    *,
    friend_id: str | None = None,
    history_filter: HistoryFilter = HistoryFilter.ALL,
    query: str = "",
    now: datetime | None = None,
) -> int:
    """Print transactions grouped by recency, dimming those already settled.

    With ``friend_id`` only that friend's transactions are listed. Graying is
    evaluated per counterparty, so the same rules apply in the unfiltered view.
    """

    ledger = _load_or_report(ledger_path)
    if ledger is None:
        return 1

    txs = list(ledger.transactions)
    if friend_id:
        txs = [tx for tx in txs if counterparty(tx) == friend_id]
    txs = filter_transactions(txs, history_filter)
    txs = search_transactions(txs, query, friend_names=ledger.friend_names)

    grayed: dict[str, frozenset[str]] = {}
    for tx in txs:
        fid = counterparty(tx)
        if fid is not None and fid not in grayed:
            grayed[fid] = grayed_transaction_ids(fid, ledger.transactions)

    groups = group_by_recency(txs, now=now)
    if not groups:
        console.print("No transaction history.")
        return 0

    for group in groups:
        table = Table(title=group.label)
        table.add_column("Date")
        table.add_column("Title")
        table.add_column("Friend")
        table.add_column("Paid by")
        table.add_column("Amount", justify="right")
        for tx in group.transactions:
            fid = counterparty(tx)
            is_grayed = fid is not None and tx.id in grayed.get(fid, frozenset())
            title = "Settlement" if tx.is_settlement else (tx.title or tx.type)
            table.add_row(
                tx.date.strftime("%Y-%m-%d") if tx.date else "",
                title,
                _display_name(ledger, fid),
                "You" if tx.payer_id == SELF_ID else "They",
                format_money(tx.amount),
                style="dim" if is_grayed else None,
            )
        console.print(table)
    return 0


# ---- Typer commands ----------------------------------------------------------

LedgerOption = Annotated[
    Path,
    typer.Option(
        "--ledger",
        envvar=LEDGER_ENV_VAR,
        help="Path to the ledger JSON file (falls back to FRIEND_LEDGER_FILE).",
        dir_okay=False,
        exists=False,  # the handler reports missing files itself
    ),
]


def _exit(code: int) -> None:
    if code:
        raise typer.Exit(code)


@app.command("balances")
def balances_cmd(ledger: LedgerOption) -> None:
    """Per-friend balances."""
    _exit(cmd_balances(str(ledger)))


@app.command("summary")
def summary_cmd(ledger: LedgerOption) -> None:
    """Totals owed, owing and net."""
    _exit(cmd_summary(str(ledger)))


@app.command("breakdown")
def breakdown_cmd(ledger: LedgerOption) -> None:
    """Expense share by transaction type."""
    _exit(cmd_breakdown(str(ledger)))


@app.command("history")
def history_cmd(
    ledger: LedgerOption,
    friend: Annotated[str | None, typer.Option(help="Only show this friend id.")] = None,
    filter_: Annotated[
        HistoryFilter, typer.Option("--filter", help="Filter chip to apply.")
    ] = HistoryFilter.ALL,
    search: Annotated[str, typer.Option(help="Search friend, title, note or amount.")] = "",
) -> None:
    """Transaction history grouped by recency."""
    _exit(cmd_history(str(ledger), friend_id=friend, history_filter=filter_, query=search))


@app.callback()
def _root() -> None:
    """Load ``.env`` (without overriding existing variables) and set up logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging()


def main() -> None:  # pragma: no cover - console script entry point
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
