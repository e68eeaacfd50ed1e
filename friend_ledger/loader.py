"""Load a ledger JSON file into engine values.

Accepted shapes:

- an object with ``transactions`` (and optionally ``friends``) lists, as
  described by :class:`~friend_ledger.models.LedgerFile`;
- a bare list of transaction objects.

Schema problems raise ``ValueError`` with the file path in the message.
Unparseable dates are not errors: the transaction is kept with ``date=None``
and a warning is logged.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .balances import counterparty
from .logging_setup import get_logger
from .models import LedgerFile, Transaction

_logger = get_logger("friend_ledger.loader")


@dataclass(frozen=True, slots=True)
class Ledger:
    transactions: tuple[Transaction, ...]
    # friend id -> display name, in file order
    friend_names: dict[str, str]

    @property
    def friend_ids(self) -> list[str]:
        """Friends listed in the file, followed by any only seen in transactions."""

        ids = list(self.friend_names)
        seen = set(ids)
        for tx in self.transactions:
            fid = counterparty(tx)
            if fid is not None and fid not in seen:
                seen.add(fid)
                ids.append(fid)
        return ids


def parse_ledger(payload: Any, *, source: str = "<memory>") -> Ledger:
    """Validate already-decoded JSON and convert it to a :class:`Ledger`."""

    if isinstance(payload, list):
        payload = {"transactions": payload}
    try:
        doc = LedgerFile.model_validate(payload)
    except ValidationError as e:
        raise ValueError(f"invalid ledger data in {source}: {e}") from e

    transactions: list[Transaction] = []
    for rec in doc.transactions:
        tx = rec.to_transaction()
        if tx.date is None:
            _logger.warning("transaction %s in %s has an invalid date: %r", tx.id, source, rec.date)
        transactions.append(tx)

    names = {f.id: f.name for f in doc.friends}
    _logger.debug(
        "loaded %d transactions and %d friends from %s", len(transactions), len(names), source
    )
    return Ledger(transactions=tuple(transactions), friend_names=names)


def load_ledger(path: str | PathLike[str]) -> Ledger:
    """Read and validate a ledger JSON file.

    Raises ``FileNotFoundError``/``PermissionError`` as-is and ``ValueError``
    for malformed JSON or schema mismatches.
    """

    p = Path(path)
    with p.open(encoding="utf-8") as f:
        try:
            payload = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"{p} is not valid JSON: {e}") from e
    return parse_ledger(payload, source=str(p))


__all__ = ["Ledger", "parse_ledger", "load_ledger"]
