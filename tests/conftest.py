"""Pytest configuration for test isolation.

The CLI configures the package logger once per process (a stream handler plus
``propagate = False``). Left in place, that state leaks into later tests and
hides records from ``caplog``, so an autouse fixture resets it after every
test.

Environment variables read by the CLI are cleared so a developer's local
``FRIEND_LEDGER_*`` settings cannot change test outcomes.
"""

from __future__ import annotations

import pytest

from friend_ledger.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("FRIEND_LEDGER_FILE", raising=False)
    monkeypatch.delenv("FRIEND_LEDGER_LOG_LEVEL", raising=False)
    yield
    reset_logging()
