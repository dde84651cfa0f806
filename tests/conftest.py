"""Pytest configuration shared by the suite.

Puts the workspace ``packages/`` directory (and the repo root, for
``tests.helpers``) on ``sys.path`` so the suite runs without an editable
install, and keeps every test hermetic with respect to ``TXN_VIEW_*``
environment variables and the package logger.
"""

from __future__ import annotations

import locale
import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from transactions_view.logging_setup import reset_logging  # noqa: E402
from transactions_view.models import Transaction  # noqa: E402

from tests.helpers.records import make_fixture_transactions  # noqa: E402

_ENV_VARS = ("TXN_VIEW_SOURCE", "TXN_VIEW_MOCK_COUNT", "TXN_VIEW_MOCK_SEED", "TXN_VIEW_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any ``TXN_VIEW_*`` settings inherited from the developer's shell."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _restore_collation_locale():
    """The CLI adopts the environment's ``LC_COLLATE``; undo that per test."""

    saved = locale.setlocale(locale.LC_COLLATE)
    yield
    locale.setlocale(locale.LC_COLLATE, saved)


@pytest.fixture
def transactions() -> list[Transaction]:
    """25 records ``TXN-0001..TXN-0025``, newest first, amounts ascending by id."""

    return make_fixture_transactions(25)
