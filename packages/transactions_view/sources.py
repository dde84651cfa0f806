"""Record sources: where the table's transactions come from.

The view engine never fetches data. An application picks a
:class:`RecordSource` and hands ``source.load()`` to the view. Two sources ship
with the package:

- :class:`MockTransactionSource` synthesizes a plausible collection (random
  names, amounts, statuses and dates over the last 30 days), optionally
  seeded for reproducible output.
- :class:`FileTransactionSource` reads a JSON or CSV export.

CSV layout (header row required)::

    id,user_name,user_avatar,date,amount,status

``user_avatar`` may be omitted; it defaults to the name's initials. JSON
files hold either a list of transaction objects or an object with a
``recent_transactions`` (or ``recentTransactions``) list. Objects use the
model's field names (``id``, ``user.name``, ``date``, ``amount``, ``status``).
"""

from __future__ import annotations

import csv
import json
import random
from collections.abc import Callable, Iterable, Mapping
from datetime import UTC, datetime, timedelta
from os import PathLike
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import TypeAdapter

from .logging_setup import get_logger
from .models import (
    DashboardData,
    KpiMetric,
    RevenuePoint,
    Transaction,
    TransactionStatus,
    TrendDirection,
    initials,
)

_logger = get_logger("transactions_view.sources")

_TRANSACTIONS = TypeAdapter(list[Transaction])


@runtime_checkable
class RecordSource(Protocol):
    """Anything that can supply the raw transaction collection."""

    def load(self) -> list[Transaction]: ...


# ---------------------------------------------------------------------------
# Mock generator
# ---------------------------------------------------------------------------

MOCK_NAMES: tuple[str, ...] = (
    "John Doe",
    "Jane Smith",
    "Michael Johnson",
    "Emily Davis",
    "David Wilson",
    "Sarah Brown",
    "James Taylor",
    "Emma Anderson",
    "Robert Thomas",
    "Olivia Martinez",
    "William Garcia",
    "Sophia Rodriguez",
    "Christopher Lee",
    "Isabella Walker",
    "Daniel Hall",
    "Mia Allen",
    "Matthew Young",
    "Charlotte King",
    "Joseph Wright",
    "Amelia Lopez",
)


def transaction_id(position: int) -> str:
    """Return the display id for the 1-based ``position`` (``TXN-0001``)."""

    return f"TXN-{position:04d}"


def _weighted_status(roll: float) -> TransactionStatus:
    # 70% completed, 20% pending, 10% failed
    if roll < 0.7:
        return TransactionStatus.COMPLETED
    if roll < 0.9:
        return TransactionStatus.PENDING
    return TransactionStatus.FAILED


class MockTransactionSource:
    """Synthesize ``count`` transactions, newest first.

    Parameters
    ----------
    count:
        Number of records to produce (non-negative).
    seed:
        Optional seed for the private ``random.Random`` instance.
    now:
        Optional clock; defaults to the current UTC time. Dates fall within the
        30 days before ``now()``.
    """

    def __init__(
        self,
        count: int = 25,
        *,
        seed: int | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        if count < 0:
            raise ValueError("count must be non-negative")
        self.count = count
        self._rng = random.Random(seed)
        self._now = now or (lambda: datetime.now(UTC))

    def load(self) -> list[Transaction]:
        now = self._now()
        rows: list[Transaction] = []
        for i in range(self.count):
            name = self._rng.choice(MOCK_NAMES)
            days_ago = self._rng.randrange(30)
            rows.append(
                Transaction(
                    id=transaction_id(i + 1),
                    user={"name": name, "avatar": initials(name)},
                    date=now - timedelta(days=days_ago),
                    amount=float(self._rng.randrange(100, 5100)),
                    status=_weighted_status(self._rng.random()),
                )
            )
        rows.sort(key=lambda tx: tx.timestamp, reverse=True)
        _logger.info("generated %d mock transactions", len(rows))
        return rows


# ---------------------------------------------------------------------------
# File-backed source
# ---------------------------------------------------------------------------

CSV_REQUIRED_HEADERS: frozenset[str] = frozenset({"id", "user_name", "date", "amount", "status"})


def _rows_from_csv(reader: csv.DictReader) -> Iterable[dict[str, Any]]:
    for row in reader:
        yield {
            "id": row.get("id"),
            "user": {"name": row.get("user_name") or "", "avatar": row.get("user_avatar") or ""},
            "date": row.get("date"),
            "amount": row.get("amount"),
            "status": (row.get("status") or "").strip().lower(),
        }


def _extract_json_rows(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping):
        for key in ("recent_transactions", "recentTransactions", "transactions"):
            rows = payload.get(key)
            if isinstance(rows, list):
                return rows
    raise ValueError("JSON must be a list of transactions or an object holding one")


class FileTransactionSource:
    """Load transactions from a ``.json`` or ``.csv`` file."""

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)

    def load(self) -> list[Transaction]:
        suffix = self.path.suffix.lower()
        if suffix == ".json":
            with self.path.open(encoding="utf-8") as f:
                rows = _extract_json_rows(json.load(f))
        elif suffix == ".csv":
            with self.path.open(encoding="utf-8", newline="") as f:
                reader = csv.DictReader(f)
                headers = set(reader.fieldnames or [])
                if not headers:
                    raise csv.Error(f"CSV appears to have no header row: {self.path}")
                missing = sorted(CSV_REQUIRED_HEADERS - headers)
                if missing:
                    raise csv.Error("CSV header mismatch. Missing columns: " + ", ".join(missing))
                rows = list(_rows_from_csv(reader))
        else:
            raise ValueError(f"unsupported transactions file type: {self.path.name!r}")

        transactions = _TRANSACTIONS.validate_python(rows)
        _logger.info("loaded %d transactions from %s", len(transactions), self.path)
        return transactions


def source_from_setting(
    value: str, *, mock_count: int = 25, mock_seed: int | None = None
) -> RecordSource:
    """Resolve a ``TXN_VIEW_SOURCE``-style value into a source.

    ``"mock"`` (case-insensitive) selects the generator; anything else is
    treated as a file path.
    """

    if value.strip().lower() == "mock":
        return MockTransactionSource(mock_count, seed=mock_seed)
    return FileTransactionSource(value)


# ---------------------------------------------------------------------------
# Dashboard payload
# ---------------------------------------------------------------------------

MONTHLY_REVENUE: tuple[tuple[str, float], ...] = (
    ("Jan", 42000),
    ("Feb", 38000),
    ("Mar", 45000),
    ("Apr", 51000),
    ("May", 49000),
    ("Jun", 62000),
    ("Jul", 58000),
    ("Aug", 67000),
    ("Sep", 71000),
    ("Oct", 69000),
    ("Nov", 78000),
    ("Dec", 82000),
)

KPI_METRICS: tuple[tuple[str, str, float, TrendDirection], ...] = (
    ("Total Revenue", "$45,231", 12.5, TrendDirection.UP),
    ("Active Users", "2,345", 8.2, TrendDirection.UP),
    ("Conversion Rate", "3.24%", 2.1, TrendDirection.DOWN),
    ("Avg. Order Value", "$124.50", 5.7, TrendDirection.UP),
)


def build_dashboard_data(source: RecordSource) -> DashboardData:
    """Bundle the KPI cards and revenue series with ``source``'s transactions."""

    return DashboardData(
        kpi_metrics=tuple(
            KpiMetric(label=label, value=value, trend=trend, trend_direction=direction)
            for label, value, trend, direction in KPI_METRICS
        ),
        revenue_data=tuple(RevenuePoint(name=n, value=v) for n, v in MONTHLY_REVENUE),
        recent_transactions=tuple(source.load()),
    )


__all__ = [
    "CSV_REQUIRED_HEADERS",
    "FileTransactionSource",
    "KPI_METRICS",
    "MOCK_NAMES",
    "MONTHLY_REVENUE",
    "MockTransactionSource",
    "RecordSource",
    "build_dashboard_data",
    "source_from_setting",
    "transaction_id",
]
