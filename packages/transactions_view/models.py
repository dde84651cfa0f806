"""Data models and type aliases for ``transactions_view``.

Transactions arrive from a record source (mock generator, JSON/CSV file) and
are validated once into immutable :class:`Transaction` instances. The view
engine treats the collection as an opaque ordered sequence: it filters, sorts
and slices, but never mutates records or the caller's list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Rows per page. Fixed for this table; not a user or env setting.
PAGE_SIZE: int = 10


class TransactionStatus(StrEnum):
    COMPLETED = "completed"
    PENDING = "pending"
    FAILED = "failed"


class SortColumn(StrEnum):
    """Columns the table can be ordered by (closed set)."""

    USER = "user"
    DATE = "date"
    AMOUNT = "amount"
    STATUS = "status"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortDirection:
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass(frozen=True, slots=True)
class SortSpec:
    """Active sort column and direction.

    The default ordering shows the most recent transactions first.
    """

    column: SortColumn = SortColumn.DATE
    direction: SortDirection = SortDirection.DESC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def initials(name: str) -> str:
    """Return the upper-cased first letter of each word in ``name``."""

    return "".join(part[0] for part in name.split() if part).upper()


class TransactionUser(BaseModel):
    """Display identity attached to a transaction."""

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    name: str
    avatar: str = ""

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("user name must be non-empty")
        return v

    @model_validator(mode="before")
    @classmethod
    def _default_avatar(cls, data: Any) -> Any:
        if isinstance(data, dict) and not (data.get("avatar") or "").strip():
            name = data.get("name")
            if isinstance(name, str):
                data = {**data, "avatar": initials(name)}
        return data


class Transaction(BaseModel):
    """A single financial transaction row.

    ``date`` is parsed from an ISO-8601 string (``Z`` suffix accepted) so that
    date ordering is numeric rather than textual. ``status`` must be one of
    :class:`TransactionStatus`; anything else fails validation.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    id: str = Field(min_length=1)
    user: TransactionUser
    date: datetime
    amount: float
    status: TransactionStatus

    @property
    def timestamp(self) -> float:
        """POSIX timestamp of ``date`` (naive values are read as local time)."""

        return self.date.timestamp()


type Transactions = Sequence[Transaction]
"""An ordered, read-only collection of transactions as supplied by a source."""


# ---------------------------------------------------------------------------
# Dashboard payload (collaborator data consumed alongside the table)
# ---------------------------------------------------------------------------


class TrendDirection(StrEnum):
    UP = "up"
    DOWN = "down"


class RevenuePoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: float


class KpiMetric(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    value: str
    trend: float
    trend_direction: TrendDirection


class DashboardData(BaseModel):
    """Everything the dashboard screen renders, as delivered by a source."""

    model_config = ConfigDict(frozen=True)

    kpi_metrics: tuple[KpiMetric, ...]
    revenue_data: tuple[RevenuePoint, ...]
    recent_transactions: tuple[Transaction, ...]


__all__ = [
    "PAGE_SIZE",
    "DashboardData",
    "KpiMetric",
    "RevenuePoint",
    "SortColumn",
    "SortDirection",
    "SortSpec",
    "Transaction",
    "TransactionStatus",
    "TransactionUser",
    "Transactions",
    "TrendDirection",
    "initials",
]
