"""Column ordering for the transactions table.

Ordering is driven by a per-column comparator table. Each comparator returns a
negative, zero, or positive ``int`` like a classic ``cmp``; descending order
negates the result. :func:`sort_transactions` relies on :func:`sorted`, which
is stable, so records that compare equal keep their input order in both
directions.

Comparators
-----------
- ``user``: collation of display names in three levels. Base letters are
  compared case- and accent-insensitively with ``locale.strcoll`` (the CLI
  adopts the user's ``LC_COLLATE``); ties are broken by accents (unaccented
  first) and then by case (lowercase first).
- ``date``: numeric comparison of parsed timestamps.
- ``amount``: numeric comparison.
- ``status``: plain lexicographic comparison of the status string.
"""

from __future__ import annotations

import locale
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from functools import cmp_to_key
from types import MappingProxyType

from .models import SortColumn, SortDirection, SortSpec, Transaction

type Comparator = Callable[[Transaction, Transaction], int]


def _sign(delta: float) -> int:
    return (delta > 0) - (delta < 0)


def collation_parts(name: str) -> tuple[str, tuple[str, ...], tuple[bool, ...]]:
    """Split ``name`` into ``(base, accents, case)`` collation levels.

    ``base`` is the casefolded name with combining marks removed, ``accents``
    holds the marks attached to each base character, and ``case`` flags the
    uppercase characters.
    """

    letters: list[str] = []
    accents: list[str] = []
    for ch in unicodedata.normalize("NFKD", name):
        if letters and unicodedata.combining(ch):
            accents[-1] += ch
            continue
        letters.append(ch)
        accents.append("")
    return "".join(letters).casefold(), tuple(accents), tuple(c.isupper() for c in letters)


def compare_user(a: Transaction, b: Transaction) -> int:
    pa, pb = collation_parts(a.user.name), collation_parts(b.user.name)
    primary = locale.strcoll(pa[0], pb[0])
    if primary:
        return _sign(primary)
    return (pa[1:] > pb[1:]) - (pa[1:] < pb[1:])


def compare_date(a: Transaction, b: Transaction) -> int:
    return _sign(a.timestamp - b.timestamp)


def compare_amount(a: Transaction, b: Transaction) -> int:
    return _sign(a.amount - b.amount)


def compare_status(a: Transaction, b: Transaction) -> int:
    sa, sb = a.status.value, b.status.value
    return (sa > sb) - (sa < sb)


COMPARATORS: Mapping[SortColumn, Comparator] = MappingProxyType(
    {
        SortColumn.USER: compare_user,
        SortColumn.DATE: compare_date,
        SortColumn.AMOUNT: compare_amount,
        SortColumn.STATUS: compare_status,
    }
)


def coerce_column(value: SortColumn | str) -> SortColumn:
    """Return ``value`` as a :class:`SortColumn`.

    Raises ``ValueError`` for anything outside the closed column set.
    """

    if isinstance(value, SortColumn):
        return value
    if isinstance(value, str):
        try:
            return SortColumn(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(c.value for c in SortColumn)
    raise ValueError(f"unknown sort column {value!r}; expected one of: {allowed}")


def coerce_direction(value: SortDirection | str) -> SortDirection:
    if isinstance(value, SortDirection):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in {"asc", "ascending"}:
            return SortDirection.ASC
        if v in {"desc", "descending"}:
            return SortDirection.DESC
    raise ValueError(f"unknown sort direction {value!r}; expected 'asc' or 'desc'")


def comparator_for(spec: SortSpec) -> Comparator:
    """Return the comparator for ``spec`` with direction applied."""

    base = COMPARATORS[coerce_column(spec.column)]
    if coerce_direction(spec.direction) is SortDirection.ASC:
        return base

    def _descending(a: Transaction, b: Transaction) -> int:
        return -base(a, b)

    return _descending


def sort_transactions(records: Iterable[Transaction], spec: SortSpec) -> list[Transaction]:
    """Return a new list of ``records`` ordered by ``spec`` (stable)."""

    return sorted(records, key=cmp_to_key(comparator_for(spec)))


def toggle_sort(current: SortSpec, column: SortColumn | str) -> SortSpec:
    """Return the spec produced by activating ``column``.

    Re-activating the current column flips its direction; any other column
    starts ascending.
    """

    col = coerce_column(column)
    if col is current.column:
        return SortSpec(column=col, direction=current.direction.flipped())
    return SortSpec(column=col, direction=SortDirection.ASC)


__all__ = [
    "COMPARATORS",
    "Comparator",
    "coerce_column",
    "coerce_direction",
    "compare_amount",
    "compare_date",
    "compare_status",
    "collation_parts",
    "compare_user",
    "comparator_for",
    "sort_transactions",
    "toggle_sort",
]
