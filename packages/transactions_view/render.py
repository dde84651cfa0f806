"""Plain-text rendering of a :class:`~transactions_view.view.ViewSnapshot`.

Formatting follows the dashboard table: ``Dec 9, 2025`` dates, ``02:30 PM``
times, ``$1,234`` amounts, an arrow on the active sort column and a
"Showing X to Y of N results" footer with the page buttons when there is more
than one page. Dates are shown in the timezone they carry.
"""

from __future__ import annotations

from datetime import datetime

from .models import SortColumn, SortDirection, Transaction
from .view import TransactionTableView, ViewSnapshot

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

COLUMN_LABELS: dict[SortColumn, str] = {
    SortColumn.USER: "User",
    SortColumn.DATE: "Date",
    SortColumn.AMOUNT: "Amount",
    SortColumn.STATUS: "Status",
}

EMPTY_MESSAGE = "No transactions found"
EMPTY_HINT = "Try adjusting your search criteria"


def format_date(dt: datetime) -> str:
    return f"{_MONTHS[dt.month - 1]} {dt.day}, {dt.year}"


def format_time(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{hour:02d}:{dt.minute:02d} {suffix}"


def format_amount(amount: float) -> str:
    """Group thousands and drop trailing zero decimals (``$1,234.5``)."""

    text = f"{amount:,.3f}".rstrip("0").rstrip(".")
    return f"${text}"


def _header_label(column: SortColumn, snap: ViewSnapshot) -> str:
    label = COLUMN_LABELS[column]
    if snap.sort.column is column:
        arrow = "▲" if snap.sort.direction is SortDirection.ASC else "▼"
        return f"{label} {arrow}"
    return label


def _row_cells(tx: Transaction) -> list[str]:
    return [
        f"{tx.user.avatar:<3} {tx.user.name} ({tx.id})",
        f"{format_date(tx.date)} {format_time(tx.date)}",
        format_amount(tx.amount),
        tx.status.value,
    ]


def render_footer(snap: ViewSnapshot) -> str:
    """Render the pagination footer; empty when everything fits on one page."""

    if snap.total_pages <= 1:
        return ""
    first, last = snap.showing
    buttons = " ".join(f"[{p}]" if p == snap.current_page else f" {p} " for p in snap.page_window)
    prev_marker = "<" if snap.current_page > 1 else " "
    next_marker = ">" if snap.current_page < snap.total_pages else " "
    return (
        f"Showing {first} to {last} of {snap.total_count} results"
        f"    {prev_marker} {buttons} {next_marker}"
    )


def render_snapshot(snap: ViewSnapshot) -> str:
    title = f"Recent Transactions ({snap.total_count} total transactions)"
    if snap.query:
        title += f"  search: {snap.query!r}"
    headers = [_header_label(c, snap) for c in SortColumn]

    if not snap.items:
        return "\n".join([title, " | ".join(headers), EMPTY_MESSAGE, EMPTY_HINT])

    rows = [_row_cells(tx) for tx in snap.items]
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(len(headers))]

    def _line(cells: list[str]) -> str:
        return " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(cells)).rstrip()

    lines = [title, _line(headers), "-+-".join("-" * w for w in widths)]
    lines.extend(_line(r) for r in rows)
    footer = render_footer(snap)
    if footer:
        lines.append(footer)
    return "\n".join(lines)


def render_table(view: TransactionTableView) -> str:
    return render_snapshot(view.snapshot())


__all__ = [
    "COLUMN_LABELS",
    "EMPTY_HINT",
    "EMPTY_MESSAGE",
    "format_amount",
    "format_date",
    "format_time",
    "render_footer",
    "render_snapshot",
    "render_table",
]
