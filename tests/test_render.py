from datetime import datetime

import pytest

from transactions_view.render import (
    EMPTY_MESSAGE,
    format_amount,
    format_date,
    format_time,
    render_table,
)
from transactions_view.view import TransactionTableView


@pytest.mark.parametrize(
    ("dt", "expected"),
    [(datetime(2025, 12, 9, 14, 5), "Dec 9, 2025"), (datetime(2024, 1, 31), "Jan 31, 2024")],
)
def test_format_date(dt, expected):
    assert format_date(dt) == expected


@pytest.mark.parametrize(
    ("hour", "minute", "expected"),
    [(0, 0, "12:00 AM"), (9, 7, "09:07 AM"), (12, 30, "12:30 PM"), (23, 59, "11:59 PM")],
)
def test_format_time(hour, minute, expected):
    assert format_time(datetime(2025, 1, 1, hour, minute)) == expected


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(1234.0, "$1,234"), (100, "$100"), (1234.5, "$1,234.5"), (1000000.25, "$1,000,000.25")],
)
def test_format_amount(amount, expected):
    assert format_amount(amount) == expected


def test_render_table_first_page(transactions):
    out = render_table(TransactionTableView(transactions))
    lines = out.splitlines()
    assert lines[0].startswith("Recent Transactions (25 total transactions)")
    assert "Date ▼" in lines[1]
    assert "TXN-0001" in out and "TXN-0010" in out
    assert "TXN-0011" not in out
    assert "Showing 1 to 10 of 25 results" in lines[-1]
    assert "[1]" in lines[-1]


def test_render_table_marks_ascending_sort(transactions):
    view = TransactionTableView(transactions)
    view.set_sort("amount")
    header = render_table(view).splitlines()[1]
    assert "Amount ▲" in header
    assert "Date ▼" not in header


def test_render_table_empty_result(transactions):
    view = TransactionTableView(transactions)
    view.set_query("nothing matches")
    out = render_table(view)
    assert EMPTY_MESSAGE in out
    assert "Showing" not in out


def test_single_page_has_no_footer(transactions):
    view = TransactionTableView(transactions[:4])
    assert "Showing" not in render_table(view)
