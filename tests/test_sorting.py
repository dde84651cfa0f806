from datetime import UTC, datetime, timedelta, timezone

import pytest

from transactions_view.models import SortColumn, SortDirection, SortSpec
from transactions_view.sorting import (
    COMPARATORS,
    collation_parts,
    coerce_column,
    coerce_direction,
    sort_transactions,
    toggle_sort,
)

from tests.helpers.records import make_transaction


def _ids(records):
    return [tx.id for tx in records]


def test_comparator_table_covers_every_column():
    assert set(COMPARATORS) == set(SortColumn)


def test_amount_ascending_and_descending(transactions):
    asc = sort_transactions(transactions, SortSpec(SortColumn.AMOUNT, SortDirection.ASC))
    desc = sort_transactions(transactions, SortSpec(SortColumn.AMOUNT, SortDirection.DESC))
    assert [tx.amount for tx in asc] == sorted(tx.amount for tx in transactions)
    assert [tx.amount for tx in desc] == sorted((tx.amount for tx in transactions), reverse=True)


def test_sort_returns_new_list_and_leaves_input_alone(transactions):
    before = list(transactions)
    result = sort_transactions(transactions, SortSpec(SortColumn.AMOUNT, SortDirection.ASC))
    assert transactions == before
    assert result is not transactions


def test_date_sort_is_numeric_not_textual():
    # Textually "2025-01-02T00:00:00+05:00" > "2025-01-01T23:00:00Z" but it is earlier.
    early = make_transaction("E", date="2025-01-02T00:00:00+05:00")
    late = make_transaction("L", date="2025-01-01T23:00:00Z")
    result = sort_transactions([late, early], SortSpec(SortColumn.DATE, SortDirection.ASC))
    assert _ids(result) == ["E", "L"]


def test_date_sort_handles_mixed_offsets():
    base = datetime(2025, 6, 1, 12, tzinfo=UTC)
    a = make_transaction("A", date=base)
    b = make_transaction("B", date=(base + timedelta(hours=1)).astimezone(timezone(timedelta(hours=-7))))
    result = sort_transactions([b, a], SortSpec(SortColumn.DATE, SortDirection.DESC))
    assert _ids(result) == ["B", "A"]


def test_user_sort_ignores_case_first():
    records = [
        make_transaction("1", name="bob"),
        make_transaction("2", name="Alice"),
        make_transaction("3", name="carol"),
    ]
    result = sort_transactions(records, SortSpec(SortColumn.USER, SortDirection.ASC))
    assert [tx.user.name for tx in result] == ["Alice", "bob", "carol"]


def test_status_sort_is_lexicographic(transactions):
    result = sort_transactions(transactions, SortSpec(SortColumn.STATUS, SortDirection.ASC))
    statuses = [tx.status.value for tx in result]
    assert statuses == sorted(statuses)
    assert statuses[0] == "completed"
    assert statuses[-1] == "pending"


@pytest.mark.parametrize("direction", list(SortDirection))
def test_sort_is_stable_for_equal_keys(transactions, direction):
    result = sort_transactions(transactions, SortSpec(SortColumn.STATUS, direction))
    for status in {tx.status for tx in transactions}:
        in_input = [tx.id for tx in transactions if tx.status is status]
        in_output = [tx.id for tx in result if tx.status is status]
        assert in_output == in_input


def test_equal_amounts_keep_input_order_descending():
    records = [make_transaction(f"T{i}", amount=50.0) for i in range(5)]
    result = sort_transactions(records, SortSpec(SortColumn.AMOUNT, SortDirection.DESC))
    assert _ids(result) == ["T0", "T1", "T2", "T3", "T4"]


@pytest.mark.parametrize("column", list(SortColumn))
@pytest.mark.parametrize("direction", list(SortDirection))
def test_sort_is_idempotent(transactions, column, direction):
    spec = SortSpec(column, direction)
    once = sort_transactions(transactions, spec)
    assert sort_transactions(once, spec) == once


def test_toggle_same_column_flips_direction():
    spec = SortSpec(SortColumn.AMOUNT, SortDirection.ASC)
    assert toggle_sort(spec, "amount") == SortSpec(SortColumn.AMOUNT, SortDirection.DESC)
    assert toggle_sort(toggle_sort(spec, "amount"), "amount") == spec


def test_toggle_new_column_starts_ascending():
    spec = SortSpec(SortColumn.DATE, SortDirection.DESC)
    assert toggle_sort(spec, SortColumn.USER) == SortSpec(SortColumn.USER, SortDirection.ASC)


def test_coerce_column_tolerates_case_and_whitespace():
    assert coerce_column(" Amount ") is SortColumn.AMOUNT
    assert coerce_column(SortColumn.USER) is SortColumn.USER


@pytest.mark.parametrize("bad", ["name", "", 3, None])
def test_unknown_column_fails_fast(bad):
    with pytest.raises(ValueError, match="unknown sort column"):
        coerce_column(bad)


def test_sort_with_invalid_column_in_spec_raises(transactions):
    with pytest.raises(ValueError):
        sort_transactions(transactions, SortSpec("bogus", SortDirection.ASC))  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("asc", SortDirection.ASC), ("DESC", SortDirection.DESC), ("descending", SortDirection.DESC)],
)
def test_coerce_direction(raw, expected):
    assert coerce_direction(raw) is expected


def test_coerce_direction_rejects_unknown():
    with pytest.raises(ValueError):
        coerce_direction("sideways")


def test_user_sort_places_accented_names_with_their_base_letter():
    records = [
        make_transaction("1", name="Zoe Young"),
        make_transaction("2", name="Émile Zola"),
        make_transaction("3", name="Adam Brown"),
        make_transaction("4", name="Ömer Kaya"),
    ]
    result = sort_transactions(records, SortSpec(SortColumn.USER, SortDirection.ASC))
    assert [tx.user.name for tx in result] == ["Adam Brown", "Émile Zola", "Ömer Kaya", "Zoe Young"]


def test_user_sort_tiebreaks_unaccented_then_lowercase_first():
    records = [
        make_transaction("1", name="Émile"),
        make_transaction("2", name="Emile"),
        make_transaction("3", name="emile"),
    ]
    result = sort_transactions(records, SortSpec(SortColumn.USER, SortDirection.ASC))
    assert [tx.user.name for tx in result] == ["emile", "Emile", "Émile"]


def test_collation_parts_separates_base_accents_and_case():
    base, accents, case = collation_parts("Émile")
    assert base == "emile"
    assert accents[0] == "\u0301"
    assert all(mark == "" for mark in accents[1:])
    assert case == (True, False, False, False, False)
