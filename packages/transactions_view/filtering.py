"""Free-text search over a transaction collection.

A record matches when the normalized query is a substring of its identifier,
its user's display name, or its status (all compared lowercased). The result
is always a subsequence of the input in the original order; an empty query
returns every record.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Transaction


def normalize_query(text: str | None) -> str:
    """Trim and lowercase a raw search string (``None`` counts as empty)."""

    if text is None:
        return ""
    return text.strip().lower()


def searchable_fields(tx: Transaction) -> tuple[str, str, str]:
    return (tx.id.lower(), tx.user.name.lower(), tx.status.value)


def matches(tx: Transaction, query: str) -> bool:
    """Return True when ``tx`` matches an already-normalized ``query``."""

    if not query:
        return True
    return any(query in field for field in searchable_fields(tx))


def filter_transactions(records: Iterable[Transaction], query: str | None) -> list[Transaction]:
    """Return the records matching ``query``, preserving input order.

    The query is normalized here, so callers may pass raw user input. The
    input collection is never modified; a new list is always returned.
    """

    q = normalize_query(query)
    if not q:
        return list(records)
    return [tx for tx in records if matches(tx, q)]


__all__ = ["filter_transactions", "matches", "normalize_query", "searchable_fields"]
