"""Derived-state view engine for the transactions table.

:class:`TransactionTableView` owns the interaction state (:class:`ViewState`)
and the caller-supplied record collection, and derives what the table shows:

    records ──filter(query)──► sort(spec) ──► filtered_sorted
    filtered_sorted ──paginate(page)──► visible items
    len(filtered_sorted) ──► total pages ──(current page)──► page window

Each derived value is a pure function of its inputs and is memoized on them,
so repeated reads are cheap and any mutation simply invalidates by changing a
key. Mutation happens only through the setters, which enforce the coupling
rules:

- ``set_query`` normalizes the text and resets the page to 1.
- ``set_sort`` toggles or resets the direction and leaves the page alone.
- ``set_page`` ignores pages outside ``[1, total_pages]``.
- ``set_records`` replaces the collection and leaves the page alone.

Observers registered with :meth:`TransactionTableView.subscribe` are called
after every mutation that changed something.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from .filtering import filter_transactions, normalize_query
from .logging_setup import get_logger
from .models import PAGE_SIZE, SortColumn, SortSpec, Transaction
from .pagination import page_range, page_window, paginate, total_pages
from .sorting import coerce_column, coerce_direction, sort_transactions, toggle_sort

_logger = get_logger("transactions_view.view")

type Listener = Callable[["TransactionTableView"], None]


@dataclass(slots=True)
class ViewState:
    """Mutable interaction state; owned by exactly one view."""

    query: str = ""
    sort: SortSpec = field(default_factory=SortSpec)
    current_page: int = 1
    page_size: int = PAGE_SIZE


@dataclass(frozen=True, slots=True)
class ViewSnapshot:
    """Everything a renderer needs for one frame of the table."""

    items: tuple[Transaction, ...]
    total_count: int
    total_pages: int
    page_window: tuple[int, ...]
    sort: SortSpec
    current_page: int
    page_size: int
    query: str

    @property
    def showing(self) -> tuple[int, int]:
        return page_range(self.current_page, self.page_size, self.total_count)


class TransactionTableView:
    """Search, sort and paginate a transaction collection.

    Parameters
    ----------
    records:
        Initial collection. It is copied into a tuple; the caller's sequence
        is never mutated.
    state:
        Optional starting state. The view keeps its own validated copy, so
        later changes to the caller's object have no effect. Defaults to an
        empty query, newest-first ordering, page 1 and ten rows per page.

    Raises
    ------
    ValueError
        If ``state`` names an unknown sort column or direction, has a page
        size below 1, or a current page outside ``[1, max(total_pages, 1)]``.
    """

    def __init__(
        self,
        records: Iterable[Transaction] = (),
        *,
        state: ViewState | None = None,
    ) -> None:
        self._records: tuple[Transaction, ...] = tuple(records)
        self._state = ViewState() if state is None else self._adopt_state(state)
        self._revision = 0
        self._listeners: list[Listener] = []
        # Memo slots: (key, value)
        self._ordered_memo: tuple[tuple[int, str, SortSpec], tuple[Transaction, ...]] | None = None
        self._page_memo: tuple[tuple[int, str, SortSpec, int, int], tuple[Transaction, ...]] | None = None

    def _adopt_state(self, state: ViewState) -> ViewState:
        adopted = replace(
            state,
            query=normalize_query(state.query),
            sort=SortSpec(coerce_column(state.sort.column), coerce_direction(state.sort.direction)),
        )
        page = adopted.current_page
        pages = total_pages(
            len(filter_transactions(self._records, adopted.query)), adopted.page_size
        )
        if isinstance(page, bool) or not isinstance(page, int) or not 1 <= page <= max(pages, 1):
            raise ValueError(f"current_page {page!r} is outside 1-{max(pages, 1)}")
        return adopted

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def _filtered_sorted(self) -> tuple[Transaction, ...]:
        key = (self._revision, self._state.query, self._state.sort)
        if self._ordered_memo is not None and self._ordered_memo[0] == key:
            return self._ordered_memo[1]
        filtered = filter_transactions(self._records, self._state.query)
        ordered = tuple(sort_transactions(filtered, self._state.sort))
        _logger.debug(
            "recomputed rows: %d of %d match query=%r sort=%s/%s",
            len(ordered),
            len(self._records),
            self._state.query,
            self._state.sort.column.value,
            self._state.sort.direction.value,
        )
        self._ordered_memo = (key, ordered)
        return ordered

    def filtered_sorted(self) -> tuple[Transaction, ...]:
        """All records matching the query, in display order."""

        return self._filtered_sorted()

    def visible_items(self) -> tuple[Transaction, ...]:
        key = (
            self._revision,
            self._state.query,
            self._state.sort,
            self._state.current_page,
            self._state.page_size,
        )
        if self._page_memo is not None and self._page_memo[0] == key:
            return self._page_memo[1]
        page = tuple(
            paginate(self._filtered_sorted(), self._state.current_page, self._state.page_size)
        )
        self._page_memo = (key, page)
        return page

    def total_result_count(self) -> int:
        return len(self._filtered_sorted())

    def total_pages(self) -> int:
        return total_pages(self.total_result_count(), self._state.page_size)

    def page_window(self) -> tuple[int, ...]:
        return tuple(page_window(self._state.current_page, self.total_pages()))

    def showing_range(self) -> tuple[int, int]:
        """1-based ``(first, last)`` positions of the visible rows."""

        return page_range(self._state.current_page, self._state.page_size, self.total_result_count())

    def current_sort_spec(self) -> SortSpec:
        return self._state.sort

    def current_page(self) -> int:
        return self._state.current_page

    def page_size(self) -> int:
        return self._state.page_size

    def query(self) -> str:
        return self._state.query

    def records(self) -> tuple[Transaction, ...]:
        return self._records

    def has_previous(self) -> bool:
        return self._state.current_page > 1

    def has_next(self) -> bool:
        return self._state.current_page < self.total_pages()

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            items=self.visible_items(),
            total_count=self.total_result_count(),
            total_pages=self.total_pages(),
            page_window=self.page_window(),
            sort=self._state.sort,
            current_page=self._state.current_page,
            page_size=self._state.page_size,
            query=self._state.query,
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_records(self, records: Iterable[Transaction]) -> None:
        """Replace the whole collection. The current page is kept as-is."""

        self._records = tuple(records)
        self._revision += 1
        self._notify()

    def set_query(self, text: str | None) -> None:
        """Apply a new search query and return to the first page."""

        query = normalize_query(text)
        changed = query != self._state.query or self._state.current_page != 1
        self._state.query = query
        self._state.current_page = 1
        if changed:
            self._notify()

    def set_sort(self, column: SortColumn | str) -> SortSpec:
        """Activate ``column``; returns the resulting sort spec.

        Raises ``ValueError`` for columns outside :class:`SortColumn`. The
        current page is left unchanged.
        """

        col = coerce_column(column)
        self._state.sort = toggle_sort(self._state.sort, col)
        self._notify()
        return self._state.sort

    def set_page(self, page: int) -> bool:
        """Move to ``page`` when it exists; returns whether the page changed.

        Out-of-range requests leave the state untouched.
        """

        pages = self.total_pages()
        if isinstance(page, bool) or not isinstance(page, int) or not 1 <= page <= pages:
            _logger.debug("ignored page request %r (total pages: %d)", page, pages)
            return False
        if page == self._state.current_page:
            return False
        self._state.current_page = page
        self._notify()
        return True

    def next_page(self) -> bool:
        return self.set_page(self._state.current_page + 1)

    def previous_page(self) -> bool:
        return self.set_page(self._state.current_page - 1)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


__all__ = ["Listener", "TransactionTableView", "ViewSnapshot", "ViewState"]
