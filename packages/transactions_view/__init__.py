"""Public interface for the ``transactions_view`` package.

Re-exports the view engine, its pure pipeline functions and the record models
as the stable import surface. No runtime logic lives here.
"""

from .filtering import filter_transactions, normalize_query
from .models import (
    PAGE_SIZE,
    DashboardData,
    RevenuePoint,
    SortColumn,
    SortDirection,
    SortSpec,
    Transaction,
    TransactionStatus,
    TransactionUser,
)
from .pagination import page_range, page_window, paginate, total_pages
from .sorting import sort_transactions, toggle_sort
from .sources import FileTransactionSource, MockTransactionSource, RecordSource
from .view import TransactionTableView, ViewSnapshot, ViewState

__all__ = [
    # View engine
    "TransactionTableView",
    "ViewSnapshot",
    "ViewState",
    # Pipeline
    "filter_transactions",
    "normalize_query",
    "sort_transactions",
    "toggle_sort",
    "paginate",
    "total_pages",
    "page_window",
    "page_range",
    # Sources
    "RecordSource",
    "MockTransactionSource",
    "FileTransactionSource",
    # Models / types
    "PAGE_SIZE",
    "DashboardData",
    "RevenuePoint",
    "SortColumn",
    "SortDirection",
    "SortSpec",
    "Transaction",
    "TransactionStatus",
    "TransactionUser",
]
