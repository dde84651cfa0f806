"""CLI for the ``transactions_view`` package.

Command handlers (``cmd_show``, ``cmd_browse``, ``cmd_chart``) hold the logic
and return process exit codes; the Typer commands below only gather options
and delegate. The root callback loads a local ``.env`` via ``python-dotenv``
(without overriding the environment), configures logging once and adopts
the environment's ``LC_COLLATE`` for user-name ordering.
"""

from __future__ import annotations

import csv
import locale
import sys
from collections.abc import Sequence
from pathlib import Path

import typer
from dotenv import load_dotenv
from typer.models import OptionInfo

from .config import load_settings
from .logging_setup import configure_logging, get_logger
from .sources import RecordSource, source_from_setting
from .view import TransactionTableView

_logger = get_logger("transactions_view.cli")


def _resolve_source(source: str | None) -> RecordSource:
    settings = load_settings()
    return source_from_setting(
        source or settings.source,
        mock_count=settings.mock_count,
        mock_seed=settings.mock_seed,
    )


def _load_view(source: str | None) -> TransactionTableView | None:
    """Load records into a fresh view, reporting failures on stderr."""

    try:
        records = _resolve_source(source).load()
    except FileNotFoundError as e:
        print(f"Error: File not found: {e.filename or source}", file=sys.stderr)
        return None
    except PermissionError:
        print(f"Error: Permission denied: {source}", file=sys.stderr)
        return None
    except csv.Error as e:
        print(f"Error: Failed to parse CSV: {e}", file=sys.stderr)
        return None
    except ValueError as e:
        # Covers bad settings, unsupported file types, malformed JSON and
        # pydantic validation errors.
        print(f"Error: Failed to load transactions: {e}", file=sys.stderr)
        return None
    return TransactionTableView(records)


def cmd_show(
    source: str | None = None,
    *,
    query: str | None = None,
    sort: Sequence[str] = (),
    page: int = 1,
) -> int:
    """Print one page of the transactions table.

    Each entry in ``sort`` is applied in order as a column activation, so
    passing the same column twice yields descending order. A page outside the
    result range is reported and leaves the table on page 1.
    """

    from .render import render_table

    view = _load_view(source)
    if view is None:
        return 1

    if query:
        view.set_query(query)
    for column in sort:
        try:
            view.set_sort(column)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2
    if page != 1 and not view.set_page(page):
        print(
            f"Warning: page {page} is out of range (1-{view.total_pages()}); showing page 1.",
            file=sys.stderr,
        )

    print(render_table(view))
    return 0


def cmd_browse(source: str | None = None) -> int:
    """Open the interactive browser on the loaded transactions."""

    from .term_ui import browse

    view = _load_view(source)
    if view is None:
        return 1
    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        print("Error: browse requires an interactive terminal.", file=sys.stderr)
        return 1
    processed = browse(view)
    _logger.info("browser closed after %d commands", processed)
    return 0


def cmd_chart(*, width: int = 60, height: int = 12) -> int:
    """Print the monthly revenue trend as a text chart."""

    from .chart import TextChartRenderer
    from .models import RevenuePoint
    from .sources import MONTHLY_REVENUE

    try:
        renderer = TextChartRenderer(width=width, height=height)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    series = [RevenuePoint(name=n, value=v) for n, v in MONTHLY_REVENUE]
    print(renderer.render(series))
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Search, sort and page through recent transactions. "
        "Reads TXN_VIEW_* settings from the environment or a local .env."
    ),
)

# Shared option objects (kept at module level so defaults hold no calls).
SOURCE_OPTION: OptionInfo = typer.Option(
    None,
    "--source",
    help="'mock' or a path to a JSON/CSV export (default: TXN_VIEW_SOURCE or mock).",
)
SORT_OPTION: OptionInfo = typer.Option(
    None,
    "--sort",
    help="Column to activate (user, date, amount, status). Repeat to toggle direction.",
)


@app.command("show")
def show_cmd(
    source: str | None = SOURCE_OPTION,
    query: str | None = typer.Option(None, "--query", "-q", help="Search text."),
    sort: list[str] | None = SORT_OPTION,
    page: int = typer.Option(1, "--page", "-p", help="1-based page number."),
) -> None:
    """Print one page of the table."""

    code = cmd_show(source, query=query, sort=sort or (), page=page)
    if code:
        raise typer.Exit(code)


@app.command("browse")
def browse_cmd(source: str | None = SOURCE_OPTION) -> None:
    """Browse the table interactively."""

    code = cmd_browse(source)
    if code:
        raise typer.Exit(code)


@app.command("chart")
def chart_cmd(
    width: int = typer.Option(60, help="Plot width in characters."),
    height: int = typer.Option(12, help="Plot height in rows."),
) -> None:
    """Render the monthly revenue trend."""

    code = cmd_chart(width=width, height=height)
    if code:
        raise typer.Exit(code)


def _adopt_collation_locale() -> None:
    """Sort user names with the collation rules of the user's locale."""

    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        _logger.warning("could not apply LC_COLLATE from the environment: %s", e)


@app.callback()
def _root() -> None:
    """Load ``.env`` from the working directory and configure logging."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        raise typer.Exit(2) from e
    configure_logging(settings.log_level)
    _adopt_collation_locale()


def main() -> None:  # pragma: no cover - console script shim
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
