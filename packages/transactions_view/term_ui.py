"""Interactive terminal browser for the transactions table (prompt_toolkit).

The browser is a thin loop around a :class:`TransactionTableView`: read one
command line, translate it into a view mutation, print the re-rendered table.
Parsing is kept separate from the prompt so it can be tested without a
terminal, and the ``PromptSession`` is injectable so tests can drive the loop
through a pipe input.

Commands
--------
``/text``      search (a bare ``/`` clears the search)
``s <col>``    sort by ``user``, ``date``, ``amount`` or ``status``; repeat to flip
``n`` / ``p``  next / previous page (also Ctrl-N / Ctrl-P)
``<number>``   jump to a page
``q``          quit
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.key_binding import KeyBindings

from .logging_setup import get_logger
from .models import SortColumn
from .render import render_table
from .view import TransactionTableView

_logger = get_logger("transactions_view.term_ui")

HELP_TEXT = "Commands: /text search • s <user|date|amount|status> sort • n/p page • <number> go to page • q quit"


class Action(StrEnum):
    SEARCH = "search"
    SORT = "sort"
    NEXT = "next"
    PREVIOUS = "previous"
    PAGE = "page"
    HELP = "help"
    REFRESH = "refresh"
    QUIT = "quit"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class Command:
    action: Action
    argument: str | int | None = None


def parse_command(text: str) -> Command:
    """Translate one line of user input into a :class:`Command`.

    Never raises: unrecognised input becomes ``Action.INVALID`` with a message
    in ``argument``.
    """

    raw = text.strip()
    if not raw:
        return Command(Action.REFRESH)
    if raw.startswith("/"):
        return Command(Action.SEARCH, raw[1:])

    head, _, rest = raw.partition(" ")
    head = head.lower()
    rest = rest.strip()
    if head in {"q", "quit", "exit"}:
        return Command(Action.QUIT)
    if head in {"h", "help", "?"}:
        return Command(Action.HELP)
    if head in {"n", "next"}:
        return Command(Action.NEXT)
    if head in {"p", "prev", "previous"}:
        return Command(Action.PREVIOUS)
    if head in {"s", "sort"}:
        column = rest.lower()
        if column in {c.value for c in SortColumn}:
            return Command(Action.SORT, column)
        return Command(Action.INVALID, f"Unknown column {rest!r}. Use user, date, amount or status.")
    if raw.isascii() and raw.isdigit():
        return Command(Action.PAGE, int(raw))
    return Command(Action.INVALID, f"Unknown command {raw!r}. Type 'help' for commands.")


def apply_command(view: TransactionTableView, command: Command) -> str | None:
    """Apply ``command`` to ``view``; return a status message, if any."""

    match command.action:
        case Action.SEARCH:
            view.set_query(str(command.argument or ""))
        case Action.SORT:
            spec = view.set_sort(str(command.argument))
            return f"Sorted by {spec.column.value} ({spec.direction.value})"
        case Action.NEXT:
            if not view.next_page():
                return "Already on the last page."
        case Action.PREVIOUS:
            if not view.previous_page():
                return "Already on the first page."
        case Action.PAGE:
            page = int(command.argument or 0)
            if page != view.current_page() and not view.set_page(page):
                return f"No page {page} (1-{view.total_pages()})."
        case Action.HELP:
            return HELP_TEXT
        case Action.INVALID:
            return str(command.argument)
    return None


def _completer() -> WordCompleter:
    words = ["help", "next", "prev", "quit"] + [f"s {c.value}" for c in SortColumn]
    return WordCompleter(words, ignore_case=True, sentence=True)


def _key_bindings() -> KeyBindings:
    """Ctrl-N / Ctrl-P submit the ``n`` / ``p`` commands without Enter."""

    kb = KeyBindings()

    @kb.add("c-n")
    def _next(event) -> None:
        event.app.exit(result="n")

    @kb.add("c-p")
    def _previous(event) -> None:
        event.app.exit(result="p")

    return kb


def browse(
    view: TransactionTableView,
    *,
    session: PromptSession | None = None,
    echo: Callable[[str], None] = print,
    message: str = "> ",
) -> int:
    """Run the interactive loop until ``q``, EOF or Ctrl-C.

    Returns the number of commands processed (handy for tests and logging).
    """

    sess: PromptSession = session if session is not None else PromptSession()
    completer = _completer()
    bindings = _key_bindings()
    processed = 0

    echo(render_table(view))
    echo(HELP_TEXT)
    while True:
        try:
            line = sess.prompt(message, completer=completer, key_bindings=bindings)
        except (EOFError, KeyboardInterrupt):
            break
        command = parse_command(line)
        if command.action is Action.QUIT:
            break
        processed += 1
        status = apply_command(view, command)
        _logger.debug("command %s -> page %d", command.action.value, view.current_page())
        if command.action not in {Action.HELP, Action.INVALID}:
            echo(render_table(view))
        if status:
            echo(status)
    return processed


__all__ = ["HELP_TEXT", "Action", "Command", "apply_command", "browse", "parse_command"]
