"""Runtime settings resolved from environment variables.

Entrypoints load a local ``.env`` (``python-dotenv``, never overriding values
already in the environment) and then call :func:`load_settings`.

Variables
---------
- ``TXN_VIEW_SOURCE``: ``mock`` (default) or a path to a JSON/CSV export.
- ``TXN_VIEW_MOCK_COUNT``: number of mock transactions (default 25).
- ``TXN_VIEW_MOCK_SEED``: optional integer seed for the mock generator.
- ``TXN_VIEW_LOG_LEVEL``: logging level name or number (read by
  :mod:`transactions_view.logging_setup`).

Rows per page are fixed (see :data:`transactions_view.models.PAGE_SIZE`).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .logging_setup import LEVEL_ENV_VAR

SOURCE_ENV_VAR = "TXN_VIEW_SOURCE"
MOCK_COUNT_ENV_VAR = "TXN_VIEW_MOCK_COUNT"
MOCK_SEED_ENV_VAR = "TXN_VIEW_MOCK_SEED"


@dataclass(frozen=True, slots=True)
class Settings:
    source: str = "mock"
    mock_count: int = 25
    mock_seed: int | None = None
    log_level: str | None = None


def _read_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    source = (env.get(SOURCE_ENV_VAR) or "").strip() or "mock"

    mock_count = _read_int(env, MOCK_COUNT_ENV_VAR)
    if mock_count is not None and mock_count < 0:
        raise ValueError(f"{MOCK_COUNT_ENV_VAR} must be non-negative")

    return Settings(
        source=source,
        mock_count=25 if mock_count is None else mock_count,
        mock_seed=_read_int(env, MOCK_SEED_ENV_VAR),
        log_level=(env.get(LEVEL_ENV_VAR) or "").strip() or None,
    )


__all__ = [
    "MOCK_COUNT_ENV_VAR",
    "MOCK_SEED_ENV_VAR",
    "SOURCE_ENV_VAR",
    "Settings",
    "load_settings",
]
