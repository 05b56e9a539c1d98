"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os
import sqlite3
from typing import TYPE_CHECKING

import pytest

from fantasy_points_tracker.db.connection import create_connection, run_migrations

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def conn() -> Generator[sqlite3.Connection]:
    connection = create_connection(":memory:")
    run_migrations(connection)
    yield connection
    connection.close()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all FPT__ env vars so tests are isolated from the shell."""
    for key in list(os.environ):
        if key.startswith("FPT__"):
            monkeypatch.delenv(key)
