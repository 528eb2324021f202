from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from tests.fakes import FakeConnection

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture
def connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE t (a INTEGER, b TEXT)")
    conn.commit()
    try:
        yield conn
    finally:
        conn.close()
