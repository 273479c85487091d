"""
SQLite bootstrap and connection helpers
=======================================

- Path resolution pinned to this package directory.
- WAL so startup reads do not block prefix writes.
"""

from __future__ import annotations
from hifumi.config import core
import pathlib
import sqlite3
from typing import Optional


def db_path() -> str:
    here = pathlib.Path(__file__).parent
    return str(here / core.DB_NAME)


def connect(path: Optional[str] = None) -> sqlite3.Connection:
    # Autocommit; we use explicit `with conn:` blocks in worker threads.
    conn = sqlite3.connect(
        path or db_path(),
        isolation_level=None,
        check_same_thread=False,
    )

    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    # Reduce SQLITE_BUSY errors under contention
    conn.execute("PRAGMA busy_timeout=3000;")    # 3s

    # dict-like rows
    conn.row_factory = sqlite3.Row

    return conn


def migrate(conn: sqlite3.Connection) -> None:
    """
    Execute schema.sql (idempotent). Every statement in schema.sql uses
    IF NOT EXISTS.
    """
    schema_file = pathlib.Path(__file__).with_name("schema.sql")
    sql = schema_file.read_text(encoding="utf-8")
    with conn:
        conn.executescript(sql)
