"""
Public façade for the persistent store
======================================

Async API over the SQLite database holding prefixes and statuses::

    from hifumi.memory import store
    statuses = await store.find_all_statuses()

The connection is opened lazily on first use, or explicitly with
:func:`init` (tests pass ``":memory:"``). ``sqlite3`` failures surface as
:class:`~hifumi.errors.ExternalServiceError`.
"""

from __future__ import annotations
from typing import List, Optional
import asyncio
import logging
import sqlite3

from hifumi.datatypes import PrefixEntry, StatusEntry
from hifumi.errors import ExternalServiceError

from . import db as _db
from .repositories import PrefixRepo as _PrefixRepo, StatusRepo as _StatusRepo

logger = logging.getLogger(__name__)

__all__ = [
    "init",
    "close",
    "find_all_statuses",
    "find_all_prefixes",
    "insert_prefix",
]

# --- Internals -------------------------------------------------------------

_conn: sqlite3.Connection | None = None
_db_lock = asyncio.Lock()
_prefix_repo: _PrefixRepo | None = None
_status_repo: _StatusRepo | None = None


def init(path: Optional[str] = None) -> None:
    """Open the database at ``path`` (default: configured DB file) and migrate it."""
    global _conn, _prefix_repo, _status_repo

    close()
    try:
        conn = _db.connect(path)
        _db.migrate(conn)
    except sqlite3.Error as exc:
        raise ExternalServiceError(f"Failed to open database: {exc}") from exc

    _conn = conn
    _prefix_repo = _PrefixRepo(conn, _db_lock)
    _status_repo = _StatusRepo(conn, _db_lock)
    logger.info("Opened database %s", path or _db.db_path())


def close() -> None:
    """Close the connection if one is open."""
    global _conn, _prefix_repo, _status_repo

    if _conn is not None:
        _conn.close()
    _conn = None
    _prefix_repo = None
    _status_repo = None


def _repos() -> tuple[_PrefixRepo, _StatusRepo]:
    if _prefix_repo is None or _status_repo is None:
        init()
    return _prefix_repo, _status_repo


# --- Public async-friendly API ----------------------------------------------

async def find_all_statuses() -> List[StatusEntry]:
    """Return every stored status."""
    _, statuses = _repos()
    try:
        return await statuses.all()
    except sqlite3.Error as exc:
        raise ExternalServiceError(f"Failed to load statuses: {exc}") from exc


async def find_all_prefixes() -> List[PrefixEntry]:
    """Return every stored guild prefix."""
    prefixes, _ = _repos()
    try:
        return await prefixes.all()
    except sqlite3.Error as exc:
        raise ExternalServiceError(f"Failed to load prefixes: {exc}") from exc


async def insert_prefix(entry: PrefixEntry) -> None:
    """
    Persist ``entry``. An existing row for the same guild is overwritten, so
    concurrent writers for one guild end with the last write.
    """
    prefixes, _ = _repos()
    try:
        await prefixes.upsert(entry)
    except sqlite3.Error as exc:
        raise ExternalServiceError(
            f"Failed to save prefix for guild {entry.guild_id}: {exc}"
        ) from exc
