"""
Repositories (SQL-only)
=======================
- Pure CRUD and selects; callers wrap errors.
"""

from __future__ import annotations
from typing import List
import asyncio
import sqlite3

from hifumi.datatypes import ActivityKind, PrefixEntry, StatusEntry


class PrefixRepo:
    """Async helpers for the ``prefixes`` table."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock):
        self.conn = conn
        self._lock = lock

    async def upsert(self, entry: PrefixEntry) -> None:
        """
        Insert a guild prefix, replacing any existing row for the guild.

        :param entry: Guild id and prefix to store.
        """
        sql = """
            INSERT INTO prefixes (server_id, prefix) VALUES (?, ?)
            ON CONFLICT(server_id) DO UPDATE SET prefix=excluded.prefix
        """

        def _run():
            with self.conn:
                self.conn.execute(sql, (entry.guild_id, entry.prefix))

        async with self._lock:
            await asyncio.to_thread(_run)  # blocking sqlite call

    async def all(self) -> List[PrefixEntry]:
        sql = "SELECT server_id, prefix FROM prefixes"

        def _query() -> List[PrefixEntry]:
            rows = self.conn.execute(sql).fetchall()
            return [PrefixEntry(guild_id=str(r["server_id"]), prefix=r["prefix"]) for r in rows]

        async with self._lock:
            return await asyncio.to_thread(_query)  # blocking sqlite call


class StatusRepo:
    """Read access to the ``statuses`` table."""

    def __init__(self, conn: sqlite3.Connection, lock: asyncio.Lock):
        self.conn = conn
        self._lock = lock

    async def all(self) -> List[StatusEntry]:
        """Return every status ordered by id."""
        sql = "SELECT id, type, status FROM statuses ORDER BY id"

        def _query() -> List[StatusEntry]:
            rows = self.conn.execute(sql).fetchall()
            return [
                StatusEntry(id=r["id"], kind=ActivityKind.parse(r["type"]), text=r["status"])
                for r in rows
            ]

        async with self._lock:
            return await asyncio.to_thread(_query)  # blocking sqlite call
