"""Process-wide caches for guild prefixes and presence statuses."""

from __future__ import annotations

import random
from typing import Iterable

from hifumi.datatypes import PrefixEntry, StatusEntry

from .rwlock import RWLock


class BotState:
    """
    Singleton holding the prefix map and the status snapshot.

    Each structure has its own :class:`RWLock`; no method takes both, and no
    method awaits I/O while holding either.
    """

    _instance: "BotState" | None = None

    def __new__(cls) -> "BotState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._prefixes: dict[str, str] = {}
            cls._instance._prefix_lock = RWLock()
            cls._instance._statuses: list[StatusEntry] = []
            cls._instance._status_lock = RWLock()
        return cls._instance

    # ------------------------------------------------------------------ #
    # Prefixes
    # ------------------------------------------------------------------ #

    async def get_prefix(self, guild_id: str) -> str | None:
        async with self._prefix_lock.read():
            return self._prefixes.get(guild_id)

    async def set_prefix(self, guild_id: str, prefix: str) -> None:
        """Insert or replace the cached prefix for ``guild_id``."""
        async with self._prefix_lock.write():
            self._prefixes[guild_id] = prefix

    async def load_prefixes(self, entries: Iterable[PrefixEntry]) -> None:
        """Replace the whole prefix map with ``entries``."""
        fresh = {entry.guild_id: entry.prefix for entry in entries}
        async with self._prefix_lock.write():
            self._prefixes = fresh

    async def prefix_count(self) -> int:
        async with self._prefix_lock.read():
            return len(self._prefixes)

    # ------------------------------------------------------------------ #
    # Statuses
    # ------------------------------------------------------------------ #

    async def sample_status(self) -> StatusEntry | None:
        """Return a uniformly random status, or ``None`` if none are loaded."""
        async with self._status_lock.read():
            if not self._statuses:
                return None
            return random.choice(self._statuses)

    async def load_statuses(self, entries: Iterable[StatusEntry]) -> None:
        """Replace the status snapshot with ``entries``."""
        fresh = list(entries)
        async with self._status_lock.write():
            self._statuses = fresh

    async def status_count(self) -> int:
        async with self._status_lock.read():
            return len(self._statuses)
