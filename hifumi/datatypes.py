from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ActivityKind(enum.Enum):
    """Presence activity kinds a status entry can carry."""

    PLAYING = "playing"
    WATCHING = "watching"
    LISTENING = "listening"
    COMPETING = "competing"

    @classmethod
    def parse(cls, raw: str | None) -> "ActivityKind":
        """Map a stored kind string to a member, falling back to ``PLAYING``."""
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.PLAYING


@dataclass(frozen=True, slots=True)
class PrefixEntry:
    """Command prefix assigned to one guild."""

    guild_id: str
    prefix: str


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """
    One presence the bot can display.

    Attributes:
        id: Store-assigned identifier, opaque to the bot.
        kind: Activity kind shown before the text.
        text: Activity text.
    """

    id: Any
    kind: ActivityKind
    text: str
