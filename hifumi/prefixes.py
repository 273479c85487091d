"""
Per-guild command prefix resolution.

Direct messages always use the default prefix. Development mode forces the
development prefix for every guild. Otherwise the cached guild prefix is used;
a guild seen for the first time is registered with the default prefix.
"""

from __future__ import annotations

import logging
from typing import NamedTuple

import discord

from hifumi.config import core
from hifumi.datatypes import PrefixEntry
from hifumi.errors import ExternalServiceError
from hifumi.memory import store
from hifumi.memory.state import BotState

logger = logging.getLogger(__name__)


class PrefixResolution(NamedTuple):
    """Outcome of resolving the prefix for one message."""

    prefix: str
    registered: bool = False
    error: ExternalServiceError | None = None


def first_contact_notice(prefix: str) -> str:
    return f"I have set the prefix to `{prefix}`. You can change it with `{prefix}prefix`"


async def register_prefix(guild_id: str) -> ExternalServiceError | None:
    """
    Store the default prefix for ``guild_id`` in the database and the cache.

    The cache is updated even when the database write fails; the failure is
    returned instead of raised.
    """
    entry = PrefixEntry(guild_id=guild_id, prefix=core.DEFAULT_PREFIX)
    error: ExternalServiceError | None = None

    try:
        await store.insert_prefix(entry)
    except ExternalServiceError as exc:
        logger.error("Failed to persist default prefix for guild %s: %s", guild_id, exc)
        error = exc

    await BotState().set_prefix(entry.guild_id, entry.prefix)
    return error


async def resolve(message: discord.Message) -> PrefixResolution:
    """Return the prefix that applies to ``message``."""

    guild = message.guild
    if guild is None:
        return PrefixResolution(core.DEFAULT_PREFIX.lower())

    if core.DEV_MODE:
        return PrefixResolution(core.DEV_PREFIX.lower())

    guild_id = str(guild.id)
    stored = await BotState().get_prefix(guild_id)
    if stored is not None:
        return PrefixResolution(stored.lower())

    logger.info("First message from guild %s; registering default prefix", guild_id)
    error = await register_prefix(guild_id)
    if error is None:
        try:
            await message.channel.send(first_contact_notice(core.DEFAULT_PREFIX))
        except (discord.HTTPException, OSError) as exc:
            logger.warning("Failed to announce prefix in channel %s: %s", message.channel.id, exc)

    return PrefixResolution(core.DEFAULT_PREFIX.lower(), registered=True, error=error)
