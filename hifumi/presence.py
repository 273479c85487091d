"""
Background presence rotation.

Once the client is ready, a single task picks a random status from
:class:`~hifumi.memory.state.BotState`, applies it, and sleeps for a random
interval before picking again. The task ends for good when no statuses are
loaded.
"""

from __future__ import annotations

import asyncio
import logging
import random

import discord

from hifumi.config import core
from hifumi.datatypes import ActivityKind, StatusEntry
from hifumi.errors import FatalConfigurationError
from hifumi.memory.state import BotState

logger = logging.getLogger(__name__)

_ACTIVITY_TYPES = {
    ActivityKind.WATCHING: discord.ActivityType.watching,
    ActivityKind.LISTENING: discord.ActivityType.listening,
    ActivityKind.COMPETING: discord.ActivityType.competing,
}

_task: asyncio.Task | None = None


def activity_for(entry: StatusEntry) -> discord.BaseActivity:
    """Build the discord.py activity shown for ``entry``; unknown kinds play."""
    activity_type = _ACTIVITY_TYPES.get(entry.kind)
    if activity_type is None:
        return discord.Game(name=entry.text)
    return discord.Activity(type=activity_type, name=entry.text)


def rotation_interval() -> int:
    """Seconds until the next rotation, drawn from the configured inclusive window."""
    return random.randint(core.STATUS_INTERVAL_MIN, core.STATUS_INTERVAL_MAX)


async def rotate(client: discord.Client) -> None:
    """Apply random statuses forever; return when there is nothing to show."""
    state = BotState()

    while True:
        entry = await state.sample_status()
        if entry is None:
            exc = FatalConfigurationError("No statuses found in database")
            logger.error("%s; stopping status rotation", exc)
            return

        try:
            await client.change_presence(activity=activity_for(entry))
            logger.debug("Set status to: %s %s", entry.kind.value, entry.text)
        except (discord.DiscordException, ConnectionError) as exc:
            logger.error("Failed to set status %r: %s", entry.text, exc)

        await asyncio.sleep(rotation_interval())


def start(client: discord.Client) -> asyncio.Task | None:
    """
    Start the rotation task unless it was already started.

    Later calls (``on_ready`` fires again after reconnects) return ``None``.
    """
    global _task

    if _task is not None:
        return None

    logger.info(
        "Starting status rotation (interval=%d-%ds)",
        core.STATUS_INTERVAL_MIN,
        core.STATUS_INTERVAL_MAX,
    )
    _task = asyncio.create_task(rotate(client), name="hifumi-status-rotation")
    return _task


async def stop() -> None:
    """Cancel the rotation task if running."""
    global _task

    task, _task = _task, None
    if task is None or task.done():
        return

    task.cancel()
    try:
        await task
    except asyncio.CancelledError:  # pragma: no cover - normal cancellation
        pass
