"""Discord bot bootstrap utilities."""

from __future__ import annotations

import datetime
import logging

import discord

from hifumi.config import core
from hifumi.event_hooks import message_hook, ready_hook
from hifumi.memory import store
from hifumi.memory.state import BotState
from hifumi import presence

logger = logging.getLogger(__name__)

# --- Intents --------------------------------------------------------------- #
intents = discord.Intents.default()
intents.members = True
intents.message_content = True


class HifumiClient(discord.Client):
    """Gateway client wiring Discord events to the bot hooks."""

    def __init__(self) -> None:
        super().__init__(intents=intents)
        self.started_at = datetime.datetime.now(datetime.timezone.utc)

    async def setup_hook(self) -> None:
        """Load prefixes and statuses into memory before connecting."""

        store.init()
        state = BotState()
        await state.load_statuses(await store.find_all_statuses())
        await state.load_prefixes(await store.find_all_prefixes())
        logger.info(
            "Loaded %d status(es) and %d guild prefix(es)",
            await state.status_count(),
            await state.prefix_count(),
        )

    async def on_ready(self) -> None:
        await ready_hook.handle(self, self.started_at)

    async def on_message(self, message: discord.Message) -> None:
        await message_hook.handle(self, message)

    async def close(self) -> None:
        await presence.stop()
        await super().close()
        store.close()


def run() -> None:
    """Start the Discord bot using configuration from the environment."""

    if not core.DISCORD_API_TOKEN:
        logger.error("No DISCORD_API_TOKEN configured. Cannot run client.")
        return

    client = HifumiClient()
    try:
        client.run(core.DISCORD_API_TOKEN, log_handler=None)
    except discord.LoginFailure as exc:
        logger.error("Login failed: %s", exc)
    except Exception as exc:  # pragma: no cover
        logger.exception("Unexpected error while running client: %s", exc)
