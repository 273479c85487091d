from __future__ import annotations

import logging

import discord

from . import register
from hifumi.config import core
from hifumi.datatypes import PrefixEntry
from hifumi.errors import UserInputError
from hifumi.memory import store
from hifumi.memory.state import BotState

logger = logging.getLogger(__name__)


@register
class PrefixCommand:
    """Show or change the guild prefix: ``prefix [new]``."""

    command_str = "prefix"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, invocation) -> None:
        if message.guild is None:
            raise UserInputError("Prefixes can only be changed inside a server")

        guild_id = str(message.guild.id)
        new_prefix = invocation.arg(1)

        if new_prefix is None:
            current = await BotState().get_prefix(guild_id) or core.DEFAULT_PREFIX
            await message.channel.send(f"The prefix for this server is `{current}`")
            return

        perms = getattr(message.author, "guild_permissions", None)
        if perms is None or not perms.manage_guild:
            raise UserInputError("You need the Manage Server permission to change the prefix")

        # Cache only mirrors writes the store accepted
        await store.insert_prefix(PrefixEntry(guild_id=guild_id, prefix=new_prefix))
        await BotState().set_prefix(guild_id, new_prefix)
        logger.info("Guild %s prefix changed to %s", guild_id, new_prefix)

        await message.channel.send(f"The prefix for this server is now `{new_prefix}`")
