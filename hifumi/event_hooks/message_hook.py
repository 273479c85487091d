import discord
from hifumi import commands, escalation, prefixes
from hifumi.errors import UserInputError

import logging

logger = logging.getLogger(__name__)


async def _reply(message: discord.Message, text: str) -> None:
    try:
        await message.channel.send(text)
    except (discord.DiscordException, OSError) as exc:
        logger.error("Failed to send message: %s", exc)


async def handle(client: discord.Client, message: discord.Message):
    """
    Handle incoming discord messages.
    - client: Discord bot client instance
    - message: The incoming message object
    """
    # 1) Ignore bots and empty messages
    if commands.should_ignore(message):
        return

    # 2) Work out the prefix (registers new guilds)
    resolution = await prefixes.resolve(message)
    if resolution.error is not None:
        await escalation.escalate(client, message, resolution.error)

    # 3) Run the command, if any
    try:
        await commands.dispatch(client, message, resolution.prefix)
    except UserInputError as e:
        logger.warning(
            "Rejected command from user %s in channel %s: %s",
            message.author.id,
            message.channel.id,
            e,
        )
        await _reply(message, str(e))
    except Exception as e:
        await escalation.escalate(client, message, e)
        await _reply(message, str(e) or type(e).__name__)
