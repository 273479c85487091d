"""
Error reporting for failed message handling.

A report is logged one field per line and posted to Discord: to the
originating channel when it is a development channel, otherwise to the
operator log channel. Posting problems are logged and go no further.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass

import discord

from hifumi.config import core

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S UTC"
MAX_MESSAGE_LENGTH = 2000


@dataclass(frozen=True, slots=True)
class ErrorReport:
    """Diagnostic fields describing one failed message."""

    timestamp: str
    server_name: str
    server_id: str
    channel_name: str
    user_name: str
    user_id: str
    content: str
    error: str

    def log_lines(self) -> list[str]:
        return [
            f"An Error occurred on {self.timestamp}",
            f"Server: {self.server_name} - {self.server_id}",
            f"Room: {self.channel_name}",
            f"User: {self.user_name} - {self.user_id}",
            f"Command used: {self.content}",
            f"Error: {self.error}",
        ]

    def render(self) -> str:
        """Markdown version posted to Discord, cut to the message size limit."""
        text = "\n".join(
            [
                f"An Error occurred on {self.timestamp}",
                f"**Server:** {self.server_name} - {self.server_id}",
                f"**Room:** {self.channel_name}",
                f"**User:** {self.user_name} - {self.user_id}",
                f"**Command used:** {self.content}",
                f"**Error:** {self.error}",
            ]
        )
        if len(text) > MAX_MESSAGE_LENGTH:
            text = text[: MAX_MESSAGE_LENGTH - 3] + "..."
        return text


def build_report(
    message: discord.Message,
    error: BaseException,
    now: datetime.datetime | None = None,
) -> ErrorReport:
    """Collect the report fields for ``error`` raised while handling ``message``."""
    now = now or datetime.datetime.now(datetime.timezone.utc)
    guild = message.guild
    author = message.author

    return ErrorReport(
        timestamp=now.astimezone(datetime.timezone.utc).strftime(TIMESTAMP_FORMAT),
        server_name=guild.name if guild is not None else "Direct Message",
        server_id=str(guild.id) if guild is not None else "Unknown",
        channel_name=getattr(message.channel, "name", None) or "Unknown",
        user_name=author.name,
        user_id=str(author.id),
        content=message.content,
        error=str(error) or type(error).__name__,
    )


async def _destination(client: discord.Client, message: discord.Message) -> discord.abc.Messageable:
    if message.channel.id in core.DEV_CHANNEL_IDS:
        return message.channel

    channel = client.get_channel(core.LOG_CHANNEL_ID)
    if channel is None:
        channel = await client.fetch_channel(core.LOG_CHANNEL_ID)
    return channel


async def escalate(
    client: discord.Client, message: discord.Message, error: BaseException
) -> ErrorReport:
    """
    Log ``error`` and post a report about it. Never raises.

    :param client: Discord client used to reach the log channel.
    :param message: Message whose handling failed.
    :param error: The failure.
    :returns: The report that was logged.
    """
    report = build_report(message, error)
    for line in report.log_lines():
        logger.error(line)

    try:
        channel = await _destination(client, message)
        await channel.send(report.render())
    except (discord.DiscordException, OSError) as exc:
        logger.error("Failed to post error report: %s", exc)

    return report
