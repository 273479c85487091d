"""Command dispatch utilities."""

from __future__ import annotations

import logging

import discord

from .handlers import CommandHandler, get as get_handler, all_commands
from .invocation import CommandInvocation, parse_invocation

logger = logging.getLogger(__name__)


def should_ignore(message: discord.Message) -> bool:
    """Return ``True`` for messages the bot never acts on (bot authors, no text)."""

    author = getattr(message, "author", None)
    if author is None or getattr(author, "bot", False):
        return True

    return not (getattr(message, "content", None) or "").split()


def resolve_command(
    content: str, prefix: str
) -> tuple[CommandHandler, CommandInvocation] | None:
    """Return the handler and invocation for ``content`` if a registered command matches."""

    invocation = parse_invocation(content, prefix)
    if invocation is None:
        return None

    handler = get_handler(invocation.command_name)
    if handler is None:
        logger.debug("No handler registered for '%s'", invocation.command_name)
        return None

    return handler, invocation


async def dispatch(client: discord.Client, message: discord.Message, prefix: str) -> bool:
    """
    Parse ``message`` against ``prefix`` and run the matching command.
    Returns True if a command was handled. Handler errors propagate.
    """

    if should_ignore(message):
        return False

    resolved = resolve_command(message.content, prefix)
    if resolved is None:
        return False

    handler, invocation = resolved
    logger.info(
        "Dispatching command '%s' (sub='%s') from user %s",
        invocation.command_name,
        invocation.sub_command_name,
        message.author.id,
    )
    await handler.handle(client, message, invocation)
    return True


__all__ = [
    "CommandHandler",
    "CommandInvocation",
    "all_commands",
    "dispatch",
    "parse_invocation",
    "resolve_command",
    "should_ignore",
]
