"""Argument helpers shared by command handlers."""

from __future__ import annotations

import discord

from hifumi.errors import ExternalServiceError, UserInputError

from .invocation import CommandInvocation


def parse_user_id(token: str) -> int:
    """Parse a ``<@id>``, ``<@!id>`` or bare id token into an int."""
    cleaned = token.replace("<@", "").replace("!", "").replace(">", "")
    try:
        return int(cleaned)
    except ValueError:
        raise UserInputError("Invalid User Id") from None


async def parse_target_user(
    client: discord.Client,
    message: discord.Message,
    invocation: CommandInvocation,
    idx: int,
) -> discord.abc.User:
    """
    Return the user mentioned at token ``idx``, or the author if there is none.

    :raises UserInputError: The token is not a user id or no such user exists.
    :raises ExternalServiceError: Discord failed while looking the user up.
    """
    token = invocation.arg(idx)
    if token is None:
        return message.author

    user_id = parse_user_id(token)
    try:
        return await client.fetch_user(user_id)
    except discord.NotFound:
        raise UserInputError("User not found") from None
    except discord.HTTPException as exc:
        raise ExternalServiceError(f"Failed to fetch user {user_id}: {exc}") from exc
