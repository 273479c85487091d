from __future__ import annotations
import discord
from . import register, all_commands


@register
class HelpCommand:
    """List available prefix commands."""

    command_str = "help"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, invocation) -> None:
        """
        Send a comma-separated list of registered commands.

        :param client: Discord client instance (unused).
        :param message: Incoming command message.
        :param invocation: Parsed invocation; its prefix is shown with each command.
        """
        cmds = ", ".join(f"`{invocation.prefix}{name}`" for name in sorted(all_commands()))
        await message.channel.send(f"Available commands: {cmds}")
