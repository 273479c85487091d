from __future__ import annotations
import discord
from . import register


@register
class PingCommand:
    command_str = "ping"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, invocation) -> None:
        await message.channel.send("Pong!")
