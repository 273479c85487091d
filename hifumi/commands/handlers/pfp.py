from __future__ import annotations
import discord
from . import register
from ..utils import parse_target_user
from hifumi.config import core


@register
class PfpCommand:
    """Show a user's avatar: ``pfp [@user]``."""

    command_str = "pfp"

    @staticmethod
    async def handle(client: discord.Client, message: discord.Message, invocation) -> None:
        user = await parse_target_user(client, message, invocation, 1)

        embed = discord.Embed(
            title=f"{user.name}'s profile picture",
            colour=discord.Colour(core.EMBED_COLOUR),
        )
        embed.set_image(url=user.display_avatar.url)
        await message.channel.send(embed=embed)
