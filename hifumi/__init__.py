"""Hifumi Discord bot: prefix commands, rotating presence and error reports."""
