"""Parsing of raw message text into command invocations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

REACTION_SIGIL = "$"


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """
    Tokens and names extracted from one message.

    Attributes:
        raw_tokens: Whitespace-split message text, original casing.
        tokens: ``raw_tokens`` lower-cased, used for matching.
        reaction_command_name: First token without its leading ``$``, or ``""``.
        command_name: First token with the prefix stripped.
        sub_command_name: Second token, or ``""``.
        prefix: Prefix the message was resolved against.
    """

    raw_tokens: Tuple[str, ...]
    tokens: Tuple[str, ...]
    reaction_command_name: str
    command_name: str
    sub_command_name: str
    prefix: str

    def arg(self, idx: int, *, raw: bool = False) -> str | None:
        """Return token ``idx`` (lower-cased unless ``raw``) or ``None``."""
        source = self.raw_tokens if raw else self.tokens
        return source[idx] if idx < len(source) else None


def parse_invocation(content: str, prefix: str) -> CommandInvocation | None:
    """
    Return the invocation encoded in ``content`` or ``None``.

    ``None`` means the text is empty or does not start with ``prefix``
    (compared case-insensitively against the whole text).
    """
    raw_tokens = tuple(content.split())
    if not raw_tokens:
        return None

    tokens = tuple(tok.lower() for tok in raw_tokens)
    prefix = prefix.lower()

    if not content.lower().startswith(prefix):
        return None

    first = tokens[0]
    reaction = first[len(REACTION_SIGIL):] if first.startswith(REACTION_SIGIL) else ""
    sub_command = tokens[1] if len(tokens) > 1 else ""

    return CommandInvocation(
        raw_tokens=raw_tokens,
        tokens=tokens,
        reaction_command_name=reaction,
        command_name=first.removeprefix(prefix),
        sub_command_name=sub_command,
        prefix=prefix,
    )
