"""Exception types raised by the bot core."""

from __future__ import annotations


class HifumiError(Exception):
    """Base class for errors raised by the bot."""


class UserInputError(HifumiError):
    """A command argument could not be understood (bad mention, bad id, ...).

    The message text is shown to the invoking user as-is.
    """


class ExternalServiceError(HifumiError):
    """A call to Discord or the persistent store failed."""


class FatalConfigurationError(HifumiError):
    """The bot is missing data it cannot run a feature without."""


__all__ = [
    "HifumiError",
    "UserInputError",
    "ExternalServiceError",
    "FatalConfigurationError",
]
