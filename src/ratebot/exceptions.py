"""Custom exceptions for the rate bot.

Every per-cycle failure derives from RateBotError and is absorbed by the
checker. Configuration problems surface as pydantic ValidationError at startup.
"""


class RateBotError(Exception):
    """Base exception for all rate bot errors."""


class FetchError(RateBotError):
    """Raised when the rate page cannot be retrieved (transport, status, empty body)."""


class ParseError(RateBotError):
    """Raised when a rate cell is missing or holds non-numeric text."""


class InvalidRateError(RateBotError):
    """Raised when a parsed rate has a zero buy or sell value."""


class NotificationError(RateBotError):
    """Raised when the messaging provider rejects or never receives a message."""
