"""Shared data models for the rate bot.

All rate values use Decimal so that equality between two observations is
exact: "2.70" and "2.7000" are the same rate, "2.7" and "2.7001" are not.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from ratebot.exceptions import InvalidRateError

_ZERO = Decimal("0")


@dataclass(frozen=True)
class Rate:
    """USD buy/sell pair observed on the source page."""

    buy: Decimal = _ZERO
    sell: Decimal = _ZERO

    @classmethod
    def zero(cls) -> "Rate":
        """The "unknown" rate held before the first valid observation."""
        return cls(_ZERO, _ZERO)

    @property
    def is_valid(self) -> bool:
        return self.buy != _ZERO and self.sell != _ZERO

    def validate(self) -> "Rate":
        """Return self, or raise InvalidRateError if either side is zero."""
        if not self.is_valid:
            raise InvalidRateError(
                f"rate has a zero value (buy={self.buy}, sell={self.sell})"
            )
        return self


class CheckOutcome(str, Enum):
    """How a single check cycle ended."""

    FETCH_FAILED = "fetch_failed"
    INVALID = "invalid"
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    NOTIFY_FAILED = "notify_failed"
