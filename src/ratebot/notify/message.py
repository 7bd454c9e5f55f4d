"""Human-readable rate change message."""

from datetime import datetime, tzinfo

from ratebot.models import Rate

BUY_LABEL = "ყიდვა"
SELL_LABEL = "გაყიდვა"


def format_timestamp(now: datetime, tz: tzinfo) -> str:
    """Render `now` in `tz` as e.g. "Jan 2 15:04:05" (day not zero-padded)."""
    local = now.astimezone(tz)
    return f"{local:%b} {local.day} {local:%H:%M:%S}"


def format_rate_message(rate: Rate, now: datetime, tz: tzinfo) -> str:
    """Build the notification text, values rounded to four decimals.

    >>> from decimal import Decimal
    >>> from datetime import timezone
    >>> format_rate_message(
    ...     Rate(Decimal("2.7"), Decimal("2.75")),
    ...     datetime(2024, 1, 2, 15, 4, 5, tzinfo=timezone.utc),
    ...     timezone.utc,
    ... )
    'Jan 2 15:04:05 - 1$ ყიდვა 2.7000 / გაყიდვა 2.7500'
    """
    return (
        f"{format_timestamp(now, tz)} - 1$ "
        f"{BUY_LABEL} {rate.buy:.4f} / {SELL_LABEL} {rate.sell:.4f}"
    )
