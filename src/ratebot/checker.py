"""Rate checker -- one fetch, parse, compare, notify cycle per call.

The checker owns the last valid rate it observed. State changes only after a
full page has been fetched and parsed into a valid rate, so a cycle that is
cancelled mid-fetch leaves the state untouched and sends nothing.

A failed notification does not roll the state back: the new rate becomes the
baseline and the same rate seen again on the next tick is not re-announced.
"""

from collections.abc import Callable
from datetime import datetime, timezone, tzinfo

from ratebot.exceptions import FetchError, InvalidRateError, NotificationError
from ratebot.logging import get_logger
from ratebot.models import CheckOutcome, Rate
from ratebot.notify.client import Notifier
from ratebot.notify.message import format_rate_message
from ratebot.source.client import RateSource
from ratebot.source.parser import parse_rate

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RateChecker:
    """Detects USD rate changes and announces them.

    Args:
        source: Page fetcher.
        notifier: Destination for change messages.
        tz: Time zone used for message timestamps.
        parser: Turns page HTML into a Rate; zero fields mark failures.
        clock: Returns the current aware datetime.
    """

    def __init__(
        self,
        source: RateSource,
        notifier: Notifier,
        tz: tzinfo,
        parser: Callable[[str], Rate] = parse_rate,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._source = source
        self._notifier = notifier
        self._tz = tz
        self._parser = parser
        self._clock = clock
        self._last_rate = Rate.zero()

    @property
    def last_rate(self) -> Rate:
        """Most recent valid rate, or Rate.zero() before the first one."""
        return self._last_rate

    async def check_for_change(self) -> CheckOutcome:
        """Run one check cycle.

        Failures are logged and reported through the returned outcome; only
        asyncio.CancelledError propagates.
        """
        try:
            html = await self._source.fetch_page()
        except FetchError as e:
            logger.warning("rate_fetch_failed", error=str(e))
            return CheckOutcome.FETCH_FAILED

        current = self._parser(html)
        try:
            current.validate()
        except InvalidRateError as e:
            # Usually a markup change on the source site, not a real zero rate.
            logger.warning("rate_invalid_skipping", error=str(e))
            return CheckOutcome.INVALID

        if current == self._last_rate:
            logger.debug("rate_unchanged", buy=str(current.buy), sell=str(current.sell))
            return CheckOutcome.UNCHANGED

        previous = self._last_rate
        self._last_rate = current
        logger.info(
            "rate_changed",
            buy=str(current.buy),
            sell=str(current.sell),
            previous_buy=str(previous.buy),
            previous_sell=str(previous.sell),
        )

        try:
            await self.send_notification(current)
        except NotificationError as e:
            logger.error("notification_send_failed", error=str(e))
            return CheckOutcome.NOTIFY_FAILED

        return CheckOutcome.CHANGED

    async def send_notification(self, rate: Rate) -> None:
        """Format and deliver a change message for a valid rate.

        Raises:
            NotificationError: if delivery fails.
        """
        text = format_rate_message(rate, self._clock(), self._tz)
        await self._notifier.send(text)
