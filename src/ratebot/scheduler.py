"""Scheduler -- drives the rate checker on a fixed cadence until stopped.

One check runs immediately, then one per interval. Each cycle runs as its
own task so stop() can cancel an in-flight HTTP call; the loop then exits at
its next wait. Cycles never overlap: the next one starts only after the
previous task has finished. Ticks that fall inside a slow cycle are dropped.
"""

import asyncio

from ratebot.checker import RateChecker
from ratebot.logging import get_logger
from ratebot.models import CheckOutcome

logger = get_logger(__name__)

DEFAULT_POLL_INTERVAL = 60.0  # seconds


class RateScheduler:
    """Timer loop with a stop event acting as the cancellation token.

    Args:
        checker: The single checker instance driven by this loop.
        interval: Seconds between check starts.
    """

    def __init__(
        self,
        checker: RateChecker,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._checker = checker
        self._interval = interval
        self._stop_event = asyncio.Event()
        self._cycle_task: asyncio.Task | None = None  # type: ignore[type-arg]
        self._cycles = 0

    @property
    def stopping(self) -> bool:
        return self._stop_event.is_set()

    @property
    def cycles(self) -> int:
        """Number of cycles started so far."""
        return self._cycles

    async def run(self) -> None:
        """Check now, then every interval, until stop() is called."""
        loop = asyncio.get_running_loop()
        logger.info("scheduler_started", interval=self._interval)
        deadline = loop.time()
        try:
            while not self._stop_event.is_set():
                await self._run_cycle()

                deadline += self._interval
                now = loop.time()
                while deadline <= now:
                    deadline += self._interval
                    logger.debug("scheduler_tick_skipped")

                if await self._wait_for_stop(deadline - now):
                    break
        finally:
            logger.info("scheduler_stopped", cycles=self._cycles)

    def stop(self) -> None:
        """Request shutdown and cancel the in-flight cycle, if any.

        Safe to call from a signal handler on the running loop, and more than
        once.
        """
        if not self._stop_event.is_set():
            logger.info("scheduler_stopping")
        self._stop_event.set()
        if self._cycle_task is not None and not self._cycle_task.done():
            self._cycle_task.cancel()

    async def _run_cycle(self) -> CheckOutcome | None:
        self._cycles += 1
        self._cycle_task = asyncio.create_task(self._checker.check_for_change())
        try:
            outcome = await self._cycle_task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if not self._stop_event.is_set() or (
                current is not None and current.cancelling()
            ):
                # run() itself was cancelled from outside
                raise
            logger.info("check_cycle_cancelled", cycle=self._cycles)
            return None
        except Exception:
            logger.error("check_cycle_error", cycle=self._cycles, exc_info=True)
            return None
        finally:
            self._cycle_task = None

        logger.debug("check_cycle_finished", cycle=self._cycles, outcome=outcome.value)
        return outcome

    async def _wait_for_stop(self, timeout: float) -> bool:
        """Wait until the deadline or a stop request. True means stop."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True
