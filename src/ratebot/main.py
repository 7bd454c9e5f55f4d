"""Entry point for the rate bot.

Wires the components together and runs the scheduler until SIGINT/SIGTERM.

Component wiring order (in _build_components):
1. Shared requests.Session (connection reuse for page and Telegram calls)
2. RicoClient (rate page source)
3. TelegramNotifier (change messages)
4. RateChecker (last-known rate, check cycle)
5. RateScheduler (timer loop and cancellation)
"""

import asyncio
import functools
import signal
import sys
from typing import Any

import requests
from pydantic import ValidationError

from ratebot.checker import RateChecker
from ratebot.config import AppSettings
from ratebot.logging import get_logger, setup_logging
from ratebot.notify.telegram import TelegramNotifier
from ratebot.scheduler import RateScheduler
from ratebot.source.parser import parse_rate
from ratebot.source.rico_client import RicoClient


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all bot components from settings.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    session = requests.Session()

    source = RicoClient(settings.source, session=session)
    notifier = TelegramNotifier(
        settings.telegram,
        session=session,
        timeout=settings.source.request_timeout,
    )
    parser = functools.partial(
        parse_rate,
        row_selector=settings.source.row_selector,
        cell_class=settings.source.cell_class,
    )
    checker = RateChecker(
        source=source,
        notifier=notifier,
        tz=settings.source.tzinfo,
        parser=parser,
    )
    scheduler = RateScheduler(checker, interval=settings.source.poll_interval)

    return {
        "session": session,
        "source": source,
        "notifier": notifier,
        "checker": checker,
        "scheduler": scheduler,
    }


def _setup_signal_handlers(scheduler: RateScheduler) -> None:
    """Register SIGINT/SIGTERM to stop the scheduler gracefully.

    Must be called after the asyncio event loop is running.
    """
    logger = get_logger("ratebot.main")
    loop = asyncio.get_running_loop()

    def _graceful_handler(sig: signal.Signals) -> None:
        logger.info("shutdown_signal_received", signal=sig.name)
        scheduler.stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler, sig)


async def run(settings: AppSettings) -> None:
    """Run the bot until a shutdown signal arrives."""
    logger = get_logger("ratebot.main")
    components = _build_components(settings)

    _setup_signal_handlers(components["scheduler"])

    logger.info(
        "ratebot_starting",
        url=settings.source.url,
        channel_id=settings.telegram.channel_id,
        interval=settings.source.poll_interval,
        timezone=settings.source.timezone,
    )

    try:
        await components["scheduler"].run()
    finally:
        await components["source"].close()
        await components["notifier"].close()
        components["session"].close()
        logger.info("ratebot_stopped")


def load_settings() -> AppSettings:
    """Load settings, exiting with status 1 if they are missing or invalid."""
    try:
        return AppSettings()
    except ValidationError as e:
        setup_logging()
        get_logger("ratebot.main").critical(
            "invalid_configuration",
            errors=[
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ],
            note="TELEGRAM_BOT_TOKEN and TELEGRAM_CHANNEL_ID must be set in the environment",
        )
        sys.exit(1)


def main() -> None:
    """Synchronous entry point."""
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(run(settings))


if __name__ == "__main__":
    main()
