"""Telegram Bot API notifier via sendMessage."""

import asyncio

import requests

from ratebot.config import TelegramSettings
from ratebot.exceptions import NotificationError
from ratebot.logging import get_logger
from ratebot.notify.client import Notifier

logger = get_logger(__name__)


class TelegramNotifier(Notifier):
    """Posts messages to a single Telegram chat or channel.

    The bot token is part of the endpoint path, so it is never logged; errors
    report the status code and the API description only.

    Args:
        settings: Token, channel id and API base URL.
        session: Shared session; one is created (and owned) if omitted.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        settings: TelegramSettings,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._settings = settings
        self._timeout = timeout
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def channel_id(self) -> str:
        return self._settings.channel_id

    def _endpoint(self) -> str:
        token = self._settings.bot_token.get_secret_value()
        return f"{self._settings.api_url.rstrip('/')}/bot{token}/sendMessage"

    async def send(self, text: str) -> None:
        await asyncio.to_thread(self._post, text)

    def _post(self, text: str) -> None:
        params = {"chat_id": self._settings.channel_id, "text": text}
        try:
            response = self._session.post(
                self._endpoint(), params=params, timeout=self._timeout
            )
        except requests.RequestException as exc:
            # The exception text embeds the URL, which contains the token.
            raise NotificationError(
                f"sending telegram message: {type(exc).__name__}"
            ) from None

        if not 200 <= response.status_code < 300:
            raise NotificationError(
                f"received non-2xx status from telegram: {response.status_code} "
                f"{_describe(response)}".rstrip()
            )

        logger.info("notification_sent", channel_id=self._settings.channel_id, text=text)

    async def close(self) -> None:
        if self._owns_session:
            self._session.close()


def _describe(response: requests.Response) -> str:
    """Pull the API's "description" field out of an error body, if any."""
    try:
        payload = response.json()
    except ValueError:
        return ""
    if isinstance(payload, dict):
        return str(payload.get("description", ""))
    return ""
