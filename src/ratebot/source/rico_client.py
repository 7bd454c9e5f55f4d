"""Rico exchange-rate page client built on a shared requests session.

requests is blocking, so each GET runs in the default thread pool via
asyncio.to_thread. Cancelling the awaiting task returns control immediately;
the worker thread is bounded by the request timeout and its result is dropped.
"""

import asyncio

import requests

from ratebot.config import SourceSettings
from ratebot.exceptions import FetchError
from ratebot.logging import get_logger
from ratebot.source.client import RateSource

logger = get_logger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/130.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ka,en-US;q=0.9,en;q=0.8",
    "Cache-Control": "no-cache",
}


class RicoClient(RateSource):
    """Fetches the rate page with a single GET per call.

    Args:
        settings: Source URL and request timeout.
        session: Shared session; one is created (and owned) if omitted.
    """

    def __init__(
        self,
        settings: SourceSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    @property
    def url(self) -> str:
        return self._settings.url

    async def fetch_page(self) -> str:
        """Fetch the page body, raising FetchError on any failure."""
        return await asyncio.to_thread(self._get)

    def _get(self) -> str:
        try:
            response = self._session.get(
                self._settings.url,
                headers=DEFAULT_HEADERS,
                timeout=self._settings.request_timeout,
            )
        except requests.RequestException as exc:
            raise FetchError(f"fetching {self._settings.url}: {exc}") from exc

        if response.status_code != 200:
            raise FetchError(
                f"received non-200 response code {response.status_code} "
                f"from {self._settings.url}"
            )

        body = response.text
        if not body or not body.strip():
            raise FetchError(f"empty response body from {self._settings.url}")

        logger.debug("rate_page_fetched", url=self._settings.url, size=len(body))
        return body

    async def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self._session.close()
