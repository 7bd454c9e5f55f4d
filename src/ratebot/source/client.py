"""Abstract rate source interface.

The checker depends only on this contract, keeping the HTTP details of the
scraped site isolated in the concrete implementation.
"""

from abc import ABC, abstractmethod


class RateSource(ABC):
    """Abstract base class for pages that publish the USD rate."""

    @abstractmethod
    async def fetch_page(self) -> str:
        """Return the raw HTML of the rate page.

        Raises:
            FetchError: on transport failure, non-200 status or empty body.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...
