"""Abstract notifier interface."""

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Sends text messages to the one configured destination."""

    @abstractmethod
    async def send(self, text: str) -> None:
        """Deliver a message.

        Raises:
            NotificationError: on transport failure or a non-2xx response.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release transport resources."""
        ...
