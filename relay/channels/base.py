"""Base class for outbound alert channels."""

from abc import ABC, abstractmethod
from typing import Any


class BaseChannel(ABC):
    """Abstract base class for outbound alert channels."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Channel name for logging."""
        ...

    @abstractmethod
    async def post(self, path: str, form: dict[str, Any]) -> Any:
        """POST a form-encoded payload and return the decoded response.

        Transport failures and non-2xx answers raise.
        """
        ...

    async def aclose(self) -> None:
        """Release any connections held by the channel."""
        return None
