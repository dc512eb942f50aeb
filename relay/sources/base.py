"""Base class for inbound webhook parsers."""

from abc import ABC, abstractmethod
from typing import Any

from relay.models.event import WebhookEnvelope


class BaseSource(ABC):
    """Abstract base class for inbound webhook parsers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name identifier."""
        ...

    @abstractmethod
    def parse(self, payload: dict[str, Any]) -> WebhookEnvelope:
        """Parse webhook payload into a WebhookEnvelope."""
        ...
