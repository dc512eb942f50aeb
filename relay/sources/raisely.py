"""Raisely webhook parser.

https://developers.raisely.com/docs/available-events
"""

from typing import Any

from relay.models.event import Event, WebhookEnvelope
from relay.sources.base import BaseSource


class RaiselySource(BaseSource):
    """Parser for Raisely webhooks and browser-fired custom actions."""

    @property
    def name(self) -> str:
        return "raisely"

    def parse(self, payload: dict[str, Any]) -> WebhookEnvelope:
        secret = payload.get("secret")
        return WebhookEnvelope(
            secret=secret if isinstance(secret, str) else "",
            data=Event.model_validate(payload.get("data")),
        )

    def secret(self, payload: Any) -> str | None:
        """Return the shared secret from a raw body, if there is one."""
        if not isinstance(payload, dict):
            return None
        secret = payload.get("secret")
        return secret if isinstance(secret, str) and secret else None
