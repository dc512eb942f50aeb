"""Event routing from Raisely webhooks to Streamlabs calls."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from relay.channels.streamlabs import StreamlabsChannel
from relay.models.config import RelayConfig
from relay.models.event import Action, Donation, Event, Subscription
from relay.sources.raisely import RaiselySource

logger = logging.getLogger(__name__)

ALLOW_METHODS = "GET,HEAD,POST,PUT"
ALLOW_HEADERS = (
    "Access-Control-Allow-Headers, Authorization, Origin, Accept, "
    "X-Requested-With, Content-Type, Access-Control-Request-Method, "
    "Access-Control-Request-Headers"
)


def load_relay_config(config_path: str | Path) -> RelayConfig:
    """Load relay configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Relay config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return RelayConfig.model_validate(data)


def create_channel_from_config(config: RelayConfig) -> StreamlabsChannel:
    return StreamlabsChannel(base_url=config.streamlabs_url, timeout=config.timeout)


def describe_errors(error: ValidationError) -> str:
    """One-line summary of a validation error, e.g. "source: Field required"."""
    return "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
        for err in error.errors(include_url=False)
    )


@dataclass
class RelayResult:
    """What to answer the webhook sender with."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: dict[str, Any] | None = None


class EventRouter:
    """Validates Raisely webhooks and forwards them to Streamlabs."""

    def __init__(self, config: RelayConfig, channel: StreamlabsChannel):
        self._config = config
        self._channel = channel
        self._source = RaiselySource()
        self._handlers = {
            "donation.succeeded": self._send_donation,
            "subscription.succeeded": self._send_subscription,
            "action.taken": self._send_action,
        }

        logger.info(f"Router initialized with {len(config.campaigns)} campaign(s)")

    @property
    def campaigns(self) -> list[str]:
        return list(self._config.campaigns)

    @property
    def channel(self) -> StreamlabsChannel:
        return self._channel

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        """CORS headers restricted to the configured origins."""
        allowed = self._config.allowed_origins
        allowed_origin = origin if origin in allowed else allowed[0]
        return {
            "Access-Control-Allow-Methods": ALLOW_METHODS,
            "Access-Control-Allow-Headers": ALLOW_HEADERS,
            "Access-Control-Allow-Origin": allowed_origin,
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Max-Age": "86400",
        }

    async def handle(self, method: str, origin: str | None, body: Any) -> RelayResult:
        """Handle one inbound request.

        Rejections are answered with 200 so Raisely does not retry them.
        Streamlabs transport errors are not caught here.
        """
        headers = self.cors_headers(origin)

        if method.lower() == "options":
            return RelayResult(status_code=204, headers=headers)

        def reply(status_code: int = 200, **content: Any) -> RelayResult:
            return RelayResult(status_code=status_code, headers=headers, body=content)

        secret = self._source.secret(body)
        if not secret or secret != self._config.auth_secret:
            logger.warning("Rejected webhook with invalid auth")
            return reply(success=False, message="invalid auth")

        try:
            envelope = self._source.parse(body)
        except ValidationError as e:
            logger.warning(f"Invalid {self._source.name} event: {e}")
            return reply(400, success=False, message=f"invalid event: {describe_errors(e)}")

        event = envelope.data
        campaign_uuid = event.campaign_uuid

        access_token = self._config.token_for(campaign_uuid)
        if not access_token:
            logger.info(f"Campaign unknown {campaign_uuid}")
            return reply(success=False, message=f"Campaign unknown {campaign_uuid}")

        logger.info(f"Event received, {json.dumps(event.model_dump(), default=str)}")

        handler = self._handlers.get(event.type)
        if not handler:
            logger.info(f"Ignoring unknown event {event.type}")
            return reply(success=False, message=f"unknown event {event.type}")

        try:
            response = await handler(event, campaign_uuid, access_token)
        except ValidationError as e:
            logger.warning(f"Invalid {event.type} record: {e}")
            return reply(400, success=False, message=f"invalid event: {describe_errors(e)}")

        return reply(success=True, response=response)

    async def _send_donation(self, event: Event, campaign_uuid: str, access_token: str) -> Any:
        donation = Donation.model_validate(event.data)
        logger.info(f"(donation {donation.uuid}, campaign: {campaign_uuid}) processing")
        return await self._channel.send_donation(donation, access_token)

    async def _send_subscription(
        self, event: Event, campaign_uuid: str, access_token: str
    ) -> Any:
        subscription = Subscription.model_validate(event.data)
        logger.info(
            f"(subscription {subscription.uuid}, campaign: {campaign_uuid}) processing"
        )
        return await self._channel.send_subscription(subscription, access_token)

    async def _send_action(self, event: Event, campaign_uuid: str, access_token: str) -> Any:
        action = Action.model_validate(event.data)
        logger.info(
            f"(action {action.name}, user: {action.username}, "
            f"campaign: {campaign_uuid}) processing"
        )
        return await self._channel.send_action(action, access_token)
