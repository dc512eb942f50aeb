"""Streamlabs alert API channel implementation.

https://dev.streamlabs.com/
"""

import asyncio
import logging
from typing import Any

import httpx

from relay.channels.base import BaseChannel
from relay.models.event import Action, Donation, Subscription

logger = logging.getLogger(__name__)

DONATIONS_PATH = "/api/v1.0/donations"
ALERTS_PATH = "/api/v1.0/alerts"
POINTS_PATH = "/api/v1.0/points/user_point_edit"

ANONYMOUS_NAME = "Someone"
MAX_NAME_LENGTH = 25


def donor_name(record: Donation) -> str:
    """Display name for a donation or subscription."""
    if record.anonymous:
        return ANONYMOUS_NAME
    user = record.user
    name = user.preferred_name or user.first_name or user.full_name
    if not name:
        return ANONYMOUS_NAME
    return name[:MAX_NAME_LENGTH]


def build_donation_payload(donation: Donation, access_token: str) -> dict[str, Any]:
    return {
        "name": donor_name(donation),
        "message": donation.message,
        "identifier": donation.user.uuid,
        # Raisely amounts are in cents
        "amount": donation.amount / 100,
        "currency": donation.currency,
        "access_token": access_token,
    }


def build_subscription_payload(
    subscription: Subscription, access_token: str
) -> dict[str, Any]:
    return {
        "access_token": access_token,
        "type": "subscription",
        "message": f"{donor_name(subscription)} subscribed",
        "user_message": subscription.message,
    }


def build_action_payloads(
    action: Action, access_token: str
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Points and alert payloads for a custom action."""
    points = {
        "access_token": access_token,
        "username": action.username,
        "points": 1,
    }
    alert = {
        "access_token": access_token,
        "type": "follow",
        "message": action.message,
    }
    return points, alert


class StreamlabsChannel(BaseChannel):
    """Streamlabs REST API channel."""

    def __init__(
        self,
        base_url: str = "https://streamlabs.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def name(self) -> str:
        return "streamlabs"

    async def post(self, path: str, form: dict[str, Any]) -> Any:
        # httpx sends None as an empty field
        response = await self._client.post(path, data=form)
        response.raise_for_status()

        try:
            return response.json()
        except ValueError:
            return response.text

    async def send_donation(self, donation: Donation, access_token: str) -> Any:
        return await self.post(
            DONATIONS_PATH, build_donation_payload(donation, access_token)
        )

    async def send_subscription(
        self, subscription: Subscription, access_token: str
    ) -> Any:
        return await self.post(
            ALERTS_PATH, build_subscription_payload(subscription, access_token)
        )

    async def send_action(self, action: Action, access_token: str) -> list[Any]:
        """Add a point to the user and show an alert, concurrently.

        Both requests run to completion. If either failed, the first
        failure in [points, alert] order is raised.
        """
        points, alert = build_action_payloads(action, access_token)
        results = await asyncio.gather(
            self.post(POINTS_PATH, points),
            self.post(ALERTS_PATH, alert),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                raise result

        return list(results)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()
