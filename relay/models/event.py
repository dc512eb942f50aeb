"""Raisely webhook envelope and event records.

Only the fields the relay reads are modelled, anything else Raisely sends
is ignored.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    """A Raisely event, e.g. donation.succeeded."""

    type: str = Field(description="Event type, e.g. donation.succeeded/action.taken")
    source: str = Field(description="Event source, e.g. campaign:<uuid>")
    data: dict[str, Any] = Field(default_factory=dict, description="Event-specific record")

    @property
    def campaign_uuid(self) -> str:
        parts = self.source.split(":")
        return parts[1] if len(parts) > 1 else ""


class WebhookEnvelope(BaseModel):
    """Body of an inbound webhook request."""

    secret: str = ""
    data: Event


class Supporter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    uuid: str = ""
    preferred_name: str | None = Field(default=None, alias="preferredName")
    first_name: str | None = Field(default=None, alias="firstName")
    full_name: str | None = Field(default=None, alias="fullName")


class Donation(BaseModel):
    """A donation or subscription record."""

    uuid: str = ""
    user: Supporter = Field(default_factory=Supporter)
    amount: int | float = 0
    currency: str = ""
    message: str | None = None
    anonymous: bool = False

    @field_validator("user", mode="before")
    @classmethod
    def _missing_user(cls, value: Any) -> Any:
        return {} if value is None else value


# Subscriptions carry the same fields the relay needs from a donation
Subscription = Donation


class Action(BaseModel):
    """Custom event fired from the browser."""

    name: str = ""
    username: str = ""
    message: str = ""
