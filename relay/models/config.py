"""Relay configuration models."""

from pydantic import BaseModel, Field


class RelayConfig(BaseModel):
    """Static relay configuration, read once at startup."""

    auth_secret: str = Field(description="Shared secret expected in every webhook body")
    allowed_origins: list[str] = Field(
        min_length=1,
        description="CORS allow-list, the first entry is the fallback origin",
    )
    campaigns: dict[str, str] = Field(
        default_factory=dict,
        description="Raisely campaign uuid -> Streamlabs access token",
    )
    streamlabs_url: str = Field(default="https://streamlabs.com")
    timeout: float = Field(default=30.0, gt=0)

    def token_for(self, campaign_uuid: str) -> str | None:
        return self.campaigns.get(campaign_uuid) or None
