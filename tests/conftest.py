"""Shared test fixtures."""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from relay.channels.streamlabs import StreamlabsChannel
from relay.models.config import RelayConfig

SECRET = "sh!"
CAMPAIGN_UUID = "830a1280-6e17-11ea-858b-f7d7d2f43749"
ACCESS_TOKEN = "test-token"
ORIGIN = "cause-for-hope.raisely.com"

DONATION = {
    "uuid": "<test-uuid>",
    "user": {"firstName": "Alexandria", "uuid": "user-uuid"},
    "amount": 2050,
    "currency": "AUD",
    "message": "Good luck!",
}


class StreamlabsRecorder:
    """Fake Streamlabs API that records every form it receives."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict[str, httpx.Response] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.responses:
            return self.responses[request.url.path]
        return httpx.Response(200, json={"success": True, "path": request.url.path})

    def forms(self, path: str) -> list[dict[str, str]]:
        return [
            dict(httpx.QueryParams(r.content.decode()))
            for r in self.requests
            if r.url.path == path
        ]


@pytest.fixture
def relay_config() -> RelayConfig:
    return RelayConfig(
        auth_secret=SECRET,
        allowed_origins=[ORIGIN, "localhost"],
        campaigns={CAMPAIGN_UUID: ACCESS_TOKEN},
    )


@pytest.fixture
def streamlabs() -> StreamlabsRecorder:
    return StreamlabsRecorder()


@pytest.fixture
async def channel(streamlabs):
    _channel = StreamlabsChannel(transport=httpx.MockTransport(streamlabs))
    yield _channel
    await _channel.aclose()


@pytest.fixture
def app(relay_config, channel):
    from relay.main import create_app

    return create_app(relay_config, channel)


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def envelope(event_type: str, data: dict, secret: str = SECRET, campaign: str = CAMPAIGN_UUID) -> dict:
    return {
        "secret": secret,
        "data": {
            "type": event_type,
            "source": f"campaign:{campaign}",
            "data": data,
        },
    }
