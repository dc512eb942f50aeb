"""Raisely to Streamlabs relay - FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import httpx
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse

from relay.channels.streamlabs import StreamlabsChannel
from relay.config import get_settings
from relay.models.config import RelayConfig
from relay.router import EventRouter, create_channel_from_config, load_relay_config

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Configure logging level
    logging.getLogger().setLevel(settings.log_level.upper())

    if app.state.router is None:
        try:
            relay_config = load_relay_config(settings.config_path)
            app.state.router = EventRouter(
                relay_config, create_channel_from_config(relay_config)
            )
            logger.info(
                f"Loaded {len(relay_config.campaigns)} campaign(s) from {settings.config}"
            )
        except FileNotFoundError:
            logger.error(
                f"Relay config not found: {settings.config}. "
                "Create a relay.yaml file or set RELAY_CONFIG environment variable."
            )
        except Exception as e:
            logger.exception(f"Failed to load relay config: {e}")

    logger.info("Relay started")

    yield

    # Cleanup on shutdown
    if app.state.router is not None:
        await app.state.router.channel.aclose()
    logger.info("Relay stopped")


def create_app(
    relay_config: RelayConfig | None = None,
    channel: StreamlabsChannel | None = None,
) -> FastAPI:
    """Build the application.

    Without a relay_config the configuration file named by the settings is
    loaded on startup.
    """
    app = FastAPI(
        title="Raisely Relay",
        description="Forwards Raisely donation webhooks to Streamlabs alerts",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.router = None
    if relay_config is not None:
        app.state.router = EventRouter(
            relay_config, channel or create_channel_from_config(relay_config)
        )

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/campaigns")
    async def list_campaigns(request: Request) -> dict[str, list[str]]:
        """List campaigns that have a Streamlabs token."""
        router: EventRouter | None = request.app.state.router
        if not router:
            return {"campaigns": []}
        return {"campaigns": router.campaigns}

    @app.api_route("/", methods=["POST", "OPTIONS"])
    @app.api_route("/webhook/raisely", methods=["POST", "OPTIONS"])
    async def raisely_webhook(request: Request) -> Response:
        """Receive a Raisely webhook or a browser-fired custom action."""
        return await _process_webhook(request)

    return app


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


async def _process_webhook(request: Request) -> Response:
    router: EventRouter | None = request.app.state.router
    if not router:
        # No allow-list is loaded, so no CORS headers can be chosen
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "success": False,
                "message": "Relay not configured. Check relay.yaml file.",
            },
        )

    origin = request.headers.get("origin")
    body = None if request.method == "OPTIONS" else await _read_body(request)

    try:
        result = await router.handle(request.method, origin, body)
    except httpx.HTTPError as e:
        # Non-200 so Raisely retries the delivery
        logger.exception(f"Failed to send to {router.channel.name}: {e}")
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            headers=router.cors_headers(origin),
            content={"success": False, "message": f"upstream request failed: {e}"},
        )

    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)

    return JSONResponse(
        status_code=result.status_code,
        headers=result.headers,
        content=result.body,
    )


app = create_app()


def run() -> None:
    """Run the application using uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "relay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run()
