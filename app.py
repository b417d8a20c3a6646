"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from api.handlers import handle_relay
from core.config import Config
from core.headers import HeaderBuilder
from core.protocols import RelayLogger
from services.relay_service import RelayHandler
from services.upstream import UpstreamClient

RELAY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Config,
    logger: RelayLogger,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(
            max_connections=config.limits.max_connections,
            max_keepalive_connections=config.limits.max_keepalive_connections,
        )
        client = httpx.AsyncClient(
            timeout=httpx.Timeout(None, connect=config.upstream.connect_timeout),
            limits=limits,
            follow_redirects=True,
            transport=transport,
        )
        app.state.relay_handler = RelayHandler(
            upstream=UpstreamClient(client),
            logger=logger,
            header_builder=HeaderBuilder(),
        )
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(
        title="Download Relay",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Every method reaches the relay so it answers 405 itself
    app.add_route("/{path:path}", handle_relay, methods=RELAY_METHODS)

    return app
