"""FastAPI route handlers."""

from fastapi import Request, Response


async def handle_relay(request: Request) -> Response:
    """Handle the relay endpoint for any path and method."""
    relay_handler = request.app.state.relay_handler
    return await relay_handler.handle(request)
