"""Shared fixtures for relay tests."""

import base64
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config


class RecordingLogger:
    """RelayLogger that keeps every event for assertions."""

    def __init__(self) -> None:
        self.relays: list[dict] = []
        self.rejected: list[tuple[int, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_relay(self, target, status, *, filename, content_type, headers=None):
        self.relays.append(
            {
                "target": target,
                "status": status,
                "filename": filename,
                "content_type": content_type,
                "headers": headers,
            }
        )

    def log_rejected(self, status, reason):
        self.rejected.append((status, reason))

    def log_error(self, target, status, message):
        self.errors.append((target, status, message))


class Upstream:
    """Programmable stand-in for the public internet."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = lambda request: streamed(
            200, b"ok"
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


def streamed(
    status: int = 200,
    body: bytes = b"",
    headers: dict[str, str] | list[tuple[str, str]] | None = None,
) -> httpx.Response:
    """Build an upstream response whose body is still unread, like a live socket."""
    return httpx.Response(status, headers=headers, stream=httpx.ByteStream(body))


def encode(url: str) -> str:
    return base64.b64encode(url.encode("utf-8")).decode("ascii")


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def client(logger, upstream):
    app = create_app(Config(), logger, transport=httpx.MockTransport(upstream))
    with TestClient(app) as test_client:
        yield test_client
