"""Relay pipeline: decode the target, fetch it, force a download."""

from typing import Any

import httpx
from fastapi import Request, Response
from fastapi.responses import PlainTextResponse, StreamingResponse
from starlette.background import BackgroundTask

from core.exceptions import (
    InvalidProtocol,
    InvalidTarget,
    UpstreamConnectionError,
    UpstreamError,
)
from core.filename import derive_filename
from core.headers import HeaderBuilder
from core.protocols import RelayLogger
from core.target import decode_target, parse_target
from services.upstream import UpstreamClient

METHOD_NOT_ALLOWED = "Method Not Allowed"
MISSING_URL = 'Missing "url" parameter (must be base64 encoded)'
INVALID_URL = "Invalid URL format"
INVALID_PROTOCOL = "Invalid protocol. Only HTTP/HTTPS are allowed."
CONNECT_FAILED = "Failed to connect to target server"
INTERNAL_ERROR = "Internal Server Error"


class RelayHandler:
    """Relay a base64-encoded target URL back to the caller as a download."""

    def __init__(
        self,
        upstream: UpstreamClient,
        logger: RelayLogger,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._upstream = upstream
        self._logger = logger
        self._headers = header_builder or HeaderBuilder()

    async def handle(self, request: Request) -> Response:
        """Handle one inbound request. Always returns a response."""
        if request.method != "GET":
            self._log("log_rejected", 405, f"method {request.method}")
            return PlainTextResponse(
                METHOD_NOT_ALLOWED, status_code=405, headers={"Allow": "GET"}
            )

        # First value wins when the parameter is repeated
        values = request.query_params.getlist("url")
        encoded = values[0] if values else ""
        if not encoded:
            self._log("log_rejected", 400, "missing url parameter")
            return PlainTextResponse(MISSING_URL, status_code=400)

        try:
            target = decode_target(encoded)
            url = parse_target(target)
        except InvalidProtocol as e:
            self._log("log_rejected", 400, str(e))
            return PlainTextResponse(INVALID_PROTOCOL, status_code=400)
        except InvalidTarget as e:
            self._log("log_rejected", 400, str(e))
            return PlainTextResponse(INVALID_URL, status_code=400)

        try:
            return await self._relay(url, target)
        except UpstreamConnectionError as e:
            self._log("log_error", target, 502, str(e))
            return PlainTextResponse(CONNECT_FAILED, status_code=502)
        except UpstreamError as e:
            status = e.status_code or 502
            self._log("log_error", target, status, str(e))
            return PlainTextResponse(str(e), status_code=status)
        except Exception as e:
            self._log("log_error", target, 500, f"{type(e).__name__}: {e}")
            return PlainTextResponse(INTERNAL_ERROR, status_code=500)

    async def _relay(self, url: httpx.URL, target: str) -> Response:
        """Fetch the target and wrap its body in a forced-download response.

        Raises:
            UpstreamConnectionError: the target server could not be reached
            UpstreamError: the target answered with a non-2xx status
        """
        response = await self._upstream.fetch(url, self._headers.build_upstream_headers())

        try:
            if not response.is_success:
                raise UpstreamError(
                    f"Upstream error: {response.status_code} {response.reason_phrase}",
                    status_code=response.status_code,
                )

            content_type = self._headers.content_type(response.headers)
            filename = derive_filename(url.path, content_type)
            headers = self._headers.build_download_headers(
                response.headers, filename, content_type
            )

            relayed = StreamingResponse(
                self._upstream.stream_body(response),
                status_code=response.status_code,
                background=BackgroundTask(self._upstream.close, response),
            )
            for key, value in headers.multi_items():
                relayed.headers.append(key, value)
        except Exception:
            await self._upstream.close(response)
            raise

        self._log(
            "log_relay",
            target,
            response.status_code,
            filename=filename,
            content_type=content_type,
            headers=dict(response.headers),
        )
        return relayed

    def _log(self, event: str, *args: Any, **kwargs: Any) -> None:
        """Forward an event to the logger; a failing log write never fails the relay."""
        try:
            getattr(self._logger, event)(*args, **kwargs)
        except OSError:
            pass
