"""HTTP fetching utilities for upstream targets."""

from collections.abc import AsyncIterator

import httpx

from core.exceptions import UpstreamConnectionError


class UpstreamClient:
    """Fetch target URLs with streaming bodies."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: httpx.URL, headers: dict[str, str]) -> httpx.Response:
        """Send a GET to the target and return the response with an unread body.

        The caller owns the returned response and must close it, either by
        draining ``stream_body`` or by calling ``close``.

        Raises:
            UpstreamConnectionError: the connection could not be established
        """
        request = self._client.build_request("GET", url, headers=headers)
        try:
            return await self._client.send(request, stream=True)
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise UpstreamConnectionError(f"{type(e).__name__}: {e}") from e

    async def stream_body(self, response: httpx.Response) -> AsyncIterator[bytes]:
        """Yield the upstream body exactly as received on the wire."""
        try:
            async for chunk in response.aiter_raw():
                yield chunk
        finally:
            await response.aclose()

    async def close(self, response: httpx.Response) -> None:
        """Release the upstream connection."""
        await response.aclose()
