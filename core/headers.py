"""Header construction for upstream fetches and relayed downloads."""

import httpx

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Sent identically with every upstream fetch so the request reads as a
# desktop browser navigating from a search result.
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Referer": "https://www.google.com/",
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate, br",
    "Cache-Control": "max-age=0",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "cross-site",
    "Sec-Fetch-User": "?1",
    "Connection": "keep-alive",
}

# Owned by the serving connection, never copied from upstream
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


class HeaderBuilder:
    """Build headers for the upstream fetch and the relayed response."""

    def build_upstream_headers(self) -> dict[str, str]:
        """Return the fixed browser-like header set."""
        return dict(BROWSER_HEADERS)

    def content_type(self, upstream_headers: httpx.Headers) -> str:
        """Return the upstream content type or the octet-stream default."""
        return upstream_headers.get("content-type") or DEFAULT_CONTENT_TYPE

    def build_download_headers(
        self,
        upstream_headers: httpx.Headers,
        filename: str,
        content_type: str,
    ) -> httpx.Headers:
        """Copy upstream headers and force an attachment download."""
        headers = httpx.Headers(
            [
                (key, value)
                for key, value in upstream_headers.multi_items()
                if key.lower() not in HOP_BY_HOP_HEADERS
            ]
        )
        headers["Content-Disposition"] = f'attachment; filename="{filename}"'
        headers["Content-Type"] = content_type
        return headers
