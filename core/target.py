"""Decoding of the base64-encoded target URL."""

import base64
import binascii

import httpx

from core.exceptions import InvalidProtocol, InvalidTargetEncoding, InvalidTargetURL

ALLOWED_SCHEMES = ("http", "https")


def decode_target(encoded: str) -> str:
    """Decode the ``url`` query parameter into the target URL string.

    Raises:
        InvalidTargetEncoding: the value is not standard base64
    """
    # Unescaped "+" arrives as a space after query-string decoding
    value = encoded.replace(" ", "+")
    try:
        raw = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidTargetEncoding(f"Invalid base64: {e}", encoded) from e

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def parse_target(decoded: str) -> httpx.URL:
    """Parse a decoded target into an absolute http(s) URL.

    Raises:
        InvalidTargetURL: the string is not an absolute URL
        InvalidProtocol: the scheme is anything but http or https
    """
    try:
        url = httpx.URL(decoded)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise InvalidTargetURL(f"Unparseable URL: {e}", decoded) from e

    if not url.scheme:
        raise InvalidTargetURL("URL is not absolute", decoded)
    if url.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidProtocol(f"Scheme not allowed: {url.scheme}", decoded)
    if not url.host:
        raise InvalidTargetURL("URL has no host", decoded)
    return url

