"""Download filename derivation."""

import re

DEFAULT_FILENAME = "download"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def derive_filename(path: str, content_type: str) -> str:
    """Derive a safe attachment filename from a URL path and content type.

    The last path segment is used as-is when present, an extension is added
    for extensionless HTML and image responses, and anything outside
    ``[A-Za-z0-9._-]`` is replaced with ``_``.
    """
    filename = path.rsplit("/", 1)[-1] or DEFAULT_FILENAME
    media_type = content_type.lower()

    if "." not in filename:
        if media_type.startswith("text/html"):
            filename += ".html"
        elif media_type.startswith("image/"):
            subtype = media_type.split("/", 1)[1].split(";", 1)[0].strip()
            if subtype:
                filename += f".{subtype}"

    return _UNSAFE_CHARS.sub("_", filename)
