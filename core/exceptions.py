"""Custom exception hierarchy for the download relay."""


class RelayError(Exception):
    """Base exception for all relay errors."""


class InvalidTarget(RelayError):
    """Raised when the encoded target cannot be turned into a fetchable URL.

    Attributes:
        value: The offending input (encoded parameter or decoded string)
    """

    def __init__(self, message: str, value: str = "") -> None:
        super().__init__(message)
        self.value = value


class InvalidTargetEncoding(InvalidTarget):
    """Raised when the ``url`` parameter is not valid base64."""


class InvalidTargetURL(InvalidTarget):
    """Raised when the decoded string is not an absolute URL."""


class InvalidProtocol(InvalidTarget):
    """Raised when the target URL uses a scheme other than http/https."""


class UpstreamError(RelayError):
    """Raised when the target server cannot be reached or fails.

    Attributes:
        message: Error message
        status_code: HTTP status code from upstream (optional)
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamConnectionError(UpstreamError):
    """Raised when the connection to the target server cannot be established."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=None)
