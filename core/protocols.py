"""Shared protocol definitions."""

from typing import Protocol


class RelayLogger(Protocol):
    """Protocol for relay event logging (Dashboard, ConsoleLogger)."""

    def log_relay(
        self,
        target: str,
        status: int,
        *,
        filename: str,
        content_type: str,
        headers: dict[str, str] | None = None,
    ) -> None: ...
    def log_rejected(self, status: int, reason: str) -> None: ...
    def log_error(self, target: str, status: int, message: str) -> None: ...
