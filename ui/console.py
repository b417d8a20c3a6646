"""Headless relay logger for non-interactive runs."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape

from core.config import Config
from ui.log_utils import write_cli_log, write_relay_log


class ConsoleLogger:
    """Print one line per relay event instead of a live dashboard."""

    def __init__(self, config: Config, console: Console | None = None):
        self.config = config
        self.console = console or Console()

    def log_relay(
        self,
        target: str,
        status: int,
        *,
        filename: str,
        content_type: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._print(
            f"[green]{status}[/green] {escape(target)} "
            f"[dim]-> {escape(filename)} ({escape(content_type)})[/dim]"
        )
        write_cli_log("RELAY", target, status=status, filename=filename)
        if self.config.proxy.debug:
            write_relay_log(
                target, status, filename=filename, content_type=content_type, headers=headers
            )

    def log_rejected(self, status: int, reason: str) -> None:
        self._print(f"[yellow]{status}[/yellow] {escape(reason)}")
        write_cli_log("REJECTED", reason, status=status)

    def log_error(self, target: str, status: int, message: str) -> None:
        self._print(f"[red]{status}[/red] {escape(target)}: {escape(message)}")
        write_cli_log("ERROR", message[:200], target=target, status=status)

    def _print(self, line: str) -> None:
        timestamp = datetime.now().strftime("%H:%M:%S")
        self.console.print(f"[dim]{timestamp}[/dim] {line}", highlight=False)
