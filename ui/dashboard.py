"""Real-time CLI dashboard for relay monitoring."""

from datetime import datetime
from threading import Lock

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import Config
from ui.log_utils import write_cli_log, write_relay_log

console = Console()


class RelayInfo:
    """Info about a single relayed download."""

    def __init__(
        self,
        target: str,
        status: int,
        filename: str,
        content_type: str,
        timestamp: datetime,
    ):
        self.target = target[:80] + "..." if len(target) > 80 else target
        self.status = status
        self.filename = filename
        self.content_type = content_type.split(";", 1)[0]
        self.timestamp = timestamp


class Dashboard:
    """Real-time dashboard showing recent relays and errors."""

    def __init__(self, config: Config):
        self.config = config
        self._lock = Lock()
        self._relays: list[RelayInfo] = []
        self._max_relays = 10
        self._counts = {"relayed": 0, "rejected": 0, "errors": 0}
        self._errors: list[str] = []
        self._live: Live | None = None

    @property
    def counts(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counts)

    @property
    def recent_relays(self) -> list[RelayInfo]:
        with self._lock:
            return list(self._relays)

    @property
    def recent_errors(self) -> list[str]:
        with self._lock:
            return list(self._errors)

    def start(self) -> "Dashboard":
        """Start the live dashboard."""
        self._live = Live(
            self._build_layout(),
            console=console,
            refresh_per_second=4,
            screen=False,
        )
        self._live.start()
        return self

    def stop(self) -> None:
        """Stop the live dashboard."""
        if self._live:
            self._live.stop()

    def log_relay(
        self,
        target: str,
        status: int,
        *,
        filename: str,
        content_type: str,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Log a successfully relayed download."""
        with self._lock:
            self._counts["relayed"] += 1
            info = RelayInfo(
                target=target,
                status=status,
                filename=filename,
                content_type=content_type,
                timestamp=datetime.now(),
            )
            self._relays.insert(0, info)
            self._relays = self._relays[: self._max_relays]

            write_cli_log("RELAY", target, status=status, filename=filename)
            if self.config.proxy.debug:
                write_relay_log(
                    target,
                    status,
                    filename=filename,
                    content_type=content_type,
                    headers=headers,
                )

            self._refresh()

    def log_rejected(self, status: int, reason: str) -> None:
        """Log a request rejected before any upstream fetch."""
        with self._lock:
            self._counts["rejected"] += 1
            write_cli_log("REJECTED", reason, status=status)
            self._refresh()

    def log_error(self, target: str, status: int, message: str) -> None:
        """Log an upstream or internal error."""
        with self._lock:
            self._counts["errors"] += 1
            truncated = message[:60] + "..." if len(message) > 60 else message
            self._errors.insert(0, f"{status} {truncated}")
            self._errors = self._errors[:3]
            write_cli_log("ERROR", message[:200], target=target, status=status)
            self._refresh()

    def _refresh(self) -> None:
        """Refresh the display."""
        if self._live:
            self._live.update(self._build_layout())

    def _build_layout(self) -> Layout:
        """Build the dashboard layout."""
        layout = Layout()

        layout.split_column(
            Layout(name="header", size=3),
            Layout(name="relays"),
            Layout(name="footer", size=5),
        )

        layout["header"].update(self._build_header())
        layout["relays"].update(self._build_relays_panel())
        layout["footer"].update(self._build_footer())

        return layout

    def _build_header(self) -> Panel:
        """Build header with stats."""
        stats = Text()
        stats.append("Download Relay", style="bold cyan")
        stats.append("  |  ")
        stats.append(f"Relayed: {self._counts['relayed']}", style="green")
        stats.append("  |  ")
        stats.append(f"Rejected: {self._counts['rejected']}", style="yellow")
        stats.append("  |  ")
        stats.append(f"Errors: {self._counts['errors']}", style="red")
        stats.append("  |  ")
        stats.append(f"Port: {self.config.proxy.port}", style="dim")

        return Panel(stats, style="cyan")

    def _build_relays_panel(self) -> Panel:
        """Build recent relays panel."""
        if self._relays:
            table = Table(show_header=True, header_style="bold", expand=True, box=None)
            table.add_column("Time", style="dim", width=8)
            table.add_column("Status", width=6)
            table.add_column("Target", ratio=3)
            table.add_column("File", ratio=1)
            table.add_column("Type", ratio=1, style="dim")

            for relay in self._relays:
                table.add_row(
                    relay.timestamp.strftime("%H:%M:%S"),
                    str(relay.status),
                    Text(relay.target),
                    Text(relay.filename),
                    Text(relay.content_type),
                )

            content = table
        else:
            content = Text("Waiting for requests...", style="dim")

        return Panel(content, title="[green]Recent Downloads[/green]", border_style="green")

    def _build_footer(self) -> Panel:
        """Build footer with errors and usage hint."""
        if self._errors:
            error_text = Text()
            for err in self._errors:
                error_text.append("! ", style="red bold")
                error_text.append(err + "\n", style="red")
            content = error_text
        else:
            content = Text(
                f"GET http://{self.config.proxy.host}:{self.config.proxy.port}/?url=<base64 url>",
                style="dim",
            )

        return Panel(content, title="[dim]Status[/dim]", border_style="dim")
