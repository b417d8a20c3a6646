"""CLI entry point for download-relay."""

import sys
from datetime import datetime

from rich.console import Console

from app import create_app
from core.config import CONFIG_FILE, load_config
from ui.console import ConsoleLogger
from ui.dashboard import Dashboard
from ui.log_utils import CLI_LOG_FILE, clear_logs, write_cli_log

console = Console()


def main():
    """Main CLI entry point."""
    headless = False

    # Handle CLI arguments
    if len(sys.argv) > 1:
        arg = sys.argv[1]

        if arg == "--config":
            console.print(f"[bold]Config:[/bold] {CONFIG_FILE}")
            console.print(f"[bold]Log:[/bold] {CLI_LOG_FILE}")
            return

        if arg in ("--help", "-h"):
            _print_help()
            return

        if arg == "--headless":
            headless = True
        else:
            console.print(f"[red][ERROR][/red] Unknown option: {arg}")
            _print_help()
            sys.exit(2)

    config = load_config()

    # Clear previous logs and start the logger
    clear_logs()
    dashboard = None
    if headless:
        logger = ConsoleLogger(config, console)
    else:
        dashboard = Dashboard(config)
        logger = dashboard

    import uvicorn

    app = create_app(config, logger)

    uvicorn_config = uvicorn.Config(
        app,
        host=config.proxy.host,
        port=config.proxy.port,
        log_level="warning",
        timeout_keep_alive=config.limits.keep_alive_timeout,
    )
    server = uvicorn.Server(uvicorn_config)

    if dashboard:
        dashboard.start()
    else:
        console.print(
            f"[bold cyan]Download Relay[/bold cyan] listening on "
            f"http://{config.proxy.host}:{config.proxy.port}"
        )
    start_time = datetime.now()
    write_cli_log("STARTUP", "Relay started", port=config.proxy.port)
    try:
        server.run()
    finally:
        duration = datetime.now() - start_time
        write_cli_log("SHUTDOWN", "Relay stopped", duration=str(duration))
        if dashboard:
            dashboard.stop()


def _print_help():
    """Print help message."""
    help_text = """
[bold cyan]Download Relay[/bold cyan]

Fetches a base64-encoded URL and returns it as a forced file download.

[bold]Usage:[/bold]
    download-relay                 Start with live dashboard
    download-relay --headless      Start with plain console output
    download-relay --config        Show config and log locations
    download-relay --help          Show this help

[bold]Request:[/bold]
    GET /?url=<base64 of http(s) URL>
"""
    console.print(help_text)


if __name__ == "__main__":
    main()
