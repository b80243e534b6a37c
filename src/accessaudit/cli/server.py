"""CLI command: accessaudit server — start the web API."""

from __future__ import annotations

import click
from rich.console import Console

from accessaudit.config import AccessAuditConfig

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 8471).",
)
def server(port: int | None) -> None:
    """Start the AccessAudit web API."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install accessaudit[web]"
        )
        raise SystemExit(1)

    config = AccessAuditConfig.load()
    if port is not None:
        config.web_port = port

    console.print(
        f"[bold]AccessAudit[/bold] API starting on "
        f"[cyan]http://{config.web_host}:{config.web_port}/api/docs[/cyan]\n"
    )

    from accessaudit.web.app import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.web_host,
        port=config.web_port,
        log_level="info",
    )
