"""
emailbuddy CLI - run and inspect the local companion service.

Commands:
    emailbuddy serve              Start the HTTP API (host/port from config.json)
    emailbuddy rewrite TEXT       Rewrite a draft from the terminal
    emailbuddy doctor             Check the local Ollama setup
    emailbuddy config             Print the effective configuration
"""

import asyncio
import json
import logging

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import load_config
from .orchestration import AllProvidersFailedError, RewriteRequest, rewrite_email
from .providers import DEFAULT_LOCAL_MODEL, build_provider_registry
from .storage import config_path
from .style import MODES
from .system_checks import get_system_checks

app = typer.Typer(help="EmailBuddy companion service")
console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


# =============================================================================
# SERVE
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option(None, help="Bind address (default: config.json host)"),
    port: int = typer.Option(None, help="Port (default: config.json port)"),
    log_level: str = typer.Option("info", help="Logging level"),
):
    """Start the companion HTTP API."""
    _configure_logging(log_level)
    config = load_config()
    bind_host = host or config.host
    bind_port = port or config.port

    console.print(f"\n[bold blue]emailbuddy serve[/bold blue]")
    console.print(f"Listening on http://{bind_host}:{bind_port}/v1\n")

    uvicorn.run(
        "emailbuddy.api.gateway:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        log_level=log_level.lower(),
    )


# =============================================================================
# REWRITE
# =============================================================================


@app.command()
def rewrite(
    text: str = typer.Argument(help="Draft email text"),
    mode: str = typer.Option(
        None, help=f"Style mode ({', '.join(MODES)}, or any mode section in STYLE.md)"
    ),
    log_level: str = typer.Option("warning", help="Logging level"),
):
    """Rewrite a draft with the configured providers."""
    _configure_logging(log_level)
    if not text.strip():
        console.print("[bold red]Error:[/bold red] text is required")
        raise typer.Exit(1)

    try:
        result = asyncio.run(
            rewrite_email(
                RewriteRequest(text=text, mode=mode),
                build_provider_registry(),
                request_id="cli",
                wait_for_history=True,
            )
        )
    except AllProvidersFailedError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(result.rewritten_text, markup=False, highlight=False)
    console.print(
        f"\n[dim]mode={result.applied_mode} provider={result.provider_used}[/dim]"
    )
    for note in result.notes:
        console.print(f"[yellow]{escape(note)}[/yellow]")


# =============================================================================
# DOCTOR
# =============================================================================


@app.command()
def doctor(
    model: str = typer.Option(DEFAULT_LOCAL_MODEL, help="Local model to look for"),
):
    """Check that Ollama is installed, serving, and has the model pulled."""
    console.print(f"\n[bold blue]emailbuddy doctor[/bold blue]")
    checks = asyncio.run(get_system_checks(model))

    table = Table(title="Doctor Report")
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Details")

    def status(ok: bool) -> str:
        return "[green]PASS[/green]" if ok else "[red]FAIL[/red]"

    table.add_row(
        "ollama installed",
        status(checks["ollamaInstalled"]),
        checks["ollamaVersion"]
        or ("installed" if checks["ollamaInstalled"] else "ollama not found on PATH"),
    )
    table.add_row(
        "ollama serve",
        status(checks["ollamaServeReachable"]),
        "run `ollama serve`" if not checks["ollamaServeReachable"] else "reachable",
    )
    table.add_row(
        "model pulled",
        status(checks["ollamaModelPulled"]),
        checks["defaultLocalModel"],
    )
    console.print(table)

    if not all(
        checks[k] for k in ("ollamaInstalled", "ollamaServeReachable", "ollamaModelPulled")
    ):
        console.print(
            "\n[yellow]Local rewriting unavailable; cloud providers are still tried.[/yellow]"
        )
    else:
        console.print("\n[bold green]All checks passed![/bold green]")


# =============================================================================
# CONFIG
# =============================================================================


@app.command()
def config():
    """Print the effective configuration."""
    console.print(f"[dim]{config_path()}[/dim]")
    console.print_json(json.dumps(load_config().to_wire()))


@app.command()
def version():
    """Show emailbuddy version."""
    console.print(f"emailbuddy v{__version__}")


if __name__ == "__main__":
    app()
