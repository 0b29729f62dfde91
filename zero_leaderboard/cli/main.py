"""CLI entry point for the Zero token leaderboard.

Usage:
    zero-leaderboard serve --port 8000
    zero-leaderboard show --limit 20
    zero-leaderboard show --output json --save results/leaderboard.json
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..core.config import LeaderboardConfig
from ..core.exceptions import LeaderboardError
from ..orchestrator import build_leaderboard
from ..output.audit_trail import AuditTrailFormatter
from ..output.formatters import JSONFormatter, TableFormatter

# Initialize app
app = typer.Typer(
    name="zero-leaderboard",
    help="Zero token holder leaderboard",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def load_config(env_file: Optional[Path], production: Optional[bool] = None) -> LeaderboardConfig:
    try:
        config = LeaderboardConfig.load(env_file)
    except LeaderboardError as e:
        console.print(f"[red]{escape(e.message)}[/]")
        raise typer.Exit(1)
    if production is not None:
        config = replace(config, production=production)
    return config


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    production: Optional[bool] = typer.Option(
        None,
        "--production/--development",
        help="Override ZERO_PRODUCTION (enables the www redirect)",
    ),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Path to .env file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Serve the leaderboard page."""
    from ..web.app import create_app

    setup_logging(verbose)
    config = load_config(env_file, production)
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        log_level="debug" if verbose else "info",
        proxy_headers=True,
    )


@app.command()
def show(
    output: str = typer.Option(
        "table",
        "--output", "-o",
        help="Output format: table, json",
    ),
    limit: Optional[int] = typer.Option(
        None,
        "--limit", "-n",
        help="Show only the top N holders (table output)",
    ),
    save: Optional[Path] = typer.Option(
        None,
        "--save", "-s",
        help="Save output to file",
    ),
    audit: bool = typer.Option(
        False,
        "--audit", "-a",
        help="Include the upstream call log",
    ),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Path to .env file"),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Fetch the leaderboard once and print it.

    Examples:
        zero-leaderboard show
        zero-leaderboard show --output json --audit
    """
    setup_logging(verbose)
    config = load_config(env_file)

    output_lower = output.lower()
    if output_lower not in ("table", "json"):
        console.print(f"[red]Invalid output format: {output}[/]")
        raise typer.Exit(1)

    try:
        view = asyncio.run(build_leaderboard(config))
    except LeaderboardError as e:
        console.print(f"[red]Error: {escape(e.message)}[/]")
        raise typer.Exit(1)

    if output_lower == "json":
        formatter = JSONFormatter(include_audit=audit)
    else:
        formatter = TableFormatter(limit=limit)
    print(formatter.format(view))

    if audit and output_lower == "table":
        console.print(AuditTrailFormatter().format_summary(view), markup=False)

    if save:
        save.parent.mkdir(parents=True, exist_ok=True)
        save_path = save.with_suffix(".json" if output_lower == "json" else ".txt")
        formatter.format_to_file(view, str(save_path))
        console.print(f"[green]Saved to {save_path}[/]")


@app.command()
def version() -> None:
    """Show version information."""
    from .. import __version__
    console.print(f"Zero Leaderboard v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
