"""ABOUTME: CLI entry point for clibdb commands.
ABOUTME: Provides locate, check, and purchases commands via Typer."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from clibdb.api import get_purchases
from clibdb.config import ConnectionConfig, build_connection_config, load_connection_config
from clibdb.gateway.errors import GatewayError
from clibdb.gateway.locator import find_installations, resolve_database_path
from clibdb.gateway.schema import table_exists
from clibdb.gateway.session import session_scope
from clibdb.logs import init_logging
from clibdb.settings import settings

app = typer.Typer(
    name="clibdb",
    help="Read the purchase ledger of an Aspel SAE Firebird database.",
    no_args_is_help=True,
)

console = Console()


def _load_profile(profile: Path | None) -> ConnectionConfig | None:
    """Load the connection profile if one was given."""
    if profile is None:
        return None
    try:
        return load_connection_config(profile)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from None


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Initialize logging from the bundled configuration."""
    if settings.log_config_path.exists():
        init_logging(settings.log_config_path, verbose=verbose)


@app.command()
def locate() -> None:
    """Show the installations found and the database path that would be used."""
    installations = sorted(find_installations(settings.INSTALL_ROOT, settings.VERSION_PREFIX), reverse=True)
    if installations:
        console.print(f"[green]Found {len(installations)} installations in {settings.INSTALL_ROOT}:[/]")
        for version, folder in installations:
            console.print(f"  {version.major}.{version.minor:02d}: {folder}")
    else:
        console.print(f"[yellow]No installations found in {settings.INSTALL_ROOT}[/]")

    path = resolve_database_path(settings)
    status = "[green]exists[/]" if path.exists() else "[red]missing[/]"
    console.print(f"Database: {path} ({status})")


@app.command()
def check(
    profile: Path | None = typer.Option(None, "--profile", "-p", help="YAML connection profile"),
) -> None:
    """Connect to the database and verify the purchase table exists."""
    config = _load_profile(profile) or build_connection_config()
    table = settings.purchases_table
    try:
        with session_scope(config) as session:
            found = table_exists(session, table)
    except GatewayError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from None

    if not found:
        console.print(f"[red]Table {table} not found in {config.database_path}[/]")
        raise typer.Exit(1)
    console.print(f"[green]Table {table} found in {config.database_path}[/]")


@app.command()
def purchases(
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the raw payload as JSON"),
    profile: Path | None = typer.Option(None, "--profile", "-p", help="YAML connection profile"),
) -> None:
    """Fetch pending purchases, the summary and per-series statistics."""
    payload = get_purchases(_load_profile(profile))
    if "error" in payload:
        console.print(f"[red]Error:[/] {payload['error']}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(payload))
        return

    pending = Table(title=f"Pending purchases ({len(payload['records'])})")
    for column in ("Key", "Series", "Document date", "Preparation date"):
        pending.add_column(column)
    for record in payload["records"]:
        pending.add_row(
            record["key"],
            record["series"],
            record["document_date"] or "",
            record["preparation_date"] or "",
        )
    console.print(pending)

    stats = Table(title="By series")
    for column in ("Series", "With document", "Without document", "Total"):
        stats.add_column(column)
    for row in payload["statistics"]:
        stats.add_row(row["series"], str(row["with_document"]), str(row["without_document"]), str(row["total"]))
    console.print(stats)
    console.print(f"{len(payload['summary'])} purchases not cancelled")


if __name__ == "__main__":
    app()
