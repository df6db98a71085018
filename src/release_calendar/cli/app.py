"""Main CLI application for Release Calendar."""

import json
from pathlib import Path
from typing import Annotated

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from release_calendar import __version__
from release_calendar.cli import github as github_cmd
from release_calendar.cli.common import (
    OutputFormat,
    OutputFormatOption,
    build_updater,
    create_github_client,
    run_async_command,
)
from release_calendar.config import get_settings
from release_calendar.logging import setup_logging
from release_calendar.release import InMemoryReleaseRepository, ReleaseUpdateScheduler
from release_calendar.schemas import Release, ReleaseStatus
from release_calendar.web import create_app

app = typer.Typer(
    name="release-calendar",
    help="Calendar of upcoming and past project releases.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"release-calendar version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """Release Calendar - Aggregate release schedules and publish them as calendars."""
    settings = get_settings()
    log_config = settings.logging

    # Setup logging with CLI overrides
    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default from settings)"),
) -> None:
    """Serve /releases and /ical, refreshing releases periodically.

    Examples:
        release-calendar serve
        release-calendar serve --host 0.0.0.0 --port 9000
    """
    settings = get_settings()
    repository = InMemoryReleaseRepository()
    github_client = create_github_client(settings)
    updater = build_updater(settings, github_client, repository)
    scheduler = ReleaseUpdateScheduler(updater, settings.release.update_interval_seconds)
    web_app = create_app(settings, repository, scheduler, on_shutdown=[github_client.close])
    uvicorn.run(
        web_app,
        host=host or settings.web.host,
        port=port or settings.web.port,
        log_config=None,
    )


def _status_style(release: Release) -> str:
    match release.status:
        case ReleaseStatus.CLOSED:
            return "[green]CLOSED[/green]"
        case ReleaseStatus.OPEN:
            return "[yellow]OPEN[/yellow]"
        case _:
            return str(release.status)


@app.command()
def poll(output_format: OutputFormatOption = OutputFormat.TEXT) -> None:
    """Run one update cycle and print the merged releases.

    Examples:
        release-calendar poll
        release-calendar poll --format json
    """

    async def _poll() -> list[Release]:
        settings = get_settings()
        async with create_github_client(settings) as client:
            updater = build_updater(settings, client, InMemoryReleaseRepository())
            return await updater.update_releases()

    releases = run_async_command(_poll(), error_prefix="Poll failed")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in releases]))
        return

    table = Table(title="Releases")
    table.add_column("Project", style="cyan")
    table.add_column("Release")
    table.add_column("Date")
    table.add_column("Status")
    table.add_column("Type")
    for release in sorted(releases, key=lambda r: (r.date, r.project)):
        table.add_row(
            release.project,
            release.name,
            release.date.isoformat(),
            _status_style(release),
            release.type.value,
        )
    console.print(table)
    console.print(f"{len(releases)} release(s)")


# Register subcommands
app.add_typer(github_cmd.app, name="github")


if __name__ == "__main__":
    app()
