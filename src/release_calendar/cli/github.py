"""GitHub API commands."""

from datetime import UTC, datetime

import typer
from rich.table import Table

from release_calendar.cli.common import console, create_github_client, run_async_command
from release_calendar.config import OrganizationConfig, get_settings
from release_calendar.github import (
    GitHubAuthenticationError,
    GitHubRateLimitError,
    GitHubReleaseScheduleSource,
    PoolRateLimit,
    RateLimitPool,
)

app = typer.Typer(help="GitHub API commands")

# Below this share of the core quota a full poll of every organization may not finish
LOW_QUOTA_PERCENT = 10.0


def _describe_reset(pool_limit: PoolRateLimit, now: datetime) -> str:
    minutes = max(int((pool_limit.reset_at - now).total_seconds()) // 60, 0)
    return f"{pool_limit.reset_at:%H:%M} UTC (in {minutes} min)"


@app.command("rate-limit")
def show_rate_limit() -> None:
    """Show how much GitHub quota the configured token has left.

    Examples:
        release-calendar github rate-limit
    """

    async def _check() -> None:
        try:
            async with create_github_client(get_settings()) as client:
                snapshot = await client.get_rate_limit()
        except GitHubAuthenticationError:
            console.print("[red]Error:[/red] GitHub rejected the configured token")
            raise typer.Exit(1) from None

        now = datetime.now(UTC)
        table = Table(title="GitHub quota")
        table.add_column("Pool", style="bold")
        table.add_column("Used", justify="right")
        table.add_column("Remaining", justify="right")
        table.add_column("Resets")
        for pool in RateLimitPool:
            pool_limit = snapshot.pools.get(pool)
            if pool_limit is None:
                continue
            style = "red" if pool_limit.is_exhausted else "green"
            table.add_row(
                pool.value,
                f"{pool_limit.used}/{pool_limit.limit}",
                f"[{style}]{pool_limit.remaining}[/{style}]",
                _describe_reset(pool_limit, now),
            )
        console.print(table)

        core = snapshot.get_core()
        if core is not None and core.remaining_percent < LOW_QUOTA_PERCENT:
            console.print(
                f"[yellow]Only {core.remaining_percent:.1f}% of the core quota is left;"
                " polls may fail until it resets[/yellow]"
            )

    run_async_command(_check(), error_prefix="Rate limit check failed")


@app.command("repositories")
def list_repositories(
    organization: str = typer.Argument(help="GitHub organization (e.g., spring-projects)"),
) -> None:
    """List the projects an organization contributes to the calendar.

    Configured transforms for the organization are applied.

    Examples:
        release-calendar github repositories spring-projects
    """

    async def _list() -> None:
        settings = get_settings()
        config = next(
            (org for org in settings.github.organizations if org.name == organization),
            OrganizationConfig(name=organization),
        )
        try:
            async with create_github_client(settings) as client:
                source = GitHubReleaseScheduleSource(
                    client, [config], timezone=settings.release.timezone
                )
                projects = await source.get_projects(config)
        except GitHubRateLimitError as e:
            console.print("[red]Error:[/red] Rate limit exceeded")
            if e.reset_at:
                console.print(f"  Resets at: {e.reset_at.strftime('%H:%M:%S UTC')}")
            raise typer.Exit(1) from None

        table = Table(title=f"Projects in {organization}")
        table.add_column("Repository", style="cyan")
        table.add_column("Project")
        table.add_column("Visibility")
        table.add_column("Commercial ID")
        for project in projects:
            table.add_row(
                project.repository.name,
                project.name,
                project.repository.visibility.value,
                project.commercial_project_id or "",
            )
        console.print(table)
        console.print(f"{len(projects)} project(s)")

    run_async_command(_list(), error_prefix="Failed to list repositories")
