"""Configuration settings for Release Calendar."""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RepositoryTransform(BaseModel):
    """Per-repository override of the derived project name and commercial ID."""

    repository: str = Field(description="Repository name within the organization")
    display_name: str | None = Field(
        default=None,
        description="Project name to use instead of the one derived from the repository",
    )
    commercial_project_id: str | None = Field(
        default=None,
        description="Identifier of the project on the enterprise site",
    )


class OrganizationConfig(BaseModel):
    """A GitHub organization whose repositories are scanned for milestones."""

    name: str = Field(description="GitHub organization (e.g., 'spring-projects')")
    transforms: list[RepositoryTransform] = Field(
        default_factory=list,
        description="Per-repository name and commercial ID overrides",
    )


class GitHubConfig(BaseModel):
    """Configuration for the GitHub release schedule source."""

    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to each GitHub API request",
    )
    organizations: list[OrganizationConfig] = Field(
        default_factory=lambda: [
            OrganizationConfig(name="spring-projects"),
            OrganizationConfig(name="spring-cloud"),
        ],
        description="Organizations whose repositories are polled",
    )


class JiraConfig(BaseModel):
    """Configuration for the Jira release schedule source."""

    enabled: bool = Field(default=False, description="Poll Jira for project versions")
    url: str = Field(
        default="https://jira.spring.io",
        description="Base URL of the Jira instance",
    )
    project_keys: list[str] = Field(
        default_factory=list,
        description="Project keys to include (empty = all projects)",
    )
    timeout_seconds: float = Field(default=30.0, gt=0)


class ICalProjectConfig(BaseModel):
    """A project whose releases are published as an iCalendar feed."""

    name: str = Field(description="Project name (also stripped from event summaries)")
    calendar_url: str = Field(description="URL of the .ics feed")


class ICalConfig(BaseModel):
    """Configuration for the iCalendar release schedule source."""

    projects: list[ICalProjectConfig] = Field(
        default_factory=list,
        description="Calendar feeds to poll",
    )
    timeout_seconds: float = Field(default=30.0, gt=0)


class ReleaseConfig(BaseModel):
    """Configuration for release aggregation and publication."""

    update_interval_seconds: int = Field(
        default=300,
        ge=1,
        description="Seconds between poll cycles",
    )
    timezone: str = Field(
        default="Europe/London",
        description="Time zone in which milestone due dates are published",
    )
    project_aliases: dict[str, str] = Field(
        default_factory=dict,
        description="Project name -> published name",
    )


class WebConfig(BaseModel):
    """Configuration for the HTTP server."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080, ge=1, le=65535)
    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: ["https://spring.io", "https://enterprise.spring.io"],
        description="Origins allowed to read /releases and /ical cross-origin",
    )
    calendar_name: str = Field(
        default="Spring",
        description="Prefix of the published iCalendar name",
    )


class LoggingConfig(BaseModel):
    """Optional log file written alongside the console output."""

    log_file: str | None = Field(
        default=None,
        description="Also log to this file, from DEBUG up",
    )
    rotation: str = Field(default="10 MB", description="Size or age at which the file rotates")
    retention: str = Field(default="7 days", description="Age after which rotated files are deleted")
    serialize: bool = Field(default=False, description="Write the file as JSON lines")


class Settings(BaseSettings):
    """Release Calendar settings.

    Read from the environment and an optional ``.env`` file. Nested sections
    use ``__`` as delimiter, e.g. ``RELEASE__UPDATE_INTERVAL_SECONDS=60``.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    github_token: str = Field(
        default="",
        description="Token for the GitHub API; unauthenticated when empty",
    )
    environment: Literal["development", "staging", "production"] = Field(default="development")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Console log level unless --verbose or --quiet is given",
    )

    # Schedule sources, merged in this order
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    jira: JiraConfig = Field(default_factory=JiraConfig)
    ical: ICalConfig = Field(
        default_factory=lambda: ICalConfig(
            projects=[
                ICalProjectConfig(
                    name="Spring Data",
                    calendar_url=(
                        "https://outlook.office365.com/owa/calendar/"
                        "9d3cecb6098e4d7d884561cf288d70b7@vmware.com/"
                        "4f8a123268f047d0b0b9319040506e2a3791298319254920500/calendar.ics"
                    ),
                )
            ]
        )
    )

    release: ReleaseConfig = Field(default_factory=ReleaseConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


@lru_cache
def get_settings() -> Settings:
    """Settings read once per process; tests call ``get_settings.cache_clear()``."""
    return Settings()
