"""Pydantic schemas for parsing GitHub API responses.

These schemas map directly to the GitHub REST API response structure.
See: https://docs.github.com/en/rest/repos/repos#list-organization-repositories
and https://docs.github.com/en/rest/issues/milestones#list-milestones
"""

from datetime import UTC, datetime

from pydantic import Field, field_validator

from .base import SchemaBase
from .enums import MilestoneState, Visibility


def strip_uri_template(url: str) -> str:
    """Remove an RFC 6570 template suffix such as ``{/number}`` from a URL."""
    index = url.find("{")
    return url if index < 0 else url[:index]


class GitHubRepository(SchemaBase):
    """GitHub repository object from the organization repositories endpoint.

    Maps to: GET /orgs/{org}/repos
    """

    name: str = Field(description="Repository name (e.g., 'spring-boot')")
    full_name: str = Field(description="Full repository path (e.g., 'spring-projects/spring-boot')")
    milestones_url: str = Field(description="Milestones API URL (template suffix removed)")
    html_url: str = Field(description="Repository web URL")
    visibility: Visibility = Field(default=Visibility.PUBLIC, description="Repository visibility")

    @field_validator("milestones_url", "html_url")
    @classmethod
    def _strip_template(cls, value: str) -> str:
        return strip_uri_template(value)


class GitHubMilestone(SchemaBase):
    """GitHub milestone object from the milestones endpoint.

    Maps to: GET /repos/{owner}/{repo}/milestones
    """

    title: str = Field(description="Milestone title, usually the version (e.g., '3.3.1')")
    due_on: datetime | None = Field(default=None, description="Due date (UTC), if scheduled")
    state: MilestoneState = Field(description="Milestone state (open, closed)")
    number: int = Field(description="Milestone number within the repository")

    @field_validator("due_on")
    @classmethod
    def _normalize_to_utc(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
