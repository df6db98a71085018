"""Pydantic schemas for parsing Jira REST API responses.

See: https://docs.atlassian.com/software/jira/docs/api/REST/latest/
"""

import datetime as dt

from pydantic import Field

from release_calendar.schemas.base import SchemaBase


class JiraProject(SchemaBase):
    """Project object from GET /rest/api/2/project."""

    name: str = Field(description="Project name (e.g., 'Spring Framework')")
    key: str = Field(description="Project key (e.g., 'SPR')")
    self_url: str = Field(alias="self", description="API URL of the project")


class JiraVersion(SchemaBase):
    """Version object from GET /rest/api/2/project/{key}/versions."""

    id: str = Field(description="Version ID")
    name: str = Field(description="Version name (e.g., '2.0.4')")
    release_date: dt.date | None = Field(
        default=None,
        alias="releaseDate",
        description="Scheduled or actual release date",
    )
    released: bool = Field(default=False)
