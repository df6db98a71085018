"""Pydantic schemas for Release Calendar.

This module provides upstream response parsing and the published release model.
"""

from .base import SchemaBase
from .enums import MilestoneState, ReleaseStatus, ReleaseType, Visibility
from .github_api import GitHubMilestone, GitHubRepository, strip_uri_template
from .release import Release, ReleaseSchedule

__all__ = [
    # GitHub API
    "GitHubMilestone",
    "GitHubRepository",
    # Enums
    "MilestoneState",
    # Releases
    "Release",
    "ReleaseSchedule",
    "ReleaseStatus",
    "ReleaseType",
    # Base
    "SchemaBase",
    "Visibility",
    "strip_uri_template",
]
