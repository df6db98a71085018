"""Release schedule source backed by GitHub milestones.

Every included repository of every configured organization becomes one
project schedule; each milestone with a due date becomes one release.
Repository and milestone page chains from the previous poll are kept to
drive conditional requests on the next one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from release_calendar.config import OrganizationConfig, RepositoryTransform
from release_calendar.exceptions import ConfigurationError
from release_calendar.logging import bind_organization, get_logger
from release_calendar.schemas.enums import MilestoneState, ReleaseStatus, ReleaseType
from release_calendar.schemas.github_api import GitHubMilestone, GitHubRepository
from release_calendar.schemas.release import Release, ReleaseSchedule

from .page import Page, collect_content
from .project import Project

if TYPE_CHECKING:
    from .client import GitHubClient

logger = get_logger(__name__)

DEFAULT_TIMEZONE = "Europe/London"


def build_transforms(organization: OrganizationConfig) -> dict[str, RepositoryTransform]:
    """Index an organization's transforms by repository name.

    Raises:
        ConfigurationError: If two transforms target the same repository
    """
    transforms: dict[str, RepositoryTransform] = {}
    for transform in organization.transforms:
        if transform.repository in transforms:
            raise ConfigurationError(
                f"Duplicate transform for repository {transform.repository!r} "
                f"in organization {organization.name!r}"
            )
        transforms[transform.repository] = transform
    return transforms


class GitHubReleaseScheduleSource:
    """Produces one release schedule per included GitHub repository.

    Usage:
        async with GitHubClient() as client:
            source = GitHubReleaseScheduleSource(client, settings.github.organizations)
            schedules = await source.get()
    """

    name = "github"

    def __init__(
        self,
        client: GitHubClient,
        organizations: list[OrganizationConfig],
        timezone: str = DEFAULT_TIMEZONE,
    ) -> None:
        """Initialize the source.

        Args:
            client: GitHub API client
            organizations: Organizations to poll, in publication order
            timezone: Zone in which due dates are published as calendar dates

        Raises:
            ConfigurationError: If the time zone is unknown
        """
        self._client = client
        self._organizations = list(organizations)
        try:
            self._zone = ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown time zone: {timezone!r}") from e
        # Page chains from the last completed poll
        self._repository_pages: dict[str, Page[GitHubRepository] | None] = {}
        self._milestone_pages: dict[str, Page[GitHubMilestone] | None] = {}

    async def get(self) -> list[ReleaseSchedule]:
        """Poll every organization and return schedules in discovery order.

        Page chains walked during this poll replace the previous ones only
        once every organization has been polled.

        Raises:
            GitHubRateLimitError: If the rate limit is exhausted mid-poll
            GitHubClientError: On any other upstream failure
            ConfigurationError: On a duplicate transform or malformed URL
        """
        repository_pages: dict[str, Page[GitHubRepository] | None] = {}
        milestone_pages: dict[str, Page[GitHubMilestone] | None] = {}
        schedules: list[ReleaseSchedule] = []

        for organization in self._organizations:
            transforms = build_transforms(organization)
            log = bind_organization(organization.name)

            page = await self._client.get_repositories(
                organization.name, self._repository_pages.get(organization.name)
            )
            repository_pages[organization.name] = page
            repositories = await collect_content(page)

            projects = [
                project
                for project in (
                    Project.from_repository(repository, transforms.get(repository.name))
                    for repository in repositories
                )
                if project.include()
            ]
            log.debug(
                "{} of {} repositories included",
                len(projects),
                len(repositories),
            )

            for project in projects:
                full_name = project.repository.full_name
                milestone_page = await self._client.get_milestones(
                    project.repository, self._milestone_pages.get(full_name)
                )
                milestone_pages[full_name] = milestone_page
                milestones = await collect_content(milestone_page)
                schedules.append(
                    ReleaseSchedule(
                        project=project.name,
                        releases=self._to_releases(project, milestones),
                    )
                )

        self._repository_pages.update(repository_pages)
        self._milestone_pages.update(milestone_pages)
        logger.info("Polled {} GitHub project schedule(s)", len(schedules))
        return schedules

    async def get_projects(self, organization: OrganizationConfig) -> list[Project]:
        """List the included projects of one organization.

        Uses unconditional requests and leaves the poll state untouched.
        """
        transforms = build_transforms(organization)
        page = await self._client.get_repositories(organization.name, None)
        repositories = await collect_content(page)
        projects = (
            Project.from_repository(repository, transforms.get(repository.name))
            for repository in repositories
        )
        return [project for project in projects if project.include()]

    def _to_releases(self, project: Project, milestones: list[GitHubMilestone]) -> list[Release]:
        release_type = ReleaseType.ENTERPRISE if project.is_commercial else ReleaseType.OSS
        releases = []
        for milestone in milestones:
            if milestone.due_on is None:
                continue
            releases.append(
                Release(
                    project=project.name,
                    name=milestone.title,
                    date=milestone.due_on.astimezone(self._zone).date(),
                    status=(
                        ReleaseStatus.CLOSED
                        if milestone.state == MilestoneState.CLOSED
                        else ReleaseStatus.OPEN
                    ),
                    url=project.url_for(milestone),
                    type=release_type,
                )
            )
        return releases
