"""Classification and naming of GitHub repositories as release projects."""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from release_calendar.config import RepositoryTransform
from release_calendar.exceptions import ConfigurationError
from release_calendar.schemas.enums import MilestoneState, Visibility
from release_calendar.schemas.github_api import GitHubMilestone, GitHubRepository

COMMERCIAL_SUFFIX = "-commercial"
ENTERPRISE_PROJECTS_URL = "https://enterprise.spring.io/projects/"


def capitalize(value: str) -> str:
    """Uppercase the first character and every character following a space.

    All other characters are left as they are, so ``"spring AMQP"`` becomes
    ``"Spring AMQP"``.
    """
    chars = list(value)
    for i, char in enumerate(chars):
        if i == 0 or chars[i - 1] == " ":
            chars[i] = char.upper()
    return "".join(chars)


def _strip_commercial_suffix(name: str) -> str:
    return name[: -len(COMMERCIAL_SUFFIX)] if name.endswith(COMMERCIAL_SUFFIX) else name


def _checked_url(url: str) -> str:
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"Malformed release URL: {url!r}") from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise ConfigurationError(f"Malformed release URL: {url!r}")
    return url


@dataclass(frozen=True)
class Project:
    """A repository that publishes release milestones under a project name."""

    repository: GitHubRepository
    name: str
    commercial_project_id: str | None = None

    @classmethod
    def from_repository(
        cls,
        repository: GitHubRepository,
        transform: RepositoryTransform | None = None,
    ) -> Project:
        """Derive a project from a repository and its optional override.

        Args:
            repository: Repository as listed by the organization endpoint
            transform: Configured override for this repository, if any

        Returns:
            Project with its display name and commercial ID resolved
        """
        if transform is not None and transform.display_name:
            name = transform.display_name
        else:
            name = capitalize(_strip_commercial_suffix(repository.name).replace("-", " "))

        if transform is not None and transform.commercial_project_id is not None:
            commercial_project_id: str | None = transform.commercial_project_id
        elif repository.name.endswith(COMMERCIAL_SUFFIX):
            commercial_project_id = _strip_commercial_suffix(repository.name)
        else:
            commercial_project_id = None

        return cls(
            repository=repository,
            name=name,
            commercial_project_id=commercial_project_id,
        )

    @property
    def is_commercial(self) -> bool:
        """Whether the repository holds a commercial variant of a project."""
        return self.repository.name.endswith(COMMERCIAL_SUFFIX)

    def include(self) -> bool:
        """Whether the project's milestones are published.

        Commercial repositories are included whatever their visibility.
        """
        return self.repository.visibility == Visibility.PUBLIC or self.is_commercial

    def url_for(self, milestone: GitHubMilestone) -> str:
        """Build the release URL for one of this project's milestones.

        Raises:
            ConfigurationError: If the URL cannot be built
        """
        if self.is_commercial:
            url = f"{ENTERPRISE_PROJECTS_URL}{self.commercial_project_id}"
            if milestone.state == MilestoneState.CLOSED:
                url += f"/changelog/{milestone.title}"
        else:
            url = f"{self.repository.html_url}/milestone/{milestone.number}"
        return _checked_url(url)
