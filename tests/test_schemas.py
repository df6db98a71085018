"""Tests for GitHub API and release schemas."""

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from release_calendar.schemas import (
    GitHubMilestone,
    GitHubRepository,
    MilestoneState,
    Release,
    ReleaseStatus,
    ReleaseType,
    Visibility,
    strip_uri_template,
)
from tests.conftest import JUN_10, JUN_20, JUN_20_DUE, JUN_21
from tests.factories import make_github_milestone, make_github_repository, make_release


class TestStripUriTemplate:
    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            (
                "https://api.github.com/repos/spring-projects/spring-boot/milestones{/number}",
                "https://api.github.com/repos/spring-projects/spring-boot/milestones",
            ),
            ("https://github.com/spring-projects", "https://github.com/spring-projects"),
            ("{/number}", ""),
        ],
    )
    def test_strip(self, url, expected):
        assert strip_uri_template(url) == expected


class TestGitHubRepository:
    def test_parse(self):
        repository = GitHubRepository.model_validate(make_github_repository("spring-boot"))

        assert repository.full_name == "spring-projects/spring-boot"
        assert repository.visibility == Visibility.PUBLIC
        assert repository.milestones_url.endswith("/milestones")

    def test_visibility_defaults_to_public(self):
        data = make_github_repository()
        del data["visibility"]

        assert GitHubRepository.model_validate(data).visibility == Visibility.PUBLIC

    def test_unknown_visibility_rejected(self):
        with pytest.raises(ValidationError):
            GitHubRepository.model_validate(make_github_repository(visibility="secret"))

    def test_frozen(self):
        repository = GitHubRepository.model_validate(make_github_repository())

        with pytest.raises(ValidationError):
            repository.name = "other"


class TestGitHubMilestone:
    def test_parse(self):
        milestone = GitHubMilestone.model_validate(make_github_milestone(3, state="closed"))

        assert milestone.number == 3
        assert milestone.title == "3.3.3"
        assert milestone.state == MilestoneState.CLOSED
        assert milestone.due_on == JUN_20_DUE

    def test_undated(self):
        milestone = GitHubMilestone.model_validate(make_github_milestone(due_on=None))

        assert milestone.due_on is None

    def test_offset_normalized_to_utc(self):
        milestone = GitHubMilestone.model_validate(
            make_github_milestone(due_on="2024-06-20T09:00:00+02:00")
        )

        assert milestone.due_on == JUN_20_DUE
        assert milestone.due_on is not None
        assert milestone.due_on.utcoffset() == timedelta(0)

    def test_naive_treated_as_utc(self):
        milestone = GitHubMilestone.model_validate(make_github_milestone(due_on="2024-06-20T07:00:00"))

        assert milestone.due_on == datetime(2024, 6, 20, 7, tzinfo=UTC)

    def test_equal_instants(self):
        first = GitHubMilestone.model_validate(make_github_milestone(due_on="2024-06-20T07:00:00Z"))
        second = GitHubMilestone.model_validate(
            make_github_milestone(due_on=JUN_20_DUE.astimezone(timezone(timedelta(hours=-5))).isoformat())
        )

        assert first == second


class TestRelease:
    def test_title(self):
        assert make_release("Spring Boot", "3.3.1").title == "Spring Boot 3.3.1"

    def test_enterprise_title(self):
        release = make_release("Spring Boot", "3.1.13", type=ReleaseType.ENTERPRISE)

        assert release.title == "Spring Boot 3.1.13 (Enterprise)"

    def test_date_serialized_as_iso(self):
        data = make_release(date=JUN_20).model_dump(mode="json")

        assert data["date"] == "2024-06-20"
        assert data["status"] == "OPEN"

    def test_status_defaults_to_unknown(self):
        release = Release(project="Spring Data", name="2024.0.1", date=JUN_20)

        assert release.status == ReleaseStatus.UNKNOWN
        assert release.type == ReleaseType.OSS
        assert release.url is None

    @pytest.mark.parametrize(
        ("status", "date", "overdue"),
        [
            (ReleaseStatus.OPEN, JUN_10, True),
            (ReleaseStatus.OPEN, JUN_20, False),
            (ReleaseStatus.OPEN, JUN_21, False),
            (ReleaseStatus.CLOSED, JUN_10, False),
            (ReleaseStatus.UNKNOWN, JUN_10, False),
        ],
    )
    def test_is_overdue(self, status, date, overdue):
        assert make_release(status=status, date=date).is_overdue(JUN_20) is overdue


class TestReleaseType:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("oss", ReleaseType.OSS),
            ("OSS", ReleaseType.OSS),
            ("enterprise", ReleaseType.ENTERPRISE),
            ("Commercial", ReleaseType.ENTERPRISE),
        ],
    )
    def test_parse(self, value, expected):
        assert ReleaseType.parse(value) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            ReleaseType.parse("snapshot")
