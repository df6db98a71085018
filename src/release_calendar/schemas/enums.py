"""Enums for Pydantic schemas."""

from enum import StrEnum


class Visibility(StrEnum):
    """Visibility of a GitHub repository."""

    PUBLIC = "public"
    PRIVATE = "private"
    INTERNAL = "internal"


class MilestoneState(StrEnum):
    """Lifecycle state of a GitHub milestone."""

    OPEN = "open"
    CLOSED = "closed"


class ReleaseStatus(StrEnum):
    """Status of a release, if known."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    UNKNOWN = "UNKNOWN"


class ReleaseType(StrEnum):
    """Classification of a release."""

    OSS = "OSS"
    ENTERPRISE = "ENTERPRISE"

    @classmethod
    def parse(cls, value: str) -> "ReleaseType":
        """Parse a user-supplied type, accepting 'commercial' for ENTERPRISE.

        Raises:
            ValueError: If the value names no release type
        """
        if value.lower() == "commercial":
            return cls.ENTERPRISE
        return cls(value.upper())
