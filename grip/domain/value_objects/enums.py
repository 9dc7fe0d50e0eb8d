"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class TeamKind(str, Enum):
    TECHNICAL = "technical"
    CONSTANT = "constant"

    @classmethod
    def from_label(cls, label: str) -> "TeamKind":
        """Parse a stored team type. Older rows use "additional" for constant teams."""
        key = label.strip().lower()
        if key == "additional":
            return cls.CONSTANT
        return cls(key)


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ASSIGNED = "assigned"
    WAITLISTED = "waitlisted"

    @classmethod
    def from_label(cls, label: str) -> "ApplicationStatus":
        """Parse a stored status. Legacy "accepted" rows count as assigned."""
        key = label.strip().lower()
        if key == "accepted":
            return cls.ASSIGNED
        return cls(key)


class PreferenceOutcome(str, Enum):
    ACCEPTED = "accepted"
    FULL = "full"
    UNKNOWN = "unknown"


class EnrollmentStatus(str, Enum):
    ENROLLED = "enrolled"
    FULL = "full"
    UNKNOWN = "unknown"
    FAILED = "failed"
