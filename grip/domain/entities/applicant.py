"""Applicant entity — one membership application awaiting a team."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from grip.domain.value_objects.enums import ApplicationStatus
from grip.domain.value_objects.time_slot import TimeSlot


class MalformedApplicantError(ValueError):
    """Raised when an application record is missing a required field."""


@dataclass
class Applicant:
    id: str | None
    full_name: str
    submitted_at: datetime | None
    technical_preferences: list[str] | None = field(default_factory=list)
    additional_team_choices: list[str] | None = field(default_factory=list)
    email: str | None = None
    skills: list[str] = field(default_factory=list)
    availability: list[TimeSlot] = field(default_factory=list)
    status: ApplicationStatus = ApplicationStatus.PENDING
    assigned_team_id: str | None = None
    assignment_reason: str | None = None
    # Set by the persistence mapper when a stored field could not be read
    data_error: str | None = None

    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    def has_preferences(self) -> bool:
        return bool(self.technical_preferences)

    def has_availability(self) -> bool:
        return bool(self.availability)

    def distinct_additional_choices(self) -> list[str]:
        """Additional team ids with duplicates dropped, first occurrence kept."""
        return list(dict.fromkeys(self.additional_team_choices or []))

    def validate(self) -> None:
        """Fail fast on records the engine cannot order or walk.

        A naive submitted_at is taken to be UTC so the pool orders consistently.

        Raises:
            MalformedApplicantError: if id, submitted_at or either team list is
                missing, or a stored field could not be read.
        """
        if not self.id:
            raise MalformedApplicantError("application has no id")
        if self.submitted_at is None:
            raise MalformedApplicantError(f"application {self.id} has no submission time")
        if self.submitted_at.tzinfo is None:
            self.submitted_at = self.submitted_at.replace(tzinfo=timezone.utc)
        if self.data_error is not None:
            raise MalformedApplicantError(f"application {self.id} {self.data_error}")
        if self.technical_preferences is None:
            raise MalformedApplicantError(f"application {self.id} has no preference list")
        if self.additional_team_choices is None:
            raise MalformedApplicantError(
                f"application {self.id} has no additional team list"
            )
