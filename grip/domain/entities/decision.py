"""AssignmentDecision — the outcome of placing one applicant."""

from dataclasses import dataclass

from grip.domain.value_objects.enums import ApplicationStatus


@dataclass(frozen=True)
class AssignmentDecision:
    applicant_id: str
    assigned_team_id: str | None
    status: ApplicationStatus
    reasoning: str
    preference_rank: int | None = None

    @property
    def is_assigned(self) -> bool:
        return self.status == ApplicationStatus.ASSIGNED
