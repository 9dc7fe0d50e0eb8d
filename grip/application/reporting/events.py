"""Structured events emitted by an assignment run.

The engine records what happened here; assignment_log renders it as text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from grip.domain.entities.decision import AssignmentDecision
from grip.domain.policies.capacity import CapacityRow
from grip.domain.policies.preference_walk import PreferenceCheck
from grip.domain.value_objects.enums import EnrollmentStatus


@dataclass(frozen=True)
class EnrollmentOutcome:
    """Result of one additional-team enrollment attempt."""

    team_id: str
    team_name: str
    status: EnrollmentStatus
    reason: str

    @property
    def enrolled(self) -> bool:
        return self.status == EnrollmentStatus.ENROLLED


@dataclass(frozen=True)
class ApplicantFailure:
    """An application left pending; stage is "validation" or "commit"."""

    applicant_id: str | None
    applicant_name: str
    stage: str
    error: str


@dataclass
class ApplicantTrace:
    """Everything the run did for a single application."""

    applicant_id: str | None
    applicant_name: str
    submitted_at: datetime | None
    checks: list[PreferenceCheck] = field(default_factory=list)
    disqualified: bool = False
    decision: AssignmentDecision | None = None
    attempted: AssignmentDecision | None = None
    enrollments: list[EnrollmentOutcome] = field(default_factory=list)
    failure: ApplicantFailure | None = None


@dataclass(frozen=True)
class AssignmentSummary:
    total_processed: int
    assigned: int
    waitlisted: int
    failed: int
    generated_at: datetime


@dataclass
class AssignmentRun:
    """Raw material for the text log."""

    generated_at: datetime
    capacity_before: list[CapacityRow]
    capacity_after: list[CapacityRow]
    traces: list[ApplicantTrace]
    summary: AssignmentSummary


@dataclass
class AssignmentReport:
    """What the caller gets back from one assignment run."""

    decisions: list[AssignmentDecision]
    summary: AssignmentSummary
    failures: list[ApplicantFailure]
    enrollments: dict[str, list[EnrollmentOutcome]]
    log_text: str

    def to_dict(self) -> dict:
        return {
            "decisions": [
                {
                    "applicant_id": d.applicant_id,
                    "assigned_team_id": d.assigned_team_id,
                    "status": d.status.value,
                    "reasoning": d.reasoning,
                    "preference_rank": d.preference_rank,
                }
                for d in self.decisions
            ],
            "summary": {
                "total_processed": self.summary.total_processed,
                "assigned": self.summary.assigned,
                "waitlisted": self.summary.waitlisted,
                "failed": self.summary.failed,
                "timestamp": self.summary.generated_at.isoformat(),
            },
            "failures": [
                {"applicant_id": f.applicant_id, "stage": f.stage, "error": f.error}
                for f in self.failures
            ],
            "enrollments": {
                applicant_id: [
                    {"team_id": o.team_id, "status": o.status.value, "reason": o.reason}
                    for o in outcomes
                ]
                for applicant_id, outcomes in self.enrollments.items()
            },
            "log": self.log_text,
        }
