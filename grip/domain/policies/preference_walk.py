"""PreferenceWalk — choose a technical team for one applicant.

Pure decision logic: no persistence and no log rendering. The caller reserves
the seat in the CapacityMap after a successful placement.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from grip.domain.entities.applicant import Applicant
from grip.domain.entities.decision import AssignmentDecision
from grip.domain.policies.capacity import CapacityMap
from grip.domain.value_objects.enums import ApplicationStatus, PreferenceOutcome

NO_PREFERENCES_REASON = "Waitlisted: no team preferences provided."
NO_AVAILABILITY_REASON = "Waitlisted: no time availability provided."


@dataclass(frozen=True)
class PreferenceCheck:
    """One step of the walk over an applicant's submitted preferences."""

    team_id: str
    team_name: str
    submitted_position: int  # 1-based, in the raw submitted list
    rank: int | None  # 1-based, in the filtered list; None for unknown ids
    outcome: PreferenceOutcome
    seats_remaining: int | None = None


@dataclass(frozen=True)
class PreferenceWalk:
    """Result of the policy evaluation."""

    decision: AssignmentDecision
    checks: list[PreferenceCheck] = field(default_factory=list)
    disqualified: bool = False

    @property
    def unknown_team_ids(self) -> list[str]:
        return [c.team_id for c in self.checks if c.outcome == PreferenceOutcome.UNKNOWN]


def ordinal(n: int) -> str:
    """1 → '1st', 2 → '2nd', 11 → '11th', 23 → '23rd'."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def walk_preferences(applicant: Applicant, capacity: CapacityMap) -> PreferenceWalk:
    """Evaluate an applicant against the technical capacity map.

    Business rules:
      1. No preferences → waitlisted, before any capacity is looked at.
      2. No time availability → waitlisted.
      3. Preference ids missing from the map are skipped; ranks count only
         the remaining (existing) teams.
      4. The first existing team with a free seat wins.
      5. If every existing preference is full → waitlisted.

    The capacity map is not modified.
    """
    if not applicant.has_preferences():
        return PreferenceWalk(
            decision=_waitlisted(applicant, NO_PREFERENCES_REASON),
            disqualified=True,
        )

    if not applicant.has_availability():
        return PreferenceWalk(
            decision=_waitlisted(applicant, NO_AVAILABILITY_REASON),
            disqualified=True,
        )

    checks: list[PreferenceCheck] = []
    full_names: list[str] = []
    rank = 0

    for position, team_id in enumerate(applicant.technical_preferences, start=1):
        seat = capacity.get(team_id)
        if seat is None:
            checks.append(
                PreferenceCheck(
                    team_id=team_id,
                    team_name=team_id,
                    submitted_position=position,
                    rank=None,
                    outcome=PreferenceOutcome.UNKNOWN,
                )
            )
            continue

        rank += 1
        if seat.remaining > 0:
            checks.append(
                PreferenceCheck(
                    team_id=team_id,
                    team_name=seat.name,
                    submitted_position=position,
                    rank=rank,
                    outcome=PreferenceOutcome.ACCEPTED,
                    seats_remaining=seat.remaining,
                )
            )
            reason = f"Assigned to {ordinal(rank)} choice: {seat.name}."
            if full_names:
                reason += f" Full: {', '.join(full_names)}."
            decision = AssignmentDecision(
                applicant_id=applicant.id,
                assigned_team_id=team_id,
                status=ApplicationStatus.ASSIGNED,
                reasoning=reason,
                preference_rank=rank,
            )
            return PreferenceWalk(decision=decision, checks=checks)

        checks.append(
            PreferenceCheck(
                team_id=team_id,
                team_name=seat.name,
                submitted_position=position,
                rank=rank,
                outcome=PreferenceOutcome.FULL,
                seats_remaining=0,
            )
        )
        full_names.append(seat.name)

    if full_names:
        reason = f"Waitlisted: all preferred teams are full ({', '.join(full_names)})."
    else:
        reason = "Waitlisted: none of the preferred teams are open for assignment."
    return PreferenceWalk(decision=_waitlisted(applicant, reason), checks=checks)


def _waitlisted(applicant: Applicant, reason: str) -> AssignmentDecision:
    return AssignmentDecision(
        applicant_id=applicant.id,
        assigned_team_id=None,
        status=ApplicationStatus.WAITLISTED,
        reasoning=reason,
    )
