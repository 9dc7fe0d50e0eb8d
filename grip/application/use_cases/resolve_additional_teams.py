"""ResolveAdditionalTeamsUseCase — enroll an assigned applicant in constant teams."""

from __future__ import annotations

import logging

from grip.application.ports.enrollment_repo import EnrollmentRepository
from grip.application.ports.team_repo import TeamRepository
from grip.application.ports.unit_of_work import UnitOfWork
from grip.application.reporting.events import EnrollmentOutcome
from grip.domain.entities.enrollment import AdditionalEnrollment
from grip.domain.entities.team import Team
from grip.domain.policies.capacity import CapacityMap
from grip.domain.value_objects.enums import EnrollmentStatus, TeamKind

logger = logging.getLogger(__name__)


class ResolveAdditionalTeamsUseCase:
    """Best-effort enrollment into every chosen constant team that has room.

    Each choice is independent: a full team, an unknown id or a failed write
    only affects that one choice.
    """

    def __init__(
        self,
        team_repo: TeamRepository,
        enrollment_repo: EnrollmentRepository,
        uow: UnitOfWork,
    ):
        self._teams = team_repo
        self._enrollments = enrollment_repo
        self._uow = uow
        self._capacity: CapacityMap | None = None

    def start_run(self, teams: list[Team]) -> None:
        """Seed the constant-team seat counters from the run's team snapshot."""
        self._capacity = CapacityMap(teams, TeamKind.CONSTANT)

    async def resolve(
        self, applicant_id: str, additional_team_choices: list[str]
    ) -> list[EnrollmentOutcome]:
        """Try every distinct choice and report what happened to each.

        Args:
            applicant_id: application that was just assigned a technical team.
            additional_team_choices: constant team ids picked by the applicant.

        Returns:
            One EnrollmentOutcome per distinct choice, in submitted order.
        """
        if self._capacity is None:
            self.start_run(await self._teams.get_all())
        capacity = self._capacity

        outcomes: list[EnrollmentOutcome] = []
        for team_id in dict.fromkeys(additional_team_choices):
            seat = capacity.get(team_id)
            if seat is None:
                logger.warning(
                    "Application %s: additional team %s is not a known constant team, skipped",
                    applicant_id, team_id,
                )
                outcomes.append(EnrollmentOutcome(
                    team_id=team_id, team_name=team_id,
                    status=EnrollmentStatus.UNKNOWN, reason="unknown team",
                ))
                continue

            if seat.remaining <= 0:
                logger.info(
                    "Application %s: additional team %s is full, skipped",
                    applicant_id, seat.name,
                )
                outcomes.append(EnrollmentOutcome(
                    team_id=team_id, team_name=seat.name,
                    status=EnrollmentStatus.FULL,
                    reason=f"{seat.occupancy}/{seat.capacity} seats taken",
                ))
                continue

            occupancy = capacity.reserve(team_id)
            try:
                await self._enrollments.add(
                    AdditionalEnrollment(id=None, applicant_id=applicant_id, team_id=team_id)
                )
                await self._teams.update_occupancy(team_id, occupancy)
                await self._uow.commit()
            except Exception as e:
                logger.exception(
                    "Application %s: enrollment in %s failed", applicant_id, seat.name
                )
                capacity.release(team_id)
                try:
                    await self._uow.rollback()
                except Exception:
                    logger.exception(
                        "Application %s: rollback after %s failed", applicant_id, seat.name
                    )
                outcomes.append(EnrollmentOutcome(
                    team_id=team_id, team_name=seat.name,
                    status=EnrollmentStatus.FAILED, reason=str(e),
                ))
                continue

            logger.info(
                "Application %s enrolled in additional team %s (%d/%d)",
                applicant_id, seat.name, occupancy, seat.capacity,
            )
            outcomes.append(EnrollmentOutcome(
                team_id=team_id, team_name=seat.name,
                status=EnrollmentStatus.ENROLLED,
                reason=f"seat {occupancy}/{seat.capacity}",
            ))

        return outcomes
