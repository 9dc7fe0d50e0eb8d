"""SQLAlchemy repository implementations."""

from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from grip.adapters.persistence.models import (
    AdditionalEnrollmentModel,
    ApplicationModel,
    TeamModel,
)
from grip.application.ports.applicant_repo import ApplicantRepository
from grip.application.ports.enrollment_repo import EnrollmentRepository
from grip.application.ports.team_repo import TeamRepository
from grip.application.ports.unit_of_work import UnitOfWork
from grip.domain.entities.applicant import Applicant
from grip.domain.entities.decision import AssignmentDecision
from grip.domain.entities.enrollment import AdditionalEnrollment
from grip.domain.entities.team import Team
from grip.domain.value_objects.enums import ApplicationStatus, TeamKind
from grip.domain.value_objects.time_slot import TimeSlot

logger = logging.getLogger(__name__)

# ─── Mappers ─────────────────────────────────────────────────────────


def _team_to_domain(m: TeamModel) -> Team:
    return Team(
        id=m.id,
        name=m.name,
        kind=TeamKind.from_label(m.type),
        capacity=m.max_capacity,
        occupancy=m.current_size or 0,
        meeting_time=m.meeting_time,
        location=m.location,
        description=m.description,
    )


def _application_to_domain(m: ApplicationModel) -> Applicant:
    data_error = None
    try:
        availability = [TimeSlot.from_dict(slot) for slot in m.time_availability or []]
    except ValueError as e:
        # Left for validate() to reject so one bad row only fails itself
        logger.warning("Application %s: %s", m.id, e)
        availability, data_error = [], f"has {e}"

    return Applicant(
        id=m.id,
        full_name=m.full_name,
        email=m.email,
        submitted_at=m.submitted_at,
        technical_preferences=list(m.team_preferences) if m.team_preferences is not None else None,
        additional_team_choices=(
            list(m.additional_teams) if m.additional_teams is not None else None
        ),
        skills=list(m.skills or []),
        availability=availability,
        status=ApplicationStatus.from_label(m.status),
        assigned_team_id=m.assigned_team_id,
        assignment_reason=m.assignment_reason,
        data_error=data_error,
    )


def _enrollment_to_domain(m: AdditionalEnrollmentModel) -> AdditionalEnrollment:
    return AdditionalEnrollment(id=m.id, applicant_id=m.application_id, team_id=m.team_id)


# ─── Repositories ────────────────────────────────────────────────────


class SqlTeamRepository(TeamRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, team: Team) -> Team:
        m = TeamModel(
            name=team.name,
            type=team.kind.value,
            max_capacity=team.capacity,
            current_size=team.occupancy,
            meeting_time=team.meeting_time,
            location=team.location,
            description=team.description,
        )
        if team.id:
            m.id = team.id
        self._s.add(m)
        await self._s.flush()
        team.id = m.id
        return team

    async def get_by_id(self, team_id: str) -> Team | None:
        m = await self._s.get(TeamModel, team_id)
        return _team_to_domain(m) if m else None

    async def get_by_name(self, name: str) -> Team | None:
        result = await self._s.execute(select(TeamModel).where(TeamModel.name == name))
        m = result.scalar_one_or_none()
        return _team_to_domain(m) if m else None

    async def get_all(self) -> list[Team]:
        result = await self._s.execute(select(TeamModel).order_by(TeamModel.name))
        return [_team_to_domain(m) for m in result.scalars()]

    async def update_occupancy(self, team_id: str, occupancy: int) -> None:
        await self._s.execute(
            update(TeamModel)
            .where(TeamModel.id == team_id)
            .values(current_size=occupancy)
        )
        await self._s.flush()


class SqlApplicantRepository(ApplicantRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def save(self, applicant: Applicant) -> Applicant:
        m = ApplicationModel(
            full_name=applicant.full_name,
            email=applicant.email,
            team_preferences=list(applicant.technical_preferences or []),
            additional_teams=list(applicant.additional_team_choices or []),
            skills=list(applicant.skills),
            time_availability=[slot.to_dict() for slot in applicant.availability],
            status=applicant.status.value,
            assigned_team_id=applicant.assigned_team_id,
            assignment_reason=applicant.assignment_reason,
        )
        if applicant.id:
            m.id = applicant.id
        if applicant.submitted_at is not None:
            m.submitted_at = applicant.submitted_at
        self._s.add(m)
        await self._s.flush()
        applicant.id = m.id
        return applicant

    async def get_by_id(self, applicant_id: str) -> Applicant | None:
        m = await self._s.get(ApplicationModel, applicant_id)
        return _application_to_domain(m) if m else None

    async def get_by_email(self, email: str) -> Applicant | None:
        result = await self._s.execute(
            select(ApplicationModel).where(ApplicationModel.email == email)
        )
        m = result.scalars().first()
        return _application_to_domain(m) if m else None

    async def get_all(self) -> list[Applicant]:
        result = await self._s.execute(
            select(ApplicationModel).order_by(ApplicationModel.submitted_at, ApplicationModel.id)
        )
        return [_application_to_domain(m) for m in result.scalars()]

    async def get_pending(self) -> list[Applicant]:
        result = await self._s.execute(
            select(ApplicationModel)
            .where(ApplicationModel.status == ApplicationStatus.PENDING.value)
            .order_by(ApplicationModel.submitted_at, ApplicationModel.id)
        )
        return [_application_to_domain(m) for m in result.scalars()]

    async def record_decision(self, decision: AssignmentDecision) -> None:
        result = await self._s.execute(
            update(ApplicationModel)
            .where(ApplicationModel.id == decision.applicant_id)
            .values(
                status=decision.status.value,
                assigned_team_id=decision.assigned_team_id,
                assignment_reason=decision.reasoning,
            )
        )
        if result.rowcount == 0:
            raise LookupError(f"Application {decision.applicant_id} no longer exists")
        await self._s.flush()

    async def count_by_status(self) -> dict[str, int]:
        rows = (
            await self._s.execute(
                select(ApplicationModel.status, func.count(ApplicationModel.id))
                .group_by(ApplicationModel.status)
            )
        ).all()
        counts = {status.value: 0 for status in ApplicationStatus}
        for raw_status, count in rows:
            status = ApplicationStatus.from_label(raw_status)
            counts[status.value] += count
        return counts


class SqlEnrollmentRepository(EnrollmentRepository):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def add(self, enrollment: AdditionalEnrollment) -> AdditionalEnrollment:
        m = AdditionalEnrollmentModel(
            application_id=enrollment.applicant_id,
            team_id=enrollment.team_id,
        )
        self._s.add(m)
        # Flush surfaces the unique (application, team) violation here
        await self._s.flush()
        enrollment.id = m.id
        return enrollment

    async def get_by_applicant(self, applicant_id: str) -> list[AdditionalEnrollment]:
        result = await self._s.execute(
            select(AdditionalEnrollmentModel)
            .where(AdditionalEnrollmentModel.application_id == applicant_id)
            .order_by(AdditionalEnrollmentModel.id)
        )
        return [_enrollment_to_domain(m) for m in result.scalars()]

    async def get_by_team(self, team_id: str) -> list[AdditionalEnrollment]:
        result = await self._s.execute(
            select(AdditionalEnrollmentModel)
            .where(AdditionalEnrollmentModel.team_id == team_id)
            .order_by(AdditionalEnrollmentModel.id)
        )
        return [_enrollment_to_domain(m) for m in result.scalars()]


class SqlUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self._s = session

    async def commit(self) -> None:
        await self._s.commit()

    async def rollback(self) -> None:
        await self._s.rollback()
