"""FastAPI dependency injection — wires adapters into use cases."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from grip.adapters.persistence.database import get_session
from grip.adapters.persistence.repositories import (
    SqlApplicantRepository,
    SqlEnrollmentRepository,
    SqlTeamRepository,
    SqlUnitOfWork,
)
from grip.application.use_cases.run_assignment import RunAssignmentUseCase


def get_team_repo(session: AsyncSession = Depends(get_session)) -> SqlTeamRepository:
    return SqlTeamRepository(session)


def get_applicant_repo(session: AsyncSession = Depends(get_session)) -> SqlApplicantRepository:
    return SqlApplicantRepository(session)


def get_run_assignment_uc(
    session: AsyncSession = Depends(get_session),
) -> RunAssignmentUseCase:
    return RunAssignmentUseCase(
        team_repo=SqlTeamRepository(session),
        applicant_repo=SqlApplicantRepository(session),
        enrollment_repo=SqlEnrollmentRepository(session),
        uow=SqlUnitOfWork(session),
    )
