"""RunAssignmentUseCase — place pending applicants into technical teams."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from grip.application.ports.applicant_repo import ApplicantRepository
from grip.application.ports.enrollment_repo import EnrollmentRepository
from grip.application.ports.team_repo import TeamRepository
from grip.application.ports.unit_of_work import UnitOfWork
from grip.application.reporting.assignment_log import render_assignment_log
from grip.application.reporting.events import (
    ApplicantFailure,
    ApplicantTrace,
    AssignmentReport,
    AssignmentRun,
    AssignmentSummary,
)
from grip.application.use_cases.resolve_additional_teams import (
    ResolveAdditionalTeamsUseCase,
)
from grip.domain.entities.applicant import Applicant, MalformedApplicantError
from grip.domain.entities.team import Team
from grip.domain.policies.capacity import CapacityMap
from grip.domain.policies.preference_walk import walk_preferences
from grip.domain.value_objects.enums import ApplicationStatus, TeamKind

logger = logging.getLogger(__name__)


class AssignmentInputError(Exception):
    """Raised when the team directory or applicant pool cannot be loaded."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RunAssignmentUseCase:
    """Orchestrates one assignment run over all pending applications."""

    def __init__(
        self,
        team_repo: TeamRepository,
        applicant_repo: ApplicantRepository,
        enrollment_repo: EnrollmentRepository,
        uow: UnitOfWork,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._teams = team_repo
        self._applicants = applicant_repo
        self._enrollments = enrollment_repo
        self._uow = uow
        self._clock = clock

    async def execute(self) -> AssignmentReport:
        """Load the current snapshot from the repositories and run on it.

        Raises:
            AssignmentInputError: if teams or pending applications cannot be read.
        """
        try:
            teams = await self._teams.get_all()
            applicants = await self._applicants.get_pending()
        except Exception as e:
            logger.exception("Could not load the assignment snapshot")
            raise AssignmentInputError(f"Could not load teams or applications: {e}") from e
        return await self.run(teams, applicants)

    async def run(
        self, teams: list[Team] | None, applicants: list[Applicant] | None
    ) -> AssignmentReport:
        """Assign every pending applicant in first-come-first-served order.

        Pipeline per applicant:
        1. Walk preferences against the technical seat counters
        2. Reserve the seat (if any) and write the decision
        3. Commit, or roll back and leave the applicant pending
        4. Enroll in additional teams when assigned

        Each decision is committed before the next applicant is looked at.

        Raises:
            AssignmentInputError: if either snapshot is missing.
        """
        if teams is None:
            raise AssignmentInputError("Team directory snapshot is missing")
        if applicants is None:
            raise AssignmentInputError("Applicant pool snapshot is missing")

        generated_at = self._clock()
        technical = CapacityMap(teams, TeamKind.TECHNICAL)
        resolver = ResolveAdditionalTeamsUseCase(self._teams, self._enrollments, self._uow)
        resolver.start_run(teams)
        capacity_before = technical.snapshot()

        pending = [a for a in applicants if a.is_pending()]
        logger.info(
            "Assignment run: %d pending applications, %d technical teams",
            len(pending), len(technical),
        )

        traces: list[ApplicantTrace] = []
        ordered: list[Applicant] = []
        for applicant in pending:
            try:
                applicant.validate()
            except MalformedApplicantError as e:
                logger.warning("Skipping malformed application: %s", e)
                traces.append(ApplicantTrace(
                    applicant_id=applicant.id,
                    applicant_name=applicant.full_name,
                    submitted_at=applicant.submitted_at,
                    failure=ApplicantFailure(
                        applicant_id=applicant.id,
                        applicant_name=applicant.full_name,
                        stage="validation",
                        error=str(e),
                    ),
                ))
                continue
            ordered.append(applicant)

        # Earliest submission first; id breaks ties
        ordered.sort(key=lambda a: (a.submitted_at, a.id))

        for applicant in ordered:
            traces.append(await self._process(applicant, technical, resolver))

        decisions = [t.decision for t in traces if t.decision is not None]
        failures = [t.failure for t in traces if t.failure is not None]
        summary = AssignmentSummary(
            total_processed=len(traces),
            assigned=sum(1 for d in decisions if d.status == ApplicationStatus.ASSIGNED),
            waitlisted=sum(1 for d in decisions if d.status == ApplicationStatus.WAITLISTED),
            failed=len(failures),
            generated_at=generated_at,
        )
        run = AssignmentRun(
            generated_at=generated_at,
            capacity_before=capacity_before,
            capacity_after=technical.snapshot(),
            traces=traces,
            summary=summary,
        )

        logger.info(
            "Assignment run complete: %d assigned, %d waitlisted, %d left pending",
            summary.assigned, summary.waitlisted, summary.failed,
        )
        return AssignmentReport(
            decisions=decisions,
            summary=summary,
            failures=failures,
            enrollments={
                t.applicant_id: t.enrollments for t in traces if t.enrollments
            },
            log_text=render_assignment_log(run),
        )

    async def _process(
        self,
        applicant: Applicant,
        technical: CapacityMap,
        resolver: ResolveAdditionalTeamsUseCase,
    ) -> ApplicantTrace:
        walk = walk_preferences(applicant, technical)
        decision = walk.decision
        trace = ApplicantTrace(
            applicant_id=applicant.id,
            applicant_name=applicant.full_name,
            submitted_at=applicant.submitted_at,
            checks=walk.checks,
            disqualified=walk.disqualified,
        )

        for team_id in walk.unknown_team_ids:
            logger.warning(
                "Application %s: preference %s is not a known technical team, skipped",
                applicant.id, team_id,
            )

        reserved = False
        try:
            if decision.is_assigned:
                occupancy = technical.reserve(decision.assigned_team_id)
                reserved = True
            await self._applicants.record_decision(decision)
            if decision.is_assigned:
                await self._teams.update_occupancy(decision.assigned_team_id, occupancy)
            await self._uow.commit()
        except Exception as e:
            logger.exception("Application %s: commit failed, left pending", applicant.id)
            if reserved:
                technical.release(decision.assigned_team_id)
            try:
                await self._uow.rollback()
            except Exception:
                logger.exception("Application %s: rollback failed", applicant.id)
            trace.attempted = decision
            trace.failure = ApplicantFailure(
                applicant_id=applicant.id,
                applicant_name=applicant.full_name,
                stage="commit",
                error=str(e),
            )
            return trace

        applicant.status = decision.status
        applicant.assigned_team_id = decision.assigned_team_id
        applicant.assignment_reason = decision.reasoning
        trace.decision = decision
        logger.info("Application %s → %s: %s", applicant.id, decision.status.value, decision.reasoning)

        if decision.is_assigned and applicant.additional_team_choices:
            try:
                trace.enrollments = await resolver.resolve(
                    applicant.id, applicant.distinct_additional_choices()
                )
            except Exception:
                logger.exception(
                    "Application %s: additional team enrollment aborted", applicant.id
                )

        return trace
