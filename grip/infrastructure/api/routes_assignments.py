"""Assignment endpoints — trigger a run, download its log, read stats."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from grip.application.ports.applicant_repo import ApplicantRepository
from grip.application.reporting.assignment_log import log_filename
from grip.application.use_cases.run_assignment import (
    AssignmentInputError,
    RunAssignmentUseCase,
)
from grip.infrastructure.api.dependencies import get_applicant_repo, get_run_assignment_uc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["assignments"])


@router.post("/run")
async def run_assignment(uc: RunAssignmentUseCase = Depends(get_run_assignment_uc)):
    """Assign all pending applications and return the full report."""
    try:
        report = await uc.execute()
    except AssignmentInputError as e:
        raise HTTPException(status_code=503, detail=str(e))

    return {
        "status": "ok",
        "message": "Team assignments completed",
        "filename": log_filename(report.summary.generated_at),
        **report.to_dict(),
    }


@router.post("/run/log", response_class=PlainTextResponse)
async def run_assignment_log(uc: RunAssignmentUseCase = Depends(get_run_assignment_uc)):
    """Assign all pending applications and return the text log as a download."""
    try:
        report = await uc.execute()
    except AssignmentInputError as e:
        raise HTTPException(status_code=503, detail=str(e))

    filename = log_filename(report.summary.generated_at)
    return PlainTextResponse(
        report.log_text,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/stats")
async def assignment_stats(repo: ApplicantRepository = Depends(get_applicant_repo)):
    """Counts of applications per status."""
    counts = await repo.count_by_status()
    return {"total": sum(counts.values()), **counts}
