"""Health check endpoint."""

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from grip.adapters.persistence.database import get_session
from grip.adapters.persistence.models import ApplicationModel, TeamModel

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: AsyncSession = Depends(get_session)):
    """Check database connectivity and report the assignment backlog."""
    try:
        teams = (await session.execute(select(func.count(TeamModel.id)))).scalar() or 0
        pending = (
            await session.execute(
                select(func.count(ApplicationModel.id)).where(
                    ApplicationModel.status == "pending"
                )
            )
        ).scalar() or 0
        db_status = "connected"
    except Exception as e:
        teams, pending = None, None
        db_status = f"error: {e}"

    return {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
        "teams": teams,
        "pending_applications": pending,
        "service": "GRiP Team Assignment Service",
    }
