"""Team endpoints — directory with occupancy."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from grip.application.ports.team_repo import TeamRepository
from grip.infrastructure.api.dependencies import get_team_repo

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("")
async def list_teams(repo: TeamRepository = Depends(get_team_repo)):
    """List all teams with capacity and current occupancy."""
    teams = await repo.get_all()
    return {
        "total": len(teams),
        "teams": [
            {
                "id": t.id,
                "name": t.name,
                "kind": t.kind.value,
                "capacity": t.capacity,
                "occupancy": t.occupancy,
                "seats_remaining": t.seats_remaining(),
                "meeting_time": t.meeting_time,
                "location": t.location,
            }
            for t in teams
        ],
    }
