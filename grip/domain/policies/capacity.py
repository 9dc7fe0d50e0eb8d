"""CapacityMap — run-scoped seat counters for one assignment run."""

from __future__ import annotations

from dataclasses import dataclass

from grip.domain.entities.team import Team
from grip.domain.value_objects.enums import TeamKind


@dataclass
class SeatCount:
    team_id: str
    name: str
    capacity: int
    occupancy: int

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.occupancy, 0)


@dataclass(frozen=True)
class CapacityRow:
    """Snapshot of one team's seats, used for the before/after tables."""

    team_id: str
    name: str
    capacity: int
    occupancy: int

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.occupancy, 0)


class CapacityMap:
    """Seat counters for a single pool of teams.

    Seeded from a team snapshot and mutated only through reserve/release,
    so the occupancy of the underlying Team objects is never touched.
    """

    def __init__(self, teams: list[Team], kind: TeamKind):
        self._seats: dict[str, SeatCount] = {
            t.id: SeatCount(team_id=t.id, name=t.name, capacity=t.capacity, occupancy=t.occupancy)
            for t in teams
            if t.kind == kind
        }

    def __contains__(self, team_id: object) -> bool:
        return team_id in self._seats

    def __len__(self) -> int:
        return len(self._seats)

    def get(self, team_id: str) -> SeatCount | None:
        return self._seats.get(team_id)

    def name_of(self, team_id: str) -> str:
        seat = self._seats.get(team_id)
        return seat.name if seat else team_id

    def has_room(self, team_id: str) -> bool:
        seat = self._seats.get(team_id)
        return seat is not None and seat.remaining > 0

    def reserve(self, team_id: str) -> int:
        """Take one seat and return the new occupancy.

        Raises:
            KeyError: if the team is not part of this pool.
            ValueError: if the team is already full.
        """
        seat = self._seats[team_id]
        if seat.remaining <= 0:
            raise ValueError(f"Team {seat.name} has no remaining seats")
        seat.occupancy += 1
        return seat.occupancy

    def release(self, team_id: str) -> int:
        """Give back a seat taken by reserve() and return the new occupancy."""
        seat = self._seats[team_id]
        seat.occupancy = max(seat.occupancy - 1, 0)
        return seat.occupancy

    def snapshot(self) -> list[CapacityRow]:
        """Rows sorted by team name, then id."""
        return [
            CapacityRow(team_id=s.team_id, name=s.name, capacity=s.capacity, occupancy=s.occupancy)
            for s in sorted(self._seats.values(), key=lambda s: (s.name, s.team_id))
        ]
