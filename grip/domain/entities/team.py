"""Team entity — a group applicants can be placed into."""

from dataclasses import dataclass

from grip.domain.value_objects.enums import TeamKind


@dataclass
class Team:
    id: str
    name: str
    kind: TeamKind
    capacity: int
    occupancy: int = 0
    meeting_time: str | None = None
    location: str | None = None
    description: str | None = None

    def is_technical(self) -> bool:
        return self.kind == TeamKind.TECHNICAL

    def is_constant(self) -> bool:
        return self.kind == TeamKind.CONSTANT

    def seats_remaining(self) -> int:
        return max(self.capacity - self.occupancy, 0)

    def has_room(self) -> bool:
        return self.occupancy < self.capacity
