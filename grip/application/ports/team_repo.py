"""Port interface for team persistence."""

from abc import ABC, abstractmethod

from grip.domain.entities.team import Team


class TeamRepository(ABC):
    @abstractmethod
    async def save(self, team: Team) -> Team:
        ...

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Team | None:
        ...

    @abstractmethod
    async def get_by_name(self, name: str) -> Team | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Team]:
        ...

    @abstractmethod
    async def update_occupancy(self, team_id: str, occupancy: int) -> None:
        """Write the team's new occupancy as computed by the assignment run."""
        ...
