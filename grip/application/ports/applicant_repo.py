"""Port interface for application persistence."""

from abc import ABC, abstractmethod

from grip.domain.entities.applicant import Applicant
from grip.domain.entities.decision import AssignmentDecision


class ApplicantRepository(ABC):
    @abstractmethod
    async def save(self, applicant: Applicant) -> Applicant:
        ...

    @abstractmethod
    async def get_by_id(self, applicant_id: str) -> Applicant | None:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Applicant | None:
        ...

    @abstractmethod
    async def get_all(self) -> list[Applicant]:
        ...

    @abstractmethod
    async def get_pending(self) -> list[Applicant]:
        """Return applications whose status is still pending."""
        ...

    @abstractmethod
    async def record_decision(self, decision: AssignmentDecision) -> None:
        """Write status, assigned team and reason for one application."""
        ...

    @abstractmethod
    async def count_by_status(self) -> dict[str, int]:
        ...
