"""Port interface for additional-team enrollment persistence."""

from abc import ABC, abstractmethod

from grip.domain.entities.enrollment import AdditionalEnrollment


class EnrollmentRepository(ABC):
    @abstractmethod
    async def add(self, enrollment: AdditionalEnrollment) -> AdditionalEnrollment:
        """Persist an enrollment.

        Must raise if the (applicant, team) pair is already enrolled.
        """
        ...

    @abstractmethod
    async def get_by_applicant(self, applicant_id: str) -> list[AdditionalEnrollment]:
        ...

    @abstractmethod
    async def get_by_team(self, team_id: str) -> list[AdditionalEnrollment]:
        ...
