"""AdditionalEnrollment entity — membership in a constant team."""

from dataclasses import dataclass


@dataclass
class AdditionalEnrollment:
    id: int | None
    applicant_id: str
    team_id: str
