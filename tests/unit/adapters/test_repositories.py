"""Tests for mapping stored application rows into domain objects."""

from datetime import datetime, timezone

import pytest

from grip.adapters.persistence.models import ApplicationModel
from grip.adapters.persistence.repositories import _application_to_domain
from grip.domain.entities.applicant import MalformedApplicantError
from grip.domain.value_objects.enums import ApplicationStatus


def _row(time_availability) -> ApplicationModel:
    return ApplicationModel(
        id="app-1",
        full_name="Ana Lopez",
        email="ana@ufl.edu",
        team_preferences=["t1"],
        additional_teams=[],
        skills=["CAD"],
        time_availability=time_availability,
        status="pending",
        submitted_at=datetime(2026, 9, 1, 9, 0, tzinfo=timezone.utc),
    )


def test_maps_stored_slots():
    a = _application_to_domain(_row([{"day": "Mon", "startTime": "10:00", "endTime": "12:00"}]))

    assert a.status == ApplicationStatus.PENDING
    assert [s.describe() for s in a.availability] == ["Mon 10:00-12:00"]
    a.validate()


@pytest.mark.parametrize(
    "slots",
    [
        [{"startTime": "10:00", "endTime": "12:00"}],
        ["Mon 10:00-12:00"],
        [{"day": "Mon", "startTime": "10:00", "endTime": "12:00"}, None],
    ],
)
def test_unreadable_slot_is_rejected_by_validation(slots):
    a = _application_to_domain(_row(slots))

    assert a.availability == []
    with pytest.raises(MalformedApplicantError, match="unreadable availability slot"):
        a.validate()
