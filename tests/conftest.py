"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest

from grip.domain.value_objects.time_slot import TimeSlot

FIXED_NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def weekday_slots():
    return [
        TimeSlot(day="Mon", start_time="10:00", end_time="12:00"),
        TimeSlot(day="Wed", start_time="14:00", end_time="16:00"),
    ]
