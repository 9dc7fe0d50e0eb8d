"""Tests for the preference walk policy."""

import pytest

from grip.domain.policies.capacity import CapacityMap
from grip.domain.policies.preference_walk import (
    NO_AVAILABILITY_REASON,
    NO_PREFERENCES_REASON,
    ordinal,
    walk_preferences,
)
from grip.domain.value_objects.enums import ApplicationStatus, PreferenceOutcome, TeamKind
from tests.fakes import applicant, constant, technical


def _capacity(*teams) -> CapacityMap:
    return CapacityMap(list(teams), TeamKind.TECHNICAL)


def test_first_choice_with_room():
    walk = walk_preferences(applicant("a", ["t1", "t2"]), _capacity(technical("t1", 1), technical("t2", 1)))
    assert walk.decision.status == ApplicationStatus.ASSIGNED
    assert walk.decision.assigned_team_id == "t1"
    assert walk.decision.preference_rank == 1
    assert "1st choice" in walk.decision.reasoning
    assert [c.outcome for c in walk.checks] == [PreferenceOutcome.ACCEPTED]


def test_second_choice_when_first_full():
    """T1 has no seats left, T2 has one → rank 2, reason mentions T1 full."""
    cm = _capacity(technical("t1", 2, occupancy=2, name="T1"), technical("t2", 1, name="T2"))
    walk = walk_preferences(applicant("c", ["t1", "t2"]), cm)
    assert walk.decision.assigned_team_id == "t2"
    assert walk.decision.preference_rank == 2
    assert "2nd choice: T2" in walk.decision.reasoning
    assert "Full: T1" in walk.decision.reasoning


def test_walk_does_not_reserve():
    cm = _capacity(technical("t1", 1))
    walk_preferences(applicant("a", ["t1"]), cm)
    assert cm.has_room("t1") is True


def test_empty_preferences_disqualify_regardless_of_capacity():
    walk = walk_preferences(applicant("d", []), _capacity(technical("t1", 10)))
    assert walk.decision.status == ApplicationStatus.WAITLISTED
    assert walk.decision.reasoning == NO_PREFERENCES_REASON
    assert "no team preferences" in walk.decision.reasoning
    assert walk.disqualified is True
    assert walk.checks == []


def test_missing_availability_disqualifies():
    walk = walk_preferences(applicant("a", ["t1"], availability=[]), _capacity(technical("t1", 1)))
    assert walk.decision.status == ApplicationStatus.WAITLISTED
    assert walk.decision.reasoning == NO_AVAILABILITY_REASON
    assert walk.disqualified is True


def test_preferences_checked_before_availability():
    walk = walk_preferences(applicant("a", [], availability=[]), _capacity())
    assert walk.decision.reasoning == NO_PREFERENCES_REASON


def test_unknown_id_skipped_before_ranking():
    """Z does not exist, T has room → rank 1 on T."""
    walk = walk_preferences(applicant("f", ["z", "t"]), _capacity(technical("t", 1)))
    assert walk.decision.assigned_team_id == "t"
    assert walk.decision.preference_rank == 1
    assert walk.unknown_team_ids == ["z"]
    unknown = walk.checks[0]
    assert unknown.rank is None
    assert unknown.submitted_position == 1
    assert walk.checks[1].submitted_position == 2


def test_constant_team_in_preferences_counts_as_unknown():
    cm = CapacityMap([constant("c", 10), technical("t", 1)], TeamKind.TECHNICAL)
    walk = walk_preferences(applicant("a", ["c", "t"]), cm)
    assert walk.unknown_team_ids == ["c"]
    assert walk.decision.preference_rank == 1


def test_all_full_waitlists_and_lists_teams():
    cm = _capacity(technical("t1", 1, 1, name="Alpha"), technical("t2", 1, 1, name="Beta"))
    walk = walk_preferences(applicant("a", ["t1", "t2"]), cm)
    assert walk.decision.status == ApplicationStatus.WAITLISTED
    assert walk.decision.assigned_team_id is None
    assert walk.decision.preference_rank is None
    assert "Alpha, Beta" in walk.decision.reasoning
    assert walk.disqualified is False


def test_all_unknown_waitlists():
    walk = walk_preferences(applicant("a", ["x", "y"]), _capacity(technical("t", 1)))
    assert walk.decision.status == ApplicationStatus.WAITLISTED
    assert "none of the preferred teams" in walk.decision.reasoning
    assert walk.unknown_team_ids == ["x", "y"]


@pytest.mark.parametrize(
    "n, expected",
    [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (21, "21st"), (23, "23rd")],
)
def test_ordinal(n, expected):
    assert ordinal(n) == expected
