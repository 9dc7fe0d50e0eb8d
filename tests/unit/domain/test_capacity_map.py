"""Tests for the run-scoped CapacityMap."""

import pytest

from grip.domain.entities.team import Team
from grip.domain.policies.capacity import CapacityMap
from grip.domain.value_objects.enums import TeamKind


def _teams() -> list[Team]:
    return [
        Team(id="t2", name="Beta", kind=TeamKind.TECHNICAL, capacity=2, occupancy=1),
        Team(id="t1", name="Alpha", kind=TeamKind.TECHNICAL, capacity=1, occupancy=0),
        Team(id="c1", name="Outreach", kind=TeamKind.CONSTANT, capacity=30, occupancy=0),
    ]


def test_seeded_from_requested_kind_only():
    technical = CapacityMap(_teams(), TeamKind.TECHNICAL)
    assert len(technical) == 2
    assert "t1" in technical
    assert "c1" not in technical

    constant = CapacityMap(_teams(), TeamKind.CONSTANT)
    assert list(r.team_id for r in constant.snapshot()) == ["c1"]


def test_reserve_and_release():
    cm = CapacityMap(_teams(), TeamKind.TECHNICAL)
    assert cm.reserve("t2") == 2
    assert cm.has_room("t2") is False
    assert cm.release("t2") == 1
    assert cm.has_room("t2") is True


def test_reserve_full_team_raises():
    cm = CapacityMap(_teams(), TeamKind.TECHNICAL)
    cm.reserve("t1")
    with pytest.raises(ValueError, match="no remaining seats"):
        cm.reserve("t1")


def test_reserve_unknown_team_raises():
    cm = CapacityMap(_teams(), TeamKind.TECHNICAL)
    with pytest.raises(KeyError):
        cm.reserve("c1")


def test_source_teams_are_not_mutated():
    teams = _teams()
    cm = CapacityMap(teams, TeamKind.TECHNICAL)
    cm.reserve("t1")
    assert teams[1].occupancy == 0


def test_snapshot_sorted_by_name_and_frozen():
    cm = CapacityMap(_teams(), TeamKind.TECHNICAL)
    before = cm.snapshot()
    cm.reserve("t1")
    assert [r.name for r in before] == ["Alpha", "Beta"]
    assert before[0].occupancy == 0
    assert before[1].remaining == 1
    assert cm.snapshot()[0].occupancy == 1


def test_name_of_falls_back_to_id():
    cm = CapacityMap(_teams(), TeamKind.TECHNICAL)
    assert cm.name_of("t1") == "Alpha"
    assert cm.name_of("zzz") == "zzz"
