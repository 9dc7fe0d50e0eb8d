"""Tests for the plain-text assignment log."""

from datetime import datetime, timedelta, timezone

import pytest

from grip.application.reporting.assignment_log import log_filename
from tests.fakes import FakeGateway, applicant, constant, technical


def test_log_filename_is_utc_and_filename_safe():
    eastern = timezone(timedelta(hours=-4))
    at = datetime(2026, 10, 19, 10, 5, 30, tzinfo=eastern)

    assert log_filename(at) == "assignment-log-2026-10-19T14-05-30Z.txt"


@pytest.mark.asyncio
async def test_log_has_every_section():
    gw = FakeGateway(
        teams=[technical("t1", 1, name="Hands Alpha"), technical("t2", 2, name="Hands Beta")],
        applicants=[applicant("a", ["t1"]), applicant("b", ["t1", "t2"], minute=1)],
    )
    report = await gw.use_case().execute()
    text = report.log_text

    for heading in (
        "TEAM ASSIGNMENT LOG",
        "TECHNICAL TEAM CAPACITY (BEFORE RUN)",
        "APPLICATIONS (2 pending)",
        "SUMMARY",
        "TECHNICAL TEAM CAPACITY (AFTER RUN)",
    ):
        assert heading in text
    assert text.index("(BEFORE RUN)") < text.index("SUMMARY") < text.index("(AFTER RUN)")
    assert "LEFT PENDING" not in text


@pytest.mark.asyncio
async def test_log_traces_each_preference_check():
    gw = FakeGateway(
        teams=[technical("t1", 1, occupancy=1, name="Hands Alpha"), technical("t2", 2, name="Hands Beta")],
        applicants=[applicant("a", ["ghost", "t1", "t2"])],
    )
    text = (await gw.use_case().execute()).log_text

    assert "(submitted #1) ghost: unknown team, skipped" in text
    assert "1st Hands Alpha: full, rejected" in text
    assert "2nd Hands Beta: accepted (2 seat(s) were open)" in text
    assert "Result: ASSIGNED to Hands Beta (2nd choice)" in text


@pytest.mark.asyncio
async def test_log_shows_disqualification_and_waitlist():
    gw = FakeGateway(
        teams=[technical("t", 3)],
        applicants=[applicant("a", ["t"], availability=[])],
    )
    text = (await gw.use_case().execute()).log_text

    assert "Validation: Waitlisted: no time availability provided." in text
    assert "Result: WAITLISTED" in text
    assert "Waitlisted:      1" in text


@pytest.mark.asyncio
async def test_log_lists_additional_team_outcomes():
    gw = FakeGateway(
        teams=[technical("t", 1), constant("x", 1, occupancy=1, name="Outreach")],
        applicants=[applicant("a", ["t"], additional=["x"])],
    )
    text = (await gw.use_case().execute()).log_text

    assert "Additional teams:" in text
    assert "Outreach: full (1/1 seats taken)" in text


@pytest.mark.asyncio
async def test_log_reports_applicants_left_pending():
    gw = FakeGateway(
        teams=[technical("t", 1)],
        applicants=[applicant("a", ["t"])],
        fail_applicants={"a"},
    )
    text = (await gw.use_case().execute()).log_text

    assert "Result: LEFT PENDING (commit failed: write rejected for a)" in text
    assert "Applicant a (a): commit failed: write rejected for a" in text
    assert "Left pending:    1" in text


@pytest.mark.asyncio
async def test_capacity_table_reflects_run():
    gw = FakeGateway(
        teams=[technical("t", 2, name="Prosthetics")],
        applicants=[applicant("a", ["t"])],
    )
    text = (await gw.use_case().execute()).log_text
    before, after = text.split("SUMMARY")

    assert [line for line in before.splitlines() if "Prosthetics" in line][0].split()[-3:] == ["2", "0", "2"]
    assert [line for line in after.splitlines() if "Prosthetics" in line][0].split()[-3:] == ["2", "1", "1"]


@pytest.mark.asyncio
async def test_empty_pool():
    gw = FakeGateway(teams=[], applicants=[])
    text = (await gw.use_case().execute()).log_text

    assert "No pending applications to process." in text
    assert "(no technical teams)" in text
