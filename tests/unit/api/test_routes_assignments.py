"""Tests for the assignment and team endpoints, wired to in-memory fakes."""

import pytest
from fastapi.testclient import TestClient

from grip.infrastructure.api.dependencies import (
    get_applicant_repo,
    get_run_assignment_uc,
    get_team_repo,
)
from grip.main import app
from tests.fakes import FakeGateway, applicant, constant, technical


@pytest.fixture
def gateway():
    return FakeGateway(
        teams=[technical("t", 1, name="Hands Alpha"), constant("x", 5, name="Outreach")],
        applicants=[
            applicant("a", ["t"], additional=["x"]),
            applicant("b", ["t"], minute=3),
        ],
    )


@pytest.fixture
def client(gateway):
    app.dependency_overrides[get_run_assignment_uc] = lambda: gateway.use_case()
    app.dependency_overrides[get_applicant_repo] = lambda: gateway.applicants
    app.dependency_overrides[get_team_repo] = lambda: gateway.teams
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_run_returns_report(client, gateway):
    resp = client.post("/api/assignments/run")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["filename"] == "assignment-log-2026-09-01T09-00-00Z.txt"
    assert body["summary"]["assigned"] == 1
    assert body["summary"]["waitlisted"] == 1
    assert [d["status"] for d in body["decisions"]] == ["assigned", "waitlisted"]
    assert body["enrollments"]["a"][0]["status"] == "enrolled"
    assert body["log"].startswith("=")
    assert gateway.occupancy_of("t") == 1


def test_run_log_is_a_text_download(client):
    resp = client.post("/api/assignments/run/log")

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert 'filename="assignment-log-2026-09-01T09-00-00Z.txt"' in resp.headers["content-disposition"]
    assert "TEAM ASSIGNMENT LOG" in resp.text


def test_run_unavailable_when_snapshot_cannot_load(client, gateway):
    gateway.teams.load_error = ConnectionError("database offline")

    resp = client.post("/api/assignments/run")

    assert resp.status_code == 503
    assert "database offline" in resp.json()["detail"]


def test_stats_after_run(client):
    client.post("/api/assignments/run")
    resp = client.get("/api/assignments/stats")

    assert resp.json() == {"total": 2, "pending": 0, "assigned": 1, "waitlisted": 1}


def test_teams_listing(client):
    resp = client.get("/api/teams")

    body = resp.json()
    assert body["total"] == 2
    by_id = {t["id"]: t for t in body["teams"]}
    assert by_id["t"]["seats_remaining"] == 1
    assert by_id["x"]["kind"] == "constant"
