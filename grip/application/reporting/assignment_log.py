"""Render an AssignmentRun as the downloadable plain-text log."""

from __future__ import annotations

from datetime import datetime, timezone

from grip.application.reporting.events import ApplicantTrace, AssignmentRun
from grip.domain.policies.capacity import CapacityRow
from grip.domain.policies.preference_walk import ordinal
from grip.domain.value_objects.enums import ApplicationStatus, PreferenceOutcome

RULE = "=" * 72
THIN_RULE = "-" * 72


def log_filename(generated_at: datetime) -> str:
    """assignment-log-2026-10-19T14-05-00Z.txt (colons are not filename-safe)."""
    if generated_at.tzinfo is not None:
        generated_at = generated_at.astimezone(timezone.utc)
    return f"assignment-log-{generated_at.strftime('%Y-%m-%dT%H-%M-%SZ')}.txt"


def render_assignment_log(run: AssignmentRun) -> str:
    lines: list[str] = [
        RULE,
        "TEAM ASSIGNMENT LOG",
        f"Generated: {run.generated_at.isoformat()}",
        RULE,
        "",
        "TECHNICAL TEAM CAPACITY (BEFORE RUN)",
        *_capacity_table(run.capacity_before),
        "",
        f"APPLICATIONS ({len(run.traces)} pending)",
        THIN_RULE,
    ]

    if not run.traces:
        lines.append("No pending applications to process.")
    for index, trace in enumerate(run.traces, start=1):
        lines.extend(_applicant_block(index, trace))
        lines.append("")

    failures = [t.failure for t in run.traces if t.failure is not None]
    if failures:
        lines.append("LEFT PENDING")
        lines.append(THIN_RULE)
        for failure in failures:
            lines.append(
                f"  {failure.applicant_name} ({failure.applicant_id}): "
                f"{failure.stage} failed: {failure.error}"
            )
        lines.append("")

    s = run.summary
    lines.extend([
        "SUMMARY",
        THIN_RULE,
        f"  Total processed: {s.total_processed}",
        f"  Assigned:        {s.assigned}",
        f"  Waitlisted:      {s.waitlisted}",
        f"  Left pending:    {s.failed}",
        "",
        "TECHNICAL TEAM CAPACITY (AFTER RUN)",
        *_capacity_table(run.capacity_after),
        RULE,
    ])
    return "\n".join(lines) + "\n"


def _applicant_block(index: int, trace: ApplicantTrace) -> list[str]:
    submitted = trace.submitted_at.isoformat() if trace.submitted_at else "unknown"
    lines = [f"[{index}] {trace.applicant_name} ({trace.applicant_id}) submitted {submitted}"]

    if trace.failure is not None and trace.failure.stage == "validation":
        lines.append(f"  Validation: rejected ({trace.failure.error})")
        lines.append("  Result: LEFT PENDING")
        return lines

    decision = trace.decision or trace.attempted
    if trace.disqualified and decision is not None:
        lines.append(f"  Validation: {decision.reasoning}")
    else:
        lines.append("  Validation: ok")

    if trace.checks:
        lines.append("  Preferences:")
        for check in trace.checks:
            if check.outcome == PreferenceOutcome.UNKNOWN:
                lines.append(
                    f"    (submitted #{check.submitted_position}) {check.team_id}: "
                    "unknown team, skipped"
                )
            elif check.outcome == PreferenceOutcome.FULL:
                lines.append(f"    {ordinal(check.rank)} {check.team_name}: full, rejected")
            else:
                lines.append(
                    f"    {ordinal(check.rank)} {check.team_name}: accepted "
                    f"({check.seats_remaining} seat(s) were open)"
                )

    if trace.failure is not None:
        lines.append(f"  Result: LEFT PENDING ({trace.failure.stage} failed: {trace.failure.error})")
        return lines

    if decision.status == ApplicationStatus.ASSIGNED:
        team_name = next(
            (c.team_name for c in trace.checks if c.outcome == PreferenceOutcome.ACCEPTED),
            decision.assigned_team_id,
        )
        lines.append(
            f"  Result: ASSIGNED to {team_name} ({ordinal(decision.preference_rank)} choice)"
        )
    else:
        lines.append("  Result: WAITLISTED")
    lines.append(f"  Reason: {decision.reasoning}")

    if trace.enrollments:
        lines.append("  Additional teams:")
        for outcome in trace.enrollments:
            lines.append(f"    {outcome.team_name}: {outcome.status.value} ({outcome.reason})")
    return lines


def _capacity_table(rows: list[CapacityRow]) -> list[str]:
    if not rows:
        return ["  (no technical teams)"]
    width = max(20, *(len(r.name) for r in rows))
    out = [f"  {'Team':<{width}}  {'Capacity':>8}  {'Occupied':>8}  {'Open':>5}"]
    for r in rows:
        out.append(f"  {r.name:<{width}}  {r.capacity:>8}  {r.occupancy:>8}  {r.remaining:>5}")
    return out
