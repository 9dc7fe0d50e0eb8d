"""Seed database from CSV files.

Usage:
    python -m grip.tools.seed_db
    python -m grip.tools.seed_db --data-dir data
    python -m grip.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from grip.adapters.csv_loader.loader import load_applications, load_teams
from grip.adapters.persistence.database import async_session_factory
from grip.adapters.persistence.models import (
    AdditionalEnrollmentModel,
    ApplicationModel,
    TeamModel,
)
from grip.domain.value_objects.enums import TeamKind

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete all data in correct order (respecting FK constraints)."""
    for model in [AdditionalEnrollmentModel, ApplicationModel, TeamModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing data")


def resolve_team_ids(
    names: list[str], team_map: dict[str, str], owner: str
) -> list[str]:
    """Map team names to ids, keeping order and dropping names that match nothing."""
    ids = []
    for name in names:
        team_id = _resolve_team_id(name, team_map)
        if team_id is None:
            logger.warning("%s: team '%s' not found, dropped from list", owner, name)
            continue
        ids.append(team_id)
    return ids


def _resolve_team_id(team_name: str, team_map: dict[str, str]) -> str | None:
    """Resolve team name to ID using fuzzy matching.

    Tries exact match first, then case-insensitive, then substring match.
    """
    if not team_name:
        return None

    if team_name in team_map:
        return team_map[team_name]

    name_lower = team_name.strip().lower()
    for known_name, tid in team_map.items():
        if known_name.lower() == name_lower:
            return tid

    # Substring match (e.g., "Hands Beta" matches "3D-Printed Hands Team Beta")
    for known_name, tid in team_map.items():
        if name_lower in known_name.lower() or known_name.lower() in name_lower:
            return tid

    return None


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"teams": 0, "applications": 0}

    team_csv = _find_csv(data_dir, ["teams", "team"])
    application_csv = _find_csv(data_dir, ["applications", "applicants", "members"])

    if not team_csv:
        raise FileNotFoundError(
            f"No teams CSV found in {data_dir}. Expected something like teams.csv"
        )

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Seed teams
        for td in load_teams(team_csv):
            existing = await session.execute(
                select(TeamModel).where(TeamModel.name == td["name"])
            )
            if existing.scalar_one_or_none():
                logger.debug("Team '%s' already exists, skipping", td["name"])
                continue

            try:
                kind = TeamKind.from_label(td["type"])
            except ValueError:
                logger.warning("Team '%s': unknown type '%s', skipping", td["name"], td["type"])
                continue
            if td["max_capacity"] <= 0:
                logger.warning("Team '%s': capacity must be positive, skipping", td["name"])
                continue

            session.add(TeamModel(
                name=td["name"],
                type=kind.value,
                max_capacity=td["max_capacity"],
                current_size=min(td["current_size"], td["max_capacity"]),
                meeting_time=td["meeting_time"],
                location=td["location"],
                description=td["description"],
            ))
            counts["teams"] += 1

        await session.commit()

        result = await session.execute(select(TeamModel))
        team_map = {t.name: t.id for t in result.scalars()}
        logger.info("Team map: %d teams", len(team_map))

        # 2. Seed applications (if CSV exists)
        if application_csv:
            for ad in load_applications(application_csv):
                if ad["email"]:
                    existing = await session.execute(
                        select(ApplicationModel).where(ApplicationModel.email == ad["email"])
                    )
                    if existing.scalars().first():
                        logger.debug("Application '%s' already exists, skipping", ad["email"])
                        continue

                owner = ad["full_name"] or ad["email"] or "application"
                application = ApplicationModel(
                    full_name=ad["full_name"],
                    email=ad["email"],
                    ufid=ad["ufid"],
                    team_preferences=resolve_team_ids(ad["team_preferences"], team_map, owner),
                    additional_teams=resolve_team_ids(ad["additional_teams"], team_map, owner),
                    skills=ad["skills"],
                    time_availability=[slot.to_dict() for slot in ad["time_availability"]],
                    status="pending",
                )
                if ad["submitted_at"] is not None:
                    application.submitted_at = ad["submitted_at"]
                session.add(application)
                counts["applications"] += 1

            await session.commit()
        else:
            logger.info("No applications CSV found — skipping application import")

    logger.info(
        "Seed complete: %d teams, %d applications",
        counts["teams"], counts["applications"],
    )
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        teams = (await session.execute(select(TeamModel))).scalars().all()
        applications = (await session.execute(select(ApplicationModel))).scalars().all()

        print(f"\n{'='*50}")
        print("SEED VERIFICATION")
        print(f"{'='*50}")
        print(f"Teams:        {len(teams)}")
        print(f"Applications: {len(applications)}")

        kinds: dict[str, int] = {}
        for t in teams:
            kinds[t.type] = kinds.get(t.type, 0) + 1
        print(f"Team kinds: {kinds}")

        seats = sum(t.max_capacity - t.current_size for t in teams if t.type == "technical")
        print(f"Open technical seats: {seats}")

        statuses: dict[str, int] = {}
        for a in applications:
            statuses[a.status] = statuses.get(a.status, 0) + 1
        print(f"Status distribution: {statuses}")

        without_prefs = sum(1 for a in applications if not a.team_preferences)
        without_slots = sum(1 for a in applications if not a.time_availability)
        print(f"Without preferences: {without_prefs}, without availability: {without_slots}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed GRiP database from CSV files")
    parser.add_argument(
        "--data-dir", type=str, default="data",
        help="Directory containing CSV files (default: data)",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
