"""CSV loader — reads and normalizes team and application exports."""

from __future__ import annotations

import csv
import logging
from datetime import datetime
from pathlib import Path

from grip.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_list,
    parse_skills,
    parse_time_slots,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [",", ";", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Returns:
        List of dicts keyed by normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = [
            {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            for raw_row in reader
        ]

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_teams(file_path: Path) -> list[dict]:
    """Load and normalize the teams CSV.

    Expected columns (after normalization):
        name, type, max_capacity (or capacity), current_size, meeting_time,
        location, description
    """
    teams = []
    for row in _read_csv(file_path):
        name = row.get("name") or row.get("team") or row.get("team_name")
        if not name:
            logger.warning("Skipping team row without a name: %s", row)
            continue
        teams.append({
            "name": name,
            "type": (row.get("type") or row.get("kind") or "technical").lower(),
            "max_capacity": _parse_int(row.get("max_capacity") or row.get("capacity")),
            "current_size": _parse_int(row.get("current_size") or row.get("occupancy")),
            "meeting_time": row.get("meeting_time"),
            "location": row.get("location"),
            "description": row.get("description"),
        })
    logger.info("Parsed %d teams", len(teams))
    return teams


def load_applications(file_path: Path) -> list[dict]:
    """Load and normalize the applications CSV.

    Expected columns (after normalization):
        full_name (or first_name + last_name), email, ufid, team_preferences,
        additional_teams, skills, time_availability, submitted_at

    Team columns hold team *names*; the seeder resolves them to ids.
    """
    applications = []
    for row in _read_csv(file_path):
        full_name = row.get("full_name") or row.get("name") or " ".join(
            p for p in (row.get("first_name"), row.get("last_name")) if p
        )
        applications.append({
            "full_name": full_name or "",
            "email": row.get("email"),
            "ufid": row.get("ufid"),
            "team_preferences": parse_list(row.get("team_preferences") or row.get("preferences")),
            "additional_teams": parse_list(row.get("additional_teams")),
            "skills": parse_skills(row.get("skills")),
            "time_availability": parse_time_slots(
                row.get("time_availability") or row.get("availability")
            ),
            "submitted_at": _parse_datetime(row.get("submitted_at")),
        })
    logger.info("Parsed %d applications", len(applications))
    return applications


def _parse_int(value: str | None) -> int:
    if not value:
        return 0
    try:
        # handle "4", "4.0"
        return int(float(value.replace(",", ".").strip()))
    except ValueError:
        return 0


def _parse_datetime(raw: str | None) -> datetime | None:
    """Parse submission timestamps in the formats seen in exports."""
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.strip())
    except ValueError:
        pass
    for fmt in ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y %H:%M", "%m/%d/%Y"):
        try:
            return datetime.strptime(raw.strip(), fmt)
        except ValueError:
            continue
    logger.warning("Could not parse timestamp: %s", raw)
    return None
