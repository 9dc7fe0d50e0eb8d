"""CSV column normalization — handles BOM, trailing spaces, list and time-slot cells."""

from __future__ import annotations

import re

from grip.domain.value_objects.time_slot import TimeSlot

_SLOT_RE = re.compile(
    r"^(?P<day>[A-Za-z]+)\s+(?P<start>\d{1,2}:\d{2})\s*-\s*(?P<end>\d{1,2}:\d{2})$"
)


def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    - Removes BOM characters (\\ufeff)
    - Replaces runs of spaces / non-breaking spaces with a single underscore
    - Lowercases and drops punctuation
    """
    name = name.replace("\ufeff", "").strip()
    name = re.sub(r"[\s\u00a0]+", "_", name)
    name = name.lower()
    return re.sub(r"[^\w]", "", name, flags=re.UNICODE)


def clean_string(value: str | None) -> str | None:
    """Strip whitespace and return None for empty strings."""
    if value is None:
        return None
    value = value.strip()
    return value if value else None


def parse_list(raw: str | None) -> list[str]:
    """Split 'Alpha; Beta | Gamma' into ['Alpha', 'Beta', 'Gamma'].

    Order is kept (preference lists are ranked). Commas are not separators
    because team names may contain them.
    """
    if not raw:
        return []
    return [p.strip() for p in re.split(r"[;|\n]+", raw) if p.strip()]


def parse_skills(raw: str | None) -> list[str]:
    """Parse 'CAD, Soldering; python' into distinct skills, first spelling kept."""
    if not raw:
        return []
    parts = [p.strip() for p in re.split(r"[,;]+", raw) if p.strip()]
    seen: dict[str, str] = {}
    for part in parts:
        seen.setdefault(part.lower(), part)
    return list(seen.values())


def parse_time_slots(raw: str | None) -> list[TimeSlot]:
    """Parse 'Mon 10:00-12:00; Wed 14:00-16:00' into TimeSlots.

    Malformed entries are dropped.
    """
    slots = []
    for part in parse_list(raw):
        match = _SLOT_RE.match(part)
        if match:
            slots.append(
                TimeSlot(day=match["day"], start_time=match["start"], end_time=match["end"])
            )
    return slots
