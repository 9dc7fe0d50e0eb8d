"""TimeSlot value object — one weekly availability window."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TimeSlot:
    day: str
    start_time: str
    end_time: str

    def describe(self) -> str:
        return f"{self.day} {self.start_time}-{self.end_time}"

    def to_dict(self) -> dict[str, str]:
        return {"day": self.day, "startTime": self.start_time, "endTime": self.end_time}

    @classmethod
    def from_dict(cls, raw: dict) -> "TimeSlot":
        """Build from the stored JSON shape ({"day", "startTime", "endTime"}).

        Raises:
            ValueError: if the entry is not an object or has no day.
        """
        if not isinstance(raw, dict) or not raw.get("day"):
            raise ValueError(f"unreadable availability slot: {raw!r}")
        return cls(
            day=str(raw["day"]),
            start_time=str(raw.get("startTime") or raw.get("start_time") or ""),
            end_time=str(raw.get("endTime") or raw.get("end_time") or ""),
        )
