from datetime import datetime
from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

TIME_FORMAT = "%H:%M"
DATE_FORMAT = "%Y-%m-%d"


def canonical_time(value: str) -> str:
    """Returns a time as zero-padded HH:MM, so that string order is time order."""
    if not isinstance(value, str):
        raise ValueError(f"Expected HH:MM string, got {value!r}")
    # The API may send "HH:MM:SS"; only minute precision is meaningful here.
    if value.count(":") == 2:
        value = value.rsplit(":", 1)[0]
    return datetime.strptime(value, TIME_FORMAT).strftime(TIME_FORMAT)


class Slot(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_time: str  # HH:MM
    end_time: str  # HH:MM
    is_available: bool
    booking_id: Optional[int] = None
    booking_status: Optional[str] = None

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def check_time(cls, value):
        return canonical_time(value)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.start_time, self.end_time)

    @property
    def label(self) -> str:
        return f"{self.start_time}-{self.end_time}"

    @property
    def status(self) -> str:
        """'available', 'booked' (has a real booking) or 'unavailable' (past or closed)."""
        if self.is_available:
            return "available"
        if self.booking_id:
            return "booked"
        return "unavailable"


class DayAvailability(BaseModel):
    date: str  # ISO format YYYY-MM-DD
    slots: List[Slot]

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        datetime.strptime(value, DATE_FORMAT)
        return value

    @field_validator("slots")
    @classmethod
    def sort_slots(cls, value: List[Slot]) -> List[Slot]:
        return sorted(value, key=lambda s: s.start_time)

    def find(self, start_time: str) -> Optional[Slot]:
        try:
            start_time = canonical_time(start_time)
        except ValueError:
            return None
        for slot in self.slots:
            if slot.start_time == start_time:
                return slot
        return None

    @property
    def available_count(self) -> int:
        return sum(1 for s in self.slots if s.is_available)


class AvailabilityResult(BaseModel):
    day: DayAvailability
    source: Literal["api", "fallback"]
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class BookingIntent(BaseModel):
    model_config = ConfigDict(frozen=True)

    court_id: int
    date: str  # ISO format YYYY-MM-DD
    times: str  # "HH:MM-HH:MM,HH:MM-HH:MM"

    @property
    def time_ranges(self) -> List[Tuple[str, str]]:
        ranges = []
        for pair in self.times.split(","):
            start, end = pair.split("-")
            ranges.append((start, end))
        return ranges

    @property
    def start_time(self) -> str:
        return self.time_ranges[0][0]

    @property
    def end_time(self) -> str:
        return self.time_ranges[-1][1]

    @property
    def duration_hours(self) -> int:
        # One slot is one hour.
        return len(self.time_ranges)

    def to_query_params(self) -> dict:
        return {"court_id": self.court_id, "date": self.date, "selected_times": self.times}
