import logging
from datetime import datetime
from typing import List, Mapping, Sequence, Tuple

from court_booking.errors import EmptySelection
from court_booking.models import DATE_FORMAT, BookingIntent, Slot, canonical_time

logger = logging.getLogger(__name__)


def build_booking_intent(selection: Sequence[Slot], date_str: str, court_id: int) -> BookingIntent:
    """Serializes a selection into the booking intent handed to booking submission."""
    if not selection:
        raise EmptySelection()
    ordered = sorted(selection, key=lambda s: s.start_time)
    times = ",".join(f"{s.start_time}-{s.end_time}" for s in ordered)
    return BookingIntent(court_id=court_id, date=date_str, times=times)


def parse_selected_times(value: str) -> List[Tuple[str, str]]:
    """Parses "08:00-09:00,09:00-10:00" into [("08:00", "09:00"), ("09:00", "10:00")]."""
    ranges = []
    for pair in value.split(","):
        pair = pair.strip()
        if not pair:
            continue
        try:
            start, end = (canonical_time(t.strip()) for t in pair.split("-"))
        except ValueError:
            raise ValueError(f"Invalid time range '{pair}', expected HH:MM-HH:MM")
        if end <= start:
            raise ValueError(f"Time range '{pair}' ends before it starts")
        ranges.append((start, end))
    return sorted(ranges)


def intent_from_query(params: Mapping[str, str]) -> BookingIntent:
    """Rebuilds a BookingIntent from court_id, date and selected_times query parameters."""
    missing = [key for key in ("court_id", "date", "selected_times") if not params.get(key)]
    if missing:
        raise ValueError(f"Missing booking parameters: {', '.join(missing)}")

    datetime.strptime(params["date"], DATE_FORMAT)
    ranges = parse_selected_times(params["selected_times"])
    if not ranges:
        raise EmptySelection()

    times = ",".join(f"{start}-{end}" for start, end in ranges)
    logger.debug(f"Parsed booking intent for court {params['court_id']} on {params['date']}: {times}")
    return BookingIntent(court_id=int(params["court_id"]), date=params["date"], times=times)
