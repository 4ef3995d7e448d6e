import logging
import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, List, Optional

import requests
from pydantic import ValidationError

from court_booking import config
from court_booking.config import ApiContext
from court_booking.errors import DateOutOfRange, FetchFailed
from court_booking.models import DATE_FORMAT, AvailabilityResult, DayAvailability, Slot

logger = logging.getLogger(__name__)


def validate_court_id(court_id: int) -> int:
    if isinstance(court_id, bool) or not isinstance(court_id, int) or court_id <= 0:
        raise ValueError(f"Court id must be a positive integer, got {court_id!r}")
    return court_id


def validate_booking_date(date_str: str, today: Optional[date] = None) -> str:
    """Checks that a date is bookable: not in the past and within the booking horizon."""
    try:
        day = datetime.strptime(date_str, DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise DateOutOfRange(f"Date must be in YYYY-MM-DD format, got {date_str!r}")

    today = today or date.today()
    last_day = today + timedelta(days=config.BOOKING_HORIZON_DAYS)
    if day < today:
        raise DateOutOfRange(f"{date_str} is in the past")
    if day > last_day:
        raise DateOutOfRange(f"{date_str} is more than {config.BOOKING_HORIZON_DAYS} days ahead")
    return date_str


def build_url(court_id: int, context: ApiContext) -> str:
    """Constructs the availability endpoint URL for a court."""
    url = context.url(f"/courts/{court_id}/availability")
    logger.debug(f"Built URL: {url}")
    return url


def _status_message(status_code: int) -> str:
    if status_code == 404:
        return "No schedule found for this court"
    if status_code == 500:
        return "Server error while loading the court schedule"
    return f"Could not load the court schedule ({status_code})"


def fetch_availability_payload(court_id: int, date_str: str, context: ApiContext) -> Any:
    """Fetches the raw availability JSON for one court and date."""
    url = build_url(court_id, context)
    logger.info(f"Fetching availability for court {court_id} on {date_str} from {url}")

    try:
        response = requests.get(
            url,
            params={"date": date_str},
            headers=context.headers(),
            timeout=context.timeout,
        )
    except requests.exceptions.RequestException as e:
        raise FetchFailed(f"Could not reach the booking API: {e}") from e

    logger.debug(f"Response status: {response.status_code}")
    if not response.ok:
        raise FetchFailed(_status_message(response.status_code))

    try:
        return response.json()
    except ValueError as e:
        raise FetchFailed("Availability response is not valid JSON") from e


def parse_availability(data: Any, date_str: str) -> List[Slot]:
    """Parses either a flat Slot list or a list of {date, slots} days into slots for date_str."""
    if not isinstance(data, list):
        logger.debug(f"Response data: {data}")
        raise FetchFailed("Unexpected availability format: expected a list")

    try:
        if data and all(isinstance(item, dict) and "slots" in item for item in data):
            for item in data:
                if item.get("date") == date_str:
                    return DayAvailability.model_validate(item).slots
            logger.warning(f"Availability response has no entry for {date_str}.")
            return []
        return DayAvailability(date=date_str, slots=data).slots
    except ValidationError as e:
        logger.debug(f"Response data: {data}")
        raise FetchFailed(f"Unexpected availability format: {e.error_count()} invalid field(s)") from e


def generate_fallback_slots(
    date_str: str,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> List[Slot]:
    """Generates a placeholder hourly schedule between opening and closing hour.

    Hours at or before the current hour on the current date are never available.
    The remaining hours are marked available at random, so the result must not be
    treated as real booking data.
    """
    now = now or datetime.now()
    rng = rng or random.Random()
    is_today = now.strftime(DATE_FORMAT) == date_str

    slots = []
    for hour in range(config.OPENING_HOUR, config.CLOSING_HOUR):
        available = not (is_today and hour <= now.hour)
        if available:
            available = rng.random() < config.FALLBACK_AVAILABILITY_RATIO
        slots.append(Slot(start_time=f"{hour:02d}:00", end_time=f"{hour + 1:02d}:00", is_available=available))

    logger.debug(f"Generated {len(slots)} fallback slots for {date_str}")
    return slots


def get_day_availability(
    court_id: int,
    date_str: str,
    context: ApiContext,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> AvailabilityResult:
    """Fetches availability for one day, falling back to a generated schedule when needed."""
    try:
        slots = parse_availability(fetch_availability_payload(court_id, date_str, context), date_str)
    except FetchFailed as e:
        logger.error(f"Error fetching availability for court {court_id} on {date_str}: {e}")
        day = DayAvailability(date=date_str, slots=generate_fallback_slots(date_str, now, rng))
        return AvailabilityResult(day=day, source="fallback", error=str(e))

    if not slots:
        logger.warning(f"No slots returned for court {court_id} on {date_str}. Using generated schedule.")
        day = DayAvailability(date=date_str, slots=generate_fallback_slots(date_str, now, rng))
        return AvailabilityResult(day=day, source="fallback")

    return AvailabilityResult(day=DayAvailability(date=date_str, slots=slots), source="api")


@dataclass(frozen=True)
class FetchTicket:
    court_id: int
    date: str
    generation: int


class AvailabilityLoader:
    """Tags each availability request so that superseded responses can be dropped."""

    def __init__(self):
        self._generation = 0
        self._current: Optional[FetchTicket] = None

    def begin(self, court_id: int, date_str: str) -> FetchTicket:
        self._generation += 1
        self._current = FetchTicket(court_id=court_id, date=date_str, generation=self._generation)
        return self._current

    def is_current(self, ticket: FetchTicket) -> bool:
        return ticket == self._current

    def cancel(self):
        """Invalidates any in-flight request."""
        self._current = None
