import logging
import sys
from typing import List, Optional

from court_booking import config
from court_booking.errors import BookingError, DateOutOfRange
from court_booking.models import AvailabilityResult
from court_booking.pricing import format_price
from court_booking.selection import SelectionMode
from court_booking.session import BookingSession

logger = logging.getLogger(__name__)

STATUS_PREFIX = {
    "available": "[AVAILABLE]  ",
    "booked": "[BOOKED]     ",
    "unavailable": "[UNAVAILABLE]",
}


def print_availability_report(court_id: int, result: AvailabilityResult):
    """Prints the formatted availability report to stdout."""
    day = result.day
    print(f"\n--- Availability for court {court_id} on {day.date} ---")

    if result.failed:
        print(f"Could not load the schedule: {result.error}")
        print("Showing a generated schedule. Run the command again to retry.")
    elif result.source == "fallback":
        print("The booking API returned no slots. Showing a generated schedule.")

    for slot in day.slots:
        print(f"{STATUS_PREFIX[slot.status]} {slot.label}")

    if day.available_count:
        print(f"Summary: {day.available_count} of {len(day.slots)} slots available on {day.date}.")
    else:
        print(f"Summary: No slots available on {day.date}.")


def print_selection_summary(session: BookingSession):
    """Prints the chosen slots, the total price and the booking query."""
    intent = session.booking_intent()
    print(f"\nSelected: {', '.join(s.label for s in session.selection)}")
    print(f"Time: {intent.start_time} - {intent.end_time} ({intent.duration_hours}h)")
    if session.hourly_rate:
        print(f"Total: {format_price(session.total_price)}")
    query = "&".join(f"{key}={value}" for key, value in intent.to_query_params().items())
    print(f"Booking: /booking?{query}")


def apply_selection(
    session: BookingSession,
    selected: List[str],
    start_time: Optional[str],
) -> bool:
    """Applies the requested selection. On any selection error the error is reported
    and the whole selection is dropped."""
    try:
        if start_time:
            session.choose_start(start_time)
        for slot in selected:
            session.toggle(slot)
    except BookingError as e:
        logger.warning(f"Selection rejected: {e}")
        session.model.clear()
        print(f"\n{e}")
        return False
    return True


def run(
    court_id: int,
    date: Optional[str] = None,
    selected: Optional[List[str]] = None,
    start_time: Optional[str] = None,
    duration: int = 1,
    hourly_rate: float = 0,
    context: Optional[config.ApiContext] = None,
):
    """Core orchestration logic. Loads availability for one court and day, applies the
    requested selection and prints the booking summary."""
    selected = selected or []
    mode = SelectionMode.CONTIGUOUS if start_time else SelectionMode.FREE

    try:
        session = BookingSession(
            context or config.default_context(),
            court_id,
            date,
            mode=mode,
            duration=duration,
            hourly_rate=hourly_rate,
        )
    except (DateOutOfRange, ValueError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    result = session.refresh()
    print_availability_report(court_id, result)

    if not selected and not start_time:
        return result
    if apply_selection(session, selected, start_time) and not session.model.is_empty:
        print_selection_summary(session)
    else:
        print("\nNo slots selected.")
    return result
