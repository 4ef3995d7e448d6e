import logging
import random
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from court_booking import availability, booking
from court_booking.availability import AvailabilityLoader, FetchTicket
from court_booking.config import ApiContext
from court_booking.intent import build_booking_intent
from court_booking.models import AvailabilityResult, BookingIntent, Slot
from court_booking.pricing import calculate_total
from court_booking.selection import SelectionMode, SlotSelectionModel

logger = logging.getLogger(__name__)


class BookingSession:
    """State of one booking screen: the court, the day, its availability and the selection.

    Changing the court or the date always drops the selection and the loaded
    availability, and invalidates any availability request still in flight.
    """

    def __init__(
        self,
        context: ApiContext,
        court_id: int,
        date_str: Optional[str] = None,
        mode: SelectionMode = SelectionMode.FREE,
        duration: int = 1,
        hourly_rate: float = 0,
        today: Optional[date] = None,
    ):
        self.context = context
        self.court_id = availability.validate_court_id(court_id)
        self.date = availability.validate_booking_date(date_str or (today or date.today()).isoformat(), today)
        self.hourly_rate = hourly_rate
        self.model = SlotSelectionModel(mode=mode, duration=duration)
        self.result: Optional[AvailabilityResult] = None
        self._loader = AvailabilityLoader()

    @property
    def selection(self) -> Tuple[Slot, ...]:
        return self.model.selection

    @property
    def total_price(self) -> float:
        return calculate_total(self.model.selection, self.hourly_rate)

    def _reset(self):
        self._loader.cancel()
        self.result = None
        self.model.load(None)

    def select_date(self, date_str: str, today: Optional[date] = None):
        self.date = availability.validate_booking_date(date_str, today)
        logger.debug(f"Date changed to {self.date}")
        self._reset()

    def select_court(self, court_id: int, hourly_rate: Optional[float] = None):
        self.court_id = availability.validate_court_id(court_id)
        if hourly_rate is not None:
            self.hourly_rate = hourly_rate
        logger.debug(f"Court changed to {self.court_id}")
        self._reset()

    def begin_refresh(self) -> FetchTicket:
        return self._loader.begin(self.court_id, self.date)

    def resolve(self, ticket: FetchTicket, result: AvailabilityResult) -> bool:
        """Applies a fetch result if it still belongs to the current court and date."""
        if not self._loader.is_current(ticket) or (ticket.court_id, ticket.date) != (self.court_id, self.date):
            logger.debug(f"Discarding stale availability for court {ticket.court_id} on {ticket.date}")
            return False
        self.result = result
        self.model.load(result.day)
        return True

    def refresh(self, now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> AvailabilityResult:
        """Loads availability for the current court and date. Also serves as the manual retry."""
        ticket = self.begin_refresh()
        result = availability.get_day_availability(ticket.court_id, ticket.date, self.context, now=now, rng=rng)
        self.resolve(ticket, result)
        return result

    def close(self):
        self._loader.cancel()

    def toggle(self, slot) -> Tuple[Slot, ...]:
        return self.model.toggle(slot)

    def choose_start(self, start_time: str) -> Tuple[Slot, ...]:
        return self.model.choose_start(start_time)

    def set_duration(self, hours: int) -> Tuple[Slot, ...]:
        return self.model.set_duration(hours)

    def booking_intent(self) -> BookingIntent:
        return build_booking_intent(self.model.selection, self.date, self.court_id)

    def submit(self, **details: Any) -> Dict[str, Any]:
        """Submits the current selection. The selection is cleared once the booking is accepted."""
        intent = self.booking_intent()
        response = booking.submit_booking(intent, self.context, total_price=self.total_price, **details)
        self.model.clear()
        return response
