import pytest

from court_booking.models import DayAvailability, Slot


def _make_slot(start: str, available: bool = True, booking_id=None) -> Slot:
    hour = int(start[:2])
    return Slot(start_time=start, end_time=f"{hour + 1:02d}:00", is_available=available, booking_id=booking_id)


@pytest.fixture
def make_slot():
    return _make_slot


@pytest.fixture
def day():
    # 08:00 and 09:00 free, 10:00 booked, 11:00 and 12:00 free
    return DayAvailability(
        date="2026-10-20",
        slots=[
            _make_slot("08:00"),
            _make_slot("09:00"),
            _make_slot("10:00", available=False, booking_id=42),
            _make_slot("11:00"),
            _make_slot("12:00"),
        ],
    )
