import pytest

from court_booking.availability import parse_availability
from court_booking.errors import InsufficientConsecutiveSlots, SlotUnavailable
from court_booking.models import DayAvailability
from court_booking.selection import SelectionMode, SlotSelectionModel


def _labels(selection):
    return [s.label for s in selection]


@pytest.fixture
def free_model(day):
    model = SlotSelectionModel(mode=SelectionMode.FREE)
    model.load(day)
    return model


@pytest.fixture
def contiguous_model(day):
    model = SlotSelectionModel(mode=SelectionMode.CONTIGUOUS, duration=2)
    model.load(day)
    return model


def test_contiguous_run_fits(contiguous_model):
    contiguous_model.choose_start("08:00")

    assert _labels(contiguous_model.selection) == ["08:00-09:00", "09:00-10:00"]
    assert contiguous_model.start_time == "08:00"
    assert contiguous_model.end_time == "10:00"
    assert contiguous_model.duration_hours == 2


def test_contiguous_run_blocked_by_booked_slot(contiguous_model):
    contiguous_model.set_duration(3)

    with pytest.raises(InsufficientConsecutiveSlots, match="08:00"):
        contiguous_model.choose_start("08:00")
    assert contiguous_model.is_empty
    assert contiguous_model.start_time is None


def test_contiguous_run_past_end_of_day(contiguous_model):
    with pytest.raises(InsufficientConsecutiveSlots):
        contiguous_model.choose_start("12:00")
    assert contiguous_model.is_empty


def test_contiguous_start_on_unknown_or_booked_slot(contiguous_model):
    with pytest.raises(InsufficientConsecutiveSlots):
        contiguous_model.choose_start("07:00")
    with pytest.raises(InsufficientConsecutiveSlots):
        contiguous_model.choose_start("10:00")


def test_contiguous_run_requires_adjacent_hours(make_slot):
    model = SlotSelectionModel(mode=SelectionMode.CONTIGUOUS, duration=2)
    model.load(DayAvailability(date="2026-10-20", slots=[make_slot("08:00"), make_slot("10:00")]))

    with pytest.raises(InsufficientConsecutiveSlots):
        model.choose_start("08:00")


def test_failed_start_clears_previous_choice(contiguous_model):
    contiguous_model.choose_start("11:00")
    with pytest.raises(InsufficientConsecutiveSlots):
        contiguous_model.choose_start("09:00")
    assert contiguous_model.is_empty


def test_changing_duration_revalidates(contiguous_model):
    contiguous_model.choose_start("08:00")

    contiguous_model.set_duration(1)
    assert _labels(contiguous_model.selection) == ["08:00-09:00"]

    with pytest.raises(InsufficientConsecutiveSlots):
        contiguous_model.set_duration(3)
    assert contiguous_model.is_empty
    assert contiguous_model.duration == 3


def test_invalid_duration():
    with pytest.raises(ValueError):
        SlotSelectionModel(mode=SelectionMode.CONTIGUOUS, duration=0)


def test_free_selection_stays_sorted(free_model):
    free_model.toggle("09:00")
    free_model.toggle("08:00")
    free_model.toggle("12:00")

    assert _labels(free_model.selection) == ["08:00-09:00", "09:00-10:00", "12:00-13:00"]
    assert free_model.start_time == "08:00"
    assert free_model.end_time == "13:00"


def test_free_toggle_twice_restores_selection(free_model):
    free_model.toggle("08:00")
    before = free_model.selection

    free_model.toggle("11:00")
    free_model.toggle("11:00")

    assert free_model.selection == before


def test_free_toggle_accepts_slot_objects(free_model, day):
    free_model.toggle(day.slots[1])
    assert _labels(free_model.selection) == ["09:00-10:00"]


def test_free_toggle_booked_slot_is_rejected(free_model):
    free_model.toggle("08:00")

    with pytest.raises(SlotUnavailable) as exc_info:
        free_model.toggle("10:00")

    assert exc_info.value.slot == "10:00-11:00"
    assert _labels(free_model.selection) == ["08:00-09:00"]


def test_free_toggle_unknown_slot_is_rejected(free_model, make_slot):
    with pytest.raises(SlotUnavailable):
        free_model.toggle("23:00")
    with pytest.raises(SlotUnavailable):
        free_model.toggle(make_slot("15:00"))
    assert free_model.is_empty


def test_toggle_without_availability():
    model = SlotSelectionModel()
    with pytest.raises(SlotUnavailable):
        model.toggle("08:00")


def test_loading_new_day_clears_selection(free_model, day):
    free_model.toggle("08:00")
    free_model.load(day)
    assert free_model.is_empty


def test_mode_specific_operations(free_model, contiguous_model):
    with pytest.raises(ValueError):
        free_model.choose_start("08:00")
    with pytest.raises(ValueError):
        contiguous_model.toggle("08:00")


def test_unpadded_api_times_keep_selection_sorted():
    slots = parse_availability(
        [
            {"start_time": "8:00", "end_time": "9:00", "is_available": True},
            {"start_time": "9:00", "end_time": "10:00", "is_available": True},
            {"start_time": "10:00", "end_time": "11:00", "is_available": True},
        ],
        "2026-10-20",
    )
    model = SlotSelectionModel(mode=SelectionMode.FREE)
    model.load(DayAvailability(date="2026-10-20", slots=slots))

    model.toggle("10:00")
    model.toggle("8:00")

    assert [s.start_time for s in model.selection] == ["08:00", "10:00"]


def test_unpadded_start_time_in_contiguous_mode(contiguous_model):
    contiguous_model.choose_start("8:00")
    assert _labels(contiguous_model.selection) == ["08:00-09:00", "09:00-10:00"]
