import pytest

from court_booking.errors import EmptySelection
from court_booking.intent import build_booking_intent, intent_from_query, parse_selected_times
from court_booking.selection import SelectionMode, SlotSelectionModel


def test_build_booking_intent_empty_selection():
    with pytest.raises(EmptySelection):
        build_booking_intent((), "2026-10-20", 3)


def test_build_booking_intent_follows_selection_order(day):
    model = SlotSelectionModel(mode=SelectionMode.FREE)
    model.load(day)
    model.toggle("11:00")
    model.toggle("08:00")

    intent = build_booking_intent(model.selection, "2026-10-20", 3)

    assert intent.court_id == 3
    assert intent.date == "2026-10-20"
    assert intent.times == "08:00-09:00,11:00-12:00"
    assert intent.times.split(",") == [s.label for s in model.selection]


def test_parse_selected_times():
    assert parse_selected_times("09:00-10:00, 08:00-09:00,") == [("08:00", "09:00"), ("09:00", "10:00")]
    with pytest.raises(ValueError):
        parse_selected_times("08:00")
    with pytest.raises(ValueError):
        parse_selected_times("10:00-09:00")
    with pytest.raises(ValueError):
        parse_selected_times("8-9")


def test_intent_from_query():
    intent = intent_from_query({"court_id": "3", "date": "2026-10-20", "selected_times": "08:00-09:00,09:00-10:00"})
    assert intent.court_id == 3
    assert intent.start_time == "08:00"
    assert intent.end_time == "10:00"
    assert intent.duration_hours == 2


def test_intent_from_query_missing_params():
    with pytest.raises(ValueError, match="selected_times"):
        intent_from_query({"court_id": "3", "date": "2026-10-20"})
    with pytest.raises(EmptySelection):
        intent_from_query({"court_id": "3", "date": "2026-10-20", "selected_times": ","})


def test_parse_selected_times_pads_hours():
    assert parse_selected_times("9:00-10:00,8:00-9:00") == [("08:00", "09:00"), ("09:00", "10:00")]
