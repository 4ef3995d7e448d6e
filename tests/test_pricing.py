import pytest

from court_booking.pricing import calculate_total, format_price


def test_calculate_total(make_slot):
    selection = [make_slot("08:00"), make_slot("09:00")]
    assert calculate_total(selection, 150000) == 300000


def test_calculate_total_zero_cases(make_slot):
    assert calculate_total([], 150000) == 0
    assert calculate_total([make_slot("08:00")], 0) == 0


def test_calculate_total_rejects_negative_rate(make_slot):
    with pytest.raises(ValueError):
        calculate_total([make_slot("08:00")], -1)


def test_format_price():
    assert format_price(300000, "VND") == "300.000 VND"
    assert format_price(950, "VND") == "950 VND"
