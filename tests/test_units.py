import pytest

from backend.units import (
    display_weight,
    kg_to_lb,
    lb_to_kg,
    parse_weight_text,
    weight_field_text,
)


def test_conversions_round_to_one_decimal():
    assert lb_to_kg(100) == 45.4
    assert lb_to_kg(225) == 102.1
    assert kg_to_lb(20) == 44.1
    assert kg_to_lb(0) == 0
    assert lb_to_kg(0) == 0


@pytest.mark.parametrize("lb", [45, 100, 135, 225, 315])
def test_lb_round_trip_within_tolerance(lb):
    assert abs(kg_to_lb(lb_to_kg(lb)) - lb) <= 0.1 + 1e-9


@pytest.mark.parametrize("kg", [2.5, 20, 45.4, 60, 102.5])
def test_kg_round_trip_within_tolerance(kg):
    assert abs(lb_to_kg(kg_to_lb(kg)) - kg) <= 0.1 + 1e-9


def test_round_trip_is_not_exact():
    assert kg_to_lb(lb_to_kg(100)) == 100.1


def test_display_and_field_text():
    assert display_weight(225, "lb") == "225"
    assert display_weight(100, "kg") == "45.4"
    assert weight_field_text(0, "lb") == ""
    assert weight_field_text(None, "kg") == ""
    assert weight_field_text(135.5, "lb") == "135.5"


def test_parse_weight_text():
    assert parse_weight_text("", "lb") == 0.0
    assert parse_weight_text("-", "kg") == 0.0
    assert parse_weight_text("135", "lb") == 135.0
    assert parse_weight_text("20", "kg") == 44.1
    assert parse_weight_text("abc", "lb") is None
    assert parse_weight_text("nan", "lb") is None
