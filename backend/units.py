"""Weight conversion between pounds and kilograms.

All weights are stored in pounds. Conversions round to one decimal place,
so a round trip is close to, but not always exactly, the starting value.
"""

from __future__ import annotations

import math
import sys

LB_TO_KG = 0.45359237

UNITS = ("lb", "kg")


def _round1(value: float) -> float:
    """Round half up to one decimal place."""

    return math.floor((value + sys.float_info.epsilon) * 10 + 0.5) / 10


def lb_to_kg(lb: float) -> float:
    return _round1(lb * LB_TO_KG)


def kg_to_lb(kg: float) -> float:
    return _round1(kg / LB_TO_KG)


def to_display(weight_lb: float, unit: str) -> float:
    """Return ``weight_lb`` expressed in ``unit``."""

    if unit == "kg":
        return lb_to_kg(weight_lb)
    return weight_lb


def from_display(value: float, unit: str) -> float:
    """Return pounds for ``value`` entered in ``unit``."""

    if unit == "kg":
        return kg_to_lb(value)
    return value


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def display_weight(weight_lb: float, unit: str) -> str:
    """Return ``weight_lb`` as text in ``unit`` without the unit suffix."""

    return _format_number(to_display(weight_lb, unit))


def weight_field_text(weight_lb: float | None, unit: str) -> str:
    """Return the text shown in a weight input; empty for no weight."""

    if not weight_lb:
        return ""
    return display_weight(weight_lb, unit)


def parse_weight_text(raw: str, unit: str) -> float | None:
    """Parse weight input text in ``unit`` into pounds.

    Empty text and a lone minus sign mean zero. ``None`` is returned for
    text that is not a number so callers can keep their previous value.
    """

    text = raw.strip()
    if text in ("", "-"):
        return 0.0
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return from_display(value, unit)
