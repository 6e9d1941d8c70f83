"""Named, recoverable conditions reported back to the user interface."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Condition(str, Enum):
    INSUFFICIENT_POINTS = "insufficient_points"
    IDENTICAL_POINTS = "identical_points"
    VERTICAL_LINE = "vertical_line"
    CAPACITY_REACHED = "capacity_reached"
    INDEX_OUT_OF_RANGE = "index_out_of_range"
    NON_FINITE_VALUE = "non_finite_value"
    INVALID_NUMBER = "invalid_number"
    ZERO_DENOMINATOR = "zero_denominator"
    UNKNOWN_PARAMETER = "unknown_parameter"


_MESSAGES = {
    Condition.INSUFFICIENT_POINTS: "Place at least two points to build a line.",
    Condition.IDENTICAL_POINTS: "The same point was chosen twice. Pick two different points.",
    Condition.VERTICAL_LINE: (
        "Both points share x = {x:.1f}, which gives a vertical line that y = mx + n cannot describe."
    ),
    Condition.CAPACITY_REACHED: "At most 10 points can be placed.",
    Condition.INDEX_OUT_OF_RANGE: "That point no longer exists.",
    Condition.NON_FINITE_VALUE: "The value is not a finite number; the previous value was kept.",
    Condition.INVALID_NUMBER: "Enter a number.",
    Condition.ZERO_DENOMINATOR: "The denominator cannot be 0.",
    Condition.UNKNOWN_PARAMETER: "Unknown coefficient.",
}


def message_for(condition: Condition, *, x: Optional[float] = None) -> str:
    template = _MESSAGES[condition]
    if condition is Condition.VERTICAL_LINE:
        return template.format(x=x if x is not None else 0.0)
    return template
