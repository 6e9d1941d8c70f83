"""Math space <-> screen space mapping.

Every function takes the viewport explicitly; nothing here keeps state.
Screen space has its origin at the top-left with y growing downward.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Tuple

from . import config


class Viewport(NamedTuple):
    width: float
    height: float
    zoom_scale: float = 1.0
    pan_x: float = 0.0
    pan_y: float = 0.0


class ScreenPoint(NamedTuple):
    x: float
    y: float


class MathBounds(NamedTuple):
    min_x: float
    max_x: float
    min_y: float
    max_y: float


def scale(view: Viewport) -> float:
    """Screen points per math unit; +-6 units fill the shorter side at zoom 1."""
    return min(view.width, view.height) / config.UNITS_ACROSS * view.zoom_scale


def center(view: Viewport) -> ScreenPoint:
    return ScreenPoint(view.width / 2.0 + view.pan_x, view.height / 2.0 + view.pan_y)


def to_screen(view: Viewport, math_x: float, math_y: float) -> ScreenPoint:
    s = scale(view)
    cx, cy = center(view)
    return ScreenPoint(cx + math_x * s, cy - math_y * s)


def to_math(view: Viewport, screen_x: float, screen_y: float) -> Tuple[float, float]:
    s = scale(view)
    cx, cy = center(view)
    return (screen_x - cx) / s, (cy - screen_y) / s


def visible_math_bounds(view: Viewport) -> MathBounds:
    s = scale(view)
    mid_x, mid_y = to_math(view, view.width / 2.0, view.height / 2.0)
    half_x = view.width / s / 2.0
    half_y = view.height / s / 2.0
    return MathBounds(mid_x - half_x, mid_x + half_x, mid_y - half_y, mid_y + half_y)


def is_visible(view: Viewport, math_x: float, math_y: float, margin: float = config.VISIBILITY_MARGIN) -> bool:
    bounds = visible_math_bounds(view)
    return (
        bounds.min_x - margin <= math_x <= bounds.max_x + margin
        and bounds.min_y - margin <= math_y <= bounds.max_y + margin
    )


def grid_step(view: Viewport) -> float:
    pixels_per_unit = scale(view)
    for step in config.GRID_STEP_CANDIDATES:
        if step * pixels_per_unit >= config.GRID_MIN_PIXEL_GAP:
            return step
    return config.GRID_STEP_CANDIDATES[-1]


def screen_distance(a: Tuple[float, float], b: Tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
