from __future__ import annotations

import math
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from . import config
from .conditions import Condition
from .curves import Line, Parabola

MathPoint = Tuple[float, float]


class IntersectionPoint(NamedTuple):
    x: float
    y: float


class AreaSide(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class AreaRegion(NamedTuple):
    side: AreaSide
    vertices: Tuple[MathPoint, MathPoint, MathPoint]
    area: float


class AreaResult(NamedTuple):
    total: float
    split: bool
    regions: Tuple[AreaRegion, ...]
    label_position: MathPoint


class LineFit(NamedTuple):
    m: Optional[float]
    n: Optional[float]
    condition: Optional[Condition]


def discriminant(a: float, b: float, c: float) -> float:
    return b * b - 4 * a * c


def intersection_coefficients(parabola: Parabola, line: Line) -> Tuple[float, float, float]:
    """Coefficients of a*x^2 - (2ap + m)*x + (a*p^2 + q - n) = 0."""
    a, p, q = parabola.a, parabola.p, parabola.q
    return a, -(2 * a * p + line.m), a * p * p + q - line.n


def real_roots(a: float, b: float, c: float, *, eps: float = config.EPS_DISCRIMINANT) -> List[float]:
    if abs(a) < eps:
        if abs(b) < eps:
            return []
        root = -c / b
        return [root] if math.isfinite(root) else []
    disc = discriminant(a, b, c)
    if disc < -eps:
        return []
    if abs(disc) <= eps:
        root = -b / (2 * a)
        return [root] if math.isfinite(root) else []
    sqrt_disc = math.sqrt(disc)
    roots = sorted([(-b - sqrt_disc) / (2 * a), (-b + sqrt_disc) / (2 * a)])
    return [r for r in roots if math.isfinite(r)]


def solve_intersections(parabola: Parabola, line: Line) -> List[IntersectionPoint]:
    """Intersections ordered by ascending x; y is taken from the line."""
    a, b, c = intersection_coefficients(parabola, line)
    return [IntersectionPoint(x, line.evaluate(x)) for x in real_roots(a, b, c)]


def triangle_area(a: MathPoint, b: MathPoint, c: MathPoint) -> float:
    return 0.5 * abs(a[0] * (b[1] - c[1]) + b[0] * (c[1] - a[1]) + c[0] * (a[1] - b[1]))


def solve_area(line: Line, intersections: Sequence[IntersectionPoint]) -> Optional[AreaResult]:
    """Area of the triangle origin / P1 / P2, split at the y-axis when P1 and P2 straddle it.

    Returns ``None`` unless there are exactly two intersections. When split,
    the left region is (O, P_left, YI) and the right one (O, YI, P_right),
    with YI = (0, n) where the line meets the y-axis.
    """
    if len(intersections) != 2:
        return None
    p1, p2 = (tuple(pt) for pt in intersections)
    origin = (0.0, 0.0)
    label_position = ((p1[0] + p2[0]) / 3.0, (p1[1] + p2[1]) / 3.0)

    if p1[0] * p2[0] < 0:
        left, right = (p1, p2) if p1[0] < 0 else (p2, p1)
        y_axis_point = (0.0, line.n)
        regions = (
            AreaRegion(AreaSide.LEFT, (origin, left, y_axis_point), triangle_area(origin, left, y_axis_point)),
            AreaRegion(AreaSide.RIGHT, (origin, y_axis_point, right), triangle_area(origin, y_axis_point, right)),
        )
        return AreaResult(sum(r.area for r in regions), True, regions, label_position)

    side = AreaSide.LEFT if p1[0] < 0 else AreaSide.RIGHT
    region = AreaRegion(side, (origin, p1, p2), triangle_area(origin, p1, p2))
    return AreaResult(region.area, False, (region,), label_position)


def solve_line_through(p1: Optional[MathPoint], p2: Optional[MathPoint], *, eps: float = config.EPS_POINT) -> LineFit:
    if p1 is None or p2 is None:
        return LineFit(None, None, Condition.INSUFFICIENT_POINTS)
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    if abs(dx) < eps and abs(dy) < eps:
        return LineFit(None, None, Condition.IDENTICAL_POINTS)
    if abs(dx) < eps:
        return LineFit(None, None, Condition.VERTICAL_LINE)
    m = dy / dx
    n = p1[1] - m * p1[0]
    if not (math.isfinite(m) and math.isfinite(n)):
        return LineFit(None, None, Condition.NON_FINITE_VALUE)
    return LineFit(m, n, None)
