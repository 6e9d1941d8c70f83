import pytest

from graph_lab.conditions import Condition
from graph_lab.curves import Line, Parabola
from graph_lab.graph_engine import (
    AreaSide,
    IntersectionPoint,
    discriminant,
    intersection_coefficients,
    real_roots,
    solve_area,
    solve_intersections,
    solve_line_through,
    triangle_area,
)


def test_intersection_coefficients_substitute_line_into_parabola():
    assert intersection_coefficients(Parabola(a=2, p=1, q=3), Line(m=1, n=4)) == (2, -5, 1)


def test_unit_parabola_and_diagonal_meet_twice():
    points = solve_intersections(Parabola(a=1, p=0, q=0), Line(m=1, n=0))
    assert len(points) == 2
    assert points[0] == pytest.approx((0, 0))
    assert points[1] == pytest.approx((1, 1))


def test_vertex_above_line_has_no_intersection():
    assert solve_intersections(Parabola(a=1, p=0, q=5), Line(m=0, n=0)) == []


def test_tangent_line_gives_single_point_on_both_curves():
    parabola = Parabola(a=1, p=0, q=0)
    line = Line(m=2, n=-1)
    a, b, c = intersection_coefficients(parabola, line)
    assert discriminant(a, b, c) == 0

    points = solve_intersections(parabola, line)
    assert len(points) == 1
    x, y = points[0]
    assert x == pytest.approx(1.0)
    assert y == pytest.approx(parabola.evaluate(x), abs=1e-9)
    assert y == pytest.approx(line.evaluate(x), abs=1e-9)


def test_intersections_are_sorted_for_downward_parabola():
    points = solve_intersections(Parabola(a=-1, p=0, q=4), Line(m=0, n=0))
    assert [pt.x for pt in points] == pytest.approx([-2.0, 2.0])


@pytest.mark.parametrize(
    "parabola, line",
    [
        (Parabola(a=0.5, p=1, q=-2), Line(m=-1.5, n=3)),
        (Parabola(a=-2.25, p=-3, q=4.5), Line(m=0.75, n=-1)),
        (Parabola(a=0.01, p=5, q=-5), Line(m=-5, n=10)),
    ],
)
def test_line_and_parabola_values_agree_at_intersections(parabola, line):
    points = solve_intersections(parabola, line)
    assert points
    for x, y in points:
        assert y == pytest.approx(line.evaluate(x))
        assert y == pytest.approx(parabola.evaluate(x), rel=1e-9, abs=1e-7)


def test_real_roots_falls_back_to_linear_equation():
    assert real_roots(0, 2, -4) == [2.0]
    assert real_roots(0, 0, 1) == []


def test_triangle_area_is_unsigned():
    assert triangle_area((0, 0), (4, 0), (0, 3)) == 6.0
    assert triangle_area((0, 0), (0, 3), (4, 0)) == 6.0


def test_area_splits_when_intersections_straddle_y_axis():
    line = Line(m=1, n=2)
    points = solve_intersections(Parabola(), line)
    assert [pt.x for pt in points] == pytest.approx([-1.0, 2.0])

    area = solve_area(line, points)
    assert area.split
    assert [region.side for region in area.regions] == [AreaSide.LEFT, AreaSide.RIGHT]
    left, right = area.regions
    assert left.area == pytest.approx(1.0)
    assert right.area == pytest.approx(2.0)
    assert left.vertices[2] == (0.0, 2.0)
    assert right.vertices[1] == (0.0, 2.0)
    assert area.total == pytest.approx(3.0)


def test_area_single_region_when_same_side():
    line = Line(m=3, n=-2)
    area = solve_area(line, solve_intersections(Parabola(), line))
    assert not area.split
    assert len(area.regions) == 1
    assert area.regions[0].side is AreaSide.RIGHT
    assert area.total == pytest.approx(1.0)
    assert area.label_position == pytest.approx((1.0, 5.0 / 3.0))


def test_area_with_intersection_on_axis_is_not_split():
    line = Line(m=1, n=0)
    area = solve_area(line, solve_intersections(Parabola(), line))
    assert not area.split
    assert area.total == pytest.approx(0.0)


def test_area_requires_two_intersections():
    assert solve_area(Line(), []) is None
    assert solve_area(Line(), [IntersectionPoint(1.0, 1.0)]) is None


def test_line_through_two_points():
    fit = solve_line_through((1, 1), (3, 5))
    assert fit.condition is None
    assert fit.m == pytest.approx(2.0)
    assert fit.n == pytest.approx(-1.0)


@pytest.mark.parametrize(
    "p1, p2, condition",
    [
        ((2, 3), (2, 7), Condition.VERTICAL_LINE),
        ((4, 4), (4, 4), Condition.IDENTICAL_POINTS),
        ((4, 4), None, Condition.INSUFFICIENT_POINTS),
        (None, None, Condition.INSUFFICIENT_POINTS),
    ],
)
def test_line_through_degenerate_points(p1, p2, condition):
    fit = solve_line_through(p1, p2)
    assert fit.condition is condition
    assert fit.m is None and fit.n is None
