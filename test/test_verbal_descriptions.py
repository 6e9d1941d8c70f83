from datetime import datetime

from graph_lab.curves import Line, Parabola
from graph_lab.verbal_descriptions import (
    describe_a_change,
    export_file_stem,
    line_equation,
    parabola_equation,
)


def test_parabola_equation():
    assert parabola_equation(Parabola()) == "y = x²"
    assert parabola_equation(Parabola(2, 1, 3)) == "y = 2(x - 1)² + 3"
    assert parabola_equation(Parabola(-1, -2, -0.5)) == "y = -(x + 2)² - 0.5"


def test_line_equation():
    assert line_equation(Line(2, -1)) == "y = 2x - 1"
    assert line_equation(Line(0, -1)) == "y = -1"
    assert line_equation(Line(-1, 0)) == "y = -x"
    assert line_equation(Line(0.5, 2)) == "y = 0.5x + 2"


def test_describe_a_change():
    assert describe_a_change(1, 1) == "The parabola keeps its shape."
    assert describe_a_change(1, 2) == "Increasing |a| makes the parabola narrower."
    assert describe_a_change(2, 0.5) == "Decreasing |a| makes the parabola wider."
    assert describe_a_change(1, -2).endswith("(flips downward).")
    assert describe_a_change(-1, 0.5).endswith("(flips upward).")


def test_export_file_stem(workspace):
    stamp = datetime(2024, 5, 1, 9, 30, 5)
    assert export_file_stem(workspace, stamp) == "MathGraphLab_y=x²_y=x+2_20240501_093005"
    workspace.set_mode("show_line", False)
    workspace.set_mode("show_parabola", False)
    assert export_file_stem(workspace, stamp) == "MathGraphLab_20240501_093005"
