import pytest

from graph_lab.figure import build_figure, generate_x_samples


def trace_names(fig):
    return [trace.name for trace in fig.data]


def test_generate_x_samples():
    assert generate_x_samples(-1, 1, 5) == [-1, -0.5, 0, 0.5, 1]
    assert generate_x_samples(2, 3, 1) == [2]


def test_default_figure(workspace):
    fig = build_figure(workspace)
    names = trace_names(fig)
    assert "y = x²" in names
    assert "y = x + 2" in names
    assert "Intersections" in names
    assert list(fig.layout.xaxis.range) == pytest.approx([-6, 6])
    assert list(fig.layout.yaxis.range) == pytest.approx([-12, 12])
    assert fig.layout.xaxis.dtick == 1
    assert fig.layout.uirevision == "test-session"

    intersections = fig.data[names.index("Intersections")]
    assert list(intersections.x) == pytest.approx([-1, 2])


def test_ranges_follow_pan_and_zoom(workspace):
    workspace.set_zoom(2)
    workspace.pan_by(100, 0)
    fig = build_figure(workspace)
    assert list(fig.layout.xaxis.range) == pytest.approx([-4, 2])


def test_hidden_curves_are_left_out(workspace):
    workspace.set_mode("show_parabola", False)
    names = trace_names(build_figure(workspace))
    assert "y = x²" not in names
    assert "y = x + 2" in names


def test_ghost_curves_drawn_dashed(workspace):
    workspace.begin_drag()
    workspace.set_a(3)
    fig = build_figure(workspace)
    names = trace_names(fig)
    ghost = fig.data[names.index("Parabola (previous)")]
    assert ghost.line.dash == "dash"
    assert ghost.opacity == pytest.approx(0.3)
    assert "Line (previous)" in names
    assert "y = 3x²" in names


def test_area_traces(workspace):
    workspace.set_mode("area_mode", True)
    fig = build_figure(workspace)
    names = trace_names(fig)
    assert "Area (left)" in names
    assert "Area (right)" in names
    label = fig.data[names.index("Area")]
    assert list(label.text) == ["S = 3.00"]


def test_points_distances_and_sketch(workspace):
    workspace.add_point(1, 1)
    workspace.add_point(4, 5)
    workspace.add_point(0, 40)
    workspace.set_mode("show_distances", True)
    workspace.add_geometry_segment((0, 0), (1, 1))
    fig = build_figure(workspace)
    names = trace_names(fig)

    points = fig.data[names.index("Points")]
    assert list(points.text) == ["A", "B"]
    assert "AB" in names
    assert "BC" in names
    assert "Sketch segment" in names


def test_droplines_from_intersections(workspace):
    fig = build_figure(workspace)
    droplines = [trace for trace in fig.data if trace.name == "Dropline"]
    assert len(droplines) == 2
    assert list(droplines[0].x) == pytest.approx([-1, -1])
    assert list(droplines[0].y) == pytest.approx([1, 0])
    assert droplines[1].line.dash == "dash"

    workspace.set_n(-10)
    assert not any(trace.name == "Dropline" for trace in build_figure(workspace).data)
