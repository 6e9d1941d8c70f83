from __future__ import annotations

from typing import List, Optional, Sequence

import plotly.graph_objects as go

from . import config
from .coordinates import MathBounds, grid_step, is_visible, visible_math_bounds
from .curves import Line, Parabola
from .graph_engine import AreaSide
from .points import GeometryPoint, LineSegment
from .state import GraphWorkspace
from .verbal_descriptions import line_equation, parabola_equation


def generate_x_samples(x_min: float, x_max: float, count: int) -> List[float]:
    if count < 2:
        return [x_min]
    step = (x_max - x_min) / (count - 1)
    return [x_min + i * step for i in range(count)]


def parabola_trace(parabola: Parabola, xs: Sequence[float], *, ghost: bool = False) -> go.Scatter:
    line_style = dict(config.PARABOLA_LINE_STYLE)
    if ghost:
        line_style.update(width=2, dash="dash")
    return go.Scatter(
        x=list(xs),
        y=[parabola.evaluate(x) for x in xs],
        mode="lines",
        name="Parabola (previous)" if ghost else parabola_equation(parabola),
        line=line_style,
        opacity=config.GHOST_OPACITY if ghost else 1.0,
        hoverinfo="skip" if ghost else None,
    )


def line_trace(line: Line, bounds: MathBounds, *, ghost: bool = False) -> go.Scatter:
    line_style = dict(config.LINE_LINE_STYLE)
    if ghost:
        line_style.update(width=2, dash="dash")
    xs = [bounds.min_x, bounds.max_x]
    return go.Scatter(
        x=xs,
        y=[line.evaluate(x) for x in xs],
        mode="lines",
        name="Line (previous)" if ghost else line_equation(line),
        line=line_style,
        opacity=config.GHOST_OPACITY if ghost else 1.0,
        hoverinfo="skip" if ghost else None,
    )


def area_traces(workspace: GraphWorkspace) -> List[go.Scatter]:
    area = workspace.area()
    if area is None:
        return []
    traces = []
    for region in area.regions:
        xs = [v[0] for v in region.vertices] + [region.vertices[0][0]]
        ys = [v[1] for v in region.vertices] + [region.vertices[0][1]]
        color = config.FIGURE_COLORS["area_left" if region.side is AreaSide.LEFT else "area_right"]
        traces.append(
            go.Scatter(
                x=xs,
                y=ys,
                mode="lines",
                fill="toself",
                fillcolor=color,
                line=dict(width=0),
                name=f"Area ({region.side.value})",
                hovertemplate=f"S = {region.area:.2f}<extra></extra>",
                showlegend=False,
            )
        )
    label_x, label_y = area.label_position
    traces.append(
        go.Scatter(
            x=[label_x],
            y=[label_y],
            mode="text",
            text=[f"S = {area.total:.2f}"],
            name="Area",
            showlegend=False,
        )
    )
    return traces


def intersection_trace(workspace: GraphWorkspace) -> go.Scatter:
    points = workspace.intersections()
    return go.Scatter(
        x=[pt.x for pt in points],
        y=[pt.y for pt in points],
        mode="markers",
        name="Intersections",
        marker=dict(config.INTERSECTION_MARKER_STYLE),
        hovertemplate="Intersection<br>x=%{x:.2f}<br>y=%{y:.2f}<extra></extra>",
        showlegend=False,
    )


def dropline_traces(workspace: GraphWorkspace) -> List[go.Scatter]:
    """Dashed guides from each intersection straight down (or up) to the x-axis."""
    return [
        go.Scatter(
            x=[pt.x, pt.x],
            y=[pt.y, 0.0],
            mode="lines",
            name="Dropline",
            line=dict(config.DROPLINE_STYLE),
            hoverinfo="skip",
            showlegend=False,
        )
        for pt in workspace.intersections()
    ]


def marked_point_trace(workspace: GraphWorkspace) -> go.Scatter:
    view = workspace.viewport()
    points = [pt for pt in workspace.points if is_visible(view, pt.x, pt.y)]
    return go.Scatter(
        x=[pt.x for pt in points],
        y=[pt.y for pt in points],
        mode="markers+text",
        text=[pt.label for pt in points],
        textposition="top right",
        name="Points",
        marker=dict(config.POINT_MARKER_STYLE),
        hovertemplate="%{text}<br>x=%{x:.2f}<br>y=%{y:.2f}<extra></extra>",
        showlegend=False,
    )


def distance_traces(workspace: GraphWorkspace) -> List[go.Scatter]:
    if not workspace.show_distances:
        return []
    traces = []
    for start, end, distance in workspace.pairwise_distances():
        traces.append(
            go.Scatter(
                x=[start.x, end.x],
                y=[start.y, end.y],
                mode="lines",
                name=f"{start.label}{end.label}",
                line=dict(config.DISTANCE_LINE_STYLE),
                hovertemplate=f"{start.label}{end.label} = {distance:.2f}<extra></extra>",
                showlegend=False,
            )
        )
    return traces


def sketch_traces(workspace: GraphWorkspace) -> List[go.Scatter]:
    traces = []
    for element in workspace.geometry:
        if isinstance(element, GeometryPoint):
            traces.append(
                go.Scatter(x=[element.x], y=[element.y], mode="markers", name="Sketch point", showlegend=False)
            )
        elif isinstance(element, LineSegment):
            traces.append(
                go.Scatter(
                    x=[element.start[0], element.end[0]],
                    y=[element.start[1], element.end[1]],
                    mode="lines",
                    name="Sketch segment",
                    line=dict(config.SKETCH_LINE_STYLE),
                    showlegend=False,
                )
            )
        else:
            raise TypeError(f"unsupported geometry element: {type(element).__name__}")
    return traces


def build_figure(workspace: GraphWorkspace, *, uirevision: Optional[str] = None) -> go.Figure:
    view = workspace.viewport()
    bounds = visible_math_bounds(view)
    xs = generate_x_samples(bounds.min_x, bounds.max_x, config.FIGURE_SAMPLES)
    ghost = workspace.ghost

    data: List[go.Scatter] = []
    data.extend(area_traces(workspace))
    if workspace.show_parabola:
        if ghost is not None:
            data.append(parabola_trace(ghost.parabola, xs, ghost=True))
        data.append(parabola_trace(workspace.parabola, xs))
    if workspace.show_line:
        if ghost is not None:
            data.append(line_trace(ghost.line, bounds, ghost=True))
        data.append(line_trace(workspace.line, bounds))
    data.extend(dropline_traces(workspace))
    data.append(intersection_trace(workspace))
    data.extend(distance_traces(workspace))
    data.extend(sketch_traces(workspace))
    data.append(marked_point_trace(workspace))

    step = grid_step(view)
    fig = go.Figure(data=data)
    fig.update_layout(
        width=view.width,
        height=view.height,
        margin=dict(l=0, r=0, t=0, b=0),
        xaxis=dict(
            range=[bounds.min_x, bounds.max_x],
            dtick=step,
            showgrid=True,
            zeroline=True,
            zerolinecolor=config.AXIS_LINE_STYLE["zerolinecolor"],
        ),
        yaxis=dict(
            range=[bounds.min_y, bounds.max_y],
            dtick=step,
            showgrid=True,
            zeroline=True,
            zerolinecolor=config.AXIS_LINE_STYLE["zerolinecolor"],
        ),
        showlegend=False,
        uirevision=uirevision or workspace.log.session_id,
    )
    return fig
