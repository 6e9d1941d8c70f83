"""The workspace: one explicit state container for curves, points, view and modes.

Every mutation goes through a named method that validates its input. Methods
that can refuse an input return the :class:`~graph_lab.conditions.Condition`
they refused it with (``None`` on success) and leave the previous state intact.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from . import config
from .conditions import Condition, message_for
from .coordinates import Viewport
from .curves import (
    Line,
    Parabola,
    coerce_finite,
    line_from_params,
    normalize_param_value,
    parabola_from_params,
)
from .graph_engine import (
    AreaResult,
    IntersectionPoint,
    solve_area,
    solve_intersections,
    solve_line_through,
)
from .logger import InteractionLog
from .numeric_input import parse_decimal, parse_fraction
from .points import GeometryElement, GeometryPoint, LineSegment, PointDistance, PointStore
from .settings import Settings


class GraphType(str, Enum):
    PARABOLA = "parabola"
    LINE = "line"


class FeedbackSignal(str, Enum):
    GRAB = "grab"
    TICK = "tick"
    SNAP = "snap"
    PLACE = "place"
    REMOVE = "remove"
    SELECT = "select"
    WARNING = "warning"


@dataclass(frozen=True)
class GhostState:
    parabola: Parabola
    line: Line


MODES = ("show_parabola", "show_line", "show_distances", "area_mode", "geometry_mode", "sketch_mode")
DEFAULT_VIEWPORT_SIZE = (390.0, 600.0)


class GraphWorkspace:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        log: Optional[InteractionLog] = None,
        viewport_size: Tuple[float, float] = DEFAULT_VIEWPORT_SIZE,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self.log = log if log is not None else InteractionLog()
        self._parabola = parabola_from_params(self.settings.default_params)
        self._line = line_from_params(self.settings.default_params)
        self.points = PointStore()
        self._geometry: List[GeometryElement] = []
        self._ghost: Optional[GhostState] = None
        self._feedback: List[FeedbackSignal] = []

        self.viewport_size = viewport_size
        self.zoom_scale = 1.0
        self.pan_offset = (0.0, 0.0)

        self.show_parabola = True
        self.show_line = True
        self.show_distances = False
        self.area_mode = False
        self.geometry_mode = False
        self.sketch_mode = False

        self.is_line_from_points = False
        self.line_creation_error: Optional[Condition] = None
        self.last_condition: Optional[Condition] = None
        self.constrained_point_index: Optional[int] = None
        self.constrained_graph_type: Optional[GraphType] = None

    # ------------------------------------------------------------------
    # read accessors

    @property
    def parabola(self) -> Parabola:
        return self._parabola

    @property
    def line(self) -> Line:
        return self._line

    @property
    def ghost(self) -> Optional[GhostState]:
        return self._ghost

    @property
    def geometry(self) -> Tuple[GeometryElement, ...]:
        return tuple(self._geometry)

    def param(self, name: str) -> float:
        if name in config.PARABOLA_PARAMS:
            return getattr(self._parabola, name)
        return getattr(self._line, name)

    def params(self) -> Dict[str, float]:
        return {
            "a": self._parabola.a,
            "p": self._parabola.p,
            "q": self._parabola.q,
            "m": self._line.m,
            "n": self._line.n,
        }

    def intersections(self) -> List[IntersectionPoint]:
        return solve_intersections(self._parabola, self._line)

    def area(self) -> Optional[AreaResult]:
        if not self.area_mode:
            return None
        return solve_area(self._line, self.intersections())

    def pairwise_distances(self) -> Iterator[PointDistance]:
        return self.points.pairwise_distances()

    def viewport(self) -> Viewport:
        width, height = self.viewport_size
        return Viewport(width, height, self.zoom_scale, self.pan_offset[0], self.pan_offset[1])

    def line_creation_message(self) -> Optional[str]:
        if self.line_creation_error is None:
            return None
        first = self.points[0] if len(self.points) else None
        return message_for(self.line_creation_error, x=first.x if first else None)

    # ------------------------------------------------------------------
    # coefficients

    def set_param(self, name: str, value: Any, *, snap: bool = False, source: str = "input") -> Optional[Condition]:
        if name not in config.PARAM_BOUNDS:
            return self._report(Condition.UNKNOWN_PARAMETER, param_name=name)
        normalized = normalize_param_value(name, value, snap=snap)
        if normalized is None:
            return self._report(Condition.NON_FINITE_VALUE, param_name=name)
        old_value = self.param(name)
        if name in config.PARABOLA_PARAMS:
            self._parabola = self._parabola.with_param(name, normalized)
        else:
            self._line = self._line.with_param(name, normalized)
            if source != "points":
                self.is_line_from_points = False
        self.last_condition = None
        if old_value != normalized:
            log_args = dict(
                param_name=name,
                old_value=old_value,
                new_value=normalized,
                source=source,
                params=self.params(),
            )
            if source == "drag":
                self.log.record_throttled("param_change", **log_args)
            else:
                self.log.record("param_change", **log_args)
        return None

    def set_a(self, value: Any, snap: bool = False) -> Optional[Condition]:
        return self.set_param("a", value, snap=snap)

    def set_p(self, value: Any, snap: bool = False) -> Optional[Condition]:
        return self.set_param("p", value, snap=snap)

    def set_q(self, value: Any, snap: bool = False) -> Optional[Condition]:
        return self.set_param("q", value, snap=snap)

    def set_m(self, value: Any) -> Optional[Condition]:
        return self.set_param("m", value)

    def set_n(self, value: Any) -> Optional[Condition]:
        return self.set_param("n", value)

    def apply_text(self, name: str, text: Any) -> Optional[Condition]:
        value = parse_decimal(text)
        if value is None:
            return self._report(Condition.INVALID_NUMBER, param_name=name)
        return self.set_param(name, value, source="input")

    def apply_fraction(self, name: str, numerator: Any, denominator: Any) -> Optional[Condition]:
        if parse_decimal(numerator) is None or parse_decimal(denominator) is None:
            return self._report(Condition.INVALID_NUMBER, param_name=name)
        if parse_decimal(denominator) == 0:
            return self._report(Condition.ZERO_DENOMINATOR, param_name=name)
        value = parse_fraction(numerator, denominator)
        if value is None:
            return self._report(Condition.NON_FINITE_VALUE, param_name=name)
        return self.set_param(name, value, source="fraction")

    # ------------------------------------------------------------------
    # marked points

    def add_point(self, x: Any, y: Any, *, source: str = "input") -> Optional[Condition]:
        fx, fy = coerce_finite(x), coerce_finite(y)
        if fx is None or fy is None:
            return self._report(Condition.NON_FINITE_VALUE)
        point = self.points.add(fx, fy)
        if point is None:
            return self._report(Condition.CAPACITY_REACHED)
        self.last_condition = None
        self.log.record("point_add", source=source, extras={"label": point.label, "x": fx, "y": fy})
        self.signal(FeedbackSignal.PLACE)
        return None

    def add_point_from_text(self, x_text: Any, y_text: Any) -> Optional[Condition]:
        x, y = parse_decimal(x_text), parse_decimal(y_text)
        if x is None or y is None:
            return self._report(Condition.INVALID_NUMBER)
        return self.add_point(x, y)

    def remove_point_at(self, index: int, *, source: str = "input") -> Optional[Condition]:
        removed = self.points.remove_at(index)
        if removed is None:
            return self._report(Condition.INDEX_OUT_OF_RANGE)
        self.last_condition = None
        self.log.record(
            "point_remove",
            source=source,
            extras={"label": removed.label, "x": removed.x, "y": removed.y},
        )
        self.signal(FeedbackSignal.REMOVE)
        return None

    def clear_points(self) -> None:
        self.points.clear()
        self.log.record("points_clear")

    def create_line_from_points(self) -> Optional[Condition]:
        """Fit y = mx + n through the first two marked points."""
        self.line_creation_error = None
        pts = self.points.points
        first = pts[0].position if len(pts) > 0 else None
        second = pts[1].position if len(pts) > 1 else None
        fit = solve_line_through(first, second)
        if fit.condition is not None:
            self.line_creation_error = fit.condition
            return self._report(fit.condition)
        self.set_param("m", fit.m, source="points")
        self.set_param("n", fit.n, source="points")
        self.is_line_from_points = True
        self.log.record("line_from_points", source="points", params=self.params())
        return None

    # ------------------------------------------------------------------
    # free-form sketch

    def add_geometry_point(self, x: float, y: float) -> GeometryPoint:
        element = GeometryPoint(x, y)
        self._geometry.append(element)
        self.log.record("geometry_add", extras={"x": x, "y": y})
        return element

    def add_geometry_segment(self, start: Tuple[float, float], end: Tuple[float, float]) -> LineSegment:
        element = LineSegment(tuple(start), tuple(end))
        self._geometry.append(element)
        self.log.record("geometry_add", extras={"x": end[0], "y": end[1]})
        return element

    def clear_geometry(self) -> None:
        self._geometry = []

    # ------------------------------------------------------------------
    # drag ghost

    def begin_drag(self) -> None:
        self._ghost = GhostState(self._parabola, self._line)

    def end_drag(self) -> None:
        self._ghost = None

    def restore_ghost(self) -> None:
        """Put the curves back to their pre-drag state and drop the ghost."""
        if self._ghost is None:
            return
        self.log.flush()
        self._parabola = self._ghost.parabola
        self._line = self._ghost.line
        self._ghost = None

    # ------------------------------------------------------------------
    # view

    def set_viewport_size(self, width: float, height: float) -> None:
        if width > 0 and height > 0 and math.isfinite(width) and math.isfinite(height):
            self.viewport_size = (float(width), float(height))

    def pan_by(self, dx: float, dy: float) -> None:
        if not (math.isfinite(dx) and math.isfinite(dy)):
            return
        self.pan_offset = (self.pan_offset[0] + dx, self.pan_offset[1] + dy)

    def zoom_by(self, ratio: float) -> None:
        if not math.isfinite(ratio) or ratio <= 0:
            return
        self.set_zoom(self.zoom_scale * ratio)

    def set_zoom(self, value: float) -> None:
        if math.isfinite(value):
            self.zoom_scale = max(config.ZOOM_MIN, min(config.ZOOM_MAX, value))

    def reset_view(self) -> None:
        self.zoom_scale = 1.0
        self.pan_offset = (0.0, 0.0)

    def view_params(self) -> Dict[str, float]:
        return {"zoom_scale": self.zoom_scale, "pan_x": self.pan_offset[0], "pan_y": self.pan_offset[1]}

    # ------------------------------------------------------------------
    # modes

    def set_mode(self, name: str, enabled: bool) -> None:
        if name not in MODES:
            raise ValueError(f"unknown mode: {name}")
        if getattr(self, name) == bool(enabled):
            return
        setattr(self, name, bool(enabled))
        self.log.record("mode_toggle", source="toggle", param_name=name, new_value=bool(enabled))

    # ------------------------------------------------------------------
    # constrained point selection

    def begin_graph_selection(self, index: int) -> bool:
        if not 0 <= index < len(self.intersections()):
            return False
        self.constrained_point_index = index
        self.constrained_graph_type = None
        self.signal(FeedbackSignal.SELECT)
        return True

    def select_graph(self, graph_type: Union[GraphType, str]) -> bool:
        """Bind the pending intersection to a curve; unknown graph types leave it pending."""
        if self.constrained_point_index is None:
            return False
        try:
            self.constrained_graph_type = GraphType(graph_type)
        except ValueError:
            return False
        self.log.record(
            "graph_select",
            source="tap",
            extras={"graph_type": self.constrained_graph_type.value},
        )
        self.signal(FeedbackSignal.SELECT)
        return True

    def cancel_graph_selection(self) -> None:
        self.constrained_point_index = None
        self.constrained_graph_type = None

    # ------------------------------------------------------------------
    # feedback

    def signal(self, signal: FeedbackSignal) -> None:
        if self.settings.haptics_enabled:
            self._feedback.append(signal)

    def drain_feedback(self) -> List[FeedbackSignal]:
        signals, self._feedback = self._feedback, []
        return signals

    # ------------------------------------------------------------------

    def reset(self) -> None:
        self._parabola = parabola_from_params(self.settings.default_params)
        self._line = line_from_params(self.settings.default_params)
        self.area_mode = False
        self.geometry_mode = False
        self.sketch_mode = False
        self.is_line_from_points = False
        self.line_creation_error = None
        self.last_condition = None
        self.points.clear()
        self._ghost = None
        self.cancel_graph_selection()
        self.reset_view()
        self.log.record("reset", source="button", params=self.params())

    def _report(self, condition: Condition, *, param_name: Optional[str] = None) -> Condition:
        self.last_condition = condition
        self.log.record("condition", param_name=param_name, extras={"condition": condition.value})
        self.signal(FeedbackSignal.WARNING)
        return condition
