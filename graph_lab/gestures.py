"""Pointer gestures as an explicit finite-state machine.

The machine consumes discrete events and mutates a :class:`GraphWorkspace`
through its named methods. Anchors and the drag ghost are transient: every
terminating event (pointer-up, cancel, pinch-end) clears them.

Transitions::

    Idle --down near parabola-----------------> DraggingCurveParameter
    Idle --move past tap slop-----------------> Panning | DrawingSegment
    Idle --pinch------------------------------> Zooming
    Idle --up within tap slop (geometry mode)-> PlacingOrRemovingPoint
    PlacingOrRemovingPoint --hit intersection-> AwaitingGraphSelection
    *    --up / cancel / pinch-end------------> Idle
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from . import config
from .coordinates import screen_distance, to_math, to_screen
from .curves import round_half_away
from .points import element_vertices
from .state import FeedbackSignal, GraphType, GraphWorkspace
from .verbal_descriptions import describe_a_change


class GestureState(str, Enum):
    IDLE = "idle"
    PANNING = "panning"
    ZOOMING = "zooming"
    DRAGGING_CURVE_PARAMETER = "dragging_curve_parameter"
    PLACING_OR_REMOVING_POINT = "placing_or_removing_point"
    AWAITING_GRAPH_SELECTION = "awaiting_graph_selection"
    DRAWING_SEGMENT = "drawing_segment"


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    x: float
    y: float


@dataclass(frozen=True)
class PointerCancel:
    pass


@dataclass(frozen=True)
class PinchUpdate:
    scale: float


@dataclass(frozen=True)
class PinchEnd:
    pass


GestureEvent = Union[PointerDown, PointerMove, PointerUp, PointerCancel, PinchUpdate, PinchEnd]
ScreenXY = Tuple[float, float]


def nearest_within(target: ScreenXY, candidates: Sequence[ScreenXY], radius: float) -> Optional[int]:
    """Index of the candidate closest to ``target`` inside ``radius``; first wins ties."""
    best_index = None
    best_distance = radius
    for index, candidate in enumerate(candidates):
        distance = screen_distance(target, candidate)
        if distance < best_distance:
            best_index = index
            best_distance = distance
    return best_index


class GestureStateMachine:
    def __init__(self, workspace: GraphWorkspace) -> None:
        self.workspace = workspace
        self.state = GestureState.IDLE
        self._clear_transient()

    # event intake -------------------------------------------------------

    def handle(self, event: GestureEvent) -> GestureState:
        if isinstance(event, PointerDown):
            self._on_pointer_down(event.x, event.y)
        elif isinstance(event, PointerMove):
            self._on_pointer_move(event.x, event.y)
        elif isinstance(event, PointerUp):
            self._on_pointer_up(event.x, event.y)
        elif isinstance(event, PointerCancel):
            self._on_cancel()
        elif isinstance(event, PinchUpdate):
            self._on_pinch(event.scale)
        elif isinstance(event, PinchEnd):
            self._on_pinch_end()
        else:
            raise TypeError(f"unsupported gesture event: {type(event).__name__}")
        return self.state

    def pointer_down(self, x: float, y: float) -> GestureState:
        return self.handle(PointerDown(x, y))

    def pointer_move(self, x: float, y: float) -> GestureState:
        return self.handle(PointerMove(x, y))

    def pointer_up(self, x: float, y: float) -> GestureState:
        return self.handle(PointerUp(x, y))

    def pointer_cancel(self) -> GestureState:
        return self.handle(PointerCancel())

    def pinch_update(self, scale: float) -> GestureState:
        return self.handle(PinchUpdate(scale))

    def pinch_end(self) -> GestureState:
        return self.handle(PinchEnd())

    def select_graph(self, graph_type: Union[GraphType, str]) -> GestureState:
        """Bind the tapped intersection to a curve and return to idle."""
        if self.state is GestureState.AWAITING_GRAPH_SELECTION and self.workspace.select_graph(graph_type):
            self.state = GestureState.IDLE
        return self.state

    def cancel_graph_selection(self) -> GestureState:
        if self.state is GestureState.AWAITING_GRAPH_SELECTION:
            self.workspace.cancel_graph_selection()
            self.state = GestureState.IDLE
        return self.state

    @property
    def has_transient_state(self) -> bool:
        return any(
            value is not None
            for value in (self._press, self._last, self._drag_start_a, self._pinch_previous, self._segment_start)
        )

    # handlers -----------------------------------------------------------

    def _on_pointer_down(self, x: float, y: float) -> None:
        ws = self.workspace
        if self.state is GestureState.AWAITING_GRAPH_SELECTION:
            ws.cancel_graph_selection()
            self.state = GestureState.IDLE
        elif self.state is not GestureState.IDLE:
            self._on_cancel()

        self._press = (x, y)
        self._last = (x, y)
        math_x, math_y = to_math(ws.viewport(), x, y)
        if not ws.geometry_mode and ws.show_parabola and self._near_parabola(math_x, math_y):
            self._start_curve_drag()

    def _on_pointer_move(self, x: float, y: float) -> None:
        if self.state is GestureState.IDLE and self._press is not None:
            if screen_distance(self._press, (x, y)) < config.TAP_SLOP_PX:
                return
            ws = self.workspace
            if ws.geometry_mode and ws.sketch_mode:
                self.state = GestureState.DRAWING_SEGMENT
                self._segment_start = self._snap_sketch_point(self._press)
                self._last = (x, y)
                return
            self.state = GestureState.PANNING

        if self.state is GestureState.PANNING:
            last_x, last_y = self._last
            self.workspace.pan_by(x - last_x, y - last_y)
            self._last = (x, y)
        elif self.state is GestureState.DRAGGING_CURVE_PARAMETER:
            self._update_curve_drag(y)
            self._last = (x, y)
        elif self.state is GestureState.DRAWING_SEGMENT:
            self._last = (x, y)

    def _on_pointer_up(self, x: float, y: float) -> None:
        ws = self.workspace
        state = self.state
        if state is GestureState.DRAGGING_CURVE_PARAMETER:
            self._finish_curve_drag()
        elif state is GestureState.PANNING:
            ws.log.record("pan_end", source="gesture", view=ws.view_params())
        elif state is GestureState.ZOOMING:
            ws.log.record("zoom_end", source="gesture", view=ws.view_params())
        elif state is GestureState.DRAWING_SEGMENT:
            ws.add_geometry_segment(self._segment_start, self._snap_sketch_point((x, y)))
        elif state is GestureState.IDLE and self._press is not None:
            if ws.geometry_mode and screen_distance(self._press, (x, y)) < config.TAP_SLOP_PX:
                self.state = GestureState.PLACING_OR_REMOVING_POINT
                self._resolve_tap(x, y)

        if self.state is not GestureState.AWAITING_GRAPH_SELECTION:
            self.state = GestureState.IDLE
        self._clear_transient()

    def _on_cancel(self) -> None:
        ws = self.workspace
        if self.state is GestureState.DRAGGING_CURVE_PARAMETER:
            ws.restore_ghost()
            ws.log.record("drag_cancel", source="gesture", params=ws.params())
        if self.state is not GestureState.AWAITING_GRAPH_SELECTION:
            self.state = GestureState.IDLE
        self._clear_transient()

    def _on_pinch(self, scale: float) -> None:
        if not math.isfinite(scale) or scale <= 0:
            return
        if self.state is not GestureState.ZOOMING:
            if self.state is GestureState.AWAITING_GRAPH_SELECTION:
                self.workspace.cancel_graph_selection()
            else:
                self._on_cancel()
            self._clear_transient()
            self.state = GestureState.ZOOMING
            self._pinch_previous = 1.0
        self.workspace.zoom_by(scale / self._pinch_previous)
        self._pinch_previous = scale

    def _on_pinch_end(self) -> None:
        if self.state is GestureState.ZOOMING:
            ws = self.workspace
            ws.log.record("zoom_end", source="gesture", view=ws.view_params())
            self.state = GestureState.IDLE
        self._clear_transient()

    # rubber-banding -----------------------------------------------------

    def _near_parabola(self, math_x: float, math_y: float) -> bool:
        return abs(math_y - self.workspace.parabola.evaluate(math_x)) < config.CURVE_PROXIMITY

    def _start_curve_drag(self) -> None:
        ws = self.workspace
        ws.begin_drag()
        self._drag_start_a = ws.parabola.a
        self._drag_last_a = ws.parabola.a
        self.state = GestureState.DRAGGING_CURVE_PARAMETER
        ws.log.record("drag_start", source="gesture", param_name="a", old_value=ws.parabola.a)
        ws.signal(FeedbackSignal.GRAB)

    def _update_curve_drag(self, screen_y: float) -> None:
        ws = self.workspace
        delta_y = screen_y - self._press[1]
        ws.set_param("a", self._drag_start_a - delta_y * config.DRAG_SENSITIVITY, source="drag")
        current = ws.parabola.a
        if math.trunc(current) != math.trunc(self._drag_last_a):
            ws.signal(FeedbackSignal.TICK)
        self._drag_last_a = current

    def _finish_curve_drag(self) -> None:
        ws = self.workspace
        ws.end_drag()
        if ws.settings.grid_snap_enabled:
            ws.set_param("a", ws.parabola.a, snap=True, source="drag")
            ws.signal(FeedbackSignal.SNAP)
        ws.log.flush()
        ws.log.record(
            "drag_end",
            source="gesture",
            param_name="a",
            old_value=self._drag_start_a,
            new_value=ws.parabola.a,
            params=ws.params(),
            extras={"description": describe_a_change(self._drag_start_a, ws.parabola.a)},
        )

    # taps -----------------------------------------------------------------

    def _resolve_tap(self, x: float, y: float) -> None:
        ws = self.workspace
        view = ws.viewport()
        target = (x, y)

        intersections = [to_screen(view, pt.x, pt.y) for pt in ws.intersections()]
        hit = nearest_within(target, intersections, config.HIT_RADIUS_PX)
        if hit is not None and ws.begin_graph_selection(hit):
            self.state = GestureState.AWAITING_GRAPH_SELECTION
            return

        marked = [to_screen(view, pt.x, pt.y) for pt in ws.points]
        hit = nearest_within(target, marked, config.HIT_RADIUS_PX)
        if hit is not None:
            ws.remove_point_at(hit, source="tap")
            return

        math_x, math_y = to_math(view, x, y)
        if ws.settings.grid_snap_enabled:
            math_x = round_half_away(math_x, config.POINT_SNAP_STEP)
            math_y = round_half_away(math_y, config.POINT_SNAP_STEP)
        # at high zoom a snapped point can lie outside the hit radius of the tap that placed it
        existing = ws.points.index_at(math_x, math_y)
        if existing is not None:
            ws.remove_point_at(existing, source="tap")
            return
        ws.add_point(math_x, math_y, source="tap")

    # sketching ------------------------------------------------------------

    def _snap_sketch_point(self, screen_point: ScreenXY) -> Tuple[float, float]:
        ws = self.workspace
        view = ws.viewport()
        candidates: List[Tuple[float, float]] = [(pt.x, pt.y) for pt in ws.intersections()]
        for element in ws.geometry:
            candidates.extend(element_vertices(element))
        hit = nearest_within(
            screen_point,
            [to_screen(view, cx, cy) for cx, cy in candidates],
            config.SNAP_RADIUS_PX,
        )
        if hit is not None:
            ws.signal(FeedbackSignal.SNAP)
            return candidates[hit]
        math_x, math_y = to_math(view, screen_point[0], screen_point[1])
        if ws.settings.grid_snap_enabled:
            return round_half_away(math_x), round_half_away(math_y)
        return math_x, math_y

    def _clear_transient(self) -> None:
        self._press: Optional[ScreenXY] = None
        self._last: Optional[ScreenXY] = None
        self._drag_start_a: Optional[float] = None
        self._drag_last_a: Optional[float] = None
        self._pinch_previous: Optional[float] = None
        self._segment_start: Optional[Tuple[float, float]] = None
