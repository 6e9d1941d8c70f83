from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field, replace
from typing import Iterator, List, NamedTuple, Optional, Tuple, Union

from . import config


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class MarkedPoint:
    label: str
    x: float
    y: float
    id: str = field(default_factory=_new_id)

    @property
    def position(self) -> Tuple[float, float]:
        return self.x, self.y


class PointDistance(NamedTuple):
    start: MarkedPoint
    end: MarkedPoint
    distance: float


class PointStore:
    """Up to ten labelled points; labels always run A, B, C... in storage order."""

    def __init__(self, capacity: int = config.MAX_MARKED_POINTS) -> None:
        self.capacity = min(capacity, len(config.POINT_LABELS))
        self._points: List[MarkedPoint] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[MarkedPoint]:
        return iter(list(self._points))

    def __getitem__(self, index: int) -> MarkedPoint:
        return self._points[index]

    @property
    def points(self) -> Tuple[MarkedPoint, ...]:
        return tuple(self._points)

    @property
    def is_full(self) -> bool:
        return len(self._points) >= self.capacity

    def add(self, x: float, y: float) -> Optional[MarkedPoint]:
        if self.is_full:
            return None
        point = MarkedPoint(label=config.POINT_LABELS[len(self._points)], x=x, y=y)
        self._points.append(point)
        return point

    def remove_at(self, index: int) -> Optional[MarkedPoint]:
        if not 0 <= index < len(self._points):
            return None
        removed = self._points.pop(index)
        self._relabel()
        return removed

    def clear(self) -> None:
        self._points = []

    def index_of(self, point_id: str) -> Optional[int]:
        for index, point in enumerate(self._points):
            if point.id == point_id:
                return index
        return None

    def index_at(self, x: float, y: float, eps: float = config.EPS_POINT) -> Optional[int]:
        for index, point in enumerate(self._points):
            if abs(point.x - x) <= eps and abs(point.y - y) <= eps:
                return index
        return None

    def pairwise_distances(self) -> Iterator[PointDistance]:
        """Consecutive pairs (A, B), (B, C), ... with their euclidean distance."""
        points = list(self._points)
        for start, end in zip(points, points[1:]):
            yield PointDistance(start, end, math.hypot(end.x - start.x, end.y - start.y))

    def _relabel(self) -> None:
        self._points = [
            point if point.label == config.POINT_LABELS[i] else replace(point, label=config.POINT_LABELS[i])
            for i, point in enumerate(self._points)
        ]


# Free-form sketch elements, independent of marked points.


@dataclass(frozen=True)
class GeometryPoint:
    x: float
    y: float
    id: str = field(default_factory=_new_id)


@dataclass(frozen=True)
class LineSegment:
    start: Tuple[float, float]
    end: Tuple[float, float]
    id: str = field(default_factory=_new_id)

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])


GeometryElement = Union[GeometryPoint, LineSegment]


def element_vertices(element: GeometryElement) -> List[Tuple[float, float]]:
    if isinstance(element, GeometryPoint):
        return [(element.x, element.y)]
    if isinstance(element, LineSegment):
        return [element.start, element.end]
    raise TypeError(f"unsupported geometry element: {type(element).__name__}")
