from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from . import config


def round_half_away(value: float, step: float = 1.0) -> float:
    """Round to the nearest multiple of ``step``, halves away from zero."""
    units = value / step
    rounded = math.copysign(math.floor(abs(units) + 0.5), units) * step
    return 0.0 if rounded == 0 else rounded


def coerce_finite(value: Any) -> Optional[float]:
    try:
        num = float(value)
    except (TypeError, ValueError):
        return None
    return num if math.isfinite(num) else None


def clamp_a_magnitude(value: float) -> float:
    if abs(value) < config.A_MIN_MAGNITUDE:
        return config.A_MIN_MAGNITUDE if value >= 0 else -config.A_MIN_MAGNITUDE
    return value


def normalize_param_value(param: str, value: Any, *, snap: bool = False) -> Optional[float]:
    """Clamp ``value`` into the allowed interval of ``param``.

    Returns ``None`` for non-numeric or non-finite input so callers can keep
    the last valid value. ``snap`` rounds to the nearest integer before the
    ``a`` magnitude guard, so a snapped ``a`` never lands on zero.
    """
    cfg = config.PARAM_BOUNDS[param]
    num = coerce_finite(value)
    if num is None:
        return None
    num = max(cfg["min"], min(cfg["max"], num))
    if snap:
        num = round_half_away(num)
    if param == "a":
        num = clamp_a_magnitude(num)
    if num == 0:
        num = 0.0
    return num


def normalize_params(raw: Optional[Dict[str, Any]]) -> Dict[str, float]:
    params = {}
    for key, default_val in config.DEFAULT_PARAMS.items():
        value = normalize_param_value(key, (raw or {}).get(key, default_val))
        params[key] = default_val if value is None else value
    return params


@dataclass(frozen=True)
class Parabola:
    """y = a(x - p)^2 + q"""

    a: float = config.DEFAULT_PARAMS["a"]
    p: float = config.DEFAULT_PARAMS["p"]
    q: float = config.DEFAULT_PARAMS["q"]

    def evaluate(self, x: float) -> float:
        return self.a * (x - self.p) ** 2 + self.q

    def with_param(self, param: str, value: float) -> "Parabola":
        return replace(self, **{param: value})


@dataclass(frozen=True)
class Line:
    """y = mx + n"""

    m: float = config.DEFAULT_PARAMS["m"]
    n: float = config.DEFAULT_PARAMS["n"]

    def evaluate(self, x: float) -> float:
        return self.m * x + self.n

    def with_param(self, param: str, value: float) -> "Line":
        return replace(self, **{param: value})


def parabola_from_params(params: Dict[str, float]) -> Parabola:
    return Parabola(a=params["a"], p=params["p"], q=params["q"])


def line_from_params(params: Dict[str, float]) -> Line:
    return Line(m=params["m"], n=params["n"])
