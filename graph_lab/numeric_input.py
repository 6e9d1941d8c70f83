from __future__ import annotations

import math
from typing import Any, Optional, Tuple

from . import config


def parse_decimal(text: Any) -> Optional[float]:
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    elif isinstance(text, str):
        cleaned = text.strip().replace(",", ".").replace("−", "-")
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None
    else:
        return None
    return value if math.isfinite(value) else None


def parse_fraction(numerator: Any, denominator: Any) -> Optional[float]:
    num = parse_decimal(numerator)
    den = parse_decimal(denominator)
    if num is None or den is None or den == 0:
        return None
    value = num / den
    return value if math.isfinite(value) else None


def to_fraction(value: float) -> Tuple[int, int]:
    """Approximate ``value`` as numerator/denominator for the fraction editor."""
    tol = config.FRACTION_TOLERANCE
    if abs(value - round(value)) < tol:
        return int(round(value)), 1
    for den in range(2, config.FRACTION_MAX_DENOMINATOR + 1):
        scaled = value * den
        if abs(scaled - round(scaled)) < tol:
            return int(round(scaled)), den
    return int(round(value * 100)), 100


def format_param(param: str, value: float) -> str:
    decimals = config.PARAM_DECIMALS.get(param, 2)
    text = f"{value:.{decimals}f}"
    if float(text) == 0:
        text = f"{0.0:.{decimals}f}"
    return text
