"""Equation text and short verbal descriptions of coefficient changes."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, List

from .curves import Line, Parabola

if TYPE_CHECKING:
    from .state import GraphWorkspace


def format_coefficient(value: float) -> str:
    if abs(value - round(value)) < 1e-3:
        text = f"{value:.0f}"
    else:
        text = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _signed_term(value: float) -> str:
    sign = "-" if value < 0 else "+"
    return f" {sign} {format_coefficient(abs(value))}"


def _leading(value: float) -> str:
    if abs(value - 1) < 1e-3:
        return ""
    if abs(value + 1) < 1e-3:
        return "-"
    return format_coefficient(value)


def parabola_equation(parabola: Parabola) -> str:
    if abs(parabola.p) < 1e-3:
        body = "x²"
    else:
        body = f"(x{_signed_term(-parabola.p)})²"
    text = f"y = {_leading(parabola.a)}{body}"
    if abs(parabola.q) >= 1e-3:
        text += _signed_term(parabola.q)
    return text


def line_equation(line: Line) -> str:
    if abs(line.m) < 1e-3:
        return f"y = {format_coefficient(line.n)}"
    text = f"y = {_leading(line.m)}x"
    if abs(line.n) >= 1e-3:
        text += _signed_term(line.n)
    return text


def describe_a_change(old, new):
    if old == new:
        return "The parabola keeps its shape."
    trend = "narrower" if abs(new) > abs(old) else "wider"
    flip = " (flips downward)" if new < 0 <= old else ""
    flip = " (flips upward)" if old < 0 <= new else flip
    return f"{'Increasing' if abs(new) > abs(old) else 'Decreasing'} |a| makes the parabola {trend}{flip}."


def export_file_stem(workspace: "GraphWorkspace", timestamp: datetime) -> str:
    parts: List[str] = []
    if workspace.show_parabola:
        parts.append(parabola_equation(workspace.parabola))
    if workspace.show_line:
        parts.append(line_equation(workspace.line))
    slug = "_".join(part.replace(" ", "").replace("/", "-") for part in parts)
    stamp = timestamp.strftime("%Y%m%d_%H%M%S")
    return f"MathGraphLab_{slug}_{stamp}" if slug else f"MathGraphLab_{stamp}"
