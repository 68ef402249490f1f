"""Small geometry helpers: rounding, circle overlap and grid lines."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """An integer grid position."""

    x: int
    y: int


def round_half_away(x: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(x + 0.5) if x > 0.0 else int(x - 0.5)


def circles_collide(
    x1: float, y1: float, radius1: float, x2: float, y2: float, radius2: float
) -> bool:
    """True when two circles overlap; touching circles do not collide."""
    return math.hypot(x1 - x2, y1 - y2) < radius1 + radius2


def _divide_toward_zero(value: int, divisor: int) -> int:
    quotient = abs(value) // abs(divisor)
    return quotient if (value >= 0) == (divisor > 0) else -quotient


def line(x1: int, y1: int, x2: int, y2: int, grid_width: int) -> list[Point]:
    """Grid cells crossed by a line, stepping ``grid_width`` pixels at a time.

    The end point itself is not included; points run from the end with the
    smaller major-axis coordinate.
    """
    if grid_width <= 0:
        raise ValueError("grid width must be positive")

    steep = abs(y2 - y1) > abs(x2 - x1)
    if steep:
        x1, y1 = y1, x1
        x2, y2 = y2, x2
    if x1 > x2:
        x1, x2 = x2, x1
        y1, y2 = y2, y1

    delta_x = x2 - x1
    if delta_x == 0:
        return []
    delta_error = abs(y2 - y1) / delta_x
    y_step = grid_width if y1 < y2 else -grid_width

    points: list[Point] = []
    error = 0.0
    y = y1
    for x in range(x1, x2, grid_width):
        column = _divide_toward_zero(x, grid_width)
        row = _divide_toward_zero(y, grid_width)
        points.append(Point(row, column) if steep else Point(column, row))
        error += delta_error
        if error >= 0.5:
            y += y_step
            error -= 1.0
    return points