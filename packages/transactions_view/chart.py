"""Revenue trend chart for terminals.

The chart consumes the same revenue series the dashboard shows next to the
transactions table, independently of the view engine. Rendering is a plain
coordinate transform: each point's value is scaled between the series minimum
and maximum onto a fixed number of rows, and points are spread evenly across
the width.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .models import RevenuePoint


class ChartRenderer(Protocol):
    def render(self, series: Sequence[RevenuePoint]) -> str: ...


def axis_label(value: float) -> str:
    """Format an axis value in thousands (``$42k``)."""

    return f"${value / 1000:.0f}k"


def scale_points(
    series: Sequence[RevenuePoint], width: int, height: int
) -> list[tuple[int, int]]:
    """Map ``series`` onto integer ``(column, row)`` cells.

    Row 0 is the top of the plot. A flat series sits on the bottom row; a
    single point is placed in column 0.
    """

    if not series:
        return []
    values = [p.value for p in series]
    low, high = min(values), max(values)
    spread = high - low
    step = (width - 1) / (len(series) - 1) if len(series) > 1 else 0.0
    cells: list[tuple[int, int]] = []
    for index, value in enumerate(values):
        normalized = (value - low) / spread if spread else 0.0
        col = round(step * index)
        row = (height - 1) - round(normalized * (height - 1))
        cells.append((col, row))
    return cells


class TextChartRenderer:
    """Draw a revenue series as ``*`` marks on a character grid."""

    def __init__(self, width: int = 60, height: int = 12) -> None:
        if width < 2 or height < 2:
            raise ValueError("chart width and height must be at least 2")
        self.width = width
        self.height = height

    def render(self, series: Sequence[RevenuePoint]) -> str:
        if not series:
            return ""
        cells = scale_points(series, self.width, self.height)
        grid = [[" "] * self.width for _ in range(self.height)]
        for col, row in cells:
            grid[row][col] = "*"

        values = [p.value for p in series]
        low, high = min(values), max(values)
        labels = {0: axis_label(high), self.height - 1: axis_label(low)}
        gutter = max(len(s) for s in labels.values())

        lines = [
            f"{labels.get(r, ''):>{gutter}} |{''.join(marks).rstrip()}"
            for r, marks in enumerate(grid)
        ]
        lines.append(" " * gutter + " +" + "-" * self.width)

        # Month names under their columns; later names win on collisions.
        footer = [" "] * (self.width + 2)
        for (col, _row), point in zip(cells, series, strict=True):
            for offset, ch in enumerate(point.name[:3]):
                footer[col + offset] = ch
        lines.append(" " * (gutter + 2) + "".join(footer).rstrip())
        return "\n".join(lines)


__all__ = ["ChartRenderer", "TextChartRenderer", "axis_label", "scale_points"]
