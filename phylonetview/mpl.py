"""Matplotlib drawing sink."""

from typing import Optional

from matplotlib.axes import Axes
from matplotlib.patches import Circle

from phylonetview.config import DEFAULT_FONT_SIZE, STROKE_WIDTH
from phylonetview.layout import Point


class MatplotlibSink:
    """
    DrawingSink that draws onto a matplotlib Axes.

    The axes use canvas coordinates: origin top-left, y growing downwards.
    """

    def __init__(self, ax: Axes, font_size: Optional[float] = None):
        self.ax = ax
        self.font_size = font_size if font_size is not None else DEFAULT_FONT_SIZE

    def clear(self, width: float, height: float) -> None:
        self.ax.cla()
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_aspect("equal")
        self.ax.axis("off")

    def draw_line(self, start: Point, end: Point, color: str) -> None:
        self.ax.plot(
            [start[0], end[0]],
            [start[1], end[1]],
            color=color,
            linewidth=STROKE_WIDTH,
            zorder=1,
        )

    def draw_circle(self, center: Point, radius: float, fill_color: str) -> None:
        self.ax.add_patch(Circle(center, radius, facecolor=fill_color, zorder=2))

    def draw_text(self, text: str, position: Point, color: str) -> None:
        self.ax.text(
            position[0],
            position[1],
            text,
            color=color,
            fontsize=self.font_size,
            ha="center",
            va="bottom",
            zorder=3,
        )
