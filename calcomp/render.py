"""
Rasterise a decoded CalComp plot with Pillow.

The plot origin is bottom-left while image rows grow downward, so drawing
starts at ``(0, max_y)`` and every y delta is negated.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Tuple

from PIL import Image, ImageDraw

from .instructions import Delta, PenChange, PenDown, PenUp
from .plot import CalcompPlot

DEFAULT_PENS: Mapping[int, str] = {
    1: "black",
    2: "red",
    3: "darkblue",
    4: "springgreen",
    5: "purple",
    6: "pink",
    7: "yellow",
    8: "darkgreen",
}
# used whenever a plot selects a pen that has no colour
DEFAULT_PEN = 1
BACKGROUND = "white"
LINE_WIDTH = 1


@dataclass
class RenderResult:
    image: Image.Image
    warnings: List[str]


def canvas_size(plot: CalcompPlot, scale: float) -> Tuple[int, int]:
    width = max(1, round(plot.max_x * scale))
    height = max(1, round(plot.max_y * scale))
    return width, height


def render_plot(
    plot: CalcompPlot,
    *,
    scale: float = 1.0,
    pens: Mapping[int, str] | None = None,
) -> RenderResult:
    if scale <= 0:
        raise ValueError("scale must be positive")
    pens = dict(DEFAULT_PENS if pens is None else pens)
    if DEFAULT_PEN not in pens:
        pens[DEFAULT_PEN] = DEFAULT_PENS[DEFAULT_PEN]

    image = Image.new("RGB", canvas_size(plot, scale), BACKGROUND)
    draw = ImageDraw.Draw(image)
    warnings: List[str] = []

    current_pen = DEFAULT_PEN
    pen_down = False
    x, y = 0, plot.max_y

    for instruction in plot.instructions:
        if isinstance(instruction, Delta):
            next_x = x + instruction.dx
            next_y = y - instruction.dy
            if pen_down:
                draw.line(
                    [(x * scale, y * scale), (next_x * scale, next_y * scale)],
                    fill=pens[current_pen],
                    width=LINE_WIDTH,
                )
            x, y = next_x, next_y
        elif isinstance(instruction, PenDown):
            pen_down = True
        elif isinstance(instruction, PenUp):
            pen_down = False
        elif isinstance(instruction, PenChange):
            if instruction.pen in pens:
                current_pen = instruction.pen
            else:
                current_pen = DEFAULT_PEN
                warnings.append(f"Pen not defined: {instruction.pen}, using default pen.")
            # the plotter lifts the pen while swapping it
            pen_down = False

    return RenderResult(image=image, warnings=warnings)


def save_png(
    plot: CalcompPlot,
    destination: Path,
    *,
    scale: float = 1.0,
    pens: Mapping[int, str] | None = None,
) -> List[str]:
    result = render_plot(plot, scale=scale, pens=pens)
    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)
    result.image.save(destination)
    return result.warnings
