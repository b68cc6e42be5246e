"""Fixed chart layout, palette, render targets and y-axis rounding."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# Render target ids: one page container per chart.
BOXPLOT_TARGET = "boxplot"
BARPLOT_TARGET = "barplot"
LINEPLOT_TARGET = "lineplot"
RENDER_TARGETS = (BOXPLOT_TARGET, BARPLOT_TARGET, LINEPLOT_TARGET)

# Ordinal palette for post types; reused cyclically when there are more types.
POST_TYPE_PALETTE = ("#1f77b4", "#ff7f0e", "#2ca02c")

BOX_FILL_COLOR = "lightblue"
BOX_LINE_COLOR = "black"
MEDIAN_COLOR = "red"
MEDIAN_WIDTH = 2
LINE_COLOR = "blue"
LINE_WIDTH = 2

# Band padding for categorical x axes (fraction of band).
OUTER_BAND_PADDING = 0.1
INNER_BAND_PADDING = 0.05

# Box width in category units: one band minus its padding.
BOX_WIDTH = 1 - OUTER_BAND_PADDING

NO_DATA_TEXT = "No data"


@dataclass(frozen=True)
class ChartLayout:
    """Canvas size and plot margins in logical pixels."""
    width: int = 800
    height: int = 400
    margin_left: int = 50      # room for y axis
    margin_bottom: int = 50    # room for x axis
    margin_right: int = 50
    margin_top: int = 50       # room for title and legend

    def to_plotly(self) -> dict[str, Any]:
        """Layout keywords for go.Figure.update_layout()."""
        return {
            "width": self.width,
            "height": self.height,
            "margin": dict(
                l=self.margin_left,
                r=self.margin_right,
                t=self.margin_top,
                b=self.margin_bottom,
            ),
        }


def _tick_increment(stop: float, count: int) -> float:
    """Tick step of the form 1, 2 or 5 x 10^k giving about `count` ticks over [0, stop]."""
    step = stop / count
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * 10 ** power


def nice_upper_bound(max_value: float, count: int = 10) -> float:
    """Round max_value up to a whole number of "nice" tick steps.

    Used as the top of every y axis so the axis starts at 0 and ends on a tick.
    Returns 1.0 when max_value <= 0 so the range is never degenerate.
    """
    if not max_value > 0:
        return 1.0
    upper = float(max_value)
    prev_step = None
    for _ in range(10):
        step = _tick_increment(upper, count)
        if step == prev_step:
            break
        upper = math.ceil(upper / step) * step
        prev_step = step
    return float(upper)
