"""Plotly chart rendering for aggregated post summaries."""

from socialcharts.charts.figure_generator import FigureGenerator
from socialcharts.charts.layout import RENDER_TARGETS, ChartLayout, nice_upper_bound

__all__ = [
    "ChartLayout",
    "FigureGenerator",
    "RENDER_TARGETS",
    "nice_upper_bound",
]
