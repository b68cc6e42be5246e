"""
socialcharts: Summary charts of social-media post engagement in a NiceGUI page.

This package provides:
- Loading and normalization of a posts CSV into typed PostRecord values
- Aggregation into per-platform five-number summaries, per (platform, post type)
  means and a per-date mean time series
- Plotly figure generation (boxplot, grouped bar chart, line chart)
- A NiceGUI dashboard page hosting the three charts

For logging configuration in standalone scripts:
    ```python
    from socialcharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from socialcharts.utils.logging import configure_logging, get_logger

from socialcharts.errors import EmptyDatasetError, LoadError, ParseError, SocialChartsError
from socialcharts.data.records import PostRecord
from socialcharts.aggregate import (
    FiveNumberSummary,
    GroupedMean,
    TimeSeriesPoint,
    group_by,
    summarize_by_date,
    summarize_by_platform,
    summarize_by_platform_and_type,
)
from socialcharts.charts.figure_generator import FigureGenerator
from socialcharts.charts.layout import ChartLayout

# Ensure socialcharts logger has NullHandler so logs don't propagate to root
# when no application has configured logging.
_logger = logging.getLogger("socialcharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartLayout",
    "EmptyDatasetError",
    "FigureGenerator",
    "FiveNumberSummary",
    "GroupedMean",
    "LoadError",
    "ParseError",
    "PostRecord",
    "SocialChartsError",
    "TimeSeriesPoint",
    "configure_logging",
    "get_logger",
    "group_by",
    "summarize_by_date",
    "summarize_by_platform",
    "summarize_by_platform_and_type",
]

__version__ = "0.1.0"
