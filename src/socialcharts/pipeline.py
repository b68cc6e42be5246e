"""Load -> normalize -> aggregate -> render, as explicit stages.

load_records() either returns a non-empty record list or raises; callers only
build figures from a successful load.
"""

from __future__ import annotations

from typing import Optional

from nicegui import run

from socialcharts.charts.figure_generator import FigureGenerator
from socialcharts.charts.layout import ChartLayout
from socialcharts.data.loader import Source, load_table
from socialcharts.data.normalize import normalize_table
from socialcharts.data.records import PostRecord
from socialcharts.errors import EmptyDatasetError
from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)


def load_records(
    source: Source,
    *,
    date_format: Optional[str] = None,
    on_error: str = "raise",
) -> list[PostRecord]:
    """Load a posts CSV and normalize it into records.

    Raises:
        LoadError: Source missing, unreadable, or lacking required columns.
        ParseError: A malformed row when on_error="raise".
        EmptyDatasetError: No records remain.
    """
    df = load_table(source)
    records = normalize_table(df, date_format=date_format, on_error=on_error)
    if not records:
        raise EmptyDatasetError(f"No records in {source} ({len(df)} rows read)")
    return records


async def load_records_async(
    source: Source,
    *,
    date_format: Optional[str] = None,
    on_error: str = "raise",
) -> list[PostRecord]:
    """load_records() run in the NiceGUI I/O thread pool so the page stays responsive."""
    return await run.io_bound(load_records, source, date_format=date_format, on_error=on_error)


def build_figures(
    records: list[PostRecord],
    layout: Optional[ChartLayout] = None,
) -> dict[str, dict]:
    """Render target id -> Plotly figure dict for the three charts."""
    return FigureGenerator(layout).make_figures(records)
