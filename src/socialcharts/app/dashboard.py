"""Social media dashboard: NiceGUI page with boxplot, bar chart and line chart.

The page loads the configured CSV once, then places each chart into its own
container (marked boxplot, barplot, lineplot). If loading fails, a single
"Failed to load" message is shown instead of the charts.

Run:
    python -m socialcharts.app.dashboard

Configuration is read from env vars; see socialcharts.config.
"""

from __future__ import annotations

import multiprocessing as mp
from multiprocessing import freeze_support
from typing import Optional

import pandas as pd
from nicegui import ui

from socialcharts.aggregate import platform_stats_table
from socialcharts.charts.layout import RENDER_TARGETS
from socialcharts.config import DashboardConfig
from socialcharts.errors import SocialChartsError
from socialcharts.pipeline import build_figures, load_records_async
from socialcharts.utils.gui_defaults import setUpGuiDefaults
from socialcharts.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

TITLE = "Social Media Engagement"

_config: Optional[DashboardConfig] = None


def get_config() -> DashboardConfig:
    """Process-wide config, read from env vars on first use."""
    global _config
    if _config is None:
        _config = DashboardConfig.from_env()
    return _config


def stats_table_rows(table: pd.DataFrame) -> tuple[list[dict], list[dict]]:
    """Convert platform_stats_table() output to ui.table (columns, rows).

    Floats are rounded to 2 decimals; NaN (std/sem of a single post) becomes "".
    """
    columns = [{"name": "platform", "label": "Platform", "field": "platform", "align": "left"}]
    columns += [{"name": c, "label": c, "field": c} for c in table.columns]
    rows = []
    for platform, stats in table.iterrows():
        row = {"platform": str(platform)}
        for c, v in stats.items():
            if pd.isna(v):
                row[c] = ""
            elif c == "count":
                row[c] = int(v)
            else:
                row[c] = round(float(v), 2)
        rows.append(row)
    return columns, rows


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
async def home() -> None:
    """Home page: three chart containers filled once the CSV has loaded."""
    cfg = get_config()

    setUpGuiDefaults("text-sm")

    ui.page_title(TITLE)

    with ui.header().classes("items-center").style("min-height: 36px; padding: 0 8px;"):
        ui.label(TITLE).classes("text-lg")

    main_container = ui.column().classes("w-full gap-4 p-4")
    with main_container:
        status = ui.label(f"Loading {cfg.csv_source} ...")

    try:
        records = await load_records_async(
            cfg.csv_source,
            date_format=cfg.date_format,
            on_error=cfg.on_error,
        )
    except SocialChartsError as e:
        logger.exception("Failed to load %s: %s", cfg.csv_source, e)
        status.set_text(f"Failed to load: {e}")
        status.classes("text-negative")
        return

    status.delete()
    figures = build_figures(records)
    with main_container:
        for target in RENDER_TARGETS:
            with ui.element("div").mark(target):
                ui.plotly(figures[target])
        columns, rows = stats_table_rows(platform_stats_table(records))
        ui.table(columns=columns, rows=rows, row_key="platform", title="Likes by platform")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the dashboard.

    Defaults come from env vars (see socialcharts.config); explicit args win.
    """
    # before get_config(): from_env() may log warnings
    configure_logging()
    cfg = get_config()

    native_bool = cfg.native if native_bool is None else native_bool
    reload = cfg.reload if reload is None else reload

    logger.info(
        "Starting dashboard: source=%s host=%s port=%s reload=%s native=%s log_level=%s",
        cfg.csv_source,
        cfg.host,
        cfg.port,
        reload,
        native_bool,
        cfg.log_level,
    )

    run_kwargs: dict = {
        "host": cfg.host,
        "port": cfg.port,
        "reload": reload,
        "native": native_bool,
        "title": TITLE,
    }
    if native_bool:
        run_kwargs["window_size"] = (900, 1400)
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    current_process = mp.current_process()
    if current_process.name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", current_process.name)
