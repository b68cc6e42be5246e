"""Unit tests: Plotly figure dicts built from aggregated summaries.

Figures are inspected through fig.to_dict() output. Plotly may serialize
numeric arrays as binary (bdata/dtype); _decode_plotly_array handles both forms.
"""

from __future__ import annotations

import base64
import datetime
from typing import Any

import numpy as np
import pytest

from socialcharts.aggregate import (
    GroupedMean,
    TimeSeriesPoint,
    summarize_by_date,
    summarize_by_platform,
    summarize_by_platform_and_type,
)
from socialcharts.charts.figure_generator import FigureGenerator
from socialcharts.charts.layout import (
    NO_DATA_TEXT,
    POST_TYPE_PALETTE,
    RENDER_TARGETS,
    ChartLayout,
)


def _decode_plotly_array(obj: Any) -> np.ndarray:
    """Decode plotly binary serialization (dtype + bdata) if present."""
    if isinstance(obj, dict) and "bdata" in obj and "dtype" in obj:
        b = base64.b64decode(obj["bdata"])
        dtype = np.dtype(obj["dtype"])
        return np.frombuffer(b, dtype=dtype).copy()
    return np.asarray(obj)


def _values(trace: dict, key: str) -> list:
    return _decode_plotly_array(trace[key]).tolist()


def _axis_title(axis: dict) -> str:
    title = axis.get("title")
    return title["text"] if isinstance(title, dict) else title


@pytest.fixture
def generator():
    return FigureGenerator()


# -----------------------------------------------------------------------------
# Boxplot
# -----------------------------------------------------------------------------


def test_boxplot_figure_uses_precomputed_quartiles(generator, scenario_records):
    fig = generator.boxplot_figure(summarize_by_platform(scenario_records))
    (trace,) = fig["data"]
    assert trace["type"] == "box"
    assert list(trace["x"]) == ["TikTok"]
    assert _values(trace, "lowerfence") == [100.0]
    assert _values(trace, "q1") == [150.0]
    assert _values(trace, "median") == [200.0]
    assert _values(trace, "q3") == [250.0]
    assert _values(trace, "upperfence") == [300.0]
    assert trace["boxpoints"] is False
    assert trace["fillcolor"] == "lightblue"


def test_boxplot_figure_red_median_per_box(generator, mixed_records):
    """Each box gets a red median segment centered on its category slot."""
    summaries = summarize_by_platform(mixed_records)
    fig = generator.boxplot_figure(summaries)
    (trace,) = fig["data"]
    shapes = fig["layout"]["shapes"]
    assert len(shapes) == 2
    for i, (shape, summary) in enumerate(zip(shapes, summaries.values())):
        assert shape["type"] == "line"
        assert shape["line"]["color"] == "red"
        assert shape["line"]["width"] == 2
        assert shape["y0"] == shape["y1"] == summary.median
        assert shape["x0"] == pytest.approx(i - trace["width"] / 2)
        assert shape["x1"] == pytest.approx(i + trace["width"] / 2)


def test_boxplot_figure_category_order_and_y_range(generator, mixed_records):
    fig = generator.boxplot_figure(summarize_by_platform(mixed_records))
    layout = fig["layout"]
    assert list(layout["xaxis"]["categoryarray"]) == ["Instagram", "Facebook"]
    assert _axis_title(layout["xaxis"]) == "Platform"
    # max likes 60 -> nice upper bound 60
    assert list(layout["yaxis"]["range"]) == [0, 60.0]


def test_figures_use_fixed_canvas_and_margins(generator, mixed_records):
    fig = generator.boxplot_figure(summarize_by_platform(mixed_records))
    layout = fig["layout"]
    assert layout["width"] == 800
    assert layout["height"] == 400
    assert layout["margin"]["l"] == 50
    assert layout["margin"]["b"] == 50


def test_custom_layout_is_applied(mixed_records):
    gen = FigureGenerator(ChartLayout(width=640, height=320, margin_left=60))
    fig = gen.line_figure(summarize_by_date(mixed_records))
    assert fig["layout"]["width"] == 640
    assert fig["layout"]["height"] == 320
    assert fig["layout"]["margin"]["l"] == 60


# -----------------------------------------------------------------------------
# Grouped bar
# -----------------------------------------------------------------------------


def test_grouped_bar_figure_one_trace_per_post_type(generator, mixed_records):
    fig = generator.grouped_bar_figure(summarize_by_platform_and_type(mixed_records))
    traces = fig["data"]
    assert [t["name"] for t in traces] == ["Image", "Video", "Link"]
    assert [t["marker"]["color"] for t in traces] == list(POST_TYPE_PALETTE)
    video = traces[1]
    assert list(video["x"]) == ["Instagram", "Facebook"]
    assert _values(video, "y") == [30.0, 50.0]
    layout = fig["layout"]
    assert layout["barmode"] == "group"
    assert layout["bargap"] == pytest.approx(0.1)
    assert layout["bargroupgap"] == pytest.approx(0.05)
    assert list(layout["xaxis"]["categoryarray"]) == ["Instagram", "Facebook"]
    assert layout["showlegend"] is True


def test_grouped_bar_figure_palette_cycles(generator):
    means = [GroupedMean("P", f"type{i}", float(i + 1), 1) for i in range(5)]
    fig = generator.grouped_bar_figure(means)
    colors = [t["marker"]["color"] for t in fig["data"]]
    assert colors[3] == POST_TYPE_PALETTE[0]
    assert colors[4] == POST_TYPE_PALETTE[1]


def test_grouped_bar_figure_scenario(generator, scenario_records):
    fig = generator.grouped_bar_figure(summarize_by_platform_and_type(scenario_records))
    ys = {t["name"]: _values(t, "y") for t in fig["data"]}
    assert ys == {"photo": [200.0], "video": [200.0]}


# -----------------------------------------------------------------------------
# Line
# -----------------------------------------------------------------------------


def test_line_figure_single_sorted_path(generator, mixed_records):
    fig = generator.line_figure(summarize_by_date(mixed_records))
    (trace,) = fig["data"]
    assert trace["mode"] == "lines"
    assert list(trace["x"]) == ["2024-03-01", "2024-03-02", "2024-03-03"]
    assert _values(trace, "y") == pytest.approx([35.0, 35.0, 70 / 3])
    assert trace["line"]["shape"] == "spline"
    assert trace["line"]["color"] == "blue"
    xaxis = fig["layout"]["xaxis"]
    assert xaxis["type"] == "date"
    assert list(xaxis["range"]) == ["2024-03-01", "2024-03-03"]


def test_line_figure_single_point_has_no_fixed_x_range(generator, scenario_records):
    fig = generator.line_figure(summarize_by_date(scenario_records[:1]))
    assert "range" not in fig["layout"]["xaxis"]
    assert list(fig["data"][0]["x"]) == ["2020-01-01"]


def test_line_figure_rejects_unsorted_points(generator):
    points = [
        TimeSeriesPoint(datetime.date(2020, 1, 2), 1.0, 1),
        TimeSeriesPoint(datetime.date(2020, 1, 1), 2.0, 1),
    ]
    with pytest.raises(ValueError) as exc_info:
        generator.line_figure(points)
    assert "sorted" in str(exc_info.value)


# -----------------------------------------------------------------------------
# Empty input and composition
# -----------------------------------------------------------------------------


@pytest.mark.parametrize("method,empty", [
    ("boxplot_figure", {}),
    ("grouped_bar_figure", ()),
    ("line_figure", ()),
])
def test_empty_input_renders_placeholder(generator, method, empty):
    fig = getattr(generator, method)(empty)
    assert fig["data"] == []
    layout = fig["layout"]
    assert layout["annotations"][0]["text"] == NO_DATA_TEXT
    assert layout["xaxis"]["visible"] is False
    assert layout["yaxis"]["visible"] is False
    assert layout["width"] == 800


def test_make_figures_returns_all_targets(generator, scenario_records):
    figures = generator.make_figures(scenario_records)
    assert set(figures) == set(RENDER_TARGETS)
    assert figures["boxplot"]["data"][0]["type"] == "box"
    assert figures["barplot"]["data"][0]["type"] == "bar"
    assert figures["lineplot"]["data"][0]["type"] == "scatter"


def test_figures_are_independent(generator, scenario_records):
    """Each call returns a fresh dict; mutating one does not affect another."""
    a = generator.make_figures(scenario_records)
    b = generator.make_figures(scenario_records)
    a["boxplot"]["layout"]["width"] = 1
    assert b["boxplot"]["layout"]["width"] == 800
