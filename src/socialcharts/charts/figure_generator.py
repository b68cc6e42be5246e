"""Plotly figure generation for the social-media dashboard.

This module provides the FigureGenerator class, which turns aggregated
summaries into Plotly figure dictionaries. Each figure method is a pure
function of one summary: it builds its own axes and returns a fresh dict,
which the caller places into a render target.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import plotly.graph_objects as go

from socialcharts.aggregate import (
    FiveNumberSummary,
    GroupedMean,
    TimeSeriesPoint,
    summarize_by_date,
    summarize_by_platform,
    summarize_by_platform_and_type,
)
from socialcharts.charts.layout import (
    BARPLOT_TARGET,
    BOX_FILL_COLOR,
    BOX_LINE_COLOR,
    BOX_WIDTH,
    BOXPLOT_TARGET,
    INNER_BAND_PADDING,
    LINE_COLOR,
    LINE_WIDTH,
    LINEPLOT_TARGET,
    MEDIAN_COLOR,
    MEDIAN_WIDTH,
    NO_DATA_TEXT,
    OUTER_BAND_PADDING,
    POST_TYPE_PALETTE,
    ChartLayout,
    nice_upper_bound,
)
from socialcharts.data.records import PostRecord
from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

BOXPLOT_TITLE = "Likes by platform"
BARPLOT_TITLE = "Average likes by platform and post type"
LINEPLOT_TITLE = "Average likes by date"


def _unique_in_order(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


class FigureGenerator:
    """Generates Plotly figure dictionaries from aggregated summaries.

    Attributes:
        layout: Canvas size and margins shared by all three charts.
    """

    def __init__(self, layout: ChartLayout | None = None) -> None:
        self.layout = layout or ChartLayout()

    def make_figures(self, records: Sequence[PostRecord]) -> dict[str, dict]:
        """Aggregate records and build all three figures.

        Args:
            records: Normalized post records.

        Returns:
            Dictionary mapping render target id (boxplot, barplot, lineplot)
            to its Plotly figure dictionary.
        """
        logger.info(f"FigureGenerator.make_figures: records={len(records)}")
        return {
            BOXPLOT_TARGET: self.boxplot_figure(summarize_by_platform(records)),
            BARPLOT_TARGET: self.grouped_bar_figure(summarize_by_platform_and_type(records)),
            LINEPLOT_TARGET: self.line_figure(summarize_by_date(records)),
        }

    def _base_layout(self, title: str) -> dict:
        layout = self.layout.to_plotly()
        layout["title"] = dict(text=title, x=0.5, xanchor="center")
        return layout

    def _figure_empty(self, title: str) -> dict:
        """Placeholder figure with hidden axes and a centered "No data" note."""
        fig = go.Figure()
        fig.update_layout(
            **self._base_layout(title),
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            annotations=[dict(
                text=NO_DATA_TEXT,
                x=0.5,
                y=0.5,
                xref="paper",
                yref="paper",
                showarrow=False,
                font=dict(size=16),
            )],
        )
        return fig.to_dict()

    def boxplot_figure(self, summaries: Mapping[str, FiveNumberSummary]) -> dict:
        """Side-by-side boxplot: one precomputed box per platform.

        Box spans q1..q3; whiskers run from min to max. The median is a red
        layout shape spanning the box width.

        Args:
            summaries: Platform -> FiveNumberSummary, in display order.
        """
        logger.info(f"FigureGenerator.boxplot_figure: platforms={len(summaries)}")
        if not summaries:
            return self._figure_empty(BOXPLOT_TITLE)

        platforms = list(summaries)
        stats = [summaries[p] for p in platforms]

        fig = go.Figure()
        fig.add_trace(go.Box(
            x=platforms,
            q1=[s.q1 for s in stats],
            median=[s.median for s in stats],
            q3=[s.q3 for s in stats],
            lowerfence=[s.min for s in stats],
            upperfence=[s.max for s in stats],
            name="Likes",
            boxpoints=False,
            width=BOX_WIDTH,
            fillcolor=BOX_FILL_COLOR,
            line=dict(color=BOX_LINE_COLOR, width=1.5),
            showlegend=False,
        ))
        fig.update_layout(
            **self._base_layout(BOXPLOT_TITLE),
            showlegend=False,
            shapes=[
                dict(
                    type="line",
                    xref="x",
                    yref="y",
                    x0=i - BOX_WIDTH / 2,
                    x1=i + BOX_WIDTH / 2,
                    y0=s.median,
                    y1=s.median,
                    line=dict(color=MEDIAN_COLOR, width=MEDIAN_WIDTH),
                )
                for i, s in enumerate(stats)
            ],
            xaxis=dict(
                title="Platform",
                type="category",
                categoryorder="array",
                categoryarray=platforms,
            ),
            yaxis=dict(
                title="Likes",
                range=[0, nice_upper_bound(max(s.max for s in stats))],
            ),
        )
        return fig.to_dict()

    def grouped_bar_figure(self, means: Sequence[GroupedMean]) -> dict:
        """Grouped bar chart: bars per post type side by side within each platform.

        Args:
            means: Flattened (platform, post_type, mean_likes) rows.
        """
        logger.info(f"FigureGenerator.grouped_bar_figure: groups={len(means)}")
        if not means:
            return self._figure_empty(BARPLOT_TITLE)

        platforms = _unique_in_order(m.platform for m in means)
        post_types = _unique_in_order(m.post_type for m in means)

        fig = go.Figure()
        for i, post_type in enumerate(post_types):
            sub = [m for m in means if m.post_type == post_type]
            fig.add_trace(go.Bar(
                x=[m.platform for m in sub],
                y=[m.mean_likes for m in sub],
                name=post_type,
                marker_color=POST_TYPE_PALETTE[i % len(POST_TYPE_PALETTE)],
            ))
        fig.update_layout(
            **self._base_layout(BARPLOT_TITLE),
            barmode="group",
            bargap=OUTER_BAND_PADDING,
            bargroupgap=INNER_BAND_PADDING,
            showlegend=True,
            legend=dict(
                title_text="Post type",
                x=1,
                y=1,
                xanchor="right",
                yanchor="top",
            ),
            xaxis=dict(
                title="Platform",
                type="category",
                categoryorder="array",
                categoryarray=platforms,
            ),
            yaxis=dict(
                title="Average likes",
                range=[0, nice_upper_bound(max(m.mean_likes for m in means))],
            ),
        )
        logger.debug(f"Figure generated: {len(post_types)} traces")
        return fig.to_dict()

    def line_figure(self, points: Sequence[TimeSeriesPoint]) -> dict:
        """Line chart of average likes over time, one smoothed path through all points.

        Args:
            points: Date series sorted ascending by date.

        Raises:
            ValueError: If points are not in ascending date order.
        """
        logger.info(f"FigureGenerator.line_figure: points={len(points)}")
        if not points:
            return self._figure_empty(LINEPLOT_TITLE)

        for prev, cur in zip(points, points[1:]):
            if cur.date < prev.date:
                raise ValueError(
                    f"line_figure requires points sorted by date; {cur.date} follows {prev.date}"
                )

        dates = [p.date.isoformat() for p in points]
        xaxis = dict(title="Date", type="date")
        if len(dates) > 1:
            xaxis["range"] = [dates[0], dates[-1]]

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=dates,
            y=[p.mean_likes for p in points],
            mode="lines",
            name="Average likes",
            line=dict(color=LINE_COLOR, width=LINE_WIDTH, shape="spline"),
            showlegend=False,
        ))
        fig.update_layout(
            **self._base_layout(LINEPLOT_TITLE),
            showlegend=False,
            xaxis=xaxis,
            yaxis=dict(
                title="Average likes",
                range=[0, nice_upper_bound(max(p.mean_likes for p in points))],
            ),
        )
        return fig.to_dict()
