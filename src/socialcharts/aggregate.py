"""
Aggregation of post records into the summaries drawn by the charts.

Three independent summaries are computed from the full record list:

  1. Five-number summary (min, Q1, median, Q3, max) of likes per platform.
  2. Mean likes per (platform, post type) pair.
  3. Mean likes per date, in ascending date order.

Groups are formed by exact key equality and keep first-seen order, so chart
categories appear in the order they occur in the source file. Dates are
calendar days (see socialcharts.data.normalize), so two posts from the same
day always share a date group.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

import numpy as np
import pandas as pd

from socialcharts.data.records import PostRecord
from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)

# Quartile fractions for the five-number summary.
QUARTILES = (0.25, 0.5, 0.75)


@dataclass(frozen=True)
class FiveNumberSummary:
    """min <= q1 <= median <= q3 <= max of one platform's likes."""
    min: float
    q1: float
    median: float
    q3: float
    max: float
    count: int


@dataclass(frozen=True)
class GroupedMean:
    """Mean likes of one (platform, post_type) pair."""
    platform: str
    post_type: str
    mean_likes: float
    count: int


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Mean likes of all posts on one date."""
    date: datetime.date
    mean_likes: float
    count: int


# -----------------------------------------------------------------------------
# Grouping
# -----------------------------------------------------------------------------


def group_by(items: Iterable[T], key_fn: Callable[[T], K]) -> dict[K, list[T]]:
    """Group items by key_fn(item).

    Keys are compared with == (and hashed), so two keys land in the same group
    exactly when they are equal. Groups are ordered by the first item seen for
    each key; items within a group keep input order.

    Returns:
        Dictionary mapping key -> non-empty list of items.
    """
    groups: dict[K, list[T]] = {}
    for item in items:
        groups.setdefault(key_fn(item), []).append(item)
    return groups


# -----------------------------------------------------------------------------
# Summaries
# -----------------------------------------------------------------------------


def five_number_summary(values: Sequence[float]) -> FiveNumberSummary:
    """Five-number summary of a non-empty sequence.

    Quartiles use linear interpolation: for fraction p over n sorted values the
    position is p * (n - 1), interpolated between its floor and ceil neighbours.

    Raises:
        ValueError: If values is empty.
    """
    if len(values) == 0:
        raise ValueError("five_number_summary requires at least one value")
    v = np.sort(np.asarray(values, dtype=float))
    q1, median, q3 = np.quantile(v, QUARTILES, method="linear")
    return FiveNumberSummary(
        min=float(v[0]),
        q1=float(q1),
        median=float(median),
        q3=float(q3),
        max=float(v[-1]),
        count=len(v),
    )


def _mean_likes(records: Sequence[PostRecord]) -> float:
    return sum(r.likes for r in records) / len(records)


def summarize_by_platform(records: Iterable[PostRecord]) -> dict[str, FiveNumberSummary]:
    """Five-number summary of likes for each platform.

    Returns:
        Dictionary platform -> FiveNumberSummary, in first-seen platform order.
    """
    groups = group_by(records, lambda r: r.platform)
    out = {
        platform: five_number_summary([r.likes for r in group])
        for platform, group in groups.items()
    }
    logger.debug(f"summarize_by_platform: {len(out)} platforms")
    return out


def summarize_by_platform_and_type(records: Iterable[PostRecord]) -> tuple[GroupedMean, ...]:
    """Mean likes for each (platform, post type) pair, flattened for plotting.

    Ordered by platform (first seen), then by post type (first seen within
    that platform).
    """
    out = []
    for platform, platform_group in group_by(records, lambda r: r.platform).items():
        for post_type, group in group_by(platform_group, lambda r: r.post_type).items():
            out.append(GroupedMean(
                platform=platform,
                post_type=post_type,
                mean_likes=_mean_likes(group),
                count=len(group),
            ))
    logger.debug(f"summarize_by_platform_and_type: {len(out)} groups")
    return tuple(out)


def summarize_by_date(records: Iterable[PostRecord]) -> tuple[TimeSeriesPoint, ...]:
    """Mean likes per date, sorted ascending by date.

    The line chart draws one path through these points in sequence, so the
    ascending order is part of the contract.
    """
    groups = group_by(records, lambda r: r.date)
    out = tuple(
        TimeSeriesPoint(date=d, mean_likes=_mean_likes(groups[d]), count=len(groups[d]))
        for d in sorted(groups)
    )
    logger.debug(f"summarize_by_date: {len(out)} dates")
    return out


# -----------------------------------------------------------------------------
# Full stats table
# -----------------------------------------------------------------------------

STATS_COLUMNS = ["count", "min", "max", "mean", "median", "std", "sem"]


def platform_stats_table(records: Iterable[PostRecord]) -> pd.DataFrame:
    """Per-platform likes statistics as a table.

    Stats: count, min, max, mean, median, std, sem. std and sem use ddof=1
    (NaN for a platform with a single post).

    Returns:
        DataFrame with index = platform (first-seen order), columns = STATS_COLUMNS.
    """
    tmp = pd.DataFrame(
        [(r.platform, r.likes) for r in records],
        columns=["platform", "likes"],
    )
    if tmp.empty:
        return pd.DataFrame(columns=STATS_COLUMNS, index=pd.Index([], name="platform"))

    grp = tmp.groupby("platform", sort=False)["likes"]
    table = pd.DataFrame({
        "count": grp.count(),
        "min": grp.min(),
        "max": grp.max(),
        "mean": grp.mean(),
        "median": grp.median(),
        "std": grp.std(ddof=1),
        "sem": grp.sem(ddof=1),
    })
    return table[STATS_COLUMNS]
