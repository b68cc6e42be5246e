"""Field normalization: raw string rows -> typed PostRecord values.

Rules:
- Likes must be plain digits ("12", " 12 ", "12.0" are accepted; "+5", "1_000"
  and "1e3" are not).
- Dates are parsed with an explicit strptime format when given, otherwise with
  pandas' flexible parser, which must see at least one digit. Any time-of-day
  is dropped: records are dated to the calendar day so that posts from the
  same day fall into one date group.
- Platform and post type are stripped; an empty label is malformed.

Malformed rows either raise ParseError (on_error="raise", the default) or are
dropped with a warning (on_error="skip"). They are never turned into NaN or
NaT placeholders.
"""

from __future__ import annotations

import datetime
import re
from typing import Optional

import pandas as pd

from socialcharts.errors import ParseError
from socialcharts.data.records import (
    DATE_COL,
    LIKES_COL,
    PLATFORM_COL,
    POST_TYPE_COL,
    PostRecord,
)
from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

ON_ERROR_CHOICES = ("raise", "skip")

# Plain digits, optionally with an all-zero fraction ("12", "12.0").
_WHOLE_NUMBER_RE = re.compile(r"\d+(?:\.0*)?")


def parse_likes(value: str, *, row: Optional[int] = None) -> int:
    """Parse a likes count as a non-negative integer.

    Raises:
        ParseError: If the value is empty, non-numeric, negative, or anything other
            than plain digits (fractions, signs, exponents and "_" separators).
    """
    s = str(value).strip()
    if _WHOLE_NUMBER_RE.fullmatch(s):
        return int(s.partition(".")[0])
    try:
        f = float(s)
    except ValueError:
        raise ParseError(
            f"{LIKES_COL} is not a number: {value!r}", row=row, column=LIKES_COL, value=value
        ) from None
    if f < 0:
        raise ParseError(
            f"{LIKES_COL} must be non-negative: {value!r}", row=row, column=LIKES_COL, value=value
        )
    raise ParseError(
        f"{LIKES_COL} is not a plain whole number: {value!r}", row=row, column=LIKES_COL, value=value
    )


def parse_date(
    value: str,
    *,
    date_format: Optional[str] = None,
    row: Optional[int] = None,
) -> datetime.date:
    """Parse a date string to a calendar date (time-of-day dropped).

    Args:
        value: Raw date text.
        date_format: strptime format; None for flexible parsing.
        row: Row number reported on failure.

    Raises:
        ParseError: If the value is empty or does not parse.
    """
    s = str(value).strip()
    if not s:
        raise ParseError(f"{DATE_COL} is empty", row=row, column=DATE_COL, value=value)
    if date_format is not None:
        try:
            return datetime.datetime.strptime(s, date_format).date()
        except ValueError as e:
            raise ParseError(
                f"{DATE_COL} {value!r} does not match format {date_format!r}",
                row=row, column=DATE_COL, value=value,
            ) from e
    # pandas resolves words like "today" and "now" to the current time
    if not any(ch.isdigit() for ch in s):
        raise ParseError(f"{DATE_COL} is not a date: {value!r}", row=row, column=DATE_COL, value=value)
    try:
        ts = pd.to_datetime(s)
    except (ValueError, OverflowError, TypeError) as e:
        raise ParseError(
            f"{DATE_COL} is not a date: {value!r}", row=row, column=DATE_COL, value=value
        ) from e
    if pd.isna(ts):
        raise ParseError(f"{DATE_COL} is not a date: {value!r}", row=row, column=DATE_COL, value=value)
    return ts.date()


def _parse_label(value: str, column: str, row: int) -> str:
    s = str(value).strip()
    if not s:
        raise ParseError(f"{column} is empty", row=row, column=column, value=value)
    return s


def normalize_row(
    platform: str,
    post_type: str,
    likes: str,
    date: str,
    *,
    row: int,
    date_format: Optional[str] = None,
) -> PostRecord:
    """Build one PostRecord from raw field strings."""
    return PostRecord(
        platform=_parse_label(platform, PLATFORM_COL, row),
        post_type=_parse_label(post_type, POST_TYPE_COL, row),
        likes=parse_likes(likes, row=row),
        date=parse_date(date, date_format=date_format, row=row),
    )


def normalize_table(
    df: pd.DataFrame,
    *,
    date_format: Optional[str] = None,
    on_error: str = "raise",
) -> list[PostRecord]:
    """Convert a raw string table into PostRecords, in row order.

    Args:
        df: Table from load_table() with the required columns.
        date_format: strptime format for the Date column; None for flexible parsing.
        on_error: "raise" to fail on the first malformed row, "skip" to drop
            malformed rows and log a warning.

    Returns:
        List of PostRecord, one per accepted row.

    Raises:
        ParseError: On a malformed row when on_error="raise".
        ValueError: If on_error is not one of ON_ERROR_CHOICES.
    """
    if on_error not in ON_ERROR_CHOICES:
        raise ValueError(f"on_error must be one of {ON_ERROR_CHOICES}, got {on_error!r}")

    records: list[PostRecord] = []
    skipped: list[ParseError] = []
    rows = zip(df[PLATFORM_COL], df[POST_TYPE_COL], df[LIKES_COL], df[DATE_COL])
    for i, (platform, post_type, likes, date) in enumerate(rows, start=1):
        try:
            records.append(
                normalize_row(platform, post_type, likes, date, row=i, date_format=date_format)
            )
        except ParseError as e:
            if on_error == "raise":
                raise
            skipped.append(e)

    if skipped:
        first = skipped[0]
        logger.warning(
            f"Skipped {len(skipped)} malformed row(s) of {len(df)}; first: row {first.row}: {first}"
        )
    logger.debug(f"Normalized {len(records)} records")
    return records
