"""Typed post record and source column names."""

from __future__ import annotations

import datetime
from dataclasses import dataclass

# Source CSV column names (exact match, case-sensitive).
PLATFORM_COL = "Platform"
POST_TYPE_COL = "PostType"
LIKES_COL = "Likes"
DATE_COL = "Date"

REQUIRED_COLUMNS: tuple[str, ...] = (PLATFORM_COL, POST_TYPE_COL, LIKES_COL, DATE_COL)


@dataclass(frozen=True)
class PostRecord:
    """One social-media post after normalization."""
    platform: str
    post_type: str
    likes: int
    date: datetime.date
