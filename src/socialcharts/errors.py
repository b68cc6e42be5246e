"""
Exceptions raised by the socialcharts pipeline.
"""

from __future__ import annotations

from typing import Any, Optional


class SocialChartsError(Exception):
    """Base exception for socialcharts"""
    pass


class LoadError(SocialChartsError):
    """Source is unreachable, unreadable, or not a usable table"""
    pass


class ParseError(SocialChartsError, ValueError):
    """A raw field could not be coerced to its typed value.

    Attributes:
        row: 1-based data row number (header excluded), or None if unknown.
        column: Source column name.
        value: The raw value that failed to parse.
    """

    def __init__(
        self,
        message: str,
        *,
        row: Optional[int] = None,
        column: Optional[str] = None,
        value: Any = None,
    ) -> None:
        super().__init__(message)
        self.row = row
        self.column = column
        self.value = value


class EmptyDatasetError(SocialChartsError):
    """No records remain after loading and normalization"""
    pass
