"""CSV loading for the posts dataset.

Reads the raw table with every column kept as text; type coercion happens in
socialcharts.data.normalize.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence, Union
from urllib.error import URLError

import pandas as pd

from socialcharts.errors import LoadError
from socialcharts.data.records import REQUIRED_COLUMNS
from socialcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Sample dataset shipped in <project root>/data/
DEFAULT_CSV = "socialMedia.csv"

Source = Union[str, os.PathLike]


def get_data_dir() -> Path:
    """Resolve the project data/ directory.

    Package layout: <root>/src/socialcharts/data/loader.py
    Data: <root>/data/
    """
    # loader.py -> data -> socialcharts -> src -> project root
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def default_source() -> Path:
    """Path of the bundled sample CSV."""
    return get_data_dir() / DEFAULT_CSV


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://", "file://"))


def load_table(
    source: Source,
    *,
    required_columns: Sequence[str] = REQUIRED_COLUMNS,
) -> pd.DataFrame:
    """Load a posts CSV as a string-typed DataFrame.

    Args:
        source: Local path or URL of the CSV.
        required_columns: Column names that must be present (exact match).

    Returns:
        DataFrame with one row per input row, all values as str. Empty cells are "".

    Raises:
        LoadError: If the source is missing or unreachable, cannot be parsed as
            a table, or lacks a required column.
    """
    src = os.fspath(source)
    if not _is_url(src) and not Path(src).exists():
        raise LoadError(f"CSV not found: {src}")

    try:
        df = pd.read_csv(src, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as e:
        raise LoadError(f"CSV has no header or data: {src}") from e
    except pd.errors.ParserError as e:
        raise LoadError(f"Malformed CSV {src}: {e}") from e
    except (OSError, URLError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {src}: {e}") from e

    missing = [c for c in required_columns if c not in df.columns]
    if missing:
        raise LoadError(
            f"CSV is missing required columns: {missing}. Found: {list(df.columns)}"
        )

    logger.info(f"Loaded {len(df)} rows from {src}")
    return df
