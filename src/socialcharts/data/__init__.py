"""Loading and normalization of the posts dataset."""

from socialcharts.data.loader import default_source, get_data_dir, load_table
from socialcharts.data.normalize import normalize_table
from socialcharts.data.records import REQUIRED_COLUMNS, PostRecord

__all__ = [
    "PostRecord",
    "REQUIRED_COLUMNS",
    "default_source",
    "get_data_dir",
    "load_table",
    "normalize_table",
]
