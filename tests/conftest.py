# tests/conftest.py
"""Pytest configuration and shared fixtures for socialcharts tests."""
from __future__ import annotations

import datetime
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure socialcharts package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


SCENARIO_CSV = """Platform,PostType,Likes,Date
TikTok,photo,100,2020-01-01
TikTok,photo,300,2020-01-01
TikTok,video,200,2020-01-02
"""


@pytest.fixture
def scenario_records():
    """Three TikTok posts: two photos on 2020-01-01, one video on 2020-01-02."""
    from socialcharts.data.records import PostRecord

    return [
        PostRecord("TikTok", "photo", 100, datetime.date(2020, 1, 1)),
        PostRecord("TikTok", "photo", 300, datetime.date(2020, 1, 1)),
        PostRecord("TikTok", "video", 200, datetime.date(2020, 1, 2)),
    ]


@pytest.fixture
def mixed_records():
    """Two platforms, three post types, dates out of order."""
    from socialcharts.data.records import PostRecord

    d = datetime.date
    return [
        PostRecord("Instagram", "Image", 10, d(2024, 3, 3)),
        PostRecord("Facebook", "Video", 40, d(2024, 3, 1)),
        PostRecord("Instagram", "Video", 30, d(2024, 3, 1)),
        PostRecord("Facebook", "Link", 20, d(2024, 3, 2)),
        PostRecord("Instagram", "Image", 50, d(2024, 3, 2)),
        PostRecord("Instagram", "Link", 0, d(2024, 3, 3)),
        PostRecord("Facebook", "Video", 60, d(2024, 3, 3)),
    ]


@pytest.fixture
def scenario_csv(tmp_path) -> Path:
    """Scenario dataset written to a temporary CSV file."""
    path = tmp_path / "socialMedia.csv"
    path.write_text(SCENARIO_CSV)
    return path
