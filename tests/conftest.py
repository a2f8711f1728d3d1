"""Shared fixtures: offline GitHub release payloads."""

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def raw_releases():
    return [
        {
            "id": 1,
            "name": "v1.0.0",
            "published_at": "2024-01-10T12:00:00Z",
            "draft": False,
            "assets": [
                {"name": "tool_1.0.0_linux.tar.gz", "label": "", "size": 100, "download_count": 7, "content_type": "application/gzip"},
                {"name": "tool_1.0.0_windows.zip", "label": None, "size": 120, "download_count": 3, "content_type": "application/zip"},
            ],
        },
        {
            "id": 2,
            "name": "v1.1.0",
            "published_at": "2024-02-10T12:00:00Z",
            "assets": [
                {"name": "tool_1.1.0_linux.tar.gz", "label": "", "size": 101, "download_count": 11, "content_type": "application/gzip"},
                {"name": "checksums.txt", "label": None, "size": 1, "download_count": 2, "content_type": "text/plain"},
            ],
        },
        {
            "id": 3,
            "name": "v0.9.0",
            "published_at": "2023-12-01T08:00:00Z",
            "assets": [],
        },
    ]
