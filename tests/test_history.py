"""Tests for canonical release history assembly and persistence."""

import json

import pytest

from release_downloads.collection.history import (
    CanonicalAsset,
    CanonicalRelease,
    HistoryFormatError,
    build_history,
    load_history,
    write_history,
)


def test_build_history_sorts_newest_first(raw_releases):
    history = build_history(raw_releases)

    assert [rel.name for rel in history] == ["v1.1.0", "v1.0.0", "v0.9.0"]


def test_build_history_normalizes_assets_and_keeps_order(raw_releases):
    history = build_history(raw_releases)
    v100 = history[1]

    assert [a.name for a in v100.assets] == ["tool_linux.tar.gz", "tool_windows.zip"]
    assert v100.assets[0] == CanonicalAsset(
        name="tool_linux.tar.gz", label="", size=100, download_count=7, content_type="application/gzip"
    )
    assert v100.assets[1].label is None


def test_build_history_drops_unused_fields(raw_releases):
    out = build_history(raw_releases)[1].to_dict()

    assert set(out) == {"name", "published_at", "assets"}
    assert set(out["assets"][0]) == {"name", "label", "size", "download_count", "content_type"}


def test_sort_is_stable_for_equal_timestamps():
    same = "2024-03-01T00:00:00Z"
    raw = [
        {"name": "a", "published_at": same, "assets": []},
        {"name": "b", "published_at": "2024-01-01T00:00:00Z", "assets": []},
        {"name": "c", "published_at": same, "assets": []},
        {"name": "d", "published_at": "2024-03-01T00:00:00+00:00", "assets": []},
    ]

    assert [rel.name for rel in build_history(raw)] == ["a", "c", "d", "b"]


def test_missing_or_bad_timestamps_sort_as_oldest():
    raw = [
        {"name": "no-date", "assets": []},
        {"name": "old", "published_at": "2020-01-01T00:00:00Z", "assets": []},
        {"name": "garbage", "published_at": "not a date", "assets": []},
        {"name": "null", "published_at": None, "assets": []},
        {"name": "new", "published_at": "2024-01-01T00:00:00Z", "assets": []},
    ]

    assert [rel.name for rel in build_history(raw)] == ["new", "old", "no-date", "garbage", "null"]


def test_dates_outside_nanosecond_range_do_not_break_sorting():
    raw = [
        {"name": "year-1", "published_at": "0001-01-01T00:00:00Z", "assets": []},
        {"name": "2020", "published_at": "2020-01-01T00:00:00Z", "assets": []},
        {"name": "year-9999", "published_at": "9999-12-31T23:59:59Z", "assets": []},
        {"name": "year-2300", "published_at": "2300-01-01T00:00:00Z", "assets": []},
        {"name": "2024", "published_at": "2024-06-01T00:00:00Z", "assets": []},
    ]

    names = [rel.name for rel in build_history(raw)]

    # pandas either keeps these dates at a coarser resolution or coerces them to undated
    assert names in (
        ["year-9999", "year-2300", "2024", "2020", "year-1"],
        ["2024", "2020", "year-1", "year-9999", "year-2300"],
    )


@pytest.mark.parametrize("keyword", ["now", "today", " NOW "])
def test_relative_keywords_count_as_unparseable(keyword):
    raw = [
        {"name": "relative", "published_at": keyword, "assets": []},
        {"name": "dated", "published_at": "2024-06-01T00:00:00Z", "assets": []},
    ]

    assert [rel.name for rel in build_history(raw)] == ["dated", "relative"]


def test_release_name_is_always_a_string():
    history = build_history([
        {"name": 2024, "published_at": "2024-01-01T00:00:00Z", "assets": []},
        {"name": 0, "published_at": "2023-01-01T00:00:00Z", "assets": None},
    ])

    assert [rel.name for rel in history] == ["2024", "0"]
    assert history[1].assets == ()


def test_missing_fields_default():
    history = build_history([{"name": None, "published_at": "2024-01-01T00:00:00Z", "assets": [{"name": "x_1.0.0"}]}])
    rel = history[0]

    assert rel.name == ""
    assert rel.assets == (CanonicalAsset(name="x", label=None, size=0, download_count=0, content_type=""),)


def test_duplicate_release_names_are_kept():
    raw = [
        {"name": "nightly", "published_at": "2024-01-02T00:00:00Z", "assets": []},
        {"name": "nightly", "published_at": "2024-01-01T00:00:00Z", "assets": []},
    ]

    assert len(build_history(raw)) == 2


def test_build_history_empty():
    assert build_history([]) == []


def test_write_then_load_keeps_order_and_names(tmp_path, raw_releases):
    history = build_history(raw_releases)
    path = write_history(history, tmp_path / "out" / "releases.json")

    assert load_history(path) == history
    assert json.loads(path.read_text())[0]["name"] == "v1.1.0"


def test_load_does_not_renormalize(tmp_path):
    # a name that kept a second version suffix must survive a reload unchanged
    rel = CanonicalRelease(
        name="v2", published_at=None, assets=(CanonicalAsset("pkg_for_2.0.0.tar", None, 1, 1, "x"),)
    )
    path = write_history([rel], tmp_path / "releases.json")

    assert load_history(path)[0].assets[0].name == "pkg_for_2.0.0.tar"


def test_load_accepts_null_assets(tmp_path):
    path = tmp_path / "releases.json"
    path.write_text('[{"name": "v1", "published_at": null, "assets": null}]')

    assert load_history(path) == [CanonicalRelease(name="v1", published_at=None, assets=())]


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="releases.json"):
        load_history(tmp_path / "releases.json")


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"name": "v1"}',
        '["v1"]',
        '[{"name": "v1", "assets": {"name": "x"}}]',
        '[{"name": "v1", "assets": ["x"]}]',
    ],
)
def test_load_malformed_history(tmp_path, content):
    path = tmp_path / "releases.json"
    path.write_text(content)

    with pytest.raises(HistoryFormatError, match="releases.json"):
        load_history(path)
