import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from release_downloads.collection.normalize import normalize_asset_name

log = logging.getLogger(__name__)


class HistoryFormatError(ValueError):
    """A persisted release history could not be read."""


@dataclass(frozen=True)
class CanonicalAsset:
    name: str
    label: Optional[str]
    size: int
    download_count: int
    content_type: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "label": self.label,
            "size": self.size,
            "download_count": self.download_count,
            "content_type": self.content_type,
        }

    @classmethod
    def from_dict(cls, asset: dict) -> "CanonicalAsset":
        return cls(
            name=str(asset.get("name") or ""),
            label=asset.get("label"),
            size=_count(asset.get("size")),
            download_count=_count(asset.get("download_count")),
            content_type=asset.get("content_type") or "",
        )


@dataclass(frozen=True)
class CanonicalRelease:
    name: str
    published_at: Optional[str]
    assets: Tuple[CanonicalAsset, ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "published_at": self.published_at,
            "assets": [a.to_dict() for a in self.assets],
        }

    @classmethod
    def from_dict(cls, rel: dict) -> "CanonicalRelease":
        return cls(
            name="" if rel.get("name") is None else str(rel["name"]),
            published_at=rel.get("published_at"),
            assets=tuple(CanonicalAsset.from_dict(a) for a in rel.get("assets") or []),
        )


def _count(value) -> int:
    try:
        return max(int(value or 0), 0)
    except (TypeError, ValueError):
        return 0


# pandas reads these as the current time
NOT_A_TIMESTAMP = {"", "now", "today"}


def to_dt(s):
    if not isinstance(s, str) or s.strip().lower() in NOT_A_TIMESTAMP:
        return pd.NaT
    return pd.to_datetime(s, utc=True, errors="coerce", format="ISO8601")


def to_canonical_release(rel: dict) -> CanonicalRelease:
    """Raw GitHub release -> canonical release with version-free asset names."""
    raw = CanonicalRelease.from_dict(rel)
    assets = tuple(
        CanonicalAsset(
            name=normalize_asset_name(a.name),
            label=a.label,
            size=a.size,
            download_count=a.download_count,
            content_type=a.content_type,
        )
        for a in raw.assets
    )
    return CanonicalRelease(name=raw.name, published_at=raw.published_at, assets=assets)


def _sort_key(release: CanonicalRelease):
    # (has timestamp, timestamp): with reverse=True, missing timestamps land last.
    # Timestamps outside the nanosecond range have no .value, so compare them directly.
    ts = to_dt(release.published_at)
    if pd.isna(ts):
        return (False, 0)
    return (True, ts)


def build_history(raw_releases: Iterable[dict]) -> List[CanonicalRelease]:
    """Map raw GitHub releases to canonical ones, newest first.

    The sort is stable: releases sharing a timestamp keep their input order.
    Releases whose ``published_at`` is missing or unparseable count as the
    oldest and go last, also in input order.
    """
    history = [to_canonical_release(rel) for rel in raw_releases]
    undated = sum(1 for rel in history if not _sort_key(rel)[0])
    if undated:
        log.warning("%d release(s) without a usable published_at; sorting them last.", undated)
    return sorted(history, key=_sort_key, reverse=True)


# =============================
# Persistence
# =============================
def write_history(history: Iterable[CanonicalRelease], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [rel.to_dict() for rel in history]
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def load_history(path) -> List[CanonicalRelease]:
    """Read a history written by :func:`write_history`, keeping its order."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HistoryFormatError(f"{path}: not valid JSON ({e})") from e

    if not isinstance(payload, list):
        raise HistoryFormatError(f"{path}: expected a JSON array of releases, got {type(payload).__name__}")
    for i, rel in enumerate(payload):
        if not isinstance(rel, dict):
            raise HistoryFormatError(f"{path}: release #{i} is not an object")
        assets = rel.get("assets")
        if assets is None:
            assets = []
        if not isinstance(assets, list) or not all(isinstance(a, dict) for a in assets):
            raise HistoryFormatError(f"{path}: release #{i} has malformed assets")

    return [CanonicalRelease.from_dict(rel) for rel in payload]
