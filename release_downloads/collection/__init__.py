from release_downloads.collection.github_client import fetch_all_releases, fetch_release_page
from release_downloads.collection.history import (
    CanonicalAsset,
    CanonicalRelease,
    HistoryFormatError,
    build_history,
    load_history,
    write_history,
)
from release_downloads.collection.normalize import AssetIdentity, normalize_asset_name, parse_asset_identity

__all__ = [
    "AssetIdentity",
    "CanonicalAsset",
    "CanonicalRelease",
    "HistoryFormatError",
    "build_history",
    "fetch_all_releases",
    "fetch_release_page",
    "load_history",
    "normalize_asset_name",
    "parse_asset_identity",
    "write_history",
]
