import logging
import time

import requests

from release_downloads.config import CollectConfig

log = logging.getLogger(__name__)


def fetch_release_page(session, config: CollectConfig, page: int) -> list:
    """Fetch one page of releases. Raises on HTTP, network or payload errors."""
    params = {"per_page": config.per_page, "page": page}
    r = session.get(config.releases_url, headers=config.headers(), params=params, timeout=config.timeout)
    r.raise_for_status()
    rels = r.json()
    if not isinstance(rels, list):
        raise ValueError(f"Unexpected releases payload on page {page}: {type(rels).__name__}")
    return rels


def fetch_all_releases(config: CollectConfig, session=None) -> list:
    """Walk pages 1, 2, 3, ... until an empty page.

    Best effort: the first failing request ends pagination and whatever was
    accumulated so far is returned. Transport errors never propagate.
    """
    own_session = session is None
    if own_session:
        session = requests.Session()

    rows = []
    page = 1
    try:
        while True:
            try:
                rels = fetch_release_page(session, config, page)
            except (requests.exceptions.RequestException, ValueError) as e:
                log.warning(
                    "[%s] releases page %d failed (%s: %s). keeping %d releases fetched so far.",
                    config.project, page, type(e).__name__, e, len(rows),
                )
                break

            if not rels:
                break

            rows.extend(rels)
            log.info("[%s] releases page %d fetched. total rows: %d", config.project, page, len(rows))
            page += 1
            if config.pause_seconds:
                time.sleep(config.pause_seconds)
    finally:
        if own_session:
            session.close()

    return rows
