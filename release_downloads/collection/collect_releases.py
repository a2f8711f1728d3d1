import argparse
import logging
import sys
from pathlib import Path

from release_downloads.collection.github_client import fetch_all_releases
from release_downloads.collection.history import build_history, write_history
from release_downloads.config import DEFAULT_PER_PAGE, CollectConfig, ConfigError, configure_logging, resolve_token

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="collect-releases",
        description="Fetch all releases of a GitHub repository and save a normalized release history.",
    )
    parser.add_argument("-p", "--project", help="GitHub repository to fetch releases from, e.g. owner/repo")
    parser.add_argument("-t", "--token", help="GitHub personal access token (default: $GITHUB_TOKEN)")
    parser.add_argument("-o", "--output", default="releases.json", help="Path to save the output JSON file")
    parser.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE, help="Number of items per page (default: 100)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def config_from_args(args, environ=None) -> CollectConfig:
    return CollectConfig(
        project=(args.project or "").strip(),
        token=resolve_token(args.token, environ),
        per_page=args.per_page,
        output=Path(args.output),
    ).validate()


def run(config: CollectConfig, session=None) -> Path:
    rows = fetch_all_releases(config, session=session)
    history = build_history(rows)
    out = write_history(history, config.output)
    n_assets = sum(len(rel.assets) for rel in history)
    log.info("[%s] releases: %d | assets: %d", config.project, len(history), n_assets)
    log.info("Data saved to %s", out)
    return out


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = config_from_args(args)
    except ConfigError as e:
        parser.error(str(e))

    log.info("=== collect-releases START (%s, per_page=%d) ===", config.project, config.per_page)
    try:
        run(config)
    except OSError as e:
        log.error("Failed to write %s: %s", config.output, e)
        sys.exit(1)
    log.info("=== collect-releases DONE ===")


if __name__ == "__main__":
    main()
