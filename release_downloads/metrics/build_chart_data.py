import argparse
import logging
import sys

from release_downloads.collection.history import HistoryFormatError, load_history
from release_downloads.config import configure_logging
from release_downloads.metrics.chart_data import aggregate, assign_colors, chart_order, write_chart_data

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="build-chart-data",
        description="Turn a saved release history into per-asset download series for charting.",
    )
    parser.add_argument("-i", "--input", default="releases.json", help="Release history written by collect-releases")
    parser.add_argument("-o", "--output", default="data.json", help="Path to save the chart data")
    parser.add_argument(
        "--oldest-first",
        action="store_true",
        help="Order labels chronologically (default keeps the history order, newest first)",
    )
    parser.add_argument("--no-colors", action="store_true", help="Do not attach a backgroundColor per dataset")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        history = load_history(args.input)
    except (FileNotFoundError, HistoryFormatError) as e:
        log.error("Failed to process the data: %s", e)
        sys.exit(1)

    matrix = aggregate(chart_order(history, oldest_first=args.oldest_first))
    log.info("labels: %d | datasets: %d", len(matrix.labels), len(matrix.datasets))

    chart = matrix.to_dict()
    if not args.no_colors:
        chart = assign_colors(chart)

    out = write_chart_data(chart, args.output)
    log.info("Data successfully transformed and saved to %s", out)


if __name__ == "__main__":
    main()
