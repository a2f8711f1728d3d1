import argparse
import json
import logging
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd

from release_downloads.config import configure_logging

log = logging.getLogger(__name__)


def load_chart_data(path) -> pd.DataFrame:
    """data.json -> DataFrame with one row per label and one column per dataset."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing: {path}")
    try:
        chart = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: not valid JSON ({e})") from e

    required = {"labels", "datasets"}
    if not isinstance(chart, dict) or required - set(chart):
        raise ValueError(f"{path}: expected keys {sorted(required)}")

    labels = chart["labels"]
    try:
        df = pd.DataFrame({d["label"]: d["data"] for d in chart["datasets"]}, index=range(len(labels)))
    except (KeyError, TypeError) as e:
        raise ValueError(f"{path}: malformed dataset ({e})") from e
    df.insert(0, "release", labels)
    return df


def plot_downloads(df: pd.DataFrame, out_path, title="Downloads per Release Asset") -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    series = df.drop(columns=["release"])
    fig, ax = plt.subplots(figsize=(11, 5))

    bottom = pd.Series(0, index=df.index)
    for name in series.columns:
        ax.bar(df.index, series[name], bottom=bottom, label=name)
        bottom = bottom + series[name]

    ax.set_xticks(list(df.index))
    ax.set_xticklabels(df["release"], rotation=45, ha="right")
    ax.set_title(title)
    ax.set_xlabel("Release")
    ax.set_ylabel("Downloads")
    ax.grid(True, axis="y", alpha=0.3)
    if len(series.columns):
        ax.legend(loc="upper left", fontsize="small")
    plt.tight_layout()

    plt.savefig(out_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return out_path


def main(argv=None):
    parser = argparse.ArgumentParser(prog="plot-downloads", description="Plot chart data as stacked bars.")
    parser.add_argument("-i", "--input", default="data.json", help="Chart data written by build-chart-data")
    parser.add_argument("-o", "--output", default="downloads.png", help="Figure path")
    parser.add_argument("--title", default="Downloads per Release Asset")
    args = parser.parse_args(argv)
    configure_logging()

    try:
        df = load_chart_data(args.input)
    except (FileNotFoundError, ValueError) as e:
        log.error("%s", e)
        sys.exit(1)

    out = plot_downloads(df, args.output, title=args.title)
    log.info("Saved figure: %s", out)


if __name__ == "__main__":
    main()
