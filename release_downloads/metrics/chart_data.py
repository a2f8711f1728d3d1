import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd
from matplotlib import colormaps
from matplotlib.colors import to_hex

from release_downloads.collection.history import CanonicalRelease

PALETTE = "tab20"


@dataclass(frozen=True)
class ChartDataset:
    label: str
    data: Tuple[int, ...]

    def to_dict(self) -> dict:
        return {"label": self.label, "data": list(self.data)}


@dataclass(frozen=True)
class ChartMatrix:
    labels: Tuple[str, ...]
    datasets: Tuple[ChartDataset, ...]

    def to_dict(self) -> dict:
        return {
            "labels": list(self.labels),
            "datasets": [d.to_dict() for d in self.datasets],
        }


def aggregate(releases: Sequence[CanonicalRelease]) -> ChartMatrix:
    """Fold releases into one download-count series per asset name.

    ``labels`` follows the order of ``releases``. Every series has exactly one
    value per label: the asset's download count in that release, or 0 when the
    release has no such asset. Series are ordered by first appearance. Two
    assets with the same name in one release are summed into a single cell.
    """
    labels = tuple(rel.name for rel in releases)

    rows = [
        {"pos": pos, "asset": asset.name, "download_count": asset.download_count}
        for pos, rel in enumerate(releases)
        for asset in rel.assets
    ]
    if not rows:
        return ChartMatrix(labels=labels, datasets=())

    long = pd.DataFrame(rows)

    # pass 1: every series key, first-seen order
    asset_order = list(pd.unique(long["asset"]))

    # pass 2: one cell per (asset, release position), 0 where absent
    wide = (
        long.groupby(["asset", "pos"], sort=False)["download_count"]
            .sum()
            .unstack("pos", fill_value=0)
            .reindex(index=asset_order, columns=range(len(labels)), fill_value=0)
    )

    datasets = tuple(
        ChartDataset(label=name, data=tuple(int(v) for v in row))
        for name, row in zip(wide.index, wide.to_numpy())
    )
    return ChartMatrix(labels=labels, datasets=datasets)


def chart_order(history: Sequence[CanonicalRelease], oldest_first: bool = False) -> List[CanonicalRelease]:
    # stored histories are newest first
    return list(reversed(history)) if oldest_first else list(history)


def assign_colors(chart: dict) -> dict:
    """Copy of ``chart`` with a ``backgroundColor`` on each dataset (cosmetic only)."""
    cmap = colormaps[PALETTE]
    datasets = [
        {**d, "backgroundColor": to_hex(cmap(i % cmap.N))}
        for i, d in enumerate(chart.get("datasets", []))
    ]
    return {**chart, "datasets": datasets}


def write_chart_data(chart: dict, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(chart, indent=2), encoding="utf-8")
    return path
