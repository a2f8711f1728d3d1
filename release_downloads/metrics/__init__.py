from release_downloads.metrics.chart_data import (
    ChartDataset,
    ChartMatrix,
    aggregate,
    assign_colors,
    chart_order,
    write_chart_data,
)

__all__ = [
    "ChartDataset",
    "ChartMatrix",
    "aggregate",
    "assign_colors",
    "chart_order",
    "write_chart_data",
]
