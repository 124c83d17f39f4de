from .chart import (
    plot_depth_curve,
    plot_scatter,
    plot_top_bar,
)

__all__ = [
    "plot_depth_curve",
    "plot_scatter",
    "plot_top_bar",
]
