from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd
import matplotlib.pyplot as plt


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Optional[Path]:
    if show:
        plt.show()
        return None
    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / filename
    fig.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_top_bar(df: pd.DataFrame, outdir: Path, metric: str, top_n: int, *, show: bool) -> Optional[Path]:
    if "name" not in df.columns or metric not in df.columns:
        return None
    if not pd.api.types.is_numeric_dtype(df[metric]):
        return None

    top = df[["name", metric]].dropna().sort_values(metric, ascending=False).head(top_n)
    fig = plt.figure(figsize=(10, 5))
    plt.bar(top["name"].astype(str), top[metric].astype(float))
    plt.title(f"Top {min(top_n, len(top))}: {metric}")
    plt.xlabel("agent")
    plt.ylabel(metric)
    plt.xticks(rotation=45, ha="right")
    return _finish(fig, outdir, f"top_{top_n}_{metric}.png", show=show)


def plot_scatter(df: pd.DataFrame, outdir: Path, x: str, y: str, *, show: bool) -> Optional[Path]:
    if x not in df.columns or y not in df.columns:
        return None
    if not (pd.api.types.is_numeric_dtype(df[x]) and pd.api.types.is_numeric_dtype(df[y])):
        return None

    fig = plt.figure()
    plt.scatter(df[x], df[y], alpha=0.7)
    for _, row in df.iterrows():
        plt.annotate(str(row["name"]), (row[x], row[y]), fontsize=7, alpha=0.8)
    plt.title(f"{y} vs {x}")
    plt.xlabel(x)
    plt.ylabel(y)
    return _finish(fig, outdir, f"scatter_{y}_vs_{x}.png", show=show)


def plot_depth_curve(summary: pd.DataFrame, outdir: Path, *, show: bool) -> Optional[Path]:
    """Points-per-game and ms/move against search depth (output of depth_summary)."""
    if summary.empty:
        return None

    fig, ax = plt.subplots()
    ax.plot(summary["search_depth"], summary["ppg"], marker="o", label="ppg")
    ax.set_xlabel("search depth")
    ax.set_ylabel("points per game")

    ax2 = ax.twinx()
    ax2.plot(summary["search_depth"], summary["avg_ms_per_move"], marker="s", color="tab:orange", label="ms/move")
    ax2.set_ylabel("avg ms per move")

    ax.set_title("Strength and cost by depth")
    return _finish(fig, outdir, "depth_curve.png", show=show)
