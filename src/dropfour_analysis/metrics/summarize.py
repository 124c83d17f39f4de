from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import pandas as pd


MetricKey = Literal[
    "ppg",
    "strength_wilson_lcb",
    "avg_ms_per_move",
    "wins",
    "points",
]

_DEPTH_PATTERN = r"\bd(\d+)\b"


@dataclass(frozen=True)
class SummaryConfig:
    metric: MetricKey = "strength_wilson_lcb"
    top_n: int = 20
    min_games: int = 0


def _require_cols(df: pd.DataFrame, cols: list[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}. Present: {list(df.columns)}")


def with_search_depth(df: pd.DataFrame) -> pd.DataFrame:
    """Add a ``search_depth`` column parsed from names like 'Lookahead d3' (NaN for non-search agents)."""
    out = df.copy()
    out["search_depth"] = pd.to_numeric(out["name"].str.extract(_DEPTH_PATTERN, expand=False), errors="coerce")
    return out


def top_table(df: pd.DataFrame, cfg: SummaryConfig) -> pd.DataFrame:
    _require_cols(df, ["name", cfg.metric])

    out = df.copy()
    if cfg.min_games > 0:
        _require_cols(out, ["games"])
        out = out[out["games"].fillna(0) >= cfg.min_games].copy()

    # Lower is better only for speed
    ascending = cfg.metric == "avg_ms_per_move"
    out = out.sort_values(cfg.metric, ascending=ascending, kind="stable")

    cols = [
        "name",
        "games", "wins", "draws", "losses",
        "ppg",
        "strength_wilson_lcb",
        "avg_ms_per_move",
        "avg_depth",
    ]
    keep = [c for c in cols if c in out.columns]

    out = out[keep].head(cfg.top_n).reset_index(drop=True)
    out.insert(0, "rk", range(1, len(out) + 1))
    return out


def depth_summary(df: pd.DataFrame) -> pd.DataFrame:
    """Strength and cost per search depth, shallowest first."""
    _require_cols(df, ["name", "ppg", "avg_ms_per_move"])
    out = with_search_depth(df).dropna(subset=["search_depth"])
    if out.empty:
        return pd.DataFrame(columns=["search_depth", "ppg", "avg_ms_per_move"])
    out["search_depth"] = out["search_depth"].astype(int)
    return (
        out.groupby("search_depth", as_index=False)[["ppg", "avg_ms_per_move"]]
        .mean()
        .sort_values("search_depth")
        .reset_index(drop=True)
    )


def numeric_summary(df: pd.DataFrame) -> pd.DataFrame:
    num = df.select_dtypes(include="number")
    if num.empty:
        return pd.DataFrame()
    return num.describe(percentiles=[0.25, 0.5, 0.75]).T
