"""
Ladder CSV analysis: loading, ranking tables, per-depth summary and plots.
"""

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from dropfour_analysis.__main__ import main as router_main
from dropfour_analysis.cli.analyze_csv import main as analyze_main
from dropfour_analysis.io.load_results import LoadSpec, load_latest_from_dir, load_results
from dropfour_analysis.metrics.summarize import (
    SummaryConfig,
    depth_summary,
    numeric_summary,
    top_table,
    with_search_depth,
)
from dropfour_analysis.plots import plot_depth_curve, plot_scatter, plot_top_bar

CSV_TEXT = """name,games,wins,draws,losses,points,ppg,strength_wilson_lcb,avg_ms_per_move,moves,time_ms,avg_depth
Random,6,0,1,5,0.5,0.083333,0.01,1.0,40,40,0.0
Lookahead d1,6,3,1,2,3.5,0.583333,0.25,2.0,40,80,1.0
Lookahead d2,6,4,0,2,4.0,0.666667,0.3,10.5,40,420,2.0
Lookahead d3,6,5,0,1,5.0,0.833333,0.45,60.0,40,2400,3.0
"""


@pytest.fixture
def results_csv(tmp_path):
    path = tmp_path / "ladder_results_20250101_000000.csv"
    path.write_text(CSV_TEXT)
    return path


@pytest.fixture
def df(results_csv):
    return load_results(LoadSpec(csv_path=results_csv))


class TestLoad:

    def test_numeric_columns(self, df):
        assert len(df) == 4
        assert pd.api.types.is_numeric_dtype(df["ppg"])
        assert pd.api.types.is_numeric_dtype(df["avg_ms_per_move"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_results(LoadSpec(csv_path=tmp_path / "nope.csv"))

    def test_missing_name_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("games,wins\n1,1\n")
        with pytest.raises(ValueError):
            load_results(LoadSpec(csv_path=path))

    def test_latest_file_wins(self, tmp_path, results_csv):
        newer = tmp_path / "ladder_results_20260101_000000.csv"
        newer.write_text(CSV_TEXT)
        assert load_latest_from_dir(tmp_path) == newer

    def test_empty_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_latest_from_dir(tmp_path)


class TestSummaries:

    def test_top_table_ranks_by_metric(self, df):
        table = top_table(df, SummaryConfig(metric="ppg", top_n=2))
        assert list(table["name"]) == ["Lookahead d3", "Lookahead d2"]
        assert list(table["rk"]) == [1, 2]

    def test_speed_ranks_ascending(self, df):
        table = top_table(df, SummaryConfig(metric="avg_ms_per_move", top_n=1))
        assert table.loc[0, "name"] == "Random"

    def test_min_games_filter(self, df):
        assert top_table(df, SummaryConfig(min_games=10)).empty

    def test_unknown_metric(self, df):
        with pytest.raises(ValueError):
            top_table(df, SummaryConfig(metric="elo"))  # type: ignore[arg-type]

    def test_search_depth_parsed_from_name(self, df):
        depths = with_search_depth(df).set_index("name")["search_depth"]
        assert depths.isna()["Random"]
        assert depths["Lookahead d2"] == 2

    def test_depth_summary(self, df):
        summary = depth_summary(df)
        assert list(summary["search_depth"]) == [1, 2, 3]
        assert summary["avg_ms_per_move"].is_monotonic_increasing

    def test_numeric_summary(self, df):
        desc = numeric_summary(df)
        assert "ppg" in desc.index
        assert "mean" in desc.columns


class TestPlots:

    def test_plots_written(self, df, tmp_path):
        outdir = tmp_path / "figs"
        paths = [
            plot_top_bar(df, outdir, metric="ppg", top_n=3, show=False),
            plot_scatter(df, outdir, x="avg_ms_per_move", y="ppg", show=False),
            plot_depth_curve(depth_summary(df), outdir, show=False),
        ]
        for path in paths:
            assert path is not None and path.exists()

    def test_unplottable_inputs(self, df, tmp_path):
        assert plot_top_bar(df, tmp_path, metric="missing", top_n=3, show=False) is None
        assert plot_depth_curve(pd.DataFrame(), tmp_path, show=False) is None


class TestCli:

    def test_tables_only(self, results_csv, capsys):
        assert analyze_main(["--csv", str(results_csv), "--no-plots"]) == 0
        out = capsys.readouterr().out
        assert "Top table" in out
        assert "By search depth" in out

    def test_latest_from_dir_with_plots(self, results_csv, tmp_path):
        outdir = tmp_path / "out"
        rc = analyze_main(["--results-dir", str(results_csv.parent), "--outdir", str(outdir)])
        assert rc == 0
        assert (outdir / "depth_curve.png").exists()

    def test_router(self, results_csv):
        assert router_main(["tables", "--csv", str(results_csv)]) == 0
        assert router_main(["bogus"]) == 2

    def test_router_figures(self, results_csv, tmp_path):
        outdir = tmp_path / "figs"
        assert router_main(["figures", "--csv", str(results_csv), "--outdir", str(outdir)]) == 0
        assert (outdir / "top_20_strength_wilson_lcb.png").exists()
