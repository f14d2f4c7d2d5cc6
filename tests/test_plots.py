from __future__ import annotations

from pathlib import Path

from sheet_analyst.charts import ChartPoint, ChartProjection
from sheet_analyst.plots import render_charts, safe_filename


def test_render_charts_writes_both_pngs(tmp_path: Path) -> None:
    charts = ChartProjection(
        row_series=(ChartPoint("A", 1.0), ChartPoint("B", 3.0)),
        column_average_series=(ChartPoint("Score", 2.0, color_slot=0), ChartPoint("Units", 5.0, color_slot=1)),
    )
    written = render_charts(charts, tmp_path / "figs", prefix="my data")

    assert [p.name for p in written] == ["my_data_row_series.png", "my_data_column_averages.png"]
    assert all(p.exists() and p.stat().st_size > 0 for p in written)


def test_empty_projection_writes_nothing(tmp_path: Path) -> None:
    assert render_charts(ChartProjection(), tmp_path) == []


def test_pie_skipped_for_negative_averages(tmp_path: Path) -> None:
    charts = ChartProjection(
        row_series=(ChartPoint("A", -1.0),),
        column_average_series=(ChartPoint("Delta", -1.0, color_slot=0),),
    )
    written = render_charts(charts, tmp_path)
    assert [p.name for p in written] == ["row_series.png"]


def test_safe_filename() -> None:
    assert safe_filename("Q1 report/final") == "Q1_report_final"
    assert safe_filename("***") == "plot"


def test_rendering_uses_headless_backend() -> None:
    import matplotlib

    assert matplotlib.get_backend().lower() == "agg"
