from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from .charts import ChartPoint, ChartProjection

# Colour per ChartPoint.color_slot.
PALETTE = ("#2563eb", "#16a34a", "#f59e0b", "#dc2626", "#7c3aed")


def safe_filename(name: str) -> str:
    keep = []
    for ch in name:
        if ch.isalnum() or ch in {"-", "_", "."}:
            keep.append(ch)
        elif ch in {" ", "/", "\\", ":"}:
            keep.append("_")
    out = "".join(keep).strip("_")
    return out or "plot"


def save_matplotlib(fig: Any, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, bbox_inches="tight")
    plt.close(fig)


def render_row_series(points: Sequence[ChartPoint], path: Path, *, title: str = "Data Distribution") -> Path:
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar([p.label for p in points], [p.value for p in points], color=PALETTE[0])
    ax.set_title(title)
    ax.grid(axis="y", linestyle="--", alpha=0.5)
    ax.tick_params(axis="x", labelrotation=45)
    save_matplotlib(fig, path)
    return path


def _pie_drawable(points: Sequence[ChartPoint]) -> bool:
    values = [p.value for p in points]
    return all(v >= 0 for v in values) and any(v > 0 for v in values)


def render_column_averages(points: Sequence[ChartPoint], path: Path, *, title: str = "Column Averages") -> Path:
    fig, ax = plt.subplots(figsize=(5, 5))
    ax.pie(
        [p.value for p in points],
        labels=[p.label for p in points],
        colors=[PALETTE[(p.color_slot or 0) % len(PALETTE)] for p in points],
        autopct="%1.0f%%",
    )
    ax.set_title(title)
    save_matplotlib(fig, path)
    return path


def render_charts(charts: ChartProjection, out_dir: Path, *, prefix: str = "") -> list[Path]:
    """Write PNGs for the non-empty chart series and return their paths.

    The pie chart is skipped when averages contain negatives or are all
    zero, since there is no meaningful share to draw.
    """

    written: list[Path] = []
    stem = safe_filename(prefix) + "_" if prefix else ""

    if charts.row_series:
        written.append(render_row_series(charts.row_series, out_dir / f"{stem}row_series.png"))

    if charts.column_average_series and _pie_drawable(charts.column_average_series):
        written.append(
            render_column_averages(charts.column_average_series, out_dir / f"{stem}column_averages.png")
        )

    return written
