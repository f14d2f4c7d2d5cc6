from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from .ask import answer_question
from .charts import ChartProjection, project_charts
from .grid import Grid, cell_text
from .ingest import load_grid
from .profile import ColumnProfile, TableSummary, profile_columns, summarize


@dataclass(frozen=True)
class Analysis:
    """Everything derived from one Grid.

    Built in one pass by analyze_grid. A new upload produces a new Analysis;
    an existing one is never updated in place.
    """

    grid: Grid
    profiles: tuple[ColumnProfile, ...]
    summary: TableSummary
    charts: ChartProjection
    source_name: str = "your data"

    def answer(self, question: str) -> str:
        return answer_question(
            question,
            self.grid,
            self.summary,
            self.profiles,
            source_name=self.source_name,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_name": self.source_name,
            "headers": list(self.grid.headers),
            "summary": self.summary.to_dict(),
            "profiles": [p.to_dict() for p in self.profiles],
            "charts": self.charts.to_dict(),
        }


def analyze_grid(grid: Grid, *, source_name: str = "your data") -> Analysis:
    profiles = profile_columns(grid)
    return Analysis(
        grid=grid,
        profiles=tuple(profiles),
        summary=summarize(grid, profiles),
        charts=project_charts(grid, profiles),
        source_name=source_name,
    )


def analyze_file(path: Path) -> Analysis:
    return analyze_grid(load_grid(path), source_name=path.name)


def preview_frame(grid: Grid, limit: int = 100) -> tuple[pd.DataFrame, Optional[str]]:
    """
    First `limit` records as a DataFrame for display.

    Blank headers are shown as "Column N". Returns (frame, note) where note
    says how many rows were cut, or None when everything fits.
    """
    columns = [h if h else f"Column {i + 1}" for i, h in enumerate(grid.headers)]
    rows = [[cell_text(c) for c in grid.record_cells(r)] for r in grid.records[:limit]]
    frame = pd.DataFrame(rows, columns=columns)

    note = None
    if grid.total_rows > limit:
        note = f"Showing first {limit} rows of {grid.total_rows:,} total rows"
    return frame, note
