from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Sequence

from ..grid import Grid, is_blank
from .profiler import ColumnProfile


@dataclass(frozen=True)
class TableSummary:
    total_rows: int
    total_columns: int
    numeric_column_count: int
    non_empty_rows: int
    completeness: int  # percentage, 0..100

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def count_non_empty_rows(grid: Grid) -> int:
    return sum(
        1
        for record in grid.records
        if any(not is_blank(c) for c in grid.record_cells(record))
    )


def summarize(grid: Grid, profiles: Sequence[ColumnProfile]) -> TableSummary:
    """Shape and completeness of the grid.

    Completeness is the share of records with at least one non-empty cell,
    as a whole percentage. A grid without records is 0% complete.
    """

    total_rows = grid.total_rows
    non_empty = count_non_empty_rows(grid)
    completeness = _round_half_up(non_empty / total_rows * 100) if total_rows > 0 else 0

    return TableSummary(
        total_rows=total_rows,
        total_columns=grid.total_columns,
        numeric_column_count=len(profiles),
        non_empty_rows=non_empty,
        completeness=completeness,
    )


def column_statistics(profiles: Sequence[ColumnProfile]) -> list[dict[str, str]]:
    """Per-column statistics table rows, values formatted to 2 decimals."""

    rows: list[dict[str, str]] = []
    for p in profiles:
        rows.append(
            {
                "column": p.name,
                "average": f"{p.avg:.2f}",
                "minimum": f"{p.min:.2f}",
                "maximum": f"{p.max:.2f}",
                "range": f"{p.range:.2f}",
            }
        )
    return rows
