from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from .grid import Grid, cell_text, is_blank, to_number
from .profile import ColumnProfile

ROW_SERIES_LIMIT = 10
COLUMN_SERIES_LIMIT = 5
PALETTE_SIZE = 5


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float
    color_slot: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"label": self.label, "value": self.value}
        if self.color_slot is not None:
            out["color_slot"] = self.color_slot
        return out


@dataclass(frozen=True)
class ChartProjection:
    row_series: tuple[ChartPoint, ...] = field(default_factory=tuple)
    column_average_series: tuple[ChartPoint, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_series": [p.to_dict() for p in self.row_series],
            "column_average_series": [p.to_dict() for p in self.column_average_series],
        }


def row_series(grid: Grid, profiles: Sequence[ColumnProfile]) -> tuple[ChartPoint, ...]:
    """First numeric column, record by record, for the first few records.

    Unlike profiling, a cell that does not coerce is plotted as 0 instead of
    being dropped, so the series keeps one point per record.
    """

    if not profiles:
        return ()
    target = profiles[0].index

    points: list[ChartPoint] = []
    for i, record in enumerate(grid.records[:ROW_SERIES_LIMIT]):
        raw_label = grid.cell(record, 0)
        label = f"Row {i + 1}" if is_blank(raw_label) else cell_text(raw_label)
        value = to_number(grid.cell(record, target))
        points.append(ChartPoint(label=label, value=0.0 if value is None else value))
    return tuple(points)


def column_average_series(profiles: Sequence[ColumnProfile]) -> tuple[ChartPoint, ...]:
    return tuple(
        ChartPoint(label=p.name, value=p.avg, color_slot=i % PALETTE_SIZE)
        for i, p in enumerate(profiles[:COLUMN_SERIES_LIMIT])
    )


def project_charts(grid: Grid, profiles: Sequence[ColumnProfile]) -> ChartProjection:
    return ChartProjection(
        row_series=row_series(grid, profiles),
        column_average_series=column_average_series(profiles),
    )
