from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from ..grid import Grid, to_number


@dataclass(frozen=True)
class ColumnProfile:
    """Numeric statistics for one column, computed from its coercible cells only."""

    name: str
    index: int
    values: tuple[float, ...]
    count: int
    avg: float
    min: float
    max: float
    sum: float

    @property
    def range(self) -> float:
        return self.max - self.min

    @property
    def variability(self) -> float:
        """Range relative to the average.

        A constant column has no variability (0.0). A column that varies
        around a zero average is unboundedly variable (+inf).
        """
        spread = self.range
        if spread == 0:
            return 0.0
        if self.avg == 0:
            return math.inf
        return spread / self.avg

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "index": self.index,
            "count": self.count,
            "avg": self.avg,
            "min": self.min,
            "max": self.max,
            "sum": self.sum,
            "values": list(self.values),
        }


def _profile_column(grid: Grid, index: int) -> ColumnProfile | None:
    values: list[float] = []
    total = 0.0
    vmin = math.inf
    vmax = -math.inf

    for record in grid.records:
        v = to_number(grid.cell(record, index))
        if v is None:
            continue
        values.append(v)
        total += v
        if v < vmin:
            vmin = v
        if v > vmax:
            vmax = v

    if not values:
        return None

    count = len(values)
    # Clamp so rounding in the running sum never pushes avg outside [min, max].
    avg = min(max(total / count, vmin), vmax)
    return ColumnProfile(
        name=grid.headers[index],
        index=index,
        values=tuple(values),
        count=count,
        avg=avg,
        min=vmin,
        max=vmax,
        sum=total,
    )


def profile_columns(grid: Grid) -> list[ColumnProfile]:
    """Profile every header position that holds at least one numeric cell.

    Output follows header order. Columns without a single coercible cell are
    skipped, so positions can be missing; blank and duplicate header names
    are kept exactly as they appear.
    """

    profiles: list[ColumnProfile] = []
    for index in range(grid.total_columns):
        profile = _profile_column(grid, index)
        if profile is not None:
            profiles.append(profile)
    return profiles
