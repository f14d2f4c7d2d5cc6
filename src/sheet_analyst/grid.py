from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

# Decimal literal: optional sign, digits with optional fraction (or a bare
# fraction), optional exponent. Surrounding whitespace is stripped first.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def to_number(cell: Any) -> Optional[float]:
    """Coerce one cell to a finite float, or return None.

    Booleans, blanks, text, NaN and infinities do not coerce.
    """

    if cell is None or isinstance(cell, bool):
        return None
    if isinstance(cell, (int, float)):
        value = float(cell)
        return value if math.isfinite(value) else None
    if isinstance(cell, str):
        text = cell.strip()
        if not _DECIMAL_RE.fullmatch(text):
            return None
        value = float(text)
        return value if math.isfinite(value) else None
    return None


def is_blank(cell: Any) -> bool:
    return cell is None or cell == ""


def cell_text(cell: Any) -> str:
    """Display form of a cell: integral floats lose their trailing '.0'."""

    if cell is None:
        return ""
    if isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell)


@dataclass(frozen=True)
class Grid:
    """A parsed table: row 0 is the header row, every later row is a record.

    Records are read positionally against the headers. A short record reads
    as empty past its end; cells beyond the header width are ignored.
    """

    headers: tuple[str, ...]
    records: tuple[tuple[Any, ...], ...]

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Any]]) -> "Grid":
        materialized = [tuple(r) for r in rows]
        if not materialized:
            return cls(headers=(), records=())
        headers = tuple(cell_text(h) for h in materialized[0])
        return cls(headers=headers, records=tuple(materialized[1:]))

    @property
    def total_rows(self) -> int:
        return len(self.records)

    @property
    def total_columns(self) -> int:
        return len(self.headers)

    @property
    def has_data(self) -> bool:
        """True when there is at least one record below the header row."""
        return bool(self.records)

    def cell(self, record: Sequence[Any], index: int) -> Any:
        if index >= len(self.headers) or index >= len(record):
            return None
        return record[index]

    def record_cells(self, record: Sequence[Any]) -> list[Any]:
        """Cells of a record within the header width, padded with None."""
        return [self.cell(record, i) for i in range(len(self.headers))]
