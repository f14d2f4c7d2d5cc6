from __future__ import annotations

import io
import logging
import math
from datetime import date, datetime
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from .errors import ParseError
from .grid import Grid

logger = logging.getLogger(__name__)

CSV_SUFFIXES = (".csv", ".txt")
EXCEL_SUFFIXES = (".xlsx", ".xls")
SUPPORTED_SUFFIXES = CSV_SUFFIXES + EXCEL_SUFFIXES


def _normalize_cell(value: Any) -> Any:
    """
    Reduce a pandas cell to a plain Python primitive.

    NaN/NaT become None; numpy scalars are unwrapped; timestamps are rendered
    as ISO strings so they stay text for numeric coercion.
    """
    if value is None:
        return None
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _frame_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        rows.append([_normalize_cell(v) for v in raw])
    return rows


def _read_frame(data: bytes, suffix: str) -> pd.DataFrame:
    buf = io.BytesIO(data)
    if suffix in CSV_SUFFIXES:
        # Every cell stays text; blank fields stay "" rather than NaN.
        options = dict(engine="python", header=None, dtype=str, keep_default_na=False, na_filter=False, encoding="utf-8-sig")
        width = pd.read_csv(io.BytesIO(data), nrows=1, **options).shape[1]
        # Records longer than the header row (e.g. a trailing comma) are cut
        # to the header width instead of failing the whole file.
        return pd.read_csv(
            buf,
            on_bad_lines=lambda bad: bad[:width],
            **options,
        )
    engine = "openpyxl" if suffix == ".xlsx" else None
    # Only the first sheet is read.
    return pd.read_excel(buf, sheet_name=0, header=None, engine=engine)


def parse_spreadsheet(data: bytes, filename: str = "upload.csv") -> Grid:
    """Parse uploaded bytes into a Grid.

    The file type is taken from the filename suffix. Every failure, from an
    unsupported suffix to a reader error, surfaces as ParseError so callers
    only need one except clause.
    """

    suffix = Path(filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ParseError(
            f"Unsupported file type '{suffix or filename}'. Expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if not data:
        raise ParseError(f"{filename} is empty.")

    try:
        df = _read_frame(data, suffix)
    except Exception as e:  # noqa: BLE001
        raise ParseError(f"Could not read {filename}: {type(e).__name__}: {e}") from e

    grid = Grid.from_rows(_frame_to_rows(df))
    logger.info(
        "Parsed %s: %d header columns, %d records",
        filename,
        grid.total_columns,
        grid.total_rows,
    )
    return grid


def load_grid(path: Path) -> Grid:
    """Read a spreadsheet from disk and parse it."""
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    return parse_spreadsheet(path.read_bytes(), filename=path.name)
