"""Profile stage.

Turns a Grid into per-column numeric profiles and a table-level summary.
Both are pure projections of the grid and are recomputed in full on every
upload.
"""

from .profiler import ColumnProfile, profile_columns
from .summarize import TableSummary, column_statistics, summarize

__all__ = ["ColumnProfile", "TableSummary", "column_statistics", "profile_columns", "summarize"]
