"""Sheet Analyst: tabular analysis engine.

Grid -> column profiles -> {summary, chart projections, question answers}.
"""

from .analyze import Analysis, analyze_file, analyze_grid
from .ask import Intent, answer_question, classify_intent
from .charts import ChartPoint, ChartProjection, project_charts
from .errors import ConfigError, ParseError, SheetAnalystError
from .grid import Grid
from .ingest import load_grid, parse_spreadsheet
from .profile import ColumnProfile, TableSummary, profile_columns, summarize

__all__ = [
    "Analysis",
    "ChartPoint",
    "ChartProjection",
    "ColumnProfile",
    "ConfigError",
    "Grid",
    "Intent",
    "ParseError",
    "SheetAnalystError",
    "TableSummary",
    "analyze_file",
    "analyze_grid",
    "answer_question",
    "classify_intent",
    "load_grid",
    "parse_spreadsheet",
    "profile_columns",
    "project_charts",
    "summarize",
]
