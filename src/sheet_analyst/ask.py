from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from .grid import Grid
from .profile import ColumnProfile, TableSummary
from .utils import format_number

logger = logging.getLogger(__name__)

NEED_MORE_DATA = "I need more data to provide analysis. Please upload a valid spreadsheet file."
NO_NUMERIC_COLUMNS = "I couldn't find any numeric columns to analyze in this data."

EXAMPLE_QUESTIONS = (
    "What's the summary of this data?",
    "Which column has the highest/lowest values?",
    "Show me the averages",
    "What trends do you see?",
    "What insights can you find?",
    "Tell me about the columns",
)


class Intent(str, Enum):
    """Question categories, one per routing rule."""
    NEED_MORE_DATA = "need_more_data"
    SUMMARY = "summary"
    HIGHEST = "highest"
    LOWEST = "lowest"
    AVERAGE = "average"
    TREND = "trend"
    INSIGHT = "insight"
    COLUMNS = "columns"
    HELP = "help"


@dataclass(frozen=True)
class _Context:
    grid: Grid
    summary: TableSummary
    profiles: Sequence[ColumnProfile]
    source_name: str


@dataclass(frozen=True)
class Rule:
    intent: Intent
    predicate: Callable[[str, _Context], bool]
    handler: Callable[[_Context], str]


def _mentions(*keywords: str) -> Callable[[str, _Context], bool]:
    def predicate(question: str, ctx: _Context) -> bool:
        return any(k in question for k in keywords)

    return predicate


def _requires_numeric(handler: Callable[[_Context], str]) -> Callable[[_Context], str]:
    """Answer NO_NUMERIC_COLUMNS instead of calling handler when nothing is numeric."""

    def guarded(ctx: _Context) -> str:
        if not ctx.profiles:
            return NO_NUMERIC_COLUMNS
        return handler(ctx)

    return guarded


def _bullets(lines: Sequence[str]) -> str:
    return "\n".join(f"- {line}" for line in lines)


# ---- handlers ----


def _need_more_data(ctx: _Context) -> str:
    return NEED_MORE_DATA


def _summary(ctx: _Context) -> str:
    s = ctx.summary
    return "\n".join(
        [
            f"### Data Summary for {ctx.source_name}",
            "",
            "**Basic Info:**",
            _bullets(
                [
                    f"Total rows: {s.total_rows:,}",
                    f"Total columns: {s.total_columns}",
                    f"Numeric columns: {s.numeric_column_count}",
                ]
            ),
            "",
            f"**Columns:** {', '.join(ctx.grid.headers)}",
            "",
            "**Data Quality:**",
            _bullets(
                [
                    f"Data completeness: {s.completeness}%",
                    f"Non-empty rows: {s.non_empty_rows:,}",
                ]
            ),
        ]
    )


def _highest(ctx: _Context) -> str:
    # max() keeps the first of equal candidates, i.e. header order wins ties.
    top = max(ctx.profiles, key=lambda p: p.max)
    return "\n".join(
        [
            "### Highest Values",
            "",
            f'The column "{top.name}" has the highest maximum value of **{format_number(top.max)}**.',
            "",
            "**Top numeric columns by maximum value:**",
            _bullets([f"{p.name}: {format_number(p.max)}" for p in ctx.profiles[:3]]),
        ]
    )


def _lowest(ctx: _Context) -> str:
    bottom = min(ctx.profiles, key=lambda p: p.min)
    return "\n".join(
        [
            "### Lowest Values",
            "",
            f'The column "{bottom.name}" has the lowest minimum value of **{format_number(bottom.min)}**.',
            "",
            "**Numeric columns by minimum value:**",
            _bullets([f"{p.name}: {format_number(p.min)}" for p in ctx.profiles[:3]]),
        ]
    )


def _average(ctx: _Context) -> str:
    return "\n".join(
        [
            "### Average Values",
            "",
            _bullets([f"{p.name}: {p.avg:.2f}" for p in ctx.profiles[:5]]),
        ]
    )


def most_consistent(profiles: Sequence[ColumnProfile]) -> ColumnProfile:
    return min(profiles, key=lambda p: p.variability)


def most_variable(profiles: Sequence[ColumnProfile]) -> ColumnProfile:
    return max(profiles, key=lambda p: p.variability)


def _trend(ctx: _Context) -> str:
    ranges = [
        f"{p.name}: Range {p.range:.2f} ({'High' if p.variability > 1 else 'Low'} variability)"
        for p in ctx.profiles[:3]
    ]
    return "\n".join(
        [
            "### Data Trends & Patterns",
            "",
            "**Range Analysis:**",
            _bullets(ranges),
            "",
            "**Distribution Insights:**",
            _bullets(
                [
                    f"Most consistent data: {most_consistent(ctx.profiles).name}",
                    f"Most variable data: {most_variable(ctx.profiles).name}",
                ]
            ),
        ]
    )


def _insight(ctx: _Context) -> str:
    s = ctx.summary
    findings: list[str] = []
    if ctx.profiles:
        biggest = max(ctx.profiles, key=lambda p: p.sum)
        findings.append(f"Highest total value: {biggest.name} ({format_number(biggest.sum)})")
    if len(ctx.profiles) > 1:
        findings.append(f"Most balanced range: {most_consistent(ctx.profiles).name}")

    if ctx.profiles:
        first_rec = f'Consider visualizing the "{ctx.profiles[0].name}" column for trends'
    else:
        first_rec = "Consider adding numeric columns to enable trend visualization"

    lines = [
        "### Key Insights",
        "",
        "**Data Structure:**",
        _bullets(
            [
                f"Your dataset has {s.total_rows:,} records across {s.total_columns} fields",
                f"{s.numeric_column_count} columns contain quantitative data for analysis",
            ]
        ),
        "",
        "**Notable Findings:**",
    ]
    lines.append(_bullets(findings) if findings else "- No numeric columns to summarize")
    lines += [
        "",
        "**Recommendations:**",
        _bullets(
            [
                first_rec,
                "Look for correlations between numeric fields",
                "Check for any outliers in the data ranges",
            ]
        ),
    ]
    return "\n".join(lines)


def _columns(ctx: _Context) -> str:
    numeric_indexes = {p.index for p in ctx.profiles}
    listing = [
        f"{i + 1}. **{header}** {'(Numeric)' if i in numeric_indexes else '(Text)'}"
        for i, header in enumerate(ctx.grid.headers)
    ]
    numeric = _bullets([f"{p.name}: {p.count} values" for p in ctx.profiles]) or "- None"
    return "\n".join(
        [
            "### Column Information",
            "",
            f"**All Columns ({len(ctx.grid.headers)}):**",
            "\n".join(listing),
            "",
            "**Numeric Columns for Analysis:**",
            numeric,
        ]
    )


def _help(ctx: _Context) -> str:
    return "\n".join(
        [
            "I can help analyze your data! Try asking about:",
            "",
            "**Analysis Questions:**",
            _bullets([f'"{q}"' for q in EXAMPLE_QUESTIONS]),
            "",
            f"Your data has {ctx.summary.total_rows:,} rows and {ctx.summary.total_columns} columns. "
            "What specific aspect would you like me to analyze?",
        ]
    )


# Evaluated top to bottom, first match wins. Several keyword sets can occur
# in one question ("summary of the highest"), so this order is part of the
# contract: the no-data guard precedes everything and help is the catch-all.
RULES: tuple[Rule, ...] = (
    Rule(Intent.NEED_MORE_DATA, lambda q, ctx: not ctx.grid.has_data, _need_more_data),
    Rule(Intent.SUMMARY, _mentions("summary", "overview"), _summary),
    Rule(Intent.HIGHEST, _mentions("highest", "maximum", "largest"), _requires_numeric(_highest)),
    Rule(Intent.LOWEST, _mentions("lowest", "minimum", "smallest"), _requires_numeric(_lowest)),
    Rule(Intent.AVERAGE, _mentions("average", "mean"), _requires_numeric(_average)),
    Rule(Intent.TREND, _mentions("trend", "pattern"), _requires_numeric(_trend)),
    Rule(Intent.INSIGHT, _mentions("insight", "analysis", "findings"), _insight),
    Rule(Intent.COLUMNS, _mentions("column", "field"), _columns),
    Rule(Intent.HELP, lambda q, ctx: True, _help),
)


def _route(question: str, ctx: _Context) -> Rule:
    q = question.lower()
    for rule in RULES:
        if rule.predicate(q, ctx):
            return rule
    raise AssertionError("catch-all rule did not match")  # pragma: no cover


def classify_intent(
    question: str,
    grid: Grid,
    summary: TableSummary,
    profiles: Sequence[ColumnProfile],
) -> Intent:
    ctx = _Context(grid=grid, summary=summary, profiles=profiles, source_name="")
    return _route(question, ctx).intent


def answer_question(
    question: str,
    grid: Grid,
    summary: TableSummary,
    profiles: Sequence[ColumnProfile],
    *,
    source_name: str = "your data",
) -> str:
    """Answer a free-text question about the grid.

    Pure and deterministic: the same inputs always give the same markdown
    text. Routing is plain case-insensitive substring matching against
    RULES; there is no language understanding beyond that.
    """

    ctx = _Context(grid=grid, summary=summary, profiles=profiles, source_name=source_name)
    rule = _route(question, ctx)
    logger.debug("Routed question %r to intent %s", question, rule.intent.value)
    return rule.handler(ctx)
