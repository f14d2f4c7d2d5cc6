from __future__ import annotations

import pytest

from sheet_analyst.ask import NEED_MORE_DATA, NO_NUMERIC_COLUMNS, RULES, Intent, answer_question, classify_intent
from sheet_analyst.grid import Grid
from sheet_analyst.profile import profile_columns, summarize


def _ask(rows: list, question: str) -> str:
    grid = Grid.from_rows(rows)
    profiles = profile_columns(grid)
    return answer_question(question, grid, summarize(grid, profiles), profiles, source_name="scores.csv")


def _intent(rows: list, question: str) -> Intent:
    grid = Grid.from_rows(rows)
    profiles = profile_columns(grid)
    return classify_intent(question, grid, summarize(grid, profiles), profiles)


SCORES = [["Name", "Score"], ["A", "10"], ["B", "20"], ["C", "30"]]
TEXT_ONLY = [["Name", "City"], ["A", "Paris"], ["B", "Rome"]]


def test_average_lists_two_decimals() -> None:
    assert "Score: 20.00" in _ask(SCORES, "What is the average?")


def test_highest_names_column_and_max() -> None:
    answer = _ask(SCORES, "highest value")
    assert '"Score"' in answer
    assert "**30**" in answer
    assert "- Score: 30" in answer


def test_lowest_names_column_and_min() -> None:
    answer = _ask(SCORES, "Which is the SMALLEST?")
    assert 'The column "Score" has the lowest minimum value of **10**.' in answer


@pytest.mark.parametrize("question", ["summary", "highest", "", "tell me about columns", "xyz"])
def test_headers_only_grid_needs_more_data(question: str) -> None:
    assert _ask([["Name", "Score"]], question) == NEED_MORE_DATA
    assert _ask([], question) == NEED_MORE_DATA


def test_summary_takes_precedence_over_highest() -> None:
    answer = _ask(SCORES, "Give me a summary of the highest values")
    assert answer.startswith("### Data Summary for scores.csv")
    assert _intent(SCORES, "Give me a summary of the highest values") is Intent.SUMMARY


def test_summary_report_contents() -> None:
    answer = _ask(SCORES + [["", ""]], "Overview please")
    assert "Total rows: 4" in answer
    assert "Total columns: 2" in answer
    assert "Numeric columns: 1" in answer
    assert "**Columns:** Name, Score" in answer
    assert "Data completeness: 75%" in answer
    assert "Non-empty rows: 3" in answer


@pytest.mark.parametrize(
    "question",
    ["highest", "Lowest?", "what is the mean", "any trend?"],
)
def test_numeric_branches_share_no_numeric_message(question: str) -> None:
    assert _ask(TEXT_ONLY, question) == NO_NUMERIC_COLUMNS


def test_highest_tie_goes_to_first_column() -> None:
    rows = [["A", "B"], ["30", "30"], ["1", "2"]]
    assert 'The column "A" has the highest maximum value' in _ask(rows, "maximum")


def test_lowest_tie_goes_to_first_column() -> None:
    rows = [["A", "B"], ["1", "1"], ["5", "2"]]
    assert 'The column "A" has the lowest minimum value' in _ask(rows, "minimum")


def test_highest_lists_at_most_three_columns() -> None:
    rows = [["a", "b", "c", "d"], ["1", "2", "3", "40"]]
    answer = _ask(rows, "largest")
    assert 'The column "d"' in answer
    assert "- a: 1" in answer and "- c: 3" in answer
    assert "- d: 40" not in answer


def test_average_lists_at_most_five_columns() -> None:
    headers = [f"c{i}" for i in range(7)]
    answer = _ask([headers, [str(i) for i in range(7)]], "averages")
    assert "c4: 4.00" in answer
    assert "c5" not in answer


def test_trend_handles_zero_average() -> None:
    rows = [["flat", "swing", "ramp"], ["5", "-1", "10"], ["5", "1", "30"]]
    answer = _ask(rows, "Show me the trend")
    assert "flat: Range 0.00 (Low variability)" in answer
    assert "swing: Range 2.00 (High variability)" in answer
    assert "ramp: Range 20.00 (Low variability)" in answer
    assert "Most consistent data: flat" in answer
    assert "Most variable data: swing" in answer


def test_insight_names_greatest_sum_column() -> None:
    rows = [["A", "B"], ["60", "30"], ["40", "20"]]
    answer = _ask(rows, "What insights can you find?")
    assert "Highest total value: A (100)" in answer
    assert "Most balanced range:" in answer
    assert 'Consider visualizing the "A" column for trends' in answer


def test_insight_without_numeric_columns() -> None:
    answer = _ask(TEXT_ONLY, "findings")
    assert "Highest total value" not in answer
    assert "Most balanced range" not in answer
    assert "2 records across 2 fields" in answer


def test_insight_single_profile_skips_balance_line() -> None:
    answer = _ask(SCORES, "analysis")
    assert "Highest total value: Score (60)" in answer
    assert "Most balanced range" not in answer


def test_columns_listing() -> None:
    answer = _ask(SCORES, "Tell me about the fields")
    assert "1. **Name** (Text)" in answer
    assert "2. **Score** (Numeric)" in answer
    assert "- Score: 3 values" in answer


def test_fallback_help_reports_counts() -> None:
    answer = _ask(SCORES, "hello there")
    assert "Your data has 3 rows and 2 columns." in answer
    assert _intent(SCORES, "hello there") is Intent.HELP


def test_matching_is_case_insensitive() -> None:
    assert _intent(SCORES, "AVERAGE please") is Intent.AVERAGE
    assert _intent(SCORES, "Any PATTERNS?") is Intent.TREND


def test_rule_order_is_stable() -> None:
    assert [r.intent for r in RULES] == [
        Intent.NEED_MORE_DATA,
        Intent.SUMMARY,
        Intent.HIGHEST,
        Intent.LOWEST,
        Intent.AVERAGE,
        Intent.TREND,
        Intent.INSIGHT,
        Intent.COLUMNS,
        Intent.HELP,
    ]


def test_large_numbers_use_thousands_separators() -> None:
    rows = [["Name", "Revenue"], ["A", "1234567.5"], ["B", "10"]]
    assert "**1,234,567.5**" in _ask(rows, "highest")
