from __future__ import annotations

from sheet_analyst.charts import column_average_series, project_charts
from sheet_analyst.grid import Grid
from sheet_analyst.profile import profile_columns


def _project(rows: list):
    grid = Grid.from_rows(rows)
    return project_charts(grid, profile_columns(grid))


def test_row_series_uses_first_numeric_column() -> None:
    charts = _project([["Name", "Label", "Score", "Other"], ["A", "x", "10", "1"], ["B", "y", "20", "2"]])
    assert [(p.label, p.value) for p in charts.row_series] == [("A", 10.0), ("B", 20.0)]
    assert all(p.color_slot is None for p in charts.row_series)


def test_row_series_is_capped_at_ten() -> None:
    rows = [["Name", "v"]] + [[f"r{i}", str(i)] for i in range(25)]
    charts = _project(rows)
    assert len(charts.row_series) == 10
    assert charts.row_series[-1].label == "r9"


def test_row_series_length_matches_small_tables() -> None:
    rows = [["Name", "v"], ["a", "1"], ["b", "2"], ["c", "3"]]
    assert len(_project(rows).row_series) == 3


def test_blank_labels_and_uncoercible_values() -> None:
    charts = _project([["Name", "v"], ["A", "1"], ["", "oops"], [None, ""], ["D", "4"]])
    assert [(p.label, p.value) for p in charts.row_series] == [
        ("A", 1.0),
        ("Row 2", 0.0),
        ("Row 3", 0.0),
        ("D", 4.0),
    ]


def test_numeric_labels_are_rendered_as_text() -> None:
    charts = _project([["Year", "Sales"], [2023.0, 5], [2024, 7]])
    assert [p.label for p in charts.row_series] == ["2023", "2024"]


def test_no_numeric_columns_means_empty_series() -> None:
    charts = _project([["Name", "City"], ["A", "Paris"], ["B", "Rome"]])
    assert charts.row_series == ()
    assert charts.column_average_series == ()


def test_column_average_series_is_capped_and_colored() -> None:
    headers = [f"c{i}" for i in range(7)]
    grid = Grid.from_rows([headers, [str(i) for i in range(7)], [str(i * 3) for i in range(7)]])
    series = column_average_series(profile_columns(grid))

    assert [p.label for p in series] == ["c0", "c1", "c2", "c3", "c4"]
    assert [p.value for p in series] == [0.0, 2.0, 4.0, 6.0, 8.0]
    assert [p.color_slot for p in series] == [0, 1, 2, 3, 4]


def test_to_dict_shape() -> None:
    charts = _project([["Name", "v"], ["A", "2"]])
    assert charts.to_dict() == {
        "row_series": [{"label": "A", "value": 2.0}],
        "column_average_series": [{"label": "v", "value": 2.0, "color_slot": 0}],
    }
