from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from .analyze import Analysis, analyze_file, preview_frame
from .config import LOG_LEVELS, Settings, load_settings
from .errors import ConfigError, ParseError
from .plots import render_charts
from .profile import column_statistics
from .session import ChatSession
from .utils import to_json

app = typer.Typer(add_completion=False, help="Sheet Analyst: profile a spreadsheet and ask questions about it")


def _settings() -> Settings:
    try:
        return load_settings()
    except ConfigError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2)


def _load(path: Path) -> Analysis:
    """Analyze a file, mapping load failures to exit code 2."""
    try:
        return analyze_file(path)
    except (FileNotFoundError, ParseError) as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=2)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (defaults to SHEET_ANALYST_LOG_LEVEL or WARNING)"
    ),
) -> None:
    if log_level is not None and log_level.strip().upper() not in LOG_LEVELS:
        raise typer.BadParameter(f"must be one of {sorted(LOG_LEVELS)}", param_hint="--log-level")
    level = (log_level or _settings().log_level).strip().upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def summary(
    data: Path = typer.Argument(..., help="Path to a .csv, .xlsx or .xls file"),
    as_json: bool = typer.Option(False, "--json", help="Print the full analysis as JSON"),
):
    """
    Print row/column counts, completeness and per-column statistics.
    """
    analysis = _load(data)
    if as_json:
        typer.echo(to_json(analysis.to_dict()))
        return

    s = analysis.summary
    typer.echo(f"File: {analysis.source_name}")
    typer.echo(f"Total rows: {s.total_rows:,}")
    typer.echo(f"Total columns: {s.total_columns}")
    typer.echo(f"Numeric columns: {s.numeric_column_count}")
    typer.echo(f"Data completeness: {s.completeness}%")

    stats = column_statistics(analysis.profiles)
    if stats:
        typer.echo("")
        typer.echo("Column statistics (average / minimum / maximum / range):")
        for row in stats:
            typer.echo(f"  {row['column']}: {row['average']} / {row['minimum']} / {row['maximum']} / {row['range']}")


@app.command()
def preview(
    data: Path = typer.Argument(..., help="Path to a .csv, .xlsx or .xls file"),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, help="Rows to show (default: SHEET_ANALYST_PREVIEW_ROWS)"),
):
    """Show the first rows of the table."""
    settings = _settings()
    analysis = _load(data)
    frame, note = preview_frame(analysis.grid, limit=limit or settings.preview_rows)
    typer.echo(frame.to_string(index=False))
    if note:
        typer.echo(note)


@app.command()
def charts(
    data: Path = typer.Argument(..., help="Path to a .csv, .xlsx or .xls file"),
    out: Optional[Path] = typer.Option(None, "--out", help="Directory to write chart PNGs into"),
    as_json: bool = typer.Option(False, "--json", help="Print the chart series as JSON"),
):
    """
    Compute the row series and column-average series; optionally render PNGs.
    """
    analysis = _load(data)
    if as_json or out is None:
        typer.echo(to_json(analysis.charts.to_dict()))
    if out is not None:
        written = render_charts(analysis.charts, out, prefix=data.stem)
        if not written:
            typer.echo("No numeric columns; no charts written.")
        for p in written:
            typer.echo(f"Chart: {p}")


@app.command()
def ask(
    data: Path = typer.Argument(..., help="Path to a .csv, .xlsx or .xls file"),
    question: str = typer.Option(..., "--question", "-q", help="Question about the data"),
):
    """Answer one question about the table."""
    analysis = _load(data)
    typer.echo(analysis.answer(question))


@app.command()
def chat(
    data: Path = typer.Argument(..., help="Path to a .csv, .xlsx or .xls file"),
    latency_ms: Optional[int] = typer.Option(
        None, "--latency-ms", min=0, help="Simulated thinking delay (default: SHEET_ANALYST_LATENCY_MS)"
    ),
):
    """
    Interactive question loop. Empty input or Ctrl-D ends the session.
    """
    settings = _settings()
    if latency_ms is not None:
        settings = settings.model_copy(update={"simulated_latency_ms": latency_ms})

    session = ChatSession(_load(data), settings=settings)
    typer.echo(session.messages[0].content)
    while True:
        try:
            question = typer.prompt("\nYou", default="", show_default=False)
        except (EOFError, typer.Abort):
            break
        if not question.strip():
            break
        reply = session.ask(question)
        typer.echo("")
        typer.echo(reply.content)
