from __future__ import annotations


class SheetAnalystError(Exception):
    """Base class for errors raised by sheet_analyst."""


class ParseError(SheetAnalystError):
    """The uploaded file could not be read as a spreadsheet.

    This is the only failure that crosses from the engine to the caller; a
    caller that sees it keeps its previous analysis untouched.
    """


class ConfigError(SheetAnalystError):
    """An environment setting holds a value that cannot be used."""
