"""Package entry point.

Preferred invocation is via the installed console script:

    sheet-analyst ...

For convenience we also support:

    python -m sheet_analyst ...
"""

from __future__ import annotations

from .cli import app


def main() -> None:
    """Entry point used by `python -m sheet_analyst`."""

    app()


if __name__ == "__main__":
    main()
