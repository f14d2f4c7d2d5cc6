from __future__ import annotations

import json
from typing import Any


def format_number(value: float, max_decimals: int = 3) -> str:
    """
    Human-friendly number: thousands separators, at most `max_decimals`
    fractional digits, no trailing zeros (1234.5 -> "1,234.5").
    """
    if float(value).is_integer():
        return f"{int(value):,}"
    text = f"{value:,.{max_decimals}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def to_json(obj: Any) -> str:
    return json.dumps(obj, indent=2, sort_keys=True, ensure_ascii=False)

