"""
Utility helpers for formatting KPI percentages.
"""

from __future__ import annotations

from typing import Optional


def format_percent(value: Optional[float], decimals: Optional[int] = None) -> str:
    """Render a KPI percentage the way the feed reports it.

    Whole numbers print without a fraction ("80%"), other values print
    in full ("80.5%", "91.6666667%"). NaN prints as "nan%".
    """
    if value is None:
        return "–"
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return "–"
    if decimals is not None:
        return f"{numeric:.{decimals}f}%"
    if numeric.is_integer():
        return f"{int(numeric)}%"
    return f"{numeric!r}%"
