"""
Colour classification for KPI percentages.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from kpi_dashboard.config import DEFAULT_COLOR_POLICY, ColorPolicy


class ColorClass(str, Enum):
    LOW = "low"
    MID = "mid"
    HIGH = "high"


def classify(value: Optional[float], policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> ColorClass:
    """Map a KPI value onto exactly one colour class.

    The comparisons are evaluated in order, so 84, the open gaps (84, 85) and
    (91, 92), None and NaN all fall through to HIGH.
    """
    if value is None:
        return ColorClass.HIGH
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return ColorClass.HIGH
    if numeric < policy.low_below:
        return ColorClass.LOW
    if policy.mid_min <= numeric <= policy.mid_max:
        return ColorClass.MID
    return ColorClass.HIGH


def color_for(value: Optional[float], policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> str:
    band = classify(value, policy)
    if band is ColorClass.LOW:
        return policy.low_color
    if band is ColorClass.MID:
        return policy.mid_color
    return policy.high_color


def legend_entries(policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> list[tuple[str, str]]:
    """(colour, caption) pairs for the legend next to the controls."""
    return [
        (policy.low_color, f"<{policy.low_below:g}%"),
        (policy.mid_color, f"{policy.mid_min:g}-{policy.mid_max:g}%"),
        (policy.high_color, f"{policy.mid_max + 1:g}-100%"),
    ]
