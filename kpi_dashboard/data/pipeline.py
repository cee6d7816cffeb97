"""
View pipeline that derives the displayed rows and summaries from the loaded
records and the current selection state.

Stages run in a fixed order on every call: category filter, name filter,
underperforming filter, sort, aggregation. Nothing is cached between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from kpi_dashboard.config import KPIS, UNDERPERFORMING_THRESHOLD

ASCENDING = "ascending"
DESCENDING = "descending"


@dataclass(frozen=True)
class SortConfig:
    key: Optional[str] = None
    direction: str = ASCENDING


@dataclass(frozen=True)
class SelectionState:
    active_tab: str = "regions"
    selected_kpi: str = "ProjectedRate"
    filter_value: str = ""
    show_underperforming: bool = False
    sort: SortConfig = field(default_factory=SortConfig)


@dataclass
class KpiSummary:
    value: str
    label: str
    average: float
    min: float
    max: float


@dataclass
class DashboardView:
    rows: pd.DataFrame
    average: float
    summaries: List[KpiSummary]


def request_sort(current: SortConfig, key: str) -> SortConfig:
    """Ascending on the same key flips to descending; anything else resets to ascending."""
    direction = ASCENDING
    if current.key == key and current.direction == ASCENDING:
        direction = DESCENDING
    return SortConfig(key=key, direction=direction)


def round_half_up(value: float) -> float:
    if value is None:
        return np.nan
    if math.isnan(value) or math.isinf(value):
        return value
    return float(math.floor(value + 0.5))


def filter_by_category(df: pd.DataFrame, active_tab: str) -> pd.DataFrame:
    if df.empty:
        return df
    record_type = active_tab[:-1]
    return df[df["type"] == record_type]


def filter_by_name(df: pd.DataFrame, filter_value: str) -> pd.DataFrame:
    if df.empty or not filter_value:
        return df
    needle = filter_value.lower()
    mask = df["name"].astype(str).str.lower().str.contains(needle, regex=False, na=False)
    return df[mask]


def filter_underperforming(
    df: pd.DataFrame,
    kpi: str,
    enabled: bool,
    threshold: float = UNDERPERFORMING_THRESHOLD,
) -> pd.DataFrame:
    if df.empty or not enabled:
        return df
    # NaN compares False, so malformed rows drop out here
    return df[df[kpi] < threshold]


def sort_records(df: pd.DataFrame, sort: SortConfig) -> pd.DataFrame:
    if sort.key is None or df.empty or sort.key not in df.columns:
        return df
    return df.sort_values(
        by=sort.key,
        ascending=sort.direction == ASCENDING,
        kind="stable",
        na_position="last",
    )


def _column_average(series: pd.Series) -> float:
    if series.empty:
        return np.nan
    return round_half_up(float(series.mean(skipna=False)))


def _column_extreme(series: pd.Series, how: str) -> float:
    if series.empty:
        return np.nan
    if how == "min":
        return float(series.min(skipna=False))
    return float(series.max(skipna=False))


def summarize_kpis(df: pd.DataFrame) -> List[KpiSummary]:
    summaries: List[KpiSummary] = []
    for kpi in KPIS:
        series = df[kpi.value] if kpi.value in df.columns else pd.Series(dtype=float)
        summaries.append(
            KpiSummary(
                value=kpi.value,
                label=kpi.label,
                average=_column_average(series),
                min=_column_extreme(series, "min"),
                max=_column_extreme(series, "max"),
            )
        )
    return summaries


def build_view(df: pd.DataFrame, selection: SelectionState) -> DashboardView:
    """Run every stage of the pipeline and return the derived view."""
    filtered = filter_by_category(df, selection.active_tab)
    filtered = filter_by_name(filtered, selection.filter_value)
    filtered = filter_underperforming(
        filtered,
        selection.selected_kpi,
        selection.show_underperforming,
    )
    rows = sort_records(filtered, selection.sort).reset_index(drop=True)

    selected = rows[selection.selected_kpi] if selection.selected_kpi in rows.columns else pd.Series(dtype=float)
    average = _column_average(selected)
    return DashboardView(
        rows=rows,
        average=average,
        summaries=summarize_kpis(rows),
    )


def serialize_selection(selection: SelectionState) -> Dict[str, Any]:
    """
    Convert the SelectionState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "active_tab": selection.active_tab,
        "selected_kpi": selection.selected_kpi,
        "filter_value": selection.filter_value,
        "show_underperforming": selection.show_underperforming,
        "sort_key": selection.sort.key,
        "sort_direction": selection.sort.direction,
    }
