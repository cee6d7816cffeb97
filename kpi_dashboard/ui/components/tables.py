"""
Helpers for rendering the KPI table with band colouring and CSV export.
"""

from __future__ import annotations

import pandas as pd
import streamlit as st
from pandas.io.formats.style import Styler

from kpi_dashboard.config import DEFAULT_COLOR_POLICY, KPI_FIELDS, KPI_LABELS, ColorPolicy
from kpi_dashboard.data.colors import color_for
from kpi_dashboard.ui.components.formatting import format_percent


def build_table_frame(rows: pd.DataFrame) -> pd.DataFrame:
    """Name plus the five KPI columns, relabelled for display."""
    columns = ["name"] + [col for col in KPI_FIELDS if col in rows.columns]
    display = rows.reindex(columns=columns).copy()
    return display.rename(columns={"name": "Name", **KPI_LABELS})


def style_table(display: pd.DataFrame, policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> Styler:
    value_cols = [label for label in KPI_LABELS.values() if label in display.columns]
    return (
        display.style
        .format(format_percent, subset=value_cols)
        .map(lambda v: f"color: {color_for(v, policy)};", subset=value_cols)
    )


def render_table(
    rows: pd.DataFrame,
    policy: ColorPolicy = DEFAULT_COLOR_POLICY,
    height: int = 400,
    export_file_name: str = "kpis.csv",
    key: str = "kd_table_export",
) -> None:
    if rows.empty:
        st.info("No records match the current filters.")
        return

    display = build_table_frame(rows)
    st.dataframe(
        style_table(display, policy),
        width="stretch",
        height=height,
        hide_index=True,
    )

    csv_bytes = display.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
        key=key,
    )
