"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

import math
from typing import List, Optional

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from kpi_dashboard.config import DEFAULT_COLOR_POLICY, KPI_LABELS, KPIS, ColorPolicy
from kpi_dashboard.data.colors import color_for
from kpi_dashboard.ui.components.formatting import format_percent


DEFAULT_TEMPLATE = "plotly_white"
REFERENCE_LINE_COLOR = "#666"
CHART_HEIGHT = 400


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    xaxis_title: Optional[str] = None,
    height: int = CHART_HEIGHT,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        height=height,
        showlegend=False,
        margin=dict(l=120, r=20, t=60, b=40),
    )
    if xaxis_title:
        fig.update_xaxes(title=xaxis_title)
    fig.update_xaxes(showgrid=True, griddash="dash")
    fig.update_yaxes(showgrid=False)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, width="stretch", config={"displayModeBar": False})


def hover_text(row: pd.Series, policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> str:
    """Tooltip body listing every KPI of one record, each in its band colour."""
    lines = [f"<b>{row.get('name', '')}</b>"]
    for kpi in KPIS:
        value = row.get(kpi.value)
        lines.append(
            f'<span style="color:{color_for(value, policy)}">{kpi.label}: {format_percent(value)}</span>'
        )
    return "<br>".join(lines)


def kpi_bar_chart(
    rows: pd.DataFrame,
    kpi: str,
    average: float,
    policy: ColorPolicy = DEFAULT_COLOR_POLICY,
    title: Optional[str] = None,
) -> go.Figure:
    """Horizontal bar per record for ``kpi`` with a reference line at ``average``."""
    names: List[str] = rows["name"].astype(str).tolist() if "name" in rows else []
    values = rows[kpi].tolist() if kpi in rows else []
    colors = [color_for(v, policy) for v in values]
    hovers = [hover_text(row, policy) for _, row in rows.iterrows()]

    fig = go.Figure(
        go.Bar(
            x=values,
            y=names,
            orientation="h",
            marker=dict(color=colors),
            customdata=hovers,
            hovertemplate="%{customdata}<extra></extra>",
            name=KPI_LABELS.get(kpi, kpi),
        )
    )
    fig = _configure_layout(fig, title, xaxis_title=KPI_LABELS.get(kpi, kpi))
    fig.update_xaxes(range=[0, 100])
    # first record on top, matching the table order
    fig.update_yaxes(autorange="reversed", type="category")

    if average is not None and not math.isnan(average):
        fig.add_vline(
            x=average,
            line_color=REFERENCE_LINE_COLOR,
            annotation_text=f"Average: {format_percent(average)}",
            annotation_position="top",
        )
    return fig
