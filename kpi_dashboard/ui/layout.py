"""
Layout helpers for the Streamlit application (page setup, sidebar controls,
sort buttons and legend).
"""

from __future__ import annotations

import logging

import streamlit as st

from kpi_dashboard.config import DEFAULT_COLOR_POLICY, KPI_LABELS, KPIS, ColorPolicy
from kpi_dashboard.data.colors import legend_entries
from kpi_dashboard.data.pipeline import (
    ASCENDING,
    SelectionState,
    SortConfig,
    request_sort,
)

logger = logging.getLogger(__name__)

SORT_STATE_KEY = "kd_sort"
DEFAULT_SELECTION = SelectionState()


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="KPI Dashboard",
        layout="wide",
        page_icon=":bar_chart:",
    )


def current_sort() -> SortConfig:
    return st.session_state.get(SORT_STATE_KEY, DEFAULT_SELECTION.sort)


def _on_sort(key: str) -> None:
    new_sort = request_sort(current_sort(), key)
    st.session_state[SORT_STATE_KEY] = new_sort
    logger.debug("Sort changed to %s %s", new_sort.key, new_sort.direction)


def sort_indicator(sort: SortConfig, key: str) -> str:
    if sort.key != key:
        return ""
    return " ▲" if sort.direction == ASCENDING else " ▼"


def sort_buttons(tab_key: str) -> None:
    """One button per KPI column; clicking behaves like a sortable header."""
    sort = current_sort()
    cols = st.columns(len(KPIS))
    for col, kpi in zip(cols, KPIS):
        with col:
            st.button(
                f"{kpi.label}{sort_indicator(sort, kpi.value)}",
                key=f"kd_sort_{tab_key}_{kpi.value}",
                on_click=_on_sort,
                args=(kpi.value,),
                width="stretch",
            )


def legend_html(policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> str:
    swatches = []
    for color, caption in legend_entries(policy):
        swatches.append(
            f'<span style="display:inline-block;width:12px;height:12px;'
            f'background:{color};margin:0 4px;"></span>{caption}'
        )
    return '<div style="font-size:0.85rem;">' + " ".join(swatches) + "</div>"


def sidebar_controls(defaults: SelectionState = DEFAULT_SELECTION) -> SelectionState:
    """
    Render the sidebar controls and return the selection they describe.
    The active tab is filled in per tab by the caller.
    """
    st.sidebar.header("Controls")

    kpi_options = [kpi.value for kpi in KPIS]
    selected_kpi = st.sidebar.selectbox(
        "KPI",
        options=kpi_options,
        index=kpi_options.index(defaults.selected_kpi),
        format_func=lambda v: KPI_LABELS.get(v, v),
        key="kd_selected_kpi",
    )
    filter_value = st.sidebar.text_input(
        "Filter by name",
        value=defaults.filter_value,
        key="kd_filter_value",
    )
    show_underperforming = st.sidebar.checkbox(
        "Show only underperforming",
        value=defaults.show_underperforming,
        key="kd_show_underperforming",
    )
    st.sidebar.markdown(legend_html(), unsafe_allow_html=True)

    return SelectionState(
        active_tab=defaults.active_tab,
        selected_kpi=selected_kpi,
        filter_value=filter_value,
        show_underperforming=show_underperforming,
        sort=current_sort(),
    )
