from __future__ import annotations

from dataclasses import replace

import streamlit as st

from kpi_dashboard.config import KPI_LABELS, TabConfig
from kpi_dashboard.data.pipeline import build_view
from kpi_dashboard.ui.components.charts import kpi_bar_chart, render_plotly
from kpi_dashboard.ui.components.kpi import cards_from_summaries, render_kpi_cards
from kpi_dashboard.ui.components.tables import render_table
from kpi_dashboard.ui.layout import sort_buttons
from kpi_dashboard.ui.pages.context import PageContext


def render(tab: TabConfig, context: PageContext) -> None:
    selection = replace(context.selection, active_tab=tab.key)
    view = build_view(context.records_df, selection)

    render_kpi_cards(cards_from_summaries(view.summaries))

    kpi_label = KPI_LABELS.get(selection.selected_kpi, selection.selected_kpi)
    st.markdown(f"### {kpi_label} by {tab.label[:-1]}")
    fig = kpi_bar_chart(view.rows, selection.selected_kpi, view.average)
    render_plotly(fig)

    st.markdown("### Records")
    st.caption("Click a KPI to sort; click again to reverse.")
    sort_buttons(tab.key)
    render_table(
        view.rows,
        export_file_name=f"{tab.key}_kpis.csv",
        key=f"kd_export_{tab.key}",
    )
    st.caption(f"Showing {len(view.rows)} {tab.label.lower()}.")
