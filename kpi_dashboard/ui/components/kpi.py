from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from kpi_dashboard.config import DEFAULT_COLOR_POLICY, ColorPolicy
from kpi_dashboard.data.colors import color_for
from kpi_dashboard.data.pipeline import KpiSummary
from kpi_dashboard.ui.components.formatting import format_percent


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None


def cards_from_summaries(summaries: Sequence[KpiSummary]) -> List[KpiCard]:
    return [
        KpiCard(label=s.label, value=s.average, minimum=s.min, maximum=s.max)
        for s in summaries
    ]


def _colored(value: Optional[float], policy: ColorPolicy) -> str:
    return f'<span style="color: {color_for(value, policy)};">{format_percent(value)}</span>'


def card_html(card: KpiCard, policy: ColorPolicy = DEFAULT_COLOR_POLICY) -> str:
    return (
        f'<div style="font-weight: 600; margin-bottom: 4px;">{card.label}</div>'
        f'<div style="font-size: 2rem; font-weight: 700;">{_colored(card.value, policy)}</div>'
        f'<div style="font-size: 0.85rem;">Min: {_colored(card.minimum, policy)}'
        f' &nbsp; Max: {_colored(card.maximum, policy)}</div>'
    )


def render_kpi_cards(
    cards: Sequence[KpiCard],
    columns: int = 5,
    policy: ColorPolicy = DEFAULT_COLOR_POLICY,
) -> None:
    """
    Render KPI summary cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("No KPI summaries for the current filters.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                with st.container(border=True):
                    st.markdown(card_html(card, policy), unsafe_allow_html=True)
