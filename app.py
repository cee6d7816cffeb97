import kpi_dashboard.bootstrap_env  # must be first to set env/secrets
import logging

import streamlit as st

from kpi_dashboard.bootstrap_env import configure_logging
from kpi_dashboard.config import TABS, get_settings
from kpi_dashboard.data.loader import DataLoader, LoadError, records_to_frame
from kpi_dashboard.data.pipeline import serialize_selection
from kpi_dashboard.ui.layout import setup_page, sidebar_controls
from kpi_dashboard.ui.pages import category
from kpi_dashboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)

RECORDS_KEY = "kd_records"
LOAD_ERROR_KEY = "kd_load_error"


def _clear_loaded_data() -> None:
    st.session_state.pop(RECORDS_KEY, None)
    st.session_state.pop(LOAD_ERROR_KEY, None)


def _load_session_records(loader: DataLoader) -> None:
    """Fetch once per browser session; later reruns reuse the stored result."""
    if RECORDS_KEY in st.session_state or LOAD_ERROR_KEY in st.session_state:
        return
    with st.spinner("Loading..."):
        try:
            records = loader.load()
        except LoadError as exc:
            st.session_state[LOAD_ERROR_KEY] = str(exc)
        else:
            st.session_state[RECORDS_KEY] = records


def main() -> None:
    setup_page()
    st.title("KPI Dashboard")

    if st.sidebar.button("🔄 Refresh Data", key="kd_refresh"):
        logger.info("Refresh requested; discarding loaded records")
        _clear_loaded_data()

    try:
        settings = get_settings()
    except RuntimeError as exc:
        st.error(str(exc))
        return

    configure_logging(settings.log_level)

    loader = DataLoader(settings.data_url, timeout=settings.request_timeout)
    _load_session_records(loader)

    if LOAD_ERROR_KEY in st.session_state:
        st.error(st.session_state[LOAD_ERROR_KEY])
        return

    records_df = records_to_frame(st.session_state[RECORDS_KEY])
    selection = sidebar_controls()
    st.session_state["kd_active_selection"] = serialize_selection(selection)

    context = PageContext(records_df=records_df, selection=selection)

    streamlit_tabs = st.tabs([tab.label for tab in TABS])
    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        with streamlit_tab:
            category.render(tab_config, context)


if __name__ == "__main__":
    main()
