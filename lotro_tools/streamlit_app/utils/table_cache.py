"""
Stats table access for the Streamlit pages.

The CSV is read once per process (st.cache_data) and the result is pinned
in each session. A failed load leaves an empty table in the session until
the user reloads the page.
"""
import logging
import os
import sys
from typing import Dict, Optional

import streamlit as st

# Add repo root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))))

from lotro_tools import config
from lotro_tools.core import ColumnState, ComparisonMode, LoadError, StatTable, load

logger = logging.getLogger(__name__)


def get_secrets() -> Optional[Dict]:
    """Streamlit secrets as a dict, or None when no secrets file exists."""
    try:
        return st.secrets.to_dict()
    except FileNotFoundError:
        return None


@st.cache_data(show_spinner="Loading stats table...")
def load_stats_table(source: str) -> StatTable:
    """Read and parse the stats CSV. Errors are not cached."""
    return load(source)


def get_stats_table() -> StatTable:
    """
    The session's stats table.

    On LoadError the error is logged, kept in session_state['table_error']
    and an empty table is returned for the rest of the session.
    """
    if 'stats_table' not in st.session_state:
        secrets = get_secrets()
        config.configure_logging(secrets)
        source = config.get_stats_source(secrets)
        try:
            st.session_state.stats_table = load_stats_table(source)
            st.session_state.table_error = None
        except LoadError as e:
            logger.error("Stats table unavailable: %s", e)
            st.session_state.stats_table = StatTable.empty(source)
            st.session_state.table_error = str(e)
    return st.session_state.stats_table


def show_table_error() -> bool:
    """Render the load error, if any. Returns True when the table is unusable."""
    error = st.session_state.get('table_error')
    if error:
        st.error(f"Could not load stat data: {error}")
        st.caption("Reload the page to try again.")
        return True
    return False


def get_column_state(table: StatTable) -> ColumnState:
    """Calculator column order/visibility, created from the table's classes."""
    state = st.session_state.get('column_state')
    if state is None or set(state.order) != set(table.classes):
        state = ColumnState.from_classes(table.classes)
        st.session_state.column_state = state
    return state


def set_column_state(state: ColumnState) -> None:
    st.session_state.column_state = state


def get_comparison_mode() -> ComparisonMode:
    return config.get_comparison_mode(get_secrets())
