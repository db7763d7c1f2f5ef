"""
Item Comparison Page
Derived stat differences between two items for one class.
"""
import streamlit as st
import pandas as pd
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.table_cache import get_stats_table, show_table_error, get_comparison_mode
from lotro_tools.core import ComparisonMode, compare_items, format_delta, nonzero_deltas, split_gains_losses
from lotro_tools.delta_chart import create_delta_chart

st.set_page_config(page_title="Item Comparison", page_icon="⚖️", layout="wide")

table = get_stats_table()

st.title("⚖️ Item Comparison")

if show_table_error():
    st.stop()

MODE_LABELS = {
    ComparisonMode.AGGREGATE: "Aggregate (all stats, item 2 − item 1)",
    ComparisonMode.PAIRED_DIFF: "Paired (same stat on both items)",
}


def empty_item() -> pd.DataFrame:
    return pd.DataFrame({"Stat": pd.Series([None], dtype="object"), "Value": pd.Series([""], dtype="object")})


def item_entries(frame: pd.DataFrame) -> list:
    """Editor rows as (stat, raw value) pairs; blanks are filtered by the engine."""
    if frame is None or frame.empty:
        return []
    return list(zip(frame["Stat"].tolist(), frame["Value"].tolist()))


for key in ('item1_stats', 'item2_stats'):
    if key not in st.session_state:
        st.session_state[key] = empty_item()

# =============================================================================
# CLASS + MODE
# =============================================================================

with st.container(border=True):
    st.subheader("Character Class")
    classes = list(table.classes)
    selected_class = st.radio("Class", classes, horizontal=True, label_visibility="collapsed")

configured_mode = get_comparison_mode()
with st.sidebar:
    mode = st.radio(
        "Comparison mode",
        list(MODE_LABELS),
        index=list(MODE_LABELS).index(configured_mode),
        format_func=MODE_LABELS.get,
    )

# =============================================================================
# ITEMS
# =============================================================================

available_stats = table.available_stats()
column_config = {
    "Stat": st.column_config.SelectboxColumn("Stat", options=available_stats, width="medium"),
    "Value": st.column_config.TextColumn("Value", width="small"),
}

col1, col2, col3 = st.columns(3)
with col1:
    st.subheader("Item 1")
    item1 = st.data_editor(
        st.session_state.item1_stats,
        column_config=column_config,
        num_rows="dynamic",
        hide_index=True,
        key="item1_editor",
    )
with col2:
    st.subheader("Item 2")
    item2 = st.data_editor(
        st.session_state.item2_stats,
        column_config=column_config,
        num_rows="dynamic",
        hide_index=True,
        key="item2_editor",
    )

deltas = compare_items(table, selected_class, item_entries(item1), item_entries(item2), mode)

# =============================================================================
# RESULT
# =============================================================================

with col3:
    st.subheader(f"{selected_class} Raw Stat Differences")
    shown = nonzero_deltas(deltas)
    if not shown:
        st.caption("No stat differences between items")
    else:
        gains, losses = split_gains_losses(shown)
        for name, value in gains:
            st.markdown(f"**{name}** :green[{format_delta(value)}]")
        for name, value in losses:
            st.markdown(f"**{name}** :red[{format_delta(value)}]")

if shown:
    st.plotly_chart(create_delta_chart(shown, selected_class), use_container_width=True)
