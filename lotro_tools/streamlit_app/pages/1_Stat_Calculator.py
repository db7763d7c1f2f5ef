"""
Stat Calculator Page
Derived stats from an amount of one primary stat, for every visible class.
"""
import streamlit as st
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from utils.table_cache import get_stats_table, show_table_error, get_column_state, set_column_state
from lotro_tools.core import calculate_derivative_rows, derivative_rows_to_frame, coerce_amount

st.set_page_config(page_title="Stat Calculator", page_icon="🧮", layout="wide")

table = get_stats_table()

st.title("🧮 LOTRO Stat Derivatives Calculator")

if show_table_error():
    st.stop()

if 'visibility_version' not in st.session_state:
    st.session_state.visibility_version = 0


def _toggle(class_name: str):
    set_column_state(get_column_state(table).toggle(class_name))
    st.session_state.visibility_version += 1


def _toggle_all(key: str):
    set_column_state(get_column_state(table).toggle_all(bool(st.session_state[key])))
    # Checkboxes are keyed by version so they pick up the new values
    st.session_state.visibility_version += 1


def _move_column():
    dragged = st.session_state.get('move_column')
    target = st.session_state.get('move_target')
    set_column_state(get_column_state(table).reorder(dragged, target))


state = get_column_state(table)
version = st.session_state.visibility_version

# =============================================================================
# CLASS TOGGLES
# =============================================================================

toggle_all_key = f"toggle_all_{version}"
st.checkbox(
    "Toggle All Classes",
    value=state.all_visible,
    key=toggle_all_key,
    on_change=_toggle_all,
    args=(toggle_all_key,),
)

cols = st.columns(min(6, max(1, len(state.order))))
for i, class_name in enumerate(state.order):
    with cols[i % len(cols)]:
        st.checkbox(
            class_name,
            value=state.visibility.get(class_name, False),
            key=f"class_{version}_{class_name}",
            on_change=_toggle,
            args=(class_name,),
        )

st.divider()

# =============================================================================
# INPUT
# =============================================================================

primary_stats = table.primary_stats()

col1, col2 = st.columns([2, 1])
with col1:
    selected_stat = st.selectbox("Primary stat", primary_stats, index=0 if primary_stats else None)
with col2:
    raw_amount = st.text_input("Stat value", placeholder="Enter stat value")

with st.expander("Column order"):
    st.caption("Moves a column onto another column's place, like dragging its header.")
    col1, col2, col3 = st.columns([2, 2, 1])
    with col1:
        st.selectbox("Move", state.order, key='move_column')
    with col2:
        st.selectbox("Onto", state.order, key='move_target')
    with col3:
        st.write("")
        st.button("Move", on_click=_move_column)

# =============================================================================
# RESULT
# =============================================================================

state = get_column_state(table)

if coerce_amount(raw_amount) is None:
    st.info("Enter a numeric stat value to see derived stats.")
    st.stop()

rows = calculate_derivative_rows(table, selected_stat, raw_amount, state.order, state.visibility)

if not state.visible:
    st.warning("No classes selected.")
elif not rows:
    st.info(f"{selected_stat} does not convert into any derived stat.")
else:
    frame = derivative_rows_to_frame(rows, state.order)
    st.dataframe(frame.style.format("{:.2f}"), use_container_width=True)
