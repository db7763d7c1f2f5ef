"""
LOTRO Tools - Streamlit Web App
Main entry point: landing page linking the two calculators.
"""
import os
import sys

import streamlit as st

# Add repo root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from lotro_tools.config import configure_logging
from utils.table_cache import get_secrets, get_stats_table, show_table_error

# Page config
st.set_page_config(
    page_title="LOTRO Tools",
    page_icon="🧝",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-title {
        font-size: 2.5em;
        font-weight: bold;
        text-align: center;
        margin-bottom: 10px;
    }
    .sub-title {
        color: #888;
        text-align: center;
        margin-bottom: 30px;
    }
</style>
""", unsafe_allow_html=True)


def main():
    """Main entry point."""
    configure_logging(get_secrets())

    st.markdown('<div class="main-title">LOTRO Tools</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-title">Derived stats per class, for one stat or a whole item swap</div>',
                unsafe_allow_html=True)

    table = get_stats_table()
    if show_table_error():
        return

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Classes", len(table.classes))
    with col2:
        st.metric("Primary Stats", len(table.primary_stats()))
    with col3:
        st.metric("Derived Stats", len(table.derived_stats()))

    st.divider()

    col1, col2 = st.columns(2)
    with col1:
        st.page_link("pages/1_Stat_Calculator.py", label="Stat Calculator", icon="🧮")
        st.caption("Pick a primary stat and an amount to see what it gives every class.")
    with col2:
        st.page_link("pages/2_Item_Comparison.py", label="Item Comparison", icon="⚖️")
        st.caption("Enter the stats of two items to see the derived stat difference for your class.")

    with st.expander("Stat conversion table"):
        st.dataframe(table.to_dataframe(), hide_index=True, use_container_width=True)


if __name__ == "__main__":
    main()
