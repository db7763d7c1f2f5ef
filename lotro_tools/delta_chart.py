"""
Derived Stat Delta Chart

Creates a horizontal Plotly bar chart of an item comparison: one bar per
derived stat, green for gains from item 2 and red for losses, sorted so the
biggest changes sit at the top.
"""

import plotly.graph_objects as go
from typing import Dict, Optional

from lotro_tools.core.formatting import delta_color, format_delta


def create_delta_chart(
    deltas: Dict[str, float],
    selected_class: str,
    height: Optional[int] = None,
) -> go.Figure:
    """
    Create the comparison bar chart.

    Args:
        deltas: Result of compare_items (derived stat -> delta)
        selected_class: Class name for the title
        height: Figure height in px. Defaults to 40px per stat (min 200).

    Returns:
        Plotly Figure object ready for display with st.plotly_chart()
    """
    # Largest absolute change first; Plotly draws the first category at the bottom
    ordered = sorted(deltas.items(), key=lambda kv: abs(kv[1]))
    stats = [name for name, _ in ordered]
    values = [value for _, value in ordered]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=values,
        y=stats,
        orientation='h',
        marker=dict(color=[delta_color(v) for v in values]),
        text=[format_delta(v) for v in values],
        textposition='outside',
        hovertemplate='<b>%{y}</b><br>%{text}<extra></extra>',
        name='Delta',
        showlegend=False,
    ))

    fig.add_vline(x=0, line_color="#9ca3af", line_width=1)

    if height is None:
        height = max(200, 40 * len(stats))

    fig.update_layout(
        title=f"{selected_class} Raw Stat Differences" if selected_class else "Raw Stat Differences",
        height=height,
        margin=dict(l=10, r=40, t=50, b=30),
        xaxis_title="Item 2 vs Item 1",
        yaxis_title=None,
        plot_bgcolor='rgba(0,0,0,0)',
    )
    return fig
