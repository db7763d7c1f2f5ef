"""
LOTRO Tools - Core Module
=========================
Stats table loading, stat derivation and class column ordering.

Pages and scripts should import from here rather than re-implementing the math.
"""

from .constants import (
    PRIMARY_STAT_COLUMN,
    DERIVED_STAT_COLUMN,
    DELTA_EPSILON,
    DISPLAY_DECIMALS,
    DEFAULT_STATS_FILE,
)

from .errors import (
    LotroToolsError,
    LoadError,
    ParseWarning,
)

from .stats_table import (
    StatRow,
    StatTable,
    load,
    parse_csv_text,
    get_class_list,
)

from .derivation import (
    ComparisonMode,
    Contribution,
    DerivativeValues,
    comparison_mode_from_string,
    coerce_amount,
    parse_contributions,
    expand_contribution,
    calculate_derived_stats,
    calculate_derivative_rows,
    derivative_rows_to_frame,
    compare_items,
)

from .column_order import (
    ColumnState,
    reorder,
    initial_visibility,
    toggle_class,
    set_all_visible,
    all_visible,
    visible_classes,
)

from .formatting import (
    format_value,
    format_delta,
    delta_color,
    nonzero_deltas,
    split_gains_losses,
)

__all__ = [
    # Constants
    'PRIMARY_STAT_COLUMN',
    'DERIVED_STAT_COLUMN',
    'DELTA_EPSILON',
    'DISPLAY_DECIMALS',
    'DEFAULT_STATS_FILE',
    # Errors
    'LotroToolsError',
    'LoadError',
    'ParseWarning',
    # Table
    'StatRow',
    'StatTable',
    'load',
    'parse_csv_text',
    'get_class_list',
    # Derivation
    'ComparisonMode',
    'Contribution',
    'DerivativeValues',
    'comparison_mode_from_string',
    'coerce_amount',
    'parse_contributions',
    'expand_contribution',
    'calculate_derived_stats',
    'calculate_derivative_rows',
    'derivative_rows_to_frame',
    'compare_items',
    # Column order
    'ColumnState',
    'reorder',
    'initial_visibility',
    'toggle_class',
    'set_all_visible',
    'all_visible',
    'visible_classes',
    # Formatting
    'format_value',
    'format_delta',
    'delta_color',
    'nonzero_deltas',
    'split_gains_losses',
]
