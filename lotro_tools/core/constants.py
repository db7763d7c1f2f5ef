"""
LOTRO Tools - Core Constants
============================
Column names, numeric tolerances and file locations shared by the loader,
the derivation engine and the pages.
"""

import os

# =============================================================================
# CSV LAYOUT
# =============================================================================

PRIMARY_STAT_COLUMN = "Primary Stat"
DERIVED_STAT_COLUMN = "Derived Stat"

# Every header column after these two is a class column
KEY_COLUMNS = (PRIMARY_STAT_COLUMN, DERIVED_STAT_COLUMN)

# =============================================================================
# NUMBERS
# =============================================================================

# Aggregate comparison drops deltas smaller than this
DELTA_EPSILON = 0.001

# Rounding used for displayed derived values
DISPLAY_DECIMALS = 2

# Missing or non-numeric multiplier cells
DEFAULT_MULTIPLIER = 0.0

# =============================================================================
# FILES
# =============================================================================

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
DEFAULT_STATS_FILE = os.path.join(DATA_DIR, "lotro-stats.csv")
