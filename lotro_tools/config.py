"""
Runtime settings for LOTRO Tools.

Each setting has a module-level default that an environment variable can
override. The Streamlit app looks in st.secrets first and passes what it
finds into these helpers as `overrides`.
"""
import logging
import os
from typing import Mapping, Optional

from lotro_tools.core.constants import DEFAULT_STATS_FILE
from lotro_tools.core.derivation import ComparisonMode, comparison_mode_from_string

logger = logging.getLogger(__name__)

# Environment variable names
STATS_SOURCE_ENV = "LOTRO_STATS_SOURCE"
COMPARISON_MODE_ENV = "LOTRO_COMPARISON_MODE"
LOG_LEVEL_ENV = "LOTRO_LOG_LEVEL"

DEFAULT_COMPARISON_MODE = ComparisonMode.AGGREGATE
DEFAULT_LOG_LEVEL = "INFO"


def get_setting(name: str, default: str = "", overrides: Optional[Mapping] = None) -> str:
    """Look up a setting: overrides (e.g. st.secrets), then environment, then default."""
    if overrides is not None and overrides.get(name):
        return str(overrides.get(name))
    return os.environ.get(name, default)


def get_stats_source(overrides: Optional[Mapping] = None) -> str:
    """Path or URL of the stats CSV."""
    return get_setting(STATS_SOURCE_ENV, DEFAULT_STATS_FILE, overrides) or DEFAULT_STATS_FILE


def get_comparison_mode(overrides: Optional[Mapping] = None) -> ComparisonMode:
    """Comparison strategy for the Item Comparison page."""
    raw = get_setting(COMPARISON_MODE_ENV, DEFAULT_COMPARISON_MODE.value, overrides)
    mode = comparison_mode_from_string(raw, default=None)
    if mode is None:
        logger.warning("Unknown comparison mode %r, using %s", raw, DEFAULT_COMPARISON_MODE.value)
        return DEFAULT_COMPARISON_MODE
    return mode


def get_log_level(overrides: Optional[Mapping] = None) -> int:
    """Numeric logging level; unknown names fall back to INFO."""
    raw = get_setting(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL, overrides).strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(overrides: Optional[Mapping] = None) -> None:
    """Set up root logging once for the app."""
    logging.basicConfig(
        level=get_log_level(overrides),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
