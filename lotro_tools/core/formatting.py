"""Display helpers for derived stat values and deltas."""

from typing import Dict, List, Tuple

from .constants import DISPLAY_DECIMALS


def format_value(value: float) -> str:
    """Fixed 2-decimal display, e.g. 20.00."""
    return f"{value:.{DISPLAY_DECIMALS}f}"


def format_delta(value: float) -> str:
    """Signed display for comparison deltas, e.g. +10.00 / -2.50."""
    text = f"{value:+.{DISPLAY_DECIMALS}f}"
    # Tiny deltas round to zero without a sign
    if text in ("-0.00", "+0.00"):
        return format_value(0.0)
    return text


def delta_color(value: float) -> str:
    """Color used for a delta (gain green, loss red, grey otherwise)."""
    if value > 0:
        return "#16a34a"
    if value < 0:
        return "#dc2626"
    return "#6b7280"


def split_gains_losses(result: Dict[str, float]) -> Tuple[List[Tuple[str, float]], List[Tuple[str, float]]]:
    """
    Partition a comparison result into (gains, losses).

    Gains are sorted largest first, losses most negative first. Zero entries
    are in neither list.
    """
    gains = sorted(((k, v) for k, v in result.items() if v > 0), key=lambda kv: -kv[1])
    losses = sorted(((k, v) for k, v in result.items() if v < 0), key=lambda kv: kv[1])
    return gains, losses


def nonzero_deltas(result: Dict[str, float]) -> Dict[str, float]:
    """Entries worth showing; paired mode reports unchanged stats as 0.0."""
    return {name: value for name, value in result.items() if value != 0}
