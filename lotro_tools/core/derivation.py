"""
LOTRO Tools - Derivation Engine
===============================
Turns raw stat contributions into derived stat values for one class.

Two callers:
- Stat Calculator: one primary stat and an amount, shown for every class.
- Item Comparison: two lists of (stat, value) entries, one class, deltas.

Nothing here raises on user input. Empty or non-numeric values are
"no contribution" and simply drop out of the calculation.
"""

import logging
import math
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd

from .constants import DELTA_EPSILON, DERIVED_STAT_COLUMN, DISPLAY_DECIMALS
from .stats_table import StatTable

logger = logging.getLogger(__name__)


class ComparisonMode(Enum):
    """How two items are diffed."""
    AGGREGATE = "aggregate"    # Expand every entry, item2 - item1, drop |delta| < epsilon
    PAIRED_DIFF = "paired"     # Only stats named on both items, raw diff expanded


def comparison_mode_from_string(value: str,
                                default: ComparisonMode = ComparisonMode.AGGREGATE) -> ComparisonMode:
    """Parse a mode name ("aggregate", "paired", "paired_diff"), falling back to default."""
    if isinstance(value, ComparisonMode):
        return value
    key = str(value or "").strip().lower().replace("-", "_")
    if key in ("paired", "paired_diff", "pairs"):
        return ComparisonMode.PAIRED_DIFF
    if key in ("aggregate", "agg", "total"):
        return ComparisonMode.AGGREGATE
    logger.debug("Unknown comparison mode %r, using %s", value, default)
    return default


@dataclass(frozen=True)
class Contribution:
    """A user-entered amount of one stat (primary or derived)."""
    stat_name: str
    amount: float


@dataclass
class DerivativeValues:
    """One row of the calculator grid: a derived stat and its value per class."""
    derived_stat: str
    values: Dict[str, float] = field(default_factory=dict)


RawEntry = Union[Contribution, Tuple[str, object]]


# =============================================================================
# INPUT COERCION
# =============================================================================

def coerce_amount(raw) -> Optional[float]:
    """
    Parse a user-entered amount.

    Returns None for anything that is not a finite number: None, "", "abc",
    "nan", "inf" and booleans all mean "no contribution".
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        try:
            value = float(raw)
        except (OverflowError, ValueError):
            return None
    else:
        text = str(raw).strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def parse_contributions(entries: Optional[Iterable[RawEntry]]) -> List[Contribution]:
    """
    Normalize (stat_name, raw_value) pairs into Contributions.

    Entries without a stat name or with an unusable value are dropped.
    """
    contributions = []
    for entry in entries or ():
        if isinstance(entry, Contribution):
            name, raw = entry.stat_name, entry.amount
        else:
            try:
                name, raw = entry
            except (TypeError, ValueError):
                continue
        name = str(name or "").strip()
        amount = coerce_amount(raw)
        if not name or amount is None:
            continue
        contributions.append(Contribution(stat_name=name, amount=amount))
    return contributions


def round_for_display(value: float) -> float:
    """Round to display precision; also turns -0.0 into 0.0."""
    return round(value, DISPLAY_DECIMALS) + 0.0


# =============================================================================
# EXPANSION
# =============================================================================

def expand_contribution(
    table: StatTable,
    selected_class: str,
    contribution: Contribution,
    direct: bool = True,
) -> Dict[str, float]:
    """
    Derived stat effects of a single contribution.

    Args:
        table: The loaded stats table
        selected_class: Class column to read multipliers from
        contribution: Stat name and amount
        direct: If True, a stat that is itself a derived stat is passed
            through unchanged instead of being converted

    Returns:
        Dict of derived stat -> effect. Zero multipliers give 0.0 entries.
    """
    if direct and table.is_derived_stat(contribution.stat_name):
        return {contribution.stat_name: contribution.amount}

    effects: Dict[str, float] = {}
    for row in table.rows_for(contribution.stat_name):
        effect = contribution.amount * row.multiplier_for(selected_class)
        effects[row.derived_stat] = effects.get(row.derived_stat, 0.0) + effect
    return effects


def _in_table_order(table: StatTable, values: Dict[str, float]) -> Dict[str, float]:
    return {name: values[name] for name in table.derived_stats() if name in values}


# =============================================================================
# STAT CALCULATOR
# =============================================================================

def calculate_derived_stats(
    table: StatTable,
    selected_class: str,
    primary_stat: str,
    amount,
) -> Dict[str, float]:
    """
    Derived stats produced by `amount` of one primary stat for one class.

    Every derived stat the primary stat converts into is present, rounded to
    2 decimals, including 0.0 values from zero multipliers. An unset class,
    unset stat or unusable amount gives {}.
    """
    value = coerce_amount(amount)
    if not selected_class or not primary_stat or value is None:
        return {}

    effects = expand_contribution(table, selected_class, Contribution(primary_stat, value), direct=False)
    return {name: round_for_display(v) for name, v in _in_table_order(table, effects).items()}


def calculate_derivative_rows(
    table: StatTable,
    primary_stat: str,
    amount,
    class_order: Sequence[str],
    visibility: Optional[Dict[str, bool]] = None,
) -> List[DerivativeValues]:
    """
    Calculator grid: one row per derived stat of `primary_stat`, with a value
    for each visible class in column order.
    """
    value = coerce_amount(amount)
    if not primary_stat or value is None:
        return []

    visible = [name for name in class_order if visibility is None or visibility.get(name, False)]
    reached = {row.derived_stat for row in table.rows_for(primary_stat)}

    rows = []
    for derived in table.derived_stats():
        if derived not in reached:
            continue
        rows.append(DerivativeValues(
            derived_stat=derived,
            values={
                name: round_for_display(value * table.multiplier(primary_stat, derived, name))
                for name in visible
            },
        ))
    return rows


def derivative_rows_to_frame(rows: List[DerivativeValues], class_order: Sequence[str]) -> pd.DataFrame:
    """Grid rows as a DataFrame indexed by derived stat, columns in class order."""
    columns = [name for name in class_order if any(name in r.values for r in rows)]
    frame = pd.DataFrame(
        [[r.values.get(name, 0.0) for name in columns] for r in rows],
        index=[r.derived_stat for r in rows],
        columns=columns,
    )
    frame.index.name = DERIVED_STAT_COLUMN
    return frame


# =============================================================================
# ITEM COMPARISON
# =============================================================================

def compare_items(
    table: StatTable,
    selected_class: str,
    item1: Optional[Iterable[RawEntry]],
    item2: Optional[Iterable[RawEntry]],
    mode: ComparisonMode = ComparisonMode.AGGREGATE,
) -> Dict[str, float]:
    """
    Derived stat deltas from swapping item 1 for item 2.

    Positive values are gains from item 2. See ComparisonMode for how the
    two strategies differ. An unset class gives {}.
    """
    if not selected_class or not len(table):
        return {}

    contributions1 = parse_contributions(item1)
    contributions2 = parse_contributions(item2)
    if not contributions1 and not contributions2:
        return {}

    mode = comparison_mode_from_string(mode)
    logger.debug("Comparing %d vs %d entries for %s (%s)",
                 len(contributions1), len(contributions2), selected_class, mode.value)
    if mode == ComparisonMode.PAIRED_DIFF:
        return _paired_diff(table, selected_class, contributions1, contributions2)
    return _aggregate_diff(table, selected_class, contributions1, contributions2)


def _aggregate_diff(
    table: StatTable,
    selected_class: str,
    contributions1: List[Contribution],
    contributions2: List[Contribution],
) -> Dict[str, float]:
    totals = {name: 0.0 for name in table.derived_stats()}

    for sign, contributions in ((-1.0, contributions1), (1.0, contributions2)):
        for contribution in contributions:
            for name, effect in expand_contribution(table, selected_class, contribution).items():
                totals[name] += sign * effect

    return {name: value for name, value in totals.items() if abs(value) >= DELTA_EPSILON}


def _sum_by_stat(contributions: List[Contribution]) -> Dict[str, float]:
    amounts: Dict[str, float] = {}
    for c in contributions:
        amounts[c.stat_name] = amounts.get(c.stat_name, 0.0) + c.amount
    return amounts


def _paired_diff(
    table: StatTable,
    selected_class: str,
    contributions1: List[Contribution],
    contributions2: List[Contribution],
) -> Dict[str, float]:
    amounts1 = _sum_by_stat(contributions1)
    amounts2 = _sum_by_stat(contributions2)

    totals: Dict[str, float] = {}
    for name, amount1 in amounts1.items():
        if name not in amounts2:
            continue
        diff = Contribution(name, amounts2[name] - amount1)
        for derived, effect in expand_contribution(table, selected_class, diff, direct=False).items():
            totals[derived] = totals.get(derived, 0.0) + effect

    return _in_table_order(table, totals)
