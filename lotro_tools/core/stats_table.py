"""
LOTRO Tools - Stats Table
=========================
Loads the primary-stat -> derived-stat conversion table.

The CSV layout is fixed by its first two header columns:

    Primary Stat,Derived Stat,Beorning,Brawler,Burglar,...
    Might,Physical Mastery,0,2.5,0,...

Every column after the first two is a class, in file order. Class cells are
multipliers; empty or non-numeric cells count as 0.
"""

import io
import logging
import os
import warnings
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .constants import (
    DEFAULT_MULTIPLIER,
    DEFAULT_STATS_FILE,
    DERIVED_STAT_COLUMN,
    KEY_COLUMNS,
    PRIMARY_STAT_COLUMN,
)
from .errors import LoadError, ParseWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatRow:
    """One (primary stat, derived stat) pairing with a multiplier per class."""
    primary_stat: str
    derived_stat: str
    multipliers: Dict[str, float] = field(default_factory=dict)

    def multiplier_for(self, class_name: str) -> float:
        """Multiplier for a class, 0 if the class has no column."""
        return self.multipliers.get(class_name, DEFAULT_MULTIPLIER)


@dataclass(frozen=True)
class StatTable:
    """Immutable, ordered collection of StatRows plus the class column order."""
    rows: Tuple[StatRow, ...] = ()
    classes: Tuple[str, ...] = ()
    source: str = ""

    @classmethod
    def empty(cls, source: str = "") -> 'StatTable':
        """Table used when loading failed: no rows, no classes."""
        return cls(rows=(), classes=(), source=source)

    def __len__(self) -> int:
        return len(self.rows)

    def primary_stats(self) -> List[str]:
        """Distinct primary stats in first-seen order."""
        return list(dict.fromkeys(row.primary_stat for row in self.rows))

    def derived_stats(self) -> List[str]:
        """Distinct derived stats in first-seen order."""
        return list(dict.fromkeys(row.derived_stat for row in self.rows))

    def available_stats(self) -> List[str]:
        """
        Every stat a user can enter on an item: primary stats first, then
        derived stats (which are added without conversion).
        """
        return list(dict.fromkeys(self.primary_stats() + self.derived_stats()))

    def is_derived_stat(self, name: str) -> bool:
        return any(row.derived_stat == name for row in self.rows)

    def has_class(self, class_name: str) -> bool:
        return class_name in self.classes

    def rows_for(self, primary_stat: str) -> List[StatRow]:
        """All rows converting the given primary stat, in table order."""
        return [row for row in self.rows if row.primary_stat == primary_stat]

    def multiplier(self, primary_stat: str, derived_stat: str, class_name: str) -> float:
        """
        Conversion factor from primary_stat to derived_stat for a class.

        Duplicate (primary, derived) rows add up, the same way they do when
        contributions are expanded row by row.
        """
        return sum(
            (row.multiplier_for(class_name) for row in self.rows
             if row.primary_stat == primary_stat and row.derived_stat == derived_stat),
            DEFAULT_MULTIPLIER,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """The table as a DataFrame with the original column layout."""
        records = [
            {
                PRIMARY_STAT_COLUMN: row.primary_stat,
                DERIVED_STAT_COLUMN: row.derived_stat,
                **{name: row.multiplier_for(name) for name in self.classes},
            }
            for row in self.rows
        ]
        return pd.DataFrame(records, columns=list(KEY_COLUMNS) + list(self.classes))


Source = Union[str, os.PathLike, io.IOBase]


def load(source: Optional[Source] = None) -> StatTable:
    """
    Load the stats table from a path, URL or open file.

    Args:
        source: CSV location. Defaults to the bundled data/lotro-stats.csv.

    Returns:
        StatTable with at least one row.

    Raises:
        LoadError: the resource could not be read, the header is not
            "Primary Stat,Derived Stat,...", or no usable rows remained.
    """
    if source is None:
        source = DEFAULT_STATS_FILE
    return _load(source, _describe(source))


def parse_csv_text(text: str, source: str = "<text>") -> StatTable:
    """Parse CSV content that has already been fetched."""
    return _load(io.StringIO(text), source)


def get_class_list(table: StatTable) -> List[str]:
    """Class names in file order; also the initial column order."""
    return list(table.classes)


def _load(source: Source, label: str) -> StatTable:
    logger.info("Loading stats table from %s", label)

    try:
        frame = pd.read_csv(
            source,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            header=None,
            engine="python",
            on_bad_lines=_skip_bad_line,
        )
    except (OSError, ValueError) as e:
        logger.error("Failed to read stats table from %s: %s", label, e)
        raise LoadError(label, str(e)) from e

    table = _table_from_frame(frame, label)
    logger.info("Loaded %d rows and %d classes from %s", len(table.rows), len(table.classes), label)
    return table


def _table_from_frame(frame: pd.DataFrame, label: str) -> StatTable:
    # Read headerless so rows longer than the header reach _skip_bad_line
    columns = [str(c).strip() for c in frame.iloc[0].fillna("")] if len(frame) else []
    frame = frame.iloc[1:].reset_index(drop=True)
    if tuple(columns[:2]) != KEY_COLUMNS:
        raise LoadError(label, f"header must start with {', '.join(KEY_COLUMNS)}; got {columns[:2]}")
    if frame.empty:
        raise LoadError(label, "no rows")
    frame.columns = columns
    classes = columns[2:]

    primaries = frame.iloc[:, 0].fillna("").astype(str).str.strip()
    deriveds = frame.iloc[:, 1].fillna("").astype(str).str.strip()
    multipliers = _coerce_multipliers(frame.iloc[:, 2:]) if classes else None

    rows = []
    for i, (primary, derived) in enumerate(zip(primaries, deriveds)):
        values = {} if multipliers is None else {
            name: float(multipliers.iat[i, j]) for j, name in enumerate(classes)
        }
        if not primary or not derived:
            if not primary and not derived and _row_is_blank(frame, i):
                continue
            message = f"{label}: row {i + 1} has no {PRIMARY_STAT_COLUMN if not primary else DERIVED_STAT_COLUMN}; skipped"
            logger.warning(message)
            warnings.warn(message, ParseWarning, stacklevel=3)
            continue
        rows.append(StatRow(primary_stat=primary, derived_stat=derived, multipliers=values))

    if not rows:
        raise LoadError(label, "no rows")
    return StatTable(rows=tuple(rows), classes=tuple(classes), source=label)


def _coerce_multipliers(cells: pd.DataFrame) -> pd.DataFrame:
    """Numeric view of the class columns; blanks, text and inf become 0."""
    numeric = cells.apply(lambda col: pd.to_numeric(col.astype(str).str.strip(), errors="coerce"))
    numeric = numeric.astype(float)
    return numeric.where(np.isfinite(numeric), DEFAULT_MULTIPLIER)


def _row_is_blank(frame: pd.DataFrame, i: int) -> bool:
    return all(str(v).strip() in ("", "nan") for v in frame.iloc[i].tolist())


def _skip_bad_line(fields: List[str]) -> None:
    message = f"row with {len(fields)} fields does not match the header; skipped: {fields!r}"
    logger.warning(message)
    warnings.warn(message, ParseWarning, stacklevel=2)
    return None


def _describe(source) -> str:
    if isinstance(source, (str, bytes)):
        return str(source)
    name = getattr(source, "name", None)
    if isinstance(name, str):
        return name
    if hasattr(source, "__fspath__"):
        return str(source.__fspath__())
    return f"<{type(source).__name__}>"
