"""
LOTRO Tools - Class Column Order
================================
Order and visibility of the class columns in the calculator grid.

Every function returns a new value; inputs are never mutated. The order is
always a permutation of the table's class list.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

logger = logging.getLogger(__name__)


def reorder(current_order: Sequence[str], dragged: str, target: str) -> List[str]:
    """
    Move `dragged` to where `target` is (drag-and-drop of a column header).

    The dragged column is removed first and then inserted at the index the
    target had before the removal. Dragging right therefore lands after the
    target, dragging left lands before it.

    If either name is not in the order, or they are the same, the order is
    returned unchanged (as a new list).
    """
    new_order = list(current_order)
    if dragged == target or dragged not in new_order or target not in new_order:
        if dragged != target:
            logger.debug("Ignoring move of %r onto %r: not in %s", dragged, target, new_order)
        return new_order

    target_index = new_order.index(target)
    new_order.remove(dragged)
    new_order.insert(target_index, dragged)
    return new_order


def initial_visibility(classes: Sequence[str]) -> Dict[str, bool]:
    """Every class visible."""
    return {name: True for name in classes}


def toggle_class(visibility: Dict[str, bool], class_name: str) -> Dict[str, bool]:
    """Flip one class's visibility."""
    updated = dict(visibility)
    updated[class_name] = not visibility.get(class_name, False)
    return updated


def set_all_visible(order: Sequence[str], visible: bool) -> Dict[str, bool]:
    """Show or hide every class at once."""
    return {name: bool(visible) for name in order}


def all_visible(visibility: Dict[str, bool]) -> bool:
    """True if every class is shown (drives the "Toggle All" checkbox)."""
    return all(visibility.values())


def visible_classes(order: Sequence[str], visibility: Dict[str, bool]) -> List[str]:
    """Visible classes in column order."""
    return [name for name in order if visibility.get(name, False)]


@dataclass(frozen=True)
class ColumnState:
    """Column order plus visibility, updated by returning new states."""
    order: Tuple[str, ...] = ()
    visibility: Dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_classes(cls, classes: Sequence[str]) -> 'ColumnState':
        return cls(order=tuple(classes), visibility=initial_visibility(classes))

    @property
    def visible(self) -> List[str]:
        return visible_classes(self.order, self.visibility)

    @property
    def all_visible(self) -> bool:
        return all_visible(self.visibility)

    def reorder(self, dragged: str, target: str) -> 'ColumnState':
        return ColumnState(order=tuple(reorder(self.order, dragged, target)), visibility=self.visibility)

    def toggle(self, class_name: str) -> 'ColumnState':
        if class_name not in self.order:
            return self
        return ColumnState(order=self.order, visibility=toggle_class(self.visibility, class_name))

    def toggle_all(self, visible: bool) -> 'ColumnState':
        return ColumnState(order=self.order, visibility=set_all_visible(self.order, visible))
