"""
Selection Model - single or multi selection by identity.

Tracks which items of an externally owned collection are selected.
Membership is identity-based: two equal but distinct objects are
different items.

Usage:
    from a11y.selection import SelectionModel

    listbox = SelectionModel(multi_select=True)
    listbox.select(row)        # added
    listbox.select(row)        # toggled off again
    listbox.item_props(row, 0) # {"role": "option", "selected": False, ...}

The mode is fixed at construction; build a new model to switch it.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, TypeVar

from a11y.observable import Observable
from core.constants import ROLE_MENUITEM, ROLE_OPTION

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SelectionModel(Generic[T]):
    """Selection set over items compared with ``is``."""

    def __init__(
        self,
        multi_select: bool = False,
        initial_selected: Optional[Iterable[T]] = None,
    ):
        self._multi_select = bool(multi_select)
        self._selected: List[T] = []
        self.state_changed: Observable[Tuple[T, ...]] = Observable("selection")

        for item in initial_selected or ():
            if not self._multi_select:
                self._selected = [item]
            elif not self._contains(item):
                self._selected.append(item)

    @property
    def multi_select(self) -> bool:
        return self._multi_select

    @property
    def selected_items(self) -> Tuple[T, ...]:
        """Selected items; for multi-select, in the order they were selected."""
        return tuple(self._selected)

    def _contains(self, item: T) -> bool:
        return any(selected is item for selected in self._selected)

    def select(self, item: T) -> None:
        """Toggle ``item`` (multi-select) or make it the only selection."""
        if self._multi_select:
            if self._contains(item):
                self._selected = [s for s in self._selected if s is not item]
            else:
                self._selected.append(item)
        else:
            self._selected = [item]
        self.state_changed.notify(self.selected_items)

    def deselect(self, item: T) -> None:
        if not self._contains(item):
            return
        self._selected = [s for s in self._selected if s is not item]
        self.state_changed.notify(self.selected_items)

    def is_selected(self, item: T) -> bool:
        return self._contains(item)

    def clear(self) -> None:
        if self._selected:
            self._selected = []
            self.state_changed.notify(())

    @property
    def item_role(self) -> str:
        return ROLE_OPTION if self._multi_select else ROLE_MENUITEM

    def item_props(self, item: T, index: int) -> Dict[str, Any]:
        return {
            "role": self.item_role,
            "selected": self.is_selected(item),
            "id": f"item-{index}",
        }

    def __len__(self) -> int:
        return len(self._selected)
