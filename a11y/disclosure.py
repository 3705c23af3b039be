"""Expanded/collapsed state for accordions, dropdowns and menu buttons."""

from __future__ import annotations

import logging
from typing import Any, Dict

from a11y.observable import Observable

logger = logging.getLogger(__name__)


class DisclosureState:
    """Tracks whether a popup or panel is expanded."""

    def __init__(self, initial_expanded: bool = False, *, has_popup: bool = True):
        self._expanded = bool(initial_expanded)
        self._has_popup = has_popup
        self.state_changed: Observable[bool] = Observable("disclosure")

    @property
    def is_expanded(self) -> bool:
        return self._expanded

    def set_expanded(self, expanded: bool) -> None:
        expanded = bool(expanded)
        if expanded == self._expanded:
            return
        self._expanded = expanded
        logger.debug(f"Disclosure {'expanded' if expanded else 'collapsed'}")
        self.state_changed.notify(expanded)

    def toggle(self) -> bool:
        """Flip the state. Returns the new value."""
        self.set_expanded(not self._expanded)
        return self._expanded

    def expand(self) -> None:
        self.set_expanded(True)

    def collapse(self) -> None:
        self.set_expanded(False)

    def trigger_props(self) -> Dict[str, Any]:
        """Attributes for the button that opens the popup."""
        return {
            "aria-expanded": self._expanded,
            "aria-haspopup": self._has_popup,
        }
