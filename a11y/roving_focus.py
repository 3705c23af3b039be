"""
Roving Focus - one tab stop per composite widget.

Implements the roving tabindex pattern for menus, toolbars and listboxes:
only the current item is reachable with Tab, the rest are reached with
arrow keys, Home and End.

Usage:
    from a11y.roving_focus import RovingFocusController

    roving = RovingFocusController(buttons, orientation="horizontal",
                                   focus_host=pointer)
    roving.focus_commands.register_callback(pointer.execute)

    for index, button in enumerate(buttons):
        apply_props(button, roving.item_props(index))

    roving.handle_key(KeyEvent("ArrowRight"))   # focus moves to buttons[1]

Navigation wraps around at both ends. Out-of-range targets are ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Union

from a11y.element_tree import FocusHost
from a11y.events import (
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    FocusCommand,
    KeyEvent,
)
from a11y.keyboard_router import KeyBindings, KeyboardRouter
from a11y.observable import Observable
from core.constants import ROLE_MENUITEM, TAB_INDEX_REACHABLE, TAB_INDEX_UNREACHABLE

if TYPE_CHECKING:
    from core.config import EngineConfig

logger = logging.getLogger(__name__)


class Orientation(Enum):
    """Axis the arrow keys move along."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class FocusableItem:
    """An element and its position in the collection."""
    element: Any
    index: int


@dataclass(frozen=True)
class RovingFocusState:
    """Snapshot passed to state-changed callbacks."""
    items: Tuple[Any, ...]
    current_index: int
    orientation: Orientation

    @property
    def current_item(self) -> Optional[Any]:
        if not self.items:
            return None
        return self.items[self.current_index]


class RovingFocusController:
    """
    Keeps exactly one item of a collection tab-reachable.

    Every index change produces a FocusCommand for the new current item,
    unless that item already holds focus. Commands are returned to the
    caller and broadcast on ``focus_commands``.
    """

    def __init__(
        self,
        items: Optional[Sequence[Any]] = None,
        orientation: Union[Orientation, str, None] = None,
        *,
        focus_host: Optional[FocusHost] = None,
        role: str = ROLE_MENUITEM,
        key_aliases: Optional[Dict[str, str]] = None,
        config: Optional["EngineConfig"] = None,
    ):
        """
        Args:
            items: Elements in navigation order
            orientation: "horizontal" or "vertical" (defaults to the
                configured roving_orientation, else horizontal)
            focus_host: Used to skip focusing an item that already has focus
            role: ARIA role reported for every item
            key_aliases: Extra key identifier aliases for the router
                (defaults to the configured key_aliases)
            config: Engine configuration
        """
        if orientation is None:
            orientation = config.roving_orientation if config else Orientation.HORIZONTAL
        if key_aliases is None and config is not None:
            key_aliases = config.key_aliases

        self._items: List[Any] = list(items or [])
        self._current_index = 0
        self._orientation = Orientation(orientation)
        self._focus_host = focus_host
        self._role = role
        self._key_aliases = key_aliases
        self._last_command: Optional[FocusCommand] = None

        self.state_changed: Observable[RovingFocusState] = Observable("roving state")
        self.focus_commands: Observable[FocusCommand] = Observable("roving focus")

        self._router = self._build_router()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[Any, ...]:
        return tuple(self._items)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def current_item(self) -> Optional[Any]:
        return self._items[self._current_index] if self._items else None

    @property
    def orientation(self) -> Orientation:
        return self._orientation

    @orientation.setter
    def orientation(self, value: Union[Orientation, str]) -> None:
        self._orientation = Orientation(value)
        self._router = self._build_router()
        self.state_changed.notify(self.state)

    @property
    def state(self) -> RovingFocusState:
        return RovingFocusState(tuple(self._items), self._current_index, self._orientation)

    def focusable_items(self) -> List[FocusableItem]:
        return [FocusableItem(element, index) for index, element in enumerate(self._items)]

    def set_items(self, items: Sequence[Any]) -> Optional[FocusCommand]:
        """
        Replace the collection.

        The current index is clamped into the new range so one item stays
        reachable after the collection shrinks.
        """
        self._items = list(items)
        if not self._items:
            self._current_index = 0
            self.state_changed.notify(self.state)
            return None

        clamped = min(self._current_index, len(self._items) - 1)
        if clamped != self._current_index:
            return self._set_index(clamped, "collection shrank")

        self.state_changed.notify(self.state)
        return None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_next(self) -> Optional[FocusCommand]:
        count = len(self._items)
        if count == 0:
            return None
        return self._set_index((self._current_index + 1) % count, "next")

    def move_previous(self) -> Optional[FocusCommand]:
        count = len(self._items)
        if count == 0:
            return None
        return self._set_index((self._current_index - 1 + count) % count, "previous")

    def move_to_index(self, index: int) -> Optional[FocusCommand]:
        """Jump to ``index``; out-of-range values are ignored."""
        if not 0 <= index < len(self._items):
            return None
        return self._set_index(index, "index")

    def move_to_first(self) -> Optional[FocusCommand]:
        return self.move_to_index(0)

    def move_to_last(self) -> Optional[FocusCommand]:
        return self.move_to_index(len(self._items) - 1)

    def _set_index(
        self, index: int, reason: str, *, focus: bool = True
    ) -> Optional[FocusCommand]:
        if index == self._current_index:
            return None

        self._current_index = index
        logger.debug(f"Roving focus moved to {index} ({reason})")
        self.state_changed.notify(self.state)

        if not focus:
            return None
        target = self._items[index]
        if self._focus_host is not None and self._focus_host.focused() is target:
            return None

        command = FocusCommand(target, reason=f"roving:{reason}")
        self._last_command = command
        self.focus_commands.notify(command)
        return command

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def _build_router(self) -> KeyboardRouter:
        if self._orientation is Orientation.HORIZONTAL:
            extra = {KEY_ARROW_RIGHT: self.move_next, KEY_ARROW_LEFT: self.move_previous}
        else:
            extra = {KEY_ARROW_DOWN: self.move_next, KEY_ARROW_UP: self.move_previous}

        bindings = KeyBindings(
            on_home=self.move_to_first,
            on_end=self.move_to_last,
            extra=extra,
        )
        return KeyboardRouter(bindings, key_aliases=self._key_aliases)

    def handle_key(self, event: KeyEvent) -> Optional[FocusCommand]:
        """
        Apply a directional key.

        Returns:
            The resulting FocusCommand, if focus has to move.
        """
        self._last_command = None
        self._router.handle_key(event)
        command, self._last_command = self._last_command, None
        return command

    def handle_focus(self, index: int) -> None:
        """
        An item received focus from outside (click, programmatic).

        Only the index follows; the item already holds focus, so no
        FocusCommand is produced.
        """
        if 0 <= index < len(self._items):
            self._set_index(index, "focused", focus=False)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def is_reachable(self, index: int) -> bool:
        return bool(self._items) and index == self._current_index

    def item_props(self, index: int) -> Dict[str, Any]:
        """Attributes the presentation layer applies to item ``index``."""
        reachable = self.is_reachable(index)
        return {
            "reachable_by_sequential_nav": reachable,
            "tab_index": TAB_INDEX_REACHABLE if reachable else TAB_INDEX_UNREACHABLE,
            "role": self._role,
            "key_handler": self.handle_key,
            "on_focus": lambda: self.handle_focus(index),
        }

    def dispose(self) -> None:
        """Drop listeners; called when the hosting widget unmounts."""
        self.state_changed.clear()
        self.focus_commands.clear()
        self._focus_host = None
        logger.debug("Roving focus controller disposed")
