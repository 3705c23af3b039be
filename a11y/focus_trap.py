"""
Focus Trap - keep Tab cycling inside a modal container.

While active, Tab on the last focusable element wraps to the first and
Shift+Tab on the first wraps to the last. Deactivating restores focus to
whatever held it before activation.

Usage:
    from a11y.focus_trap import FocusTrapController

    trap = FocusTrapController(dialog, tree=tree, focus_host=pointer)
    trap.focus_commands.register_callback(pointer.execute)

    with trap:               # activate(): focus moves into the dialog
        run_dialog()         # host routes key presses to trap.handle_key
                             # deactivate(): focus returns to the opener
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from a11y.element_tree import ElementTree, FocusHost, collect_focusable
from a11y.events import KEY_TAB, FocusCommand, KeyEvent, normalize_key
from a11y.observable import Observable

logger = logging.getLogger(__name__)


class TrapPhase(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass(frozen=True)
class FocusTrapState:
    """Snapshot passed to state-changed callbacks."""
    container: Any
    is_active: bool
    saved_focus: Optional[Any]
    focusable_snapshot: Tuple[Any, ...]


class FocusTrapController:
    """
    Inactive -> activate() -> Active -> deactivate() -> Inactive.

    The focusable snapshot is taken fresh on every activation, since the
    container's contents may have changed while the trap was inactive.
    """

    def __init__(
        self,
        container: Optional[Any] = None,
        *,
        tree: ElementTree,
        focus_host: FocusHost,
        key_aliases: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            container: Root element focus is confined to (may be attached later)
            tree: Element-tree capability used to scan the container
            focus_host: Source of the currently focused element
            key_aliases: Extra key identifier aliases, e.g. a toolkit's "Tab" spelling
        """
        self._container = container
        self._tree = tree
        self._focus_host = focus_host
        self._phase = TrapPhase.INACTIVE
        self._saved_focus: Optional[Any] = None
        self._snapshot: List[Any] = []
        self._key_aliases = dict(key_aliases or {})
        self._disposed = False

        self.state_changed: Observable[FocusTrapState] = Observable("focus trap state")
        self.focus_commands: Observable[FocusCommand] = Observable("focus trap focus")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def container(self) -> Optional[Any]:
        return self._container

    @container.setter
    def container(self, container: Optional[Any]) -> None:
        """Attach the container root (takes effect on the next activation)."""
        self._container = container

    @property
    def is_active(self) -> bool:
        return self._phase is TrapPhase.ACTIVE

    @property
    def saved_focus(self) -> Optional[Any]:
        return self._saved_focus

    @property
    def focusable_snapshot(self) -> Tuple[Any, ...]:
        return tuple(self._snapshot)

    @property
    def state(self) -> FocusTrapState:
        return FocusTrapState(
            container=self._container,
            is_active=self.is_active,
            saved_focus=self._saved_focus,
            focusable_snapshot=tuple(self._snapshot),
        )

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def activate(self) -> Optional[FocusCommand]:
        """
        Record current focus, scan the container and focus its first
        focusable element. No-op if already active.
        """
        if self._disposed or self.is_active:
            return None

        self._saved_focus = self._focus_host.focused()
        self._snapshot = collect_focusable(self._tree, self._container)
        self._phase = TrapPhase.ACTIVE

        logger.debug(
            f"Focus trap activated with {len(self._snapshot)} focusable elements"
        )
        self.state_changed.notify(self.state)

        if not self._snapshot:
            return None
        return self._emit(self._snapshot[0], "trap:initial")

    def deactivate(self) -> Optional[FocusCommand]:
        """
        Leave the trap and restore the saved focus if it is still attached.
        No-op if inactive.
        """
        if not self.is_active:
            return None

        saved, self._saved_focus = self._saved_focus, None
        self._snapshot = []
        self._phase = TrapPhase.INACTIVE

        logger.debug("Focus trap deactivated")
        self.state_changed.notify(self.state)

        if saved is None or not self._tree.is_attached(saved):
            logger.debug("Saved focus no longer available, nothing to restore")
            return None
        return self._emit(saved, "trap:restore")

    def refresh(self) -> None:
        """Rescan the container while active (after its contents changed)."""
        if self.is_active:
            self._snapshot = collect_focusable(self._tree, self._container)
            self.state_changed.notify(self.state)

    def __enter__(self) -> "FocusTrapController":
        self.activate()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.deactivate()
        return False

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> Optional[FocusCommand]:
        """
        Wrap Tab / Shift+Tab at the ends of the snapshot.

        Any Tab press that does not wrap, and every other key, is left to
        the host's default handling.

        Returns:
            The FocusCommand when focus wrapped; the event's default is
            prevented only in that case.
        """
        if not self.is_active or not self._snapshot:
            return None
        if normalize_key(event.key, self._key_aliases) != KEY_TAB:
            return None

        first, last = self._snapshot[0], self._snapshot[-1]
        focused = self._focus_host.focused()

        # Shift counts as backward whatever other modifiers are held
        if event.shift:
            if focused is not first:
                return None
            target, reason = last, "trap:wrap-backward"
        else:
            if focused is not last:
                return None
            target, reason = first, "trap:wrap-forward"

        event.prevent_default()
        return self._emit(target, reason)

    def _emit(self, target: Any, reason: str) -> FocusCommand:
        command = FocusCommand(target, reason=reason)
        self.focus_commands.notify(command)
        return command

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def container_binding(self) -> Dict[str, Any]:
        """What the presentation layer attaches to the container root."""
        return {
            "container": self._container,
            "is_active": self.is_active,
            "key_handler": self.handle_key,
        }

    def dispose(self) -> None:
        """
        Tear down on unmount: an active trap is deactivated (restoring
        focus) before listeners are dropped.
        """
        if self._disposed:
            return
        self.deactivate()
        self._disposed = True
        self.state_changed.clear()
        self.focus_commands.clear()
        logger.debug("Focus trap disposed")
