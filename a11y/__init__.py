"""
Accessibility interaction engine.

Headless controllers for keyboard-driven composite widgets:
- Keyboard routing of key presses to semantic actions
- Roving tabindex for menus, toolbars and listboxes
- Focus trapping for modals and overlays
- Live-region announcements for screen readers
- Selection, disclosure and form-field state with ARIA attributes
- Stable label/description/error ids

Qt bindings live in a11y.qt_adapter and are imported separately, so the
engine itself loads without a GUI toolkit.

Usage:
    from a11y import (
        KeyEvent,
        KeyBindings,
        KeyboardRouter,
        RovingFocusController,
        FocusTrapController,
        LiveAnnouncer,
        SelectionModel,
        AriaLabelRegistry,
    )
"""

from a11y.events import KeyEvent, FocusCommand
from a11y.element_tree import (
    Element,
    ElementNodeTree,
    ElementTree,
    FocusHost,
    FocusPointer,
    collect_focusable,
)
from a11y.scheduler import ManualScheduler, Scheduler, TimerHandle
from a11y.observable import Observable
from a11y.keyboard_router import KeyBindings, KeyboardRouter
from a11y.roving_focus import (
    FocusableItem,
    Orientation,
    RovingFocusController,
    RovingFocusState,
)
from a11y.focus_trap import FocusTrapController, FocusTrapState
from a11y.live_announcer import Announcement, AnnouncePriority, LiveAnnouncer
from a11y.selection import SelectionModel
from a11y.aria_labels import (
    AriaLabelRegistry,
    IdAllocator,
    LabelBinding,
    get_id_allocator,
)
from a11y.disclosure import DisclosureState
from a11y.field_state import FieldState, max_length, required
from a11y.accessibility import AccessibilityKit

__all__ = [
    # Events
    "KeyEvent",
    "FocusCommand",
    # Element tree
    "Element",
    "ElementNodeTree",
    "ElementTree",
    "FocusHost",
    "FocusPointer",
    "collect_focusable",
    # Timers and notifications
    "ManualScheduler",
    "Scheduler",
    "TimerHandle",
    "Observable",
    # Keyboard
    "KeyBindings",
    "KeyboardRouter",
    # Focus
    "FocusableItem",
    "Orientation",
    "RovingFocusController",
    "RovingFocusState",
    "FocusTrapController",
    "FocusTrapState",
    # Announcements
    "Announcement",
    "AnnouncePriority",
    "LiveAnnouncer",
    # ARIA state
    "SelectionModel",
    "AriaLabelRegistry",
    "IdAllocator",
    "LabelBinding",
    "get_id_allocator",
    "DisclosureState",
    "FieldState",
    "max_length",
    "required",
    "AccessibilityKit",
]
