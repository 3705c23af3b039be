"""
Keyboard Router - key events to semantic actions.

Translates a key press into at most one bound callback and prevents the
default action only for keys it handled. Unbound keys pass through, so a
widget binds just the keys it cares about.

Usage:
    from a11y.keyboard_router import KeyBindings, KeyboardRouter

    router = KeyboardRouter(KeyBindings(
        on_enter=menu.activate,
        on_escape=menu.close,
        on_arrow_down=menu.next_item,
    ))
    router.handle_key(KeyEvent("ArrowDown"))   # True, default prevented
    router.handle_key(KeyEvent("x"))           # False, untouched

A bound key is always handled: whatever the callback returns, the
event's default is prevented.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from a11y.events import (
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_END,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_HOME,
    KEY_SPACE,
    KeyEvent,
    normalize_key,
)

logger = logging.getLogger(__name__)

KeyCallback = Callable[[], Any]

# Named slot -> key identifier
SLOT_KEYS: Dict[str, str] = {
    "on_enter": KEY_ENTER,
    "on_space": KEY_SPACE,
    "on_escape": KEY_ESCAPE,
    "on_arrow_up": KEY_ARROW_UP,
    "on_arrow_down": KEY_ARROW_DOWN,
    "on_arrow_left": KEY_ARROW_LEFT,
    "on_arrow_right": KEY_ARROW_RIGHT,
    "on_home": KEY_HOME,
    "on_end": KEY_END,
}


@dataclass
class KeyBindings:
    """Binding table: optional callback per slot, plus free-form extras.

    ``extra`` is keyed by key identifier ("Delete") or chord ("Shift+Tab").
    """
    on_enter: Optional[KeyCallback] = None
    on_space: Optional[KeyCallback] = None
    on_escape: Optional[KeyCallback] = None
    on_arrow_up: Optional[KeyCallback] = None
    on_arrow_down: Optional[KeyCallback] = None
    on_arrow_left: Optional[KeyCallback] = None
    on_arrow_right: Optional[KeyCallback] = None
    on_home: Optional[KeyCallback] = None
    on_end: Optional[KeyCallback] = None
    extra: Dict[str, KeyCallback] = field(default_factory=dict)
    disabled: bool = False

    def to_table(self) -> Dict[str, KeyCallback]:
        table: Dict[str, KeyCallback] = {}
        for slot, key in SLOT_KEYS.items():
            callback = getattr(self, slot)
            if callback is not None:
                table[key] = callback
        table.update(self.extra)
        return table


class KeyboardRouter:
    """Dispatches key events through a KeyBindings table."""

    def __init__(
        self,
        bindings: Optional[KeyBindings] = None,
        *,
        key_aliases: Optional[Dict[str, str]] = None,
    ):
        """
        Args:
            bindings: Binding table (empty if omitted)
            key_aliases: Extra alias -> key identifier mappings, usually
                EngineConfig.key_aliases
        """
        self._bindings = bindings or KeyBindings()
        self._key_aliases = dict(key_aliases or {})
        self._table = self._bindings.to_table()

    @property
    def disabled(self) -> bool:
        return self._bindings.disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        self._bindings.disabled = bool(value)

    @property
    def bindings(self) -> KeyBindings:
        return self._bindings

    def set_bindings(self, bindings: KeyBindings) -> None:
        self._bindings = bindings
        self._table = bindings.to_table()

    def bind(self, key: str, callback: KeyCallback) -> None:
        """Bind (or rebind) a key identifier or chord outside the named slots."""
        self._bindings.extra[key] = callback
        self._table = self._bindings.to_table()

    def unbind(self, key: str) -> None:
        self._bindings.extra.pop(key, None)
        for slot, slot_key in SLOT_KEYS.items():
            if slot_key == key:
                setattr(self._bindings, slot, None)
        self._table = self._bindings.to_table()

    def lookup(self, event: KeyEvent) -> Optional[KeyCallback]:
        """Find the callback for an event: modifier chord first, then bare key."""
        key = normalize_key(event.key, self._key_aliases)
        if event.modifiers:
            callback = self._table.get(event.chord(key))
            if callback is not None:
                return callback
        return self._table.get(key)

    def handle_key(self, event: KeyEvent) -> bool:
        """
        Route a key event.

        Returns:
            True if a callback handled the event (its default is prevented),
            False if the event passed through untouched.
        """
        if self._bindings.disabled:
            return False

        callback = self.lookup(event)
        if callback is None:
            return False

        callback()
        event.prevent_default()
        logger.debug(f"Handled key {event.chord()}")
        return True

    __call__ = handle_key
