"""
Input and output value types shared by the interaction controllers.

KeyEvent is what the presentation layer feeds in; FocusCommand is what the
controllers hand back when input focus has to move.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Canonical key identifiers (DOM KeyboardEvent.key values)
KEY_ENTER = "Enter"
KEY_SPACE = " "
KEY_ESCAPE = "Escape"
KEY_TAB = "Tab"
KEY_ARROW_UP = "ArrowUp"
KEY_ARROW_DOWN = "ArrowDown"
KEY_ARROW_LEFT = "ArrowLeft"
KEY_ARROW_RIGHT = "ArrowRight"
KEY_HOME = "Home"
KEY_END = "End"

# Legacy and toolkit spellings folded onto the canonical identifiers
KEY_ALIASES: Dict[str, str] = {
    "Spacebar": KEY_SPACE,
    "Space": KEY_SPACE,
    "Return": KEY_ENTER,
    "Esc": KEY_ESCAPE,
    "Up": KEY_ARROW_UP,
    "Down": KEY_ARROW_DOWN,
    "Left": KEY_ARROW_LEFT,
    "Right": KEY_ARROW_RIGHT,
}

# Order modifiers appear in a chord identifier, e.g. "Ctrl+Shift+Tab"
MODIFIER_ORDER = ("Ctrl", "Alt", "Shift", "Meta")


def normalize_key(key: str, extra_aliases: Optional[Dict[str, str]] = None) -> str:
    """Map an alias such as "Esc" or "Spacebar" to its canonical identifier."""
    if extra_aliases and key in extra_aliases:
        return extra_aliases[key]
    return KEY_ALIASES.get(key, key)


@dataclass
class KeyEvent:
    """A discrete key press from the presentation layer."""
    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False
    default_prevented: bool = field(default=False, compare=False)

    def prevent_default(self) -> None:
        """Mark the event as handled so the host skips its default action."""
        self.default_prevented = True

    @property
    def modifiers(self) -> tuple[str, ...]:
        flags = {"Ctrl": self.ctrl, "Alt": self.alt, "Shift": self.shift, "Meta": self.meta}
        return tuple(name for name in MODIFIER_ORDER if flags[name])

    def chord(self, key: Optional[str] = None) -> str:
        """Key identifier qualified by active modifiers ("Shift+Tab")."""
        return "+".join(self.modifiers + (key or self.key,))


@dataclass(frozen=True)
class FocusCommand:
    """Instruction for the host to move input focus to ``target``."""
    target: Any
    reason: str = ""
