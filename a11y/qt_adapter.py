"""
PyQt6 bindings for the interaction engine.

Supplies the presentation-layer capabilities the controllers expect, for
QWidget-based UIs:

- QtElementTree: children and focusability of widgets
- QtFocusHost: reads and moves keyboard focus
- QtTimerScheduler: QTimer-backed Scheduler for LiveAnnouncer
- key_event_from_qt: QKeyEvent -> KeyEvent
- KeyRoutingFilter: event filter feeding key presses to a controller

Usage:
    tree = QtElementTree()
    host = QtFocusHost(dialog)
    trap = FocusTrapController(dialog, tree=tree, focus_host=host)
    trap.focus_commands.register_callback(host.execute)

    for child in collect_focusable(tree, dialog):
        KeyRoutingFilter(child, trap.handle_key)
    trap.activate()
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from PyQt6 import sip
from PyQt6.QtCore import QElapsedTimer, QEvent, QObject, Qt, QTimer
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import QApplication, QWidget

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
    KEY_TAB,
    FocusCommand,
    KeyEvent,
)
from core.result import try_result

logger = logging.getLogger(__name__)


def _code(value: Any) -> int:
    return value.value if isinstance(value, Enum) else int(value)


_QT_KEYS: Dict[int, str] = {
    _code(Qt.Key.Key_Return): KEY_ENTER,
    _code(Qt.Key.Key_Enter): KEY_ENTER,
    _code(Qt.Key.Key_Space): KEY_SPACE,
    _code(Qt.Key.Key_Escape): KEY_ESCAPE,
    _code(Qt.Key.Key_Tab): KEY_TAB,
    _code(Qt.Key.Key_Backtab): KEY_TAB,
    _code(Qt.Key.Key_Up): KEY_ARROW_UP,
    _code(Qt.Key.Key_Down): KEY_ARROW_DOWN,
    _code(Qt.Key.Key_Left): KEY_ARROW_LEFT,
    _code(Qt.Key.Key_Right): KEY_ARROW_RIGHT,
    _code(Qt.Key.Key_Home): KEY_HOME,
    _code(Qt.Key.Key_End): KEY_END,
}


def key_event_from_qt(event: QKeyEvent) -> KeyEvent:
    """Translate a Qt key press into the engine's KeyEvent."""
    code = _code(event.key())
    modifiers = event.modifiers()
    key = _QT_KEYS.get(code) or event.text() or ""

    # Qt reports Shift+Tab as Key_Backtab
    shift = bool(modifiers & Qt.KeyboardModifier.ShiftModifier)
    if code == _code(Qt.Key.Key_Backtab):
        shift = True

    return KeyEvent(
        key=key,
        shift=shift,
        ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
        alt=bool(modifiers & Qt.KeyboardModifier.AltModifier),
        meta=bool(modifiers & Qt.KeyboardModifier.MetaModifier),
    )


def _is_alive(widget: Any) -> bool:
    return isinstance(widget, QObject) and not sip.isdeleted(widget)


class QtElementTree:
    """ElementTree over QWidget parent/child relationships."""

    def children(self, node: QWidget) -> List[QWidget]:
        if not _is_alive(node):
            return []
        return node.findChildren(QWidget, "", Qt.FindChildOption.FindDirectChildrenOnly)

    def is_attached(self, node: QWidget) -> bool:
        return _is_alive(node)

    def is_focusable(self, node: QWidget) -> bool:
        """Enabled, visible and reachable with Tab."""
        if not _is_alive(node):
            return False
        tab_focus = _code(Qt.FocusPolicy.TabFocus)
        return (
            node.isEnabled()
            and node.isVisible()
            and bool(_code(node.focusPolicy()) & tab_focus)
        )


class QtFocusHost:
    """
    FocusHost over Qt keyboard focus.

    With a root widget, focus is read from the root's window, which also
    works while that window is not the active one.
    """

    def __init__(self, root: Optional[QWidget] = None):
        self._root = root

    def focused(self) -> Optional[QWidget]:
        if self._root is not None and _is_alive(self._root):
            widget = self._root.window().focusWidget()
            if widget is not None:
                return widget
        return QApplication.focusWidget()

    def execute(self, command: FocusCommand) -> bool:
        target = command.target
        if not _is_alive(target):
            logger.debug(f"Focus target gone ({command.reason})")
            return False

        result = try_result(lambda: target.setFocus(Qt.FocusReason.OtherFocusReason))
        if result.is_err():
            logger.warning(f"Could not move focus ({command.reason}): {result.error}")
            return False
        return True


class QtTimerHandle:
    """Cancellable single-shot QTimer."""

    def __init__(self, timer: QTimer):
        self._timer: Optional[QTimer] = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and _is_alive(self._timer) and self._timer.isActive()

    def cancel(self) -> None:
        timer, self._timer = self._timer, None
        if timer is not None and _is_alive(timer):
            timer.stop()
            timer.deleteLater()


class QtTimerScheduler:
    """Scheduler running callbacks on the Qt event loop."""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        self._clock = QElapsedTimer()
        self._clock.start()

    def now(self) -> float:
        return float(self._clock.elapsed())

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer)

        def fire() -> None:
            handle.cancel()
            callback()

        timer.timeout.connect(fire)
        timer.start(max(0, int(delay_ms)))
        return handle


class KeyRoutingFilter(QObject):
    """
    Event filter that hands key presses on ``watched`` to ``handler``.

    The Qt event is consumed when the handler prevented the default,
    so e.g. a wrapped Tab does not also move focus the Qt way.
    """

    def __init__(self, watched: QObject, handler: Callable[[KeyEvent], Any]):
        super().__init__(watched)
        self._watched: Optional[QObject] = watched
        self._handler = handler
        watched.installEventFilter(self)

    def eventFilter(self, obj: Optional[QObject], event: Optional[QEvent]) -> bool:
        if obj is None or event is None:
            return False
        if event.type() != QEvent.Type.KeyPress or not isinstance(event, QKeyEvent):
            return super().eventFilter(obj, event)

        key_event = key_event_from_qt(event)
        self._handler(key_event)
        if key_event.default_prevented:
            event.accept()
            return True
        return super().eventFilter(obj, event)

    def uninstall(self) -> None:
        """Remove the filter (hosting widget unmounting)."""
        watched, self._watched = self._watched, None
        if watched is not None and _is_alive(watched):
            watched.removeEventFilter(self)
