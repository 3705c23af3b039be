"""
Callback lists for "state changed" notifications.

Controllers keep their state in plain attributes and tell subscribers when
it changes; the presentation layer re-reads the attributes it renders.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """Ordered list of callbacks notified with a payload."""

    def __init__(self, name: str = "state") -> None:
        self._name = name
        self._callbacks: List[Callable[[T], None]] = []

    def register_callback(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register a callback.

        Returns:
            A function that unregisters the callback again.
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        return lambda: self.unregister_callback(callback)

    def unregister_callback(self, callback: Callable[[T], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    def notify(self, payload: T) -> None:
        # Snapshot so callbacks may unregister themselves while notified
        for callback in list(self._callbacks):
            try:
                callback(payload)
            except Exception as e:
                logger.error(f"{self._name} callback error: {e}")

    def clear(self) -> None:
        self._callbacks.clear()

    def __len__(self) -> int:
        return len(self._callbacks)
