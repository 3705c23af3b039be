"""
Live Announcer - screen reader announcements through a live region.

Holds a single announcement slot, rendered by the presentation layer into
an always-mounted, visually hidden status region. Each announcement is
cleared after a fixed delay (1000 ms unless configured otherwise); a new
announcement replaces the current one and restarts that delay.

Usage:
    from a11y.live_announcer import LiveAnnouncer, AnnouncePriority

    announcer = LiveAnnouncer(scheduler)
    announcer.state_changed.register_callback(lambda _: render(announcer.region_props()))

    announcer.announce("Saved")
    announcer.announce("Connection lost", AnnouncePriority.ASSERTIVE)

Announcing the same text twice in a row sets it again without forcing an
empty state in between, so some screen readers will not repeat it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from a11y.observable import Observable
from a11y.scheduler import Scheduler, TimerHandle
from core.constants import ANNOUNCEMENT_CLEAR_MS, ROLE_STATUS

if TYPE_CHECKING:
    from core.config import EngineConfig

logger = logging.getLogger(__name__)


class AnnouncePriority(Enum):
    """Priority level for screen reader announcements."""
    POLITE = "polite"        # Non-urgent, wait for idle
    ASSERTIVE = "assertive"  # Important, interrupt current


@dataclass(frozen=True)
class Announcement:
    message: str
    priority: AnnouncePriority
    created_at: float


class LiveAnnouncer:
    """Single-slot announcement buffer with automatic expiry."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        clear_delay_ms: Optional[int] = None,
        default_priority: Union[AnnouncePriority, str, None] = None,
        config: Optional["EngineConfig"] = None,
    ):
        """
        Args:
            scheduler: Timer source for the clear delay
            clear_delay_ms: Overrides the configured delay
            default_priority: Overrides the configured default priority
            config: Engine configuration (built-in defaults if omitted)
        """
        self._scheduler = scheduler

        if clear_delay_ms is None:
            clear_delay_ms = config.announcement_clear_ms if config else ANNOUNCEMENT_CLEAR_MS
        self._clear_delay_ms = int(clear_delay_ms)

        if default_priority is None:
            default_priority = config.default_priority if config else AnnouncePriority.POLITE
        self._default_priority = AnnouncePriority(default_priority)

        self._current: Optional[Announcement] = None
        self._timer: Optional[TimerHandle] = None
        self._disposed = False

        self.state_changed: Observable[Optional[Announcement]] = Observable("announcement")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[Announcement]:
        return self._current

    @property
    def text(self) -> str:
        return self._current.message if self._current else ""

    @property
    def priority(self) -> AnnouncePriority:
        return self._current.priority if self._current else self._default_priority

    @property
    def clear_delay_ms(self) -> int:
        return self._clear_delay_ms

    @property
    def has_pending_clear(self) -> bool:
        return self._timer is not None and self._timer.active

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def announce(
        self,
        message: str,
        priority: Union[AnnouncePriority, str, None] = None,
    ) -> Optional[Announcement]:
        """
        Replace the current announcement and restart the clear delay.

        Args:
            message: Text for assistive technology
            priority: POLITE (default) waits, ASSERTIVE interrupts

        Returns:
            The new Announcement, or None after dispose().
        """
        if self._disposed:
            logger.debug(f"Ignoring announcement after dispose: {message!r}")
            return None

        self._cancel_timer()

        resolved = AnnouncePriority(priority) if priority is not None else self._default_priority
        self._current = Announcement(message, resolved, self._scheduler.now())
        self._timer = self._scheduler.call_later(self._clear_delay_ms, self._expire)

        logger.debug(f"Announce ({resolved.value}): {message}")
        self.state_changed.notify(self._current)
        return self._current

    def announce_polite(self, message: str) -> Optional[Announcement]:
        return self.announce(message, AnnouncePriority.POLITE)

    def announce_assertive(self, message: str) -> Optional[Announcement]:
        """Use sparingly for important alerts."""
        return self.announce(message, AnnouncePriority.ASSERTIVE)

    def clear(self) -> None:
        """Clear the region now and cancel the pending clear."""
        self._cancel_timer()
        if self._current is not None:
            self._current = None
            self.state_changed.notify(None)

    def _expire(self) -> None:
        self._timer = None
        if self._current is not None:
            self._current = None
            self.state_changed.notify(None)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def region_props(self) -> Dict[str, Any]:
        """Attributes for the dedicated, always-mounted live region."""
        return {
            "text": self.text,
            "priority": self.priority.value,
            "atomic": True,
            "role": ROLE_STATUS,
            "visually_hidden": True,
        }

    def dispose(self) -> None:
        """Cancel the pending clear; no timer fires after teardown."""
        self._cancel_timer()
        self._disposed = True
        self.state_changed.clear()
        logger.debug("Live announcer disposed")
