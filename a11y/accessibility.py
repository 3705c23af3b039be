"""
Accessibility Kit - the per-widget bundle most controls need.

Combines label ids, an optional keyboard router, a live announcer and the
reduced-motion preference behind one object a widget creates on mount and
disposes on unmount.

Usage:
    # host startup, once
    setup_logging(debug=False)        # core.logging_setup
    config = EngineConfig()           # core.config

    kit = AccessibilityKit(
        scheduler,
        label="Volume",
        description="Use arrow keys to adjust",
        keyboard=KeyBindings(on_arrow_up=louder, on_arrow_down=quieter),
        config=config,
    )
    apply(slider, kit.binding.aria_props())
    slider.on_key = kit.handle_key
    kit.announce("Volume 60 percent")
    ...
    kit.dispose()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Union

from a11y.aria_labels import AriaLabelRegistry, LabelBinding
from a11y.events import KeyEvent
from a11y.keyboard_router import KeyBindings, KeyboardRouter
from a11y.live_announcer import AnnouncePriority, Announcement, LiveAnnouncer
from a11y.scheduler import Scheduler

if TYPE_CHECKING:
    from core.config import EngineConfig

logger = logging.getLogger(__name__)


class AccessibilityKit:
    """Label binding + keyboard routing + announcements for one widget."""

    def __init__(
        self,
        scheduler: Scheduler,
        *,
        label: Optional[str] = None,
        description: Optional[str] = None,
        error_message: Optional[str] = None,
        keyboard: Optional[KeyBindings] = None,
        registry: Optional[AriaLabelRegistry] = None,
        config: Optional["EngineConfig"] = None,
        owner: Optional[Any] = None,
    ):
        """
        Args:
            scheduler: Timer source for the announcer
            label: Visible label text
            description: Help text
            error_message: Current error text
            keyboard: Key bindings; without them keys always pass through
            registry: Shared label registry (a private one if omitted)
            config: Engine configuration
            owner: Element the label ids belong to
        """
        self._config = config
        self._registry = registry or AriaLabelRegistry(config=config)
        self._owner = owner
        self.binding: LabelBinding = self._registry.bind(
            label, description, error_message, owner=owner
        )

        aliases = config.key_aliases if config else None
        self.router = KeyboardRouter(keyboard or KeyBindings(disabled=True), key_aliases=aliases)
        self.announcer = LiveAnnouncer(scheduler, config=config)

    @property
    def has_keyboard_navigation(self) -> bool:
        return not self.router.disabled

    @property
    def prefers_reduced_motion(self) -> bool:
        return bool(self._config and self._config.reduce_animations)

    @property
    def should_animate(self) -> bool:
        return not self.prefers_reduced_motion

    def update_labels(
        self,
        label: Optional[str] = None,
        description: Optional[str] = None,
        error_message: Optional[str] = None,
    ) -> LabelBinding:
        """Recompute references after text changed; ids stay the same."""
        self.binding = self._registry.rebind(
            self.binding, label, description, error_message, owner=self._owner
        )
        return self.binding

    def handle_key(self, event: KeyEvent) -> bool:
        return self.router.handle_key(event)

    def announce(
        self,
        message: str,
        priority: Union[AnnouncePriority, str, None] = None,
    ) -> Optional[Announcement]:
        return self.announcer.announce(message, priority)

    def dispose(self) -> None:
        self.announcer.dispose()
        if self._owner is not None:
            self._registry.release(self._owner)
        logger.debug("Accessibility kit disposed")
