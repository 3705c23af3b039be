"""Tests for a11y/live_announcer.py - live region announcements."""

from unittest.mock import MagicMock

import pytest

from a11y.live_announcer import AnnouncePriority, LiveAnnouncer
from a11y.scheduler import ManualScheduler


@pytest.fixture
def announcer(scheduler):
    return LiveAnnouncer(scheduler)


class TestAnnounce:
    """Tests for announce() and expiry."""

    def test_initially_empty(self, announcer):
        assert announcer.text == ""
        assert announcer.current is None

    def test_announce_sets_text_and_priority(self, announcer, scheduler):
        scheduler.advance(50)
        announcement = announcer.announce("Saved")

        assert announcer.text == "Saved"
        assert announcer.priority is AnnouncePriority.POLITE
        assert announcement.created_at == 50

    def test_assertive_priority(self, announcer):
        announcer.announce("Connection lost", "assertive")
        assert announcer.priority is AnnouncePriority.ASSERTIVE

    def test_shorthands(self, announcer):
        announcer.announce_assertive("Error")
        assert announcer.priority is AnnouncePriority.ASSERTIVE
        announcer.announce_polite("Ok")
        assert announcer.priority is AnnouncePriority.POLITE

    def test_cleared_after_1000(self, announcer, scheduler):
        announcer.announce("Saved")
        scheduler.advance(999)
        assert announcer.text == "Saved"
        scheduler.advance(1)
        assert announcer.text == ""

    def test_new_announcement_restarts_timer(self, announcer, scheduler):
        announcer.announce("A")
        scheduler.advance(200)
        announcer.announce("B")

        scheduler.advance(800)  # t = 1000
        assert announcer.text == "B"
        scheduler.advance(199)  # t = 1199
        assert announcer.text == "B"
        scheduler.advance(1)    # t = 1200
        assert announcer.text == ""

    def test_at_most_one_pending_timer(self, announcer, scheduler):
        for message in ("A", "B", "C"):
            announcer.announce(message)
        assert scheduler.pending == 1

    def test_identical_text_is_set_again(self, announcer, scheduler):
        changes = []
        announcer.state_changed.register_callback(changes.append)

        announcer.announce("Saved")
        scheduler.advance(500)
        announcer.announce("Saved")

        assert [c.message for c in changes] == ["Saved", "Saved"]
        scheduler.advance(999)
        assert announcer.text == "Saved"

    def test_expiry_notifies_none(self, announcer, scheduler):
        listener = MagicMock()
        announcer.announce("Saved")
        announcer.state_changed.register_callback(listener)
        scheduler.advance(1000)
        listener.assert_called_once_with(None)

    def test_clear_now(self, announcer, scheduler):
        announcer.announce("Saved")
        announcer.clear()
        assert announcer.text == ""
        assert not announcer.has_pending_clear
        assert scheduler.pending == 0


class TestConfiguration:
    """Tests for configured delay and priority."""

    def test_explicit_delay(self, scheduler):
        announcer = LiveAnnouncer(scheduler, clear_delay_ms=300)
        announcer.announce("Quick")
        scheduler.advance(300)
        assert announcer.text == ""

    def test_config_values(self, scheduler, temp_config):
        temp_config.announcement_clear_ms = 2500
        temp_config.default_priority = "assertive"

        announcer = LiveAnnouncer(scheduler, config=temp_config)
        announcer.announce("Configured")

        assert announcer.priority is AnnouncePriority.ASSERTIVE
        scheduler.advance(2000)
        assert announcer.text == "Configured"
        scheduler.advance(500)
        assert announcer.text == ""

    def test_unknown_priority_rejected(self, announcer):
        with pytest.raises(ValueError):
            announcer.announce("x", "shouting")


class TestRegionProps:
    def test_region_props(self, announcer):
        announcer.announce("Saved", AnnouncePriority.ASSERTIVE)
        assert announcer.region_props() == {
            "text": "Saved",
            "priority": "assertive",
            "atomic": True,
            "role": "status",
            "visually_hidden": True,
        }

    def test_priority_returns_to_default_when_empty(self, announcer, scheduler):
        announcer.announce("Alert", AnnouncePriority.ASSERTIVE)
        scheduler.advance(1000)
        assert announcer.region_props()["priority"] == "polite"
        assert announcer.region_props()["text"] == ""


class TestDispose:
    def test_dispose_cancels_pending_timer(self, scheduler):
        announcer = LiveAnnouncer(scheduler)
        listener = MagicMock()
        announcer.state_changed.register_callback(listener)
        announcer.announce("Saved")
        listener.reset_mock()

        announcer.dispose()

        assert scheduler.pending == 0
        assert scheduler.advance(5000) == 0
        listener.assert_not_called()

    def test_announce_after_dispose_ignored(self, announcer):
        announcer.dispose()
        assert announcer.announce("late") is None
        assert announcer.text == ""

    def test_dispose_without_timer(self):
        announcer = LiveAnnouncer(ManualScheduler())
        announcer.dispose()
        announcer.dispose()


class TestHeadlessHost:
    def test_repeated_announcements_without_advancing(self, announcer, scheduler):
        for i in range(500):
            announcer.announce(f"Item {i}")

        assert scheduler.pending == 1
        assert scheduler.queued <= 2
        scheduler.advance(1000)
        assert announcer.text == ""
