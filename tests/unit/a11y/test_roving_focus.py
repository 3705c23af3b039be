"""Tests for a11y/roving_focus.py - roving tabindex controller."""

from unittest.mock import MagicMock

import pytest

from a11y.element_tree import Element
from a11y.events import FocusCommand, KeyEvent
from a11y.roving_focus import FocusableItem, Orientation, RovingFocusController


@pytest.fixture
def toolbar():
    return [Element("button", name=f"tool{i}") for i in range(4)]


@pytest.fixture
def roving(toolbar, pointer):
    controller = RovingFocusController(toolbar, focus_host=pointer)
    controller.focus_commands.register_callback(pointer.execute)
    return controller


def reachable_count(controller):
    return sum(
        1 for i in range(len(controller.items))
        if controller.item_props(i)["reachable_by_sequential_nav"]
    )


class TestNavigation:
    """Tests for index movement."""

    def test_starts_at_first_item(self, roving):
        assert roving.current_index == 0

    def test_move_next_and_previous(self, roving):
        roving.move_next()
        assert roving.current_index == 1
        roving.move_previous()
        assert roving.current_index == 0

    def test_move_previous_wraps_to_last(self, roving):
        roving.move_previous()
        assert roving.current_index == 3

    def test_move_next_wraps_to_first(self, roving):
        roving.move_to_last()
        roving.move_next()
        assert roving.current_index == 0

    @pytest.mark.parametrize("start", [0, 1, 2, 3])
    def test_n_moves_return_to_start(self, roving, start):
        roving.move_to_index(start)
        for _ in range(len(roving.items)):
            roving.move_next()
        assert roving.current_index == start

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range_index_is_ignored(self, roving, index):
        roving.move_to_index(2)
        assert roving.move_to_index(index) is None
        assert roving.current_index == 2

    def test_first_and_last(self, roving):
        roving.move_to_last()
        assert roving.current_index == 3
        roving.move_to_first()
        assert roving.current_index == 0

    def test_empty_collection_is_a_no_op(self, pointer):
        controller = RovingFocusController([], focus_host=pointer)
        assert controller.move_next() is None
        assert controller.move_previous() is None
        assert controller.move_to_first() is None
        assert controller.move_to_last() is None
        assert controller.current_index == 0
        assert controller.current_item is None


class TestReachability:
    """Tests for the one-tab-stop invariant."""

    def test_exactly_one_item_reachable_after_every_move(self, roving):
        assert reachable_count(roving) == 1
        for move in (roving.move_next, roving.move_next, roving.move_previous,
                     roving.move_to_last, roving.move_to_first):
            move()
            assert reachable_count(roving) == 1

    def test_current_item_has_tab_index_zero(self, roving):
        roving.move_to_index(2)
        props = [roving.item_props(i) for i in range(4)]
        assert [p["tab_index"] for p in props] == [-1, -1, 0, -1]
        assert all(p["role"] == "menuitem" for p in props)

    def test_custom_role(self, toolbar):
        controller = RovingFocusController(toolbar, role="tab")
        assert controller.item_props(0)["role"] == "tab"

    def test_focusable_items_carry_indices(self, roving, toolbar):
        items = roving.focusable_items()
        assert items[2] == FocusableItem(toolbar[2], 2)


class TestFocusCommands:
    """Tests for the focus side effect of index changes."""

    def test_index_change_focuses_new_item(self, roving, toolbar, pointer):
        command = roving.move_next()
        assert command == FocusCommand(toolbar[1], reason="roving:next")
        assert pointer.focused() is toolbar[1]

    def test_no_command_when_item_already_focused(self, roving, toolbar, pointer):
        pointer.focus(toolbar[2])
        assert roving.handle_focus(2) is None
        assert roving.current_index == 2

    def test_no_command_when_index_unchanged(self, roving):
        listener = MagicMock()
        roving.focus_commands.register_callback(listener)
        assert roving.move_to_index(0) is None
        listener.assert_not_called()

    def test_single_item_collection_does_not_refocus(self, pointer):
        only = Element("button")
        controller = RovingFocusController([only], focus_host=pointer)
        assert controller.move_next() is None

    def test_without_focus_host_moves_still_emit_commands(self, toolbar):
        controller = RovingFocusController(toolbar)
        assert controller.move_next() is not None

    def test_external_focus_updates_index_without_command(self, toolbar):
        controller = RovingFocusController(toolbar)
        commands = MagicMock()
        states = []
        controller.focus_commands.register_callback(commands)
        controller.state_changed.register_callback(states.append)

        assert controller.handle_focus(2) is None

        assert controller.current_index == 2
        assert controller.item_props(2)["tab_index"] == 0
        assert [s.current_index for s in states] == [2]
        commands.assert_not_called()

    def test_external_focus_out_of_range_ignored(self, roving):
        roving.handle_focus(9)
        assert roving.current_index == 0

    def test_state_changed_notifies_snapshot(self, roving, toolbar):
        states = []
        roving.state_changed.register_callback(states.append)
        roving.move_to_last()

        assert len(states) == 1
        assert states[0].current_index == 3
        assert states[0].current_item is toolbar[3]


class TestKeyHandling:
    """Tests for orientation-aware key mapping."""

    def test_horizontal_arrows(self, roving):
        event = KeyEvent("ArrowRight")
        roving.handle_key(event)
        assert roving.current_index == 1
        assert event.default_prevented

        roving.handle_key(KeyEvent("ArrowLeft"))
        assert roving.current_index == 0

    def test_horizontal_ignores_vertical_arrows(self, roving):
        event = KeyEvent("ArrowDown")
        assert roving.handle_key(event) is None
        assert roving.current_index == 0
        assert not event.default_prevented

    def test_vertical_arrows(self, toolbar, pointer):
        controller = RovingFocusController(toolbar, "vertical", focus_host=pointer)
        controller.handle_key(KeyEvent("ArrowDown"))
        assert controller.current_index == 1
        controller.handle_key(KeyEvent("ArrowUp"))
        controller.handle_key(KeyEvent("ArrowUp"))
        assert controller.current_index == 3

        event = KeyEvent("ArrowRight")
        controller.handle_key(event)
        assert controller.current_index == 3
        assert not event.default_prevented

    @pytest.mark.parametrize("orientation", ["horizontal", "vertical"])
    def test_home_and_end_in_any_orientation(self, toolbar, orientation):
        controller = RovingFocusController(toolbar, orientation)
        controller.handle_key(KeyEvent("End"))
        assert controller.current_index == 3
        controller.handle_key(KeyEvent("Home"))
        assert controller.current_index == 0

    def test_handle_key_returns_command(self, roving, toolbar):
        command = roving.handle_key(KeyEvent("End"))
        assert command is not None
        assert command.target is toolbar[3]

    def test_item_key_handler_routes_to_controller(self, roving):
        roving.item_props(0)["key_handler"](KeyEvent("ArrowRight"))
        assert roving.current_index == 1

    def test_item_on_focus_moves_index(self, toolbar):
        controller = RovingFocusController(toolbar)
        commands = MagicMock()
        controller.focus_commands.register_callback(commands)

        controller.item_props(3)["on_focus"]()

        assert controller.current_index == 3
        commands.assert_not_called()

    def test_changing_orientation_rebuilds_bindings(self, roving):
        roving.orientation = Orientation.VERTICAL
        roving.handle_key(KeyEvent("ArrowDown"))
        assert roving.current_index == 1

    def test_unknown_orientation_rejected(self, toolbar):
        with pytest.raises(ValueError):
            RovingFocusController(toolbar, "diagonal")


class TestConfiguration:
    """Tests for defaults taken from EngineConfig."""

    def test_defaults_to_horizontal(self, toolbar):
        assert RovingFocusController(toolbar).orientation is Orientation.HORIZONTAL

    def test_configured_orientation(self, toolbar, temp_config):
        temp_config.roving_orientation = "vertical"
        controller = RovingFocusController(toolbar, config=temp_config)

        assert controller.orientation is Orientation.VERTICAL
        controller.handle_key(KeyEvent("ArrowDown"))
        assert controller.current_index == 1

    def test_explicit_orientation_wins(self, toolbar, temp_config):
        temp_config.roving_orientation = "vertical"
        controller = RovingFocusController(toolbar, "horizontal", config=temp_config)
        assert controller.orientation is Orientation.HORIZONTAL

    def test_configured_key_aliases(self, toolbar, temp_config):
        temp_config.set_key_alias("PageDown", "End")
        controller = RovingFocusController(toolbar, config=temp_config)
        controller.handle_key(KeyEvent("PageDown"))
        assert controller.current_index == 3


class TestCollectionChanges:
    """Tests for set_items()."""

    def test_shrinking_clamps_index(self, roving, toolbar, pointer):
        roving.move_to_last()
        command = roving.set_items(toolbar[:2])
        assert roving.current_index == 1
        assert command.target is toolbar[1]
        assert reachable_count(roving) == 1

    def test_emptying_resets_index(self, roving):
        roving.move_to_index(2)
        assert roving.set_items([]) is None
        assert roving.current_index == 0
        assert not roving.is_reachable(0)

    def test_growing_keeps_index(self, roving, toolbar):
        roving.move_to_index(2)
        roving.set_items(toolbar + [Element("button")])
        assert roving.current_index == 2


class TestDispose:
    def test_dispose_drops_listeners(self, roving):
        listener = MagicMock()
        roving.focus_commands.register_callback(listener)
        roving.dispose()
        roving.move_next()
        listener.assert_not_called()
