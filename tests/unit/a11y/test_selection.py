"""Tests for a11y/selection.py - identity-based selection."""

from unittest.mock import MagicMock

import pytest

from a11y.selection import SelectionModel


class Row:
    """Items compare equal by value but are distinct objects."""

    def __init__(self, label):
        self.label = label

    def __eq__(self, other):
        return isinstance(other, Row) and other.label == self.label

    __hash__ = None


@pytest.fixture
def rows():
    return [Row("a"), Row("b"), Row("c")]


class TestSingleSelect:
    def test_select_replaces(self, rows):
        model = SelectionModel()
        model.select(rows[0])
        model.select(rows[1])
        assert model.selected_items == (rows[1],)

    def test_select_twice_keeps_item(self, rows):
        model = SelectionModel()
        model.select(rows[0])
        model.select(rows[0])
        assert model.selected_items == (rows[0],)
        assert len(model) == 1

    def test_initial_selected(self, rows):
        model = SelectionModel(initial_selected=[rows[2]])
        assert model.is_selected(rows[2])

    def test_initial_selected_keeps_at_most_one(self, rows):
        model = SelectionModel(initial_selected=rows)
        assert len(model) == 1
        assert model.is_selected(rows[2])

    def test_item_props(self, rows):
        model = SelectionModel()
        model.select(rows[1])
        assert model.item_props(rows[1], 1) == {"role": "menuitem", "selected": True, "id": "item-1"}
        assert model.item_props(rows[0], 0)["selected"] is False


class TestMultiSelect:
    def test_select_toggles(self, rows):
        model = SelectionModel(multi_select=True)
        model.select(rows[0])
        model.select(rows[1])
        assert model.selected_items == (rows[0], rows[1])

        model.select(rows[0])
        assert model.selected_items == (rows[1],)

    def test_select_twice_deselects(self, rows):
        model = SelectionModel(multi_select=True)
        model.select(rows[0])
        model.select(rows[0])
        assert not model.is_selected(rows[0])
        assert len(model) == 0

    def test_role_is_option(self, rows):
        model = SelectionModel(multi_select=True)
        assert model.item_props(rows[0], 0)["role"] == "option"

    def test_initial_selected_deduplicated(self, rows):
        model = SelectionModel(multi_select=True, initial_selected=[rows[0], rows[0], rows[1]])
        assert model.selected_items == (rows[0], rows[1])


class TestIdentity:
    def test_equal_but_distinct_items_are_not_selected(self):
        model = SelectionModel(multi_select=True)
        first = Row("same")
        twin = Row("same")
        model.select(first)

        assert first == twin
        assert model.is_selected(first)
        assert not model.is_selected(twin)

    def test_deselect_uses_identity(self):
        model = SelectionModel()
        first = Row("same")
        model.select(first)
        model.deselect(Row("same"))
        assert model.is_selected(first)


class TestDeselect:
    def test_deselect_removes(self, rows):
        model = SelectionModel(multi_select=True, initial_selected=rows[:2])
        model.deselect(rows[0])
        assert model.selected_items == (rows[1],)

    def test_deselect_missing_is_no_op(self, rows):
        model = SelectionModel()
        listener = MagicMock()
        model.state_changed.register_callback(listener)
        model.deselect(rows[0])
        listener.assert_not_called()

    def test_clear(self, rows):
        model = SelectionModel(multi_select=True, initial_selected=rows)
        model.clear()
        assert model.selected_items == ()


class TestNotifications:
    def test_select_notifies_with_selection(self, rows):
        model = SelectionModel(multi_select=True)
        listener = MagicMock()
        model.state_changed.register_callback(listener)
        model.select(rows[0])
        listener.assert_called_once_with((rows[0],))
