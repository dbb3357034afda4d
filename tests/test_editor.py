"""Unit tests for taskpad.editor - cursor and field navigation."""

import pytest

from taskpad.editor import FieldEditor

from .helpers import type_text

NAMES = ["name", "date", "repeats"]


class TestInsertAndDelete:

    def test_typing_appends_and_advances_cursor(self):
        ed = FieldEditor(NAMES)
        type_text(ed, "abc")
        assert ed.current_value() == "abc"
        assert ed.cursor == 3

    def test_insert_in_middle(self):
        ed = FieldEditor(NAMES, {"name": "ac"})
        ed.set_cursor(1)
        ed.insert_char("b")
        assert ed.current_value() == "abc"
        assert ed.cursor == 2

    def test_any_character_is_accepted(self):
        ed = FieldEditor(NAMES)
        ed.insert_char("\x07")
        ed.insert_char("é")
        assert ed.current_value() == "\x07é"
        assert ed.cursor == 2

    def test_multi_char_insert_advances_by_length(self):
        ed = FieldEditor(NAMES, {"name": "ad"})
        ed.set_cursor(1)
        ed.insert_char("bc")
        assert ed.current_value() == "abcd"
        assert ed.cursor == 3
        ed.insert_char("")
        assert ed.cursor == 3

    @pytest.mark.parametrize("initial", ["", "abc", "héllo"])
    def test_insert_then_delete_restores_state(self, initial):
        for pos in range(len(initial) + 1):
            ed = FieldEditor(NAMES, {"name": initial})
            ed.set_cursor(pos)
            ed.insert_char("x")
            ed.delete_char_before_cursor()
            assert ed.current_value() == initial
            assert ed.cursor == pos

    def test_delete_removes_char_before_cursor(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(2)
        ed.delete_char_before_cursor()
        assert ed.current_value() == "ac"
        assert ed.cursor == 1

    def test_delete_at_start_is_noop(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(0)
        ed.delete_char_before_cursor()
        assert ed.current_value() == "abc"
        assert ed.cursor == 0

    def test_delete_on_empty_buffer_is_noop(self):
        ed = FieldEditor(NAMES)
        ed.delete_char_before_cursor()
        assert ed.current_value() == ""
        assert ed.cursor == 0

    def test_deleting_last_char_leaves_cursor_at_zero(self):
        ed = FieldEditor(NAMES)
        ed.insert_char("a")
        ed.delete_char_before_cursor()
        assert ed.current_value() == ""
        assert ed.cursor == 0

    def test_edits_only_touch_active_field(self):
        ed = FieldEditor(NAMES, {"name": "Gym"})
        ed.next_field()
        type_text(ed, "01-11-2026")
        assert ed.values() == {"name": "Gym", "date": "01-11-2026", "repeats": ""}


class TestMoveCursor:

    @pytest.mark.parametrize(
        "deltas",
        [
            [-1, -5, 3, 100, -2, 0, -100, 1],
            [5, 5, -1, -1, -1, -1, -1, -1, -1],
            [-(2 ** 31), 2 ** 31, -3],
        ],
    )
    def test_cursor_stays_within_buffer(self, deltas):
        ed = FieldEditor(NAMES, {"name": "hello"})
        ed.set_cursor(2)
        for d in deltas:
            ed.move_cursor(d)
            assert 0 <= ed.cursor <= len(ed.current_value())

    def test_single_steps(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(3)
        ed.move_cursor(-1)
        assert ed.cursor == 2
        ed.move_cursor(1)
        assert ed.cursor == 3

    def test_large_negative_clamps_to_zero(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(2)
        ed.move_cursor(-5)
        assert ed.cursor == 0

    def test_large_positive_clamps_to_end(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(0)
        ed.move_cursor(10)
        assert ed.cursor == 3

    def test_jump_to_start_and_end(self):
        ed = FieldEditor(NAMES, {"name": "abcdef"})
        ed.set_cursor(3)
        ed.move_cursor(-len(ed.current_value()))
        assert ed.cursor == 0
        ed.move_cursor(len(ed.current_value()))
        assert ed.cursor == 6

    def test_set_cursor_clamps(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(99)
        assert ed.cursor == 3
        ed.set_cursor(-4)
        assert ed.cursor == 0


class TestFieldNavigation:

    def test_next_field_moves_cursor_to_end(self):
        ed = FieldEditor(NAMES, {"name": "ab", "date": "12345"})
        ed.next_field()
        assert ed.active_index == 1
        assert ed.cursor == 5

    def test_prev_field_does_not_remember_old_cursor(self):
        ed = FieldEditor(NAMES, {"name": "abcd", "date": "x"})
        ed.set_cursor(1)
        ed.next_field()
        ed.prev_field()
        assert ed.active_index == 0
        assert ed.cursor == 4

    def test_next_at_last_field_is_noop(self):
        ed = FieldEditor(NAMES, {"repeats": "Daily"})
        ed.next_field()
        ed.next_field()
        ed.set_cursor(2)
        ed.next_field()
        assert ed.active_index == 2
        assert ed.cursor == 2

    def test_prev_at_first_field_is_noop(self):
        ed = FieldEditor(NAMES, {"name": "abc"})
        ed.set_cursor(1)
        ed.prev_field()
        assert ed.active_index == 0
        assert ed.cursor == 1

    def test_field_count_and_lookup(self):
        ed = FieldEditor(NAMES, {"date": "today"})
        assert ed.field_count == 3
        assert ed.value("date") == "today"
        assert list(ed.values()) == NAMES
        with pytest.raises(KeyError):
            ed.value("colour")

    def test_requires_fields(self):
        with pytest.raises(ValueError):
            FieldEditor([])
