"""
Tests for key/value row lists.
"""
import pytest
from hypothesis import given, strategies as st

from core.models import KeyValueRow
from core.rows import add_row, update_row, remove_row, next_row_id, active_rows
from conftest import make_rows


row_ops = st.lists(
    st.one_of(
        st.just(("add", 0)),
        st.tuples(st.just("remove"), st.integers(min_value=0, max_value=25)),
    ),
    max_size=40,
)


class TestAddRow:

    def test_add_appends_empty_enabled_row(self):
        rows = add_row([KeyValueRow(id=1)])

        assert len(rows) == 2
        assert rows[-1] == KeyValueRow(key="", value="", enabled=True, id=2)

    def test_add_to_empty_list_starts_at_one(self):
        assert add_row([])[0].id == 1

    def test_add_does_not_touch_input(self):
        rows = [KeyValueRow(id=1)]
        add_row(rows)
        assert rows == [KeyValueRow(id=1)]

    def test_freed_id_is_not_reused(self):
        rows = make_rows(("a", "1"), ("b", "2"), ("c", "3"))
        rows = remove_row(rows, 2)
        rows = add_row(rows)

        assert [r.id for r in rows] == [1, 3, 4]

    @given(st.integers(min_value=1, max_value=30))
    def test_add_sequence_yields_increasing_unique_ids(self, count):
        rows = [KeyValueRow(id=1)]
        for _ in range(count):
            rows = add_row(rows)
        ids = [r.id for r in rows]

        assert ids == sorted(ids)
        assert len(set(ids)) == len(ids)

    @given(row_ops)
    def test_each_new_id_exceeds_all_existing(self, ops):
        rows = [KeyValueRow(id=1)]
        for op, row_id in ops:
            if op == "add":
                before = {r.id for r in rows}
                rows = add_row(rows)
                assert rows[-1].id > max(before)
            else:
                rows = remove_row(rows, row_id)
            assert len({r.id for r in rows}) == len(rows)


class TestUpdateRow:

    def test_update_replaces_matching_row(self):
        rows = make_rows(("a", "1"), ("b", "2"))
        rows = update_row(rows, 2, "value", "changed")

        assert rows[1].value == "changed"
        assert rows[0].value == "1"

    def test_update_enabled_coerces_to_bool(self):
        rows = update_row(make_rows(("a", "1")), 1, "enabled", 0)
        assert rows[0].enabled is False

    def test_unknown_id_is_a_noop(self):
        rows = make_rows(("a", "1"))
        assert update_row(rows, 99, "key", "x") == rows

    def test_unknown_field_raises(self):
        with pytest.raises(ValueError, match="Unknown row field"):
            update_row(make_rows(("a", "1")), 1, "colour", "red")

    def test_update_keeps_order_and_ids(self):
        rows = make_rows(("a", "1"), ("b", "2"), ("c", "3"))
        updated = update_row(rows, 2, "key", "B")
        assert [r.id for r in updated] == [1, 2, 3]
        assert [r.key for r in updated] == ["a", "B", "c"]


class TestRemoveRow:

    def test_remove_matching_row(self):
        rows = remove_row(make_rows(("a", "1"), ("b", "2")), 1)
        assert [r.key for r in rows] == ["b"]

    def test_last_row_is_never_removed(self):
        rows = make_rows(("a", "1"))
        assert remove_row(rows, 1) == rows

    def test_remove_unknown_id_keeps_everything(self):
        rows = make_rows(("a", "1"), ("b", "2"))
        assert remove_row(rows, 42) == rows

    @given(row_ops)
    def test_remove_never_empties_the_list(self, ops):
        rows = [KeyValueRow(id=1)]
        for op, row_id in ops:
            rows = add_row(rows) if op == "add" else remove_row(rows, row_id)
            assert len(rows) >= 1


def test_next_row_id_uses_max_plus_one():
    rows = [KeyValueRow(id=7), KeyValueRow(id=3)]
    assert next_row_id(rows) == 8


def test_active_rows_drops_disabled_and_keyless():
    rows = make_rows(("a", "1"), ("", "orphan"), ("c", "3", False), ("d", ""))
    assert [r.key for r in active_rows(rows)] == ["a", "d"]
