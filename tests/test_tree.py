"""
Tests for collection tree operations.
"""
import pytest

import core.tree as tree
from core.errors import NotFoundError, InvalidMoveError
from core.models import Collection, KeyValueRow, RequestDraft


@pytest.fixture
def clock(monkeypatch):
    """Deterministic time.time() for timestamp assertions."""
    now = [1000.0]

    def fake_time():
        return now[0]

    monkeypatch.setattr(tree.time, "time", fake_time)
    return now


@pytest.fixture
def nested():
    """Demo/
         Auth/
           Login
           Tokens/
             Refresh
         Health
    """
    col = Collection(name="Demo")
    col, auth = tree.create_folder(col, "", "Auth")
    col, login = tree.create_request(col, auth.id, "Login")
    col, tokens = tree.create_folder(col, auth.id, "Tokens")
    col, refresh = tree.create_request(col, tokens.id, "Refresh")
    col, health = tree.create_request(col, "", "Health")
    ids = {"auth": auth.id, "login": login.id, "tokens": tokens.id, "refresh": refresh.id, "health": health.id}
    return col, ids


class TestCreate:

    def test_create_folder_at_root(self):
        col, folder = tree.create_folder(Collection(name="c"), "", "Auth")

        assert col.items == [folder]
        assert folder.type == "folder"
        assert folder.children == []
        assert folder.request is None

    def test_create_request_has_default_draft(self):
        col, item = tree.create_request(Collection(name="c"), "", "Login")
        draft = item.request

        assert item.children is None
        assert draft.method == "GET"
        assert draft.url == "" and draft.body == ""
        assert draft.auth.type == "none"
        assert draft.params == [KeyValueRow(id=1)]
        assert draft.headers == [KeyValueRow(id=1)]

    def test_input_collection_is_not_modified(self):
        original = Collection(name="c")
        tree.create_folder(original, "", "Auth")
        assert original.items == []

    def test_nested_creation(self, nested):
        col, ids = nested
        auth = tree.find_item(col, ids["auth"])
        assert [c.name for c in auth.children] == ["Login", "Tokens"]
        assert tree.find_item(col, ids["refresh"]).name == "Refresh"

    def test_unknown_parent_raises(self):
        with pytest.raises(NotFoundError, match="parent folder not found"):
            tree.create_folder(Collection(name="c"), "nope", "x")

    def test_request_cannot_be_a_parent(self, nested):
        col, ids = nested
        with pytest.raises(NotFoundError):
            tree.create_request(col, ids["login"], "Child")


class TestFind:

    def test_find_unknown_raises(self, nested):
        col, _ = nested
        with pytest.raises(NotFoundError):
            tree.find_item(col, "missing")

    def test_iter_items_is_depth_first(self, nested):
        col, _ = nested
        assert [i.name for i in tree.iter_items(col.items)] == ["Auth", "Login", "Tokens", "Refresh", "Health"]


class TestRename:

    def test_rename_collection_refreshes_timestamp(self, clock):
        col = Collection(name="Demo", updated_at=1.0)
        renamed = tree.rename_collection(col, "Renamed")

        assert renamed.name == "Renamed"
        assert renamed.updated_at == 1000.0

    def test_rename_collection_to_same_name_is_noop(self, clock):
        col = Collection(name="Demo", updated_at=1.0)
        renamed = tree.rename_collection(col, "Demo")

        assert renamed == col
        assert renamed.updated_at == 1.0

    def test_rename_to_blank_is_noop(self, clock):
        col = Collection(name="Demo", updated_at=1.0)
        assert tree.rename_collection(col, "   ") == col

    def test_rename_item(self, nested, clock):
        col, ids = nested
        col = tree.rename_item(col, ids["login"], "Sign in")
        item = tree.find_item(col, ids["login"])

        assert item.name == "Sign in"
        assert item.updated_at == 1000.0

    def test_rename_item_keeps_sibling_order(self, nested):
        col, ids = nested
        col = tree.rename_item(col, ids["login"], "Zzz")
        auth = tree.find_item(col, ids["auth"])
        assert [c.name for c in auth.children] == ["Zzz", "Tokens"]

    def test_rename_item_same_name_is_noop(self, nested, clock):
        col, ids = nested
        assert tree.rename_item(col, ids["login"], "Login") == col

    def test_rename_unknown_item_raises(self, nested):
        col, _ = nested
        with pytest.raises(NotFoundError):
            tree.rename_item(col, "missing", "x")


class TestUpdateContent:

    def test_replaces_draft_and_keeps_name(self, nested, clock):
        col, ids = nested
        draft = RequestDraft(method="POST", url="https://api.test/login")
        col = tree.update_request_content(col, ids["login"], draft)
        item = tree.find_item(col, ids["login"])

        assert item.request == draft
        assert item.name == "Login"
        assert item.updated_at == 1000.0

    def test_folder_has_no_content(self, nested):
        col, ids = nested
        with pytest.raises(NotFoundError):
            tree.update_request_content(col, ids["auth"], RequestDraft())


class TestDelete:

    def test_delete_folder_removes_descendants(self, nested):
        col, ids = nested
        col = tree.delete_item(col, ids["auth"])

        for key in ("auth", "login", "tokens", "refresh"):
            with pytest.raises(NotFoundError):
                tree.find_item(col, ids[key])
        assert [i.name for i in col.items] == ["Health"]

    def test_delete_nested_request(self, nested):
        col, ids = nested
        col = tree.delete_item(col, ids["refresh"])
        assert tree.find_item(col, ids["tokens"]).children == []

    def test_delete_leaves_input_untouched(self, nested):
        col, ids = nested
        tree.delete_item(col, ids["auth"])
        assert tree.find_item(col, ids["login"]).name == "Login"

    def test_delete_unknown_raises(self, nested):
        col, _ = nested
        with pytest.raises(NotFoundError):
            tree.delete_item(col, "missing")


class TestMove:

    def test_move_request_to_root_appends(self, nested):
        col, ids = nested
        col = tree.move_item(col, ids["login"], "")
        assert [i.name for i in col.items] == ["Auth", "Health", "Login"]

    def test_move_folder_with_subtree(self, nested):
        col, ids = nested
        col, archive = tree.create_folder(col, "", "Archive")
        col = tree.move_item(col, ids["tokens"], archive.id)

        assert tree.find_item(col, archive.id).children[0].name == "Tokens"
        assert tree.find_item(col, ids["refresh"]).name == "Refresh"

    def test_folder_cannot_move_into_descendant(self, nested):
        col, ids = nested
        with pytest.raises(InvalidMoveError):
            tree.move_item(col, ids["auth"], ids["tokens"])

    def test_folder_cannot_move_into_itself(self, nested):
        col, ids = nested
        with pytest.raises(InvalidMoveError):
            tree.move_item(col, ids["auth"], ids["auth"])


class TestDuplicate:

    def test_copy_is_inserted_after_original(self, nested):
        col, ids = nested
        col, copy = tree.duplicate_item(col, ids["login"])
        auth = tree.find_item(col, ids["auth"])

        assert [c.name for c in auth.children] == ["Login", "Login (copy)", "Tokens"]
        assert copy.id != ids["login"]
        assert copy.request == tree.find_item(col, ids["login"]).request

    def test_folders_cannot_be_duplicated(self, nested):
        col, ids = nested
        with pytest.raises(InvalidMoveError):
            tree.duplicate_item(col, ids["auth"])
