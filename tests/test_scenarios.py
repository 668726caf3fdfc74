"""
End-to-end flows through store, tree, editor and assembler.
"""
import pytest

from core import editor
from core.assembler import assemble
from core.errors import NotFoundError
from core.models import AuthConfig, RequestDraft
from conftest import make_rows


def test_demo_collection_login_request(store):
    demo = store.create("Demo")
    auth_folder = store.create_folder(demo.id, "", "Auth")
    login = store.create_request(demo.id, auth_folder.id, "Login")

    draft = RequestDraft(
        method="POST",
        url="https://api.test/login",
        headers=make_rows(("Content-Type", "application/json")),
        body='{"u":"x"}',
    )
    store.update_item(demo.id, login.id, request=draft)

    stored = store.get_item(demo.id, login.id).request
    spec = assemble(stored)

    assert spec.method == "POST"
    assert spec.url == "https://api.test/login"
    assert spec.headers == [("Content-Type", "application/json")]
    assert spec.body == '{"u":"x"}'


def test_apikey_in_query_scenario():
    draft = RequestDraft(url="https://x/y?z=1")
    draft = editor.reduce(draft, editor.SetAuthType(auth_type="apikey"))
    draft = editor.reduce(draft, editor.SetAuthField(field="api_key_location", value="query"))
    draft = editor.reduce(draft, editor.SetAuthField(field="api_key_key", value="token"))
    draft = editor.reduce(draft, editor.SetAuthField(field="api_key_value", value="abc"))

    assert assemble(draft).url == "https://x/y?z=1&token=abc"


def test_deleting_folder_drops_requests_from_reopened_file(store):
    demo = store.create("Demo")
    folder = store.create_folder(demo.id, "", "Auth")
    inner = store.create_folder(demo.id, folder.id, "Inner")
    login = store.create_request(demo.id, inner.id, "Login")
    store.delete_item(demo.id, folder.id)

    path = store.get(demo.id).file_path
    store.close(demo.id)
    reopened = store.open(path)

    assert reopened.items == []
    for item_id in (folder.id, inner.id, login.id):
        with pytest.raises(NotFoundError):
            store.get_item(demo.id, item_id)


def test_inactive_auth_payload_survives_save_and_reopen(store):
    demo = store.create("Demo")
    item = store.create_request(demo.id, "", "Ping")
    auth = AuthConfig(type="none", bearer_token="kept", basic_username="alice")
    store.update_item(demo.id, item.id, request=RequestDraft(url="https://x", auth=auth))

    path = store.get(demo.id).file_path
    store.close(demo.id)
    store.open(path)

    assert store.get_item(demo.id, item.id).request.auth == auth
