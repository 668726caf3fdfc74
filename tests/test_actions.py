from core.actions import run_action
from core.errors import NotFoundError, UserCancelled


def test_success_carries_value():
    result = run_action("Add", lambda a, b: a + b, 2, b=3)
    assert result.ok
    assert result.value == 5
    assert result.error is None


def test_campfire_error_becomes_message():
    def fail():
        raise NotFoundError("collection not open")

    result = run_action("Get", fail)
    assert not result.ok
    assert result.error == "collection not open"
    assert not result.cancelled


def test_cancellation_is_not_an_error():
    def cancel():
        raise UserCancelled()

    result = run_action("Open", cancel)
    assert result.cancelled
    assert not result.ok
    assert result.error is None


def test_stale_item_lookup_is_reported(store, demo):
    result = run_action("Load item", store.get_item, demo.id, "gone")
    assert not result.ok
    assert "gone" in result.error
