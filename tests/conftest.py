"""
Pytest configuration and shared fixtures for Campfire tests.
"""
import pytest

from core.models import KeyValueRow
from core.store import CollectionStore


def make_rows(*rows) -> list[KeyValueRow]:
    """make_rows(('k', 'v'), ('k2', 'v2', False)) -> rows with ids 1..n"""
    result = []
    for i, row in enumerate(rows, start=1):
        key, value, *rest = row
        enabled = rest[0] if rest else True
        result.append(KeyValueRow(key=key, value=value, enabled=enabled, id=i))
    return result


@pytest.fixture
def collections_dir(tmp_path):
    return tmp_path / "collections"


@pytest.fixture
def store(collections_dir) -> CollectionStore:
    return CollectionStore(collections_dir)


@pytest.fixture
def demo(store):
    """An open, saved, empty collection called Demo."""
    return store.create("Demo")
