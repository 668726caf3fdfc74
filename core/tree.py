"""
Collection tree operations.

Every function takes a Collection and returns a rewritten copy, so a failed
operation never leaves a half-edited tree behind. Sibling order is insertion
order; nothing here re-sorts.
"""
import time
from typing import Iterator

from core.errors import NotFoundError, InvalidMoveError
from core.models import Collection, CollectionItem, RequestDraft, new_id


def iter_items(items: list[CollectionItem]) -> Iterator[CollectionItem]:
    """Depth-first walk, parents before their children."""
    for item in items:
        yield item
        if item.type == 'folder':
            yield from iter_items(item.children)


def _locate(items: list[CollectionItem], item_id: str) -> tuple[list[CollectionItem], int] | None:
    """Returns (sibling list, index) of the item, or None."""
    for idx, item in enumerate(items):
        if item.id == item_id:
            return items, idx
        if item.type == 'folder':
            found = _locate(item.children, item_id)
            if found is not None:
                return found
    return None


def find_item(collection: Collection, item_id: str) -> CollectionItem:
    found = _locate(collection.items, item_id)
    if found is None:
        raise NotFoundError(f'Item {item_id} not found')
    siblings, idx = found
    return siblings[idx]


def _children_of(collection: Collection, parent_id: str) -> list[CollectionItem]:
    if not parent_id:
        return collection.items
    found = _locate(collection.items, parent_id)
    if found is None or found[0][found[1]].type != 'folder':
        raise NotFoundError('parent folder not found')
    siblings, idx = found
    return siblings[idx].children


def _append(collection: Collection, parent_id: str, item: CollectionItem) -> tuple[Collection, CollectionItem]:
    col = collection.model_copy(deep=True)
    _children_of(col, parent_id).append(item)
    return col, item


def create_folder(collection: Collection, parent_id: str, name: str) -> tuple[Collection, CollectionItem]:
    return _append(collection, parent_id, CollectionItem(name=name, type='folder'))


def create_request(collection: Collection, parent_id: str, name: str) -> tuple[Collection, CollectionItem]:
    return _append(collection, parent_id, CollectionItem(name=name, type='request', request=RequestDraft()))


def rename_collection(collection: Collection, name: str) -> Collection:
    name = (name or '').strip()
    col = collection.model_copy(deep=True)
    if not name or name == collection.name:
        return col
    col.name = name
    col.updated_at = time.time()
    return col


def rename_item(collection: Collection, item_id: str, name: str) -> Collection:
    col = collection.model_copy(deep=True)
    item = find_item(col, item_id)
    name = (name or '').strip()
    if name and name != item.name:
        item.name = name
        item.updated_at = time.time()
    return col


def update_request_content(collection: Collection, item_id: str, draft: RequestDraft) -> Collection:
    col = collection.model_copy(deep=True)
    item = find_item(col, item_id)
    if item.type != 'request':
        raise NotFoundError(f'Request {item_id} not found')
    item.request = draft
    item.updated_at = time.time()
    return col


def delete_item(collection: Collection, item_id: str) -> Collection:
    """Removes the item; a folder goes together with everything under it."""
    col = collection.model_copy(deep=True)
    found = _locate(col.items, item_id)
    if found is None:
        raise NotFoundError(f'Item {item_id} not found')
    siblings, idx = found
    del siblings[idx]
    return col


def move_item(collection: Collection, item_id: str, new_parent_id: str) -> Collection:
    col = collection.model_copy(deep=True)
    found = _locate(col.items, item_id)
    if found is None:
        raise NotFoundError(f'Item {item_id} not found')
    siblings, idx = found
    item = siblings[idx]
    if new_parent_id and item.type == 'folder':
        if any(sub.id == new_parent_id for sub in iter_items([item])):
            raise InvalidMoveError(f'Cannot move "{item.name}" into itself')
    target = _children_of(col, new_parent_id)
    del siblings[idx]
    target.append(item)
    return col


def duplicate_item(collection: Collection, item_id: str) -> tuple[Collection, CollectionItem]:
    """Copies a request next to the original."""
    col = collection.model_copy(deep=True)
    found = _locate(col.items, item_id)
    if found is None:
        raise NotFoundError(f'Item {item_id} not found')
    siblings, idx = found
    original = siblings[idx]
    if original.type != 'request':
        raise InvalidMoveError('Only requests can be duplicated')
    now = time.time()
    copy = original.model_copy(update={
        'id': new_id(),
        'name': original.name + ' (copy)',
        'created_at': now,
        'updated_at': now,
    })
    siblings.insert(idx + 1, copy)
    return col, copy
