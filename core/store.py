"""
Collection store: the collections open in this session and their .campfire files.

Each mutation runs a core.tree operation on a copy, writes the file, and only
then swaps the copy in. A failed write leaves the in-memory collection as it was.
"""
import os
import re
import time
import tempfile
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from core import tree
from core.errors import NotFoundError, StoreError, UserCancelled
from core.models import Collection, CollectionItem, RequestDraft

FILE_EXTENSION = '.campfire'
DEFAULT_COLLECTIONS_DIR = '~/.campfire/collections'

_store: 'CollectionStore | None' = None


def get_store() -> 'CollectionStore':
    global _store
    if _store is None:
        base_dir = os.getenv('CAMPFIRE_COLLECTIONS_DIR', DEFAULT_COLLECTIONS_DIR)
        _store = CollectionStore(base_dir)
    return _store


def _slug(name: str) -> str:
    slug = re.sub(r'[^A-Za-z0-9._() -]+', '_', name).strip(' .')
    return slug[:120] or 'collection'


class CollectionStore:
    def __init__(self, base_dir: str | os.PathLike):
        self.base_dir = Path(base_dir).expanduser()
        # collection id -> collection (with file_path set)
        self._open: dict[str, Collection] = {}

    # ── File I/O ─────────────────────────────────────────────────────────────

    def _load(self, path: Path) -> Collection:
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            reason = getattr(e, 'strerror', None) or e
            raise StoreError(f'Cannot read {path}: {reason}') from e
        try:
            col = Collection.model_validate_json(text)
        except ValidationError as e:
            raise StoreError(f'{path.name} is not a valid collection file: {e.error_count()} error(s)') from e
        col.file_path = str(path)
        return col

    def _write(self, col: Collection) -> None:
        path = Path(col.file_path)
        data = col.model_dump_json(by_alias=True, indent=2)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=path.parent, prefix='.' + path.name, suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(data)
                os.replace(tmp, path)
            except BaseException:
                if os.path.exists(tmp):
                    os.unlink(tmp)
                raise
        except OSError as e:
            raise StoreError(f'Cannot write {path}: {e.strerror or e}') from e

    def _in_use(self, path: Path) -> bool:
        """True if the file exists or an open collection is saved there."""
        if path.exists():
            return True
        return any(Path(col.file_path) == path for col in self._open.values())

    def _free_path(self, stem: str) -> Path:
        # Demo.campfire, Demo (2).campfire, Demo (3).campfire, ...
        target = self.base_dir / (stem + FILE_EXTENSION)
        n = 2
        while self._in_use(target):
            target = self.base_dir / f'{stem} ({n}){FILE_EXTENSION}'
            n += 1
        return target

    def _commit(self, col: Collection) -> Collection:
        col.updated_at = time.time()
        self._write(col)
        self._open[col.id] = col
        return col

    # ── Collections ──────────────────────────────────────────────────────────

    def list_open(self) -> list[Collection]:
        return list(self._open.values())

    def get(self, collection_id: str) -> Collection:
        col = self._open.get(collection_id)
        if col is None:
            raise NotFoundError('collection not open')
        return col

    def create(self, name: str, path: str = '') -> Collection:
        name = (name or '').strip()
        if not name:
            raise StoreError('Collection name cannot be empty')
        if path:
            target = Path(path).expanduser()
            if not target.suffix:
                target = target.with_suffix(FILE_EXTENSION)
            if self._in_use(target):
                raise StoreError(f'{target} already exists')
        else:
            target = self._free_path(_slug(name))
        col = Collection(name=name, file_path=str(target))
        self._commit(col)
        logger.info(f'Created collection "{name}" at {target}')
        return col

    def open(self, path: str) -> Collection:
        if not path or not path.strip():
            raise UserCancelled()
        col = self._load(Path(path.strip()).expanduser())
        self._open[col.id] = col
        logger.info(f'Opened collection "{col.name}" from {col.file_path}')
        return col

    def close(self, collection_id: str) -> None:
        col = self._open.pop(collection_id, None)
        if col is not None:
            logger.debug(f'Closed collection "{col.name}"')

    def delete(self, collection_id: str) -> None:
        col = self.get(collection_id)
        try:
            os.remove(col.file_path)
        except FileNotFoundError:
            logger.warning(f'{col.file_path} was already gone')
        except OSError as e:
            raise StoreError(f'Cannot delete {col.file_path}: {e.strerror or e}') from e
        del self._open[collection_id]
        logger.info(f'Deleted collection "{col.name}" ({col.file_path})')

    def rename(self, collection_id: str, name: str) -> Collection:
        col = self.get(collection_id)
        renamed = tree.rename_collection(col, name)
        if renamed.name == col.name:
            return col
        return self._commit(renamed)

    # ── Items ────────────────────────────────────────────────────────────────

    def create_folder(self, collection_id: str, parent_id: str, name: str) -> CollectionItem:
        col, folder = tree.create_folder(self.get(collection_id), parent_id, name)
        self._commit(col)
        return folder

    def create_request(self, collection_id: str, parent_id: str, name: str) -> CollectionItem:
        col, item = tree.create_request(self.get(collection_id), parent_id, name)
        self._commit(col)
        return item

    def get_item(self, collection_id: str, item_id: str) -> CollectionItem:
        return tree.find_item(self.get(collection_id), item_id)

    def update_item(
        self,
        collection_id: str,
        item_id: str,
        name: str = '',
        request: RequestDraft | None = None,
    ) -> CollectionItem:
        """
        name == '' keeps the current name; request is None keeps the current content.
        """
        original = self.get(collection_id)
        col = tree.rename_item(original, item_id, name)
        if request is not None:
            col = tree.update_request_content(col, item_id, request)
        if col != original:
            self._commit(col)
        return tree.find_item(self.get(collection_id), item_id)

    def delete_item(self, collection_id: str, item_id: str) -> None:
        self._commit(tree.delete_item(self.get(collection_id), item_id))

    def move_item(self, collection_id: str, item_id: str, new_parent_id: str) -> None:
        self._commit(tree.move_item(self.get(collection_id), item_id, new_parent_id))

    def duplicate_item(self, collection_id: str, item_id: str) -> CollectionItem:
        col, copy = tree.duplicate_item(self.get(collection_id), item_id)
        self._commit(col)
        return copy
