"""
Key/value row lists used by the Params and Headers editors.
Every function returns a new list; the input list is never touched.
"""
from core.models import KeyValueRow

ROW_FIELDS = ('key', 'value', 'enabled')


def next_row_id(rows: list[KeyValueRow]) -> int:
    """Ids grow monotonically: a deleted row's id is never handed out again while a higher one exists."""
    return max((r.id for r in rows), default=0) + 1


def add_row(rows: list[KeyValueRow]) -> list[KeyValueRow]:
    return [*rows, KeyValueRow(id=next_row_id(rows))]


def update_row(rows: list[KeyValueRow], row_id: int, field: str, value) -> list[KeyValueRow]:
    if field not in ROW_FIELDS:
        raise ValueError(f'Unknown row field: {field!r}')
    if field == 'enabled':
        value = bool(value)
    else:
        value = '' if value is None else str(value)
    return [r.model_copy(update={field: value}) if r.id == row_id else r for r in rows]


def remove_row(rows: list[KeyValueRow], row_id: int) -> list[KeyValueRow]:
    # the editor always shows at least one row
    if len(rows) <= 1:
        return list(rows)
    return [r for r in rows if r.id != row_id]


def active_rows(rows: list[KeyValueRow]) -> list[KeyValueRow]:
    """Rows that take part in a request: enabled and with a key."""
    return [r for r in rows if r.enabled and r.key]
