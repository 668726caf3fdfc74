"""
Request editor commands.

Every user edit in the request builder becomes one command, and
reduce(draft, command) returns the next draft. Drafts are immutable, so the
previous state is always still available to the caller.
"""
from typing import Literal, Union

from pydantic import BaseModel

from core import auth, rows
from core.models import AuthType, HttpMethod, RequestDraft

Table = Literal['params', 'headers']


class SetMethod(BaseModel):
    method: HttpMethod


class SetUrl(BaseModel):
    url: str


class SetBody(BaseModel):
    body: str


class AddRow(BaseModel):
    table: Table


class UpdateRow(BaseModel):
    table: Table
    row_id: int
    field: Literal['key', 'value', 'enabled']
    value: str | bool


class RemoveRow(BaseModel):
    table: Table
    row_id: int


class SetAuthType(BaseModel):
    auth_type: AuthType


class SetAuthField(BaseModel):
    field: str
    value: str


Command = Union[SetMethod, SetUrl, SetBody, AddRow, UpdateRow, RemoveRow, SetAuthType, SetAuthField]


def reduce(draft: RequestDraft, command: Command) -> RequestDraft:
    if isinstance(command, SetMethod):
        return draft.model_copy(update={'method': command.method})
    if isinstance(command, SetUrl):
        return draft.model_copy(update={'url': command.url or ''})
    if isinstance(command, SetBody):
        return draft.model_copy(update={'body': command.body or ''})
    if isinstance(command, AddRow):
        table = getattr(draft, command.table)
        return draft.model_copy(update={command.table: rows.add_row(table)})
    if isinstance(command, UpdateRow):
        table = getattr(draft, command.table)
        updated = rows.update_row(table, command.row_id, command.field, command.value)
        return draft.model_copy(update={command.table: updated})
    if isinstance(command, RemoveRow):
        table = getattr(draft, command.table)
        return draft.model_copy(update={command.table: rows.remove_row(table, command.row_id)})
    if isinstance(command, SetAuthType):
        return draft.model_copy(update={'auth': auth.set_type(draft.auth, command.auth_type)})
    if isinstance(command, SetAuthField):
        return draft.model_copy(update={'auth': auth.set_field(draft.auth, command.field, command.value)})
    raise TypeError(f'Unknown editor command: {command!r}')
