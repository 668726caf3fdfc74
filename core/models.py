import uuid
import time
from typing import Literal
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']
AUTH_TYPES = ['none', 'basic', 'bearer', 'apikey']

HttpMethod = Literal['GET', 'POST', 'PUT', 'PATCH', 'DELETE']
AuthType = Literal['none', 'basic', 'bearer', 'apikey']


def new_id() -> str:
    return str(uuid.uuid4())


class KeyValueRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = ""
    value: str = ""
    enabled: bool = True
    id: int = 0


class AuthConfig(BaseModel):
    """
    Authentication settings of a request.
    Holds the fields of every auth type at once; `type` selects the active one,
    so switching types back and forth keeps what the user typed.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: AuthType = "none"
    basic_username: str = Field(default="", alias="basicUsername")
    basic_password: str = Field(default="", alias="basicPassword")
    bearer_token: str = Field(default="", alias="bearerToken")
    bearer_prefix: str = Field(default="", alias="bearerPrefix")
    api_key_key: str = Field(default="", alias="apiKeyKey")
    api_key_value: str = Field(default="", alias="apiKeyValue")
    api_key_location: Literal["header", "query"] = Field(default="header", alias="apiKeyLocation")


def _default_rows() -> list[KeyValueRow]:
    return [KeyValueRow(id=1)]


class RequestDraft(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: HttpMethod = "GET"
    url: str = ""
    params: list[KeyValueRow] = Field(default_factory=_default_rows)
    headers: list[KeyValueRow] = Field(default_factory=_default_rows)
    body: str = ""
    auth: AuthConfig = Field(default_factory=AuthConfig)

    @field_validator('params', 'headers')
    @classmethod
    def _normalize_rows(cls, rows: list[KeyValueRow]) -> list[KeyValueRow]:
        # files written by older versions carry no row ids
        if not rows:
            return _default_rows()
        ids = [r.id for r in rows]
        if min(ids) < 1 or len(set(ids)) != len(ids):
            return [r.model_copy(update={'id': i}) for i, r in enumerate(rows, start=1)]
        return rows


class CollectionItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: str
    type: Literal["folder", "request"]
    children: list["CollectionItem"] | None = None
    request: RequestDraft | None = None
    created_at: float = Field(default_factory=time.time, alias="createdAt")
    updated_at: float = Field(default_factory=time.time, alias="updatedAt")

    @model_validator(mode='after')
    def _check_payload(self):
        if self.type == 'folder':
            if self.request is not None:
                raise ValueError('a folder cannot carry a request')
            if self.children is None:
                self.children = []
        else:
            if self.children is not None:
                raise ValueError('a request cannot have children')
            if self.request is None:
                self.request = RequestDraft()
        return self


class Collection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id)
    name: str
    items: list[CollectionItem] = Field(default_factory=list)
    file_path: str = Field(default="", exclude=True)
    created_at: float = Field(default_factory=time.time, alias="createdAt")
    updated_at: float = Field(default_factory=time.time, alias="updatedAt")


class OutgoingRequestSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str
    headers: list[tuple[str, str]] = Field(default_factory=list)
    body: str = ""


class HTTPResult(BaseModel):
    """What the HTTP sender hands back: a response or a transport error."""

    status: int = 0
    status_text: str = ""
    time: int = 0
    size: int = 0
    body: str = ""
    headers: list[tuple[str, str]] = Field(default_factory=list)
    error: str | None = None


class ResponseView(BaseModel):
    success: bool = False
    status: int = 0
    status_line: str = ""
    time: str = ""
    size: str = ""
    body: str = ""
    is_json: bool = False
    headers: list[tuple[str, str]] = Field(default_factory=list)
    error: str | None = None
