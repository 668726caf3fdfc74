"""
Auth configuration helpers: switching the active type, editing fields and
previewing how the credential will be sent.
"""
import base64

from core.models import AuthConfig, AUTH_TYPES

DEFAULT_BEARER_PREFIX = 'Bearer'

# fields shown in the editor for each auth type
FIELDS_BY_TYPE: dict[str, tuple[str, ...]] = {
    'none': (),
    'basic': ('basic_username', 'basic_password'),
    'bearer': ('bearer_token', 'bearer_prefix'),
    'apikey': ('api_key_location', 'api_key_key', 'api_key_value'),
}


def set_type(auth: AuthConfig, new_type: str) -> AuthConfig:
    if new_type not in AUTH_TYPES:
        raise ValueError(f'Unknown auth type: {new_type!r}')
    return auth.model_copy(update={'type': new_type})


def set_field(auth: AuthConfig, field: str, value: str) -> AuthConfig:
    if field == 'type':
        return set_type(auth, value)
    if field not in AuthConfig.model_fields:
        raise ValueError(f'Unknown auth field: {field!r}')
    if field == 'api_key_location':
        if value not in ('header', 'query'):
            raise ValueError(f'API key location must be header or query, got {value!r}')
    else:
        value = value or ''
    return auth.model_copy(update={field: value})


def visible_fields(auth: AuthConfig) -> dict[str, str]:
    return {name: getattr(auth, name) for name in FIELDS_BY_TYPE[auth.type]}


def basic_credentials(username: str, password: str) -> str:
    return base64.b64encode(f'{username}:{password}'.encode('utf-8')).decode('ascii')


def bearer_prefix(auth: AuthConfig) -> str:
    return auth.bearer_prefix or DEFAULT_BEARER_PREFIX


def describe(auth: AuthConfig) -> str:
    """One-line preview of how the credential goes over the wire."""
    if auth.type == 'basic':
        return f'Authorization: Basic {basic_credentials(auth.basic_username, auth.basic_password)}'
    if auth.type == 'bearer':
        return f'Authorization: {bearer_prefix(auth)} {auth.bearer_token or "<token>"}'
    if auth.type == 'apikey':
        key = auth.api_key_key or '<key>'
        value = auth.api_key_value or '<value>'
        if auth.api_key_location == 'query':
            return f'?{key}={value}'
        return f'{key}: {value}'
    return 'No authentication'
