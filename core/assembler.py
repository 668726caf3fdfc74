"""
Turns an edited RequestDraft into the OutgoingRequestSpec handed to the HTTP sender.

Steps:
  1. drop disabled rows and rows without a key
  2. append params to the URL query string
  3. apply auth (header or query)
  4. pass the body through untouched
"""
from urllib.parse import urlencode, urlsplit, urlunsplit

from core import auth as auth_helpers
from core.models import AuthConfig, OutgoingRequestSpec, RequestDraft
from core.rows import active_rows


def append_query(url: str, pairs: list[tuple[str, str]]) -> str:
    """Append pairs to the query string, keeping the existing query text as-is."""
    if not pairs:
        return url
    scheme, netloc, path, query, fragment = urlsplit(url)
    extra = urlencode(pairs)
    query = f'{query}&{extra}' if query else extra
    return urlunsplit((scheme, netloc, path, query, fragment))


def _set_header(headers: list[tuple[str, str]], key: str, value: str) -> list[tuple[str, str]]:
    # header names are case-insensitive; the injected one replaces all user copies
    kept = [(k, v) for k, v in headers if k.lower() != key.lower()]
    kept.append((key, value))
    return kept


def apply_auth(auth: AuthConfig, url: str, headers: list[tuple[str, str]]) -> tuple[str, list[tuple[str, str]]]:
    if auth.type == 'basic':
        if auth.basic_username or auth.basic_password:
            creds = auth_helpers.basic_credentials(auth.basic_username, auth.basic_password)
            headers = _set_header(headers, 'Authorization', f'Basic {creds}')
    elif auth.type == 'bearer':
        if auth.bearer_token:
            headers = _set_header(headers, 'Authorization',
                                  f'{auth_helpers.bearer_prefix(auth)} {auth.bearer_token}')
    elif auth.type == 'apikey':
        if auth.api_key_key:
            if auth.api_key_location == 'query':
                url = append_query(url, [(auth.api_key_key, auth.api_key_value)])
            else:
                headers = _set_header(headers, auth.api_key_key, auth.api_key_value)
    return url, headers


def assemble(draft: RequestDraft) -> OutgoingRequestSpec:
    params = [(r.key, r.value) for r in active_rows(draft.params)]
    headers = [(r.key, r.value) for r in active_rows(draft.headers)]

    url = append_query(draft.url, params)
    url, headers = apply_auth(draft.auth, url, headers)

    return OutgoingRequestSpec(method=draft.method, url=url, headers=headers, body=draft.body)


def validate(draft: RequestDraft) -> list[str]:
    """Problems that block a send. Empty list means the draft can go out."""
    problems = []
    if not draft.url.strip():
        problems.append('URL is required')
    return problems
