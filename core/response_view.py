"""
Display model for the response panel.
normalize() never raises: a body that does not parse as JSON (or nests too deep) is shown as plain text.
"""
import json

from core.models import HTTPResult, ResponseView

_UNITS = ('KB', 'MB', 'GB')


def format_bytes(size: int) -> str:
    if size < 1024:
        return f'{size} B'
    value = float(size)
    unit = 'B'
    for unit in _UNITS:
        value /= 1024
        if value < 1024 or unit == _UNITS[-1]:
            break
    return f'{value:.1f} {unit}'


def format_duration(ms: int) -> str:
    return f'{ms} ms'


def pretty_body(text: str) -> tuple[str, bool]:
    """Returns (display text, parsed-as-json)."""
    if not text or not text.strip():
        return text, False
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return text, False
    return json.dumps(parsed, indent=2, ensure_ascii=False), True


def error_view(message: str) -> ResponseView:
    return ResponseView(error=message or 'Unknown error')


def normalize(raw: HTTPResult) -> ResponseView:
    if raw.error:
        return error_view(raw.error)

    body, is_json = pretty_body(raw.body)
    status_line = f'{raw.status} {raw.status_text}'.strip()
    return ResponseView(
        success=raw.status < 400,
        status=raw.status,
        status_line=status_line,
        time=format_duration(raw.time),
        size=format_bytes(raw.size),
        body=body,
        is_json=is_json,
        headers=list(raw.headers),
    )
