"""
HTTP sender: executes an OutgoingRequestSpec with httpx and reports the raw result.
Never raises for transport problems: they come back in HTTPResult.error.
"""
import time

import httpx
from loguru import logger

from core.models import HTTPResult, OutgoingRequestSpec

USER_AGENT = 'Campfire/1.0'
MAX_REDIRECTS = 10


def _with_scheme(url: str) -> str:
    if url.startswith('http://') or url.startswith('https://'):
        return url
    return 'https://' + url


def _build_headers(spec: OutgoingRequestSpec) -> list[tuple[str, str]]:
    headers = list(spec.headers)
    if 'user-agent' not in {k.lower() for k, _ in headers}:
        headers.insert(0, ('User-Agent', USER_AGENT))
    return headers


async def send(
    spec: OutgoingRequestSpec,
    *,
    ssl_verify: bool = True,
    timeout: float = 30.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> HTTPResult:
    """
    Send *spec* and return:
    HTTPResult{status, status_text, time (ms), size (bytes), body, headers, error}
    """
    if not spec.url.strip():
        return HTTPResult(error='URL is required')

    url = _with_scheme(spec.url.strip())
    content = spec.body.encode('utf-8') if spec.body else None
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    logger.info(f'{spec.method} {url}')
    try:
        async with httpx.AsyncClient(
            verify=ssl_verify,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
            transport=transport,
        ) as client:
            response = await client.request(
                spec.method, url,
                headers=_build_headers(spec),
                content=content,
                timeout=timeout,
            )
    except httpx.InvalidURL as e:
        return HTTPResult(error=f'Invalid URL: {e}', time=elapsed_ms())
    except httpx.HTTPError as e:
        logger.warning(f'{spec.method} {url} failed: {e}')
        return HTTPResult(error=f'Request failed: {e}', time=elapsed_ms())

    raw = response.content
    logger.info(f'{spec.method} {url} -> {response.status_code} ({len(raw)} bytes)')
    return HTTPResult(
        status=response.status_code,
        status_text=response.reason_phrase,
        time=elapsed_ms(),
        size=len(raw),
        body=response.text,
        headers=list(response.headers.multi_items()),
    )
