from __future__ import annotations

import json as jsonlib
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

import httpx

from ..config import DEFAULT_TIMEOUT
from ..core.errors import (
    AuthError,
    DecodeError,
    HTTPError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TransportError,
)
from ..core.enums import Method
from ..logging import get_logger

logger = get_logger(__name__)

USER_AGENT = "alpaca-api-python"


def encode_query_string(pairs: Sequence[Tuple[str, str]]) -> str:
    # commas separate list values and must reach the server unencoded
    return urlencode(list(pairs), safe=",", quote_via=quote)


def new_client(timeout: float = DEFAULT_TIMEOUT, transport: Optional[httpx.AsyncBaseTransport] = None) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=timeout, transport=transport, headers={"User-Agent": USER_AGENT})


def _error_for_status(status: int) -> type:
    if status in (401, 403):
        return AuthError
    if status == 404:
        return NotFoundError
    if status == 429:
        return RateLimitError
    return HTTPError


async def send(
    client: httpx.AsyncClient,
    method: Method,
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[List[Tuple[str, str]]] = None,
    json: Optional[Dict[str, Any]] = None,
) -> httpx.Response:
    """Issue one request and return the response if its status is 2xx.

    Transport failures become ``TransportError`` (``TimeoutError`` for
    timeouts); any other status becomes an ``HTTPError`` subclass carrying the
    status code and the raw body.
    """

    if params:
        url = f"{url}?{encode_query_string(params)}"
    try:
        r = await client.request(method.value, url, headers=headers, json=json)
    except httpx.TimeoutException as e:
        raise TimeoutError(f"{method.value} {url} timed out", context={"url": url}) from e
    except httpx.RequestError as e:
        raise TransportError(f"{method.value} {url} failed: {e}", context={"url": url}) from e

    logger.debug("%s %s -> %s", method.value, url, r.status_code)
    if 200 <= r.status_code < 300:
        return r

    body = r.text
    logger.warning("%s %s returned HTTP %s: %s", method.value, url, r.status_code, body[:200])
    err_cls = _error_for_status(r.status_code)
    raise err_cls(
        f"{method.value} {url} failed with HTTP {r.status_code}",
        status_code=r.status_code,
        body=body,
        context={"url": url, "method": method.value},
    )


def read_json(response: httpx.Response) -> Any:
    """Parsed JSON body, or None when the body is empty."""

    text = response.text
    if not text.strip():
        return None
    try:
        return jsonlib.loads(text)
    except ValueError as e:
        raise DecodeError(f"Response from {response.request.url} is not valid JSON", body=text) from e
