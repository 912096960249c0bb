from __future__ import annotations

import asyncio
from abc import ABC
from typing import Any, Awaitable, Callable, ClassVar, Optional, Union

import httpx

from ..config import http_timeout
from ..logging import get_logger
from ..net.http import new_client, read_json, send
from ..pagination import DEFAULT_PAGE_SIZE, Paginator
from ..registry import SurfaceRegistry
from .endpoint import Endpoint, EndpointBuilder
from .enums import Surface
from .errors import DecodeError

logger = get_logger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class SurfaceClient(ABC):
    """Client dispatcher for one API surface.

    The credential object and base URL are fixed at construction. Every
    request carries exactly the headers of that credential.
    """

    surface: ClassVar[Surface]

    def __init__(
        self,
        auth: Any,
        base_url: str,
        *,
        http: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._auth = auth
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http if http is not None else new_client(timeout if timeout is not None else http_timeout())
        self._sleep = sleep

    # --- Dispatch ---
    async def execute(self, endpoint: Endpoint) -> Any:
        return await self._dispatch(endpoint, self.surface)

    async def _dispatch(self, endpoint: Endpoint, surface: Surface, account_id: Optional[str] = None) -> Any:
        url = self.base_url + SurfaceRegistry.resolve_path(endpoint, surface, account_id)
        logger.debug("[%s] %s", surface.value, endpoint.describe())
        response = await send(
            self._http,
            endpoint.METHOD,
            url,
            headers=self._auth.headers(),
            params=endpoint.query_params(),
            json=endpoint.json_body(),
        )
        return self._decode(endpoint, response)

    def _decode(self, endpoint: Endpoint, response: httpx.Response) -> Any:
        if endpoint.RESULT is None:
            return None
        payload = read_json(response)
        name = type(endpoint).__name__
        if payload is None:
            raise DecodeError(f"{name} expected a {endpoint.RESULT.__name__} body, got nothing")
        try:
            return endpoint.decode(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(
                f"{name} response does not match {endpoint.RESULT.__name__}: {e}",
                body=response.text,
                context={"endpoint": name},
            ) from e

    def builder(self, endpoint: Endpoint) -> EndpointBuilder:
        return EndpointBuilder(self, endpoint)

    def paginate(self, endpoint: Union[Endpoint, EndpointBuilder], page_size: int = DEFAULT_PAGE_SIZE) -> Paginator:
        if isinstance(endpoint, EndpointBuilder):
            endpoint = endpoint.endpoint
        return Paginator(self, endpoint, page_size)

    # --- Lifecycle ---
    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "SurfaceClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r})"
