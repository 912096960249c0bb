"""Endpoint descriptors.

A descriptor is a frozen dataclass whose fields are the parameters of one
remote operation. The class itself declares how the operation travels:

    @supports(Surface.TRADING, Surface.ACCOUNT)
    @dataclass(frozen=True)
    class GetOpenPosition(Endpoint):
        PATH = "/positions/{symbol_or_asset_id}"
        RESULT = OpenPosition

        symbol_or_asset_id: str

Fields named in ``PATH`` are substituted into the path and are never sent
again in the query string or body. Fields left as ``None`` are omitted
entirely. Which surfaces accept the descriptor is recorded separately by
``supports`` (see ``alpaca_api.registry``).
"""

from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from string import Formatter
from typing import Any, ClassVar, Dict, Generic, List, Optional, Tuple, TypeVar
from urllib.parse import quote

from .enums import BodyMode, Method
from .schemas import decimal_str, format_datetime, to_wire

E = TypeVar("E", bound="Endpoint")


def _query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (int, float, Decimal)):
        return decimal_str(value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def encode_query(obj: Any, *, exclude: Tuple[str, ...] = ()) -> List[Tuple[str, str]]:
    """Render a dataclass as ordered query pairs.

    Lists are joined with the field's ``join`` separator (``","`` unless
    declared otherwise); empty lists and ``None`` are left out.
    """

    pairs: List[Tuple[str, str]] = []
    for f in dataclasses.fields(obj):
        if f.name in exclude or f.metadata.get("skip"):
            continue
        value = getattr(obj, f.name)
        if value is None:
            continue
        name = f.metadata.get("rename") or f.name
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            sep = f.metadata.get("join") or ","
            pairs.append((name, sep.join(_query_scalar(v) for v in value)))
        elif f.metadata.get("flatten") and hasattr(value, "to_dict"):
            pairs.extend((k, _query_scalar(v)) for k, v in value.to_dict().items())
        else:
            pairs.append((name, _query_scalar(value)))
    return pairs


class Endpoint:
    """Base class of all endpoint descriptors."""

    METHOD: ClassVar[Method] = Method.GET
    PATH: ClassVar[str] = ""
    BODY: ClassVar[BodyMode] = BodyMode.NONE
    # Record class with ``from_dict``; None for endpoints answering without a payload.
    RESULT: ClassVar[Any] = None
    RESULT_MANY: ClassVar[bool] = False

    @classmethod
    def path_fields(cls) -> Tuple[str, ...]:
        return tuple(name for _, name, _, _ in Formatter().parse(cls.PATH) if name)

    def path_values(self) -> Dict[str, str]:
        """Path field values, each percent-encoded as a single segment."""

        values = {}
        for name in self.path_fields():
            value = getattr(self, name)
            values[name] = quote(str(value.value if isinstance(value, Enum) else value), safe="")
        return values

    def path(self) -> str:
        return self.PATH.format(**self.path_values())

    def query_params(self) -> List[Tuple[str, str]]:
        if self.BODY is not BodyMode.QUERY:
            return []
        return encode_query(self, exclude=self.path_fields())

    def json_body(self) -> Optional[Dict[str, Any]]:
        if self.BODY is not BodyMode.JSON:
            return None
        return to_wire(self, exclude=self.path_fields())

    def decode(self, payload: Any) -> Any:
        if self.RESULT is None:
            return None
        if self.RESULT_MANY:
            return [self.RESULT.from_dict(item) for item in payload]
        return self.RESULT.from_dict(payload)

    def describe(self) -> str:
        return f"{self.METHOD.value} {self.path()}"


class EndpointBuilder(Generic[E]):
    """Fluent, immutable wrapper around a descriptor bound to a client.

    Every setter returns a new builder; awaiting the builder dispatches it::

        orders = await client.get_orders().status(OrderQueryStatus.ALL).limit(50)
    """

    def __init__(self, client: Any, endpoint: E) -> None:
        self._client = client
        self.endpoint = endpoint

    def set(self, **changes: Any) -> "EndpointBuilder[E]":
        return EndpointBuilder(self._client, dataclasses.replace(self.endpoint, **changes))

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        if name not in {f.name for f in dataclasses.fields(self.endpoint)}:
            raise AttributeError(f"{type(self.endpoint).__name__} has no field '{name}'")

        def setter(value: Any) -> "EndpointBuilder[E]":
            return self.set(**{name: value})

        return setter

    async def send(self) -> Any:
        return await self._client.execute(self.endpoint)

    def __await__(self):  # type: ignore[no-untyped-def]
        return self.send().__await__()

    def __repr__(self) -> str:
        return f"EndpointBuilder({self.endpoint!r})"


__all__ = ["Endpoint", "EndpointBuilder", "encode_query"]
