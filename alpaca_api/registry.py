from __future__ import annotations

from typing import Callable, Dict, FrozenSet, Optional, Type, TypeVar
from urllib.parse import quote

from .core.endpoint import Endpoint
from .core.enums import Surface
from .core.errors import UnsupportedOperationError
from .logging import get_logger

logger = get_logger(__name__)

# (descriptor, account id) -> path appended to the dispatcher's base URL
UrlRule = Callable[[Endpoint, Optional[str]], str]
T = TypeVar("T", bound=Type[Endpoint])


def _plain(endpoint: Endpoint, _account_id: Optional[str]) -> str:
    return endpoint.path()


def _account_scoped(endpoint: Endpoint, account_id: Optional[str]) -> str:
    return f"/accounts/{quote(str(account_id), safe='')}{endpoint.path()}"


class SurfaceRegistry:
    """Capability table: which descriptor class may be sent on which surface.

    Lookups use the exact descriptor class, so a subclass never inherits the
    surfaces of its parent.
    """

    _rules: Dict[type, Dict[Surface, UrlRule]] = {}

    @classmethod
    def register(cls, endpoint_cls: Type[Endpoint], surface: Surface, rule: Optional[UrlRule] = None) -> None:
        if rule is None:
            rule = _account_scoped if surface is Surface.ACCOUNT else _plain
        cls._rules.setdefault(endpoint_cls, {})[surface] = rule
        logger.debug("Registered %s on %s surface", endpoint_cls.__name__, surface.value)

    @classmethod
    def surfaces(cls, endpoint_cls: Type[Endpoint]) -> FrozenSet[Surface]:
        return frozenset(cls._rules.get(endpoint_cls, {}))

    @classmethod
    def supports(cls, endpoint_cls: Type[Endpoint], surface: Surface) -> bool:
        return surface in cls._rules.get(endpoint_cls, {})

    @classmethod
    def resolve_path(cls, endpoint: Endpoint, surface: Surface, account_id: Optional[str] = None) -> str:
        name = type(endpoint).__name__
        rules = cls._rules.get(type(endpoint), {})
        if surface not in rules:
            raise UnsupportedOperationError(
                f"{name} cannot be sent on the {surface.value} surface. "
                f"Supported: {sorted(s.value for s in rules)}",
                context={"endpoint": name, "surface": surface.value},
            )
        if surface is Surface.ACCOUNT and not account_id:
            raise UnsupportedOperationError(
                f"{name} is account-scoped and needs an account id",
                context={"endpoint": name, "surface": surface.value},
            )
        return rules[surface](endpoint, account_id)


def supports(*surfaces: Surface, account_path: Optional[str] = None) -> Callable[[T], T]:
    """Class decorator declaring the surfaces a descriptor is valid on.

    ``account_path`` replaces the default ``/accounts/{account_id}<path>``
    rule of the account-scoped surface; it is formatted with ``account_id``
    and the descriptor's fields.
    """

    def decorator(endpoint_cls: T) -> T:
        for surface in surfaces:
            rule: Optional[UrlRule] = None
            if surface is Surface.ACCOUNT and account_path is not None:
                template = account_path

                def rule(endpoint: Endpoint, account_id: Optional[str]) -> str:
                    return template.format(account_id=quote(str(account_id), safe=""), **endpoint.path_values())

            SurfaceRegistry.register(endpoint_cls, surface, rule)
        return endpoint_cls

    return decorator
