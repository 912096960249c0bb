"""
alpaca_api: typed async client for the Alpaca REST API family.

- Endpoint descriptors, records and errors in `alpaca_api.core`
- Capability table (`supports`, `SurfaceRegistry`) in `alpaca_api.registry`
- One client dispatcher per surface in `alpaca_api.surfaces`
- Credential providers in `alpaca_api.auth`
- Pagination engine in `alpaca_api.pagination`
- A facade `AlpacaGateway` building every client from APCA_* environment variables
"""

from __future__ import annotations

from .auth import BrokerAuth, TradingAuth, broker_auth_from_env, trading_auth_from_env
from .core.enums import OrderClass, OrderQueryStatus, OrderSide, OrderStatus, OrderTif, Sort, Surface
from .core.errors import (
    AlpacaError,
    AuthError,
    DecodeError,
    HTTPError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)
from .core.schemas import Limit, Market, Notional, Quantity, Stop, StopLimit, TrailingStop
from .core.marketdata import Timeframe, bars_frame
from .core.gateway import AlpacaGateway
from .pagination import Paginator
from .registry import SurfaceRegistry, supports
from .surfaces import AccountView, BrokerClient, MarketDataClient, TradingClient

__all__ = [
    "AlpacaGateway",
    "TradingClient",
    "BrokerClient",
    "MarketDataClient",
    "AccountView",
    "Paginator",
    "SurfaceRegistry",
    "supports",
    # Auth
    "TradingAuth",
    "BrokerAuth",
    "trading_auth_from_env",
    "broker_auth_from_env",
    # Enums
    "OrderClass",
    "OrderQueryStatus",
    "OrderSide",
    "OrderStatus",
    "OrderTif",
    "Sort",
    "Surface",
    # Orders
    "Quantity",
    "Notional",
    "Market",
    "Limit",
    "Stop",
    "StopLimit",
    "TrailingStop",
    "Timeframe",
    "bars_frame",
    # Errors
    "AlpacaError",
    "AuthError",
    "DecodeError",
    "HTTPError",
    "NotFoundError",
    "RateLimitError",
    "TimeoutError",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
]
