"""Core enums, records, errors and endpoint descriptors."""

from .enums import (
    BodyMode,
    Method,
    OrderClass,
    OrderQueryStatus,
    OrderSide,
    OrderStatus,
    OrderTif,
    Sort,
    Surface,
)
from .errors import (
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
from .schemas import (
    Account,
    Asset,
    CalendarDay,
    Clock,
    Limit,
    Market,
    Notional,
    OpenPosition,
    Order,
    Quantity,
    SmallAccount,
    Stop,
    StopLimit,
    StopLoss,
    TakeProfit,
    TrailingStop,
)
from .funding import AchRelationship, BankRelationship, Transfer
from .marketdata import Auction, Bar, Quote, Timeframe, Trade, bars_frame
from .endpoint import Endpoint, EndpointBuilder

__all__ = [
    # Enums
    "BodyMode",
    "Method",
    "OrderClass",
    "OrderQueryStatus",
    "OrderSide",
    "OrderStatus",
    "OrderTif",
    "Sort",
    "Surface",
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
    # Records
    "Account",
    "Asset",
    "CalendarDay",
    "Clock",
    "Limit",
    "Market",
    "Notional",
    "OpenPosition",
    "Order",
    "Quantity",
    "SmallAccount",
    "Stop",
    "StopLimit",
    "StopLoss",
    "TakeProfit",
    "TrailingStop",
    "AchRelationship",
    "BankRelationship",
    "Transfer",
    "Auction",
    "Bar",
    "Quote",
    "Timeframe",
    "Trade",
    "bars_frame",
    # Descriptors
    "Endpoint",
    "EndpointBuilder",
]
