from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ...core.endpoint import Endpoint
from ...core.enums import (
    AssetClass,
    AssetStatus,
    BodyMode,
    DateType,
    Method,
    OrderClass,
    OrderQueryStatus,
    OrderSide,
    OrderTif,
    Sort,
    Surface,
)
from ...core.schemas import (
    Account,
    Asset,
    CalendarDay,
    Clock,
    Market,
    OpenPosition,
    Order,
    OrderAmount,
    OrderType,
    StopLoss,
    TakeProfit,
    wire_field,
)
from ...registry import supports


# --- Account ---
@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/accounts/{account_id}")
@dataclass(frozen=True)
class GetAccount(Endpoint):
    PATH = "/account"
    RESULT = Account


# --- Market hours ---
@supports(Surface.TRADING, Surface.BROKER)
@dataclass(frozen=True)
class GetClock(Endpoint):
    PATH = "/clock"
    RESULT = Clock


@supports(Surface.TRADING, Surface.BROKER)
@dataclass(frozen=True)
class GetCalendar(Endpoint):
    PATH = "/calendar"
    BODY = BodyMode.QUERY
    RESULT = CalendarDay
    RESULT_MANY = True

    start: Optional[date] = None
    end: Optional[date] = None
    date_type: Optional[DateType] = None


# --- Assets ---
@supports(Surface.TRADING, Surface.BROKER)
@dataclass(frozen=True)
class GetAssets(Endpoint):
    PATH = "/assets"
    BODY = BodyMode.QUERY
    RESULT = Asset
    RESULT_MANY = True

    status: Optional[AssetStatus] = None
    asset_class: Optional[AssetClass] = None
    exchange: Optional[str] = None
    attributes: List[str] = wire_field(default_factory=list)


@supports(Surface.TRADING, Surface.BROKER)
@dataclass(frozen=True)
class GetAsset(Endpoint):
    PATH = "/assets/{symbol_or_asset_id}"
    RESULT = Asset

    symbol_or_asset_id: str


# --- Orders ---
@supports(Surface.TRADING)
@dataclass(frozen=True)
class CreateOrder(Endpoint):
    METHOD = Method.POST
    PATH = "/orders"
    BODY = BodyMode.JSON
    RESULT = Order

    symbol: str
    amount: OrderAmount = wire_field(flatten=True)
    side: OrderSide
    kind: OrderType = wire_field(Market(), flatten=True)
    time_in_force: OrderTif = OrderTif.GTC
    extended_hours: bool = False
    client_order_id: Optional[str] = None
    order_class: OrderClass = OrderClass.SIMPLE
    take_profit: Optional[TakeProfit] = None
    stop_loss: Optional[StopLoss] = None

    def describe(self) -> str:
        kind = type(self.kind).__name__
        return (
            f"Creating a {self.side.value} {kind} order, for {self.amount} ${self.symbol} "
            f"({self.order_class.value}, {self.time_in_force.value})"
        )


@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/orders")
@dataclass(frozen=True)
class GetOrders(Endpoint):
    PATH = "/orders"
    BODY = BodyMode.QUERY
    RESULT = Order
    RESULT_MANY = True

    status: Optional[OrderQueryStatus] = None
    limit: Optional[int] = None
    after: Optional[datetime] = None
    until: Optional[datetime] = None
    direction: Optional[Sort] = None
    nested: Optional[bool] = None
    symbols: List[str] = wire_field(default_factory=list)
    side: Optional[OrderSide] = None


@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/orders/{order_id}")
@dataclass(frozen=True)
class GetOrder(Endpoint):
    PATH = "/orders/{order_id}"
    BODY = BodyMode.QUERY
    RESULT = Order

    order_id: str
    nested: Optional[bool] = None


@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/orders/{order_id}")
@dataclass(frozen=True)
class CancelOrder(Endpoint):
    METHOD = Method.DELETE
    PATH = "/orders/{order_id}"

    order_id: str


@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/orders")
@dataclass(frozen=True)
class CancelAllOrders(Endpoint):
    METHOD = Method.DELETE
    PATH = "/orders"


# --- Positions ---
@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/positions")
@dataclass(frozen=True)
class GetOpenPositions(Endpoint):
    PATH = "/positions"
    RESULT = OpenPosition
    RESULT_MANY = True


@supports(
    Surface.TRADING,
    Surface.ACCOUNT,
    account_path="/trading/accounts/{account_id}/positions/{symbol_or_asset_id}",
)
@dataclass(frozen=True)
class GetOpenPosition(Endpoint):
    PATH = "/positions/{symbol_or_asset_id}"
    RESULT = OpenPosition

    symbol_or_asset_id: str


@supports(Surface.TRADING, Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/positions")
@dataclass(frozen=True)
class CloseAllPositions(Endpoint):
    METHOD = Method.DELETE
    PATH = "/positions"
    BODY = BodyMode.QUERY

    cancel_orders: Optional[bool] = None


@supports(
    Surface.TRADING,
    Surface.ACCOUNT,
    account_path="/trading/accounts/{account_id}/positions/{symbol_or_asset_id}",
)
@dataclass(frozen=True)
class ClosePosition(Endpoint):
    """Liquidate a position, entirely or by ``qty`` shares or ``percentage``."""

    METHOD = Method.DELETE
    PATH = "/positions/{symbol_or_asset_id}"
    BODY = BodyMode.QUERY
    RESULT = Order

    symbol_or_asset_id: str
    qty: Optional[float] = None
    percentage: Optional[float] = None


__all__ = [
    "GetAccount",
    "GetClock",
    "GetCalendar",
    "GetAssets",
    "GetAsset",
    "CreateOrder",
    "GetOrders",
    "GetOrder",
    "CancelOrder",
    "CancelAllOrders",
    "GetOpenPositions",
    "GetOpenPosition",
    "CloseAllPositions",
    "ClosePosition",
]
