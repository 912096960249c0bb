from __future__ import annotations

from typing import Any, List, Optional

from ...auth.keys import TradingAuth
from ...config import LIVE, PAPER
from ...core.endpoint import EndpointBuilder
from ...core.enums import OrderSide, Surface
from ...core.interface import SurfaceClient
from ...core.schemas import Account, Asset, Clock, OpenPosition, OrderAmount
from ...logging import get_logger
from ..market_data.client import MarketDataClient
from .endpoints import (
    CancelAllOrders,
    CancelOrder,
    CloseAllPositions,
    ClosePosition,
    CreateOrder,
    GetAccount,
    GetAsset,
    GetAssets,
    GetCalendar,
    GetClock,
    GetOpenPosition,
    GetOpenPositions,
    GetOrder,
    GetOrders,
)

logger = get_logger(__name__)


class MarketClockMixin:
    """Clock helpers shared by the trading and broker dispatchers."""

    async def get_clock(self) -> Clock:
        return await self.execute(GetClock())  # type: ignore[attr-defined]

    async def await_market_open(self) -> None:
        """Return once the market is open.

        Polls the clock once. When the market is closed, sleeps a single time
        until the reported next open; there is no re-check afterwards.
        """

        clock = await self.get_clock()
        if clock.is_open:
            return
        wait = max(0.0, (clock.next_open - clock.timestamp).total_seconds())
        logger.info("Market closed, waiting %.0fs until %s", wait, clock.next_open.isoformat())
        await self._sleep(wait)  # type: ignore[attr-defined]


class TradingClient(MarketClockMixin, SurfaceClient):
    """Dispatcher for the standalone trading API (key id / secret headers)."""

    surface = Surface.TRADING

    def __init__(self, auth: TradingAuth, base_url: str, *, data_url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(auth, base_url, **kwargs)
        self._data_url = data_url or LIVE.data_url
        self._market_data: Optional[MarketDataClient] = None

    # --- Construction helpers ---
    @classmethod
    def new_live(cls, auth: TradingAuth, **kwargs: Any) -> "TradingClient":
        logger.info("Trading client on %s", LIVE.trading_url)
        return cls(auth, LIVE.trading_url, data_url=LIVE.data_url, **kwargs)

    @classmethod
    def new_paper(cls, auth: TradingAuth, **kwargs: Any) -> "TradingClient":
        logger.info("Trading client on %s", PAPER.trading_url)
        return cls(auth, PAPER.trading_url, data_url=PAPER.data_url, **kwargs)

    @property
    def market_data(self) -> MarketDataClient:
        """Market data dispatcher reusing this client's key pair and transport."""

        if self._market_data is None:
            self._market_data = MarketDataClient(self._auth, self._data_url, http=self._http)
        return self._market_data

    # --- Account ---
    async def get_account(self) -> Account:
        return await self.execute(GetAccount())

    def get_calendar(self) -> EndpointBuilder[GetCalendar]:
        return self.builder(GetCalendar())

    # --- Orders ---
    def create_order(self, symbol: str, amount: OrderAmount, side: OrderSide) -> EndpointBuilder[CreateOrder]:
        return self.builder(CreateOrder(symbol, amount, side))

    def get_orders(self) -> EndpointBuilder[GetOrders]:
        return self.builder(GetOrders())

    def get_order(self, order_id: str) -> EndpointBuilder[GetOrder]:
        return self.builder(GetOrder(order_id))

    async def cancel_order(self, order_id: str) -> None:
        await self.execute(CancelOrder(order_id))

    async def cancel_all_orders(self) -> None:
        await self.execute(CancelAllOrders())

    # --- Positions ---
    async def get_open_positions(self) -> List[OpenPosition]:
        return await self.execute(GetOpenPositions())

    async def get_open_position(self, symbol_or_asset_id: str) -> OpenPosition:
        return await self.execute(GetOpenPosition(symbol_or_asset_id))

    def close_position(self, symbol_or_asset_id: str) -> EndpointBuilder[ClosePosition]:
        return self.builder(ClosePosition(symbol_or_asset_id))

    def close_all_positions(self) -> EndpointBuilder[CloseAllPositions]:
        return self.builder(CloseAllPositions())

    # --- Assets ---
    def get_assets(self) -> EndpointBuilder[GetAssets]:
        return self.builder(GetAssets())

    async def get_asset(self, symbol_or_asset_id: str) -> Asset:
        return await self.execute(GetAsset(symbol_or_asset_id))


__all__ = ["MarketClockMixin", "TradingClient"]
