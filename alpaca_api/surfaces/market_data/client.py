from __future__ import annotations

from typing import Any, Sequence

from ...auth.keys import TradingAuth
from ...config import LIVE, SANDBOX
from ...core.endpoint import EndpointBuilder
from ...core.enums import Surface
from ...core.interface import SurfaceClient
from ...core.marketdata import Timeframe
from ...logging import get_logger
from .endpoints import GetHistoricalAuctions, GetHistoricalBars, GetHistoricalQuotes, GetHistoricalTrades

logger = get_logger(__name__)


class MarketDataClient(SurfaceClient):
    """Dispatcher for the market data API, authenticated with the trading key pair."""

    surface = Surface.MARKET_DATA

    @classmethod
    def new_live(cls, auth: TradingAuth, **kwargs: Any) -> "MarketDataClient":
        logger.info("Market data client on %s", LIVE.data_url)
        return cls(auth, LIVE.data_url, **kwargs)

    @classmethod
    def new_sandbox(cls, auth: TradingAuth, **kwargs: Any) -> "MarketDataClient":
        logger.info("Market data client on %s", SANDBOX.data_url)
        return cls(auth, SANDBOX.data_url, **kwargs)

    # --- Stocks ---
    def get_bars(self, symbols: Sequence[str], timeframe: Timeframe) -> EndpointBuilder[GetHistoricalBars]:
        return self.builder(GetHistoricalBars(list(symbols), timeframe))

    def get_trades(self, symbols: Sequence[str]) -> EndpointBuilder[GetHistoricalTrades]:
        return self.builder(GetHistoricalTrades(list(symbols)))

    def get_quotes(self, symbols: Sequence[str]) -> EndpointBuilder[GetHistoricalQuotes]:
        return self.builder(GetHistoricalQuotes(list(symbols)))

    def get_auctions(self, symbols: Sequence[str]) -> EndpointBuilder[GetHistoricalAuctions]:
        return self.builder(GetHistoricalAuctions(list(symbols)))


__all__ = ["MarketDataClient"]
