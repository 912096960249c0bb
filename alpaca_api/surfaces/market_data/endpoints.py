from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ...core.endpoint import Endpoint
from ...core.enums import Adjustment, BodyMode, Sort, StockFeed, Surface
from ...core.marketdata import HistoricalAuctions, HistoricalBars, HistoricalQuotes, HistoricalTrades, Timeframe
from ...pagination import PaginatedEndpoint
from ...registry import supports


# --- Stocks ---
@supports(Surface.MARKET_DATA)
@dataclass(frozen=True)
class GetHistoricalBars(PaginatedEndpoint, Endpoint):
    PATH = "/stocks/bars"
    BODY = BodyMode.QUERY
    RESULT = HistoricalBars

    symbols: List[str]
    timeframe: Timeframe
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: Optional[int] = None
    adjustment: Optional[Adjustment] = None
    asof: Optional[date] = None
    feed: Optional[StockFeed] = None
    currency: Optional[str] = None
    sort: Optional[Sort] = None
    page_token: Optional[str] = None


@supports(Surface.MARKET_DATA)
@dataclass(frozen=True)
class GetHistoricalTrades(PaginatedEndpoint, Endpoint):
    PATH = "/stocks/trades"
    BODY = BodyMode.QUERY
    RESULT = HistoricalTrades

    symbols: List[str]
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: Optional[int] = None
    asof: Optional[date] = None
    feed: Optional[StockFeed] = None
    currency: Optional[str] = None
    sort: Optional[Sort] = None
    page_token: Optional[str] = None


@supports(Surface.MARKET_DATA)
@dataclass(frozen=True)
class GetHistoricalQuotes(PaginatedEndpoint, Endpoint):
    PATH = "/stocks/quotes"
    BODY = BodyMode.QUERY
    RESULT = HistoricalQuotes

    symbols: List[str]
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    limit: Optional[int] = None
    asof: Optional[date] = None
    feed: Optional[StockFeed] = None
    currency: Optional[str] = None
    sort: Optional[Sort] = None
    page_token: Optional[str] = None


@supports(Surface.MARKET_DATA)
@dataclass(frozen=True)
class GetHistoricalAuctions(PaginatedEndpoint, Endpoint):
    """Opening and closing auction prints; ``start`` and ``end`` are dates."""

    PATH = "/stocks/auctions"
    BODY = BodyMode.QUERY
    RESULT = HistoricalAuctions

    symbols: List[str]
    start: Optional[date] = None
    end: Optional[date] = None
    limit: Optional[int] = None
    asof: Optional[date] = None
    feed: Optional[StockFeed] = None
    currency: Optional[str] = None
    sort: Optional[Sort] = None
    page_token: Optional[str] = None


__all__ = ["GetHistoricalBars", "GetHistoricalTrades", "GetHistoricalQuotes", "GetHistoricalAuctions"]
