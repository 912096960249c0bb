"""Pagination engine over the historical market data endpoints."""

from urllib.parse import parse_qs, urlsplit

import pytest

from alpaca_api.core.errors import UnsupportedOperationError, ValidationError
from alpaca_api.core.marketdata import Bar, Timeframe
from alpaca_api.pagination import PageState, Paginator
from alpaca_api.surfaces.market_data.endpoints import GetHistoricalBars, GetHistoricalTrades
from alpaca_api.surfaces.trading.endpoints import GetOrders


def _bar(t, close):
    return {"t": t, "o": close, "h": close, "l": close, "c": close, "v": 100, "n": 3, "vw": close}


PAGE_1 = {
    "bars": {"AAPL": [_bar("2024-01-02T05:00:00Z", 185.6), _bar("2024-01-03T05:00:00Z", 184.2)]},
    "next_page_token": "QUFQTHxEfDIwMjQtMDEtMDM=",
}
PAGE_2 = {
    "bars": {"AAPL": [_bar("2024-01-04T05:00:00Z", 181.9)], "MSFT": [_bar("2024-01-04T05:00:00Z", 367.9)]},
    "next_page_token": None,
}


def _query(request):
    return {k: v[0] for k, v in parse_qs(urlsplit(str(request.url)).query).items()}


def _bars():
    return GetHistoricalBars(["AAPL", "MSFT"], Timeframe.day())


class TestPaginator:
    @pytest.mark.asyncio
    async def test_walks_pages_until_exhausted(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", PAGE_1)
        server.add("GET", "/v2/stocks/bars", PAGE_2)
        pages = market_data.paginate(_bars(), page_size=2)
        assert pages.state is PageState.NOT_STARTED

        first = await pages.next_page()
        assert pages.state is PageState.HAS_TOKEN
        assert pages.page_token == PAGE_1["next_page_token"]
        second = await pages.next_page()

        assert pages.state is PageState.EXHAUSTED
        assert [b.close for b in first] == [185.6, 184.2]
        assert [(b.symbol, b.close) for b in second] == [("AAPL", 181.9), ("MSFT", 367.9)]
        assert "page_token" not in _query(server.requests[0])
        assert _query(server.requests[1])["page_token"] == PAGE_1["next_page_token"]
        assert _query(server.requests[1])["limit"] == "2"

    @pytest.mark.asyncio
    async def test_exhausted_cursor_returns_empty_page_without_request(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", {"bars": {"AAPL": [_bar("2024-01-02T05:00:00Z", 1.0)]}})
        pages = market_data.paginate(_bars())

        assert len(await pages.next_page()) == 1
        assert pages.exhausted

        assert await pages.next_page() == []
        assert await pages.next_page() == []
        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_fetch_page_is_idempotent(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", PAGE_2)
        pages = market_data.paginate(_bars(), page_size=2)

        a = await pages.fetch_page("token-1")
        b = await pages.fetch_page("token-1")

        assert a == b
        assert a.next_page_token is None
        assert pages.state is PageState.NOT_STARTED
        assert _query(server.requests[0]) == _query(server.requests[1])

    @pytest.mark.asyncio
    async def test_async_iteration_and_collect(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", PAGE_1)
        server.add("GET", "/v2/stocks/bars", PAGE_2)

        bars = await market_data.paginate(market_data.get_bars(["AAPL", "MSFT"], Timeframe.day())).collect()

        assert len(bars) == 4
        assert all(isinstance(b, Bar) for b in bars)
        assert len(server.requests) == 2

    @pytest.mark.asyncio
    async def test_explicit_limit_wins_over_page_size(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", PAGE_2)

        await market_data.paginate(GetHistoricalBars(["AAPL"], Timeframe.day(), limit=50), page_size=5).next_page()

        assert _query(server.last)["limit"] == "50"

    @pytest.mark.asyncio
    async def test_page_size_used_when_limit_unset(self, server, market_data):
        server.add("GET", "/v2/stocks/trades", {"trades": {}, "next_page_token": None})

        await market_data.paginate(GetHistoricalTrades(["AAPL"]), page_size=25).next_page()

        assert _query(server.last)["limit"] == "25"
        assert "page_tokn" not in str(server.last.url)

    def test_rejects_non_paginated_descriptor(self, trading):
        with pytest.raises(UnsupportedOperationError):
            Paginator(trading, GetOrders())

    def test_rejects_non_positive_page_size(self, market_data):
        with pytest.raises(ValidationError):
            market_data.paginate(_bars(), page_size=0)

    @pytest.mark.asyncio
    async def test_empty_token_means_exhausted(self, server, market_data):
        server.add("GET", "/v2/stocks/bars", {"bars": {}, "next_page_token": ""})
        pages = market_data.paginate(_bars())

        assert await pages.next_page() == []
        assert pages.exhausted
