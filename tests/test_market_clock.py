"""Clock polling and the single-sleep market open wait."""

from datetime import datetime, timedelta, timezone

import pytest

CLOSED_CLOCK = {
    "timestamp": "2024-01-02T08:00:00-05:00",
    "is_open": False,
    "next_open": "2024-01-02T09:30:00-05:00",
    "next_close": "2024-01-02T16:00:00-05:00",
}


class TestAwaitMarketOpen:
    @pytest.mark.asyncio
    async def test_open_market_returns_without_sleeping(self, server, trading, sleeps):
        server.add("GET", "/v2/clock", dict(CLOSED_CLOCK, is_open=True))

        await trading.await_market_open()

        assert sleeps == []
        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_closed_market_sleeps_once_until_next_open(self, server, trading, sleeps):
        server.add("GET", "/v2/clock", CLOSED_CLOCK)

        await trading.await_market_open()

        assert sleeps == [5400.0]
        assert len(server.requests) == 1

    @pytest.mark.asyncio
    async def test_negative_wait_is_clamped(self, server, trading, sleeps):
        server.add("GET", "/v2/clock", dict(CLOSED_CLOCK, next_open="2024-01-02T07:59:00-05:00"))

        await trading.await_market_open()

        assert sleeps == [0.0]


class TestClock:
    @pytest.mark.asyncio
    async def test_clock_decoding(self, server, trading):
        server.add("GET", "/v2/clock", CLOSED_CLOCK)

        clock = await trading.get_clock()

        assert clock.is_open is False
        assert clock.next_open - clock.timestamp == timedelta(hours=1, minutes=30)
        assert clock.timestamp == datetime(2024, 1, 2, 13, 0, tzinfo=timezone.utc)

    @pytest.mark.asyncio
    async def test_broker_clock(self, server, broker):
        server.add("GET", "/v1/clock", CLOSED_CLOCK)

        clock = await broker.get_clock()

        assert str(server.last.url) == "https://broker.test/v1/clock"
        assert clock.next_close.hour == 16
