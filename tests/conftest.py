"""Shared test fixtures."""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from alpaca_api.auth import BrokerAuth, TradingAuth
from alpaca_api.surfaces import BrokerClient, MarketDataClient, TradingClient

TRADING_URL = "https://trading.test/v2"
BROKER_URL = "https://broker.test/v1"
DATA_URL = "https://data.test/v2"

ORDER_JSON = {
    "id": "61e69015-8549-4bfd-b9c3-01e75843f47d",
    "client_order_id": "eb9e2aaa-f71a-4f51-b5b4-52a6c565dad4",
    "symbol": "AAPL",
    "side": "buy",
    "type": "market",
    "qty": "10",
    "status": "accepted",
    "time_in_force": "gtc",
    "order_class": "",
    "extended_hours": False,
    "filled_qty": "0",
    "created_at": "2024-01-02T15:30:00.123456789Z",
    "legs": None,
}

ACCOUNT_JSON = {
    "id": "904837e3-3b76-47ec-b432-046db621571b",
    "account_number": "PA3HJ8QSF6N9",
    "status": "ACTIVE",
    "currency": "USD",
    "cash": "10000.5",
    "equity": "12500",
    "buying_power": "20000",
    "pattern_day_trader": False,
    "created_at": "2023-06-01T12:00:00Z",
}

POSITION_JSON = {
    "asset_id": "b0b6dd9d-8b9b-48a9-ba46-b9d54906e415",
    "symbol": "AAPL",
    "exchange": "NASDAQ",
    "asset_class": "us_equity",
    "qty": "5",
    "side": "long",
    "avg_entry_price": "180.25",
    "market_value": "925.5",
    "unrealized_pl": "24.25",
}


class StubServer:
    """Canned responses keyed by (method, path); records every request it sees.

    A route answers with its responses in order and keeps repeating the last one.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Tuple[int, Optional[str]]]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, method: str, path: str, body: Any = None, *, status: int = 200, text: Optional[str] = None) -> None:
        content = text if text is not None else (json.dumps(body) if body is not None else None)
        self.routes.setdefault((method, path), []).append((status, content))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"code": 40410000, "message": "not stubbed"})
        status, content = queue.pop(0) if len(queue) > 1 else queue[0]
        if content is None:
            return httpx.Response(status)
        return httpx.Response(status, content=content.encode(), headers={"Content-Type": "application/json"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def server():
    return StubServer()


@pytest.fixture
def http(server):
    """Async HTTP client wired to the stub server."""
    return httpx.AsyncClient(transport=httpx.MockTransport(server.handler))


@pytest.fixture
def trading_auth():
    return TradingAuth("PKTESTKEY", "secret-value")


@pytest.fixture
def broker_auth():
    return BrokerAuth.from_pair("CKTESTKEY", "broker-secret")


@pytest.fixture
def sleeps():
    """Durations passed to the injected sleep coroutine."""
    return []


@pytest.fixture
def trading(trading_auth, http, sleeps):
    async def fake_sleep(seconds):
        sleeps.append(seconds)

    return TradingClient(trading_auth, TRADING_URL, data_url=DATA_URL, http=http, sleep=fake_sleep)


@pytest.fixture
def broker(broker_auth, http):
    return BrokerClient(broker_auth, BROKER_URL, http=http)


@pytest.fixture
def market_data(trading_auth, http):
    return MarketDataClient(trading_auth, DATA_URL, http=http)
