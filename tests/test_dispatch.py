"""Client dispatch: URLs, authentication per surface, decoding and error mapping."""

import base64

import httpx
import pytest

from conftest import ACCOUNT_JSON, ORDER_JSON, POSITION_JSON
from alpaca_api.core.enums import OrderSide, OrderStatus, Surface, TransferType
from alpaca_api.core.errors import (
    AlpacaError,
    AuthError,
    DecodeError,
    HTTPError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TransportError,
    UnsupportedOperationError,
)
from alpaca_api.core.marketdata import Timeframe
from alpaca_api.core.schemas import Quantity
from alpaca_api.registry import SurfaceRegistry
from alpaca_api.surfaces import TradingClient
from alpaca_api.surfaces.broker.endpoints import CreateOrderBroker, CreateTransfer, GetAllAccounts
from alpaca_api.surfaces.market_data.endpoints import GetHistoricalBars
from alpaca_api.surfaces.trading.endpoints import CreateOrder, GetAccount, GetClock, GetOpenPosition


class TestCreateOrderScenario:
    @pytest.mark.asyncio
    async def test_post_body_and_decoded_order(self, server, trading):
        server.add("POST", "/v2/orders", ORDER_JSON)

        order = await trading.execute(CreateOrder("AAPL", Quantity(10), OrderSide.BUY))

        request = server.last
        assert request.method == "POST"
        assert str(request.url) == "https://trading.test/v2/orders"
        body = server.last_json()
        assert body["symbol"] == "AAPL"
        assert body["side"] == "buy"
        assert body["qty"] == "10"
        assert body["type"] == "market"
        assert body["time_in_force"] == "gtc"
        assert order.symbol == "AAPL"
        assert order.side is OrderSide.BUY
        assert order.status is OrderStatus.ACCEPTED
        assert order.amount == Quantity(10)

    @pytest.mark.asyncio
    async def test_builder_is_awaitable(self, server, trading):
        server.add("POST", "/v2/orders", ORDER_JSON)

        order = await trading.create_order("AAPL", Quantity(10), OrderSide.BUY).client_order_id("my-id")

        assert server.last_json()["client_order_id"] == "my-id"
        assert order.id == ORDER_JSON["id"]


class TestHTTPErrors:
    @pytest.mark.asyncio
    async def test_404_is_http_error_not_decode_error(self, server, trading):
        server.add("GET", "/v2/positions/AAPL", {"code": 40410000, "message": "position does not exist"}, status=404)

        with pytest.raises(HTTPError) as exc_info:
            await trading.execute(GetOpenPosition("AAPL"))

        assert exc_info.value.status_code == 404
        assert isinstance(exc_info.value, NotFoundError)
        assert not isinstance(exc_info.value, DecodeError)
        assert "position does not exist" in exc_info.value.body

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error",
        [(401, AuthError), (403, AuthError), (429, RateLimitError), (422, HTTPError), (500, HTTPError)],
    )
    async def test_status_mapping(self, server, trading, status, error):
        server.add("GET", "/v2/account", {"message": "nope"}, status=status)

        with pytest.raises(error) as exc_info:
            await trading.get_account()

        assert exc_info.value.status_code == status

    @pytest.mark.asyncio
    async def test_transport_failure(self, trading_auth):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(refuse))
        client = TradingClient(trading_auth, "https://trading.test/v2", http=http)

        with pytest.raises(TransportError) as exc_info:
            await client.get_account()

        assert not isinstance(exc_info.value, HTTPError)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self, trading_auth):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        http = httpx.AsyncClient(transport=httpx.MockTransport(slow))
        client = TradingClient(trading_auth, "https://trading.test/v2", http=http)

        with pytest.raises(TimeoutError):
            await client.get_clock()


class TestDecoding:
    @pytest.mark.asyncio
    async def test_invalid_json_is_decode_error(self, server, trading):
        server.add("GET", "/v2/account", text="<html>gateway</html>")

        with pytest.raises(DecodeError) as exc_info:
            await trading.get_account()

        assert "gateway" in exc_info.value.body

    @pytest.mark.asyncio
    async def test_schema_mismatch_is_decode_error(self, server, trading):
        server.add("GET", "/v2/positions/AAPL", {"symbol": "AAPL"})

        with pytest.raises(DecodeError):
            await trading.get_open_position("AAPL")

    @pytest.mark.asyncio
    async def test_missing_body_for_declared_result(self, server, trading):
        server.add("GET", "/v2/clock", status=200)

        with pytest.raises(DecodeError):
            await trading.get_clock()

    @pytest.mark.asyncio
    async def test_empty_body_endpoints_return_none(self, server, trading):
        server.add("DELETE", "/v2/orders/abc", status=204)
        server.add("DELETE", "/v2/positions", status=207, text="")

        assert await trading.cancel_order("abc") is None
        assert await trading.close_all_positions().cancel_orders(True) is None
        assert str(server.last.url) == "https://trading.test/v2/positions?cancel_orders=true"

    @pytest.mark.asyncio
    async def test_decoded_list(self, server, trading):
        server.add("GET", "/v2/positions", [POSITION_JSON])

        positions = await trading.get_open_positions()

        assert [p.symbol for p in positions] == ["AAPL"]
        assert positions[0].qty == 5.0
        assert positions[0].avg_entry_price == 180.25

    @pytest.mark.asyncio
    async def test_unknown_order_status_falls_back(self, server, trading):
        server.add("GET", "/v2/orders/o1", dict(ORDER_JSON, status="brand_new_status"))

        order = await trading.get_order("o1")

        assert order.status is OrderStatus.UNKNOWN


class TestAuthentication:
    @pytest.mark.asyncio
    async def test_trading_uses_key_pair(self, server, trading):
        server.add("GET", "/v2/account", ACCOUNT_JSON)

        await trading.get_account()

        headers = server.last.headers
        assert headers["APCA-API-KEY-ID"] == "PKTESTKEY"
        assert headers["APCA-API-SECRET-KEY"] == "secret-value"
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    async def test_broker_uses_basic(self, server, broker):
        server.add("GET", "/v1/accounts", [])

        await broker.get_all_accounts()

        headers = server.last.headers
        expected = base64.b64encode(b"CKTESTKEY:broker-secret").decode()
        assert headers["Authorization"] == f"Basic {expected}"
        assert "APCA-API-KEY-ID" not in headers

    @pytest.mark.asyncio
    async def test_market_data_shares_trading_key_pair(self, server, trading):
        server.add("GET", "/v2/stocks/bars", {"bars": {}, "next_page_token": None})

        await trading.market_data.get_bars(["AAPL"], Timeframe.day())

        request = server.last
        assert request.url.host == "data.test"
        assert request.headers["APCA-API-KEY-ID"] == "PKTESTKEY"
        assert "Authorization" not in request.headers

    def test_credentials_are_redacted(self, trading_auth, broker_auth, trading):
        assert "secret-value" not in repr(trading_auth)
        assert "broker-secret" not in repr(broker_auth)
        assert "secret" not in repr(trading)


class TestCapabilities:
    @pytest.mark.asyncio
    async def test_untagged_surface_is_rejected_before_io(self, server, trading, broker):
        with pytest.raises(UnsupportedOperationError):
            await trading.execute(GetAllAccounts())
        with pytest.raises(UnsupportedOperationError):
            await broker.execute(CreateOrder("AAPL", Quantity(1), OrderSide.BUY))
        with pytest.raises(UnsupportedOperationError):
            await trading.execute(GetHistoricalBars(["AAPL"], Timeframe.day()))
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_account_surface_needs_an_id(self, server, broker):
        with pytest.raises(UnsupportedOperationError, match="account id"):
            await broker.execute_for_account(GetAccount(), "")
        assert server.requests == []

    def test_subclass_does_not_inherit_tags(self):
        assert SurfaceRegistry.surfaces(CreateOrder) == {Surface.TRADING}
        assert SurfaceRegistry.surfaces(CreateOrderBroker) == {Surface.ACCOUNT}

    def test_multi_surface_descriptor(self):
        assert SurfaceRegistry.surfaces(GetAccount) == {Surface.TRADING, Surface.ACCOUNT}
        assert SurfaceRegistry.supports(GetClock, Surface.BROKER)

    def test_unsupported_is_an_alpaca_error(self):
        assert issubclass(UnsupportedOperationError, AlpacaError)

    @pytest.mark.asyncio
    async def test_same_descriptor_resolves_per_surface(self, server, trading, broker):
        server.add("GET", "/v2/account", ACCOUNT_JSON)
        server.add("GET", "/v1/accounts/acc-1", ACCOUNT_JSON)

        await trading.execute(GetAccount())
        await broker.execute_for_account(GetAccount(), "acc-1")

        assert [str(r.url) for r in server.requests] == [
            "https://trading.test/v2/account",
            "https://broker.test/v1/accounts/acc-1",
        ]

    @pytest.mark.asyncio
    async def test_default_account_rule(self, server, broker):
        server.add(
            "POST",
            "/v1/accounts/acc-1/transfers",
            {
                "id": "tr-1",
                "account_id": "acc-1",
                "type": "ach",
                "status": "QUEUED",
                "amount": "500",
                "direction": "INCOMING",
            },
        )

        transfer = await broker.execute_for_account(CreateTransfer(TransferType.ACH, 500), "acc-1")

        assert str(server.last.url) == "https://broker.test/v1/accounts/acc-1/transfers"
        assert transfer.amount == 500.0
