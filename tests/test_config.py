"""Environment configuration, presets and credential loading."""

import base64

import httpx
import pytest

from alpaca_api import AlpacaGateway
from alpaca_api.auth import BrokerAuth, TradingAuth, broker_auth_from_env, trading_auth_from_env
from alpaca_api.config import LIVE, PAPER, SANDBOX, environment, getenv, http_timeout
from alpaca_api.core import gateway as gateway_module
from alpaca_api.core.errors import AuthError, ValidationError
from alpaca_api.surfaces import BrokerClient, MarketDataClient, TradingClient

ENV_VARS = [
    "APCA_API_KEY_ID",
    "APCA_API_KEY",
    "APCA_API_SECRET_KEY",
    "APCA_SECRET_KEY",
    "APCA_BROKER_KEY",
    "APCA_BROKER_SECRET",
    "APCA_ENVIRONMENT",
    "APCA_API_BASE_URL",
    "APCA_BROKER_BASE_URL",
    "APCA_DATA_BASE_URL",
    "APCA_HTTP_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and any .env file."""
    for name in ENV_VARS:
        # set then delete so anything written during the test is removed on teardown
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


class TestEnvHelpers:
    def test_getenv_aliases(self, monkeypatch):
        monkeypatch.setenv("APCA_API_KEY", "from-alias")
        assert getenv("APCA_API_KEY_ID", None, "APCA_API_KEY") == "from-alias"
        monkeypatch.setenv("APCA_API_KEY_ID", "primary")
        assert getenv("APCA_API_KEY_ID", None, "APCA_API_KEY") == "primary"

    def test_empty_values_fall_back_to_default(self, monkeypatch):
        monkeypatch.setenv("APCA_ENVIRONMENT", "")
        assert getenv("APCA_ENVIRONMENT", "paper") == "paper"

    def test_http_timeout(self, monkeypatch):
        assert http_timeout() == 15.0
        monkeypatch.setenv("APCA_HTTP_TIMEOUT", "2.5")
        assert http_timeout() == 2.5
        monkeypatch.setenv("APCA_HTTP_TIMEOUT", "soon")
        with pytest.raises(ValidationError):
            http_timeout()


class TestEnvironments:
    def test_default_is_paper(self):
        assert environment() == PAPER

    def test_named_presets(self):
        assert environment("live").trading_url == "https://api.alpaca.markets/v2"
        assert environment("LIVE").broker_url == "https://broker-api.alpaca.markets/v1"
        assert environment("sandbox").data_url == SANDBOX.data_url
        assert PAPER.broker_url == "https://broker-api.sandbox.alpaca.markets/v1"

    def test_url_overrides(self, monkeypatch):
        monkeypatch.setenv("APCA_ENVIRONMENT", "live")
        monkeypatch.setenv("APCA_DATA_BASE_URL", "http://localhost:8080/v2")
        env = environment()
        assert env.name == "live"
        assert env.trading_url == LIVE.trading_url
        assert env.data_url == "http://localhost:8080/v2"

    def test_unknown_environment(self):
        with pytest.raises(ValidationError, match="Unknown environment"):
            environment("staging")


class TestCredentials:
    def test_trading_auth_from_env(self, monkeypatch):
        monkeypatch.setenv("APCA_API_KEY_ID", "PK1")
        monkeypatch.setenv("APCA_SECRET_KEY", "s1")
        assert trading_auth_from_env().headers() == {"APCA-API-KEY-ID": "PK1", "APCA-API-SECRET-KEY": "s1"}

    def test_missing_credentials(self):
        with pytest.raises(AuthError):
            trading_auth_from_env()
        with pytest.raises(AuthError):
            broker_auth_from_env()

    def test_dotenv_file_is_loaded(self, tmp_path):
        (tmp_path / ".env").write_text("APCA_BROKER_KEY=CK9\nAPCA_BROKER_SECRET=bs9\n")
        auth = broker_auth_from_env()
        token = base64.b64encode(b"CK9:bs9").decode()
        assert auth.headers() == {"Authorization": f"Basic {token}"}

    def test_empty_credentials_rejected(self):
        with pytest.raises(ValidationError):
            TradingAuth("", "secret")
        with pytest.raises(ValidationError):
            BrokerAuth.from_pair("key", "")


class TestPresets:
    def test_client_presets(self, trading_auth, broker_auth):
        assert TradingClient.new_live(trading_auth).base_url == LIVE.trading_url
        assert TradingClient.new_paper(trading_auth).base_url == PAPER.trading_url
        assert BrokerClient.new_live(broker_auth).base_url == LIVE.broker_url
        assert BrokerClient.new_sandbox(broker_auth).base_url == SANDBOX.broker_url
        assert MarketDataClient.new_live(trading_auth).base_url == LIVE.data_url

    def test_market_data_follows_trading_preset(self, trading_auth):
        client = TradingClient.new_paper(trading_auth)
        assert client.market_data.base_url == PAPER.data_url
        assert client.market_data is client.market_data

    @pytest.mark.asyncio
    async def test_gateway_from_env(self, monkeypatch):
        monkeypatch.setenv("APCA_API_KEY_ID", "PK1")
        monkeypatch.setenv("APCA_API_SECRET_KEY", "s1")
        monkeypatch.setenv("APCA_ENVIRONMENT", "sandbox")
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        async with AlpacaGateway.from_env(transport=httpx.MockTransport(handler)) as gateway:
            assert gateway.broker is None
            assert gateway.market_data.base_url == SANDBOX.data_url
            await gateway.trading.get_open_positions()

        assert str(seen[0].url) == "https://paper-api.alpaca.markets/v2/positions"

    @pytest.mark.parametrize("broker_key", [None, "CK1"])
    def test_gateway_builds_no_client_when_credentials_fail(self, monkeypatch, broker_key):
        created = []
        monkeypatch.setattr(gateway_module, "new_client", lambda *a, **kw: created.append(a))
        if broker_key:
            # trading pair present, broker secret missing
            monkeypatch.setenv("APCA_API_KEY_ID", "PK1")
            monkeypatch.setenv("APCA_API_SECRET_KEY", "s1")
            monkeypatch.setenv("APCA_BROKER_KEY", broker_key)

        with pytest.raises(AuthError):
            AlpacaGateway.from_env()

        assert created == []

    def test_gateway_with_broker(self, monkeypatch):
        monkeypatch.setenv("APCA_API_KEY_ID", "PK1")
        monkeypatch.setenv("APCA_API_SECRET_KEY", "s1")
        monkeypatch.setenv("APCA_BROKER_KEY", "CK1")
        monkeypatch.setenv("APCA_BROKER_SECRET", "bs1")

        gateway = AlpacaGateway.from_env("live")

        assert gateway.broker is not None
        assert gateway.broker.base_url == LIVE.broker_url
        assert gateway.trading._http is gateway.broker._http
