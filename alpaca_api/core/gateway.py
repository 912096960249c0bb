from __future__ import annotations

from typing import Any, Optional

import httpx

from ..auth.tokens import broker_auth_from_env, trading_auth_from_env
from ..config import environment, getenv, http_timeout
from ..logging import get_logger
from ..net.http import new_client
from ..surfaces.broker import BrokerClient
from ..surfaces.market_data import MarketDataClient
from ..surfaces.trading import TradingClient

logger = get_logger(__name__)


class AlpacaGateway:
    """Facade bundling the trading, market data and (optional) broker clients.

    All clients share one ``httpx.AsyncClient`` owned by the gateway.
    """

    def __init__(
        self,
        trading: TradingClient,
        market_data: MarketDataClient,
        broker: Optional[BrokerClient] = None,
        *,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.trading = trading
        self.market_data = market_data
        self.broker = broker
        self._http = http

    # --- Construction helpers ---
    @classmethod
    def from_env(cls, name: Optional[str] = None, *, transport: Optional[httpx.AsyncBaseTransport] = None) -> "AlpacaGateway":
        """Build every client from APCA_* variables (``.env`` honoured).

        The broker client is only created when APCA_BROKER_KEY is set.
        """

        # everything that can fail runs before the shared client exists
        env = environment(name)
        timeout = http_timeout()
        trading_auth = trading_auth_from_env()
        broker_auth = broker_auth_from_env() if getenv("APCA_BROKER_KEY") else None

        http = new_client(timeout, transport=transport)
        trading = TradingClient(trading_auth, env.trading_url, data_url=env.data_url, http=http)
        broker = BrokerClient(broker_auth, env.broker_url, http=http) if broker_auth else None
        logger.info(
            "Gateway for %s environment (broker surface %s)", env.name, "enabled" if broker else "disabled"
        )
        return cls(trading, trading.market_data, broker, http=http)

    # --- Lifecycle ---
    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()

    async def __aenter__(self) -> "AlpacaGateway":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


__all__ = ["AlpacaGateway"]
