from __future__ import annotations

from typing import Any

from ...auth.keys import BrokerAuth
from ...config import LIVE, SANDBOX
from ...core.endpoint import Endpoint, EndpointBuilder
from ...core.enums import Surface
from ...core.interface import SurfaceClient
from ...core.schemas import Contact, Identity
from ...logging import get_logger
from ..trading.client import MarketClockMixin
from ..trading.endpoints import GetAssets
from .account_view import AccountView
from .endpoints import CreateAccount, GetAllAccounts

logger = get_logger(__name__)


class BrokerClient(MarketClockMixin, SurfaceClient):
    """Dispatcher for the broker API (organisation credential, HTTP Basic).

    Descriptors tagged for the account-scoped surface are sent through
    ``execute_for_account`` or, more conveniently, through ``account(id)``.
    """

    surface = Surface.BROKER

    # --- Construction helpers ---
    @classmethod
    def new_live(cls, auth: BrokerAuth, **kwargs: Any) -> "BrokerClient":
        logger.info("Broker client on %s", LIVE.broker_url)
        return cls(auth, LIVE.broker_url, **kwargs)

    @classmethod
    def new_sandbox(cls, auth: BrokerAuth, **kwargs: Any) -> "BrokerClient":
        logger.info("Broker client on %s", SANDBOX.broker_url)
        return cls(auth, SANDBOX.broker_url, **kwargs)

    async def execute_for_account(self, endpoint: Endpoint, account_id: str) -> Any:
        return await self._dispatch(endpoint, Surface.ACCOUNT, account_id)

    def account(self, account_id: str) -> AccountView:
        return AccountView(self, account_id)

    # --- Accounts ---
    def get_all_accounts(self) -> EndpointBuilder[GetAllAccounts]:
        return self.builder(GetAllAccounts())

    def create_account(self, contact: Contact, identity: Identity) -> EndpointBuilder[CreateAccount]:
        return self.builder(CreateAccount(contact, identity))

    # --- Assets ---
    def get_assets(self) -> EndpointBuilder[GetAssets]:
        return self.builder(GetAssets())


__all__ = ["BrokerClient"]
