from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any, List, Optional

from ...core.endpoint import Endpoint, EndpointBuilder
from ...core.enums import BankAccountType, BankCodeType, OrderSide, TransferType
from ...core.schemas import Account, OpenPosition, OrderAmount
from ...logging import get_logger
from ..trading.endpoints import (
    CancelOrder,
    CloseAllPositions,
    ClosePosition,
    GetAccount,
    GetOpenPosition,
    GetOpenPositions,
    GetOrders,
)
from .endpoints import (
    CreateAchRelationship,
    CreateBankRelationship,
    CreateOrderBroker,
    CreateTransfer,
    GetTransfers,
    UpdateAccount,
)

if TYPE_CHECKING:
    from .client import BrokerClient

logger = get_logger(__name__)


class AccountView:
    """Broker client scoped to one sub-account.

    Shares the parent's credential and transport; URLs are redirected to the
    account-scoped variants. The account snapshot is fetched lazily by
    ``data()`` and kept until ``refetch()``; nothing else refreshes it.
    """

    def __init__(self, client: "BrokerClient", account_id: str) -> None:
        self._client = client
        self.id = account_id
        self._data: Optional[Account] = None
        self._lock = asyncio.Lock()

    async def execute(self, endpoint: Endpoint) -> Any:
        return await self._client.execute_for_account(endpoint, self.id)

    def builder(self, endpoint: Endpoint) -> EndpointBuilder:
        return EndpointBuilder(self, endpoint)

    # --- Snapshot ---
    @property
    def cached(self) -> Optional[Account]:
        return self._data

    async def data(self) -> Account:
        async with self._lock:
            if self._data is None:
                logger.debug("Fetching account %s", self.id)
                self._data = await self.execute(GetAccount())
            return self._data

    async def refetch(self) -> Account:
        async with self._lock:
            self._data = await self.execute(GetAccount())
            return self._data

    # --- Account ---
    def update(self) -> EndpointBuilder[UpdateAccount]:
        return self.builder(UpdateAccount())

    # --- Orders ---
    def create_order(self, symbol: str, amount: OrderAmount, side: OrderSide) -> EndpointBuilder[CreateOrderBroker]:
        return self.builder(CreateOrderBroker(symbol, amount, side))

    def get_orders(self) -> EndpointBuilder[GetOrders]:
        return self.builder(GetOrders())

    async def cancel_order(self, order_id: str) -> None:
        await self.execute(CancelOrder(order_id))

    # --- Positions ---
    async def get_open_positions(self) -> List[OpenPosition]:
        return await self.execute(GetOpenPositions())

    async def get_open_position(self, symbol_or_asset_id: str) -> OpenPosition:
        return await self.execute(GetOpenPosition(symbol_or_asset_id))

    def close_position(self, symbol_or_asset_id: str) -> EndpointBuilder[ClosePosition]:
        return self.builder(ClosePosition(symbol_or_asset_id))

    def close_all_positions(self) -> EndpointBuilder[CloseAllPositions]:
        return self.builder(CloseAllPositions())

    # --- Funding ---
    def create_ach_relationship(
        self,
        account_owner_name: str,
        bank_account_type: BankAccountType,
        bank_account_number: str,
        bank_routing_number: str,
    ) -> EndpointBuilder[CreateAchRelationship]:
        return self.builder(
            CreateAchRelationship(account_owner_name, bank_account_type, bank_account_number, bank_routing_number)
        )

    def create_bank_relationship(
        self, name: str, bank_code: str, bank_code_type: BankCodeType, account_number: str
    ) -> EndpointBuilder[CreateBankRelationship]:
        return self.builder(CreateBankRelationship(name, bank_code, bank_code_type, account_number))

    def create_transfer(self, transfer_type: TransferType, amount: float) -> EndpointBuilder[CreateTransfer]:
        return self.builder(CreateTransfer(transfer_type, amount))

    def get_transfers(self) -> EndpointBuilder[GetTransfers]:
        return self.builder(GetTransfers())

    def __repr__(self) -> str:
        return f"AccountView(id={self.id!r})"


__all__ = ["AccountView"]
