from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ...core.endpoint import Endpoint
from ...core.enums import (
    AccountStatus,
    BankAccountType,
    BankCodeType,
    BodyMode,
    Method,
    Sort,
    Surface,
    TransferDirection,
    TransferTiming,
    TransferType,
)
from ...core.funding import AchRelationship, BankRelationship, Transfer
from ...core.schemas import (
    Account,
    Agreement,
    Contact,
    Disclosures,
    Document,
    Identity,
    SmallAccount,
    TrustedContact,
    wire_field,
)
from ...registry import supports
from ..trading.endpoints import CreateOrder


# --- Accounts ---
@supports(Surface.BROKER)
@dataclass(frozen=True)
class GetAllAccounts(Endpoint):
    """List accounts; ``query`` terms are matched against names, emails and account numbers."""

    PATH = "/accounts"
    BODY = BodyMode.QUERY
    RESULT = SmallAccount
    RESULT_MANY = True

    query: List[str] = wire_field(default_factory=list, join=" ")
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    status: Optional[AccountStatus] = None
    sort: Optional[Sort] = None
    entities: List[str] = wire_field(default_factory=list)


@supports(Surface.BROKER)
@dataclass(frozen=True)
class CreateAccount(Endpoint):
    METHOD = Method.POST
    PATH = "/accounts"
    BODY = BodyMode.JSON
    RESULT = Account

    contact: Contact
    identity: Identity
    disclosures: Optional[Disclosures] = None
    agreements: Optional[List[Agreement]] = None
    documents: Optional[List[Document]] = None
    trusted_contact: Optional[TrustedContact] = None
    enabled_assets: Optional[List[str]] = None


@supports(Surface.ACCOUNT, account_path="/accounts/{account_id}")
@dataclass(frozen=True)
class UpdateAccount(Endpoint):
    METHOD = Method.PATCH
    BODY = BodyMode.JSON
    RESULT = Account

    contact: Optional[Contact] = None
    identity: Optional[Identity] = None
    disclosures: Optional[Disclosures] = None
    trusted_contact: Optional[TrustedContact] = None


# --- Trading on behalf of an account ---
@supports(Surface.ACCOUNT, account_path="/trading/accounts/{account_id}/orders")
@dataclass(frozen=True)
class CreateOrderBroker(CreateOrder):
    """Order placed for a sub-account, with the broker's commission settings."""

    commission: Optional[float] = wire_field(None, as_str=True)
    commission_bps: Optional[float] = wire_field(None, as_str=True)
    source: Optional[str] = None
    instructions: Optional[str] = None
    subtag: Optional[str] = None
    swap_fee_bps: Optional[str] = None


# --- Funding ---
@supports(Surface.ACCOUNT)
@dataclass(frozen=True)
class CreateBankRelationship(Endpoint):
    METHOD = Method.POST
    PATH = "/recipient_banks"
    BODY = BodyMode.JSON
    RESULT = BankRelationship

    name: str
    bank_code: str
    bank_code_type: BankCodeType
    account_number: str
    country: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    street_address: Optional[str] = None


@supports(Surface.ACCOUNT)
@dataclass(frozen=True)
class CreateAchRelationship(Endpoint):
    METHOD = Method.POST
    PATH = "/ach_relationships"
    BODY = BodyMode.JSON
    RESULT = AchRelationship

    account_owner_name: str
    bank_account_type: BankAccountType
    bank_account_number: str
    bank_routing_number: str
    nickname: Optional[str] = None
    processor_token: Optional[str] = None
    instant: Optional[bool] = None


@supports(Surface.ACCOUNT)
@dataclass(frozen=True)
class CreateTransfer(Endpoint):
    """Move money in or out of an account through an ACH link or a wire bank."""

    METHOD = Method.POST
    PATH = "/transfers"
    BODY = BodyMode.JSON
    RESULT = Transfer

    transfer_type: TransferType
    amount: float = wire_field(as_str=True)
    direction: TransferDirection = TransferDirection.INCOMING
    timing: TransferTiming = TransferTiming.IMMEDIATE
    relationship_id: Optional[str] = None
    bank_id: Optional[str] = None
    additional_information: Optional[str] = None
    fee_payment_method: Optional[str] = None


@supports(Surface.ACCOUNT)
@dataclass(frozen=True)
class GetTransfers(Endpoint):
    PATH = "/transfers"
    BODY = BodyMode.QUERY
    RESULT = Transfer
    RESULT_MANY = True

    direction: Optional[TransferDirection] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


__all__ = [
    "GetAllAccounts",
    "CreateAccount",
    "UpdateAccount",
    "CreateOrderBroker",
    "CreateBankRelationship",
    "CreateAchRelationship",
    "CreateTransfer",
    "GetTransfers",
]
