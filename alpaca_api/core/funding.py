"""Funding records of the broker surface: bank links, ACH links and transfers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .enums import (
    AchRelationshipStatus,
    BankAccountType,
    BankCodeType,
    BankRelationshipStatus,
    TransferDirection,
    TransferStatus,
    TransferType,
)
from .schemas import parse_datetime, parse_enum, parse_float, to_wire, wire_field


@dataclass(frozen=True)
class BankRelationship:
    id: str
    account_id: str
    status: BankRelationshipStatus
    name: str
    account_number: str
    bank_code: str = ""
    bank_code_type: Optional[BankCodeType] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    country: Optional[str] = None
    state_province: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    street_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BankRelationship":
        return cls(
            id=str(data["id"]),
            account_id=str(data["account_id"]),
            status=BankRelationshipStatus(data["status"]),
            name=str(data.get("name") or ""),
            account_number=str(data.get("account_number") or ""),
            bank_code=str(data.get("bank_code") or ""),
            bank_code_type=parse_enum(BankCodeType, data.get("bank_code_type")),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            country=data.get("country"),
            state_province=data.get("state_province"),
            postal_code=data.get("postal_code"),
            city=data.get("city"),
            street_address=data.get("street_address"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class AchRelationship:
    id: str
    account_id: str
    status: AchRelationshipStatus
    account_owner_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    bank_account_type: Optional[BankAccountType] = None
    bank_account_number: Optional[str] = None
    bank_routing_number: Optional[str] = None
    nickname: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AchRelationship":
        return cls(
            id=str(data["id"]),
            account_id=str(data["account_id"]),
            status=AchRelationshipStatus(data["status"]),
            account_owner_name=str(data.get("account_owner_name") or ""),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            bank_account_type=parse_enum(BankAccountType, data.get("bank_account_type")),
            bank_account_number=data.get("bank_account_number"),
            bank_routing_number=data.get("bank_routing_number"),
            nickname=data.get("nickname"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Transfer:
    id: str
    account_id: str
    kind: TransferType = wire_field(rename="type")
    status: TransferStatus = TransferStatus.QUEUED
    amount: float = wire_field(0.0, as_str=True)
    direction: TransferDirection = TransferDirection.INCOMING
    relationship_id: Optional[str] = None
    bank_id: Optional[str] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    hold_until: Optional[datetime] = None
    additional_information: Optional[str] = None
    instant_amount: Optional[float] = wire_field(None, as_str=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transfer":
        return cls(
            id=str(data["id"]),
            account_id=str(data["account_id"]),
            kind=TransferType(data["type"]),
            status=TransferStatus(data["status"]),
            amount=float(data["amount"]),
            direction=TransferDirection(data["direction"]),
            relationship_id=data.get("relationship_id"),
            bank_id=data.get("bank_id"),
            reason=data.get("reason"),
            created_at=parse_datetime(data.get("created_at")),
            updated_at=parse_datetime(data.get("updated_at")),
            expires_at=parse_datetime(data.get("expires_at")),
            hold_until=parse_datetime(data.get("hold_until")),
            additional_information=data.get("additional_information"),
            instant_amount=parse_float(data.get("instant_amount")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)
