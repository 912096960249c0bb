from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from .enums import (
    AccountStatus,
    AccountType,
    AssetClass,
    AssetStatus,
    OrderClass,
    OrderSide,
    OrderStatus,
    OrderTif,
    PositionSide,
)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")

_FRACTION = re.compile(r"\.(\d+)")


# --- Wire helpers ---
def wire_field(
    default: Any = dataclasses.MISSING,
    *,
    rename: Optional[str] = None,
    as_str: bool = False,
    flatten: bool = False,
    join: Optional[str] = None,
    skip: bool = False,
    default_factory: Any = dataclasses.MISSING,
    compare: bool = True,
) -> Any:
    """Dataclass field carrying wire-encoding metadata.

    - rename: key used on the wire
    - as_str: numbers travel as decimal strings ("10", "1.5")
    - flatten: merge the nested value's keys into the parent object
    - join: separator used when a list is rendered into a query string
    - skip: never emitted (e.g. ``raw``)
    """

    metadata = {"rename": rename, "as_str": as_str, "flatten": flatten, "join": join, "skip": skip}
    kwargs: Dict[str, Any] = {"metadata": metadata, "compare": compare}
    if default is not dataclasses.MISSING:
        kwargs["default"] = default
    if default_factory is not dataclasses.MISSING:
        kwargs["default_factory"] = default_factory
    return field(**kwargs)


def raw_field() -> Any:
    return wire_field(None, skip=True, compare=False)


def decimal_str(value: Union[int, float, Decimal]) -> str:
    """Plain decimal notation, never exponent form ("0.00001", not "1e-05")."""

    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return format(Decimal(str(value)), "f")


def format_datetime(value: datetime) -> str:
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def encode_value(value: Any, *, as_str: bool = False) -> Any:
    """Convert a python value into its JSON wire form."""

    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, bool):
        return value
    if as_str and isinstance(value, (int, float, Decimal)):
        return decimal_str(value)
    if isinstance(value, Decimal):
        return decimal_str(value)
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [encode_value(v, as_str=as_str) for v in value]
    if isinstance(value, dict):
        return {k: encode_value(v, as_str=as_str) for k, v in value.items()}
    return value


def to_wire(obj: Any, *, exclude: tuple = ()) -> Dict[str, Any]:
    """Encode a dataclass into a dict, omitting fields whose value is None."""

    out: Dict[str, Any] = {}
    for f in dataclasses.fields(obj):
        if f.name in exclude or f.metadata.get("skip"):
            continue
        value = getattr(obj, f.name)
        if value is None:
            continue
        encoded = encode_value(value, as_str=bool(f.metadata.get("as_str")))
        if f.metadata.get("flatten") and isinstance(encoded, dict):
            out.update(encoded)
        else:
            out[f.metadata.get("rename") or f.name] = encoded
    return out


def parse_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat only accepts 3 or 6 fractional digits on older interpreters
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    if value is None or value == "":
        return None
    return enum_cls(value)


def _simple(cls: Type[R], data: Dict[str, Any]) -> R:
    names = {f.name for f in dataclasses.fields(cls)}  # type: ignore[arg-type]
    return cls(**{k: v for k, v in data.items() if k in names})


# --- Account ---
@dataclass(frozen=True)
class Contact:
    email_address: str = ""
    phone_number: str = ""
    street_address: List[str] = field(default_factory=list)
    city: str = ""
    unit: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Identity:
    given_name: str = ""
    family_name: str = ""
    date_of_birth: str = ""
    tax_id: Optional[str] = None
    tax_id_type: Optional[str] = None
    country_of_citizenship: Optional[str] = None
    country_of_birth: Optional[str] = None
    country_of_tax_residence: str = ""
    funding_source: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Identity":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Disclosures:
    is_control_person: bool = False
    is_affiliated_exchange_or_finra: bool = False
    is_politically_exposed: bool = False
    immediate_family_exposed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Disclosures":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Document:
    document_type: str
    content: Optional[str] = None
    mime_type: Optional[str] = None
    document_sub_type: Optional[str] = None
    document_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Agreement:
    agreement: str
    signed_at: str
    ip_address: str
    revision: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Agreement":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class TrustedContact:
    given_name: str
    family_name: str
    email_address: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrustedContact":
        return _simple(cls, data)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Account:
    """Account snapshot.

    The trading surface returns the balance fields (cash, equity, ...), the
    broker surface returns the onboarding fields (contact, identity, ...).
    Both decode into this record; fields the server did not send stay None.
    """

    id: str
    account_number: str = ""
    status: Optional[AccountStatus] = None
    crypto_status: Optional[AccountStatus] = None
    currency: str = "USD"
    account_type: Optional[AccountType] = None
    created_at: Optional[datetime] = None
    last_equity: Optional[float] = wire_field(None, as_str=True)
    cash: Optional[float] = wire_field(None, as_str=True)
    buying_power: Optional[float] = wire_field(None, as_str=True)
    equity: Optional[float] = wire_field(None, as_str=True)
    portfolio_value: Optional[float] = wire_field(None, as_str=True)
    pattern_day_trader: Optional[bool] = None
    trading_blocked: Optional[bool] = None
    enabled_assets: List[str] = field(default_factory=list)
    contact: Optional[Contact] = None
    identity: Optional[Identity] = None
    disclosures: Optional[Disclosures] = None
    documents: List[Document] = field(default_factory=list)
    agreements: List[Agreement] = field(default_factory=list)
    trusted_contact: Optional[TrustedContact] = None
    raw: Optional[Dict[str, Any]] = raw_field()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            id=str(data["id"]),
            account_number=str(data.get("account_number") or ""),
            status=parse_enum(AccountStatus, data.get("status")),
            crypto_status=parse_enum(AccountStatus, data.get("crypto_status")),
            currency=data.get("currency") or "USD",
            account_type=parse_enum(AccountType, data.get("account_type")),
            created_at=parse_datetime(data.get("created_at")),
            last_equity=parse_float(data.get("last_equity")),
            cash=parse_float(data.get("cash")),
            buying_power=parse_float(data.get("buying_power")),
            equity=parse_float(data.get("equity")),
            portfolio_value=parse_float(data.get("portfolio_value")),
            pattern_day_trader=data.get("pattern_day_trader"),
            trading_blocked=data.get("trading_blocked"),
            enabled_assets=list(data.get("enabled_assets") or []),
            contact=Contact.from_dict(data["contact"]) if data.get("contact") else None,
            identity=Identity.from_dict(data["identity"]) if data.get("identity") else None,
            disclosures=Disclosures.from_dict(data["disclosures"]) if data.get("disclosures") else None,
            documents=[Document.from_dict(d) for d in data.get("documents") or []],
            agreements=[Agreement.from_dict(a) for a in data.get("agreements") or []],
            trusted_contact=(
                TrustedContact.from_dict(data["trusted_contact"]) if data.get("trusted_contact") else None
            ),
            raw=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class SmallAccount:
    """Summary row returned by the broker account listing."""

    id: str
    account_number: str = ""
    status: Optional[AccountStatus] = None
    crypto_status: Optional[AccountStatus] = None
    currency: str = "USD"
    last_equity: Optional[float] = wire_field(None, as_str=True)
    created_at: Optional[datetime] = None
    account_type: Optional[str] = None
    enabled_assets: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SmallAccount":
        return cls(
            id=str(data["id"]),
            account_number=str(data.get("account_number") or ""),
            status=parse_enum(AccountStatus, data.get("status")),
            crypto_status=parse_enum(AccountStatus, data.get("crypto_status")),
            currency=data.get("currency") or "USD",
            last_equity=parse_float(data.get("last_equity")),
            created_at=parse_datetime(data.get("created_at")),
            account_type=data.get("account_type"),
            enabled_assets=list(data.get("enabled_assets") or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


# --- Orders ---
@dataclass(frozen=True)
class Quantity:
    """Number of shares."""

    qty: float

    def to_dict(self) -> Dict[str, Any]:
        return {"qty": decimal_str(self.qty)}

    def __str__(self) -> str:
        return f"{decimal_str(self.qty)} shares of"


@dataclass(frozen=True)
class Notional:
    """Amount in the account currency."""

    notional: float

    def to_dict(self) -> Dict[str, Any]:
        return {"notional": decimal_str(self.notional)}

    def __str__(self) -> str:
        return f"${decimal_str(self.notional)} worth of"


OrderAmount = Union[Quantity, Notional]


def order_amount_from_dict(data: Dict[str, Any]) -> Optional[OrderAmount]:
    if data.get("notional") not in (None, ""):
        return Notional(float(data["notional"]))
    if data.get("qty") not in (None, ""):
        return Quantity(float(data["qty"]))
    return None


@dataclass(frozen=True)
class Market:
    def to_dict(self) -> Dict[str, Any]:
        return {"type": "market"}


@dataclass(frozen=True)
class Limit:
    limit_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "limit", "limit_price": decimal_str(self.limit_price)}


@dataclass(frozen=True)
class Stop:
    stop_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "stop", "stop_price": decimal_str(self.stop_price)}


@dataclass(frozen=True)
class StopLimit:
    stop_price: float
    limit_price: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "stop_limit",
            "stop_price": decimal_str(self.stop_price),
            "limit_price": decimal_str(self.limit_price),
        }


@dataclass(frozen=True)
class TrailingStop:
    """Trailing stop, trailing either by a price offset or by a percentage."""

    trail_price: Optional[float] = None
    trail_percent: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": "trailing_stop"}
        if self.trail_price is not None:
            out["trail_price"] = decimal_str(self.trail_price)
        if self.trail_percent is not None:
            out["trail_percent"] = decimal_str(self.trail_percent)
        return out


OrderType = Union[Market, Limit, Stop, StopLimit, TrailingStop]


def order_type_from_dict(data: Dict[str, Any]) -> OrderType:
    kind = data.get("type") or data.get("order_type")
    if kind == "market":
        return Market()
    if kind == "limit":
        return Limit(float(data["limit_price"]))
    if kind == "stop":
        return Stop(float(data["stop_price"]))
    if kind == "stop_limit":
        return StopLimit(float(data["stop_price"]), float(data["limit_price"]))
    if kind == "trailing_stop":
        return TrailingStop(parse_float(data.get("trail_price")), parse_float(data.get("trail_percent")))
    raise ValueError(f"Unknown order type {kind!r}")


# bracket / OCO / OTO legs
@dataclass(frozen=True)
class TakeProfit:
    limit_price: float = wire_field(as_str=True)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class StopLoss:
    stop_price: float = wire_field(as_str=True)
    limit_price: Optional[float] = wire_field(None, as_str=True)

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Order:
    symbol: str
    side: OrderSide
    status: OrderStatus
    kind: OrderType = wire_field(flatten=True)
    id: str = ""
    client_order_id: Optional[str] = None
    amount: Optional[OrderAmount] = wire_field(None, flatten=True)
    time_in_force: Optional[OrderTif] = None
    order_class: Optional[OrderClass] = None
    extended_hours: bool = False
    filled_qty: Optional[float] = wire_field(None, as_str=True)
    filled_avg_price: Optional[float] = wire_field(None, as_str=True)
    created_at: Optional[datetime] = None
    submitted_at: Optional[datetime] = None
    filled_at: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    legs: List["Order"] = field(default_factory=list)
    raw: Optional[Dict[str, Any]] = raw_field()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        order_class = data.get("order_class")
        return cls(
            symbol=str(data["symbol"]),
            side=OrderSide(data["side"]),
            status=OrderStatus(data["status"]),
            kind=order_type_from_dict(data),
            id=str(data.get("id") or ""),
            client_order_id=data.get("client_order_id"),
            amount=order_amount_from_dict(data),
            time_in_force=parse_enum(OrderTif, data.get("time_in_force")),
            # the server reports simple orders with an empty class
            order_class=parse_enum(OrderClass, order_class) if order_class else None,
            extended_hours=bool(data.get("extended_hours", False)),
            filled_qty=parse_float(data.get("filled_qty")),
            filled_avg_price=parse_float(data.get("filled_avg_price")),
            created_at=parse_datetime(data.get("created_at")),
            submitted_at=parse_datetime(data.get("submitted_at")),
            filled_at=parse_datetime(data.get("filled_at")),
            canceled_at=parse_datetime(data.get("canceled_at")),
            legs=[Order.from_dict(leg) for leg in data.get("legs") or []],
            raw=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


# --- Positions ---
@dataclass(frozen=True)
class OpenPosition:
    asset_id: str
    symbol: str
    exchange: str
    asset_class: str
    qty: float = wire_field(as_str=True)
    side: PositionSide = PositionSide.LONG
    avg_entry_price: float = wire_field(0.0, as_str=True)
    market_value: Optional[float] = wire_field(None, as_str=True)
    cost_basis: Optional[float] = wire_field(None, as_str=True)
    unrealized_pl: Optional[float] = wire_field(None, as_str=True)
    unrealized_plpc: Optional[float] = wire_field(None, as_str=True)
    unrealized_intraday_pl: Optional[float] = wire_field(None, as_str=True)
    unrealized_intraday_plpc: Optional[float] = wire_field(None, as_str=True)
    current_price: Optional[float] = wire_field(None, as_str=True)
    lastday_price: Optional[float] = wire_field(None, as_str=True)
    change_today: Optional[float] = wire_field(None, as_str=True)
    asset_marginable: Optional[bool] = None
    swap_rate: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OpenPosition":
        return cls(
            asset_id=str(data["asset_id"]),
            symbol=str(data["symbol"]),
            exchange=str(data.get("exchange") or ""),
            asset_class=str(data.get("asset_class") or ""),
            qty=float(data["qty"]),
            side=PositionSide(data.get("side") or "long"),
            avg_entry_price=float(data.get("avg_entry_price") or 0.0),
            market_value=parse_float(data.get("market_value")),
            cost_basis=parse_float(data.get("cost_basis")),
            unrealized_pl=parse_float(data.get("unrealized_pl")),
            unrealized_plpc=parse_float(data.get("unrealized_plpc")),
            unrealized_intraday_pl=parse_float(data.get("unrealized_intraday_pl")),
            unrealized_intraday_plpc=parse_float(data.get("unrealized_intraday_plpc")),
            current_price=parse_float(data.get("current_price")),
            lastday_price=parse_float(data.get("lastday_price")),
            change_today=parse_float(data.get("change_today")),
            asset_marginable=data.get("asset_marginable"),
            swap_rate=data.get("swap_rate"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


# --- Market hours ---
@dataclass(frozen=True)
class Clock:
    timestamp: datetime
    is_open: bool
    next_open: datetime
    next_close: datetime

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Clock":
        return cls(
            timestamp=parse_datetime(data["timestamp"]),  # type: ignore[arg-type]
            is_open=bool(data["is_open"]),
            next_open=parse_datetime(data["next_open"]),  # type: ignore[arg-type]
            next_close=parse_datetime(data["next_close"]),  # type: ignore[arg-type]
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class CalendarDay:
    date: date
    open: time
    close: time
    session_open: Optional[str] = None
    session_close: Optional[str] = None
    settlement_date: Optional[date] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalendarDay":
        return cls(
            date=parse_date(data["date"]),  # type: ignore[arg-type]
            open=time.fromisoformat(data["open"]),
            close=time.fromisoformat(data["close"]),
            session_open=data.get("session_open"),
            session_close=data.get("session_close"),
            settlement_date=parse_date(data.get("settlement_date")),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = to_wire(self)
        out["open"] = self.open.strftime("%H:%M")
        out["close"] = self.close.strftime("%H:%M")
        return out


# --- Assets ---
@dataclass(frozen=True)
class Asset:
    id: str
    symbol: str
    asset_class: AssetClass = wire_field(AssetClass.US_EQUITY, rename="class")
    exchange: str = ""
    name: str = ""
    status: AssetStatus = AssetStatus.ACTIVE
    tradable: bool = False
    marginable: bool = False
    shortable: bool = False
    easy_to_borrow: bool = False
    fractionable: bool = False
    raw: Optional[Dict[str, Any]] = raw_field()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Asset":
        return cls(
            id=str(data["id"]),
            symbol=str(data["symbol"]),
            asset_class=AssetClass(data.get("class") or "us_equity"),
            exchange=str(data.get("exchange") or ""),
            name=str(data.get("name") or ""),
            status=AssetStatus(data.get("status") or "active"),
            tradable=bool(data.get("tradable", False)),
            marginable=bool(data.get("marginable", False)),
            shortable=bool(data.get("shortable", False)),
            easy_to_borrow=bool(data.get("easy_to_borrow", False)),
            fractionable=bool(data.get("fractionable", False)),
            raw=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)
