"""Market data records.

Historical endpoints answer with one object keyed by symbol, e.g.::

    {"bars": {"AAPL": [{"t": ..., "o": ...}]}, "next_page_token": "..."}

Each record keeps the symbol it was listed under so a page can be flattened
into a single ordered list of items.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from .schemas import parse_date, parse_datetime, parse_float, to_wire, wire_field


class TimeframeUnit(str, Enum):
    MINUTE = "T"
    HOUR = "H"
    DAY = "D"
    WEEK = "W"
    MONTH = "M"


_UNIT_ALIASES = {
    "T": TimeframeUnit.MINUTE,
    "Min": TimeframeUnit.MINUTE,
    "H": TimeframeUnit.HOUR,
    "Hour": TimeframeUnit.HOUR,
    "D": TimeframeUnit.DAY,
    "Day": TimeframeUnit.DAY,
    "W": TimeframeUnit.WEEK,
    "Week": TimeframeUnit.WEEK,
    "M": TimeframeUnit.MONTH,
    "Month": TimeframeUnit.MONTH,
}
_TIMEFRAME = re.compile(r"^(\d+)([A-Za-z]+)$")


@dataclass(frozen=True)
class Timeframe:
    """Bar aggregation period, rendered as ``5T``, ``1H``, ``1D``, ``1W`` or ``3M``."""

    amount: int
    unit: TimeframeUnit

    def __post_init__(self) -> None:
        allowed = {
            TimeframeUnit.MINUTE: range(1, 60),
            TimeframeUnit.HOUR: range(1, 24),
            TimeframeUnit.DAY: (1,),
            TimeframeUnit.WEEK: (1,),
            TimeframeUnit.MONTH: (1, 2, 3, 4, 6, 12),
        }[self.unit]
        if self.amount not in allowed:
            raise ValueError(f"Invalid timeframe amount {self.amount} for unit {self.unit.name.lower()}")

    @classmethod
    def minutes(cls, amount: int) -> "Timeframe":
        return cls(amount, TimeframeUnit.MINUTE)

    @classmethod
    def hours(cls, amount: int) -> "Timeframe":
        return cls(amount, TimeframeUnit.HOUR)

    @classmethod
    def day(cls) -> "Timeframe":
        return cls(1, TimeframeUnit.DAY)

    @classmethod
    def week(cls) -> "Timeframe":
        return cls(1, TimeframeUnit.WEEK)

    @classmethod
    def months(cls, amount: int) -> "Timeframe":
        return cls(amount, TimeframeUnit.MONTH)

    @classmethod
    def parse(cls, text: str) -> "Timeframe":
        m = _TIMEFRAME.match(text.strip())
        if not m or m.group(2) not in _UNIT_ALIASES:
            raise ValueError(f"Invalid timeframe {text!r}")
        return cls(int(m.group(1)), _UNIT_ALIASES[m.group(2)])

    def __str__(self) -> str:
        return f"{self.amount}{self.unit.value}"

    def to_dict(self) -> str:  # encoded as its string form
        return str(self)


@dataclass(frozen=True)
class Bar:
    timestamp: datetime = wire_field(rename="t")
    open: float = wire_field(rename="o")
    high: float = wire_field(rename="h")
    low: float = wire_field(rename="l")
    close: float = wire_field(rename="c")
    volume: int = wire_field(rename="v")
    trade_count: Optional[int] = wire_field(None, rename="n")
    vwap: Optional[float] = wire_field(None, rename="vw")
    symbol: Optional[str] = wire_field(None, skip=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], symbol: Optional[str] = None) -> "Bar":
        return cls(
            timestamp=parse_datetime(data["t"]),  # type: ignore[arg-type]
            open=float(data["o"]),
            high=float(data["h"]),
            low=float(data["l"]),
            close=float(data["c"]),
            volume=int(data["v"]),
            trade_count=int(data["n"]) if data.get("n") is not None else None,
            vwap=parse_float(data.get("vw")),
            symbol=symbol,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Trade:
    timestamp: datetime = wire_field(rename="t")
    price: float = wire_field(rename="p")
    size: float = wire_field(rename="s")
    exchange: Optional[str] = wire_field(None, rename="x")
    trade_id: Optional[int] = wire_field(None, rename="i")
    conditions: List[str] = wire_field(rename="c", default_factory=list)
    tape: Optional[str] = wire_field(None, rename="z")
    symbol: Optional[str] = wire_field(None, skip=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], symbol: Optional[str] = None) -> "Trade":
        return cls(
            timestamp=parse_datetime(data["t"]),  # type: ignore[arg-type]
            price=float(data["p"]),
            size=float(data["s"]),
            exchange=data.get("x"),
            trade_id=data.get("i"),
            conditions=list(data.get("c") or []),
            tape=data.get("z"),
            symbol=symbol,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Quote:
    timestamp: datetime = wire_field(rename="t")
    bid_price: float = wire_field(rename="bp")
    bid_size: float = wire_field(rename="bs")
    ask_price: float = wire_field(rename="ap")
    ask_size: float = wire_field(rename="as")
    bid_exchange: Optional[str] = wire_field(None, rename="bx")
    ask_exchange: Optional[str] = wire_field(None, rename="ax")
    conditions: List[str] = wire_field(rename="c", default_factory=list)
    tape: Optional[str] = wire_field(None, rename="z")
    symbol: Optional[str] = wire_field(None, skip=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], symbol: Optional[str] = None) -> "Quote":
        return cls(
            timestamp=parse_datetime(data["t"]),  # type: ignore[arg-type]
            bid_price=float(data["bp"]),
            bid_size=float(data["bs"]),
            ask_price=float(data["ap"]),
            ask_size=float(data["as"]),
            bid_exchange=data.get("bx"),
            ask_exchange=data.get("ax"),
            conditions=list(data.get("c") or []),
            tape=data.get("z"),
            symbol=symbol,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class AuctionPrint:
    timestamp: datetime = wire_field(rename="t")
    exchange_code: str = wire_field(rename="x")
    price: float = wire_field(rename="p")
    condition: str = wire_field(rename="c")
    size: Optional[int] = wire_field(None, rename="s")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuctionPrint":
        return cls(
            timestamp=parse_datetime(data["t"]),  # type: ignore[arg-type]
            exchange_code=str(data["x"]),
            price=float(data["p"]),
            condition=str(data["c"]),
            size=data.get("s"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


@dataclass(frozen=True)
class Auction:
    """Opening and closing auction prints of one trading day."""

    date: date = wire_field(rename="d")
    opening: List[AuctionPrint] = wire_field(rename="o", default_factory=list)
    closing: List[AuctionPrint] = wire_field(rename="c", default_factory=list)
    symbol: Optional[str] = wire_field(None, skip=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], symbol: Optional[str] = None) -> "Auction":
        return cls(
            date=parse_date(data["d"]),  # type: ignore[arg-type]
            opening=[AuctionPrint.from_dict(p) for p in data.get("o") or []],
            closing=[AuctionPrint.from_dict(p) for p in data.get("c") or []],
            symbol=symbol,
        )

    def to_dict(self) -> Dict[str, Any]:
        return to_wire(self)


def _by_symbol(payload: Any, record: Any) -> Dict[str, List[Any]]:
    if not payload:
        return {}
    return {sym: [record.from_dict(item, sym) for item in items or []] for sym, items in payload.items()}


@dataclass(frozen=True)
class HistoricalBars:
    bars: Dict[str, List[Bar]] = field(default_factory=dict)
    next_page_token: Optional[str] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalBars":
        return cls(_by_symbol(data.get("bars"), Bar), data.get("next_page_token"), data.get("currency"))

    def items(self) -> List[Bar]:
        return [bar for bars in self.bars.values() for bar in bars]


@dataclass(frozen=True)
class HistoricalTrades:
    trades: Dict[str, List[Trade]] = field(default_factory=dict)
    next_page_token: Optional[str] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalTrades":
        return cls(_by_symbol(data.get("trades"), Trade), data.get("next_page_token"), data.get("currency"))

    def items(self) -> List[Trade]:
        return [t for trades in self.trades.values() for t in trades]


@dataclass(frozen=True)
class HistoricalQuotes:
    quotes: Dict[str, List[Quote]] = field(default_factory=dict)
    next_page_token: Optional[str] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalQuotes":
        return cls(_by_symbol(data.get("quotes"), Quote), data.get("next_page_token"), data.get("currency"))

    def items(self) -> List[Quote]:
        return [q for quotes in self.quotes.values() for q in quotes]


@dataclass(frozen=True)
class HistoricalAuctions:
    auctions: Dict[str, List[Auction]] = field(default_factory=dict)
    next_page_token: Optional[str] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoricalAuctions":
        return cls(_by_symbol(data.get("auctions"), Auction), data.get("next_page_token"), data.get("currency"))

    def items(self) -> List[Auction]:
        return [a for auctions in self.auctions.values() for a in auctions]


BAR_COLUMNS = ["symbol", "open", "high", "low", "close", "volume", "trade_count", "vwap"]


def bars_frame(bars: Iterable[Bar]) -> pd.DataFrame:
    """Bars as a DataFrame indexed by timestamp."""

    rows = [
        {
            "timestamp": b.timestamp,
            "symbol": b.symbol,
            "open": b.open,
            "high": b.high,
            "low": b.low,
            "close": b.close,
            "volume": b.volume,
            "trade_count": b.trade_count,
            "vwap": b.vwap,
        }
        for b in bars
    ]
    if not rows:
        return pd.DataFrame(columns=BAR_COLUMNS, index=pd.DatetimeIndex([], name="timestamp"))
    return pd.DataFrame(rows).set_index("timestamp")[BAR_COLUMNS]
