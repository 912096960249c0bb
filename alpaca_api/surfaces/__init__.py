"""Per-surface descriptors and client dispatchers."""

from .broker import AccountView, BrokerClient
from .market_data import MarketDataClient
from .trading import TradingClient

__all__ = ["AccountView", "BrokerClient", "MarketDataClient", "TradingClient"]
