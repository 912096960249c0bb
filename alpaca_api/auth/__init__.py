"""Authentication providers and credential loading."""

from .keys import BrokerAuth, TradingAuth
from .tokens import broker_auth_from_env, trading_auth_from_env

__all__ = ["BrokerAuth", "TradingAuth", "broker_auth_from_env", "trading_auth_from_env"]
