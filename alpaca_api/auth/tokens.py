from __future__ import annotations

from dotenv import find_dotenv, load_dotenv

from ..config import getenv
from ..core.errors import AuthError
from .keys import BrokerAuth, TradingAuth


def trading_auth_from_env() -> TradingAuth:
    """Build the key pair from APCA_API_KEY_ID / APCA_API_SECRET_KEY (.env honoured)."""

    load_dotenv(find_dotenv(usecwd=True))
    key = getenv("APCA_API_KEY_ID", None, "APCA_API_KEY")
    secret = getenv("APCA_API_SECRET_KEY", None, "APCA_SECRET_KEY")
    if not key or not secret:
        raise AuthError("APCA_API_KEY_ID and APCA_API_SECRET_KEY must be set")
    return TradingAuth(key, secret)


def broker_auth_from_env() -> BrokerAuth:
    load_dotenv(find_dotenv(usecwd=True))
    key = getenv("APCA_BROKER_KEY")
    secret = getenv("APCA_BROKER_SECRET")
    if not key or not secret:
        raise AuthError("APCA_BROKER_KEY and APCA_BROKER_SECRET must be set")
    return BrokerAuth.from_pair(key, secret)
