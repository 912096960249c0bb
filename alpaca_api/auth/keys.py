"""Per-surface credential holders.

Each provider renders the authentication headers of exactly one scheme. The
secret material is kept private and is redacted from ``repr``.
"""

from __future__ import annotations

import base64
from typing import Dict

from ..core.errors import ValidationError

KEY_ID_HEADER = "APCA-API-KEY-ID"
SECRET_KEY_HEADER = "APCA-API-SECRET-KEY"
AUTHORIZATION_HEADER = "Authorization"


def _mask(value: str) -> str:
    return f"{value[:4]}***" if len(value) > 4 else "***"


class TradingAuth:
    """API key id / secret pair used by the trading and market data surfaces."""

    __slots__ = ("_key", "_secret")

    def __init__(self, key: str, secret: str) -> None:
        if not key or not secret:
            raise ValidationError("API key and secret key are required")
        self._key = key
        self._secret = secret

    def headers(self) -> Dict[str, str]:
        return {KEY_ID_HEADER: self._key, SECRET_KEY_HEADER: self._secret}

    def __repr__(self) -> str:
        return f"TradingAuth(key={_mask(self._key)!r})"


class BrokerAuth:
    """Broker API credential, sent as HTTP Basic.

    ``key`` is the raw ``"<key>:<secret>"`` string; it is base64-encoded when
    the header is rendered.
    """

    __slots__ = ("_key",)

    def __init__(self, key: str) -> None:
        if not key:
            raise ValidationError("Broker key is required")
        self._key = key

    @classmethod
    def from_pair(cls, key: str, secret: str) -> "BrokerAuth":
        if not key or not secret:
            raise ValidationError("Broker key and secret are required")
        return cls(f"{key}:{secret}")

    def headers(self) -> Dict[str, str]:
        token = base64.b64encode(self._key.encode("utf-8")).decode("ascii")
        return {AUTHORIZATION_HEADER: f"Basic {token}"}

    def __repr__(self) -> str:
        return f"BrokerAuth(key={_mask(self._key)!r})"
