from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

from .core.errors import ValidationError

DEFAULT_TIMEOUT = 15.0


def getenv(key: str, default: Optional[str] = None, *aliases: str) -> Optional[str]:
    """Return first non-empty env var among key and aliases."""

    for k in (key, *aliases):
        v = os.getenv(k)
        if v not in (None, ""):
            return v
    return default


def getenv_float(key: str, default: float) -> float:
    v = getenv(key)
    if v is None:
        return default
    try:
        return float(v)
    except ValueError as e:
        raise ValidationError(f"{key} must be a number, got {v!r}") from e


@dataclass(frozen=True)
class Environment:
    """Base URLs of the three API surfaces for one deployment."""

    name: str
    trading_url: str
    broker_url: str
    data_url: str


LIVE = Environment(
    name="live",
    trading_url="https://api.alpaca.markets/v2",
    broker_url="https://broker-api.alpaca.markets/v1",
    data_url="https://data.alpaca.markets/v2",
)
PAPER = Environment(
    name="paper",
    trading_url="https://paper-api.alpaca.markets/v2",
    broker_url="https://broker-api.sandbox.alpaca.markets/v1",
    data_url="https://data.alpaca.markets/v2",
)
SANDBOX = Environment(
    name="sandbox",
    trading_url="https://paper-api.alpaca.markets/v2",
    broker_url="https://broker-api.sandbox.alpaca.markets/v1",
    data_url="https://data.sandbox.alpaca.markets/v2",
)

ENVIRONMENTS: Dict[str, Environment] = {env.name: env for env in (LIVE, PAPER, SANDBOX)}


def environment(name: Optional[str] = None) -> Environment:
    """Resolve a named preset, applying APCA_*_BASE_URL overrides.

    The name defaults to APCA_ENVIRONMENT, then to "paper".
    """

    key = (name or getenv("APCA_ENVIRONMENT", "paper") or "paper").strip().lower()
    if key not in ENVIRONMENTS:
        raise ValidationError(f"Unknown environment '{key}'. Known: {sorted(ENVIRONMENTS)}")
    env = ENVIRONMENTS[key]
    return replace(
        env,
        trading_url=getenv("APCA_API_BASE_URL", env.trading_url) or env.trading_url,
        broker_url=getenv("APCA_BROKER_BASE_URL", env.broker_url) or env.broker_url,
        data_url=getenv("APCA_DATA_BASE_URL", env.data_url) or env.data_url,
    )


def http_timeout() -> float:
    return getenv_float("APCA_HTTP_TIMEOUT", DEFAULT_TIMEOUT)
