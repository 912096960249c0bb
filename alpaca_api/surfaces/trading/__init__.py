from .client import TradingClient
from .endpoints import *  # noqa: F401,F403
from .endpoints import __all__ as _endpoints

__all__ = ["TradingClient", *_endpoints]
