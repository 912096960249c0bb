from .account_view import AccountView
from .client import BrokerClient
from .endpoints import *  # noqa: F401,F403
from .endpoints import __all__ as _endpoints

__all__ = ["AccountView", "BrokerClient", *_endpoints]
