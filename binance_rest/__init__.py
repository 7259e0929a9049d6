"""
Binance REST API client

Provides:
- Request construction and HMAC-SHA256 signing
- Dispatch with awaitable or handler-style delivery
- Response beautification (terse wire keys -> descriptive keys)
"""

from binance_rest.beautifier import Beautifier, beautify
from binance_rest.config import BinanceSettings, ClientConfig
from binance_rest.endpoints import ENDPOINTS, Endpoint, HttpMethod, SecurityLevel
from binance_rest.exceptions import BinanceAPIError, BinanceError, InvalidHandlerError, InvalidQueryError
from binance_rest.rest import BinanceRest

__all__ = [
    "BinanceRest",
    "Beautifier",
    "beautify",
    "BinanceSettings",
    "ClientConfig",
    "ENDPOINTS",
    "Endpoint",
    "HttpMethod",
    "SecurityLevel",
    "BinanceError",
    "BinanceAPIError",
    "InvalidHandlerError",
    "InvalidQueryError",
]
