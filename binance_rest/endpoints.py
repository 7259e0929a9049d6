"""
Endpoint descriptors for the Binance REST API

Each public client method is backed by exactly one Endpoint. Two path
families exist:
  api/v1|v3/...       spot API
  wapi/v3/....html    legacy withdrawal/account API
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class SecurityLevel(str, Enum):
    NONE = "NONE"
    API_KEY = "API_KEY"  # X-MBX-APIKEY header only
    SIGNED = "SIGNED"  # header + HMAC signature over the query string


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


@dataclass(frozen=True)
class Endpoint:
    """Immutable description of a single REST endpoint."""

    name: str
    path: str
    security: SecurityLevel = SecurityLevel.NONE
    method: HttpMethod = HttpMethod.GET
    # Parameter a bare string argument is coerced into (symbol, asset, listenKey)
    primary_key: Optional[str] = None
    # Inject the current time as ``timestamp`` when the caller omits it
    timestamped: bool = False

    @property
    def type(self) -> str:
        """Beautification context: last path segment (e.g. ``aggTrades``)"""
        return self.path.rsplit("/", 1)[-1]

    @property
    def signed(self) -> bool:
        return self.security is SecurityLevel.SIGNED

    @property
    def needs_api_key(self) -> bool:
        return self.security in (SecurityLevel.API_KEY, SecurityLevel.SIGNED)


def _public(name: str, path: str, primary_key: Optional[str] = None) -> Endpoint:
    return Endpoint(name, path, primary_key=primary_key)


def _signed(
    name: str, path: str, method: HttpMethod = HttpMethod.GET, primary_key: Optional[str] = None
) -> Endpoint:
    # The exchange rejects any SIGNED call without a timestamp
    return Endpoint(name, path, SecurityLevel.SIGNED, method, primary_key, timestamped=True)


def _keyed(name: str, path: str, method: HttpMethod, primary_key: Optional[str] = None) -> Endpoint:
    return Endpoint(name, path, SecurityLevel.API_KEY, method, primary_key)


ENDPOINTS: Dict[str, Endpoint] = {
    e.name: e
    for e in (
        # Public market data
        _public("ping", "api/v1/ping"),
        _public("time", "api/v1/time"),
        _public("depth", "api/v1/depth", "symbol"),
        _public("trades", "api/v1/trades", "symbol"),
        _keyed("historical_trades", "api/v1/historicalTrades", HttpMethod.GET, "symbol"),
        _public("agg_trades", "api/v1/aggTrades", "symbol"),
        _public("exchange_info", "api/v1/exchangeInfo"),
        _public("klines", "api/v1/klines"),
        _public("ticker_24hr", "api/v1/ticker/24hr", "symbol"),
        _public("ticker_price", "api/v3/ticker/price", "symbol"),
        _public("book_ticker", "api/v3/ticker/bookTicker", "symbol"),
        # Deprecated upstream in favour of ticker/bookTicker and ticker/price
        _public("all_book_tickers", "api/v1/ticker/allBookTickers"),
        _public("all_prices", "api/v1/ticker/allPrices"),
        # Orders and account
        _signed("new_order", "api/v3/order", HttpMethod.POST),
        _signed("test_order", "api/v3/order/test", HttpMethod.POST),
        _signed("query_order", "api/v3/order"),
        _signed("cancel_order", "api/v3/order", HttpMethod.DELETE),
        _signed("open_orders", "api/v3/openOrders", primary_key="symbol"),
        _signed("all_orders", "api/v3/allOrders", primary_key="symbol"),
        _signed("account", "api/v3/account"),
        _signed("my_trades", "api/v3/myTrades", primary_key="symbol"),
        # Withdrawal API
        _signed("withdraw", "wapi/v3/withdraw.html", HttpMethod.POST),
        _signed("deposit_history", "wapi/v3/depositHistory.html", primary_key="asset"),
        _signed("withdraw_history", "wapi/v3/withdrawHistory.html", primary_key="asset"),
        _signed("deposit_address", "wapi/v3/depositAddress.html", primary_key="asset"),
        _signed("account_status", "wapi/v3/accountStatus.html"),
        # User data stream
        _keyed("start_user_data_stream", "api/v1/userDataStream", HttpMethod.POST),
        _keyed("keep_alive_user_data_stream", "api/v1/userDataStream", HttpMethod.PUT, "listenKey"),
        _keyed("close_user_data_stream", "api/v1/userDataStream", HttpMethod.DELETE, "listenKey"),
    )
}
