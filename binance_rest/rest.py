"""
Binance REST client

Every public method maps onto one Endpoint and accepts ``(query=None,
handler=None)``:

- without a handler the method returns an awaitable resolving to the
  beautified payload (or raising BinanceAPIError / the transport error)
- with a handler the request is scheduled and ``handler(error, payload)`` is
  called when it completes; the method itself returns None. An exception
  raised by the handler is logged when the request ran as a task, and
  propagates to the caller when there was no running loop

Argument checking and request construction happen synchronously inside the
method call, so bad arguments fail before anything is sent.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from binance_rest.auth import api_key_headers, sign_query
from binance_rest.beautifier import Beautifier
from binance_rest.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_MS, BinanceSettings, ClientConfig
from binance_rest.endpoints import ENDPOINTS, Endpoint
from binance_rest.exceptions import BinanceAPIError, InvalidHandlerError
from binance_rest.query import QueryArg, inject_timestamp, normalize_query, serialize_query, with_recv_window
from binance_rest.transport import RequestDescriptor, Transport, httpx_transport

logger = logging.getLogger(__name__)

Handler = Callable[[Optional[BaseException], Any], None]


def parse_body(body: str) -> Any:
    """Decode JSON, falling back to the raw text when the body is not JSON"""
    try:
        return json.loads(body)
    except (TypeError, ValueError):
        return body


def is_success(status_code: int) -> bool:
    return 200 <= status_code <= 299


class BinanceRest:
    """Binance REST API client"""

    def __init__(
        self,
        api_key: str = "",
        api_secret: str = "",
        recv_window: Optional[int] = None,
        timeout: int = DEFAULT_TIMEOUT_MS,
        disable_beautification: bool = False,
        base_url: str = DEFAULT_BASE_URL,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
    ):
        if config is None:
            config = ClientConfig(
                api_key=api_key,
                api_secret=api_secret,
                recv_window=recv_window,
                timeout=timeout,
                disable_beautification=disable_beautification,
                base_url=base_url,
            )
        self._config = config
        self._transport = transport or httpx_transport
        self._beautifier = Beautifier()

        # Handler-style tasks, held so they are not garbage collected mid-flight
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls, settings: Optional[BinanceSettings] = None, transport: Optional[Transport] = None
    ) -> "BinanceRest":
        """Build a client from BINANCE_* environment variables / .env"""
        settings = settings or BinanceSettings()
        return cls(config=settings.to_client_config(), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def api_key(self) -> str:
        return self._config.api_key

    @property
    def recv_window(self) -> Optional[int]:
        return self._config.recv_window

    @property
    def timeout(self) -> int:
        return self._config.timeout

    @property
    def disable_beautification(self) -> bool:
        return self._config.disable_beautification

    # ------------------------------------------------------------------
    # Request construction
    # ------------------------------------------------------------------

    def build_request(self, endpoint: Endpoint, query: QueryArg = None) -> RequestDescriptor:
        """
        Build the outgoing request for an endpoint

        Args:
            endpoint: Endpoint descriptor
            query: Mapping of parameters, a bare primary-key string, or None

        Returns:
            RequestDescriptor with final URL, method, headers and timeout

        Raises:
            InvalidQueryError: query type not accepted by the endpoint
        """
        params = normalize_query(endpoint, query)
        if endpoint.timestamped:
            inject_timestamp(params)

        url = f"{self._config.base_url}{endpoint.path}"
        if endpoint.signed:
            with_recv_window(params, self._config.recv_window)
            _, signed = sign_query(self._config.api_secret, params)
            url += "?" + signed
        else:
            query_string = serialize_query(params)
            if query_string:
                url += "?" + query_string

        headers: Dict[str, str] = {}
        if endpoint.needs_api_key:
            headers.update(api_key_headers(self._config.api_key))

        return RequestDescriptor(
            url=url,
            method=endpoint.method.value,
            headers=headers,
            timeout=self._config.timeout,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _execute(self, endpoint: Endpoint, request: RequestDescriptor) -> Any:
        """Send a built request and return the normalized payload, or raise"""
        logger.debug(f"{request.method} {endpoint.path}")

        response = await self._transport(request)
        payload = parse_body(response.body)

        if not is_success(response.status_code):
            logger.warning(f"Binance API error {response.status_code} on {request.method} {endpoint.path}: {payload}")
            raise BinanceAPIError(response.status_code, payload)

        return self._do_beautifications(payload, endpoint.type)

    def _do_beautifications(self, payload: Any, type: str) -> Any:
        if self._config.disable_beautification:
            return payload
        if isinstance(payload, list):
            return [self._beautifier.beautify(item, type) for item in payload]
        if isinstance(payload, dict):
            return self._beautifier.beautify(payload)
        return payload

    def _make_request(self, name: str, query: QueryArg, handler: Optional[Handler]) -> Optional[Awaitable[Any]]:
        if handler is not None and not callable(handler):
            raise InvalidHandlerError("handler must be callable or None")

        endpoint = ENDPOINTS[name]
        request = self.build_request(endpoint, query)
        result = self._execute(endpoint, request)

        if handler is None:
            return result
        self._deliver(result, handler)
        return None

    def _deliver(self, result: Awaitable[Any], handler: Handler) -> None:
        """Route the outcome of a request into ``handler(error, payload)``"""

        async def _run() -> None:
            try:
                payload = await result
            except BinanceAPIError as e:
                handler(e, e.payload)
                return
            except Exception as e:
                handler(e, None)
                return
            handler(None, payload)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Synchronous caller: drive the request to completion here
            asyncio.run(_run())
            return

        task = loop.create_task(_run())
        self._pending.add(task)
        task.add_done_callback(self._handler_done)

    def _handler_done(self, task: asyncio.Task) -> None:
        """Drop a finished handler task, logging anything the handler raised"""
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Completion handler raised {error!r}", exc_info=error)

    # ------------------------------------------------------------------
    # Public market data
    # ------------------------------------------------------------------

    def ping(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Test connectivity"""
        return self._make_request("ping", query, handler)

    def time(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Server time"""
        return self._make_request("time", query, handler)

    def depth(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Order book; accepts a bare symbol"""
        return self._make_request("depth", query, handler)

    def trades(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Recent trades; accepts a bare symbol"""
        return self._make_request("trades", query, handler)

    def historical_trades(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Older trades (API key required); accepts a bare symbol"""
        return self._make_request("historical_trades", query, handler)

    def agg_trades(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Compressed/aggregate trades; accepts a bare symbol"""
        return self._make_request("agg_trades", query, handler)

    def exchange_info(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("exchange_info", query, handler)

    def klines(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Candlesticks. Rows come back keyed (openTime, open, high, ...)"""
        return self._make_request("klines", query, handler)

    def ticker_24hr(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("ticker_24hr", query, handler)

    def ticker_price(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("ticker_price", query, handler)

    def book_ticker(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("book_ticker", query, handler)

    def all_book_tickers(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Deprecated upstream; prefer book_ticker()"""
        return self._make_request("all_book_tickers", query, handler)

    def all_prices(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Deprecated upstream; prefer ticker_price()"""
        return self._make_request("all_prices", query, handler)

    # ------------------------------------------------------------------
    # Orders and account (SIGNED)
    # ------------------------------------------------------------------

    def new_order(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("new_order", query, handler)

    def test_order(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Validate an order without sending it to the matching engine"""
        return self._make_request("test_order", query, handler)

    def query_order(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("query_order", query, handler)

    def cancel_order(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("cancel_order", query, handler)

    def open_orders(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("open_orders", query, handler)

    def all_orders(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("all_orders", query, handler)

    def account(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("account", query, handler)

    def my_trades(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("my_trades", query, handler)

    # ------------------------------------------------------------------
    # Withdrawal API (SIGNED, wapi)
    # ------------------------------------------------------------------

    def withdraw(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("withdraw", query, handler)

    def deposit_history(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Accepts a bare asset"""
        return self._make_request("deposit_history", query, handler)

    def withdraw_history(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Accepts a bare asset"""
        return self._make_request("withdraw_history", query, handler)

    def deposit_address(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Accepts a bare asset"""
        return self._make_request("deposit_address", query, handler)

    def account_status(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("account_status", query, handler)

    # ------------------------------------------------------------------
    # User data stream (API key)
    # ------------------------------------------------------------------

    def start_user_data_stream(self, query: QueryArg = None, handler: Optional[Handler] = None):
        return self._make_request("start_user_data_stream", query, handler)

    def keep_alive_user_data_stream(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Accepts a bare listenKey"""
        return self._make_request("keep_alive_user_data_stream", query, handler)

    def close_user_data_stream(self, query: QueryArg = None, handler: Optional[Handler] = None):
        """Accepts a bare listenKey"""
        return self._make_request("close_user_data_stream", query, handler)

    # camelCase names used by the JavaScript client
    historicalTrades = historical_trades
    aggTrades = agg_trades
    exchangeInfo = exchange_info
    ticker24hr = ticker_24hr
    tickerPrice = ticker_price
    bookTicker = book_ticker
    allBookTickers = all_book_tickers
    allPrices = all_prices
    newOrder = new_order
    testOrder = test_order
    queryOrder = query_order
    cancelOrder = cancel_order
    openOrders = open_orders
    allOrders = all_orders
    myTrades = my_trades
    depositHistory = deposit_history
    withdrawHistory = withdraw_history
    depositAddress = deposit_address
    accountStatus = account_status
    startUserDataStream = start_user_data_stream
    keepAliveUserDataStream = keep_alive_user_data_stream
    closeUserDataStream = close_user_data_stream
