"""
Error types raised by the Binance REST client.

Precondition failures subclass TypeError so they read naturally at the call
site. Exchange-side failures carry the response body untouched. Transport
failures (httpx errors, timeouts) are never wrapped.
"""

from typing import Any, Optional


class BinanceError(Exception):
    """Base class for all client errors."""


class InvalidQueryError(BinanceError, TypeError):
    """Query argument has the wrong type for the endpoint."""


class InvalidHandlerError(BinanceError, TypeError):
    """Completion handler is not callable."""


class BinanceAPIError(BinanceError):
    """Exchange responded with a status code outside 200-299.

    ``payload`` is the parsed JSON body, or the raw text when the body was not
    JSON. ``code`` and ``msg`` are lifted from the payload when present.
    """

    def __init__(self, status_code: int, payload: Any):
        self.status_code = status_code
        self.payload = payload
        self.code: Optional[int] = None
        self.msg: Optional[str] = None
        if isinstance(payload, dict):
            self.code = payload.get("code")
            self.msg = payload.get("msg")
        super().__init__(f"Response code {status_code}")

    def __str__(self) -> str:
        if self.code is not None:
            return f"Response code {self.status_code} ({self.code}): {self.msg}"
        return f"Response code {self.status_code}"
