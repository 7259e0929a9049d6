"""
HTTP transport for the REST client

The client only ever hands the transport a fully built RequestDescriptor and
gets back a status code and the raw body text. Anything matching the
``Transport`` signature can be injected in place of the httpx default.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    timeout: int = 15000  # milliseconds


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    body: str


Transport = Callable[[RequestDescriptor], Awaitable[TransportResponse]]


async def httpx_transport(request: RequestDescriptor) -> TransportResponse:
    """
    Send a request with httpx

    The URL is sent as built so a signed query string reaches the exchange
    byte-for-byte. Network errors and timeouts propagate as httpx exceptions.
    """
    async with httpx.AsyncClient(timeout=request.timeout / 1000.0) as client:
        try:
            response = await client.request(request.method, request.url, headers=request.headers)
        except httpx.HTTPError as e:
            logger.error(f"Transport failure on {request.method} {_strip_query(request.url)}: {e!r}")
            raise

    return TransportResponse(status_code=response.status_code, body=response.text)


def _strip_query(url: str) -> str:
    """Drop the query string so signatures never reach the logs"""
    return url.split("?", 1)[0]
