"""
Shared test fixtures for binance_rest tests.

Provides reusable fixtures for:
- Fake transports returning canned responses
- Clients wired to those transports
- A frozen clock for timestamp injection
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from binance_rest.rest import BinanceRest
from binance_rest.transport import TransportResponse

FROZEN_MS = 1700000000000


# ---------------------------------------------------------------------------
# Transport fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_transport():
    """Factory for an AsyncMock transport returning one canned response.

    ``body`` may be a str (sent as is) or any JSON-serializable object.
    """

    def _make(body="{}", status_code=200):
        if not isinstance(body, str):
            body = json.dumps(body)
        return AsyncMock(return_value=TransportResponse(status_code=status_code, body=body))

    return _make


@pytest.fixture
def transport(make_transport):
    return make_transport({})


# ---------------------------------------------------------------------------
# Client fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def client(transport):
    """Client with test credentials and the default fake transport."""
    return BinanceRest(api_key="test-key", api_secret="test-secret", transport=transport)


@pytest.fixture
def frozen_clock():
    """Pin timestamp injection to FROZEN_MS."""
    with patch("binance_rest.query.time.time", return_value=FROZEN_MS / 1000):
        yield FROZEN_MS
