"""
Response beautification

Binance payloads use terse wire keys (``p``, ``q``, ``T``) and positional
arrays (klines, depth levels). The Beautifier renames those into descriptive
keys. Tables are selected by a type: the endpoint type for REST list
payloads, the parent key for nested values, or ``<e>Event`` for event
payloads carrying an ``e`` tag.

Unknown keys and unknown types pass through unchanged. Input is never mutated.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

Table = Union[Dict[str, str], List[str]]

_DEPTH_LEVEL = ["price", "quantity", "ignored"]

BEAUTIFICATIONS: Dict[str, Table] = {
    "aggTrades": {
        "a": "aggTradeId",
        "p": "price",
        "q": "quantity",
        "f": "firstTradeId",
        "l": "lastTradeId",
        "T": "timestamp",
        "m": "maker",
        "M": "bestPriceMatch",
    },
    "klines": [
        "openTime",
        "open",
        "high",
        "low",
        "close",
        "volume",
        "closeTime",
        "quoteAssetVolume",
        "trades",
        "takerBaseAssetVolume",
        "takerQuoteAssetVolume",
        "ignored",
    ],
    "bids": _DEPTH_LEVEL,
    "asks": _DEPTH_LEVEL,
    "depthUpdateEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "U": "firstUpdateId",
        "u": "lastUpdateId",
        "b": "bidDepthDelta",
        "a": "askDepthDelta",
    },
    "bidDepthDelta": _DEPTH_LEVEL,
    "askDepthDelta": _DEPTH_LEVEL,
    "klineEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "k": "kline",
    },
    "kline": {
        "t": "startTime",
        "T": "endTime",
        "s": "symbol",
        "i": "interval",
        "f": "firstTradeId",
        "L": "lastTradeId",
        "o": "open",
        "c": "close",
        "h": "high",
        "l": "low",
        "v": "volume",
        "n": "trades",
        "x": "final",
        "q": "quoteVolume",
        "V": "volumeActive",
        "Q": "quoteVolumeActive",
        "B": "ignored",
    },
    "aggTradeEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "a": "tradeId",
        "p": "price",
        "q": "quantity",
        "f": "firstTradeId",
        "l": "lastTradeId",
        "T": "time",
        "m": "maker",
        "M": "ignored",
    },
    "tradeEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "t": "tradeId",
        "p": "price",
        "q": "quantity",
        "b": "buyerOrderId",
        "a": "sellerOrderId",
        "T": "time",
        "m": "maker",
        "M": "ignored",
    },
    "24hrTickerEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "p": "priceChange",
        "P": "priceChangePercent",
        "w": "weightedAveragePrice",
        "x": "previousClose",
        "c": "currentClose",
        "Q": "closeQuantity",
        "b": "bestBid",
        "B": "bestBidQuantity",
        "a": "bestAskPrice",
        "A": "bestAskQuantity",
        "o": "open",
        "h": "high",
        "l": "low",
        "v": "baseAssetVolume",
        "q": "quoteAssetVolume",
        "O": "openTime",
        "C": "closeTime",
        "F": "firstTradeId",
        "L": "lastTradeId",
        "n": "trades",
    },
    "outboundAccountInfoEvent": {
        "e": "eventType",
        "E": "eventTime",
        "m": "makerCommission",
        "t": "takerCommission",
        "b": "buyerCommission",
        "s": "sellerCommission",
        "T": "canTrade",
        "W": "canWithdraw",
        "D": "canDeposit",
        "u": "lastUpdateTime",
        "B": "balances",
    },
    "balances": {
        "a": "asset",
        "f": "availableBalance",
        "l": "onOrderBalance",
    },
    "executionReportEvent": {
        "e": "eventType",
        "E": "eventTime",
        "s": "symbol",
        "c": "newClientOrderId",
        "S": "side",
        "o": "orderType",
        "f": "timeInForce",
        "q": "quantity",
        "p": "price",
        "P": "stopPrice",
        "F": "icebergQuantity",
        "g": "orderListId",
        "C": "originalClientOrderId",
        "x": "executionType",
        "X": "orderStatus",
        "r": "rejectReason",
        "i": "orderId",
        "l": "lastTradeQuantity",
        "z": "accumulatedQuantity",
        "L": "lastTradePrice",
        "n": "commission",
        "N": "commissionAsset",
        "T": "tradeTime",
        "t": "tradeId",
        "I": "ignored",
        "w": "isWorking",
        "m": "maker",
        "M": "ignoredFlag",
        "O": "creationTime",
        "Z": "cumulativeQuoteQuantity",
        "Y": "lastQuoteQuantity",
        "Q": "quoteOrderQuantity",
    },
}


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class Beautifier:
    """Recursive key renamer driven by per-type tables."""

    def __init__(self, tables: Optional[Dict[str, Table]] = None):
        self._tables = BEAUTIFICATIONS if tables is None else tables

    def beautify(self, payload: Any, type: Optional[str] = None) -> Any:
        """
        Return a copy of payload with known abbreviated keys renamed

        Args:
            payload: Parsed response (dict, list, scalar or raw string)
            type: Table selector; None lets the payload shape decide

        Returns:
            New payload; identity for anything no table covers
        """
        if type is None:
            return self._beautify_untyped(payload)

        table = self._tables.get(type)
        if table is None:
            return self._beautify_untyped(payload)

        if isinstance(table, list):
            return self._beautify_positional(payload, table, type)
        return self._beautify_keyed(payload, table, type)

    def _beautify_untyped(self, payload: Any) -> Any:
        if isinstance(payload, dict):
            event = payload.get("e")
            if isinstance(event, str) and f"{event}Event" in self._tables:
                return self.beautify(payload, f"{event}Event")
            return {key: self.beautify(value, key) for key, value in payload.items()}
        if _is_sequence(payload):
            return [self.beautify(item) for item in payload]
        return payload

    def _beautify_positional(self, payload: Any, names: Sequence[str], type: str) -> Any:
        if not _is_sequence(payload):
            return payload
        if not payload:
            return []
        # A sequence of rows, e.g. the full depth side rather than one level
        if all(_is_sequence(item) or isinstance(item, dict) for item in payload):
            return [self.beautify(item, type) for item in payload]

        result: Dict[str, Any] = {}
        for index, value in enumerate(payload):
            key = names[index] if index < len(names) else str(index)
            result[key] = value
        return result

    def _beautify_keyed(self, payload: Any, table: Dict[str, str], type: str) -> Any:
        if _is_sequence(payload):
            return [self.beautify(item, type) for item in payload]
        if not isinstance(payload, dict):
            return payload

        result: Dict[str, Any] = {}
        for key, value in payload.items():
            new_key = table.get(key, key)
            if isinstance(value, dict) or _is_sequence(value):
                value = self.beautify(value, new_key)
            result[new_key] = value
        return result


beautifier = Beautifier()


def beautify(payload: Any, type: Optional[str] = None) -> Any:
    """Beautify with the default tables."""
    return beautifier.beautify(payload, type)
