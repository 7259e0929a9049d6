"""
Request signing for SIGNED endpoints

The signature is the hex HMAC-SHA256 of the canonical query string, keyed with
the account secret, and is appended as the final ``signature`` parameter.
"""

import hashlib
import hmac
from typing import Any, Dict, Tuple

from binance_rest.query import serialize_query

API_KEY_HEADER = "X-MBX-APIKEY"


def generate_signature(api_secret: str, query_string: str) -> str:
    """
    Generate HMAC-SHA256 signature for a query string

    Args:
        api_secret: Account API secret
        query_string: Canonical query string exactly as it will be sent

    Returns:
        HMAC signature hex string
    """
    return hmac.new(api_secret.encode("utf-8"), query_string.encode("utf-8"), hashlib.sha256).hexdigest()


def sign_query(api_secret: str, query: Dict[str, Any]) -> Tuple[str, str]:
    """
    Serialize a query once and sign those exact bytes

    Returns:
        (canonical query string, signed query string). The signed string is
        the canonical one with ``signature=<hex>`` appended and nothing else
        changed.
    """
    canonical = serialize_query(query)
    signature = generate_signature(api_secret, canonical)
    separator = "&" if canonical else ""
    return canonical, f"{canonical}{separator}signature={signature}"


def api_key_headers(api_key: str) -> Dict[str, str]:
    return {API_KEY_HEADER: api_key}
