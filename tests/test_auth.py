"""
Tests for binance_rest/auth.py

Covers HMAC-SHA256 signature generation and signed query assembly.
"""

import hashlib
import hmac as hmac_mod

from binance_rest.auth import API_KEY_HEADER, api_key_headers, generate_signature, sign_query

# Example key pair and request published in the exchange's API documentation
DOC_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"
DOC_QUERY = (
    "symbol=LTCBTC&side=BUY&type=LIMIT&timeInForce=GTC&quantity=1"
    "&price=0.1&recvWindow=5000&timestamp=1499827319559"
)
DOC_SIGNATURE = "c8db56825ae71d6d79447849e617115f4a920fa2acdcab2b053c4b2838bd6b71"


# ---------------------------------------------------------------------------
# generate_signature
# ---------------------------------------------------------------------------


class TestGenerateSignature:
    """Tests for generate_signature()"""

    def test_matches_documented_signature(self):
        """Happy path: known-answer vector from the API documentation."""
        assert generate_signature(DOC_SECRET, DOC_QUERY) == DOC_SIGNATURE

    def test_produces_correct_hmac(self):
        """Happy path: signature matches a manually computed HMAC-SHA256."""
        expected = hmac_mod.new(b"my-secret", b"symbol=BTCUSDT&timestamp=1", hashlib.sha256).hexdigest()
        assert generate_signature("my-secret", "symbol=BTCUSDT&timestamp=1") == expected

    def test_is_deterministic(self):
        """Edge case: same secret and query always produce the same signature."""
        assert generate_signature("s", "a=1") == generate_signature("s", "a=1")

    def test_different_secrets_produce_different_signatures(self):
        """Edge case: different secrets produce different results."""
        assert generate_signature("secret-a", "a=1") != generate_signature("secret-b", "a=1")

    def test_signature_is_lowercase_hex(self):
        sig = generate_signature("s", "")
        assert len(sig) == 64
        assert sig == sig.lower()
        int(sig, 16)


# ---------------------------------------------------------------------------
# sign_query
# ---------------------------------------------------------------------------


class TestSignQuery:
    """Tests for sign_query()"""

    def test_documented_request_round_trip(self):
        """Happy path: a dict in documented order yields the documented signature."""
        query = {
            "symbol": "LTCBTC",
            "side": "BUY",
            "type": "LIMIT",
            "timeInForce": "GTC",
            "quantity": 1,
            "price": 0.1,
            "recvWindow": 5000,
            "timestamp": 1499827319559,
        }
        canonical, signed = sign_query(DOC_SECRET, query)

        assert canonical == DOC_QUERY
        assert signed == f"{DOC_QUERY}&signature={DOC_SIGNATURE}"

    def test_signed_string_only_appends_signature(self):
        """Invariant: canonical bytes are untouched after signing."""
        canonical, signed = sign_query("s", {"symbol": "BTCUSDT", "timestamp": 1})

        assert signed.startswith(canonical + "&signature=")
        assert signed.count("signature=") == 1

    def test_empty_query_has_no_leading_ampersand(self):
        """Edge case: empty query signs the empty string."""
        canonical, signed = sign_query("s", {})

        assert canonical == ""
        assert signed == f"signature={generate_signature('s', '')}"

    def test_tampering_any_parameter_changes_signature(self):
        """Property: changing any single parameter changes the signature."""
        base = {"symbol": "BTCUSDT", "side": "BUY", "quantity": "1", "timestamp": 1700000000000}
        _, base_signed = sign_query("s", base)
        base_sig = base_signed.rsplit("signature=", 1)[1]

        for key in base:
            tampered = dict(base)
            tampered[key] = f"{tampered[key]}0"
            _, signed = sign_query("s", tampered)
            assert signed.rsplit("signature=", 1)[1] != base_sig, key

    def test_parameter_order_is_part_of_signature(self):
        _, a = sign_query("s", {"a": 1, "b": 2})
        _, b = sign_query("s", {"b": 2, "a": 1})
        assert a.rsplit("=", 1)[1] != b.rsplit("=", 1)[1]


class TestApiKeyHeaders:
    def test_uses_exchange_header_name(self):
        assert api_key_headers("k") == {API_KEY_HEADER: "k"}
        assert API_KEY_HEADER == "X-MBX-APIKEY"
