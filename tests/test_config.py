"""
Tests for binance_rest/config.py
"""

import pytest
from pydantic import ValidationError

from binance_rest.config import BinanceSettings, ClientConfig
from binance_rest.rest import BinanceRest


class TestClientConfig:
    def test_defaults(self):
        config = ClientConfig()

        assert config.timeout == 15000
        assert config.recv_window is None
        assert config.disable_beautification is False
        assert config.base_url == "https://api.binance.com/"

    def test_is_frozen(self):
        config = ClientConfig(api_key="k")
        with pytest.raises(ValidationError):
            config.api_key = "changed"

    def test_base_url_gets_trailing_slash(self):
        assert ClientConfig(base_url="https://testnet.binance.vision").base_url == "https://testnet.binance.vision/"

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValidationError):
            ClientConfig(timeout=timeout)

    def test_rejects_non_positive_recv_window(self):
        with pytest.raises(ValidationError):
            ClientConfig(recv_window=0)


class TestBinanceSettings:
    def test_reads_prefixed_environment(self, monkeypatch):
        monkeypatch.setenv("BINANCE_API_KEY", "env-key")
        monkeypatch.setenv("BINANCE_API_SECRET", "env-secret")
        monkeypatch.setenv("BINANCE_RECV_WINDOW", "6000")
        monkeypatch.setenv("BINANCE_DISABLE_BEAUTIFICATION", "true")

        config = BinanceSettings(_env_file=None).to_client_config()

        assert config.api_key == "env-key"
        assert config.api_secret == "env-secret"
        assert config.recv_window == 6000
        assert config.disable_beautification is True

    def test_from_settings_builds_client(self, monkeypatch, transport):
        monkeypatch.setenv("BINANCE_API_KEY", "env-key")
        monkeypatch.setenv("BINANCE_TIMEOUT", "1000")

        client = BinanceRest.from_settings(BinanceSettings(_env_file=None), transport=transport)

        assert client.api_key == "env-key"
        assert client.timeout == 1000
