from typing import Optional

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings

DEFAULT_BASE_URL = "https://api.binance.com/"
DEFAULT_TIMEOUT_MS = 15000


class ClientConfig(BaseModel):
    """Construction-time client configuration. Frozen once built."""

    api_key: str = ""
    api_secret: str = ""

    # Milliseconds the exchange tolerates between request timestamp and server time
    recv_window: Optional[int] = None

    # Per-request timeout in milliseconds, forwarded to the transport
    timeout: int = DEFAULT_TIMEOUT_MS

    disable_beautification: bool = False
    base_url: str = DEFAULT_BASE_URL

    @field_validator("timeout")
    @classmethod
    def timeout_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("timeout must be a positive number of milliseconds")
        return v

    @field_validator("recv_window")
    @classmethod
    def recv_window_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("recv_window must be a positive number of milliseconds")
        return v

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Paths are appended directly, so the base must end with a slash"""
        if not v.endswith("/"):
            return v + "/"
        return v

    class Config:
        frozen = True


class BinanceSettings(BaseSettings):
    # Credentials
    api_key: str = ""
    api_secret: str = ""

    # Request parameters
    recv_window: Optional[int] = None
    timeout: int = DEFAULT_TIMEOUT_MS
    disable_beautification: bool = False
    base_url: str = DEFAULT_BASE_URL

    def to_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key=self.api_key,
            api_secret=self.api_secret,
            recv_window=self.recv_window,
            timeout=self.timeout,
            disable_beautification=self.disable_beautification,
            base_url=self.base_url,
        )

    class Config:
        env_prefix = "BINANCE_"
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
