"""Client configuration.

ClientConfig and RetryConfig are frozen (immutable) and are passed to
client construction instead of living in module globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_BASE_URL = "https://bittrex.com/api/"
DEFAULT_API_VERSION = "v1.1"
DEFAULT_SIGN_HEADER = "apisign"

API_KEY_ENV = "BITTREX_API_KEY"
API_SECRET_ENV = "BITTREX_API_SECRET"


class RetryConfig(BaseModel):
    """Retry policy for transport failures (frozen).

    max_retries=None retries forever; combine it with deadline_ms to bound
    the total time spent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_retries: int | None = Field(
        default=5,
        ge=0,
        description="Retries after the first attempt (None = unbounded)",
    )
    base_delay_ms: int = Field(default=250, ge=0, description="Delay before the first retry")
    max_delay_ms: int = Field(default=10000, ge=0, description="Upper bound for a single delay")
    multiplier: float = Field(default=2.0, ge=1.0, description="Exponential growth factor")
    jitter_factor: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="0.5 = +/-50% jitter",
    )
    deadline_ms: int | None = Field(
        default=None,
        gt=0,
        description="Overall deadline for one send including retries",
    )

    @model_validator(mode="after")
    def _check_delays(self) -> RetryConfig:
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError("max_delay_ms must be >= base_delay_ms")
        return self

    @classmethod
    def unbounded(cls, deadline_ms: int | None = None) -> RetryConfig:
        """Retry forever on transport failure, optionally bounded by a deadline."""
        return cls(max_retries=None, deadline_ms=deadline_ms)


class ClientConfig(BaseModel):
    """Bittrex client configuration (frozen)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_url: str = Field(default=DEFAULT_BASE_URL, description="API root URL")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="API version segment")
    sign_header_name: str = Field(
        default=DEFAULT_SIGN_HEADER,
        min_length=1,
        description="Header carrying the HMAC signature",
    )
    request_timeout_ms: int = Field(default=10000, gt=0, description="Per-request timeout")
    retry: RetryConfig = Field(default_factory=RetryConfig)

    @property
    def api_url(self) -> str:
        """Base URL including the version segment, with a trailing slash."""
        return f"{self.base_url.rstrip('/')}/{self.api_version.strip('/')}/"

    def endpoint_url(self, path: str) -> str:
        """Absolute URL of an endpoint path such as 'public/getticker'."""
        return self.api_url + path.lstrip("/")


@dataclass(frozen=True)
class Credentials:
    """API key and secret for authenticated endpoints."""

    api_key: str
    api_secret: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("api_key must not be empty")
        if isinstance(self.api_secret, str):
            object.__setattr__(self, "api_secret", self.api_secret.encode("utf-8"))

    @classmethod
    def from_strings(cls, api_key: str, api_secret: str) -> Credentials:
        """Build credentials from the key/secret strings shown by the exchange."""
        return cls(api_key=api_key, api_secret=api_secret.encode("utf-8"))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Credentials | None:
        """Read credentials from BITTREX_API_KEY / BITTREX_API_SECRET.

        Returns:
            Credentials, or None when either variable is unset or empty.
        """
        env = os.environ if environ is None else environ
        api_key = env.get(API_KEY_ENV, "")
        api_secret = env.get(API_SECRET_ENV, "")
        if not api_key or not api_secret:
            return None
        return cls.from_strings(api_key, api_secret)
