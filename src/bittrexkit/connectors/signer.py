"""
Request signing for authenticated Bittrex endpoints.

The signed URL carries the api key and a nonce as the last two query
parameters. The signature is HMAC-SHA512 over the complete URL, hex encoded
in upper case, and travels in the apisign header.
"""

from __future__ import annotations

import hashlib
import hmac
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from bittrexkit.config import Credentials


@dataclass(frozen=True)
class SignedRequest:
    """A signed request URL and its authentication tag.

    Attributes:
        uri: Complete URL including apikey and nonce.
        signature: Upper-case hex HMAC-SHA512 digest of uri.
    """

    uri: str
    signature: str


def build_query(params: Mapping[str, str]) -> str:
    """URL-encode params as key=value pairs joined with '&', in mapping order."""
    return urlencode(list(params.items()))


def sign_request(
    base_uri: str,
    params: Mapping[str, str],
    api_key: str,
    api_secret: bytes,
    nonce: int,
) -> SignedRequest:
    """
    Sign a request.

    Pure function of its inputs: the same params, key, secret and nonce
    always produce the same output.

    Args:
        base_uri: Endpoint URL without query string.
        params: Query parameters (not modified).
        api_key: Account API key.
        api_secret: Account API secret bytes (HMAC key).
        nonce: Strictly increasing request nonce.

    Returns:
        SignedRequest with the complete URL and its signature.
    """
    signed_params = dict(params)
    signed_params["apikey"] = api_key
    signed_params["nonce"] = str(nonce)

    uri = f"{base_uri}?{build_query(signed_params)}"
    digest = hmac.new(api_secret, uri.encode("utf-8"), hashlib.sha512).hexdigest()
    return SignedRequest(uri=uri, signature=digest.upper())


class NonceGenerator:
    """Strictly increasing, time-derived nonces (microseconds).

    Thread-safe: concurrent callers never receive the same value, even when
    the clock does not advance between calls.
    """

    def __init__(self, time_fn: Callable[[], int] | None = None) -> None:
        """
        Initialize the generator.

        Args:
            time_fn: Optional clock returning microseconds, for tests.
        """
        self._time_fn = time_fn or (lambda: time.time_ns() // 1000)
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> int:
        """Return the next nonce."""
        with self._lock:
            nonce = max(self._time_fn(), self._last + 1)
            self._last = nonce
            return nonce


class RequestSigner:
    """Signs requests with bound credentials and fresh nonces."""

    def __init__(
        self,
        credentials: Credentials,
        nonce_generator: NonceGenerator | None = None,
    ) -> None:
        self._credentials = credentials
        self._nonces = nonce_generator or NonceGenerator()

    @property
    def api_key(self) -> str:
        return self._credentials.api_key

    def sign(self, base_uri: str, params: Mapping[str, str]) -> SignedRequest:
        """Sign base_uri + params with the next nonce."""
        return sign_request(
            base_uri,
            params,
            self._credentials.api_key,
            self._credentials.api_secret,
            self._nonces.next(),
        )
