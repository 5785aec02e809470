"""Tests for request signing and nonce generation."""

from __future__ import annotations

import hashlib
import hmac
import threading

import pytest

from bittrexkit.config import Credentials
from bittrexkit.connectors.signer import (
    NonceGenerator,
    RequestSigner,
    SignedRequest,
    build_query,
    sign_request,
)

BASE = "https://bittrex.com/api/v1.1/market/buylimit"


def _expected_signature(uri: str, secret: bytes) -> str:
    return hmac.new(secret, uri.encode("utf-8"), hashlib.sha512).hexdigest().upper()


class TestBuildQuery:
    """Tests for query string construction."""

    def test_insertion_order(self) -> None:
        assert build_query({"b": "2", "a": "1"}) == "b=2&a=1"

    def test_url_encodes_keys_and_values(self) -> None:
        assert build_query({"address": "a b&c", "k y": "x/y"}) == "address=a+b%26c&k+y=x%2Fy"

    def test_empty(self) -> None:
        assert build_query({}) == ""


class TestSignRequest:
    """Tests for sign_request()."""

    def test_appends_apikey_and_nonce_last(self) -> None:
        """apikey and nonce are the last two parameters, in that order."""
        signed = sign_request(
            BASE,
            {"market": "BTC-ETH", "quantity": "1", "rate": "0.5"},
            "key",
            b"secret",
            123,
        )
        assert signed.uri == f"{BASE}?market=BTC-ETH&quantity=1&rate=0.5&apikey=key&nonce=123"

    def test_signature_is_uppercase_hmac_sha512_of_uri(self) -> None:
        signed = sign_request(BASE, {"market": "BTC-ETH"}, "key", b"secret", 123)
        assert signed.signature == _expected_signature(signed.uri, b"secret")
        assert signed.signature == signed.signature.upper()
        assert len(signed.signature) == 128

    def test_deterministic_for_fixed_nonce(self) -> None:
        first = sign_request(BASE, {"market": "BTC-ETH"}, "key", b"secret", 42)
        second = sign_request(BASE, {"market": "BTC-ETH"}, "key", b"secret", 42)
        assert first == second

    def test_different_nonce_changes_signature(self) -> None:
        first = sign_request(BASE, {"market": "BTC-ETH"}, "key", b"secret", 42)
        second = sign_request(BASE, {"market": "BTC-ETH"}, "key", b"secret", 43)
        assert first.signature != second.signature

    def test_different_secret_changes_signature(self) -> None:
        first = sign_request(BASE, {}, "key", b"secret-a", 1)
        second = sign_request(BASE, {}, "key", b"secret-b", 1)
        assert first.uri == second.uri
        assert first.signature != second.signature

    def test_does_not_mutate_params(self) -> None:
        params = {"market": "BTC-ETH"}
        sign_request(BASE, params, "key", b"secret", 1)
        assert params == {"market": "BTC-ETH"}

    def test_no_params(self) -> None:
        signed = sign_request(BASE, {}, "key", b"secret", 7)
        assert signed.uri == f"{BASE}?apikey=key&nonce=7"


class TestNonceGenerator:
    """Tests for NonceGenerator."""

    def test_uses_clock(self) -> None:
        gen = NonceGenerator(time_fn=lambda: 1_000)
        assert gen.next() == 1_000

    def test_strictly_increasing_on_frozen_clock(self) -> None:
        gen = NonceGenerator(time_fn=lambda: 500)
        assert [gen.next() for _ in range(3)] == [500, 501, 502]

    def test_clock_going_backwards(self) -> None:
        ticks = iter([100, 50, 200])
        gen = NonceGenerator(time_fn=lambda: next(ticks))
        assert [gen.next() for _ in range(3)] == [100, 101, 200]

    def test_default_clock_is_monotonic(self) -> None:
        gen = NonceGenerator()
        values = [gen.next() for _ in range(100)]
        assert values == sorted(values)
        assert len(set(values)) == len(values)

    def test_unique_across_threads(self) -> None:
        """Concurrent callers never receive the same nonce."""
        gen = NonceGenerator(time_fn=lambda: 1)
        results: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            local = [gen.next() for _ in range(500)]
            with lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 4000
        assert len(set(results)) == 4000


class TestRequestSigner:
    """Tests for RequestSigner."""

    def test_signs_with_bound_credentials(self) -> None:
        creds = Credentials.from_strings("my-key", "my-secret")
        signer = RequestSigner(creds, NonceGenerator(time_fn=lambda: 99))

        signed = signer.sign(BASE, {"market": "BTC-LTC"})

        assert isinstance(signed, SignedRequest)
        assert signed.uri == f"{BASE}?market=BTC-LTC&apikey=my-key&nonce=99"
        assert signed.signature == _expected_signature(signed.uri, b"my-secret")
        assert signer.api_key == "my-key"

    @pytest.mark.parametrize("count", [2, 5])
    def test_fresh_nonce_per_request(self, count: int) -> None:
        signer = RequestSigner(
            Credentials.from_strings("k", "s"),
            NonceGenerator(time_fn=lambda: 10),
        )
        uris = {signer.sign(BASE, {}).uri for _ in range(count)}
        assert len(uris) == count
