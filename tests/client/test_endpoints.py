"""Tests for the endpoint table."""

from __future__ import annotations

import pytest

from bittrexkit.client import ENDPOINTS, BittrexClient
from bittrexkit.client import endpoints as ep


class TestEndpointTable:
    """The table covers every client method with the right auth flag."""

    def test_every_entry_is_a_client_method(self) -> None:
        for name in ENDPOINTS:
            assert callable(getattr(BittrexClient, name))

    def test_nineteen_endpoints(self) -> None:
        assert len(ENDPOINTS) == 19

    def test_public_endpoints_are_unauthenticated(self) -> None:
        for endpoint in ENDPOINTS.values():
            assert endpoint.requires_auth == (not endpoint.path.startswith("public/"))

    def test_paths_are_unique(self) -> None:
        paths = [e.path for e in ENDPOINTS.values()]
        assert len(paths) == len(set(paths))


class TestBuildParams:
    """Tests for Endpoint.build_params()."""

    def test_required_in_table_order(self) -> None:
        params = ep.BUY_LIMIT.build_params(rate="0.1", quantity="2", market="BTC-ETH")
        assert list(params) == ["market", "quantity", "rate"]

    def test_optional_none_omitted(self) -> None:
        assert ep.GET_OPEN_ORDERS.build_params(market=None) == {}
        assert ep.GET_OPEN_ORDERS.build_params() == {}

    def test_optional_after_required(self) -> None:
        params = ep.WITHDRAW.build_params(
            paymentid="memo",
            currency="XMR",
            quantity="1",
            address="addr",
        )
        assert list(params) == ["currency", "quantity", "address", "paymentid"]

    def test_missing_required(self) -> None:
        with pytest.raises(ValueError, match="missing required parameter 'market'"):
            ep.GET_TICKER.build_params()

    def test_unknown_parameter(self) -> None:
        with pytest.raises(ValueError, match="unknown parameters"):
            ep.GET_MARKETS.build_params(market="BTC-ETH")
