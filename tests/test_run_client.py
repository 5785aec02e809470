"""Tests for the command-line client."""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

import orjson
import pytest
from scripts import run_client
from scripts.run_client import build_parser, main

from bittrexkit.client import BittrexClient


class _ScriptedTransport:
    def __init__(self, *bodies: str) -> None:
        self.bodies = list(bodies)
        self.urls: list[str] = []

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        self.urls.append(url)
        return self.bodies.pop(0)

    async def close(self) -> None:
        pass


def _patch_client(monkeypatch: pytest.MonkeyPatch, transport: _ScriptedTransport) -> None:
    def factory(**kwargs: Any) -> BittrexClient:
        return BittrexClient(transport=transport, **kwargs)

    monkeypatch.delenv("BITTREX_API_KEY", raising=False)
    monkeypatch.delenv("BITTREX_API_SECRET", raising=False)
    monkeypatch.setattr(run_client, "BittrexClient", factory)


TICKER_BODY = '{"success":true,"message":"","result":{"Bid":99,"Ask":101,"Last":100}}'


class TestParser:
    """Tests for build_parser()."""

    def test_simulate_arguments(self) -> None:
        args = build_parser().parse_args(["simulate", "BTC-ETH", "buy", "2", "0.05"])
        assert args.command == "simulate"
        assert args.quantity == Decimal("2")
        assert args.rate == Decimal("0.05")
        assert args.max_retries == 5
        assert args.deadline_ms is None

    def test_orderbook_defaults(self) -> None:
        args = build_parser().parse_args(["orderbook", "BTC-ETH"])
        assert args.type == "both"
        assert args.depth == 20

    def test_invalid_quantity(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["simulate", "BTC-ETH", "buy", "two", "1"])

    @pytest.mark.parametrize(
        ("quantity", "rate"),
        [("0", "1"), ("-1", "1"), ("NaN", "1"), ("1", "-0.5"), ("1", "Infinity")],
    )
    def test_out_of_range_order_rejected(self, quantity: str, rate: str) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["simulate", "BTC-ETH", "sell", quantity, rate])

    def test_zero_rate_accepted(self) -> None:
        args = build_parser().parse_args(["simulate", "BTC-ETH", "sell", "1", "0"])
        assert args.rate == Decimal("0")

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Tests for main()."""

    def test_ticker(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        transport = _ScriptedTransport(TICKER_BODY)
        _patch_client(monkeypatch, transport)

        assert main(["ticker", "BTC-ETH"]) == 0

        output = orjson.loads(capsys.readouterr().out)
        assert output == {"Bid": "99", "Ask": "101", "Last": "100", "MarketName": "BTC-ETH"}

    def test_simulate_fill(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        transport = _ScriptedTransport(TICKER_BODY)
        _patch_client(monkeypatch, transport)

        assert main(["simulate", "BTC-ETH", "buy", "2", "100"]) == 0

        output = orjson.loads(capsys.readouterr().out)
        assert output["ledger"]["balances"] == {"ETH": "2"}
        assert output["accepted"]["uuid"] == output["ledger"]["closed_orders"][0]["order_uuid"]
        assert transport.urls == ["https://bittrex.com/api/v1.1/public/getticker?market=BTC-ETH"]

    def test_balances_without_credentials_fails(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        transport = _ScriptedTransport()
        _patch_client(monkeypatch, transport)

        assert main(["balances"]) == 1

        assert "UnauthorizedError" in capsys.readouterr().err
        assert transport.urls == []

    def test_exchange_rejection_fails(
        self,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        transport = _ScriptedTransport('{"success":false,"message":"INVALID_MARKET","result":null}')
        _patch_client(monkeypatch, transport)

        assert main(["ticker", "BTC-NOPE"]) == 1

        assert "INVALID_MARKET" in capsys.readouterr().err
