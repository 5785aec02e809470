#!/usr/bin/env python3
"""Query the Bittrex API or place simulated orders from the command line.

Usage:
    python scripts/run_client.py ticker BTC-ETH
    python scripts/run_client.py markets
    python scripts/run_client.py orderbook BTC-ETH --type buy --depth 5
    python scripts/run_client.py simulate BTC-ETH buy 2 0.05

Credentials for authenticated commands are read from BITTREX_API_KEY and
BITTREX_API_SECRET. Simulated orders only need market data.

Outputs JSON on stdout.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from decimal import Decimal, InvalidOperation
from typing import Any

import orjson

from bittrexkit.client import BittrexClient
from bittrexkit.config import ClientConfig, Credentials, RetryConfig
from bittrexkit.errors import BittrexError
from bittrexkit.logging_config import get_logger, setup_logging
from bittrexkit.models import BittrexModel, OrderBookType
from bittrexkit.simulation import OrderSimulation

logger = get_logger(__name__)


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"not a number: {value}") from e


def _positive_decimal(value: str) -> Decimal:
    number = _decimal(value)
    if not number.is_finite() or number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive number: {value}")
    return number


def _rate(value: str) -> Decimal:
    number = _decimal(value)
    if not number.is_finite() or number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative number: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description="Bittrex API client")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON logs instead of human-readable lines",
    )
    parser.add_argument(
        "--max-retries",
        type=int,
        default=5,
        help="Retries on network failure (default: 5)",
    )
    parser.add_argument(
        "--deadline-ms",
        type=int,
        default=None,
        help="Overall deadline per request in milliseconds",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    ticker = sub.add_parser("ticker", help="Show the ticker of a market")
    ticker.add_argument("market", help="Market name, e.g. BTC-ETH")

    sub.add_parser("markets", help="List all markets")

    book = sub.add_parser("orderbook", help="Show the order book of a market")
    book.add_argument("market", help="Market name, e.g. BTC-ETH")
    book.add_argument(
        "--type",
        choices=[t.value for t in OrderBookType],
        default=OrderBookType.BOTH.value,
        help="Side(s) to fetch (default: both)",
    )
    book.add_argument("--depth", type=int, default=20, help="Levels per side (default: 20)")

    sub.add_parser("balances", help="Show account balances (needs credentials)")

    simulate = sub.add_parser("simulate", help="Place a simulated limit order")
    simulate.add_argument("market", help="Market name, e.g. BTC-ETH")
    simulate.add_argument("side", choices=["buy", "sell"])
    simulate.add_argument("quantity", type=_positive_decimal)
    simulate.add_argument("rate", type=_rate)

    return parser


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, BittrexModel):
        return value.to_api_dict()
    if isinstance(value, list):
        return [_to_jsonable(v) for v in value]
    return value


async def run(args: argparse.Namespace) -> Any:
    """Execute one command and return a JSON-compatible result."""
    config = ClientConfig(
        retry=RetryConfig(max_retries=args.max_retries, deadline_ms=args.deadline_ms),
    )
    async with BittrexClient(config=config, credentials=Credentials.from_env()) as client:
        if args.command == "ticker":
            return _to_jsonable(await client.get_ticker(args.market))
        if args.command == "markets":
            return _to_jsonable(await client.get_markets())
        if args.command == "orderbook":
            book = await client.get_order_book(args.market, OrderBookType(args.type), args.depth)
            return _to_jsonable(book)
        if args.command == "balances":
            return _to_jsonable(await client.get_balances())
        if args.command == "simulate":
            sim = OrderSimulation(client)
            place = sim.buy_limit if args.side == "buy" else sim.sell_limit
            accepted = await place(args.market, args.quantity, args.rate)
            return {
                "accepted": accepted.to_api_dict(),
                "ledger": await sim.snapshot(),
            }
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level.upper(), json_format=args.json_logs)

    try:
        result = asyncio.run(run(args))
    except BittrexError as e:
        logger.error("Command failed", extra={"error_type": type(e).__name__})
        print(f"error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(orjson.dumps(result, option=orjson.OPT_INDENT_2).decode("utf-8") + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
