"""
Capability interfaces and their composition.

Market data and trading are separate interfaces so the trading side can be
swapped (live client or OrderSimulation) while market data is shared:

    client = BittrexClient(credentials=creds)
    live = Exchange(market_data=client, trading=client)
    paper = Exchange(market_data=client, trading=OrderSimulation(client))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from decimal import Decimal

    from bittrexkit.models import (
        AcceptedOrder,
        CurrencyBalance,
        HistoricOrder,
        Market,
        MarketSummary,
        OpenOrder,
        Order,
        OrderBook,
        OrderBookType,
        SupportedCurrency,
        Ticker,
        Trade,
    )


@runtime_checkable
class MarketDataApi(Protocol):
    """Public, unauthenticated market data."""

    async def get_markets(self) -> list[Market]: ...

    async def get_supported_currencies(self) -> list[SupportedCurrency]: ...

    async def get_ticker(self, market: str) -> Ticker: ...

    async def get_market_summaries(self) -> list[MarketSummary]: ...

    async def get_market_summary(self, market: str) -> MarketSummary: ...

    async def get_order_book(
        self,
        market: str,
        order_type: OrderBookType,
        depth: int = ...,
    ) -> OrderBook: ...

    async def get_market_history(self, market: str) -> list[Trade]: ...


@runtime_checkable
class TradingApi(Protocol):
    """Order placement, cancellation, balances and order lookups."""

    async def buy_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder: ...

    async def sell_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder: ...

    async def cancel_order(self, order_uuid: str) -> Any: ...

    async def get_open_orders(self, market: str | None = None) -> list[OpenOrder]: ...

    async def get_balances(self) -> list[CurrencyBalance]: ...

    async def get_balance(self, currency: str) -> CurrencyBalance: ...

    async def get_order(self, order_uuid: str) -> Order: ...

    async def get_order_history(self, market: str | None = None) -> list[HistoricOrder]: ...


@dataclass(frozen=True)
class Exchange:
    """A market-data capability paired with a trading capability."""

    market_data: MarketDataApi
    trading: TradingApi
