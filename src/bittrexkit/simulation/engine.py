"""
In-memory order simulation.

Drop-in TradingApi that never touches live trading endpoints. Market data
(the ticker) comes from a real MarketDataApi.

Fill model: a limit order fills completely at placement time when the last
traded price already crosses its limit (buy: last <= rate, sell:
last >= rate). Otherwise it rests in the open orders until canceled.

Known gap: there is no background matcher. A resting order never fills
later, even when the market crosses its limit afterwards.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import orjson

from bittrexkit.errors import OrderNotFoundError
from bittrexkit.models import (
    AcceptedOrder,
    CurrencyBalance,
    HistoricOrder,
    OpenOrder,
    Order,
    OrderSide,
)
from bittrexkit.simulation.ledger import SimulatedOrder, target_currency

if TYPE_CHECKING:
    from bittrexkit.client.capabilities import MarketDataApi
    from bittrexkit.connectors.exporter import ClientMetrics

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def would_fill(side: OrderSide, last: Decimal, rate: Decimal) -> bool:
    """Check whether a limit order is marketable at the last traded price."""
    if side == OrderSide.BUY:
        return last <= rate
    return last >= rate


class OrderSimulation:
    """
    Simulated trading on top of live market data.

    Open orders, closed orders and balances are owned by this instance and
    guarded by a single asyncio.Lock, so concurrent placements and cancels
    on one instance are serialized.
    """

    def __init__(
        self,
        market_data: MarketDataApi,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        metrics: ClientMetrics | None = None,
    ) -> None:
        """
        Initialize the simulation.

        Args:
            market_data: Source of tickers (usually a BittrexClient).
            clock: Optional time source for deterministic tests.
            id_factory: Optional order id source. Defaults to uuid4 strings.
            metrics: Optional Prometheus metrics.
        """
        self._market_data = market_data
        self._clock = clock or _utc_now
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))
        self._metrics = metrics
        self._lock = asyncio.Lock()

        self._open_orders: dict[str, SimulatedOrder] = {}
        self._closed_orders: list[SimulatedOrder] = []
        self._balances: dict[str, Decimal] = {}

    # === Order placement ===

    async def buy_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder:
        """Place a simulated limit buy."""
        return await self._place(market, OrderSide.BUY, quantity, rate)

    async def sell_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder:
        """Place a simulated limit sell."""
        return await self._place(market, OrderSide.SELL, quantity, rate)

    async def _place(
        self,
        market: str,
        side: OrderSide,
        quantity: Decimal,
        rate: Decimal,
    ) -> AcceptedOrder:
        """
        Place a simulated limit order.

        Args:
            market: Market name, e.g. BTC-ETH.
            side: BUY or SELL.
            quantity: Unsigned order quantity.
            rate: Limit rate.

        Returns:
            AcceptedOrder carrying the generated order id.

        Raises:
            Any error raised by the ticker fetch. Placement itself never fails.
        """
        # Network I/O happens before the ledger lock is taken
        ticker = await self._market_data.get_ticker(market)
        filled = would_fill(side, ticker.last, rate)

        async with self._lock:
            now = self._clock()
            order = SimulatedOrder(
                order_uuid=self._id_factory(),
                market=market,
                side=side,
                quantity=quantity,
                limit=rate,
                opened=now,
            )
            if filled:
                order.closed = now
                self._closed_orders.append(order)
                currency = target_currency(market)
                delta = quantity if side == OrderSide.BUY else -quantity
                self._balances[currency] = self._balances.get(currency, ZERO) + delta
            else:
                self._open_orders[order.order_uuid] = order

        logger.info(
            "Simulated order placed",
            extra={
                "market": market,
                "side": side.value,
                "quantity": str(quantity),
                "rate": str(rate),
                "last": str(ticker.last),
                "filled": filled,
            },
        )
        if self._metrics is not None:
            self._metrics.record_sim_order(side.value, "filled" if filled else "open")

        return AcceptedOrder(uuid=order.order_uuid)

    # === Cancellation ===

    async def cancel_order(self, order_uuid: str) -> None:
        """
        Cancel a resting simulated order.

        Raises:
            OrderNotFoundError: If no open order has this uuid (unknown id,
                already filled or already canceled).
        """
        async with self._lock:
            order = self._open_orders.pop(order_uuid, None)
        if order is None:
            raise OrderNotFoundError(order_uuid)

        logger.info("Simulated order canceled", extra={"market": order.market})
        if self._metrics is not None:
            self._metrics.record_sim_order(order.side.value, "canceled")

    # === Queries ===

    async def get_open_orders(self, market: str | None = None) -> list[OpenOrder]:
        """Open orders in placement order, optionally for one market."""
        async with self._lock:
            orders = list(self._open_orders.values())
        return [o.to_open_order() for o in orders if market is None or o.market == market]

    async def get_balance(self, currency: str) -> CurrencyBalance:
        """Balance of one currency; zero when never credited."""
        async with self._lock:
            balance = self._balances.get(currency, ZERO)
        return CurrencyBalance(currency=currency, balance=balance, available=balance)

    async def get_balances(self) -> list[CurrencyBalance]:
        """All balances touched by simulated fills."""
        async with self._lock:
            items = list(self._balances.items())
        return [CurrencyBalance(currency=c, balance=b, available=b) for c, b in items]

    async def get_order(self, order_uuid: str) -> Order:
        """
        Look up an order; open orders take precedence over closed ones.

        Raises:
            OrderNotFoundError: If the uuid is unknown.
        """
        async with self._lock:
            order = self._open_orders.get(order_uuid)
            if order is None:
                order = next(
                    (o for o in self._closed_orders if o.order_uuid == order_uuid),
                    None,
                )
        if order is None:
            raise OrderNotFoundError(order_uuid)
        return order.to_order()

    async def get_order_history(self, market: str | None = None) -> list[HistoricOrder]:
        """Filled orders, optionally for one market."""
        async with self._lock:
            orders = list(self._closed_orders)
        return [o.to_historic_order() for o in orders if market is None or o.market == market]

    async def snapshot(self) -> dict[str, Any]:
        """JSON-compatible view of the whole ledger."""
        async with self._lock:
            return {
                "open_orders": [o.to_dict() for o in self._open_orders.values()],
                "closed_orders": [o.to_dict() for o in self._closed_orders],
                "balances": {c: str(b) for c, b in self._balances.items()},
            }

    async def snapshot_json(self) -> bytes:
        """Ledger snapshot as canonical (sorted-key) JSON."""
        return orjson.dumps(await self.snapshot(), option=orjson.OPT_SORT_KEYS)
