"""Simulated order records and their projections into API result shapes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - used at runtime in dataclasses
from decimal import Decimal
from typing import Any

from bittrexkit.models import HistoricOrder, OpenOrder, Order, OrderSide

MARKET_SEPARATOR = "-"


def target_currency(market: str) -> str:
    """
    Currency being bought or sold in a market.

    Market names are "<base>-<target>", e.g. BTC-ETH trades ETH for BTC.
    A name without a separator is booked under the name itself.
    """
    _, sep, target = market.partition(MARKET_SEPARATOR)
    return target if sep else market


@dataclass
class SimulatedOrder:
    """
    A simulated limit order.

    Quantity is unsigned; side carries the direction.

    Attributes:
        order_uuid: Generated order id.
        market: Market name, e.g. BTC-ETH.
        side: BUY or SELL.
        quantity: Order quantity (unsigned).
        limit: Limit rate.
        opened: Placement time.
        closed: Fill time, None while open.
    """

    order_uuid: str
    market: str
    side: OrderSide
    quantity: Decimal
    limit: Decimal
    opened: datetime
    closed: datetime | None = None

    @property
    def is_open(self) -> bool:
        return self.closed is None

    @property
    def price(self) -> Decimal:
        return self.quantity * self.limit

    @property
    def quantity_remaining(self) -> Decimal:
        return self.quantity if self.is_open else Decimal("0")

    def to_open_order(self) -> OpenOrder:
        return OpenOrder(
            uuid=None,
            order_uuid=self.order_uuid,
            exchange=self.market,
            order_type=self.side.order_type,
            quantity=self.quantity,
            quantity_remaining=self.quantity_remaining,
            limit=self.limit,
            price=self.price,
            price_per_unit=self.limit,
            opened=self.opened,
            closed=self.closed,
        )

    def to_order(self) -> Order:
        return Order(
            order_uuid=self.order_uuid,
            exchange=self.market,
            type=self.side.order_type,
            quantity=self.quantity,
            quantity_remaining=self.quantity_remaining,
            limit=self.limit,
            commission_paid=Decimal("0"),
            price=self.price,
            price_per_unit=self.limit,
            opened=self.opened,
            closed=self.closed,
            is_open=self.is_open,
        )

    def to_historic_order(self) -> HistoricOrder:
        """Project a closed order into the order history shape.

        The closing time is reported as the history timestamp.
        """
        if self.closed is None:
            raise ValueError(f"Order {self.order_uuid} is still open")
        return HistoricOrder(
            order_uuid=self.order_uuid,
            exchange=self.market,
            time_stamp=self.closed,
            order_type=self.side.order_type,
            limit=self.limit,
            quantity=self.quantity,
            quantity_remaining=Decimal("0"),
            commission=Decimal("0"),
            price=self.price,
            price_per_unit=self.limit,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation for snapshots."""
        return {
            "order_uuid": self.order_uuid,
            "market": self.market,
            "side": self.side.value,
            "quantity": str(self.quantity),
            "limit": str(self.limit),
            "price": str(self.price),
            "opened": self.opened.isoformat(),
            "closed": self.closed.isoformat() if self.closed else None,
            "is_open": self.is_open,
        }
