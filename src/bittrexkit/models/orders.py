"""Order-related result shapes."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import Field

from bittrexkit.models.base import BittrexModel, DecimalValue


class OrderSide(str, Enum):
    """Order side."""

    BUY = "BUY"
    SELL = "SELL"

    @property
    def order_type(self) -> str:
        """The exchange's order type name for a limit order on this side."""
        return f"LIMIT_{self.value}"


class AcceptedOrder(BittrexModel):
    """Acknowledgement returned when a limit order is placed."""

    uuid: str = Field(alias="uuid")


class OpenOrder(BittrexModel):
    """An order still resting on the book."""

    uuid: str | None = None
    order_uuid: str
    exchange: str
    order_type: str
    quantity: DecimalValue
    quantity_remaining: DecimalValue
    limit: DecimalValue
    commission_paid: DecimalValue = Decimal("0")
    price: DecimalValue
    price_per_unit: DecimalValue | None = None
    opened: datetime
    closed: datetime | None = None
    cancel_initiated: bool = False
    immediate_or_cancel: bool = False
    is_conditional: bool = False
    condition: str | None = None
    condition_target: str | None = None


class Order(BittrexModel):
    """A single order as returned by the order lookup endpoint."""

    account_id: str | None = None
    order_uuid: str
    exchange: str
    type: str
    quantity: DecimalValue
    quantity_remaining: DecimalValue
    limit: DecimalValue
    reserved: DecimalValue | None = None
    reserve_remaining: DecimalValue | None = None
    commission_reserved: DecimalValue | None = None
    commission_reserve_remaining: DecimalValue | None = None
    commission_paid: DecimalValue | None = None
    price: DecimalValue
    price_per_unit: DecimalValue | None = None
    opened: datetime
    closed: datetime | None = None
    is_open: bool
    sentinel: str | None = None
    cancel_initiated: bool = False
    immediate_or_cancel: bool = False
    is_conditional: bool = False
    condition: str | None = None
    condition_target: str | None = None


class HistoricOrder(BittrexModel):
    """A completed order from the order history."""

    order_uuid: str
    exchange: str
    time_stamp: datetime
    order_type: str
    limit: DecimalValue
    quantity: DecimalValue
    quantity_remaining: DecimalValue
    commission: DecimalValue | None = None
    price: DecimalValue
    price_per_unit: DecimalValue | None = None
    is_conditional: bool = False
    condition: str | None = None
    condition_target: str | None = None
    immediate_or_cancel: bool = False
