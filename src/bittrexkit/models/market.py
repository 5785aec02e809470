"""Public market-data result shapes."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from bittrexkit.models.base import BittrexModel, DecimalValue


class OrderBookType(str, Enum):
    """Side selector for the order book endpoint."""

    BUY = "buy"
    SELL = "sell"
    BOTH = "both"


class Market(BittrexModel):
    """A tradable market and its metadata."""

    market_currency: str
    base_currency: str
    market_currency_long: str | None = None
    base_currency_long: str | None = None
    min_trade_size: DecimalValue
    market_name: str
    is_active: bool
    created: datetime
    notice: str | None = None
    is_sponsored: bool | None = None
    logo_url: str | None = None


class SupportedCurrency(BittrexModel):
    """A currency supported by the exchange."""

    currency: str
    currency_long: str | None = None
    min_confirmation: int
    tx_fee: DecimalValue
    is_active: bool
    coin_type: str | None = None
    base_address: str | None = None
    notice: str | None = None


class Ticker(BittrexModel):
    """Current bid, ask and last price of a market.

    market_name is not part of the response; the client fills it in.
    """

    bid: DecimalValue
    ask: DecimalValue
    last: DecimalValue
    market_name: str | None = None


class MarketSummary(BittrexModel):
    """24 hour summary of a market."""

    market_name: str
    high: DecimalValue | None = None
    low: DecimalValue | None = None
    volume: DecimalValue | None = None
    last: DecimalValue | None = None
    base_volume: DecimalValue | None = None
    time_stamp: datetime | None = None
    bid: DecimalValue | None = None
    ask: DecimalValue | None = None
    open_buy_orders: int | None = None
    open_sell_orders: int | None = None
    prev_day: DecimalValue | None = None
    created: datetime | None = None
    display_market_name: str | None = None


class OrderBookEntry(BittrexModel):
    """One price level of the order book."""

    quantity: DecimalValue
    rate: DecimalValue


class OrderBook(BittrexModel):
    """Order book of a market.

    When only one side was requested the other side is None.
    """

    buy: list[OrderBookEntry] | None = Field(default=None, alias="buy")
    sell: list[OrderBookEntry] | None = Field(default=None, alias="sell")
    market_name: str | None = None


class Trade(BittrexModel):
    """A recent trade from the market history."""

    id: int
    time_stamp: datetime
    quantity: DecimalValue
    price: DecimalValue
    total: DecimalValue
    fill_type: str | None = None
    order_type: str
