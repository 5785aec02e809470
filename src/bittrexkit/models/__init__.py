"""Typed result shapes of the Bittrex v1.1 API.

Attribute names are snake_case; JSON names are the exchange's PascalCase
(except uuid, buy and sell which the exchange sends in lower case).
"""

from bittrexkit.models.account import (
    AcceptedWithdrawal,
    CurrencyBalance,
    DepositAddress,
    HistoricDeposit,
    HistoricWithdrawal,
)
from bittrexkit.models.base import BittrexModel, DecimalValue, parse_decimal
from bittrexkit.models.market import (
    Market,
    MarketSummary,
    OrderBook,
    OrderBookEntry,
    OrderBookType,
    SupportedCurrency,
    Ticker,
    Trade,
)
from bittrexkit.models.orders import (
    AcceptedOrder,
    HistoricOrder,
    OpenOrder,
    Order,
    OrderSide,
)

__all__ = [
    "AcceptedOrder",
    "AcceptedWithdrawal",
    "BittrexModel",
    "CurrencyBalance",
    "DecimalValue",
    "DepositAddress",
    "HistoricDeposit",
    "HistoricOrder",
    "HistoricWithdrawal",
    "Market",
    "MarketSummary",
    "OpenOrder",
    "Order",
    "OrderBook",
    "OrderBookEntry",
    "OrderBookType",
    "OrderSide",
    "SupportedCurrency",
    "Ticker",
    "Trade",
    "parse_decimal",
]
