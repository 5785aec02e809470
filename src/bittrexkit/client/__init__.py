"""
Bittrex v1.1 REST client.

- BittrexClient: every public, market and account endpoint
- MarketDataApi / TradingApi: capability interfaces
- Exchange: market data paired with a (live or simulated) trading capability
"""

from bittrexkit.client.capabilities import Exchange, MarketDataApi, TradingApi
from bittrexkit.client.endpoints import ENDPOINTS, Endpoint
from bittrexkit.client.rest_client import DEFAULT_ORDER_BOOK_DEPTH, BittrexClient

__all__ = [
    "DEFAULT_ORDER_BOOK_DEPTH",
    "ENDPOINTS",
    "BittrexClient",
    "Endpoint",
    "Exchange",
    "MarketDataApi",
    "TradingApi",
]
