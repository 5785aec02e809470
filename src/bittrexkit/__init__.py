"""bittrexkit - async client for the Bittrex v1.1 REST API with order simulation."""

from bittrexkit.client import BittrexClient, Exchange, MarketDataApi, TradingApi
from bittrexkit.config import ClientConfig, Credentials, RetryConfig
from bittrexkit.simulation import OrderSimulation

__version__ = "0.1.0"

__all__ = [
    "BittrexClient",
    "ClientConfig",
    "Credentials",
    "Exchange",
    "MarketDataApi",
    "OrderSimulation",
    "RetryConfig",
    "TradingApi",
    "__version__",
]
