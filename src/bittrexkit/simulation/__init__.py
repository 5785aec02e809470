"""
Order simulation.

OrderSimulation implements TradingApi against an in-memory ledger and uses a
real MarketDataApi for tickers.
"""

from bittrexkit.simulation.engine import OrderSimulation, would_fill
from bittrexkit.simulation.ledger import SimulatedOrder, target_currency

__all__ = [
    "OrderSimulation",
    "SimulatedOrder",
    "target_currency",
    "would_fill",
]
