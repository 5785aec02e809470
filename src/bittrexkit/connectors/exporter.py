"""
Prometheus metrics for the request pipeline and the order simulation.

Only low-cardinality labels are used. No market, currency, path or order
uuid labels.
"""

from __future__ import annotations

from enum import Enum

from prometheus_client import Counter
from prometheus_client.registry import CollectorRegistry

# Forbidden labels that would cause cardinality explosion
FORBIDDEN_LABELS = frozenset(
    {
        "market",
        "currency",
        "endpoint",
        "path",
        "query",
        "uuid",
        "apikey",
    }
)


class RequestOutcome(str, Enum):
    """Outcome label for bittrexkit_requests_total."""

    OK = "ok"
    UNAUTHORIZED = "unauthorized"
    EXCHANGE_REJECTED = "exchange_rejected"
    TRANSPORT_ERROR = "transport_error"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    MALFORMED_ENVELOPE = "malformed_envelope"
    RESULT_MISMATCH = "result_mismatch"


class ClientMetrics:
    """
    Prometheus counters for bittrexkit.

    Usage:
        registry = CollectorRegistry()
        metrics = ClientMetrics(registry=registry)
        client = BittrexClient(metrics=metrics)
        # generate_latest(registry) -> bytes for /metrics endpoint
    """

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """
        Initialize metrics.

        Args:
            registry: Prometheus CollectorRegistry. If None, a private registry
                is created so several clients never collide on metric names.
        """
        self._registry = registry or CollectorRegistry()

        self._requests = Counter(
            "bittrexkit_requests_total",
            "API calls by outcome",
            ["outcome"],
            registry=self._registry,
        )
        self._retries = Counter(
            "bittrexkit_transport_retries_total",
            "Transport-level retries after a failed send",
            registry=self._registry,
        )
        self._sim_orders = Counter(
            "bittrexkit_sim_orders_total",
            "Simulated limit orders by side and result",
            ["side", "result"],
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_request(self, outcome: RequestOutcome) -> None:
        self._requests.labels(outcome=outcome.value).inc()

    def record_retry(self) -> None:
        self._retries.inc()

    def record_sim_order(self, side: str, result: str) -> None:
        """Record a simulated order placement ('filled' or 'open') or cancel."""
        self._sim_orders.labels(side=side.lower(), result=result).inc()
