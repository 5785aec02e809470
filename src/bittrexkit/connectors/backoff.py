"""
Backoff primitives for the transport retry loop.

- Exponential backoff with jitter between retries
- Bounded (max_retries) or unbounded (max_retries=None) policies
- Seeded jitter for deterministic tests
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bittrexkit.config import RetryConfig


@dataclass
class BackoffState:
    """Failed attempts of one send; created fresh per send."""

    attempt: int = 0

    def record_error(self) -> None:
        """Record a failed attempt."""
        self.attempt += 1

    def exhausted(self, config: RetryConfig) -> bool:
        """Check whether the retry budget is spent."""
        if config.max_retries is None:
            return False
        return self.attempt > config.max_retries


def compute_backoff_delay(
    config: RetryConfig,
    state: BackoffState,
    *,
    rng: random.Random | None = None,
) -> int:
    """
    Compute backoff delay with exponential increase and jitter.

    Args:
        config: Retry configuration.
        state: Current backoff state.
        rng: Optional seeded Random instance for deterministic jitter.

    Returns:
        Delay in milliseconds before next retry.
    """
    if state.attempt == 0 or config.base_delay_ms == 0:
        return 0

    # Cap the exponent so unbounded policies cannot overflow the float
    exponent = min(state.attempt - 1, 64)
    delay = config.base_delay_ms * (config.multiplier**exponent)

    # Apply jitter: delay * (1 - jitter_factor) to delay * (1 + jitter_factor)
    jitter_min = 1.0 - config.jitter_factor
    jitter_max = 1.0 + config.jitter_factor
    if rng is not None:
        jitter_multiplier = rng.uniform(jitter_min, jitter_max)
    else:
        jitter_multiplier = random.uniform(jitter_min, jitter_max)
    delay = delay * jitter_multiplier

    return int(min(delay, config.max_delay_ms))
