"""
HTTP transport for the Bittrex REST API.

- Retries on network-level failures per RetryConfig (bounded by default,
  unbounded when max_retries is None)
- Optional overall deadline aborting the retry loop
- Non-2xx statuses fail immediately, without retry
- URLs are sent exactly as built, since the signature covers them
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, Protocol

import aiohttp
from yarl import URL

from bittrexkit.config import ClientConfig
from bittrexkit.connectors.backoff import BackoffState, compute_backoff_delay
from bittrexkit.errors import HttpStatusError, TransportError, TransportTimeoutError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

    from bittrexkit.connectors.exporter import ClientMetrics

logger = logging.getLogger(__name__)

# Body excerpt kept on HttpStatusError and in logs
_BODY_EXCERPT = 500


class Transport(Protocol):
    """Anything that can send a request and return the response text."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
    ) -> str | bytes: ...

    async def close(self) -> None: ...


class HttpTransport:
    """
    aiohttp-based transport with retry and deadline handling.

    The session is created lazily on first send and released by close().
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        metrics: ClientMetrics | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            config: Client configuration (timeouts and retry policy).
            metrics: Optional metrics sink for retry counts.
            rng: Optional seeded Random for deterministic backoff jitter.
        """
        self._config = config or ClientConfig()
        self._metrics = metrics
        self._rng = rng
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout_ms / 1000)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None = None,
    ) -> bytes:
        """
        Send a request and return the response body.

        Args:
            method: HTTP method.
            url: Complete URL including query string.
            headers: Extra request headers.

        Returns:
            Raw body of the first successful response. Decoding is left to
            the envelope parser so invalid UTF-8 surfaces as a malformed body.

        Raises:
            HttpStatusError: On a non-2xx status (not retried).
            TransportError: When the retry budget is exhausted.
            TransportTimeoutError: When retry.deadline_ms expires.
        """
        state = BackoffState()
        deadline_ms = self._config.retry.deadline_ms
        if deadline_ms is None:
            return await self._send_with_retry(method, url, headers, state)

        try:
            async with asyncio.timeout(deadline_ms / 1000):
                return await self._send_with_retry(method, url, headers, state)
        except TimeoutError as e:
            logger.warning(
                "Send deadline expired",
                extra={"deadline_ms": deadline_ms, "attempt": state.attempt},
            )
            raise TransportTimeoutError(
                f"No response within {deadline_ms} ms",
                attempts=state.attempt,
                deadline_ms=deadline_ms,
            ) from e

    async def _send_with_retry(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
        state: BackoffState,
    ) -> bytes:
        retry = self._config.retry

        while True:
            delay_ms = compute_backoff_delay(retry, state, rng=self._rng)
            if delay_ms > 0:
                logger.debug(
                    "Backing off before request",
                    extra={"delay_ms": delay_ms, "attempt": state.attempt},
                )
                await asyncio.sleep(delay_ms / 1000)

            try:
                return await self._send_once(method, url, headers)
            except (aiohttp.ClientError, TimeoutError) as e:
                state.record_error()
                logger.warning(
                    "Request failed",
                    extra={"error": repr(e), "attempt": state.attempt},
                )
                if state.exhausted(retry):
                    raise TransportError(
                        f"Request failed after {state.attempt} attempts",
                        attempts=state.attempt,
                    ) from e
                if self._metrics is not None:
                    self._metrics.record_retry()
                # Yield so a deadline or cancellation can interrupt the loop
                await asyncio.sleep(0)

    async def _send_once(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str] | None,
    ) -> bytes:
        session = await self._get_session()
        async with session.request(
            method,
            URL(url, encoded=True),
            headers=dict(headers or {}),
        ) as response:
            body = await response.read()
            if not 200 <= response.status < 300:
                excerpt = body[:_BODY_EXCERPT].decode("utf-8", errors="replace")
                logger.error(
                    "HTTP error",
                    extra={"status": response.status, "body": excerpt},
                )
                raise HttpStatusError(response.status, excerpt)
            return body
