"""
Async client for the Bittrex v1.1 REST API.

Every endpoint goes through one pipeline:
- authenticated endpoints fail fast with UnauthorizedError when no
  credentials are configured (no network I/O)
- authenticated requests are signed and carry the signature in the
  apisign header
- responses are unwrapped from the {success, message, result} envelope into
  typed results; failures are raised, never returned
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

import orjson

from bittrexkit.client import endpoints as ep
from bittrexkit.config import ClientConfig
from bittrexkit.connectors.envelope import decode_envelope
from bittrexkit.connectors.exporter import RequestOutcome
from bittrexkit.connectors.signer import NonceGenerator, RequestSigner, build_query
from bittrexkit.connectors.transport import HttpTransport
from bittrexkit.errors import (
    ExchangeRejectedError,
    HttpStatusError,
    MalformedEnvelopeError,
    ResultShapeMismatchError,
    TransportError,
    TransportTimeoutError,
    UnauthorizedError,
)
from bittrexkit.models import (
    AcceptedOrder,
    AcceptedWithdrawal,
    CurrencyBalance,
    DepositAddress,
    HistoricDeposit,
    HistoricOrder,
    HistoricWithdrawal,
    Market,
    MarketSummary,
    OpenOrder,
    Order,
    OrderBook,
    OrderBookEntry,
    OrderBookType,
    SupportedCurrency,
    Ticker,
    Trade,
)

if TYPE_CHECKING:
    from decimal import Decimal
    from types import TracebackType

    from bittrexkit.config import Credentials
    from bittrexkit.connectors.exporter import ClientMetrics
    from bittrexkit.connectors.transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ORDER_BOOK_DEPTH = 20

_OUTCOMES: tuple[tuple[type[Exception], RequestOutcome], ...] = (
    (UnauthorizedError, RequestOutcome.UNAUTHORIZED),
    (ExchangeRejectedError, RequestOutcome.EXCHANGE_REJECTED),
    (TransportTimeoutError, RequestOutcome.TIMEOUT),
    (TransportError, RequestOutcome.TRANSPORT_ERROR),
    (HttpStatusError, RequestOutcome.HTTP_ERROR),
    (MalformedEnvelopeError, RequestOutcome.MALFORMED_ENVELOPE),
    (ResultShapeMismatchError, RequestOutcome.RESULT_MISMATCH),
)


def _format_decimal(value: Decimal) -> str:
    """Render a Decimal the way the exchange expects (no exponent)."""
    return format(value, "f")


class BittrexClient:
    """
    Async client for the Bittrex REST API.

    Implements both MarketDataApi and TradingApi, plus the funding endpoints
    (deposit address, withdraw, deposit and withdrawal history).
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        credentials: Credentials | None = None,
        transport: Transport | None = None,
        metrics: ClientMetrics | None = None,
        nonce_generator: NonceGenerator | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration. Defaults to the public Bittrex API.
            credentials: API key/secret. Without them only public endpoints work.
            transport: Transport to send requests with. Defaults to HttpTransport.
            metrics: Optional Prometheus metrics.
            nonce_generator: Optional nonce source (shared across clients using
                the same API key).
        """
        self._config = config or ClientConfig()
        self._metrics = metrics
        self._transport: Transport = transport or HttpTransport(self._config, metrics)
        self._signer = (
            RequestSigner(credentials, nonce_generator) if credentials is not None else None
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def has_credentials(self) -> bool:
        return self._signer is not None

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def __aenter__(self) -> BittrexClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def build_request(
        self,
        endpoint: ep.Endpoint,
        params: dict[str, str],
    ) -> tuple[str, dict[str, str]]:
        """
        Build the URL and headers for an endpoint call.

        Raises:
            UnauthorizedError: If the endpoint requires auth and no credentials
                are configured.
        """
        base_uri = self._config.endpoint_url(endpoint.path)

        if not endpoint.requires_auth:
            query = build_query(params)
            return (f"{base_uri}?{query}" if query else base_uri), {}

        if self._signer is None:
            raise UnauthorizedError(
                f"Endpoint '{endpoint.path}' requires an API key and secret"
            )
        signed = self._signer.sign(base_uri, params)
        return signed.uri, {self._config.sign_header_name: signed.signature}

    async def _call(
        self,
        endpoint: ep.Endpoint,
        params: dict[str, str],
        result_type: type[T] | Any,
    ) -> T:
        """
        Run one endpoint call through sign/send/decode.

        Args:
            endpoint: Endpoint to call.
            params: Query parameters.
            result_type: Type the envelope result is decoded into.

        Returns:
            Decoded result.
        """
        try:
            url, headers = self.build_request(endpoint, params)
            logger.debug(
                "Calling endpoint",
                extra={"endpoint": endpoint.path, "auth": endpoint.requires_auth},
            )
            body = await self._transport.send("GET", url, headers)
            result: T = decode_envelope(body, result_type)
        except ExchangeRejectedError as e:
            logger.info(
                "Exchange rejected request",
                extra={"endpoint": endpoint.path, "reason": e.message},
            )
            self._record_failure(e)
            raise
        except Exception as e:
            self._record_failure(e)
            raise

        if self._metrics is not None:
            self._metrics.record_request(RequestOutcome.OK)
        return result

    def _record_failure(self, error: Exception) -> None:
        if self._metrics is None:
            return
        for error_type, outcome in _OUTCOMES:
            if isinstance(error, error_type):
                self._metrics.record_request(outcome)
                return

    # === Public API ===

    async def get_markets(self) -> list[Market]:
        """Get all markets and their metadata."""
        return await self._call(ep.GET_MARKETS, ep.GET_MARKETS.build_params(), list[Market])

    async def get_supported_currencies(self) -> list[SupportedCurrency]:
        """Get all supported currencies and their metadata."""
        return await self._call(
            ep.GET_CURRENCIES,
            ep.GET_CURRENCIES.build_params(),
            list[SupportedCurrency],
        )

    async def get_ticker(self, market: str) -> Ticker:
        """Get bid, ask and last price of a market, e.g. BTC-LTC."""
        ticker: Ticker = await self._call(
            ep.GET_TICKER,
            ep.GET_TICKER.build_params(market=market),
            Ticker,
        )
        ticker.market_name = market
        return ticker

    async def get_market_summaries(self) -> list[MarketSummary]:
        """Get the last 24 hours summary of all markets."""
        return await self._call(
            ep.GET_MARKET_SUMMARIES,
            ep.GET_MARKET_SUMMARIES.build_params(),
            list[MarketSummary],
        )

    async def get_market_summary(self, market: str) -> MarketSummary:
        """Get the last 24 hours summary of one market.

        The live exchange wraps the summary in a one-element list; a bare
        object is accepted as well.
        """
        result: MarketSummary | list[MarketSummary] = await self._call(
            ep.GET_MARKET_SUMMARY,
            ep.GET_MARKET_SUMMARY.build_params(market=market),
            MarketSummary | list[MarketSummary],
        )
        if isinstance(result, MarketSummary):
            return result
        if len(result) != 1:
            raise ResultShapeMismatchError(
                f"Expected one market summary, got {len(result)}",
                json=orjson.dumps([s.to_api_dict() for s in result]).decode("utf-8"),
                target_type="MarketSummary",
            )
        return result[0]

    async def get_order_book(
        self,
        market: str,
        order_type: OrderBookType = OrderBookType.BOTH,
        depth: int = DEFAULT_ORDER_BOOK_DEPTH,
    ) -> OrderBook:
        """
        Get the order book of a market.

        Args:
            market: Market name, e.g. BTC-LTC.
            order_type: Which side(s) to fetch.
            depth: Number of levels per side.

        Returns:
            OrderBook. When one side is requested the other side is None.
        """
        order_type = OrderBookType(order_type)
        params = ep.GET_ORDER_BOOK.build_params(
            market=market,
            type=order_type.value,
            depth=str(depth),
        )

        if order_type == OrderBookType.BOTH:
            book: OrderBook = await self._call(ep.GET_ORDER_BOOK, params, OrderBook)
        else:
            entries: list[OrderBookEntry] = await self._call(
                ep.GET_ORDER_BOOK,
                params,
                list[OrderBookEntry],
            )
            if order_type == OrderBookType.BUY:
                book = OrderBook(buy=entries)
            else:
                book = OrderBook(sell=entries)

        book.market_name = market
        return book

    async def get_market_history(self, market: str) -> list[Trade]:
        """Get the latest trades of a market."""
        return await self._call(
            ep.GET_MARKET_HISTORY,
            ep.GET_MARKET_HISTORY.build_params(market=market),
            list[Trade],
        )

    # === Market API ===

    async def buy_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder:
        """Place a limit buy order of quantity at rate."""
        params = ep.BUY_LIMIT.build_params(
            market=market,
            quantity=_format_decimal(quantity),
            rate=_format_decimal(rate),
        )
        return await self._call(ep.BUY_LIMIT, params, AcceptedOrder)

    async def sell_limit(self, market: str, quantity: Decimal, rate: Decimal) -> AcceptedOrder:
        """Place a limit sell order of quantity at rate."""
        params = ep.SELL_LIMIT.build_params(
            market=market,
            quantity=_format_decimal(quantity),
            rate=_format_decimal(rate),
        )
        return await self._call(ep.SELL_LIMIT, params, AcceptedOrder)

    async def cancel_order(self, order_uuid: str) -> Any:
        """Cancel an open order. Returns the raw result (usually None)."""
        return await self._call(
            ep.CANCEL_ORDER,
            ep.CANCEL_ORDER.build_params(uuid=order_uuid),
            object,
        )

    async def get_open_orders(self, market: str | None = None) -> list[OpenOrder]:
        """Get open orders, optionally restricted to one market."""
        return await self._call(
            ep.GET_OPEN_ORDERS,
            ep.GET_OPEN_ORDERS.build_params(market=market),
            list[OpenOrder],
        )

    # === Account API ===

    async def get_balances(self) -> list[CurrencyBalance]:
        """Get balances of all currencies."""
        return await self._call(
            ep.GET_BALANCES,
            ep.GET_BALANCES.build_params(),
            list[CurrencyBalance],
        )

    async def get_balance(self, currency: str) -> CurrencyBalance:
        """Get the balance of one currency, e.g. BTC."""
        return await self._call(
            ep.GET_BALANCE,
            ep.GET_BALANCE.build_params(currency=currency),
            CurrencyBalance,
        )

    async def get_deposit_address(self, currency: str) -> DepositAddress:
        """Get the deposit address of a currency."""
        return await self._call(
            ep.GET_DEPOSIT_ADDRESS,
            ep.GET_DEPOSIT_ADDRESS.build_params(currency=currency),
            DepositAddress,
        )

    async def withdraw(
        self,
        currency: str,
        quantity: Decimal,
        address: str,
        payment_id: str | None = None,
    ) -> AcceptedWithdrawal:
        """
        Send funds to another address.

        Args:
            currency: Currency symbol, e.g. BTC.
            quantity: Amount to withdraw.
            address: Destination address.
            payment_id: Optional memo/payment id for currencies that need one.
        """
        params = ep.WITHDRAW.build_params(
            currency=currency,
            quantity=_format_decimal(quantity),
            address=address,
            paymentid=payment_id,
        )
        return await self._call(ep.WITHDRAW, params, AcceptedWithdrawal)

    async def get_order(self, order_uuid: str) -> Order:
        """Get a single order by uuid."""
        return await self._call(
            ep.GET_ORDER,
            ep.GET_ORDER.build_params(uuid=order_uuid),
            Order,
        )

    async def get_order_history(self, market: str | None = None) -> list[HistoricOrder]:
        """Get the order history, optionally restricted to one market."""
        return await self._call(
            ep.GET_ORDER_HISTORY,
            ep.GET_ORDER_HISTORY.build_params(market=market),
            list[HistoricOrder],
        )

    async def get_withdrawal_history(self, currency: str | None = None) -> list[HistoricWithdrawal]:
        """Get the withdrawal history, optionally restricted to one currency."""
        return await self._call(
            ep.GET_WITHDRAWAL_HISTORY,
            ep.GET_WITHDRAWAL_HISTORY.build_params(currency=currency),
            list[HistoricWithdrawal],
        )

    async def get_deposit_history(self, currency: str | None = None) -> list[HistoricDeposit]:
        """Get the deposit history, optionally restricted to one currency."""
        return await self._call(
            ep.GET_DEPOSIT_HISTORY,
            ep.GET_DEPOSIT_HISTORY.build_params(currency=currency),
            list[HistoricDeposit],
        )
