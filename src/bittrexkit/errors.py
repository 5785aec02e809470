"""
Error taxonomy for the Bittrex client.

Callers need to tell three situations apart:
- the exchange said no (ExchangeRejectedError)
- the network or protocol failed (InfrastructureError and subclasses)
- the caller misused the client (UnauthorizedError)

OrderNotFoundError is raised by the order simulation only.
"""

from __future__ import annotations


class BittrexError(Exception):
    """Base class for all errors raised by bittrexkit."""


class UnauthorizedError(BittrexError):
    """Raised when an authenticated endpoint is called without credentials.

    Raised before any network I/O.
    """


class ExchangeRejectedError(BittrexError):
    """Raised when the response envelope reports success=false."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class OrderNotFoundError(BittrexError):
    """Raised when a simulated order lookup or cancel names an unknown uuid."""

    def __init__(self, order_uuid: str) -> None:
        super().__init__(f"No such order: {order_uuid}")
        self.order_uuid = order_uuid


class InfrastructureError(BittrexError):
    """Base class for network and protocol failures."""


class TransportError(InfrastructureError):
    """Raised when no response could be received within the retry policy."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class TransportTimeoutError(TransportError):
    """Raised when the send deadline expires before a response arrives."""

    def __init__(self, message: str, attempts: int = 0, deadline_ms: int | None = None) -> None:
        super().__init__(message, attempts=attempts)
        self.deadline_ms = deadline_ms


class HttpStatusError(InfrastructureError):
    """Raised on a non-2xx HTTP status. Never retried."""

    def __init__(self, status: int, body: str = "") -> None:
        super().__init__(f"HTTP {status}")
        self.status = status
        self.body = body


class MalformedEnvelopeError(InfrastructureError):
    """Raised when a response body is not a {success, message, result} envelope."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class ResultShapeMismatchError(InfrastructureError):
    """Raised when a successful envelope's result does not fit the requested type.

    Attributes:
        json: Raw JSON text of the result field.
        target_type: Name of the type the result was decoded into.
    """

    def __init__(self, message: str, json: str, target_type: str) -> None:
        super().__init__(message)
        self.json = json
        self.target_type = target_type
