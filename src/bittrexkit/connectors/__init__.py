"""Request pipeline: signing, transport, envelope decoding, metrics."""

from bittrexkit.connectors.backoff import BackoffState, compute_backoff_delay
from bittrexkit.connectors.envelope import Envelope, decode_envelope, parse_envelope
from bittrexkit.connectors.exporter import ClientMetrics, RequestOutcome
from bittrexkit.connectors.signer import (
    NonceGenerator,
    RequestSigner,
    SignedRequest,
    build_query,
    sign_request,
)
from bittrexkit.connectors.transport import HttpTransport, Transport

__all__ = [
    "BackoffState",
    "ClientMetrics",
    "Envelope",
    "HttpTransport",
    "NonceGenerator",
    "RequestOutcome",
    "RequestSigner",
    "SignedRequest",
    "Transport",
    "build_query",
    "compute_backoff_delay",
    "decode_envelope",
    "parse_envelope",
    "sign_request",
]
