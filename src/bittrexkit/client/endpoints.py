"""
Endpoint table of the Bittrex v1.1 REST API.

Each endpoint maps to a path relative to the versioned API root, whether it
needs a signed request, and its required and optional query parameters.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Endpoint:
    """
    One REST endpoint.

    Attributes:
        path: Path relative to the API root (e.g. "public/getticker").
        requires_auth: Whether the request must be signed.
        required: Parameter names that must be present.
        optional: Parameter names that may be omitted.
    """

    path: str
    requires_auth: bool
    required: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()

    def build_params(self, **values: str | None) -> dict[str, str]:
        """
        Build the query parameter mapping in table order.

        Optional parameters whose value is None are left out.

        Raises:
            ValueError: On a missing required or an unknown parameter.
        """
        unknown = set(values) - set(self.required) - set(self.optional)
        if unknown:
            raise ValueError(f"{self.path}: unknown parameters {sorted(unknown)}")

        params: dict[str, str] = {}
        for name in self.required:
            value = values.get(name)
            if value is None:
                raise ValueError(f"{self.path}: missing required parameter '{name}'")
            params[name] = value
        for name in self.optional:
            value = values.get(name)
            if value is not None:
                params[name] = value
        return params


# Public API
GET_MARKETS = Endpoint("public/getmarkets", requires_auth=False)
GET_CURRENCIES = Endpoint("public/getcurrencies", requires_auth=False)
GET_TICKER = Endpoint("public/getticker", requires_auth=False, required=("market",))
GET_MARKET_SUMMARIES = Endpoint("public/getmarketsummaries", requires_auth=False)
GET_MARKET_SUMMARY = Endpoint("public/getmarketsummary", requires_auth=False, required=("market",))
GET_ORDER_BOOK = Endpoint(
    "public/getorderbook",
    requires_auth=False,
    required=("market", "type", "depth"),
)
GET_MARKET_HISTORY = Endpoint("public/getmarkethistory", requires_auth=False, required=("market",))

# Market API
BUY_LIMIT = Endpoint("market/buylimit", requires_auth=True, required=("market", "quantity", "rate"))
SELL_LIMIT = Endpoint(
    "market/selllimit",
    requires_auth=True,
    required=("market", "quantity", "rate"),
)
CANCEL_ORDER = Endpoint("market/cancel", requires_auth=True, required=("uuid",))
GET_OPEN_ORDERS = Endpoint("market/getopenorders", requires_auth=True, optional=("market",))

# Account API
GET_BALANCES = Endpoint("account/getbalances", requires_auth=True)
GET_BALANCE = Endpoint("account/getbalance", requires_auth=True, required=("currency",))
GET_DEPOSIT_ADDRESS = Endpoint(
    "account/getdepositaddress",
    requires_auth=True,
    required=("currency",),
)
WITHDRAW = Endpoint(
    "account/withdraw",
    requires_auth=True,
    required=("currency", "quantity", "address"),
    optional=("paymentid",),
)
GET_ORDER = Endpoint("account/getorder", requires_auth=True, required=("uuid",))
GET_ORDER_HISTORY = Endpoint("account/getorderhistory", requires_auth=True, optional=("market",))
GET_WITHDRAWAL_HISTORY = Endpoint(
    "account/getwithdrawalhistory",
    requires_auth=True,
    optional=("currency",),
)
GET_DEPOSIT_HISTORY = Endpoint(
    "account/getdeposithistory",
    requires_auth=True,
    optional=("currency",),
)

ENDPOINTS: dict[str, Endpoint] = {
    "get_markets": GET_MARKETS,
    "get_supported_currencies": GET_CURRENCIES,
    "get_ticker": GET_TICKER,
    "get_market_summaries": GET_MARKET_SUMMARIES,
    "get_market_summary": GET_MARKET_SUMMARY,
    "get_order_book": GET_ORDER_BOOK,
    "get_market_history": GET_MARKET_HISTORY,
    "buy_limit": BUY_LIMIT,
    "sell_limit": SELL_LIMIT,
    "cancel_order": CANCEL_ORDER,
    "get_open_orders": GET_OPEN_ORDERS,
    "get_balances": GET_BALANCES,
    "get_balance": GET_BALANCE,
    "get_deposit_address": GET_DEPOSIT_ADDRESS,
    "withdraw": WITHDRAW,
    "get_order": GET_ORDER,
    "get_order_history": GET_ORDER_HISTORY,
    "get_withdrawal_history": GET_WITHDRAWAL_HISTORY,
    "get_deposit_history": GET_DEPOSIT_HISTORY,
}
