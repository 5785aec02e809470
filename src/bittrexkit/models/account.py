"""Account result shapes: balances, deposits, withdrawals."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from bittrexkit.models.base import BittrexModel, DecimalValue


class CurrencyBalance(BittrexModel):
    """Balance of one currency."""

    currency: str
    balance: DecimalValue
    available: DecimalValue | None = None
    pending: DecimalValue | None = None
    crypto_address: str | None = None
    requested: bool | None = None
    uuid: str | None = Field(default=None, alias="Uuid")


class DepositAddress(BittrexModel):
    """Deposit address of a currency."""

    currency: str
    address: str | None = None


class AcceptedWithdrawal(BittrexModel):
    """Acknowledgement returned when a withdrawal is requested."""

    uuid: str = Field(alias="uuid")


class HistoricWithdrawal(BittrexModel):
    """A withdrawal from the withdrawal history."""

    payment_uuid: str
    currency: str
    amount: DecimalValue
    address: str | None = None
    opened: datetime
    authorized: bool = False
    pending_payment: bool = False
    tx_cost: DecimalValue | None = None
    tx_id: str | None = None
    canceled: bool = False
    invalid_address: bool = False


class HistoricDeposit(BittrexModel):
    """A deposit from the deposit history."""

    id: int
    amount: DecimalValue
    currency: str
    confirmations: int
    last_updated: datetime
    tx_id: str | None = None
    crypto_address: str | None = None
