# payprocess/payment/money_source.py
"""Funding sources a payment can be paid from."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class MoneySource(BaseModel):
    """Base class of all funding sources."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None


class Wallet(MoneySource):
    """The user's account balance."""

    id: Optional[str] = "wallet"


class Card(MoneySource):
    """A bank card linked to the user's account."""

    pan_fragment: Optional[str] = None
    type: Optional[str] = None


class ExternalCard(Card):
    """A card not bound to the account, referenced by a money source token."""

    money_source_token: Optional[str] = None
    funding_source_type: Optional[str] = None
