"""Payment processes and the models they exchange with the API."""

from .base import BasePaymentProcess, ParameterProvider, ProcessSavedState, State
from .external import ExternalParameterProvider, ExternalPaymentProcess, ExternalSavedState
from .methods import Error, Status
from .money_source import Card, ExternalCard, MoneySource, Wallet
from .wallet import WalletPaymentProcess, WalletSavedState

__all__ = [
    "BasePaymentProcess",
    "ParameterProvider",
    "ProcessSavedState",
    "State",
    "ExternalParameterProvider",
    "ExternalPaymentProcess",
    "ExternalSavedState",
    "WalletPaymentProcess",
    "WalletSavedState",
    "Error",
    "Status",
    "MoneySource",
    "Wallet",
    "Card",
    "ExternalCard",
]
