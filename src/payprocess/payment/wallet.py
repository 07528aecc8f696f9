# payprocess/payment/wallet.py
"""Payments funded from the user's account."""

from typing import Optional

from ..exceptions import UnsupportedMoneySourceError
from .base import BasePaymentProcess, ProcessSavedState, _require
from .methods import (
    ProcessPayment,
    ProcessPaymentRequest,
    RequestPayment,
    RequestPaymentRequest,
)
from .money_source import Card, ExternalCard, Wallet


class WalletSavedState(ProcessSavedState):
    request_payment: Optional[RequestPayment] = None
    process_payment: Optional[ProcessPayment] = None


class WalletPaymentProcess(BasePaymentProcess):
    """
    Payment from the account balance or from a card linked to the account.

    There is no authentication sub-state: the process step either completes
    or reports ``in_progress`` until a repeat() completes it.
    """

    saved_state_type = WalletSavedState

    def _create_request_payment(self) -> RequestPaymentRequest:
        provider = self.parameter_provider
        return RequestPaymentRequest(
            pattern_id=_require("pattern_id", provider.get_pattern_id()),
            parameters=provider.get_payment_parameters() or {},
        )

    def _create_process_payment(self) -> ProcessPaymentRequest:
        money_source = self._money_source()
        request_id = self._request_id()

        if isinstance(money_source, Wallet):
            return ProcessPaymentRequest(request_id=request_id, money_source="wallet")
        if isinstance(money_source, Card) and not isinstance(money_source, ExternalCard):
            return ProcessPaymentRequest(
                request_id=request_id,
                money_source=_require("card id", money_source.id),
                csc=self.parameter_provider.get_csc(),
            )
        raise UnsupportedMoneySourceError(money_source, type(self).__name__)

    def _is_pending(self, process_payment: ProcessPayment) -> bool:
        return process_payment.is_in_progress()
