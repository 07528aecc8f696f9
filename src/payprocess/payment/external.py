# payprocess/payment/external.py
"""Payments funded from an instrument outside the user's account."""

import logging
from typing import Dict, Optional, Protocol

from ..exceptions import UnsupportedMoneySourceError
from .base import BasePaymentProcess, ParameterProvider, ProcessSavedState, _require
from .methods import (
    ProcessExternalPayment,
    ProcessExternalPaymentRequest,
    RequestExternalPayment,
    RequestExternalPaymentRequest,
)
from .money_source import ExternalCard

logger = logging.getLogger(__name__)


class ExternalParameterProvider(ParameterProvider, Protocol):
    """Parameters of the external flow on top of :class:`ParameterProvider`."""

    def get_ext_auth_success_uri(self) -> str:
        ...

    def get_ext_auth_fail_uri(self) -> str:
        ...

    def is_request_token(self) -> bool:
        """Return True to ask the server for a reusable money source token."""
        ...


class ExternalSavedState(ProcessSavedState):
    request_payment: Optional[RequestExternalPayment] = None
    process_payment: Optional[ProcessExternalPayment] = None


class ExternalPaymentProcess(BasePaymentProcess):
    """
    Payment from an external card.

    When the process step answers ``ext_auth_required`` the process stays in
    PROCESSING and exposes :attr:`auth_uri` / :attr:`auth_params`. The caller
    completes the challenge out of band and then calls repeat() (or proceed())
    to learn the outcome.

    Every request carries the client's instance id, see :meth:`set_instance_id`.
    """

    saved_state_type = ExternalSavedState

    def __init__(self, client, parameter_provider, instance_id: Optional[str] = None):
        super().__init__(client, parameter_provider)
        self._instance_id = instance_id

    @property
    def instance_id(self) -> Optional[str]:
        return self._instance_id

    def set_instance_id(self, instance_id: Optional[str]) -> None:
        self._instance_id = instance_id
        logger.debug("[ExternalPaymentProcess] instance id updated")

    @property
    def auth_uri(self) -> Optional[str]:
        if self._awaiting_auth():
            return self._process_payment.acs_uri
        return None

    @property
    def auth_params(self) -> Optional[Dict[str, str]]:
        if self._awaiting_auth():
            return dict(self._process_payment.acs_params)
        return None

    def _awaiting_auth(self) -> bool:
        return (
            self._process_payment is not None
            and self._process_payment.is_ext_auth_required()
        )

    def _create_request_payment(self) -> RequestExternalPaymentRequest:
        provider = self.parameter_provider
        return RequestExternalPaymentRequest(
            instance_id=_require("instance_id", self._instance_id),
            pattern_id=_require("pattern_id", provider.get_pattern_id()),
            parameters=provider.get_payment_parameters() or {},
        )

    def _create_process_payment(self) -> ProcessExternalPaymentRequest:
        provider = self.parameter_provider
        params = dict(
            instance_id=_require("instance_id", self._instance_id),
            request_id=self._request_id(),
            ext_auth_success_uri=_require(
                "ext_auth_success_uri", provider.get_ext_auth_success_uri()
            ),
            ext_auth_fail_uri=_require(
                "ext_auth_fail_uri", provider.get_ext_auth_fail_uri()
            ),
        )

        if provider.is_request_token():
            return ProcessExternalPaymentRequest(request_token=True, **params)

        money_source = self._money_source()
        if not isinstance(money_source, ExternalCard):
            raise UnsupportedMoneySourceError(money_source, type(self).__name__)
        if not money_source.money_source_token:
            # new card, its data is collected on the authentication page
            return ProcessExternalPaymentRequest(**params)
        return ProcessExternalPaymentRequest(
            money_source_token=money_source.money_source_token,
            csc=provider.get_csc(),
            **params,
        )

    def _is_pending(self, process_payment: ProcessExternalPayment) -> bool:
        return process_payment.is_in_progress() or process_payment.is_ext_auth_required()
