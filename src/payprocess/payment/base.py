# payprocess/payment/base.py
"""Request -> process -> repeat skeleton shared by the payment processes."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar, Dict, Optional, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ..client import ApiClient
from ..exceptions import (
    InvalidSavedStateError,
    MissingParameterError,
    ProcessStateError,
)
from .methods import BaseProcessPayment, BaseRequestPayment
from .money_source import MoneySource

logger = logging.getLogger(__name__)


class State(str, Enum):
    CREATED = "created"
    STARTED = "started"
    PROCESSING = "processing"
    COMPLETED = "completed"

    @property
    def ordinal(self) -> int:
        return list(State).index(self)


class ParameterProvider(Protocol):
    """Caller-owned payment parameters.

    Processes call these at the moment a request is built and never keep the
    results, so the caller may change them between transitions.
    """

    def get_pattern_id(self) -> str:
        ...

    def get_payment_parameters(self) -> Dict[str, str]:
        ...

    def get_money_source(self) -> MoneySource:
        """Return the selected money source.

        Raises:
            Exception: If no money source has been selected yet
        """
        ...

    def get_csc(self) -> Optional[str]:
        ...


class ProcessSavedState(BaseModel):
    """Immutable snapshot of a single process.

    Subclasses narrow the response types so the snapshot survives a JSON
    round-trip.
    """

    model_config = ConfigDict(frozen=True)

    state: State = State.CREATED
    request_payment: Optional[BaseRequestPayment] = None
    process_payment: Optional[BaseProcessPayment] = None

    @model_validator(mode="after")
    def check_consistency(self):
        if self.state == State.CREATED:
            if self.request_payment is not None or self.process_payment is not None:
                raise ValueError("created state can not hold responses")
        elif self.request_payment is None:
            raise ValueError(f"{self.state.value} state requires request_payment")
        if self.state == State.STARTED and self.process_payment is not None:
            raise ValueError("started state can not hold process_payment")
        if self.state == State.PROCESSING and self.process_payment is None:
            raise ValueError("processing state requires process_payment")
        return self

    @property
    def flags(self) -> int:
        return self.state.ordinal

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str):
        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise InvalidSavedStateError(f"invalid {cls.__name__}: {e}") from e


class BasePaymentProcess(ABC):
    """Drives one payment from the request step to a terminal response.

    ``proceed()`` moves CREATED -> STARTED -> PROCESSING/COMPLETED,
    ``repeat()`` re-issues the process step while the server reports the
    payment as pending. Calls that are illegal for the current state raise
    :class:`ProcessStateError` before anything is sent. Errors raised by the
    client propagate and leave the state untouched, so the same call can be
    retried.
    """

    saved_state_type: ClassVar[type] = ProcessSavedState

    def __init__(self, client: ApiClient, parameter_provider: ParameterProvider):
        if client is None:
            raise ValueError("client is required")
        if parameter_provider is None:
            raise ValueError("parameter_provider is required")
        self.client = client
        self.parameter_provider = parameter_provider
        self._state = State.CREATED
        self._request_payment: Optional[BaseRequestPayment] = None
        self._process_payment: Optional[BaseProcessPayment] = None

    @property
    def state(self) -> State:
        return self._state

    def is_completed(self) -> bool:
        return self._state == State.COMPLETED

    def proceed(self) -> bool:
        """Run the next step of the payment.

        Returns:
            True if the process is completed after this step
        """
        if self._state == State.CREATED:
            self._execute_request_payment()
        elif self._state == State.STARTED:
            self._execute_process_payment()
        elif self._state == State.PROCESSING:
            # only a finished external challenge moves forward with proceed()
            if not self._process_payment.is_ext_auth_required():
                raise ProcessStateError(
                    "payment is in progress, use repeat()", self._state
                )
            self._execute_process_payment()
        else:
            raise ProcessStateError("payment is already completed", self._state)
        return self.is_completed()

    def repeat(self) -> bool:
        """Re-issue the process step while the payment is pending.

        The caller is expected to wait :attr:`retry_delay` seconds first.

        Returns:
            True if the process is completed after this step
        """
        if self._state != State.PROCESSING:
            raise ProcessStateError(
                f"repeat() is not allowed in state {self._state.value}", self._state
            )
        self._execute_process_payment()
        return self.is_completed()

    def reset(self) -> None:
        self._state = State.CREATED
        self._request_payment = None
        self._process_payment = None
        logger.debug(f"[{type(self).__name__}] reset")

    def get_request_payment(self) -> Optional[BaseRequestPayment]:
        return self._request_payment

    def get_process_payment(self) -> Optional[BaseProcessPayment]:
        return self._process_payment

    @property
    def retry_delay(self) -> float:
        """Seconds the server asked to wait before the next repeat()."""
        if self._state != State.PROCESSING or not self._process_payment.next_retry:
            return 0.0
        return self._process_payment.next_retry / 1000.0

    def get_saved_state(self) -> ProcessSavedState:
        return self.saved_state_type(
            state=self._state,
            request_payment=self._request_payment,
            process_payment=self._process_payment,
        )

    def restore_saved_state(self, saved_state: ProcessSavedState) -> None:
        if not isinstance(saved_state, self.saved_state_type):
            raise InvalidSavedStateError(
                f"{type(self).__name__} can not restore "
                f"{type(saved_state).__name__}"
            )
        self._state = saved_state.state
        self._request_payment = saved_state.request_payment
        self._process_payment = saved_state.process_payment
        logger.debug(f"[{type(self).__name__}] restored state={self._state.value}")

    def _execute_request_payment(self) -> None:
        request = self._create_request_payment()
        logger.debug(f"[{type(self).__name__}] executing {request.method}")
        response = self.client.execute(request)

        self._request_payment = response
        self._process_payment = None
        if response.is_success():
            self._state = State.STARTED
        else:
            self._state = State.COMPLETED
            logger.info(
                f"[{type(self).__name__}] request step finished with "
                f"status={response.status.value} error={response.error}"
            )

    def _execute_process_payment(self) -> None:
        request = self._create_process_payment()
        logger.debug(f"[{type(self).__name__}] executing {request.method}")
        response = self.client.execute(request)

        self._process_payment = response
        if self._is_pending(response):
            self._state = State.PROCESSING
            logger.debug(
                f"[{type(self).__name__}] payment pending: status={response.status.value} "
                f"next_retry={response.next_retry}"
            )
        else:
            self._state = State.COMPLETED
            logger.info(
                f"[{type(self).__name__}] payment completed with "
                f"status={response.status.value} error={response.error}"
            )

    def _request_id(self) -> str:
        request_id = self._request_payment.request_id if self._request_payment else None
        return _require("request_id", request_id)

    def _money_source(self) -> MoneySource:
        return _require("money_source", self.parameter_provider.get_money_source())

    @abstractmethod
    def _create_request_payment(self):
        """Build the request of the request step."""

    @abstractmethod
    def _create_process_payment(self):
        """Build the request of the process step from current parameters."""

    @abstractmethod
    def _is_pending(self, process_payment: BaseProcessPayment) -> bool:
        """Return True if the response keeps the process in PROCESSING."""


def _require(name: str, value: Any):
    if value is None or value == "":
        raise MissingParameterError(name)
    return value
