# payprocess/payment/methods.py
"""Typed requests and responses of the payment API methods.

Each request names its API method and the response model it expects, so a
transport can do ``request.response_type.model_validate(payload)``. Wire
encoding itself belongs to the transport.
"""

from decimal import Decimal
from enum import Enum
from typing import ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.payment import parse_error, parse_status
from .money_source import ExternalCard


class Status(str, Enum):
    SUCCESS = "success"
    REFUSED = "refused"
    IN_PROGRESS = "in_progress"
    EXT_AUTH_REQUIRED = "ext_auth_required"
    UNKNOWN = "unknown"


class Error(str, Enum):
    ILLEGAL_PARAMS = "illegal_params"
    ILLEGAL_PARAM_CSC = "illegal_param_csc"
    ILLEGAL_PARAM_EXT_AUTH_FAIL_URI = "illegal_param_ext_auth_fail_uri"
    ILLEGAL_PARAM_EXT_AUTH_SUCCESS_URI = "illegal_param_ext_auth_success_uri"
    ILLEGAL_PARAM_INSTANCE_ID = "illegal_param_instance_id"
    ILLEGAL_PARAM_MONEY_SOURCE = "illegal_param_money_source"
    ILLEGAL_PARAM_MONEY_SOURCE_TOKEN = "illegal_param_money_source_token"
    ILLEGAL_PARAM_REQUEST_ID = "illegal_param_request_id"
    PAYEE_NOT_FOUND = "payee_not_found"
    PAYMENT_REFUSED = "payment_refused"
    NOT_ENOUGH_FUNDS = "not_enough_funds"
    AUTHORIZATION_REJECT = "authorization_reject"
    MONEY_SOURCE_NOT_AVAILABLE = "money_source_not_available"
    EXT_ACTION_REQUIRED = "ext_action_required"
    ACCOUNT_BLOCKED = "account_blocked"
    LIMIT_EXCEEDED = "limit_exceeded"
    CONTRACT_NOT_FOUND = "contract_not_found"
    UNKNOWN = "unknown"


class _Response(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Status
    error: Optional[Error] = None

    @field_validator("status", mode="before")
    @classmethod
    def parse_status_value(cls, value):
        return parse_status(value)

    @field_validator("error", mode="before")
    @classmethod
    def parse_error_value(cls, value):
        return parse_error(value)

    def is_success(self) -> bool:
        return self.status == Status.SUCCESS


class BaseRequestPayment(_Response):
    """Response of the request step: the server's payment intent."""

    request_id: Optional[str] = None
    contract_amount: Optional[Decimal] = None


class BaseProcessPayment(_Response):
    """Response of the process step."""

    invoice_id: Optional[str] = None
    acs_uri: Optional[str] = None
    acs_params: Dict[str, str] = Field(default_factory=dict)
    next_retry: Optional[int] = None  # milliseconds

    def is_in_progress(self) -> bool:
        return self.status == Status.IN_PROGRESS

    def is_ext_auth_required(self) -> bool:
        return self.status == Status.EXT_AUTH_REQUIRED


class RequestPayment(BaseRequestPayment):
    balance: Optional[Decimal] = None
    account_unblock_uri: Optional[str] = None
    ext_action_uri: Optional[str] = None


class ProcessPayment(BaseProcessPayment):
    payment_id: Optional[str] = None
    balance: Optional[Decimal] = None
    payer: Optional[str] = None
    payee: Optional[str] = None
    credit_amount: Optional[Decimal] = None
    account_unblock_uri: Optional[str] = None


class RequestExternalPayment(BaseRequestPayment):
    title: Optional[str] = None


class ProcessExternalPayment(BaseProcessPayment):
    money_source: Optional[ExternalCard] = None


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: ClassVar[str]
    response_type: ClassVar[type]


class RequestPaymentRequest(_Request):
    method: ClassVar[str] = "request-payment"
    response_type: ClassVar[type] = RequestPayment

    pattern_id: str
    parameters: Dict[str, str] = Field(default_factory=dict)


class ProcessPaymentRequest(_Request):
    method: ClassVar[str] = "process-payment"
    response_type: ClassVar[type] = ProcessPayment

    request_id: str
    money_source: str = "wallet"
    csc: Optional[str] = None


class RequestExternalPaymentRequest(_Request):
    method: ClassVar[str] = "request-external-payment"
    response_type: ClassVar[type] = RequestExternalPayment

    instance_id: str
    pattern_id: str
    parameters: Dict[str, str] = Field(default_factory=dict)


class ProcessExternalPaymentRequest(_Request):
    method: ClassVar[str] = "process-external-payment"
    response_type: ClassVar[type] = ProcessExternalPayment

    instance_id: str
    request_id: str
    ext_auth_success_uri: str
    ext_auth_fail_uri: str
    request_token: bool = False
    money_source_token: Optional[str] = None
    csc: Optional[str] = None
