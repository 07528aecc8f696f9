"""Tests for the typed API requests and responses."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from payprocess.payment.methods import (
    Error,
    ProcessExternalPayment,
    ProcessExternalPaymentRequest,
    ProcessPayment,
    ProcessPaymentRequest,
    RequestExternalPayment,
    RequestExternalPaymentRequest,
    RequestPayment,
    RequestPaymentRequest,
    Status,
)
from payprocess.payment.money_source import ExternalCard


class TestResponses:

    def test_status_is_parsed_case_insensitive(self):
        response = RequestPayment.model_validate({"status": "SUCCESS", "request_id": "r"})
        assert response.status == Status.SUCCESS
        assert response.is_success()

    def test_unknown_status_and_error(self):
        response = ProcessPayment.model_validate({"status": "on_hold", "error": "brand_new_error"})
        assert response.status == Status.UNKNOWN
        assert response.error == Error.UNKNOWN
        assert not response.is_in_progress()

    def test_amounts_are_decimal(self):
        response = RequestPayment.model_validate({"status": "success", "contract_amount": "10.05"})
        assert response.contract_amount == Decimal("10.05")

    def test_external_money_source(self):
        response = ProcessExternalPayment.model_validate({
            "status": "success",
            "money_source": {"money_source_token": "tok", "pan_fragment": "5555****4444"},
        })
        assert isinstance(response.money_source, ExternalCard)
        assert response.money_source.money_source_token == "tok"

    def test_responses_are_immutable(self):
        response = ProcessPayment.model_validate({"status": "success"})
        with pytest.raises(ValidationError):
            response.status = Status.REFUSED

    def test_responses_compare_by_value(self):
        a = ProcessPayment.model_validate({"status": "in_progress", "next_retry": 100})
        b = ProcessPayment.model_validate({"status": "in_progress", "next_retry": 100})
        assert a == b


class TestRequests:

    @pytest.mark.parametrize("request_type,method,response_type", [
        (RequestPaymentRequest, "request-payment", RequestPayment),
        (ProcessPaymentRequest, "process-payment", ProcessPayment),
        (RequestExternalPaymentRequest, "request-external-payment", RequestExternalPayment),
        (ProcessExternalPaymentRequest, "process-external-payment", ProcessExternalPayment),
    ])
    def test_method_and_response_type(self, request_type, method, response_type):
        assert request_type.method == method
        assert request_type.response_type is response_type

    def test_method_is_not_a_field(self):
        request = RequestPaymentRequest(pattern_id="p2p")
        assert "method" not in request.model_dump()
        assert request.parameters == {}
