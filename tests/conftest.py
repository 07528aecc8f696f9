"""Shared fakes for the payment process tests."""

import pytest

from payprocess.payment.money_source import Wallet

REQUEST_ID = "req-7f3a"
INSTANCE_ID = "inst-0042"
SUCCESS_URI = "https://shop.example.com/success"
FAIL_URI = "https://shop.example.com/fail"


class FakeClient:
    """ApiClient double answering from per-method queues.

    Queue items may be response models, dicts (validated into the request's
    response type) or exceptions (raised as transport failures).
    """

    def __init__(self, authorized=True):
        self.authorized = authorized
        self.requests = []
        self.tokens = []
        self._queues = {}

    def queue(self, method, *responses):
        self._queues.setdefault(method, []).extend(responses)
        return self

    def execute(self, request):
        self.requests.append(request)
        pending = self._queues.get(request.method)
        if not pending:
            raise AssertionError(f"unexpected request {request.method}")
        item = pending.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, dict):
            return request.response_type.model_validate(item)
        return item

    def is_authorized(self):
        return self.authorized

    def set_access_token(self, access_token):
        self.tokens.append(access_token)
        self.authorized = access_token is not None

    def methods(self):
        return [r.method for r in self.requests]


class FakeParameterProvider:
    """Mutable parameter provider; tests change attributes between calls."""

    def __init__(self, money_source=None):
        self.pattern_id = "p2p"
        self.parameters = {"to": "410011161616877", "amount": "10.00"}
        self.money_source = money_source if money_source is not None else Wallet()
        self.csc = None
        self.ext_auth_success_uri = SUCCESS_URI
        self.ext_auth_fail_uri = FAIL_URI
        self.request_token = False

    def get_pattern_id(self):
        return self.pattern_id

    def get_payment_parameters(self):
        return self.parameters

    def get_money_source(self):
        return self.money_source

    def get_csc(self):
        return self.csc

    def get_ext_auth_success_uri(self):
        return self.ext_auth_success_uri

    def get_ext_auth_fail_uri(self):
        return self.ext_auth_fail_uri

    def is_request_token(self):
        return self.request_token


@pytest.fixture
def client():
    return FakeClient(authorized=True)


@pytest.fixture
def anonymous_client():
    return FakeClient(authorized=False)


@pytest.fixture
def provider():
    return FakeParameterProvider()
