"""Tests for payment utilities."""

import pytest
from payprocess.payment.methods import Error, Status
from payprocess.utils.payment import normalize_code, parse_error, parse_status


class TestParseStatus:
    """Test suite for parse_status function."""

    @pytest.mark.parametrize("raw,expected", [
        ("success", Status.SUCCESS),
        ("SUCCESS", Status.SUCCESS),
        (" refused ", Status.REFUSED),
        ("in_progress", Status.IN_PROGRESS),
        ("in-progress", Status.IN_PROGRESS),
        ("ext_auth_required", Status.EXT_AUTH_REQUIRED),
    ])
    def test_known_statuses(self, raw, expected):
        assert parse_status(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "paid", 42])
    def test_unknown_statuses(self, raw):
        assert parse_status(raw) == Status.UNKNOWN

    def test_enum_passes_through(self):
        assert parse_status(Status.REFUSED) is Status.REFUSED


class TestParseError:

    def test_no_error(self):
        assert parse_error(None) is None
        assert parse_error("") is None

    def test_known_error(self):
        assert parse_error("NOT_ENOUGH_FUNDS") == Error.NOT_ENOUGH_FUNDS

    def test_unknown_error(self):
        assert parse_error("something_new") == Error.UNKNOWN


def test_normalize_code():
    assert normalize_code(None) == ""
    assert normalize_code(" Ext-Auth-Required ") == "ext_auth_required"
