"""
Test suite for provider failure classification.

System role: Verification of quota / rate-limit detection
"""

from http import HTTPStatus
from types import SimpleNamespace

import pytest

from ragchat.core.error_classifier import (
    extract_status_code,
    find_status_code,
    is_quota_or_rate_limit_error,
)


class SDKError(Exception):
    """Exception carrying arbitrary status attributes."""

    def __init__(self, message: str = "provider failure", **attrs) -> None:
        super().__init__(message)
        for name, value in attrs.items():
            setattr(self, name, value)


class TestStatusCodeDetection:
    """Test suite for status-code based classification."""

    def test_status_429_with_rate_limit_message_should_be_quota(self, rate_limit_error) -> None:
        assert is_quota_or_rate_limit_error(rate_limit_error) is True

    @pytest.mark.parametrize("attr", ["status", "status_code", "statusCode", "code"])
    def test_429_on_any_status_attribute_should_be_quota(self, attr: str) -> None:
        error = SDKError("upstream refused", **{attr: 429})

        assert is_quota_or_rate_limit_error(error) is True
        assert extract_status_code(error) == 429

    def test_429_on_response_should_be_quota(self) -> None:
        error = SDKError("upstream refused", response=SimpleNamespace(status_code=429))

        assert is_quota_or_rate_limit_error(error) is True

    def test_http_status_enum_should_be_read_as_int(self) -> None:
        error = SDKError("upstream refused", status=HTTPStatus.TOO_MANY_REQUESTS)

        assert extract_status_code(error) == 429

    def test_bool_status_should_be_ignored(self) -> None:
        assert extract_status_code(SDKError(status=True)) is None

    def test_string_code_should_be_ignored(self) -> None:
        error = SDKError("upstream refused", code="RESOURCE_EXHAUSTED_BUT_NOT_A_NUMBER")

        assert extract_status_code(error) is None

    def test_other_status_should_not_be_quota(self) -> None:
        assert is_quota_or_rate_limit_error(SDKError("Connection reset", status=500)) is False


class TestMessageDetection:
    """Test suite for message based classification."""

    @pytest.mark.parametrize(
        "message",
        [
            "You exceeded your current quota, please check your plan",
            "InsufficientQuotaError: billing hard limit reached",
            "Rate limit reached for requests",
            "error code: rate_limit_exceeded",
            "QUOTA EXHAUSTED",
        ],
    )
    def test_quota_markers_should_be_quota(self, message: str) -> None:
        assert is_quota_or_rate_limit_error(RuntimeError(message)) is True

    def test_unrelated_message_should_not_be_quota(self) -> None:
        assert is_quota_or_rate_limit_error(RuntimeError("index file is corrupted")) is False


class TestCauseChain:
    """Test suite for wrapped provider errors."""

    def test_wrapped_429_should_be_quota(self, rate_limit_error) -> None:
        try:
            try:
                raise rate_limit_error
            except Exception as inner:
                raise RuntimeError("Error embedding content") from inner
        except RuntimeError as outer:
            wrapped = outer

        assert is_quota_or_rate_limit_error(wrapped) is True
        assert find_status_code(wrapped) == 429

    def test_cyclic_chain_should_terminate(self) -> None:
        first = RuntimeError("first")
        second = RuntimeError("second")
        first.__context__ = second
        second.__context__ = first

        assert is_quota_or_rate_limit_error(first) is False
        assert find_status_code(first) is None
