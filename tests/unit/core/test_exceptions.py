"""
Tests for the exception taxonomy.
"""

import errno

import httpx
import pytest
import requests

from instagram_client.core.exceptions import (
    API_ERROR_TYPES,
    APIAgeGatedError,
    APIInvalidParametersError,
    APINotAllowedError,
    APINotFoundError,
    ConfigurationError,
    ErrorKind,
    HttpException,
    InstagramClientException,
    InstagramException,
    InvalidResponseFormatException,
    OAuthAccessTokenException,
    OAuthParameterException,
    OAuthRateLimitException,
    wrap_transport_exception,
)


class TestInstagramClientException:
    """Test base InstagramClientException."""

    def test_message_and_code(self):
        exc = InstagramClientException("Something broke", 42)
        assert str(exc) == "Something broke"
        assert exc.message == "Something broke"
        assert exc.code == 42
        assert exc.response is None

    def test_defaults(self):
        exc = InstagramClientException()
        assert exc.message == ""
        assert exc.code is None
        assert exc.kind is ErrorKind.GENERIC
        assert exc.retryable is False

    def test_repr(self):
        exc = APINotFoundError("nope", 400)
        assert repr(exc) == "APINotFoundError(message='nope', code=400)"

    def test_configuration_error_is_client_exception(self):
        assert issubclass(ConfigurationError, InstagramClientException)


class TestTaxonomy:
    """Every kind has its own class."""

    @pytest.mark.parametrize("exc_class, kind", [
        (OAuthParameterException, ErrorKind.OAUTH_PARAMETER),
        (OAuthRateLimitException, ErrorKind.OAUTH_RATE_LIMIT),
        (OAuthAccessTokenException, ErrorKind.OAUTH_ACCESS_TOKEN),
        (APINotFoundError, ErrorKind.API_NOT_FOUND),
        (APINotAllowedError, ErrorKind.API_NOT_ALLOWED),
        (APIInvalidParametersError, ErrorKind.API_INVALID_PARAMETERS),
        (APIAgeGatedError, ErrorKind.API_AGE_GATED),
        (HttpException, ErrorKind.HTTP),
    ])
    def test_api_errors_are_instagram_exceptions(self, exc_class, kind):
        exc = exc_class("message", 400)
        assert isinstance(exc, InstagramException)
        assert isinstance(exc, InstagramClientException)
        assert exc.kind is kind

    def test_invalid_format_is_not_instagram_exception(self):
        exc = InvalidResponseFormatException("Invalid JSON response - malformed JSON syntax", reason="x")
        assert not isinstance(exc, InstagramException)
        assert isinstance(exc, InstagramClientException)
        assert exc.kind is ErrorKind.INVALID_RESPONSE_FORMAT
        assert exc.reason == "x"

    def test_error_type_table_covers_api_kinds(self):
        assert set(API_ERROR_TYPES) == {
            "OAuthParameterException",
            "OAuthRateLimitException",
            "OAuthAccessTokenException",
            "APINotFoundError",
            "APINotAllowedError",
            "APIInvalidParametersError",
            "APIAgeGatedError",
        }
        assert API_ERROR_TYPES["APIAgeGatedError"] is APIAgeGatedError


class TestRetryable:
    """Retryable flag."""

    def test_rate_limit_is_retryable(self):
        assert OAuthRateLimitException("slow down", 429).retryable is True

    @pytest.mark.parametrize("status, expected", [
        (400, False),
        (500, True),
        (502, True),
        (503, True),
    ])
    def test_http_exception_retryable_by_status(self, status, expected):
        assert HttpException("x", status).retryable is expected

    def test_access_token_is_not_retryable(self):
        assert OAuthAccessTokenException("expired", 400).retryable is False


class TestWrapTransportException:
    """wrap_transport_exception()."""

    def test_taxonomy_exception_passes_through(self):
        original = APINotFoundError("nope", 400)
        assert wrap_transport_exception(original) is original

    def test_foreign_exception_is_wrapped(self):
        original = RuntimeError("boom")
        wrapped = wrap_transport_exception(original)

        assert type(wrapped) is InstagramClientException
        assert wrapped.message == "boom"
        assert wrapped.__cause__ is original
        assert wrapped.retryable is False

    def test_empty_message_uses_type_name(self):
        wrapped = wrap_transport_exception(ValueError())
        assert wrapped.message == "ValueError"

    def test_errno_becomes_code(self):
        wrapped = wrap_transport_exception(OSError(errno.ECONNREFUSED, "Connection refused"))
        assert wrapped.code == errno.ECONNREFUSED

    def test_requests_timeout_is_retryable(self):
        wrapped = wrap_transport_exception(requests.exceptions.ConnectTimeout("timed out"))
        assert wrapped.retryable is True
        assert "timed out" in wrapped.message

    def test_requests_connection_error_is_retryable(self):
        wrapped = wrap_transport_exception(requests.exceptions.ConnectionError("refused"))
        assert wrapped.retryable is True

    def test_httpx_errors_are_retryable(self):
        assert wrap_transport_exception(httpx.ConnectError("refused")).retryable is True
        assert wrap_transport_exception(httpx.ReadTimeout("slow")).retryable is True

    def test_wrapping_does_not_share_retryable_flag(self):
        wrap_transport_exception(requests.exceptions.ConnectTimeout("timed out"))
        assert InstagramClientException.retryable is False
