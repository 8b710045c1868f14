"""Core Instagram Client модули."""

from .config import ClientConfig, TimeoutConfig
from .exceptions import (
    ErrorKind,
    InstagramClientException,
    ConfigurationError,
    InvalidResponseFormatException,
    InstagramException,
    OAuthParameterException,
    OAuthRateLimitException,
    OAuthAccessTokenException,
    APINotFoundError,
    APINotAllowedError,
    APIInvalidParametersError,
    APIAgeGatedError,
    HttpException,
    API_ERROR_TYPES,
    wrap_transport_exception,
)
from .transport import Request, RawResponse, Transport, RequestsTransport
from .async_transport import AsyncTransport, HttpxTransport
from .json_decoder import JSONErrorKind, decode_json
from .response import ApiResponse
from .classifier import classify, raise_for_response

__all__ = [
    # Config
    "ClientConfig",
    "TimeoutConfig",
    # Transport
    "Request",
    "RawResponse",
    "Transport",
    "RequestsTransport",
    "AsyncTransport",
    "HttpxTransport",
    # Parsing
    "JSONErrorKind",
    "decode_json",
    "ApiResponse",
    "classify",
    "raise_for_response",
    # Exceptions
    "ErrorKind",
    "InstagramClientException",
    "ConfigurationError",
    "InvalidResponseFormatException",
    "InstagramException",
    "OAuthParameterException",
    "OAuthRateLimitException",
    "OAuthAccessTokenException",
    "APINotFoundError",
    "APINotAllowedError",
    "APIInvalidParametersError",
    "APIAgeGatedError",
    "HttpException",
    "API_ERROR_TYPES",
    "wrap_transport_exception",
]
