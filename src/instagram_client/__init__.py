"""Instagram Client - Instagram API client with typed responses and plugins."""

import logging
from importlib.metadata import version, PackageNotFoundError

from .instagram import Instagram
from .async_instagram import AsyncInstagram
from .core.config import ClientConfig, TimeoutConfig
from .core.response import ApiResponse
from .core.transport import Request, RawResponse, Transport, RequestsTransport
from .core.async_transport import AsyncTransport, HttpxTransport
from .core.exceptions import (
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
)
from .plugins.plugin import Plugin

# NullHandler: логирование настраивает приложение через logging.getLogger('instagram_client')
logging.getLogger('instagram_client').addHandler(logging.NullHandler())

try:
    __version__ = version("instagram-client-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

__license__ = "MIT"

__all__ = [
    # Facades
    "Instagram",
    "AsyncInstagram",

    # Config
    "ClientConfig",
    "TimeoutConfig",

    # Transport & envelope
    "Request",
    "RawResponse",
    "Transport",
    "RequestsTransport",
    "AsyncTransport",
    "HttpxTransport",
    "ApiResponse",

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

    # Plugins
    "Plugin",

    # Version
    "__version__",
]
