"""
Logging system for Instagram Client.

Example:
    >>> from instagram_client.core.logging import InstagramLogger, LoggingConfig
    >>> logger = InstagramLogger(LoggingConfig.create(level="DEBUG", format="json"))
    >>> logger.info("Request sent", method="GET", url="https://api.instagram.com/v1/users/self")
"""

from .config import LoggingConfig, LogLevel, LogFormat
from .logger import InstagramLogger
from .formatters import JSONFormatter, TextFormatter, get_formatter
from .filters import ExtraFieldsFilter
from .handlers import create_console_handler, create_file_handler

__all__ = [
    # Config
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Logger
    "InstagramLogger",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    "get_formatter",
    # Filters
    "ExtraFieldsFilter",
    # Handlers
    "create_console_handler",
    "create_file_handler",
]
