"""
Structured logger used by the request logging plugin.
"""

import logging
from typing import Any, List, Optional

from .config import LoggingConfig, LogLevel
from .filters import ExtraFieldsFilter
from .formatters import get_formatter
from .handlers import create_console_handler, create_file_handler
from ...utils.sanitizer import mask_sensitive_data


class InstagramLogger:
    """
    Thin wrapper over :mod:`logging` with its own handlers.

    Keyword arguments of the log methods become record fields and are
    masked with :func:`mask_sensitive_data` first, so tokens and secrets
    never reach the output.

    Example:
        >>> config = LoggingConfig.create(level="INFO", format="json")
        >>> logger = InstagramLogger(config)
        >>> logger.info("Request sent", method="GET", url="https://api.instagram.com/v1/users/self")
        >>> logger.close()
    """

    def __init__(self, config: Optional[LoggingConfig] = None, name: str = "instagram_client.requests"):
        self.config = config or LoggingConfig()
        self.name = name
        self._closed = False

        self._logger = logging.getLogger(name)
        self._logger.setLevel(self._get_level(self.config.level))
        self._logger.propagate = False

        # Reinitialising with the same name replaces the previous handlers
        for handler in self._logger.handlers[:]:
            handler.close()
            self._logger.removeHandler(handler)

        filters: List[logging.Filter] = []
        if self.config.extra_fields:
            filters.append(ExtraFieldsFilter(self.config.extra_fields))

        formatter = get_formatter(self.config.format.value)
        level = self._get_level(self.config.level)

        if self.config.enable_console:
            self._logger.addHandler(create_console_handler(level, formatter, filters))

        if self.config.enable_file and self.config.file_path:
            self._logger.addHandler(create_file_handler(
                file_path=self.config.file_path,
                level=level,
                formatter=formatter,
                max_bytes=self.config.max_bytes,
                backup_count=self.config.backup_count,
                filters=filters,
            ))

    @staticmethod
    def _get_level(level: LogLevel) -> int:
        return getattr(logging, level.value)

    @property
    def logger(self) -> logging.Logger:
        """Underlying stdlib logger."""
        return self._logger

    def debug(self, message: str, **kwargs: Any) -> None:
        self._logger.debug(message, extra=mask_sensitive_data(kwargs))

    def info(self, message: str, **kwargs: Any) -> None:
        self._logger.info(message, extra=mask_sensitive_data(kwargs))

    def warning(self, message: str, **kwargs: Any) -> None:
        self._logger.warning(message, extra=mask_sensitive_data(kwargs))

    def error(self, message: str, **kwargs: Any) -> None:
        self._logger.error(message, extra=mask_sensitive_data(kwargs))

    def close(self) -> None:
        """
        Flush and close all handlers. Idempotent.
        """
        if self._closed:
            return

        for handler in self._logger.handlers[:]:
            handler.flush()
            handler.close()
            self._logger.removeHandler(handler)

        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
