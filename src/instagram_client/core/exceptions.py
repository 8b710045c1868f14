"""
Иерархия исключений Instagram Client.

Классификация:
- InstagramClientException - базовое (GenericException), сюда же
  оборачиваются ошибки транспорта
- InstagramException - ошибки уровня API (по полю meta.error_type и HTTP статусу)
- InvalidResponseFormatException - ответ не является валидным JSON
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Type

import httpx
import requests

if TYPE_CHECKING:
    from .response import ApiResponse


class ErrorKind(str, Enum):
    """Закрытый перечень видов ошибок."""
    OAUTH_PARAMETER = "OAuthParameterException"
    OAUTH_RATE_LIMIT = "OAuthRateLimitException"
    OAUTH_ACCESS_TOKEN = "OAuthAccessTokenException"
    API_NOT_FOUND = "APINotFoundError"
    API_NOT_ALLOWED = "APINotAllowedError"
    API_INVALID_PARAMETERS = "APIInvalidParametersError"
    API_AGE_GATED = "APIAgeGatedError"
    HTTP = "HttpException"
    INVALID_RESPONSE_FORMAT = "InvalidResponseFormatException"
    GENERIC = "GenericException"

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InstagramClientException(Exception):
    """
    Базовое исключение Instagram Client.

    Args:
        message: Сообщение об ошибке
        code: Числовой код (meta.code, HTTP статус или код транспорта)
        response: Распарсенный ответ API, если он есть
    """

    kind: ErrorKind = ErrorKind.GENERIC
    retryable: bool = False

    def __init__(
        self,
        message: str = "",
        code: Optional[int] = None,
        response: Optional["ApiResponse"] = None,
    ):
        self.message = message
        self.code = code
        self.response = response
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, code={self.code!r})"


class ConfigurationError(InstagramClientException):
    """Ошибка конфигурации."""


class InvalidResponseFormatException(InstagramClientException):
    """
    Тело ответа не удалось разобрать как JSON.

    Args:
        message: Описание причины
        reason: JSONErrorKind с категорией ошибки декодирования
    """

    kind = ErrorKind.INVALID_RESPONSE_FORMAT

    def __init__(self, message: str, reason: Any = None):
        self.reason = reason
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# API ОШИБКИ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InstagramException(InstagramClientException):
    """Ошибка, о которой сообщил сам API."""


class OAuthParameterException(InstagramException):
    """Не передан или невалиден OAuth параметр (client_id / access_token)."""
    kind = ErrorKind.OAUTH_PARAMETER


class OAuthRateLimitException(InstagramException):
    """Превышен лимит запросов (meta.error_type или HTTP 429)."""
    kind = ErrorKind.OAUTH_RATE_LIMIT
    retryable = True


class OAuthAccessTokenException(InstagramException):
    """access_token истёк или отозван."""
    kind = ErrorKind.OAUTH_ACCESS_TOKEN


class APINotFoundError(InstagramException):
    kind = ErrorKind.API_NOT_FOUND


class APINotAllowedError(InstagramException):
    kind = ErrorKind.API_NOT_ALLOWED


class APIInvalidParametersError(InstagramException):
    kind = ErrorKind.API_INVALID_PARAMETERS


class APIAgeGatedError(InstagramException):
    kind = ErrorKind.API_AGE_GATED


class HttpException(InstagramException):
    """
    Известный HTTP статус ошибки (400, 500, 502, 503).

    Сообщение - reason phrase ответа, code - HTTP статус.
    """

    kind = ErrorKind.HTTP

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        return self.code is not None and self.code >= 500


# meta.error_type -> класс исключения
API_ERROR_TYPES: Dict[str, Type[InstagramException]] = {
    cls.kind.value: cls
    for cls in (
        OAuthParameterException,
        OAuthRateLimitException,
        OAuthAccessTokenException,
        APINotFoundError,
        APINotAllowedError,
        APIInvalidParametersError,
        APIAgeGatedError,
    )
}

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _transport_error_code(exc: Exception) -> Optional[int]:
    for attr in ("code", "errno", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _is_retryable_transport_error(exc: Exception) -> bool:
    if isinstance(exc, (requests.exceptions.Timeout, requests.exceptions.ConnectionError)):
        return True
    return isinstance(exc, (httpx.TimeoutException, httpx.NetworkError))


def wrap_transport_exception(exc: Exception) -> InstagramClientException:
    """
    Обернуть исключение транспорта (или пользовательского хука) в наше.

    Исключения из нашей иерархии возвращаются как есть.

    Args:
        exc: Исключение из requests/httpx или любое другое

    Returns:
        InstagramClientException с исходным сообщением, кодом и __cause__

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout("timed out")
        >>> ours = wrap_transport_exception(exc)
        >>> assert ours.retryable
        >>> assert ours.__cause__ is exc
    """
    if isinstance(exc, InstagramClientException):
        return exc

    wrapped = InstagramClientException(
        str(exc) or type(exc).__name__,
        code=_transport_error_code(exc),
    )
    wrapped.retryable = _is_retryable_transport_error(exc)
    wrapped.__cause__ = exc
    return wrapped
