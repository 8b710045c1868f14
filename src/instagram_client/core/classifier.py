# src/instagram_client/core/classifier.py
"""
Классификация ответа: успех или одно из типизированных исключений.

Порядок проверок (первое совпадение выигрывает):
1. meta.error_type из таблицы API_ERROR_TYPES
2. HTTP статус: 500/502/503/400 -> HttpException, 429 -> OAuthRateLimitException
"""

from typing import Mapping, Optional

from .exceptions import (
    API_ERROR_TYPES,
    HttpException,
    InstagramException,
    OAuthRateLimitException,
)
from .response import ApiResponse
from .transport import reason_phrase

HTTP_ERROR_STATUSES = frozenset({400, 500, 502, 503})
RATE_LIMIT_STATUS = 429


def _meta(response: ApiResponse) -> Mapping:
    return response.meta if isinstance(response.meta, Mapping) else {}


def classify(
    response: ApiResponse,
    status_code: int,
    reason: str = "",
) -> Optional[InstagramException]:
    """
    Определить, чем закончился вызов.

    Args:
        response: Распарсенный конверт
        status_code: HTTP статус исходного ответа
        reason: Reason phrase исходного ответа

    Returns:
        None если вызов успешен, иначе исключение (не поднятое)

    Examples:
        >>> res = ApiResponse(meta={"error_type": "APINotFoundError", "code": 400, "error_message": "nope"})
        >>> classify(res, 400)
        APINotFoundError(message='nope', code=400)
    """
    meta = _meta(response)

    error_type = meta.get("error_type")
    if error_type is not None:
        exc_class = API_ERROR_TYPES.get(error_type) if isinstance(error_type, str) else None
        if exc_class is not None:
            return exc_class(meta.get("error_message") or "", meta.get("code"), response)

    if status_code in HTTP_ERROR_STATUSES:
        return HttpException(reason or reason_phrase(status_code), status_code, response)

    if status_code == RATE_LIMIT_STATUS:
        return OAuthRateLimitException(meta.get("error_message") or "", RATE_LIMIT_STATUS, response)

    return None


def raise_for_response(
    response: ApiResponse,
    status_code: int,
    reason: str = "",
) -> ApiResponse:
    """
    Поднять исключение, если classify его вернул, иначе вернуть конверт.

    Raises:
        InstagramException: Одна из ошибок API или HTTP
    """
    error = classify(response, status_code, reason)
    if error is not None:
        raise error
    return response
