# src/instagram_client/utils/sanitizer.py
"""
Маскирование чувствительных данных в логах.

Защищает access_token, client_secret, client_id, OAuth code и подпись
X-Insta-Forwarded-For от попадания в логи.
"""

import re
from typing import Any, Dict, Mapping, Set

DEFAULT_MASK = "***REDACTED***"

# Чувствительные ключи (case-insensitive, точное совпадение)
SENSITIVE_KEYS: Set[str] = {
    'access_token', 'client_secret', 'client_id', 'code',
    'authorization', 'cookie', 'password',
    'x-insta-forwarded-for',
}

# Чувствительные параметры в URL и form-encoded телах
_SENSITIVE_PARAM = re.compile(
    r'((?:^|[?&])(?:access_token|client_secret|client_id|code)=)([^&\s#]+)',
    re.IGNORECASE,
)


def mask_sensitive_data(data: Any, mask: str = DEFAULT_MASK) -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Args:
        data: Данные для маскирования
        mask: Строка-заменитель

    Returns:
        Копия данных с замаскированными чувствительными полями

    Examples:
        >>> mask_sensitive_data({"access_token": "abc", "count": 5})
        {'access_token': '***REDACTED***', 'count': 5}

        >>> mask_sensitive_data("https://api.instagram.com/v1/users/self?access_token=abc&count=5")
        'https://api.instagram.com/v1/users/self?access_token=***REDACTED***&count=5'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        return mask_params(data, mask)

    if isinstance(data, Mapping):
        return _mask_dict(data, mask)

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def _mask_dict(data: Mapping[Any, Any], mask: str) -> Dict[Any, Any]:
    result = {}
    for key, value in data.items():
        if str(key).lower() in SENSITIVE_KEYS:
            result[key] = mask
        else:
            result[key] = mask_sensitive_data(value, mask)
    return result


def mask_params(text: str, mask: str = DEFAULT_MASK) -> str:
    """
    Маскирует значения чувствительных параметров в URL или form-теле.

    Examples:
        >>> mask_params("client_id=abc&code=xyz&grant_type=authorization_code")
        'client_id=***REDACTED***&code=***REDACTED***&grant_type=authorization_code'
    """
    return _SENSITIVE_PARAM.sub(lambda m: m.group(1) + mask, text)


def add_sensitive_keys(*keys: str) -> None:
    """Добавить ключи в SENSITIVE_KEYS."""
    for key in keys:
        SENSITIVE_KEYS.add(key.lower())
