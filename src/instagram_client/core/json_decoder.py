# src/instagram_client/core/json_decoder.py
"""
Декодирование JSON тела ответа с различимыми категориями ошибок.

json.loads сообщает только JSONDecodeError, поэтому категория
восстанавливается по типу исключения и сообщению декодера.
"""

import json
from enum import Enum
from typing import Any, Union

from .exceptions import InvalidResponseFormatException

MAX_DEPTH = 512


class JSONErrorKind(str, Enum):
    """Категории ошибок декодирования JSON."""
    DEPTH = "maximum stack depth exceeded"
    STATE_MISMATCH = "underflow or mode mismatch"
    CTRL_CHAR = "unexpected control character"
    SYNTAX = "malformed JSON syntax"
    UTF8 = "malformed UTF-8"
    UNKNOWN = "unknown error"


def _nesting_depth(value: Any) -> int:
    """Глубина вложенности массивов/объектов (без рекурсии)."""
    depth = 0
    stack = [(value, 1)]
    while stack:
        node, level = stack.pop()
        if isinstance(node, dict):
            children = node.values()
        elif isinstance(node, list):
            children = node
        else:
            continue
        depth = max(depth, level)
        stack.extend((child, level + 1) for child in children)
    return depth


def _classify_decode_error(error: json.JSONDecodeError) -> JSONErrorKind:
    if "control character" in error.msg:
        return JSONErrorKind.CTRL_CHAR

    # Закрывающая скобка не того типа: [1} или {"a": 1]
    if error.msg.startswith("Expecting ',' delimiter") and error.pos < len(error.doc):
        if error.doc[error.pos] in "]}":
            return JSONErrorKind.STATE_MISMATCH

    return JSONErrorKind.SYNTAX


def classify_json_error(error: BaseException) -> JSONErrorKind:
    """
    Определить категорию ошибки декодирования.

    Args:
        error: Исключение, поднятое при декодировании

    Returns:
        JSONErrorKind
    """
    if isinstance(error, RecursionError):
        return JSONErrorKind.DEPTH
    if isinstance(error, UnicodeDecodeError):
        return JSONErrorKind.UTF8
    if isinstance(error, json.JSONDecodeError):
        return _classify_decode_error(error)
    return JSONErrorKind.UNKNOWN


def decode_json(body: Union[bytes, str], max_depth: int = MAX_DEPTH) -> Any:
    """
    Декодировать тело ответа.

    Args:
        body: Сырые байты (или строка) тела
        max_depth: Максимальная глубина вложенности

    Returns:
        Декодированное значение (dict, list, str, int, float, bool или None)

    Raises:
        InvalidResponseFormatException: Тело не является валидным JSON,
            reason - JSONErrorKind

    Examples:
        >>> decode_json(b'{"data": [1, 2, 3]}')
        {'data': [1, 2, 3]}
        >>> decode_json(b'<html></html>')
        Traceback (most recent call last):
        ...
        InvalidResponseFormatException: Invalid JSON response - malformed JSON syntax
    """
    try:
        text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
        value = json.loads(text)
    except (ValueError, RecursionError, TypeError) as e:
        kind = classify_json_error(e)
        raise InvalidResponseFormatException(
            f"Invalid JSON response - {kind.value}", reason=kind
        ) from e

    if _nesting_depth(value) > max_depth:
        kind = JSONErrorKind.DEPTH
        raise InvalidResponseFormatException(
            f"Invalid JSON response - {kind.value}", reason=kind
        )

    return value
