# src/instagram_client/core/response.py
"""Конверт ответа Instagram API."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .json_decoder import decode_json
from .transport import RawResponse, parse_query

RATE_LIMIT_HEADER = "x-ratelimit-limit"
RATE_LIMIT_REMAINING_HEADER = "x-ratelimit-remaining"


def _collapse_headers(raw: RawResponse) -> Dict[str, str]:
    return {name: ",".join(values) for name, values in raw.headers.items()}


def _lookup(headers: Mapping[str, str], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _int_header(headers: Mapping[str, str], name: str) -> int:
    value = _lookup(headers, name)
    if value is None:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


def _field(payload: Mapping[str, Any], key: str, default: Any) -> Any:
    value = payload.get(key)
    return default if value is None else value


@dataclass(frozen=True)
class ApiResponse:
    """
    Распарсенный ответ API.

    data/meta/pagination/user никогда не бывают None - при отсутствии
    в ответе это пустые контейнеры.

    Неизменяемость поверхностная: params и headers - read-only mappings,
    а data/meta/pagination/user - обычные dict/list из JSON, их содержимое
    менять можно (но не нужно).

    Attributes:
        url: URL запроса
        params: Параметры запроса из query string
        method: HTTP метод запроса
        data: Поле data
        meta: Поле meta (или всё тело, если на верхнем уровне code != 200)
        pagination: Поле pagination
        user: Поле user (ответ OAuth)
        access_token: Поле access_token (ответ OAuth)
        headers: Заголовки ответа, повторы склеены через запятую
        json: Сырой текст JSON
        status_code: HTTP статус
        limit: x-ratelimit-limit (0 если нет)
        remaining: x-ratelimit-remaining (0 если нет)
    """

    url: str = ""
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    method: str = ""
    data: Any = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)
    pagination: Dict[str, Any] = field(default_factory=dict)
    user: Dict[str, Any] = field(default_factory=dict)
    access_token: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    json: str = ""
    status_code: int = 0
    limit: int = 0
    remaining: int = 0

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params or {})))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers or {})))

    @classmethod
    def from_raw(
        cls,
        raw: RawResponse,
        url: Optional[str] = None,
        method: str = "",
    ) -> "ApiResponse":
        """
        Построить конверт из сырого ответа.

        Args:
            raw: Ответ транспорта
            url: URL исходного запроса
            method: HTTP метод исходного запроса

        Raises:
            InvalidResponseFormatException: Тело не является валидным JSON

        Example:
            >>> raw = RawResponse(200, {"X-Ratelimit-Limit": "5000"}, b'{"data": [1, 2, 3]}')
            >>> res = ApiResponse.from_raw(raw)
            >>> res.data, res.meta, res.limit
            ([1, 2, 3], {}, 5000)
        """
        headers = _collapse_headers(raw)
        body_text = raw.body.decode("utf-8", errors="replace")

        # Декодируем до извлечения каких-либо полей
        payload = decode_json(raw.body)
        if not isinstance(payload, dict):
            payload = {}

        meta = _field(payload, "meta", {})
        code = payload.get("code")
        if code is not None and code != 200:
            # Альтернативная форма ошибки: поля ошибки на верхнем уровне
            meta = payload

        return cls(
            url=url or "",
            params=parse_query(url),
            method=method.upper(),
            data=_field(payload, "data", []),
            meta=meta,
            pagination=_field(payload, "pagination", {}),
            user=_field(payload, "user", {}),
            access_token=payload.get("access_token"),
            headers=headers,
            json=body_text,
            status_code=raw.status_code,
            limit=_int_header(headers, RATE_LIMIT_HEADER),
            remaining=_int_header(headers, RATE_LIMIT_REMAINING_HEADER),
        )

    def header(self, name: str) -> Optional[str]:
        """Заголовок ответа без учёта регистра."""
        return _lookup(self.headers, name)

    @property
    def next_url(self) -> Optional[str]:
        """pagination.next_url, если API вернул следующую страницу."""
        if isinstance(self.pagination, dict):
            return self.pagination.get("next_url")
        return None
