# src/instagram_client/core/transport.py
"""
Транспортный слой: модели запроса/ответа и блокирующий транспорт на requests.

Сам HTTP (сокеты, TLS, пул соединений) делегирован requests.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import parse_qsl, urlsplit

import requests
from requests.adapters import HTTPAdapter

from .config import TimeoutConfig


def _freeze(headers: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Convert dict to immutable MappingProxyType."""
    return MappingProxyType(dict(headers or {}))


def parse_query(url: Optional[str]) -> Dict[str, str]:
    """
    Разобрать query string URL в плоский словарь (последнее значение выигрывает).

    Example:
        >>> parse_query("https://api.instagram.com/v1/users/search?q=bob&count=5")
        {'q': 'bob', 'count': '5'}
    """
    if not url:
        return {}
    query = urlsplit(url).query
    return dict(parse_qsl(query, keep_blank_values=True)) if query else {}


def reason_phrase(status_code: int) -> str:
    """Стандартная reason phrase для статуса ('' для неизвестных)."""
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


@dataclass(frozen=True)
class Request:
    """
    Исходящий запрос. Неизменяем: плагины и хуки возвращают новые копии.

    Attributes:
        method: HTTP метод
        url: Полный URL, включая query string
        headers: Заголовки (read-only mapping)
        body: Тело запроса или None
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    body: Optional[bytes] = None

    def __post_init__(self):
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", _freeze(self.headers))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))

    @property
    def params(self) -> Dict[str, str]:
        """Параметры из query string."""
        return parse_query(self.url)

    def header(self, name: str) -> Optional[str]:
        """Значение заголовка без учёта регистра имени."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def with_header(self, name: str, value: str) -> "Request":
        """Копия с заголовком name=value (существующий заменяется без учёта регистра)."""
        lowered = name.lower()
        headers = {k: v for k, v in self.headers.items() if k.lower() != lowered}
        headers[name] = value
        return replace(self, headers=headers)

    def replace(self, **changes: Any) -> "Request":
        return replace(self, **changes)


@dataclass(frozen=True)
class RawResponse:
    """
    Сырой HTTP ответ транспорта.

    Attributes:
        status_code: HTTP статус
        headers: Имя -> список значений (регистр имён сохраняется)
        body: Тело ответа
        reason: Reason phrase ('' = взять стандартную для статуса)
        url: URL запроса
    """

    status_code: int
    headers: Mapping[str, Sequence[str]] = field(default_factory=lambda: MappingProxyType({}))
    body: bytes = b""
    reason: str = ""
    url: Optional[str] = None

    def __post_init__(self):
        normalized: Dict[str, List[str]] = {}
        for name, value in dict(self.headers or {}).items():
            if isinstance(value, (list, tuple)):
                normalized[name] = [str(v) for v in value]
            else:
                normalized[name] = [str(value)]
        object.__setattr__(self, "headers", MappingProxyType(normalized))
        if isinstance(self.body, str):
            object.__setattr__(self, "body", self.body.encode("utf-8"))
        if not self.reason:
            object.__setattr__(self, "reason", reason_phrase(self.status_code))

    def header(self, name: str) -> Optional[str]:
        """Значение заголовка без учёта регистра, несколько значений через запятую."""
        lowered = name.lower()
        values: List[str] = []
        for key, items in self.headers.items():
            if key.lower() == lowered:
                values.extend(items)
        return ",".join(values) if values else None

    def replace(self, **changes: Any) -> "RawResponse":
        if "status_code" in changes and "reason" not in changes:
            changes["reason"] = ""
        return replace(self, **changes)


class Transport(ABC):
    """Блокирующий транспорт: send(request) -> RawResponse."""

    @abstractmethod
    def send(self, request: Request) -> RawResponse:
        """Отправить запрос. Ошибки сети пробрасываются как есть."""

    def close(self) -> None:
        """Освободить ресурсы."""


def _collect_headers(response: requests.Response) -> Dict[str, List[str]]:
    """
    Достать заголовки с повторами.

    requests склеивает повторяющиеся заголовки через ", ", поэтому
    берём исходный HTTPHeaderDict из urllib3, если он доступен.
    """
    raw_headers = getattr(response.raw, "headers", None)
    if raw_headers is not None and hasattr(raw_headers, "getlist"):
        return {name: list(raw_headers.getlist(name)) for name in raw_headers.keys()}
    return {name: [value] for name, value in response.headers.items()}


class RequestsTransport(Transport):
    """
    Транспорт на requests.Session с connection pooling.

    Example:
        >>> transport = RequestsTransport(timeout=TimeoutConfig(connect=3, read=10))
        >>> raw = transport.send(Request("GET", "https://api.instagram.com/v1/users/self?access_token=..."))
        >>> transport.close()
    """

    def __init__(
        self,
        timeout: Optional[TimeoutConfig] = None,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self._timeout = timeout or TimeoutConfig()
        self._verify_ssl = verify_ssl
        self._owns_session = session is None
        self._session = session if session is not None else self._create_session()

    @staticmethod
    def _create_session() -> requests.Session:
        """Create configured session."""
        session = requests.Session()
        adapter = HTTPAdapter(max_retries=0)  # Ретраев нет, это решает вызывающий
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    @property
    def session(self) -> requests.Session:
        return self._session

    def send(self, request: Request) -> RawResponse:
        response = self._session.request(
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            data=request.body,
            timeout=self._timeout.as_tuple(),
            verify=self._verify_ssl,
            allow_redirects=True,
        )
        return RawResponse(
            status_code=response.status_code,
            headers=_collect_headers(response),
            body=response.content,
            reason=response.reason or "",
            url=request.url,
        )

    def close(self) -> None:
        if self._owns_session:
            self._session.close()
