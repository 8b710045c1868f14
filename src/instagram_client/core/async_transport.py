# src/instagram_client/core/async_transport.py
"""
Асинхронный транспорт на базе httpx.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import httpx

from .config import TimeoutConfig
from .transport import RawResponse, Request


class AsyncTransport(ABC):
    """Асинхронный транспорт: await send(request) -> RawResponse."""

    @abstractmethod
    async def send(self, request: Request) -> RawResponse:
        """Отправить запрос. Ошибки сети пробрасываются как есть."""

    async def close(self) -> None:
        """Освободить ресурсы."""


def _collect_headers(response: httpx.Response) -> Dict[str, List[str]]:
    headers: Dict[str, List[str]] = {}
    for name, value in response.headers.multi_items():
        headers.setdefault(name, []).append(value)
    return headers


class HttpxTransport(AsyncTransport):
    """
    Транспорт на httpx.AsyncClient. Клиент создаётся лениво.

    Example:
        >>> transport = HttpxTransport(timeout=TimeoutConfig(connect=3, read=10))
        >>> raw = await transport.send(Request("GET", "https://api.instagram.com/v1/users/self?access_token=..."))
        >>> await transport.close()
    """

    def __init__(
        self,
        timeout: Optional[TimeoutConfig] = None,
        verify_ssl: bool = True,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._timeout = timeout or TimeoutConfig()
        self._verify_ssl = verify_ssl
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Получить или создать httpx клиент."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=self._timeout.connect,
                    read=self._timeout.read,
                    write=self._timeout.read,
                    pool=self._timeout.connect,
                ),
                verify=self._verify_ssl,
                follow_redirects=True,
            )
        return self._client

    async def send(self, request: Request) -> RawResponse:
        client = self._get_client()
        response = await client.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )
        return RawResponse(
            status_code=response.status_code,
            headers=_collect_headers(response),
            body=response.content,
            reason=response.reason_phrase or "",
            url=request.url,
        )

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
