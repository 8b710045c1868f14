# src/instagram_client/async_instagram.py
"""
Асинхронный клиент Instagram API на базе httpx.

Предоставляет async/await API для asyncio приложений. Плагины и хуки
те же, что и у блокирующего клиента.
"""

from typing import Any, Mapping, Optional, Sequence

from .core.async_transport import AsyncTransport, HttpxTransport
from .core.config import ClientConfig
from .core.response import ApiResponse
from .core.transport import RawResponse, Request
from .instagram import BaseInstagram
from .plugins.plugin import Plugin


class AsyncInstagram(BaseInstagram):
    """
    Асинхронный клиент Instagram API.

    Example:
        >>> async with AsyncInstagram(config) as api:
        ...     res = await api.get("/users/self/media/recent", {"count": 5})
        ...     print(res.data)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[AsyncTransport] = None,
        plugins: Optional[Sequence[Plugin]] = None,
    ):
        super().__init__(config, plugins)
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    @property
    def transport(self) -> AsyncTransport:
        return self._transport

    async def __aenter__(self) -> "AsyncInstagram":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Закрыть транспорт (если он создан клиентом) и логгер."""
        if self._owns_transport:
            await self._transport.close()
        if self._logging_plugin is not None:
            self._logging_plugin.close()

    async def send(self, request: Request) -> RawResponse:
        try:
            return await self._chain.send_async(request, self._transport)
        except Exception as e:
            raise self._wrap_error(e)

    async def _call(self, request: Request) -> ApiResponse:
        raw = await self.send(request)
        return self.parse_response(raw, request.url, request.method)

    async def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        return await self._call(self._build_request("GET", path, params, headers))

    async def post(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        add_version: bool = True,
    ) -> ApiResponse:
        """POST запрос (см. Instagram.post: версия добавляется по умолчанию)."""
        return await self._call(self._build_request("POST", path, params, headers, add_version))

    async def delete(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        return await self._call(self._build_request("DELETE", path, params, headers))

    async def authorize(self, code: str) -> ApiResponse:
        """Обменять OAuth code на access_token (см. Instagram.authorize)."""
        request = self._authorize_request(code)
        raw = await self.send(request)
        return self._complete_authorization(raw, request)
