# src/instagram_client/plugins/chain.py
"""
Цепочка плагинов вокруг одного вызова транспорта.

Одна и та же логика плагинов работает и с блокирующим транспортом (send),
и с асинхронным (send_async): отличается только терминальный вызов.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from .plugin import Plugin

if TYPE_CHECKING:
    from ..core.async_transport import AsyncTransport
    from ..core.transport import RawResponse, Request, Transport

logger = logging.getLogger(__name__)

_Stage = Tuple[Plugin, "Request"]


class PluginChain:
    """
    Упорядоченный список плагинов.

    Example:
        >>> chain = PluginChain([HeaderSetPlugin(...), ContentLengthPlugin()])
        >>> raw = chain.send(Request("GET", url), transport)
    """

    def __init__(self, plugins: Optional[Iterable[Plugin]] = None):
        self._plugins: List[Plugin] = list(plugins) if plugins else []

    @property
    def plugins(self) -> Sequence[Plugin]:
        return tuple(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def _outgoing(self, request: "Request") -> Tuple[List[_Stage], "Request"]:
        """Прогнать запрос снаружи внутрь. Исключения не перехватываются."""
        stages: List[_Stage] = []
        for plugin in self._plugins:
            request = plugin.before_request(request)
            stages.append((plugin, request))
        return stages, request

    @staticmethod
    def _incoming(
        stages: List[_Stage],
        response: Optional["RawResponse"],
        error: Optional[Exception],
    ) -> "RawResponse":
        """Прогнать ответ (или ошибку) изнутри наружу."""
        for plugin, request in reversed(stages):
            if error is None:
                try:
                    response = plugin.after_response(request, response)
                except Exception as e:
                    error = e
            else:
                try:
                    replacement = plugin.on_error(request, error)
                except Exception as e:
                    replacement = e
                if isinstance(replacement, Exception):
                    error = replacement

        if error is not None:
            raise error
        return response

    def send(self, request: "Request", transport: "Transport") -> "RawResponse":
        """Выполнить запрос через блокирующий транспорт."""
        stages, request = self._outgoing(request)

        logger.debug("Dispatching %s %s through %d plugin(s)", request.method, request.url.split("?")[0], len(stages))
        try:
            response, error = transport.send(request), None
        except Exception as e:
            response, error = None, e

        return self._incoming(stages, response, error)

    async def send_async(self, request: "Request", transport: "AsyncTransport") -> "RawResponse":
        """Выполнить запрос через асинхронный транспорт."""
        stages, request = self._outgoing(request)

        logger.debug("Dispatching %s %s through %d plugin(s)", request.method, request.url.split("?")[0], len(stages))
        try:
            response, error = await transport.send(request), None
        except Exception as e:
            response, error = None, e

        return self._incoming(stages, response, error)
