# src/instagram_client/plugins/logging_plugin.py

import time
import weakref
from typing import Dict, Optional

from ..core.logging import InstagramLogger, LoggingConfig
from ..core.transport import RawResponse, Request
from .plugin import Plugin


class LoggingPlugin(Plugin):
    """
    Плагин для логирования пар запрос/ответ.

    Все поля проходят через mask_sensitive_data внутри InstagramLogger,
    поэтому access_token и client_id в URL маскируются.

    Время старта хранится по id(request) и удаляется вместе с запросом
    (weakref.finalize), даже если внутренний before_request прервал цепочку.
    """

    def __init__(self, logger: Optional[InstagramLogger] = None, config: Optional[LoggingConfig] = None):
        self.logger = logger or InstagramLogger(config)
        self._started: Dict[int, float] = {}

    def _elapsed_ms(self, request: Request) -> Optional[float]:
        started = self._started.pop(id(request), None)
        if started is None:
            return None
        return round((time.monotonic() - started) * 1000, 2)

    def before_request(self, request: Request) -> Request:
        key = id(request)
        if key not in self._started:
            weakref.finalize(request, self._started.pop, key, None)
        self._started[key] = time.monotonic()
        self.logger.info("Request sent", method=request.method, url=request.url)
        self.logger.debug(
            "Request details",
            method=request.method,
            url=request.url,
            headers=dict(request.headers),
            body=request.body.decode("utf-8", errors="replace") if request.body else None,
        )
        return request

    def after_response(self, request: Request, response: RawResponse) -> RawResponse:
        self.logger.info(
            "Response received",
            method=request.method,
            url=request.url,
            status_code=response.status_code,
            reason=response.reason,
            response_size=len(response.body),
            duration_ms=self._elapsed_ms(request),
        )
        self.logger.debug("Response body", body=response.body[:200].decode("utf-8", errors="replace"))
        return response

    def on_error(self, request: Request, error: Exception) -> Exception:
        self.logger.error(
            "Request failed",
            method=request.method,
            url=request.url,
            error=str(error),
            error_type=type(error).__name__,
            duration_ms=self._elapsed_ms(request),
        )
        return error

    def close(self) -> None:
        self.logger.close()
