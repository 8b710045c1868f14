# src/instagram_client/plugins/hooks_plugin.py

import logging
from typing import Optional

from ..core.config import AfterHook, BeforeHook, ClientConfig, ErrorHook
from ..core.transport import RawResponse, Request
from .plugin import Plugin

logger = logging.getLogger(__name__)


class HooksPlugin(Plugin):
    """
    Вызывает пользовательские хуки before/after/error из ClientConfig.

    - before(request) -> новый Request (None = без изменений)
    - after(response) -> новый RawResponse (None = без изменений)
    - error(exception) -> исключение, которое будет поднято вместо исходного
      (None = исходное)

    Исключение внутри хука прерывает цепочку и уходит наружу.

    Example:
        >>> config = ClientConfig(client_id="abc", after=lambda r: r.replace(status_code=503))
        >>> plugin = HooksPlugin.from_config(config)
    """

    def __init__(
        self,
        before: Optional[BeforeHook] = None,
        after: Optional[AfterHook] = None,
        error: Optional[ErrorHook] = None,
    ):
        self.before = before
        self.after = after
        self.error = error

    @classmethod
    def from_config(cls, config: ClientConfig) -> "HooksPlugin":
        return cls(before=config.before, after=config.after, error=config.error)

    def before_request(self, request: Request) -> Request:
        if self.before is None:
            return request
        result = self.before(request)
        return request if result is None else result

    def after_response(self, request: Request, response: RawResponse) -> RawResponse:
        if self.after is None:
            return response
        result = self.after(response)
        return response if result is None else result

    def on_error(self, request: Request, error: Exception) -> Exception:
        if self.error is None:
            return error
        logger.debug("Passing %s to error hook", type(error).__name__)
        result = self.error(error)
        return error if result is None else result
