# src/instagram_client/instagram.py
"""
Фасад Instagram API: построение запросов, авторизация, разбор ответов.
"""

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote_plus, urlencode

from .core.classifier import raise_for_response
from .core.config import ClientConfig
from .core.exceptions import InstagramClientException, InstagramException, wrap_transport_exception
from .core.response import ApiResponse
from .core.transport import RawResponse, Request, RequestsTransport, Transport
from .plugins.chain import PluginChain
from .plugins.content_length_plugin import ContentLengthPlugin
from .plugins.header_set_plugin import HeaderSetPlugin
from .plugins.hooks_plugin import HooksPlugin
from .plugins.logging_plugin import LoggingPlugin
from .plugins.plugin import Plugin

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _query_value(value: Any) -> Any:
    # true/false как 1/0, по аналогии с формами
    if isinstance(value, bool):
        return int(value)
    return value


def encode_params(params: Mapping[str, Any]) -> str:
    """
    URL-кодирование параметров. None пропускается, списки раскрываются.

    Example:
        >>> encode_params({"q": "john doe", "count": 5, "skip": None})
        'q=john+doe&count=5'
    """
    items = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            items.append((key, [_query_value(v) for v in value]))
        else:
            items.append((key, _query_value(value)))
    return urlencode(items, doseq=True)


class BaseInstagram:
    """
    Общая часть блокирующего и асинхронного фасадов.

    Один экземпляр рассчитан на один вызов за раз: access_token хранится
    в экземпляре без блокировок. Для параллельной работы с разными токенами
    создавайте отдельные экземпляры.
    """

    BASE_URL = "https://api.instagram.com"
    API_VERSION = "v1"

    def __init__(self, config: ClientConfig, plugins: Optional[Sequence[Plugin]] = None):
        self._config = config
        self._access_token: str = config.access_token or ""
        self._user: Dict[str, Any] = {}

        self._logging_plugin: Optional[LoggingPlugin] = None
        if config.log_enabled:
            self._logging_plugin = LoggingPlugin(config=config.logging_config())

        self._chain = PluginChain(self._create_plugins(plugins))

    def _create_plugins(self, extra: Optional[Sequence[Plugin]]) -> List[Plugin]:
        """
        Порядок: пользовательские плагины, заголовки, Content-Length,
        логирование (если включено), хуки из конфига.
        """
        plugins: List[Plugin] = list(extra or [])
        plugins.append(HeaderSetPlugin.for_client(
            user_agent=self._config.user_agent,
            client_ip=self._config.client_ip,
            client_secret=self._config.client_secret,
        ))
        plugins.append(ContentLengthPlugin())
        if self._logging_plugin is not None:
            plugins.append(self._logging_plugin)
        plugins.append(HooksPlugin.from_config(self._config))
        return plugins

    # ==================== Состояние ====================

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def plugins(self) -> Sequence[Plugin]:
        return self._chain.plugins

    @property
    def access_token(self) -> str:
        return self._access_token

    def set_access_token(self, access_token: Optional[str]) -> None:
        """Установить access_token для всех последующих запросов."""
        self._access_token = access_token or ""

    def is_authorized(self) -> bool:
        """Есть access_token - считаем пользователя авторизованным."""
        return bool(self._access_token)

    @property
    def current_user(self) -> Dict[str, Any]:
        """Пользователь, полученный при authorize()."""
        return self._user

    # ==================== Построение запросов ====================

    def build_path(self, path: str, add_version: bool = True) -> str:
        """
        Нормализовать путь и добавить версию API.

        Example:
            >>> api.build_path("users//self/")
            'https://api.instagram.com/v1/users/self'
            >>> api.build_path("/oauth/access_token", add_version=False)
            'https://api.instagram.com/oauth/access_token'
        """
        path = re.sub(r"/{2,}", "/", f"/{path}/")

        version_prefix = f"/{self.API_VERSION}"
        if add_version and not path.startswith(version_prefix):
            path = version_prefix + path

        # Некоторые эндпоинты не отвечают на путь с завершающим слешем
        path = path.rstrip("/")

        return self.BASE_URL + path

    @staticmethod
    def format_path(template: str, *args: Any) -> str:
        """
        Как % форматирование, но аргументы URL-кодируются.

        Example:
            >>> BaseInstagram.format_path("/users/%s/relationship", "a b/c")
            '/users/a+b%2Fc/relationship'
        """
        return template % tuple(quote_plus(str(arg)) for arg in args)

    def prepare(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Добавить параметр аутентификации: access_token, если он есть,
        иначе client_id. Оба сразу не отправляются никогда.
        """
        prepared = {
            key: value
            for key, value in (params or {}).items()
            if key not in ("client_id", "access_token")
        }
        if self._access_token:
            prepared["access_token"] = self._access_token
        else:
            prepared["client_id"] = self._config.client_id
        return prepared

    def _build_request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        add_version: bool = True,
    ) -> Request:
        query = encode_params(self.prepare(params))
        url = self.build_path(path, add_version)

        if method in ("GET", "DELETE"):
            return Request(method, f"{url}?{query}", headers or {})

        return self._form_request(method, url, query, headers)

    @staticmethod
    def _form_request(
        method: str,
        url: str,
        body: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Request:
        request = Request(method, url, headers or {}, body.encode("utf-8"))
        if request.header("Content-Type") is None:
            request = request.with_header("Content-Type", FORM_CONTENT_TYPE)
        return request

    def _authorize_request(self, code: str) -> Request:
        body = encode_params({
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "redirect_uri": self._config.redirect_uri,
            "grant_type": "authorization_code",
            "code": code,
        })
        return self._form_request("POST", self.build_path("/oauth/access_token", add_version=False), body)

    # ==================== Разбор ответов ====================

    def parse_response(
        self,
        raw: Optional[RawResponse],
        url: Optional[str] = None,
        method: str = "",
    ) -> ApiResponse:
        """
        Разобрать ответ и поднять типизированное исключение, если это ошибка.

        Raises:
            InvalidResponseFormatException: Тело не JSON
            InstagramException: Ошибка API (meta.error_type) или HTTP статуса
        """
        if raw is None:
            raise InstagramClientException("Response object is None")

        response = ApiResponse.from_raw(raw, url, method)
        return raise_for_response(response, raw.status_code, raw.reason)

    def _complete_authorization(self, raw: RawResponse, request: Request) -> ApiResponse:
        if raw.status_code == 200:
            response = ApiResponse.from_raw(raw, request.url, request.method)
            self.set_access_token(response.access_token)
            self._user = dict(response.user) if isinstance(response.user, dict) else {}
            return response

        # Должно поднять исключение; если статус не распознан - поднимаем сами
        response = self.parse_response(raw, request.url, request.method)
        raise InstagramException(raw.reason, raw.status_code, response)

    @staticmethod
    def _wrap_error(error: Exception) -> InstagramClientException:
        wrapped = wrap_transport_exception(error)
        if wrapped is not error:
            logger.debug("Wrapped %s: %s", type(error).__name__, error)
        return wrapped


class Instagram(BaseInstagram):
    """
    Блокирующий клиент Instagram API.

    Example:
        >>> config = ClientConfig(client_id="abc", client_secret="s3cr3t", client_ip="127.0.0.1")
        >>> with Instagram(config) as api:
        ...     res = api.get("/users/search", {"q": "snoopdogg"})
        ...     print(res.data, res.remaining)
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[Transport] = None,
        plugins: Optional[Sequence[Plugin]] = None,
    ):
        super().__init__(config, plugins)
        self._owns_transport = transport is None
        self._transport = transport or RequestsTransport(
            timeout=config.timeout,
            verify_ssl=config.verify_ssl,
        )

    @property
    def transport(self) -> Transport:
        return self._transport

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def close(self) -> None:
        """Закрыть транспорт (если он создан клиентом) и логгер."""
        if self._owns_transport:
            self._transport.close()
        if self._logging_plugin is not None:
            self._logging_plugin.close()

    def send(self, request: Request) -> RawResponse:
        """
        Отправить запрос через цепочку плагинов.

        Любая ошибка не из нашей иерархии оборачивается в InstagramClientException.
        """
        try:
            return self._chain.send(request, self._transport)
        except Exception as e:
            raise self._wrap_error(e)

    def _call(self, request: Request) -> ApiResponse:
        return self.parse_response(self.send(request), request.url, request.method)

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        """GET запрос, параметры в query string."""
        return self._call(self._build_request("GET", path, params, headers))

    def post(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
        add_version: bool = True,
    ) -> ApiResponse:
        """
        POST запрос, параметры в form-encoded теле.

        Версия API добавляется по умолчанию, как и у get/delete. Для путей
        без версии (например /oauth/...) передайте add_version=False.
        """
        return self._call(self._build_request("POST", path, params, headers, add_version))

    def delete(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> ApiResponse:
        """DELETE запрос, параметры в query string."""
        return self._call(self._build_request("DELETE", path, params, headers))

    def authorize(self, code: str) -> ApiResponse:
        """
        Обменять OAuth code на access_token.

        При успехе access_token и current_user сохраняются в клиенте.

        Raises:
            InstagramException: Обмен не удался
        """
        request = self._authorize_request(code)
        return self._complete_authorization(self.send(request), request)
