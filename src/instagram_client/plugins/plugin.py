# src/instagram_client/plugins/plugin.py

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..core.transport import RawResponse, Request


class Plugin:
    """
    Базовый класс для всех плагинов (двухфазный перехватчик).

    Исходящая фаза (before_request) выполняется снаружи внутрь в порядке
    регистрации, входящая (after_response / on_error) - изнутри наружу.
    По умолчанию все методы пропускают значения без изменений.

    Example:
        >>> class TracePlugin(Plugin):
        ...     def before_request(self, request):
        ...         return request.with_header("X-Trace-Id", "abc")
    """

    def before_request(self, request: "Request") -> "Request":
        """
        Вызывается перед отправкой запроса.

        Returns:
            Запрос, который уйдёт следующему плагину (или в транспорт).
            Исключение прерывает цепочку: последующие стадии не выполняются.
        """
        return request

    def after_response(self, request: "Request", response: "RawResponse") -> "RawResponse":
        """
        Вызывается после получения ответа от внутренней стадии.

        Args:
            request: Запрос в том виде, в каком его отправил этот плагин
            response: Ответ внутренней стадии
        """
        return response

    def on_error(self, request: "Request", error: Exception) -> Exception:
        """
        Вызывается при ошибке внутренней стадии (транспорт или after_response).

        Returns:
            Исключение, которое пойдёт дальше наружу (исходное или замена)
        """
        return error
