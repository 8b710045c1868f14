# src/instagram_client/plugins/content_length_plugin.py

from ..core.transport import Request
from .plugin import Plugin


class ContentLengthPlugin(Plugin):
    """Приводит Content-Length в соответствие с реальным размером тела."""

    def before_request(self, request: Request) -> Request:
        if request.body is None:
            return request
        return request.with_header("Content-Length", str(len(request.body)))
