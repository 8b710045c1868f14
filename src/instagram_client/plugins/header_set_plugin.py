# src/instagram_client/plugins/header_set_plugin.py

import hashlib
import hmac
from typing import Dict, Mapping

from ..core.transport import Request
from .plugin import Plugin

FORWARDED_FOR_HEADER = "X-Insta-Forwarded-For"


def sign_client_ip(client_ip: str, client_secret: str) -> str:
    """
    Значение X-Insta-Forwarded-For: "<ip>|<hex HMAC-SHA256(ip, secret)>".

    Example:
        >>> sign_client_ip("127.0.0.1", "secret").split("|")[0]
        '127.0.0.1'
    """
    digest = hmac.new(
        client_secret.encode("utf-8"),
        client_ip.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return "|".join([client_ip, digest])


class HeaderSetPlugin(Plugin):
    """Устанавливает (перезаписывает) заголовки на каждом запросе."""

    def __init__(self, headers: Mapping[str, str]):
        self.headers: Dict[str, str] = dict(headers)

    @classmethod
    def for_client(cls, user_agent: str, client_ip: str, client_secret: str) -> "HeaderSetPlugin":
        """User-Agent + подписанный X-Insta-Forwarded-For."""
        return cls({
            "User-Agent": user_agent,
            FORWARDED_FOR_HEADER: sign_client_ip(client_ip, client_secret),
        })

    def before_request(self, request: Request) -> Request:
        for name, value in self.headers.items():
            request = request.with_header(name, value)
        return request
