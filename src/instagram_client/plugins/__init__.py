# src/instagram_client/plugins/__init__.py
from .plugin import Plugin
from .chain import PluginChain
from .header_set_plugin import HeaderSetPlugin, sign_client_ip
from .content_length_plugin import ContentLengthPlugin
from .logging_plugin import LoggingPlugin
from .hooks_plugin import HooksPlugin

__all__ = [
    "Plugin",
    "PluginChain",
    "HeaderSetPlugin",
    "sign_client_ip",
    "ContentLengthPlugin",
    "LoggingPlugin",
    "HooksPlugin",
]
