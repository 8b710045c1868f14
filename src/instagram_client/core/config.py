"""
Конфигурация Instagram Client.

Все конфиги immutable (frozen dataclasses). Единственное изменяемое
состояние - access_token - живёт в экземпляре фасада, а не здесь.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Tuple, Union

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .logging import LoggingConfig
    from .transport import RawResponse, Request

BeforeHook = Callable[["Request"], Optional["Request"]]
AfterHook = Callable[["RawResponse"], Optional["RawResponse"]]
ErrorHook = Callable[[Exception], Optional[Exception]]

DEFAULT_USER_AGENT = "instagram-client-core/1.0"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_LOG_FORMATS = {"text", "json"}

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов транспорта.

    Args:
        connect: Таймаут подключения (сек)
        read: Таймаут чтения данных (сек)

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
    """
    connect: float = 5
    read: float = 30

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ConfigurationError("connect timeout must be positive")
        if self.read <= 0:
            raise ConfigurationError("read timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация клиента.

    Args:
        client_id: ID приложения
        client_secret: Секрет приложения (подпись X-Insta-Forwarded-For, обмен кода)
        access_token: Начальный access_token (опционально)
        client_ip: IP конечного пользователя для X-Insta-Forwarded-For
        redirect_uri: redirect_uri, зарегистрированный для приложения (нужен authorize)
        user_agent: Значение заголовка User-Agent
        log_enabled: Включить логирование запросов/ответов
        log_level: Уровень логирования (DEBUG, INFO, ...)
        log_path: Файл для логов (None = только консоль)
        log_format: Формат логов (text, json)
        before: Хук до отправки, получает Request, может вернуть новый
        after: Хук после ответа, получает RawResponse, может вернуть новый
        error: Хук ошибки транспорта, получает исключение, может вернуть замену
        timeout: Конфигурация таймаутов
        verify_ssl: Проверять SSL сертификаты

    Examples:
        >>> config = ClientConfig(client_id="abc", client_secret="s3cr3t")
        >>> config = ClientConfig.create(client_id="abc", timeout=10, log_enabled=True)
    """
    client_id: str = ""
    client_secret: str = ""
    access_token: Optional[str] = None
    client_ip: str = ""
    redirect_uri: str = ""
    user_agent: str = DEFAULT_USER_AGENT

    log_enabled: bool = False
    log_level: str = "DEBUG"
    log_path: Optional[str] = None
    log_format: str = "text"

    before: Optional[BeforeHook] = None
    after: Optional[AfterHook] = None
    error: Optional[ErrorHook] = None

    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    verify_ssl: bool = True

    def __post_init__(self):
        """Валидация и нормализация."""
        object.__setattr__(self, "log_level", self.log_level.upper())
        object.__setattr__(self, "log_format", self.log_format.lower())

        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log_level '{self.log_level}'. "
                f"Must be one of: {', '.join(sorted(_LOG_LEVELS))}"
            )
        if self.log_format not in _LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log_format '{self.log_format}'. "
                f"Must be one of: {', '.join(sorted(_LOG_FORMATS))}"
            )

        for name in ("before", "after", "error"):
            hook = getattr(self, name)
            if hook is not None and not callable(hook):
                raise ConfigurationError(f"Hook '{name}' must be callable, got {type(hook).__name__}")

    @classmethod
    def create(
        cls,
        client_id: str = "",
        client_secret: str = "",
        timeout: Union[int, float, Tuple[float, float], TimeoutConfig] = 30,
        **kwargs: Any,
    ) -> "ClientConfig":
        """
        Удобный конструктор конфигурации.

        Args:
            client_id: ID приложения
            client_secret: Секрет приложения
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            **kwargs: Остальные поля ClientConfig

        Returns:
            ClientConfig instance

        Examples:
            >>> config = ClientConfig.create(client_id="abc", timeout=(3, 10))
        """
        if isinstance(timeout, TimeoutConfig):
            timeout_cfg = timeout
        elif isinstance(timeout, tuple):
            timeout_cfg = TimeoutConfig(connect=timeout[0], read=timeout[1])
        else:
            timeout_cfg = TimeoutConfig(connect=5, read=timeout)

        return cls(
            client_id=client_id,
            client_secret=client_secret,
            timeout=timeout_cfg,
            **kwargs,
        )

    def with_access_token(self, access_token: Optional[str]) -> "ClientConfig":
        """
        Создать новый конфиг с другим access_token.

        Example:
            >>> new_config = config.with_access_token("token")
        """
        return replace(self, access_token=access_token)

    def logging_config(self) -> "LoggingConfig":
        """Собрать LoggingConfig для плагина логирования."""
        from .logging import LoggingConfig

        return LoggingConfig.create(
            level=self.log_level,
            format=self.log_format,
            enable_console=self.log_path is None,
            enable_file=self.log_path is not None,
            file_path=self.log_path,
        )
