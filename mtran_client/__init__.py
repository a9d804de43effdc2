from mtran_client.config_management import (
    AdapterOptions,
    ConfigManager,
    ServerConfig,
    validate_config,
)
from mtran_client.errors import (
    ConfigError,
    InvalidInputError,
    MalformedResponseError,
    MTranError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    ServiceUnavailableError,
)
from mtran_client.logger import Logger
from mtran_client.transport import HttpRequest, HttpResponse, RequestsTransport, Transport
from mtran_client.translators import translator_factory
from mtran_client.translators.mtran_translator import MTranTranslator
from mtran_client.urls import DEFAULT_URL, normalize_url

__all__ = [
    "AdapterOptions",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_URL",
    "HttpRequest",
    "HttpResponse",
    "InvalidInputError",
    "Logger",
    "MTranError",
    "MTranTranslator",
    "MalformedResponseError",
    "NetworkError",
    "RequestTimeoutError",
    "RequestsTransport",
    "ServerConfig",
    "ServerError",
    "ServiceUnavailableError",
    "Transport",
    "normalize_url",
    "translator_factory",
    "validate_config",
]
