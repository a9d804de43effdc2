import copy
import os
from dataclasses import dataclass, replace
from typing import Any, Literal, Mapping, Optional, Union, get_args

import yaml
from dotenv import find_dotenv, load_dotenv

from mtran_client.errors import ConfigError
from mtran_client.logger import Logger
from mtran_client.urls import DEFAULT_URL

EmptyTextPolicy = Literal["return-empty", "reject"]
EMPTY_TEXT_POLICIES = list(get_args(EmptyTextPolicy))

TOKEN_ENV_VAR = "MTRAN_TOKEN"


@dataclass(frozen=True)
class ServerConfig:
    """Connection settings the host hands to the adapter."""

    api_url: str
    token: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ServerConfig":
        api_url = data.get("apiUrl", data.get("api_url"))
        return cls(api_url=api_url, token=data.get("token"))


def _coerce_token(token: Any) -> Optional[str]:
    # YAML turns an all-digit token into an int; headers need text.
    if token is None or token == "":
        return None
    return token if isinstance(token, str) else str(token)


ServerConfigLike = Union[ServerConfig, Mapping[str, Any], None]


def validate_config(config: ServerConfigLike) -> ServerConfig:
    """Raises ConfigError unless the config names a server URL."""
    if config is None:
        raise ConfigError("Configuration must not be empty")
    if not isinstance(config, ServerConfig):
        if not isinstance(config, Mapping):
            raise ConfigError(
                f"Configuration must be a mapping, got {type(config).__name__}"
            )
        config = ServerConfig.from_mapping(config)
    if not isinstance(config.api_url, str) or not config.api_url.strip():
        raise ConfigError("API URL must not be empty")
    token = _coerce_token(config.token)
    if token != config.token:
        config = replace(config, token=token)
    return config


@dataclass(frozen=True)
class AdapterOptions:
    default_url: str = DEFAULT_URL
    preflight_health_check: bool = False
    empty_text_policy: EmptyTextPolicy = "return-empty"
    translate_timeout_ms: int = 15000
    health_timeout_ms: int = 5000

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AdapterOptions":
        policy = data.get("empty_text_policy", "return-empty")
        if policy not in EMPTY_TEXT_POLICIES:
            raise ConfigError(
                f"Unknown empty_text_policy {policy!r}; "
                f"expected one of {', '.join(EMPTY_TEXT_POLICIES)}"
            )
        timeouts = {}
        for key, default in (("translate_timeout_ms", 15000), ("health_timeout_ms", 5000)):
            try:
                timeouts[key] = int(data.get(key, default))
            except (TypeError, ValueError) as e:
                raise ConfigError(f"{key} must be an integer") from e
            if timeouts[key] <= 0:
                raise ConfigError(f"{key} must be positive, got {timeouts[key]}")
        return cls(
            default_url=data.get("default_url") or DEFAULT_URL,
            preflight_health_check=bool(data.get("preflight_health_check", False)),
            empty_text_policy=policy,
            **timeouts,
        )


class ConfigManager:
    """Config manager"""

    _config_file_prod = "config.yaml"
    _config_file_dev = "config.dev.yaml"

    def __init__(
        self, logger: Logger, dev: bool = False, config_file: Optional[str] = None
    ) -> None:
        self._config_file = config_file or (
            self._config_file_dev if dev else self._config_file_prod
        )

        self.logger = logger.get_child("ConfigManager")
        load_dotenv(find_dotenv(usecwd=True))
        self._env_token = os.getenv(TOKEN_ENV_VAR) or None
        self._config = self._load_config()

    @property
    def config(self) -> dict:
        """Config file, exactly as loaded from disk"""
        return self._config

    @property
    def config_file(self) -> str:
        return self._config_file

    def _load_config(self) -> dict:
        """Loads config file"""
        try:
            with open(self._config_file, "r", encoding="utf-8") as f:
                loaded_config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            self.logger.warning(
                f"{self._config_file} not found. Please create it with defaults."
            )
            raise

        translation = loaded_config.get("translation") or {}
        translation["mtran"] = translation.get("mtran") or {}
        loaded_config["translation"] = translation
        return loaded_config

    def translator_config(self) -> dict:
        """
        Config handed to the translator factory.

        A copy of the file config with MTRAN_TOKEN applied on top; the loaded
        config itself never holds the environment token.
        """
        config = copy.deepcopy(self._config)
        if self._env_token:
            self.logger.debug(f"Using token from {TOKEN_ENV_VAR}.")
            config["translation"]["mtran"]["token"] = self._env_token
        return config

    def extract(self, selector: str, default_value=None) -> Any:
        try:
            parts = list(selector.split("."))
            v = self._config
            for p in parts:
                v = v[p]
            return v
        except Exception:
            return default_value
