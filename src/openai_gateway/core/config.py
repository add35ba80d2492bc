"""
Configuration loading for the OpenAI gateway.

Values come from an optional YAML file and are overridden by environment
variables. The provider credential is never defaulted in source.
"""

import os
import logging
from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_CHAT_MODEL = "gpt-4"
DEFAULT_TRANSCRIPTION_MODEL = "whisper-1"
DEFAULT_TIMEOUT = 60.0

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class ProviderConfig:
    """Connection settings for the upstream provider."""
    name: str = "openai"
    base_url: str = DEFAULT_BASE_URL
    api_key: Optional[str] = None
    chat_model: str = DEFAULT_CHAT_MODEL
    transcription_model: str = DEFAULT_TRANSCRIPTION_MODEL
    timeout: float = DEFAULT_TIMEOUT

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        """Return the API key or raise ConfigurationError."""
        if not self.api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set; the provider credential is required",
                gateway=self.name,
            )
        return self.api_key


@dataclass
class ServerConfig:
    """Settings for the inbound HTTP server."""
    host: str = "0.0.0.0"
    port: int = 8080
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class GatewayConfig:
    """Complete gateway configuration."""
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"
    strict_startup: bool = False
    otel_endpoint: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GatewayConfig":
        """Build a configuration from a parsed YAML mapping."""
        return _parse_config(data or {})


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration.

    Args:
        config_path: Path to a YAML config file. If None, GATEWAY_CONFIG and
            then the default locations are tried.

    Returns:
        Loaded configuration with environment overrides applied
    """
    config_path = config_path or os.environ.get("GATEWAY_CONFIG")
    if config_path is None:
        paths = [
            Path("config/openai-gateway.yaml"),
            Path("/etc/openai-gateway/config.yaml"),
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None:
        logger.info("No gateway config file found, using defaults")
        config = GatewayConfig()
    elif not Path(config_path).exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    else:
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}") from e
        config = _parse_config(data or {})

    _apply_env_overrides(config)
    return config


def _expand(value: Any) -> Any:
    """Expand a ``${VAR}`` reference from the environment."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1]) or None
    return value


def _log_level(value: Any) -> str:
    """Normalize a logging level name, raising ConfigurationError if unknown."""
    level = str(value).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Invalid log level: {value}")
    return level


def _parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """Parse configuration dictionary."""
    provider_data = data.get("provider", {}) or {}
    server_data = data.get("server", {}) or {}

    timeout = _expand(provider_data.get("timeout"))
    provider = ProviderConfig(
        name=provider_data.get("name", "openai"),
        base_url=_expand(provider_data.get("base_url")) or DEFAULT_BASE_URL,
        api_key=_expand(provider_data.get("api_key")),
        chat_model=provider_data.get("chat_model", DEFAULT_CHAT_MODEL),
        transcription_model=provider_data.get(
            "transcription_model", DEFAULT_TRANSCRIPTION_MODEL
        ),
        timeout=float(timeout) if timeout is not None else DEFAULT_TIMEOUT,
    )

    server = ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=int(server_data.get("port", 8080)),
        cors_origins=list(server_data.get("cors_origins", ["*"])),
    )

    return GatewayConfig(
        provider=provider,
        server=server,
        log_level=_log_level(data.get("log_level", "INFO")),
        strict_startup=bool(data.get("strict_startup", False)),
        otel_endpoint=_expand(data.get("otel_endpoint")),
    )


def _apply_env_overrides(config: GatewayConfig) -> None:
    """Apply environment variables on top of file values."""
    env = os.environ
    provider = config.provider

    if env.get("OPENAI_API_KEY"):
        provider.api_key = env["OPENAI_API_KEY"]
    if env.get("OPENAI_BASE_URL"):
        provider.base_url = env["OPENAI_BASE_URL"]
    if env.get("OPENAI_CHAT_MODEL"):
        provider.chat_model = env["OPENAI_CHAT_MODEL"]
    if env.get("OPENAI_TRANSCRIPTION_MODEL"):
        provider.transcription_model = env["OPENAI_TRANSCRIPTION_MODEL"]
    if env.get("OPENAI_TIMEOUT"):
        try:
            provider.timeout = float(env["OPENAI_TIMEOUT"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid OPENAI_TIMEOUT: {env['OPENAI_TIMEOUT']}") from e

    if env.get("HOST"):
        config.server.host = env["HOST"]
    if env.get("PORT"):
        try:
            config.server.port = int(env["PORT"])
        except ValueError as e:
            raise ConfigurationError(f"Invalid PORT: {env['PORT']}") from e

    if env.get("LOG_LEVEL"):
        config.log_level = _log_level(env["LOG_LEVEL"])
    if env.get("GATEWAY_STRICT_STARTUP"):
        config.strict_startup = env["GATEWAY_STRICT_STARTUP"].lower() in _TRUE_VALUES
    if env.get("OTEL_EXPORTER_OTLP_ENDPOINT"):
        config.otel_endpoint = env["OTEL_EXPORTER_OTLP_ENDPOINT"]
