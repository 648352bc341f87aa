"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Tanuki, a product of Garudex Labs

Configuration management for Tanuki.

``ClientConfig`` is the immutable per-client configuration read by every
request. ``load_config`` builds one from a YAML file with sensible defaults,
``${ENV_VAR}`` substitution and GITLAB_API_* environment fallbacks.
"""

import dataclasses
import os
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

import yaml

from tanuki._version import __version__
from tanuki.core.params import ParamValue, iter_params
from tanuki.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
    InvalidParameterError,
)
from tanuki.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_ENDPOINT = "https://gitlab.com/api/v4"
DEFAULT_USER_AGENT = f"Tanuki Python Client {__version__}"
DEFAULT_AUTH_HEADER = "PRIVATE-TOKEN"

ENV_ENDPOINT = "GITLAB_API_ENDPOINT"
ENV_PRIVATE_TOKEN = "GITLAB_API_PRIVATE_TOKEN"
ENV_USER_AGENT = "GITLAB_API_USER_AGENT"


def _expand_env_vars(value: Any) -> Any:
    """
    Recursively expand environment variables in configuration values.

    Supports ${ENV_VAR} syntax with optional default values: ${ENV_VAR:default}

    Args:
        value: Configuration value (string, dict, list, or other)

    Returns:
        Value with environment variables expanded

    Examples:
        "${GITLAB_API_PRIVATE_TOKEN}" -> value of GITLAB_API_PRIVATE_TOKEN env var
        "${GITLAB_HOST:gitlab.com}" -> value of GITLAB_HOST or "gitlab.com" if not set
    """
    if isinstance(value, str):
        pattern = r'\$\{([^}:]+)(?::([^}]*))?\}'

        def replace_env_var(match):
            var_name = match.group(1)
            default_value = match.group(2) if match.group(2) is not None else ""
            return os.environ.get(var_name, default_value)

        return re.sub(pattern, replace_env_var, value)
    elif isinstance(value, dict):
        return {k: _expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_expand_env_vars(item) for item in value]
    else:
        return value


def _validate_endpoint(endpoint: Any) -> str:
    if not isinstance(endpoint, str) or not endpoint.strip():
        raise ConfigurationError("endpoint is required")

    endpoint = endpoint.strip()
    if any(ch.isspace() for ch in endpoint):
        raise ConfigurationError(f"endpoint must not contain whitespace, got '{endpoint}'")

    parts = urlsplit(endpoint)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        raise ConfigurationError(
            f"endpoint must be an absolute http(s) URL with a host, got '{endpoint}'"
        )
    try:
        parts.port
    except ValueError as e:
        raise ConfigurationError(f"endpoint has an invalid port, got '{endpoint}'") from e
    if parts.query or parts.fragment:
        raise ConfigurationError(
            f"endpoint must not carry a query string or fragment, got '{endpoint}'"
        )

    return endpoint.rstrip("/")


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable configuration for one GitLab client.

    Changing a setting means building a new configuration (see ``replace``)
    and a new client, so requests in flight never observe a change.

    Attributes:
        endpoint: Base API URL, e.g. ``https://gitlab.example.com/api/v4``.
            Stored without trailing slash.
        token: Private or personal access token. ``None`` makes the client
            anonymous (no auth header is sent).
        user_agent: Value of the User-Agent header.
        default_params: Parameters merged under every request's parameters.
        auth_header: Header carrying the token.
        timeout: Round trip timeout in seconds; ``None`` imposes none.
        verify_ssl: Verify TLS certificates.
    """

    endpoint: str
    token: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    default_params: Mapping[str, ParamValue] = field(default_factory=dict, hash=False)
    auth_header: str = DEFAULT_AUTH_HEADER
    timeout: Optional[float] = None
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "endpoint", _validate_endpoint(self.endpoint))

        if self.token is not None and (not isinstance(self.token, str) or not self.token):
            raise ConfigurationError(
                "token must be a non-empty string; pass token=None for anonymous access"
            )
        if not self.user_agent:
            raise ConfigurationError("user_agent must not be empty")
        if not self.auth_header:
            raise ConfigurationError("auth_header must not be empty")
        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) \
                    or self.timeout <= 0:
                raise ConfigurationError(
                    f"timeout must be a positive number of seconds, got {self.timeout!r}"
                )

        defaults = dict(self.default_params or {})
        try:
            list(iter_params(defaults))
        except InvalidParameterError as e:
            raise ConfigurationError(f"Invalid default_params: {e}") from e
        object.__setattr__(self, "default_params", MappingProxyType(defaults))

    @property
    def anonymous(self) -> bool:
        """Whether requests go out without credentials."""
        return self.token is None

    def replace(self, **changes: Any) -> "ClientConfig":
        """Return a new validated configuration with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def __repr__(self) -> str:
        token = None if self.token is None else "***"
        return (
            f"ClientConfig(endpoint={self.endpoint!r}, token={token!r}, "
            f"user_agent={self.user_agent!r}, timeout={self.timeout!r})"
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""
    json_format: bool = False


@dataclass
class TanukiConfig:
    """Top-level configuration loaded from file."""

    client: ClientConfig
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_default_config_path() -> str:
    """Get the default configuration file path."""
    return os.path.expanduser("~/.tanuki/config.yaml")


def config_from_env(overrides: Optional[Dict[str, Any]] = None) -> ClientConfig:
    """
    Build a ClientConfig from GITLAB_API_* environment variables.

    A missing token yields an anonymous client and logs a warning.

    Args:
        overrides: Values that take precedence over the environment.

    Returns:
        ClientConfig: Validated configuration
    """
    values: Dict[str, Any] = {
        "endpoint": os.environ.get(ENV_ENDPOINT) or DEFAULT_ENDPOINT,
        "token": os.environ.get(ENV_PRIVATE_TOKEN) or None,
        "user_agent": os.environ.get(ENV_USER_AGENT) or DEFAULT_USER_AGENT,
    }
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})
    if values.get("token") is None:
        logger.warning(
            f"No private token found in configuration or {ENV_PRIVATE_TOKEN}; "
            "requests will be sent anonymously",
            endpoint=values["endpoint"],
        )
    return ClientConfig(**values)


def get_default_config() -> TanukiConfig:
    """
    Get default configuration.

    Returns:
        TanukiConfig: Environment-derived client configuration with default logging
    """
    return TanukiConfig(client=config_from_env())


def load_config(config_path: Optional[str] = None) -> TanukiConfig:
    """
    Load configuration from YAML file with validation.

    If config file is not found, returns default configuration.
    If config file is malformed or invalid, raises InvalidConfigurationError.

    Args:
        config_path: Path to configuration file. If None, uses default path.

    Returns:
        TanukiConfig: Loaded and validated configuration

    Raises:
        InvalidConfigurationError: If configuration is invalid or malformed
    """
    if config_path is None:
        config_path = get_default_config_path()

    config_path = os.path.expanduser(config_path)

    if not os.path.exists(config_path):
        logger.info(f"Configuration file not found at {config_path}, using defaults")
        return get_default_config()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f)
        logger.debug(f"Loaded configuration from {config_path}")
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to parse YAML configuration file '{config_path}': {e}"
        ) from e
    except OSError as e:
        logger.error(f"Failed to read configuration file '{config_path}': {e}", exc_info=True)
        raise InvalidConfigurationError(
            f"Failed to read configuration file '{config_path}': {e}"
        ) from e

    if config_data is None:
        logger.info(f"Configuration file {config_path} is empty, using defaults")
        return get_default_config()

    if not isinstance(config_data, dict):
        raise InvalidConfigurationError(
            f"Configuration file '{config_path}' must contain a mapping at the top level"
        )

    config_data = _expand_env_vars(config_data)

    try:
        config = _build_config_from_dict(config_data)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration in '{config_path}': {e}")
        raise InvalidConfigurationError(
            f"Invalid configuration in '{config_path}': {e}"
        ) from e

    logger.info(f"Successfully loaded and validated configuration from {config_path}")
    return config


_CLIENT_KEYS = (
    "endpoint",
    "token",
    "user_agent",
    "auth_header",
    "timeout",
    "verify_ssl",
    "default_params",
)


def _build_config_from_dict(config_data: Dict[str, Any]) -> TanukiConfig:
    """
    Build TanukiConfig from dictionary loaded from YAML.

    Values missing from the ``gitlab`` section fall back to the environment,
    then to built-in defaults.

    Raises:
        ConfigurationError: If a section is malformed or a value is invalid
    """
    gitlab_data = config_data.get('gitlab') or {}
    if not isinstance(gitlab_data, dict):
        raise ConfigurationError("'gitlab' section must be a mapping")

    unknown = sorted(set(gitlab_data) - set(_CLIENT_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown keys in 'gitlab' section: {', '.join(unknown)}")

    overrides = {key: gitlab_data.get(key) for key in _CLIENT_KEYS}
    # Empty strings left by unset ${VAR} references count as missing.
    overrides = {k: v for k, v in overrides.items() if v != ""}
    if overrides.get("timeout") is not None:
        try:
            overrides["timeout"] = float(overrides["timeout"])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"timeout must be a number, got {overrides['timeout']!r}") from e
    if overrides.get("default_params") is not None and not isinstance(overrides["default_params"], dict):
        raise ConfigurationError("'default_params' must be a mapping")

    client = config_from_env(overrides)

    logging_data = config_data.get('logging') or {}
    if not isinstance(logging_data, dict):
        raise ConfigurationError("'logging' section must be a mapping")
    default_logging = LoggingConfig()
    logging = LoggingConfig(
        level=str(logging_data.get('level', default_logging.level)).upper(),
        file=os.path.expanduser(logging_data.get('file') or default_logging.file),
        json_format=bool(logging_data.get('json_format', default_logging.json_format)),
    )

    return TanukiConfig(client=client, logging=logging)
