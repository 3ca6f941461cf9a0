"""
load the config from config.yaml and environment variables
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "config.yaml"


@dataclass(frozen=True)
class EndpointConfig:
    """Where the item lives. Defaults point at the local item service."""

    scheme: str = "http"
    host: str = "localhost"
    port: int = 3000
    path: str = "/items/1"
    timeout: Optional[float] = None  # seconds, None waits forever

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}{self.path}"


class Config:
    """Configuration loader that reads from config.yaml and environment variables."""

    def __init__(self, config_path: str = None):
        """Initialize configuration loader.

        Args:
            config_path: Path to a YAML file. If None, config.yaml in the
                        working directory is used when present, otherwise
                        the built-in defaults apply.
        """
        if config_path is None:
            default_path = Path.cwd() / DEFAULT_CONFIG_FILE
            self.config_path = default_path if default_path.exists() else None
        else:
            self.config_path = Path(config_path)
        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file and override with environment variables."""
        config = {}
        if self.config_path is not None:
            try:
                with open(self.config_path, 'r') as f:
                    config = yaml.safe_load(f) or {}
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration root must be a mapping, got {type(config).__name__}")

        return self._apply_env_overrides(config)

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply ITEM_API_* and LOG_* environment variables on top of the file values."""
        env_mappings = {
            'endpoint': {
                'scheme': 'ITEM_API_SCHEME',
                'host': 'ITEM_API_HOST',
                'port': 'ITEM_API_PORT',
                'path': 'ITEM_API_PATH',
                'timeout': 'ITEM_API_TIMEOUT',
            },
            'logging': {
                'level': 'LOG_LEVEL',
                'format': 'LOG_FORMAT',
            },
        }

        for section_name, fields in env_mappings.items():
            overrides = {
                field: _parse_env_value(os.environ[env_var])
                for field, env_var in fields.items()
                if env_var in os.environ
            }
            if not overrides:
                continue
            section = config.get(section_name)
            if not isinstance(section, dict):
                section = config[section_name] = {}
            section.update(overrides)

        return config

    def _section(self, name: str) -> Dict[str, Any]:
        section = self._config.get(name)
        return section if isinstance(section, dict) else {}

    @property
    def endpoint(self) -> EndpointConfig:
        """Get the validated item endpoint configuration."""
        section = self._section('endpoint')
        defaults = EndpointConfig()

        scheme = section.get('scheme', defaults.scheme)
        if scheme not in ('http', 'https'):
            raise ConfigError(f"Unsupported scheme: {scheme!r}")

        host = section.get('host', defaults.host)
        if not isinstance(host, str) or not host:
            raise ConfigError(f"Invalid host: {host!r}")

        port = section.get('port', defaults.port)
        if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
            raise ConfigError(f"Invalid port: {port!r}")

        path = section.get('path', defaults.path)
        if not isinstance(path, str) or not path.startswith('/'):
            raise ConfigError(f"Path must start with '/': {path!r}")

        timeout = section.get('timeout', defaults.timeout)
        if timeout is not None:
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigError(f"Timeout must be a positive number of seconds: {timeout!r}")
            timeout = float(timeout)

        return EndpointConfig(scheme=scheme, host=host, port=port, path=path, timeout=timeout)

    @property
    def logging(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self._section('logging')


def _parse_env_value(value: str):
    """Turn an environment string into bool, None, int or float where it reads as one."""
    lowered = value.strip().lower()
    if lowered in ('true', 'false'):
        return lowered == 'true'
    if lowered in ('null', 'none', ''):
        return None

    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value
