"""Client configuration loaded from YAML or environment variables.

Config file format:
    hostname: ${SECTESTER_HOSTNAME:-app.brightsec.com}
    api_key: ${SECTESTER_API_KEY}
    bus_url: redis://localhost:6379
    exchange: EventBus
    polling_interval: 5000
    timeout: 600000
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from core.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_VERSION = "0.1.0"
DEFAULT_BUS_URL = "redis://localhost:6379"
DEFAULT_EXCHANGE = "EventBus"
DEFAULT_POLLING_INTERVAL = 5 * 1000


def expand_env(value: Any) -> Any:
    """
    Expand ${VAR} or ${VAR:-default} environment variables.

    Examples:
        ${SECTESTER_API_KEY} -> os.getenv("SECTESTER_API_KEY", "")
        ${SECTESTER_HOSTNAME:-app.brightsec.com} -> os.getenv("SECTESTER_HOSTNAME", "app.brightsec.com")
    """
    if not value or not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        inner = value[2:-1]
        if ":-" in inner:
            var_name, default = inner.split(":-", 1)
            return os.getenv(var_name, default)
        return os.getenv(inner, "")

    return value


@dataclass(frozen=True)
class Configuration:
    """Connection and polling settings shared by scans and repeaters."""

    hostname: str
    api_key: Optional[str] = None
    version: str = DEFAULT_VERSION
    bus_url: str = DEFAULT_BUS_URL
    exchange: str = DEFAULT_EXCHANGE
    polling_interval: int = DEFAULT_POLLING_INTERVAL  # ms
    timeout: Optional[int] = None  # ms

    def __post_init__(self):
        if not self.hostname:
            raise ValueError("Configuration requires a hostname")
        if self.polling_interval <= 0:
            raise ValueError(f"Invalid polling interval: {self.polling_interval}")

    @property
    def api_url(self) -> str:
        """Base URL of the platform REST API."""
        if self.hostname.startswith(("http://", "https://")):
            return self.hostname.rstrip("/")
        return f"https://{self.hostname}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Configuration":
        values = {key: expand_env(value) for key, value in data.items()}

        # Empty env substitutions fall back to dataclass defaults
        values = {key: value for key, value in values.items() if value not in ("", None)}
        if "hostname" not in values:
            raise ValueError("Configuration requires a hostname")

        for key in ("polling_interval", "timeout"):
            if key in values:
                values[key] = int(values[key])

        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            logger.warning("config_unknown_keys", keys=sorted(unknown))
            for key in unknown:
                values.pop(key)

        return cls(**values)

    @classmethod
    def from_env(cls) -> "Configuration":
        """Build configuration from SECTESTER_* environment variables."""
        return cls.from_dict(
            {
                "hostname": os.getenv("SECTESTER_HOSTNAME", ""),
                "api_key": os.getenv("SECTESTER_API_KEY"),
                "bus_url": os.getenv("SECTESTER_BUS_URL"),
                "exchange": os.getenv("SECTESTER_EXCHANGE"),
                "polling_interval": os.getenv("SECTESTER_POLLING_INTERVAL"),
                "timeout": os.getenv("SECTESTER_TIMEOUT"),
            }
        )


def load_config(config_file: str | Path = "config/sectester.yaml") -> Configuration:
    """
    Load configuration from a YAML file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is empty or lacks a hostname
    """
    path = Path(config_file)
    with open(path) as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Empty config file: {path}")

    logger.info("config_loaded", path=str(path))
    return Configuration.from_dict(data)
