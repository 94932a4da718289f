"""Configuration management for todoview."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

TODOVIEW_HOME = Path(os.environ.get("TODOVIEW_HOME", Path.home() / ".todoview"))
CONFIG_FILE = TODOVIEW_HOME / "config" / "todoview.conf"
DATA_DIR = TODOVIEW_HOME / "data"

_INT_KEYS = {
    "page_size",
    "user_id",
    "error_display_seconds",
    "success_display_seconds",
}


@dataclass
class Config:
    """todoview configuration."""

    api_base_url: str = "https://dummyjson.com"
    page_size: int = 10
    user_id: int = 1
    storage_slot: str = "user_added_todos"
    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    # None means requests waits indefinitely
    request_timeout: float | None = None
    # Notification auto-dismiss intervals
    error_display_seconds: int = 5
    success_display_seconds: int = 3


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from todoview.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        if key in _INT_KEYS:
            try:
                number = int(value)
            except ValueError:
                logger.warning(f"Ignoring non-integer {key.upper()}: {value!r}")
                continue
            if number < 1:
                logger.warning(f"Ignoring non-positive {key.upper()}: {number}")
                continue
            setattr(config, key, number)
            continue

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "storage_slot":
                config.storage_slot = value
            case "data_dir":
                config.data_dir = Path(value).expanduser()
            case "request_timeout":
                if not value:
                    config.request_timeout = None
                    continue
                try:
                    timeout = float(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid REQUEST_TIMEOUT: {value!r}")
                    continue
                # requests rejects zero and negative timeouts on every call
                if timeout <= 0:
                    logger.warning(f"Ignoring non-positive REQUEST_TIMEOUT: {timeout}")
                    continue
                config.request_timeout = timeout
            case _:
                logger.debug(f"Unknown config key: {key}")

    return config
