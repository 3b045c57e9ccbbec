"""
YAML configuration loading for dexwatch.

Resolution order, lowest to highest precedence:
1. Model defaults (dexwatch.config.settings)
2. config/<name>.yaml, with ${VAR} / ${VAR:default} placeholders expanded
3. Override variables (LOG_LEVEL, POLL_INTERVAL_MS, ...)

A .env file at the project root is loaded into the environment on import.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from dotenv import load_dotenv

from .settings import AppConfig

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[3]
load_dotenv(PROJECT_ROOT / ".env")

PLACEHOLDER = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")

# variable -> (section, key)
ENV_OVERRIDES: Dict[str, Tuple[str, str]] = {
    "LOG_LEVEL": ("system", "log_level"),
    "POLL_INTERVAL_MS": ("monitor", "poll_interval_ms"),
    "TELEGRAM_BOT_TOKEN": ("notification", "telegram_bot_token"),
    "TELEGRAM_CHAT_ID": ("notification", "telegram_chat_id"),
    "EXECUTION_API_URL": ("endpoints", "execution_api_url"),
}


def expand_placeholders(value: Any) -> Any:
    """
    Expand ${VAR} and ${VAR:default} inside every string of a YAML tree.

    A string made only of an unset placeholder becomes None, so the key
    falls back to its model default.
    """
    if isinstance(value, dict):
        return {key: expand_placeholders(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_placeholders(item) for item in value]
    if not isinstance(value, str) or "${" not in value:
        return value

    def _lookup(match: re.Match) -> str:
        name, default = match.group(1), match.group(2)
        resolved = os.getenv(name)
        if resolved is None:
            if default is None:
                logger.warning(f"Environment variable {name} not set")
                return ""
            return default.strip()
        return resolved

    expanded = PLACEHOLDER.sub(_lookup, value).strip()
    return expanded or None


def drop_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: drop_nulls(item) for key, item in value.items() if item is not None}
    return value


class ConfigLoader:
    """
    Loads and validates the monitor configuration.

    The validated AppConfig is cached; reload() re-reads the file.
    """

    def __init__(self, config_dir: Optional[Path] = None, config_name: str = "config"):
        """
        Args:
            config_dir: Directory holding the YAML file (PROJECT_ROOT/config by default)
            config_name: File name without the .yaml suffix
        """
        self.config_dir = Path(config_dir) if config_dir else PROJECT_ROOT / "config"
        self.config_name = config_name
        self._config: Optional[AppConfig] = None
        logger.info(f"Config directory: {self.config_dir}")

    @property
    def path(self) -> Path:
        return self.config_dir / f"{self.config_name}.yaml"

    def read_yaml(self) -> Dict[str, Any]:
        """Raw YAML tree with placeholders expanded; empty when the file is missing."""
        if not self.path.exists():
            logger.warning(f"{self.path} not found, using defaults")
            return {}

        logger.debug(f"Reading {self.path}")
        with open(self.path, "r") as f:
            raw = yaml.safe_load(f) or {}
        return expand_placeholders(raw)

    def load_app_config(self, use_cache: bool = True) -> AppConfig:
        """
        Build the AppConfig.

        Raises:
            pydantic.ValidationError: invalid or unknown settings
        """
        if use_cache and self._config is not None:
            return self._config

        data = drop_nulls(self.read_yaml())
        for env_name, (section, key) in ENV_OVERRIDES.items():
            if env_value := os.getenv(env_name):
                logger.debug(f"{env_name} overrides {section}.{key}")
                data.setdefault(section, {})[key] = env_value

        try:
            config = AppConfig(**data)
        except Exception as e:
            logger.error(f"Invalid configuration in {self.path}: {e}")
            raise

        logger.info(f"Configuration loaded from {self.path}")
        if use_cache:
            self._config = config
        return config

    def reload(self) -> AppConfig:
        logger.info("Reloading configuration")
        self._config = None
        return self.load_app_config()
