"""
================================================================================
Configuration Loader
================================================================================

Harness settings from config/config.yaml, overridable per run through
environment variables.

Lookup order for a dotted key such as ``page_init.max_attempts``:
    1. Environment variable PAGE_INIT_MAX_ATTEMPTS (coerced to the type of
       the caller's default)
    2. The nested YAML value page_init -> max_attempts
    3. The caller's default

This lets CI switch browser or headless mode (BROWSER=firefox HEADLESS=true)
without touching the checked-in file.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """config.yaml exists but cannot be used (bad YAML, wrong shape)."""
    pass


def env_key_for(key: str) -> str:
    """``ui.base_url`` -> ``UI_BASE_URL``."""
    return key.upper().replace(".", "_")


def _coerce(raw: str, like: Any) -> Any:
    """Turn an env string into the type of ``like``; unparseable values stay strings."""
    if like is None:
        return raw
    if isinstance(like, bool):
        return raw.strip().lower() in _TRUE_VALUES
    for number_type in (int, float):
        if isinstance(like, number_type):
            try:
                return number_type(raw)
            except ValueError:
                return raw
    return raw


class ConfigLoader:
    """
    Process-wide view of the harness configuration.

    Every ``ConfigLoader()`` call returns the same instance, so the file is
    parsed once; tests call ``ConfigLoader.reset()`` to start over with a
    different file.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("page_init.max_attempts", 3)
        3
        >>> config.get_bool("headless")
        False
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read; DEFAULT_CONFIG_PATH when omitted.
                         Ignored once the singleton is initialized.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        if not self._config_path.is_file():
            logger.warning(
                f"No config file at {self._config_path}; "
                f"running on defaults and environment variables"
            )
            self._config = {}
            return

        try:
            data = yaml.safe_load(self._config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigurationError(f"{self._config_path} is not valid YAML: {e}") from e

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"{self._config_path} must contain a mapping at the top level, "
                f"found {type(data).__name__}"
            )
        self._config = data
        logger.debug(f"Configuration read from {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value for a dotted ``key``.

        Args:
            key: e.g. "page_init.attempt_timeout"
            default: Returned when neither env nor YAML define the key; its
                     type also decides how an env string is converted
        """
        raw = os.environ.get(env_key_for(key))
        if raw is not None:
            return _coerce(raw, default)

        node: Any = self._config
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Boolean value; "yes"/"on"/"1" strings from YAML count as true."""
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_VALUES
        return bool(value)

    def reload(self) -> None:
        """Re-read the same file."""
        self._load_config()
        logger.info(f"Configuration reloaded from {self._config_path}")

    @property
    def config_path(self) -> Path:
        return self._config_path

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton (tests only)."""
        cls._instance = None
        cls._config = {}


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "env_key_for",
]
