"""
================================================================================
Environment Configuration
================================================================================

YAML-based UI test configuration with per-environment sections and
environment variable override support.

Features:
    - Per-environment sections (dev, staging, prod) selected by `environment`
    - Optional local override file for secrets (config.local.yaml)
    - Environment variable override (DEV_URL overrides dev.url)
    - Documented defaults for every setting: a missing key is never an error

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file paths
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"
LOCAL_CONFIG_NAME = "config.local.yaml"

DEFAULT_ENVIRONMENT = "dev"

# Per-environment defaults (looked up as "<env>.<key>")
ENVIRONMENT_DEFAULTS: Dict[str, Any] = {
    "url": "https://practicetestautomation.com/practice-test-login/",
    "browser": "chrome",
    "headless": True,
    "implicit_wait": 10.0,
    "explicit_wait": 15.0,
    "page_wait": 2000,
    "valid.username": "student",
    "valid.password": "Password123",
    "invalid.username": "invalidUser",
    "invalid.password": "invalidPassword",
}

# Named locators in "strategy:value" form
DEFAULT_LOCATORS: Dict[str, str] = {
    "username": "id:username",
    "password": "id:password",
    "submit": "id:submit",
    "success": "className:post-title",
    "error": "id:error",
    "menu_items": "xpath://ul[@id='menu-primary-items']//a",
}


class ConfigurationError(Exception):
    """Raised when configuration loading fails."""
    pass


@dataclass(frozen=True)
class Credentials:
    """Username/password pair for login scenarios."""
    username: str
    password: str


class EnvironmentConfig:
    """
    Flat key/value access to UI test settings.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (DEV_URL)
        2. config.local.yaml
        3. config.yaml
        4. Documented defaults

    Usage:
        >>> config = EnvironmentConfig()
        >>> config.base_url
        'https://practicetestautomation.com/practice-test-login/'
        >>> config.locator("username")
        'id:username'
        >>> config.get("slack.enabled", False)
        False

    Environment Variable Mapping:
        - environment -> ENVIRONMENT
        - dev.url -> DEV_URL
        - dev.locators.username -> DEV_LOCATORS_USERNAME
        - slack.webhook_url -> SLACK_WEBHOOK_URL
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environment: Optional[str] = None,
    ) -> None:
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
            environment: Active environment. Defaults to the `environment`
                        setting, then "dev".
        """
        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load_config()
        self._environment = str(environment or self.get("environment", DEFAULT_ENVIRONMENT)).strip().lower()
        logger.info(f"Environment: {self._environment}")

    def _load_config(self) -> None:
        """Load the main configuration file and the optional local overrides."""
        self._config = self._read_yaml(self._config_path, required=False)
        if not self._config:
            logger.warning(
                f"Configuration file not found or empty: {self._config_path}. "
                f"Using defaults and environment variables only."
            )

        local_path = self._config_path.with_name(LOCAL_CONFIG_NAME)
        local = self._read_yaml(local_path, required=False)
        if local:
            _deep_merge(self._config, local)
            logger.info(f"Loaded local configuration overrides from {local_path.name}")

    @staticmethod
    def _read_yaml(path: Path, required: bool) -> Dict[str, Any]:
        if not path.exists():
            if required:
                raise ConfigurationError(f"Configuration file not found: {path}")
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration root must be a mapping: {path}")
        logger.debug(f"Loaded configuration from: {path}")
        return data

    # =========================================================================
    # Generic access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return _convert_type(env_value, default)

        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def env_get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting of the active environment ("<env>.<key>").

        Falls back to ENVIRONMENT_DEFAULTS when `default` is None.
        """
        if default is None:
            default = ENVIRONMENT_DEFAULTS.get(key)
        return self.get(f"{self._environment}.{key}", default)

    # =========================================================================
    # Environment
    # =========================================================================

    @property
    def environment(self) -> str:
        return self._environment

    def set_environment(self, environment: str) -> None:
        """Switch the active environment at runtime."""
        self._environment = str(environment).strip().lower()
        logger.info(f"Environment changed to: {self._environment}")

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    # =========================================================================
    # Typed settings
    # =========================================================================

    @property
    def base_url(self) -> str:
        url = self.env_get("url")
        if not url:
            logger.warning(f"URL not found for environment: {self._environment}")
            return ENVIRONMENT_DEFAULTS["url"]
        return str(url)

    @property
    def browser(self) -> str:
        return str(self.env_get("browser"))

    @property
    def headless(self) -> bool:
        value = self.env_get("headless")
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes", "on")
        return bool(value)

    @property
    def implicit_wait(self) -> float:
        """Implicit wait in seconds."""
        return self._number("implicit_wait", float)

    @property
    def explicit_wait(self) -> float:
        """Explicit wait budget in seconds."""
        return self._number("explicit_wait", float)

    @property
    def page_wait_ms(self) -> int:
        """Page settle delay in milliseconds."""
        return self._number("page_wait", int)

    @property
    def valid_credentials(self) -> Credentials:
        return Credentials(
            username=str(self.env_get("valid.username")),
            password=str(self.env_get("valid.password")),
        )

    @property
    def invalid_credentials(self) -> Credentials:
        return Credentials(
            username=str(self.env_get("invalid.username")),
            password=str(self.env_get("invalid.password")),
        )

    def locator(self, name: str) -> Optional[str]:
        """
        Locator string for a named element.

        Returns None for names with neither a configured value nor a default.
        """
        return self.env_get(f"locators.{name}", DEFAULT_LOCATORS.get(name))

    def _number(self, key: str, kind: type) -> Any:
        default = ENVIRONMENT_DEFAULTS[key]
        value = self.env_get(key)
        try:
            return kind(value)
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for {self._environment}.{key}: {value!r}. Using {default}")
            return kind(default)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Merge `override` into `base` in place, recursing into mappings."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def _convert_type(value: str, reference: Any) -> Any:
    """
    Convert string value to match reference type.

    Used for environment variables which are always strings.
    """
    if reference is None:
        return value

    if isinstance(reference, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value

    return value


__all__ = [
    "EnvironmentConfig",
    "ConfigurationError",
    "Credentials",
    "DEFAULT_LOCATORS",
    "ENVIRONMENT_DEFAULTS",
]
