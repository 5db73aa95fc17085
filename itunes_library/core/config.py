"""
Configuration management for the iTunes library parser.

This module provides centralized configuration loading and access,
supporting YAML files and environment variable overrides, and builds the
immutable settings object handed to each parser.
"""

import copy
import os
import threading
from dataclasses import dataclass, field
from datetime import timezone, tzinfo
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from loguru import logger

DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DEFAULT_URL_SCHEMES = frozenset({"file", "http", "https", "ftp"})


def _load_zone(name: str) -> Optional[tzinfo]:
    """Look up a time zone by name, or None if it is unknown."""
    if name.upper() in ("UTC", "GMT", "Z"):
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return None


class MissingTrackPolicy(str, Enum):
    """What to do with a playlist reference to an unknown track ID."""

    DROP = "drop"
    NULL = "null"
    FAIL = "fail"


@dataclass(frozen=True)
class ParserSettings:
    """Immutable settings passed explicitly to a parser and its collaborators."""

    date_format: str = DEFAULT_DATE_FORMAT
    timezone: str = "UTC"
    missing_track_policy: MissingTrackPolicy = MissingTrackPolicy.DROP
    url_schemes: FrozenSet[str] = field(default=DEFAULT_URL_SCHEMES)

    def __post_init__(self) -> None:
        if _load_zone(self.timezone) is None:
            logger.warning(f"⚠️  Unknown timezone '{self.timezone}', using 'UTC'")
            object.__setattr__(self, "timezone", "UTC")

    @property
    def tzinfo(self) -> tzinfo:
        return _load_zone(self.timezone) or timezone.utc

    @classmethod
    def from_config(cls, config: "ConfigurationManager") -> "ParserSettings":
        """Build settings from the ``parser`` section of a configuration."""
        policy = config.get("parser.missing_track_policy", "drop", str)
        try:
            missing_track_policy = MissingTrackPolicy(str(policy).lower())
        except ValueError:
            logger.warning(
                f"⚠️  Unknown missing_track_policy '{policy}', using 'drop'"
            )
            missing_track_policy = MissingTrackPolicy.DROP

        schemes = config.get("parser.url_schemes") or sorted(DEFAULT_URL_SCHEMES)
        if isinstance(schemes, str):
            schemes = schemes.split(",")
        return cls(
            date_format=config.get("parser.date_format", DEFAULT_DATE_FORMAT, str),
            timezone=config.get("parser.timezone", "UTC", str),
            missing_track_policy=missing_track_policy,
            url_schemes=frozenset(str(s).lower() for s in schemes),
        )


class ConfigurationManager:
    """
    Centralized configuration management.

    Loads configuration from a YAML file, applies environment variable
    overrides, and provides dot-path access to values.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the config YAML file (defaults to config.yml in project root)
        """
        self.config_path = config_path or self._find_config_file()
        self._base_config: Dict[str, Any] = {}
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _find_config_file(self) -> str:
        """Find the config.yml file, searching upwards from this package."""
        current_dir = Path(__file__).parent
        for _ in range(4):
            config_file = current_dir / "config.yml"
            if config_file.exists():
                return str(config_file)
            current_dir = current_dir.parent

        return "config.yml"

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                self._base_config = yaml.safe_load(f) or {}

            self._config = copy.deepcopy(self._base_config)

            if self._base_config.get("environment_overrides", {}).get("enabled"):
                self._apply_env_overrides()

            logger.debug(f"✅ Loaded configuration from {self.config_path}")

        except FileNotFoundError:
            logger.debug(
                f"Config file not found: {self.config_path}. Using built-in defaults."
            )
            self._base_config = {}
            self._config = {}
        except yaml.YAMLError as e:
            logger.error(
                f"❌ Error parsing config YAML: {e}. Using built-in defaults."
            )
            self._base_config = {}
            self._config = {}

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_config = self._base_config.get("environment_overrides", {})
        prefix = env_config.get("prefix", "ITL_")
        mappings = env_config.get("mappings", {})

        overrides_applied = 0
        for config_path, env_suffix in mappings.items():
            env_value = os.getenv(f"{prefix}{env_suffix}")

            if env_value is not None:
                converted_value = self._convert_env_value(env_value)
                self._set_nested_value(config_path, converted_value)
                overrides_applied += 1
                logger.debug(
                    f"🔧 Environment override: {config_path} = {converted_value}"
                )

        if overrides_applied:
            logger.debug(f"Applied {overrides_applied} environment overrides")

    def _convert_env_value(self, value: str) -> Union[str, int, float, bool]:
        """Convert environment variable string to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        elif value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        if "," in value:
            return [part.strip() for part in value.split(",") if part.strip()]  # type: ignore[return-value]

        return value

    def _set_nested_value(self, path: str, value: Any) -> None:
        """Set a nested configuration value using dot notation."""
        keys = path.split(".")
        current = self._config

        for key in keys[:-1]:
            if key not in current:
                current[key] = {}
            current = current[key]

        current[keys[-1]] = value

    def get(self, path: str, default: Any = None, type_hint: Optional[type] = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            path: Dot-separated path to the config value (e.g., 'parser.timezone')
            default: Default value if path doesn't exist
            type_hint: Optional type hint for return value

        Returns:
            Configuration value with optional type casting
        """
        current: Any = self._config

        try:
            for key in path.split("."):
                current = current[key]
        except (KeyError, TypeError):
            return default

        if current is None:
            return default

        if type_hint is not None:
            try:
                return type_hint(current)
            except (ValueError, TypeError):
                pass

        return current

    def get_section(self, section: str) -> Any:
        """Get an entire configuration section."""
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    @property
    def parser_settings(self) -> ParserSettings:
        """Get the parser settings described by this configuration."""
        return ParserSettings.from_config(self)

    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return {
            "level": self.get("logging.level", "INFO", str),
            "file": self.get("logging.file"),
        }


_config_instance: Optional[ConfigurationManager] = None
_config_lock = threading.Lock()


def get_config(config_path: Optional[str] = None) -> ConfigurationManager:
    """
    Get the global configuration instance using double-checked locking.

    Args:
        config_path: Path to config file (only used on first call)

    Returns:
        ConfigurationManager instance
    """
    global _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = ConfigurationManager(config_path)

    return _config_instance


def reset_config() -> None:
    """
    Reset the global configuration instance.

    This is primarily intended for unit tests to ensure clean state.
    """
    global _config_instance

    with _config_lock:
        _config_instance = None


def get_parser_settings() -> ParserSettings:
    """Get parser settings from the global configuration."""
    return get_config().parser_settings
