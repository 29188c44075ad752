"""Configuration models and exceptions for the event dispatcher."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE_SUFFIX = "ed"

ENV_NAMESPACE_SUFFIX = "EVENT_DISPATCHER_NAMESPACE_SUFFIX"
ENV_LOG_LEVEL = "EVENT_DISPATCHER_LOG_LEVEL"


# --- CUSTOM EXCEPTIONS ---

class EventDispatcherError(Exception):
    """Base exception for event dispatcher errors."""


class ConfigError(EventDispatcherError):
    """Configuration loading error."""


class ScenarioError(ConfigError):
    """Trace scenario file is malformed or references unknown nodes."""


class InvalidListenerError(EventDispatcherError, TypeError):
    """Listener passed to add_event_listener is not callable."""


class CyclicParentError(EventDispatcherError):
    """A parent chain loops back onto itself."""


class BridgeError(EventDispatcherError):
    """Element cannot receive native events."""


# --- CONFIGURATION DATACLASSES ---

@dataclass
class DispatcherConfig:
    """Configuration for dispatch behaviour."""
    dom_namespace_suffix: str = DEFAULT_NAMESPACE_SUFFIX


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str = "INFO"


# --- HELPER FUNCTIONS ---

def safe_load_dataclass(dclass_type, data: dict, section_name: str):
    """Safely load a dataclass from a dictionary.

    Ignores unknown keys and logs warnings for them.

    Args:
        dclass_type: Dataclass type to instantiate
        data: Dictionary with configuration data
        section_name: Name of config section (for logging)

    Returns:
        Instance of dclass_type with filtered data

    Raises:
        ConfigError: If the section is not a mapping
    """
    if data is None:
        return dclass_type()
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{section_name}' must be a mapping.")

    valid_keys = {f.name for f in fields(dclass_type)}
    filtered_data = {}

    for k, v in data.items():
        if k in valid_keys:
            filtered_data[k] = v
        else:
            logger.warning(
                "Config warning: Unknown key '%s' in section '%s' ignored.",
                k, section_name
            )

    return dclass_type(**filtered_data)


@dataclass
class AppConfig:
    """Main application configuration container."""
    dispatcher: DispatcherConfig = field(default_factory=DispatcherConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> 'AppConfig':
        """Build a configuration with every section at its defaults."""
        return cls()

    @classmethod
    def load(cls, config_path: Path | str) -> 'AppConfig':
        """Load application configuration from a YAML file.

        Missing sections fall back to their defaults.

        Args:
            config_path: Path to config.yaml file

        Returns:
            AppConfig instance with loaded configuration

        Raises:
            ConfigError: If file not found or YAML parsing fails
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file '{path}' not found.")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML: {e}") from e

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file '{path}' must contain a mapping.")

        return cls(
            dispatcher=safe_load_dataclass(
                DispatcherConfig, data.get('dispatcher'), 'dispatcher'
            ),
            logging=safe_load_dataclass(LoggingConfig, data.get('logging'), 'logging')
        )

    def apply_env_overrides(self) -> 'AppConfig':
        """Override settings from EVENT_DISPATCHER_* environment variables.

        Returns:
            Self, for chaining after load()
        """
        suffix = os.getenv(ENV_NAMESPACE_SUFFIX)
        if suffix:
            logger.debug("Namespace suffix overridden from environment: %s", suffix)
            self.dispatcher.dom_namespace_suffix = suffix

        level = os.getenv(ENV_LOG_LEVEL)
        if level:
            self.logging.level = level

        return self
