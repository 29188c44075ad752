"""Configuration package for the event dispatcher."""

from .models import (
    AppConfig,
    DispatcherConfig,
    LoggingConfig,
    EventDispatcherError,
    ConfigError,
    ScenarioError,
    InvalidListenerError,
    CyclicParentError,
    BridgeError,
    DEFAULT_NAMESPACE_SUFFIX,
    safe_load_dataclass,
)

__all__ = [
    'AppConfig',
    'DispatcherConfig',
    'LoggingConfig',
    'EventDispatcherError',
    'ConfigError',
    'ScenarioError',
    'InvalidListenerError',
    'CyclicParentError',
    'BridgeError',
    'DEFAULT_NAMESPACE_SUFFIX',
    'safe_load_dataclass',
]
