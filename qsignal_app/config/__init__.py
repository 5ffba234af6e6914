"""Configuration defaults, loading and validation."""

from .defaults import DefaultConfig, EngineParams, get_default_config
from .loader import ConfigLoader
from .validation import ConfigValidator, ValidationError

__all__ = [
    "ConfigLoader",
    "ConfigValidator",
    "DefaultConfig",
    "EngineParams",
    "ValidationError",
    "get_default_config",
]
