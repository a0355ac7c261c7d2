"""Configuration loading (YAML + JSON schema + environment overrides)."""

from .loader import ConfigError, ConvertConfig, load_config, resolve_config

__all__ = [
    "ConfigError",
    "ConvertConfig",
    "load_config",
    "resolve_config",
]
