"""TOML configuration for tgmarkup."""

from .manager import ConfigManager, mergeConfigs, substituteEnvVars

__all__ = [
    "ConfigManager",
    "mergeConfigs",
    "substituteEnvVars",
]
