"""
Configuration management for tgmarkup.

Example config.toml:

    [logging]
    level = "INFO"
    console = true

    [render]
    mode = "MarkdownV2"
    check-length = true

    [languages.aliases]
    golang = "go"
    tf = "${TERRAFORM_LANGUAGE}"
"""

import logging
import os
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import tomli

from .. import utils
from ..constants import Mode
from ..exceptions import ConfigurationError
from ..languages import DEFAULT_ALIAS_OVERRIDES, LanguageRegistry

logger = logging.getLogger(__name__)

DEFAULT_RENDER_CONFIG: Dict[str, Any] = {
    "mode": Mode.MARKDOWN_V2.value,
    "check-length": True,
}


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace ${VAR} placeholder with environment variable value, keep placeholder if variable is unset."""
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ${VAR_NAME} placeholders in configuration values.

    Args:
        value: The configuration value to process. Can be a string, dict, list, or other type.

    Returns:
        The processed value: strings with placeholders replaced, dicts and lists
        rebuilt with substituted items, everything else unchanged
    """
    if isinstance(value, str):
        return re.sub(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}", replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


def mergeConfigs(baseConfig: Dict[str, Any], newConfig: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two configuration dictionaries, values from newConfig win."""
    merged = baseConfig.copy()

    for key, value in newConfig.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = mergeConfigs(merged[key], value)
        else:
            merged[key] = value

    return merged


class ConfigManager:
    """Loads tgmarkup configuration from TOML files."""

    def __init__(
        self,
        configPath: Optional[str] = None,
        configDirs: Optional[List[str]] = None,
        dotEnvFile: str = ".env",
    ):
        """Initialize ConfigManager with optional config file path and config directories.

        Args:
            configPath: Main TOML file; None means built-in defaults only
            configDirs: Directories scanned recursively for *.toml files merged over the main file
            dotEnvFile: dotenv file loaded (if present) before ${VAR} substitution
        """
        self.configPath = configPath
        self.configDirs = configDirs or []
        utils.load_dotenv(path=dotEnvFile)
        self.config: Dict[str, Any] = substituteEnvVars(self._loadConfig())

    def _findTomlFilesRecursive(self, directory: str) -> List[Path]:
        """Recursively find all .toml files in a directory, sorted for consistent ordering."""
        dirPath = Path(directory)

        if not dirPath.is_dir():
            logger.warning(f"Config directory {directory} does not exist or is not a directory, skipping")
            return []

        tomlFiles = sorted(path for path in dirPath.rglob("*.toml") if path.is_file())
        for tomlFile in tomlFiles:
            logger.debug(f"Found config file: {tomlFile}")
        return tomlFiles

    def _loadConfig(self) -> Dict[str, Any]:
        """Load main config file (if any) and merge configs from config directories over it.

        Raises:
            SystemExit: If the given main config file doesn't exist and no config directories
                are provided, or if the main config file can't be parsed
        """
        config: Dict[str, Any] = {}

        if self.configPath is not None:
            configFile = Path(self.configPath)
            if configFile.exists():
                try:
                    with open(configFile, "rb") as f:
                        config = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    logger.error(f"Failed to load configuration {self.configPath}: {e}")
                    sys.exit(1)
                logger.info(f"Loaded main config from {self.configPath}")
            elif not self.configDirs:
                logger.error(f"Configuration file {self.configPath} not found!")
                sys.exit(1)

        if self.configDirs:
            logger.info(f"Scanning {len(self.configDirs)} config directories for .toml files")

        for configDir in self.configDirs:
            for tomlFile in self._findTomlFilesRecursive(configDir):
                try:
                    with open(tomlFile, "rb") as f:
                        dirConfig = tomli.load(f)
                except (OSError, tomli.TOMLDecodeError) as e:
                    # Continue with other files instead of exiting
                    logger.error(f"Failed to load config file {tomlFile}: {e}")
                    continue

                config = mergeConfigs(config, dirConfig)
                logger.info(f"Merged config from {tomlFile}")

        return config

    def get(self, key: str, default=None) -> Any:
        """Get configuration value by key."""
        return self.config.get(key, default)

    def getTable(self, key: str) -> Dict[str, Any]:
        """Get configuration table by key, empty if absent.

        Raises:
            ConfigurationError: If the key holds something other than a table
        """
        table = self.get(key, {})
        if not isinstance(table, dict):
            raise ConfigurationError(f"[{key}] must be a table, got {type(table).__name__}")
        return table

    def getLoggingConfig(self) -> Dict[str, Any]:
        """Get logging-specific configuration."""
        return self.getTable("logging")

    def getRenderConfig(self) -> Dict[str, Any]:
        """Get render configuration, defaults filled in."""
        return mergeConfigs(DEFAULT_RENDER_CONFIG, self.getTable("render"))

    def getDefaultMode(self) -> Mode:
        """Get default render mode. Unknown mode names are reported and mean plain text."""
        modeName = self.getRenderConfig()["mode"]
        mode = Mode.fromValue(modeName)
        if mode == Mode.PLAIN and modeName != Mode.PLAIN.value:
            logger.warning(f"Unknown render mode {modeName!r} in config, falling back to plain text")
        return mode

    def getLanguageOverrides(self) -> Dict[str, str]:
        """Get extra alias -> language overrides from [languages.aliases].

        Raises:
            ConfigurationError: If [languages] or [languages.aliases] isn't a table of strings
        """
        aliases = self.getTable("languages").get("aliases", {})
        if not isinstance(aliases, dict):
            raise ConfigurationError(f"[languages.aliases] must be a table, got {type(aliases).__name__}")
        for alias, target in aliases.items():
            if not isinstance(target, str):
                raise ConfigurationError(f"[languages.aliases] {alias!r} must be a string, got {type(target).__name__}")
        return dict(aliases)

    def buildLanguageRegistry(self) -> LanguageRegistry:
        """Build language registry from the built-in table with built-in and configured overrides."""
        overrides = {**DEFAULT_ALIAS_OVERRIDES, **self.getLanguageOverrides()}
        return LanguageRegistry.fromTable(overrides=overrides)
