"""
Logging utilities for tgmarkup.

Configuration comes from the ``[logging]`` table of the TOML config:

    [logging]
    level = "INFO"
    console = true
    file = "logs/tgmarkup.log"
    rotate = true

    [logging.logger."tgmarkup.languages"]
    level = "DEBUG"
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def getLogLevelByStr(levelStr: str, default: Optional[int] = None) -> Optional[int]:
    """Get log level by string, e.g. "debug" -> logging.DEBUG."""
    level = getattr(logging, str(levelStr).upper(), None)
    if not isinstance(level, int):
        logger.error(f"Invalid log level '{levelStr}'")
        return default
    return level


def _makeFileHandler(logFile: str, rotate: bool) -> logging.Handler:
    logPath = Path(logFile)
    logPath.parent.mkdir(parents=True, exist_ok=True)
    if rotate:
        return TimedRotatingFileHandler(
            filename=logFile,
            when="midnight",
            interval=1,
            backupCount=7,
            encoding="utf-8",
        )
    return logging.FileHandler(logFile, encoding="utf-8")


def configureLogger(localLogger: logging.Logger, config: Dict[str, Any]) -> None:
    """Configure individual logger from config file settings."""

    if "propagate" in config:
        localLogger.propagate = bool(config["propagate"])

    if "level" in config:
        logLevel = getLogLevelByStr(config["level"])
        if logLevel is not None:
            localLogger.setLevel(logLevel)

    logLevel = localLogger.getEffectiveLevel()
    formatter = logging.Formatter(config.get("format", DEFAULT_LOG_FORMAT))

    # Reconfiguring must not duplicate output
    for handler in localLogger.handlers[:]:
        localLogger.removeHandler(handler)

    if config.get("console", False):
        consoleLogLevel = logLevel
        if "console-level" in config:
            consoleLogLevel = getLogLevelByStr(config["console-level"], logLevel) or logLevel
        consoleHandler = logging.StreamHandler()
        consoleHandler.setLevel(consoleLogLevel)
        consoleHandler.setFormatter(formatter)
        localLogger.addHandler(consoleHandler)
        logger.debug(f"Logging {localLogger.name} to console, logLevel: {consoleLogLevel}")

    if "file" in config:
        logFile = config["file"]
        try:
            fileHandler = _makeFileHandler(logFile, bool(config.get("rotate", False)))
        except OSError as e:
            logger.error(f"Failed to setup file logging for {localLogger.name}: {e}")
        else:
            fileLogLevel = logLevel
            if "file-level" in config:
                fileLogLevel = getLogLevelByStr(config["file-level"], logLevel) or logLevel
            fileHandler.setLevel(fileLogLevel)
            fileHandler.setFormatter(formatter)
            localLogger.addHandler(fileHandler)
            logger.debug(f"Logging {localLogger.name} to file: {logFile}, logLevel: {fileLogLevel}")


def initLogging(config: Dict[str, Any]) -> None:
    """Configure logging from config file settings."""
    rootLogger = logging.getLogger()
    rootLogger.setLevel(logging.INFO)

    configureLogger(rootLogger, config)
    logLevel = rootLogger.getEffectiveLevel()

    # python-telegram-bot and its HTTP client are chatty below WARNING
    if logLevel < logging.WARNING:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("telegram").setLevel(logging.WARNING)

    for loggerName, loggerConfig in config.get("logger", {}).items():
        logger.debug(f"Configuring logger '{loggerName}' with config {loggerConfig}")
        configureLogger(logging.getLogger(loggerName), loggerConfig)

    logger.debug(f"Logging configured: root level={logging.getLevelName(logLevel)}")
