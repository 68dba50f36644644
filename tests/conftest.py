"""
Pytest configuration and common fixtures for tgmarkup tests.

All fixtures follow camelCase naming convention.
"""

import logging
from pathlib import Path
from typing import Callable, Generator

import pytest

from tgmarkup.languages import LanguageRegistry, getDefaultRegistry

# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def preserveLogging() -> Generator[None, None, None]:
    """
    Restore root and named loggers after each test.

    initLogging() replaces handlers of the root logger (and of configured
    loggers), which would otherwise leak between tests.
    """
    rootLogger = logging.getLogger()
    savedHandlers = rootLogger.handlers[:]
    savedLevel = rootLogger.level
    savedLoggers = {
        name: (logger.handlers[:], logger.level, logger.propagate)
        for name, logger in logging.Logger.manager.loggerDict.items()
        if isinstance(logger, logging.Logger)
    }

    yield

    for handler in rootLogger.handlers[:]:
        if handler not in savedHandlers:
            rootLogger.removeHandler(handler)
            handler.close()
    for handler in savedHandlers:
        if handler not in rootLogger.handlers:
            rootLogger.addHandler(handler)
    rootLogger.setLevel(savedLevel)

    for name, logger in logging.Logger.manager.loggerDict.items():
        if not isinstance(logger, logging.Logger):
            continue
        handlers, level, propagate = savedLoggers.get(name, ([], logging.NOTSET, True))
        for handler in logger.handlers[:]:
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)
        logger.propagate = propagate


# ============================================================================
# Language Registry Fixtures
# ============================================================================


@pytest.fixture
def defaultRegistry() -> LanguageRegistry:
    """
    Provide the registry built at import time from the libprisma table.

    Returns:
        LanguageRegistry: Shared default registry
    """
    return getDefaultRegistry()


@pytest.fixture
def smallTable() -> str:
    """
    Provide a small language table with well-formed, duplicated and malformed rows.

    Returns:
        str: Table text, rows are ``<display name>\\t<aliases csv>``
    """
    return "\n".join(
        [
            "Foo Lang\tfoo,foo,f",
            "Bar Lang\t bar , B2 ",
            "no tab separator here",
            "Too\tmany\tfields",
            "",
            "Empty aliases\t , ",
            "Baz\t,baz,bz",
        ]
    )


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def workDir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Run test inside empty temporary directory, so no stray .env file is picked up.

    Returns:
        Path: Temporary working directory
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def writeToml(workDir: Path) -> Callable[[str, str], Path]:
    """
    Provide helper writing TOML text into a file under the working directory.

    Example:
        def testConfig(writeToml):
            path = writeToml("config.toml", '[render]\\nmode = "HTML"\\n')
    """

    def _write(relativePath: str, content: str) -> Path:
        path = workDir / relativePath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
