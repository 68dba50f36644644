"""
Telegram Markup Exceptions

Rendering itself never fails: every node has a defined output in every mode.
These exceptions cover misuse that is caught earlier, while a tree is being
built, a language is being resolved or configuration is being read.
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class TgMarkupError(Exception):
    """Base exception class for all tgmarkup errors.

    Attributes:
        message: Human-readable error message
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        logger.debug(f"{self.__class__.__name__}: {message}")

    def __str__(self) -> str:
        return self.message


class InvalidNodeError(TgMarkupError, TypeError):
    """Raised when an AST node is constructed from values of the wrong kind.

    This typically occurs when:
    - A child isn't a node (nor a string that could become a text leaf)
    - A wrap style isn't a WrapStyle member
    - A mention is given a non-integer user id
    """


class UnsupportedLanguageError(TgMarkupError, ValueError):
    """Raised by strict language resolution when the input is not a known language or alias.

    Attributes:
        language: The input exactly as the caller supplied it
    """

    def __init__(self, language: Optional[str], message: Optional[str] = None) -> None:
        self.language = language
        super().__init__(message or f"unsupported language {language!r} (see libprisma Supported languages)")


class ConfigurationError(TgMarkupError):
    """Raised when a configuration value has the wrong shape."""
