"""
Per-mode escaping for Telegram markup.

Three content classes are escaped differently in every mode:

- text: prose inside Text leaves (and emoji fallbacks)
- url: link targets, which sit inside ``(...)`` or an ``href="..."`` attribute
- code: inline code spans and fenced blocks

Every policy is a translation table applied with a single ``str.translate``
call, so one input character is replaced at most once and nothing gets escaped
twice. For Telegram formatting rules, see
https://core.telegram.org/bots/api#formatting-options
"""

import html
import re
from enum import StrEnum
from typing import Any, Dict, Final, Pattern

from .constants import (
    ESCAPE_CHARS_CODE,
    ESCAPE_CHARS_HTML,
    ESCAPE_CHARS_HTML_ATTRIBUTE,
    ESCAPE_CHARS_MARKDOWN,
    ESCAPE_CHARS_MARKDOWN_URL,
    ESCAPE_CHARS_MARKDOWN_V2,
    ESCAPE_CHARS_MARKDOWN_V2_URL,
    HTML_ENTITIES,
    Mode,
)


class EscapeContext(StrEnum):
    """Content class the escaped string is going to be embedded as."""

    TEXT = "text"
    URL = "url"
    CODE = "code"


def _backslashTable(chars: str) -> Dict[int, str]:
    return str.maketrans({char: f"\\{char}" for char in chars})


def _entityTable(chars: str) -> Dict[int, str]:
    return str.maketrans({char: HTML_ENTITIES[char] for char in chars})


_HTML_TEXT_TABLE: Final = _entityTable(ESCAPE_CHARS_HTML)
_HTML_ATTRIBUTE_TABLE: Final = _entityTable(ESCAPE_CHARS_HTML_ATTRIBUTE)
_CODE_TABLE: Final = _backslashTable(ESCAPE_CHARS_CODE)

_TEXT_TABLES: Final[Dict[Mode, Dict[int, str]]] = {
    Mode.HTML: _HTML_TEXT_TABLE,
    Mode.MARKDOWN: _backslashTable(ESCAPE_CHARS_MARKDOWN),
    Mode.MARKDOWN_V2: _backslashTable(ESCAPE_CHARS_MARKDOWN_V2),
}

_URL_TABLES: Final[Dict[Mode, Dict[int, str]]] = {
    Mode.HTML: _HTML_ATTRIBUTE_TABLE,
    Mode.MARKDOWN: _backslashTable(ESCAPE_CHARS_MARKDOWN_URL),
    Mode.MARKDOWN_V2: _backslashTable(ESCAPE_CHARS_MARKDOWN_V2_URL),
}

_CODE_TABLES: Final[Dict[Mode, Dict[int, str]]] = {
    Mode.HTML: _HTML_TEXT_TABLE,
    Mode.MARKDOWN: _CODE_TABLE,
    Mode.MARKDOWN_V2: _CODE_TABLE,
}

_UNESCAPE_PATTERNS: Final[Dict[Mode, Pattern[str]]] = {
    Mode.MARKDOWN: re.compile(r"\\([" + re.escape(ESCAPE_CHARS_MARKDOWN) + r"])"),
    Mode.MARKDOWN_V2: re.compile(r"\\([" + re.escape(ESCAPE_CHARS_MARKDOWN_V2) + r"])"),
}


def escapeText(mode: Any, text: str) -> str:
    """
    Escape plain text for the given mode.

    HTML escapes ``& < >``, Markdown escapes ``_ * ` [`` and MarkdownV2 escapes
    every punctuation character its grammar may treat as markup. Any other mode
    returns the text unchanged.

    Args:
        mode: Target mode (Mode, ParseMode or string)
        text: Text to escape

    Returns:
        Escaped text
    """
    table = _TEXT_TABLES.get(Mode.fromValue(mode))
    return text if table is None else text.translate(table)


def escapeUrl(mode: Any, url: str) -> str:
    """
    Escape a link target for the given mode.

    Markdown flavours escape the backslash and the parentheses that would end
    the ``(...)`` target, HTML escapes the value for use inside an attribute.
    """
    table = _URL_TABLES.get(Mode.fromValue(mode))
    return url if table is None else url.translate(table)


def escapeCode(mode: Any, code: str) -> str:
    """
    Escape code span / code block content for the given mode.

    Markdown flavours only escape the backslash and the backtick delimiter,
    HTML uses the regular text escaping.
    """
    table = _CODE_TABLES.get(Mode.fromValue(mode))
    return code if table is None else code.translate(table)


def escapeAttribute(value: str) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    return value.translate(_HTML_ATTRIBUTE_TABLE)


def escape(mode: Any, value: str, context: EscapeContext = EscapeContext.TEXT) -> str:
    """
    Escape a value for the given mode and content class.

    Args:
        mode: Target mode (Mode, ParseMode or string)
        value: Value to escape
        context: Content class ('text', 'url', 'code')

    Returns:
        Escaped value suitable for the specified context
    """
    match EscapeContext(context):
        case EscapeContext.URL:
            return escapeUrl(mode, value)
        case EscapeContext.CODE:
            return escapeCode(mode, value)
        case EscapeContext.TEXT:
            return escapeText(mode, value)


def unescapeText(mode: Any, text: str) -> str:
    """Reverse escapeText() for the given mode."""
    mode = Mode.fromValue(mode)
    if mode == Mode.HTML:
        return html.unescape(text)
    pattern = _UNESCAPE_PATTERNS.get(mode)
    return text if pattern is None else pattern.sub(r"\1", text)
