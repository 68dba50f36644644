"""
Telegram Markup Constants

This module contains the output modes, wrap styles, escape character sets and
marker tables shared by the escaping engine and the renderer.
"""

import logging
import re
from enum import StrEnum
from typing import Any, Dict, Final, Optional, Self, Tuple

from telegram.constants import ParseMode

logger = logging.getLogger(__name__)

VERSION: Final[str] = "1.0.0"


class Mode(StrEnum):
    """Target markup dialect, selected at render time only.

    Values of the three rich modes match Telegram's ``parse_mode`` literals
    exactly. Everything else collapses into PLAIN, the passthrough mode.
    """

    HTML = "HTML"
    MARKDOWN = "Markdown"
    MARKDOWN_V2 = "MarkdownV2"
    PLAIN = "plain"

    @classmethod
    def fromValue(cls, value: Any) -> Self:
        """Resolve a Mode, ParseMode or string into a Mode (exact match), defaulting to PLAIN.

        Args:
            value: Anything the caller passed as a mode selector

        Returns:
            Matching mode, or Mode.PLAIN if the value isn't one of the known dialect names
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(str.__str__(value))
            except ValueError:
                pass
        return cls.PLAIN

    def toTelegram(self) -> Optional[ParseMode]:
        match self:
            case Mode.HTML:
                return ParseMode.HTML
            case Mode.MARKDOWN:
                return ParseMode.MARKDOWN
            case Mode.MARKDOWN_V2:
                return ParseMode.MARKDOWN_V2
            case Mode.PLAIN:
                return None

        logger.error(f"Unexpected Mode: {self}")
        return None

    def isLightweight(self) -> bool:
        """Whether this is one of the Markdown flavours."""
        return self in (Mode.MARKDOWN, Mode.MARKDOWN_V2)


class WrapStyle(StrEnum):
    """Inline styles that surround their children with an open/close marker pair."""

    BOLD = "bold"
    """*bold*"""
    ITALIC = "italic"
    """_italic_"""
    UNDERLINE = "underline"
    """__underline__ (MarkdownV2 only among Markdown flavours)"""
    STRIKE = "strike"
    """~strike~ (MarkdownV2 only among Markdown flavours)"""
    SPOILER = "spoiler"
    """||spoiler|| (MarkdownV2 only among Markdown flavours)"""


# Characters escaped in plain text, per mode
ESCAPE_CHARS_HTML: Final[str] = "&<>"
ESCAPE_CHARS_HTML_ATTRIBUTE: Final[str] = "&<>\"'"
ESCAPE_CHARS_MARKDOWN: Final[str] = "_*`["
ESCAPE_CHARS_MARKDOWN_V2: Final[str] = "\\_*[]()~`>#+-=|{}.!"

# Characters escaped inside link targets
ESCAPE_CHARS_MARKDOWN_URL: Final[str] = "\\)"
ESCAPE_CHARS_MARKDOWN_V2_URL: Final[str] = "\\)("

# Characters escaped inside inline code and fenced blocks (Markdown flavours)
ESCAPE_CHARS_CODE: Final[str] = "\\`"

HTML_ENTITIES: Final[Dict[str, str]] = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#x27;",
}

# Open/close markers for every wrap style; an empty pair means the dialect can't express it
WRAP_MARKERS: Final[Dict[WrapStyle, Dict[Mode, Tuple[str, str]]]] = {
    WrapStyle.BOLD: {
        Mode.HTML: ("<b>", "</b>"),
        Mode.MARKDOWN: ("*", "*"),
        Mode.MARKDOWN_V2: ("*", "*"),
    },
    WrapStyle.ITALIC: {
        Mode.HTML: ("<i>", "</i>"),
        Mode.MARKDOWN: ("_", "_"),
        Mode.MARKDOWN_V2: ("_", "_"),
    },
    WrapStyle.UNDERLINE: {
        Mode.HTML: ("<u>", "</u>"),
        Mode.MARKDOWN_V2: ("__", "__"),
    },
    WrapStyle.STRIKE: {
        Mode.HTML: ("<s>", "</s>"),
        Mode.MARKDOWN_V2: ("~", "~"),
    },
    WrapStyle.SPOILER: {
        Mode.HTML: ('<span class="tg-spoiler">', "</span>"),
        Mode.MARKDOWN_V2: ("||", "||"),
    },
}
NO_MARKERS: Final[Tuple[str, str]] = ("", "")

USER_LINK_PREFIX: Final[str] = "tg://user?id="
CODE_LANGUAGE_CLASS_PREFIX: Final[str] = "language-"
CODE_FENCE: Final[str] = "```"
QUOTE_MARKER: Final[str] = ">"

# Canonical language tags end up inside a fence line or a class attribute
LANGUAGE_TAG_PATTERN: Final[re.Pattern[str]] = re.compile(r"[a-z0-9+#-]+")

# Telegram reads "__" greedily as underline and ignores a \r between markers
MARKDOWN_V2_MARKER_SEPARATOR: Final[str] = "\r"
