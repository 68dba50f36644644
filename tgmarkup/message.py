"""
Rendered message payloads.

Pairs the rendered text with the parse mode it was rendered for, so the two
can't get out of sync on the way to Bot.send_message().
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from telegram.constants import MessageLimit, ParseMode

from .ast_nodes import Node
from .constants import Mode
from .renderer import render


@dataclass(frozen=True)
class RenderedMessage:
    """Text of an outbound message plus the mode it was rendered in."""

    text: str
    mode: Mode

    @property
    def parseMode(self) -> Optional[ParseMode]:
        """Telegram parse_mode value, None for plain text."""
        return self.mode.toTelegram()

    def isTooLong(self, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> bool:
        """Whether the text exceeds Telegram's message length limit."""
        return len(self.text) > limit

    def toSendKwargs(self) -> Dict[str, Any]:
        """Keyword arguments for telegram.Bot.send_message() (chat_id not included)."""
        ret: Dict[str, Any] = {"text": self.text}
        if self.parseMode is not None:
            ret["parse_mode"] = self.parseMode
        return ret


def renderMessage(node: Node, mode: Any) -> RenderedMessage:
    """Render tree for mode and wrap result into RenderedMessage."""
    resolvedMode = Mode.fromValue(mode)
    return RenderedMessage(text=render(node, resolvedMode), mode=resolvedMode)
