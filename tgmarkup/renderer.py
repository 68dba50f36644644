"""
Renderer for Telegram markup AST.

This module turns a node tree into the textual payload of a message for one of
Telegram's parse modes (HTML, Markdown, MarkdownV2) or into plain text.

Only leaves escape: a Text leaf escapes its content, code leaves apply the
narrower code escaping, and every other node adds its markers around output
its children already produced. Nothing is escaped twice.

Capabilities a dialect lacks degrade silently:

    =========================  ==========  ===============  ================
    Capability                 HTML        Markdown         MarkdownV2
    =========================  ==========  ===============  ================
    Underline/Strike/Spoiler   yes         no markers       yes
    Expandable quote           yes         plain quote      plain quote
    Code block language        class attr  ignored          fence suffix
    Custom emoji               tg-emoji    fallback text    fallback text
    =========================  ==========  ===============  ================

MarkdownV2 reads ``__`` greedily as underline, so an italic marker directly
followed by another underscore marker gets a carriage return in between,
which Telegram ignores.
"""

from typing import Any, Iterable, List, Tuple, assert_never

from .ast_nodes import (
    NODE_CLASSES,
    CodeNode,
    EmojiNode,
    GroupNode,
    LinkNode,
    Node,
    PreNode,
    QuoteNode,
    TextNode,
    WrapNode,
)
from .constants import (
    CODE_FENCE,
    CODE_LANGUAGE_CLASS_PREFIX,
    MARKDOWN_V2_MARKER_SEPARATOR,
    NO_MARKERS,
    QUOTE_MARKER,
    WRAP_MARKERS,
    Mode,
)
from .escaping import escapeAttribute, escapeCode, escapeText, escapeUrl
from .exceptions import InvalidNodeError


class MarkupRenderer:
    """
    Renderer bound to one target mode.

    It keeps no state besides the mode, so one instance may render any number
    of trees, from any number of threads.
    """

    def __init__(self, mode: Any):
        """
        Initialize the renderer.

        Args:
            mode: Target mode (Mode, telegram ParseMode or string); unknown values mean plain text
        """
        self.mode = Mode.fromValue(mode)

    def render(self, node: Node) -> str:
        """
        Render a node tree to string.

        Args:
            node: Root node of the tree

        Returns:
            Text ready to be sent with this renderer's parse mode
        """
        if not isinstance(node, NODE_CLASSES):
            raise InvalidNodeError(f"Expected AST node as root, got {type(node).__name__}")
        return self._renderNode(node)

    def _renderNode(self, node: Node) -> str:
        """Render a single AST node."""
        match node:
            case TextNode():
                return escapeText(self.mode, node.content)
            case CodeNode():
                return self._renderCode(node)
            case PreNode():
                return self._renderPre(node)
            case GroupNode():
                return self._renderChildren(node.children)
            case WrapNode():
                return self._renderWrap(node)
            case LinkNode():
                return self._renderLink(node)
            case EmojiNode():
                return self._renderEmoji(node)
            case QuoteNode():
                return self._renderQuote(node)
            case _:
                assert_never(node)

    def _renderChildren(self, children: Tuple[Node, ...]) -> str:
        """Render all children and return concatenated result."""
        return self._concat(self._renderNode(child) for child in children)

    def _concat(self, parts: Iterable[str]) -> str:
        """Concatenate rendered parts, keeping adjacent MarkdownV2 underscore markers apart."""
        if self.mode != Mode.MARKDOWN_V2:
            return "".join(parts)
        ret = ""
        for part in parts:
            if part.startswith("_") and _endsWithItalicMarker(ret):
                ret += MARKDOWN_V2_MARKER_SEPARATOR
            ret += part
        return ret

    def _renderCode(self, node: CodeNode) -> str:
        content = escapeCode(self.mode, node.content)
        if self.mode == Mode.HTML:
            return f"<code>{content}</code>"
        if self.mode.isLightweight():
            return f"`{content}`"
        return content

    def _renderPre(self, node: PreNode) -> str:
        content = escapeCode(self.mode, node.content)
        match self.mode:
            case Mode.HTML:
                if node.language:
                    classAttr = escapeAttribute(CODE_LANGUAGE_CLASS_PREFIX + node.language)
                    return f'<pre><code class="{classAttr}">{content}</code></pre>'
                return f"<pre>{content}</pre>"
            case Mode.MARKDOWN:
                # Legacy Markdown has no language tag syntax
                return f"{CODE_FENCE}\n{content}\n{CODE_FENCE}"
            case Mode.MARKDOWN_V2:
                return f"{CODE_FENCE}{node.language or ''}\n{content}\n{CODE_FENCE}"
        return content

    def _renderWrap(self, node: WrapNode) -> str:
        openMarker, closeMarker = WRAP_MARKERS[node.style].get(self.mode, NO_MARKERS)
        return self._concat((openMarker, self._renderChildren(node.children), closeMarker))

    def _renderLink(self, node: LinkNode) -> str:
        label = self._renderNode(node.label)
        if self.mode == Mode.HTML:
            return f'<a href="{escapeUrl(self.mode, node.target)}">{label}</a>'
        if self.mode.isLightweight():
            return f"[{label}]({escapeUrl(self.mode, node.target)})"
        return f"{label} ({node.target})"

    def _renderEmoji(self, node: EmojiNode) -> str:
        if self.mode == Mode.HTML:
            emojiId = escapeAttribute(node.emojiId)
            return f'<tg-emoji emoji-id="{emojiId}">{escapeText(self.mode, node.fallback)}</tg-emoji>'
        return escapeText(self.mode, node.fallback)

    def _renderQuote(self, node: QuoteNode) -> str:
        lines: List[str] = [self._renderNode(line) for line in node.lines]
        if self.mode == Mode.HTML:
            openTag = "<blockquote expandable>" if node.expandable else "<blockquote>"
            return openTag + "\n".join(lines) + "</blockquote>"
        if self.mode.isLightweight():
            # Every physical line needs its own marker, multi-line leaves included
            return "\n".join(QUOTE_MARKER + part for line in lines for part in line.split("\n"))
        return "\n".join(lines)


def _endsWithItalicMarker(rendered: str) -> bool:
    """
    Check whether MarkdownV2 output ends with an italic marker.

    Text escapes every underscore, so a trailing run of unescaped underscores is
    made of markers. Underline markers come in pairs and an italic marker is
    always last in a run, so an odd run ends with an italic one.
    """
    head = rendered.rstrip("_")
    markers = len(rendered) - len(head)
    if (len(head) - len(head.rstrip("\\"))) % 2 == 1:
        # First underscore of the run is escaped text
        markers -= 1
    return markers % 2 == 1


def render(node: Node, mode: Any) -> str:
    """
    Render AST to string according to target mode.

    Args:
        node: Root node of the tree
        mode: Target mode (Mode, telegram ParseMode or one of "HTML", "Markdown", "MarkdownV2");
            any other value renders plain text without markup

    Returns:
        Rendered text
    """
    return MarkupRenderer(mode).render(node)
