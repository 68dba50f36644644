"""
Builder functions for Telegram markup trees.

Every builder returns an immutable AST node; nothing is rendered until
tgmarkup.renderer.render() is called with a mode. Wherever a node is expected,
a plain string may be given instead and becomes a text leaf.

Example:
    >>> tree = group(bold("Status: "), "3 < 5", "\\n", link(italic("docs"), "https://example.com/"))
    >>> render(tree, "HTML")
    '<b>Status: </b>3 &lt; 5\\n<a href="https://example.com/"><i>docs</i></a>'
"""

from typing import Optional, Tuple, Union

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
from .constants import USER_LINK_PREFIX, WrapStyle
from .exceptions import InvalidNodeError
from .languages import LanguageRegistry, getDefaultRegistry

NodeLike = Union[Node, str]


def asNode(value: NodeLike) -> Node:
    """Return value if it already is a node, wrap strings into TextNode, reject anything else."""
    if isinstance(value, NODE_CLASSES):
        return value
    if isinstance(value, str):
        return TextNode(value)
    raise InvalidNodeError(f"Expected AST node or str, got {type(value).__name__}")


def _asNodes(values: Tuple[NodeLike, ...]) -> Tuple[Node, ...]:
    return tuple(asNode(value) for value in values)


def text(content: str) -> TextNode:
    """Create a text leaf, escaped according to the target mode at render time.

    Example:
        >>> render(text("2 * 2 = 4"), "MarkdownV2")
        '2 \\\\* 2 \\\\= 4'
    """
    return TextNode(content)


def code(content: str) -> CodeNode:
    """Create inline fixed-width code.

    In Markdown/MarkdownV2 only ` and \\ are escaped inside it.
    """
    return CodeNode(content)


def pre(content: str, language: Optional[str] = None, registry: Optional[LanguageRegistry] = None) -> PreNode:
    """Create a multi-line code block.

    Args:
        content: Code
        language: Language tag or alias for syntax highlighting (optional), e.g. "py" or Language.PYTHON
        registry: Registry used to resolve the language (default one if not given)

    Returns:
        Code block node carrying the canonical language tag

    Raises:
        UnsupportedLanguageError: If the language can't be resolved

    Example:
        >>> render(pre("print(1)", "py"), "MarkdownV2")
        '```python\\nprint(1)\\n```'
    """
    tag = None
    if language is not None:
        tag = (registry if registry is not None else getDefaultRegistry()).mustNormalize(language)
    return PreNode(content, tag)


def group(*children: NodeLike) -> GroupNode:
    """Concatenate children without additional markers."""
    return GroupNode(_asNodes(children))


def bold(*children: NodeLike) -> WrapNode:
    """Make children bold: <b>...</b> (HTML), *...* (Markdown/MarkdownV2)."""
    return WrapNode(WrapStyle.BOLD, _asNodes(children))


def italic(*children: NodeLike) -> WrapNode:
    """Make children italic: <i>...</i> (HTML), _..._ (Markdown/MarkdownV2)."""
    return WrapNode(WrapStyle.ITALIC, _asNodes(children))


def underline(*children: NodeLike) -> WrapNode:
    """Underline children: <u>...</u> (HTML), __...__ (MarkdownV2), nothing in legacy Markdown."""
    return WrapNode(WrapStyle.UNDERLINE, _asNodes(children))


def strike(*children: NodeLike) -> WrapNode:
    """Strike children through: <s>...</s> (HTML), ~...~ (MarkdownV2), nothing in legacy Markdown."""
    return WrapNode(WrapStyle.STRIKE, _asNodes(children))


def spoiler(*children: NodeLike) -> WrapNode:
    """Hide children under spoiler: <span class="tg-spoiler">...</span> (HTML), ||...|| (MarkdownV2)."""
    return WrapNode(WrapStyle.SPOILER, _asNodes(children))


def link(label: NodeLike, url: str) -> LinkNode:
    """Create a clickable link: <a href="...">label</a> (HTML), [label](url) (Markdown/MarkdownV2).

    Example:
        >>> render(link("Google", "https://google.com"), "Markdown")
        '[Google](https://google.com)'
    """
    return LinkNode(asNode(label), url)


def mention(label: NodeLike, userId: int) -> LinkNode:
    """Create a user mention by id, i.e. a link to tg://user?id=<userId>.

    Example:
        >>> render(mention("John", 12345), "HTML")
        '<a href="tg://user?id=12345">John</a>'
    """
    if isinstance(userId, bool) or not isinstance(userId, int):
        raise InvalidNodeError(f"mention: userId must be int, got {type(userId).__name__}")
    return LinkNode(asNode(label), f"{USER_LINK_PREFIX}{userId}")


def customEmoji(emojiId: str, fallback: str) -> EmojiNode:
    """Create a custom emoji (HTML only); other modes render the fallback text."""
    return EmojiNode(emojiId, fallback)


def quote(*lines: NodeLike) -> QuoteNode:
    """Create a block quote: <blockquote>...</blockquote> (HTML), every line prefixed with > otherwise."""
    return QuoteNode(_asNodes(lines))


def expandableQuote(*lines: NodeLike) -> QuoteNode:
    """Create an expandable block quote (HTML); Markdown flavours render a regular quote."""
    return QuoteNode(_asNodes(lines), expandable=True)
