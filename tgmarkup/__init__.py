"""
tgmarkup - mode-agnostic Telegram message markup.

Build a message once as a tree of nodes, render it for any of Telegram's
parse modes (HTML, Markdown, MarkdownV2) or as plain text. Escaping happens
at the leaves during rendering, so text is never escaped twice and markup
never leaks out of user-provided strings.

Usage:
    from tgmarkup import bold, group, link, pre, render, renderMessage

    tree = group(bold("Build #42"), " passed\\n", pre("print(1)", "py"))
    render(tree, "MarkdownV2")    # '*Build \\\\#42* passed\\n```python\\nprint(1)\\n```'
    render(tree, "HTML")          # '<b>Build #42</b> passed\\n<pre><code class="language-python">...'

    message = renderMessage(tree, "HTML")
    await bot.send_message(chat_id=chatId, **message.toSendKwargs())
"""

from .ast_nodes import (
    NODE_CLASSES,
    CodeNode,
    EmojiNode,
    GroupNode,
    LinkNode,
    Node,
    NodeType,
    PreNode,
    QuoteNode,
    TextNode,
    WrapNode,
)
from .builders import (
    NodeLike,
    asNode,
    bold,
    code,
    customEmoji,
    expandableQuote,
    group,
    italic,
    link,
    mention,
    pre,
    quote,
    spoiler,
    strike,
    text,
    underline,
)
from .constants import VERSION, Mode, WrapStyle
from .escaping import EscapeContext, escape, escapeAttribute, escapeCode, escapeText, escapeUrl, unescapeText
from .exceptions import ConfigurationError, InvalidNodeError, TgMarkupError, UnsupportedLanguageError
from .languages import (
    Language,
    LanguageRegistry,
    getDefaultRegistry,
    mustNormalizeLanguage,
    normalizeLanguage,
    supportedLanguages,
)
from .message import RenderedMessage, renderMessage
from .renderer import MarkupRenderer, render

__version__ = VERSION

__all__ = [
    # Nodes
    "Node",
    "NodeType",
    "NODE_CLASSES",
    "TextNode",
    "CodeNode",
    "PreNode",
    "GroupNode",
    "WrapNode",
    "LinkNode",
    "EmojiNode",
    "QuoteNode",
    # Builders
    "NodeLike",
    "asNode",
    "text",
    "code",
    "pre",
    "group",
    "bold",
    "italic",
    "underline",
    "strike",
    "spoiler",
    "link",
    "mention",
    "customEmoji",
    "quote",
    "expandableQuote",
    # Modes and escaping
    "Mode",
    "WrapStyle",
    "EscapeContext",
    "escape",
    "escapeText",
    "escapeUrl",
    "escapeCode",
    "escapeAttribute",
    "unescapeText",
    # Languages
    "Language",
    "LanguageRegistry",
    "getDefaultRegistry",
    "normalizeLanguage",
    "mustNormalizeLanguage",
    "supportedLanguages",
    # Rendering
    "MarkupRenderer",
    "render",
    "RenderedMessage",
    "renderMessage",
    # Errors
    "TgMarkupError",
    "InvalidNodeError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "__version__",
]
