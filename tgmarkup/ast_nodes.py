"""
AST Node Classes for Telegram markup.

This module defines the closed set of node variants a message is composed of.
Nodes are immutable: a tree is built bottom-up, rendered and thrown away, and
the same tree can be rendered into any mode (see tgmarkup.renderer).
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple, Union

from .constants import LANGUAGE_TAG_PATTERN, WrapStyle
from .exceptions import InvalidNodeError


class NodeType(StrEnum):
    """Enumeration of all AST node types."""

    TEXT = "text"
    CODE = "code"
    PRE = "pre"
    GROUP = "group"
    WRAP = "wrap"
    LINK = "link"
    EMOJI = "emoji"
    QUOTE = "quote"


def _checkString(nodeType: NodeType, name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidNodeError(f"{nodeType.value} node: {name} must be str, got {type(value).__name__}")


def _checkNodes(nodeType: NodeType, name: str, values: Iterable[Any]) -> Tuple["Node", ...]:
    if isinstance(values, (str, bytes)):
        raise InvalidNodeError(
            f"{nodeType.value} node: {name} must be a sequence of nodes, got {type(values).__name__}"
        )
    try:
        ret = tuple(values)
    except TypeError:
        raise InvalidNodeError(
            f"{nodeType.value} node: {name} must be a sequence of nodes, got {type(values).__name__}"
        ) from None
    for value in ret:
        if not isinstance(value, NODE_CLASSES):
            raise InvalidNodeError(f"{nodeType.value} node: {name} must contain nodes only, got {type(value).__name__}")
    return ret


@dataclass(frozen=True)
class TextNode:
    """Literal text leaf, escaped for the target mode at render time."""

    nodeType: ClassVar[NodeType] = NodeType.TEXT

    content: str

    def __post_init__(self) -> None:
        _checkString(self.nodeType, "content", self.content)

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class CodeNode:
    """Inline fixed-width code."""

    nodeType: ClassVar[NodeType] = NodeType.CODE

    content: str

    def __post_init__(self) -> None:
        _checkString(self.nodeType, "content", self.content)

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content}


@dataclass(frozen=True)
class PreNode:
    """Multi-line code block with optional canonical language tag."""

    nodeType: ClassVar[NodeType] = NodeType.PRE

    content: str
    language: Optional[str] = None

    def __post_init__(self) -> None:
        _checkString(self.nodeType, "content", self.content)
        if self.language is not None:
            _checkString(self.nodeType, "language", self.language)
            # Aliases are resolved by builders.pre(), the node only takes the result
            if not LANGUAGE_TAG_PATTERN.fullmatch(self.language):
                raise InvalidNodeError(
                    f"pre node: language must be a canonical lowercase tag, got {self.language!r} "
                    "(use pre() to resolve aliases)"
                )

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "content": self.content, "language": self.language}


@dataclass(frozen=True)
class GroupNode:
    """Transparent concatenation of children, adds no markers."""

    nodeType: ClassVar[NodeType] = NodeType.GROUP

    children: Tuple["Node", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _checkNodes(self.nodeType, "children", self.children))

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "children": [child.toDict() for child in self.children]}


@dataclass(frozen=True)
class WrapNode:
    """Styled span: children surrounded by the style's open/close markers."""

    nodeType: ClassVar[NodeType] = NodeType.WRAP

    style: WrapStyle
    children: Tuple["Node", ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.style, WrapStyle):
            try:
                object.__setattr__(self, "style", WrapStyle(self.style))
            except ValueError:
                raise InvalidNodeError(f"wrap node: unknown style {self.style!r}") from None
        object.__setattr__(self, "children", _checkNodes(self.nodeType, "children", self.children))

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "style": self.style.value,
            "children": [child.toDict() for child in self.children],
        }


@dataclass(frozen=True)
class LinkNode:
    """Clickable link; the label is a sub-tree so it may carry styling."""

    nodeType: ClassVar[NodeType] = NodeType.LINK

    label: "Node"
    target: str

    def __post_init__(self) -> None:
        if not isinstance(self.label, NODE_CLASSES):
            raise InvalidNodeError(f"link node: label must be a node, got {type(self.label).__name__}")
        _checkString(self.nodeType, "target", self.target)

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "label": self.label.toDict(), "target": self.target}


@dataclass(frozen=True)
class EmojiNode:
    """Custom emoji reference. Only HTML can express it, other modes show the fallback text."""

    nodeType: ClassVar[NodeType] = NodeType.EMOJI

    emojiId: str
    fallback: str

    def __post_init__(self) -> None:
        _checkString(self.nodeType, "emojiId", self.emojiId)
        _checkString(self.nodeType, "fallback", self.fallback)

    def toDict(self) -> Dict[str, Any]:
        return {"type": self.nodeType.value, "emojiId": self.emojiId, "fallback": self.fallback}


@dataclass(frozen=True)
class QuoteNode:
    """Block quote, one rendered unit per line node."""

    nodeType: ClassVar[NodeType] = NodeType.QUOTE

    lines: Tuple["Node", ...] = field(default_factory=tuple)
    expandable: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", _checkNodes(self.nodeType, "lines", self.lines))
        if not isinstance(self.expandable, bool):
            raise InvalidNodeError(f"quote node: expandable must be bool, got {type(self.expandable).__name__}")

    def toDict(self) -> Dict[str, Any]:
        return {
            "type": self.nodeType.value,
            "expandable": self.expandable,
            "lines": [line.toDict() for line in self.lines],
        }


Node = Union[TextNode, CodeNode, PreNode, GroupNode, WrapNode, LinkNode, EmojiNode, QuoteNode]
NODE_CLASSES: Tuple[type, ...] = (TextNode, CodeNode, PreNode, GroupNode, WrapNode, LinkNode, EmojiNode, QuoteNode)
