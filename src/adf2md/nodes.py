#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/nodes.py
"""Document tree classes for the structured rich-document format.

This module defines the immutable node representation the converter walks.
Input documents arrive as JSON-like dictionaries in the shape of the
Atlassian Document Format::

    {"type": "paragraph", "attrs": {...}, "content": [...], "text": "...", "marks": [...]}

and are loaded with :meth:`DocumentNode.from_dict`. Loading is forgiving:
missing keys get empty defaults and non-dictionary children are dropped, so
malformed input degrades instead of raising. The one exception is nesting
beyond the depth ceiling, which raises :class:`~adf2md.exceptions.NestingDepthError`
before the loader recurses any further.

Node Kinds
----------
Type tags are resolved into the closed :class:`NodeType` enumeration. Tags
outside the enumeration resolve to :attr:`NodeType.UNKNOWN`, which the tree
walker routes to a text-extraction fallback. The same applies to marks and
:class:`MarkType`.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Mapping, Optional

from adf2md.constants import DEFAULT_MAX_NESTING_DEPTH
from adf2md.exceptions import NestingDepthError


class NodeType(str, Enum):
    """Known node type tags."""

    DOC = "doc"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    HEADING = "heading"
    HARD_BREAK = "hardBreak"
    RULE = "rule"
    BLOCKQUOTE = "blockquote"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    CODE_BLOCK = "codeBlock"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    LINK = "link"
    INLINE_CARD = "inlineCard"
    BLOCK_CARD = "blockCard"
    PANEL = "panel"
    EXPAND = "expand"
    NESTED_EXPAND = "nestedExpand"
    EMOJI = "emoji"
    STATUS = "status"
    MENTION = "mention"
    DATE = "date"
    MEDIA_SINGLE = "mediaSingle"
    MEDIA = "media"
    ANNOTATION = "annotation"
    FOOTNOTE = "footnote"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> NodeType:
        """Resolve a raw type tag, mapping unrecognized tags to ``UNKNOWN``."""
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


class MarkType(str, Enum):
    """Known inline mark type tags."""

    CODE = "code"
    STRONG = "strong"
    EM = "em"
    STRIKE = "strike"
    LINK = "link"
    UNKNOWN = "unknown"

    @classmethod
    def from_tag(cls, tag: str) -> MarkType:
        """Resolve a raw mark tag, mapping unrecognized tags to ``UNKNOWN``."""
        if tag == "emphasis":
            return cls.EM
        try:
            return cls(tag)
        except ValueError:
            return cls.UNKNOWN


LIST_NODE_TYPES = frozenset({NodeType.BULLET_LIST, NodeType.ORDERED_LIST})
TABLE_CELL_NODE_TYPES = frozenset({NodeType.TABLE_HEADER, NodeType.TABLE_CELL})


@dataclass(frozen=True)
class Mark:
    """Inline formatting mark attached to a text node.

    Parameters
    ----------
    type : str
        Raw mark type tag (e.g. ``"strong"``)
    attributes : dict, default = empty dict
        Mark attributes (e.g. ``{"href": ...}`` for links)

    """

    type: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def kind(self) -> MarkType:
        """Resolved mark kind."""
        return MarkType.from_tag(self.type)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Mark:
        """Build a mark from its JSON representation."""
        attrs = data.get("attrs")
        return cls(type=str(data.get("type", "")), attributes=dict(attrs) if isinstance(attrs, Mapping) else {})


@dataclass(frozen=True)
class DocumentNode:
    """A node of the structured document tree.

    Parameters
    ----------
    type : str
        Raw type tag (e.g. ``"bulletList"``)
    attributes : dict, default = empty dict
        Node attributes (``attrs`` in the JSON form)
    children : tuple of DocumentNode, default = ()
        Ordered child nodes (``content`` in the JSON form)
    text : str or None, default = None
        Text payload of text-bearing nodes
    marks : tuple of Mark, default = ()
        Inline marks of text nodes

    """

    type: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    children: tuple[DocumentNode, ...] = ()
    text: Optional[str] = None
    marks: tuple[Mark, ...] = ()

    @property
    def kind(self) -> NodeType:
        """Resolved node kind."""
        return NodeType.from_tag(self.type)

    def attr(self, name: str, default: Any = None) -> Any:
        """Return an attribute value or ``default`` when absent."""
        return self.attributes.get(name, default)

    def has_mark(self, mark_type: MarkType) -> bool:
        """Check whether a mark of the given kind is attached."""
        return any(mark.kind is mark_type for mark in self.marks)

    def find_mark(self, mark_type: MarkType) -> Optional[Mark]:
        """Return the first attached mark of the given kind."""
        for mark in self.marks:
            if mark.kind is mark_type:
                return mark
        return None

    def iter_descendants(self) -> Iterator[DocumentNode]:
        """Yield all descendants in document order (pre-order)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> DocumentNode:
        """Build a node tree from its JSON representation.

        Parameters
        ----------
        data : Mapping
            JSON-like dictionary with ``type``, ``attrs``, ``content``,
            ``text`` and ``marks`` keys, all optional
        max_depth : int, default 64
            Deepest nesting level accepted; the root is at level 0

        Returns
        -------
        DocumentNode
            Root of the loaded tree

        Raises
        ------
        NestingDepthError
            If ``data`` is nested deeper than ``max_depth``

        """
        return cls._load(data, 0, max_depth)

    @classmethod
    def _load(cls, data: Mapping[str, Any], depth: int, max_depth: int) -> DocumentNode:
        if depth > max_depth:
            raise NestingDepthError(max_depth, str(data.get("type", "")) or None)
        attrs = data.get("attrs")
        content = data.get("content")
        marks = data.get("marks")
        text = data.get("text")
        return cls(
            type=str(data.get("type", "")),
            attributes=dict(attrs) if isinstance(attrs, Mapping) else {},
            children=tuple(cls._load(child, depth + 1, max_depth) for child in content if isinstance(child, Mapping))
            if isinstance(content, list)
            else (),
            text=text if isinstance(text, str) else None,
            marks=tuple(Mark.from_dict(mark) for mark in marks if isinstance(mark, Mapping))
            if isinstance(marks, list)
            else (),
        )


def extract_text(node: DocumentNode, block_separator: str = "", max_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> str:
    """Concatenate the text of all descendant text nodes.

    Parameters
    ----------
    node : DocumentNode
        Subtree root
    block_separator : str, default ""
        Appended after each paragraph or heading, so block boundaries can be
        kept as spaces or blank lines
    max_depth : int, default 64
        Deepest descendant level below ``node`` that is read

    Returns
    -------
    str
        Raw text without any Markdown markup

    Raises
    ------
    NestingDepthError
        If the subtree is nested deeper than ``max_depth``

    """
    return _extract_text(node, block_separator, 0, max_depth)


def _extract_text(node: DocumentNode, block_separator: str, depth: int, max_depth: int) -> str:
    if depth > max_depth:
        raise NestingDepthError(max_depth, node.type)
    if node.text is not None and not node.children:
        return node.text
    parts: list[str] = []
    for child in node.children:
        parts.append(_extract_text(child, block_separator, depth + 1, max_depth))
        if block_separator and child.kind in (NodeType.PARAGRAPH, NodeType.HEADING):
            parts.append(block_separator)
    return "".join(parts)


__all__ = [
    "NodeType",
    "MarkType",
    "Mark",
    "DocumentNode",
    "LIST_NODE_TYPES",
    "TABLE_CELL_NODE_TYPES",
    "extract_text",
]
