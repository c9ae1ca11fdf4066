#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/lists.py
"""Converters for bullet lists, ordered lists and list items.

List items are rendered without markers; the owning list adds them. Every
item becomes a :class:`~adf2md.context.MarkdownBlock` and is laid out as
follows:

- the first non-empty line is prefixed with the list indentation
  (two spaces per nesting level) and the marker;
- every following line is prefixed with the continuation indentation, the
  column where the item content starts, keeping its relative indentation;
- lines of nested lists already carry their own indentation and are passed
  through, shifted right only when the marker of an ordered list is wider
  than two characters;
- blank lines stay empty.

"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Sequence

from adf2md.constants import BULLET_INDENT_WIDTH, BULLET_MARKER
from adf2md.context import ConversionContext, ConversionResult, MarkdownBlock
from adf2md.nodes import LIST_NODE_TYPES, DocumentNode, NodeType

logger = logging.getLogger(__name__)

_LIST_MARKER_LINE = re.compile(r"^\s*([-*+]|\d+[.)])\s")
_BULLET_MARKER_AT = re.compile(r"^(\s*)-(?=\s|$)")
_ORDERED_MARKER_AT = re.compile(r"^(\s*\d+)\.(?=\s|$)")


def _ordered_start(node: DocumentNode) -> int:
    """Return the declared start number of an ordered list, defaulting to 1."""
    for key in ("order", "start"):
        value = node.attr(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int) and value >= 0:
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
    return 1


def _interrupts_paragraph(node: DocumentNode) -> bool:
    """Check whether a child block may follow the previous block without a blank line."""
    kind = node.kind
    if kind in (NodeType.CODE_BLOCK, NodeType.BULLET_LIST):
        return True
    return kind is NodeType.ORDERED_LIST and _ordered_start(node) == 1


def switch_list_markers(markdown: str, kind: str) -> str:
    """Rewrite the top-level markers of a rendered list to the alternate form.

    CommonMark merges two adjacent lists that use the same bullet or the
    same ordered delimiter. Rendering the second one with ``*`` bullets or
    ``)`` delimiters keeps it a separate list. Only lines indented like the
    first line are marker lines; item content and nested lists sit deeper.

    Parameters
    ----------
    markdown : str
        Output of :func:`convert_bullet_list` or :func:`convert_ordered_list`
    kind : str
        ``"bullet"`` or ``"ordered"``

    Returns
    -------
    str
        The same list with its own markers switched

    """
    lines = markdown.split("\n")
    depth = len(lines[0]) - len(lines[0].lstrip())
    pattern, replacement = (_BULLET_MARKER_AT, r"\1*") if kind == "bullet" else (_ORDERED_MARKER_AT, r"\1)")
    return "\n".join(
        pattern.sub(replacement, line, count=1) if line.strip() and len(line) - len(line.lstrip()) == depth else line
        for line in lines
    )


def iter_blocks(children: Sequence[ConversionResult]) -> Iterator[tuple[int, str]]:
    """Yield the index and Markdown of each non-empty child block.

    Back-to-back lists of the same kind alternate between the default and
    the switched markers.
    """
    previous_kind = None
    switched = False
    for index, child in enumerate(children):
        block = child.markdown.strip("\n")
        if not block.strip():
            continue
        kind = child.get("list_kind")
        switched = kind is not None and kind == previous_kind and not switched
        yield index, switch_list_markers(block, kind) if switched else block
        previous_kind = kind


def separate_adjacent_lists(children: Sequence[ConversionResult]) -> list[str]:
    """Return the non-empty child blocks, switching markers between back-to-back lists of one kind."""
    return [block for _, block in iter_blocks(children)]


def convert_list_item(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Join the blocks of a list item and record which lines belong to nested lists."""
    text = ""
    nested_lines: set[int] = set()
    for index, block in iter_blocks(children):
        child = node.children[index]
        if text:
            text += "\n" if _interrupts_paragraph(child) else "\n\n"
        first_line = text.count("\n")
        if child.kind in LIST_NODE_TYPES:
            nested_lines.update(range(first_line, first_line + block.count("\n") + 1))
        text += block
    return ConversionResult(text, {"nested_lines": frozenset(nested_lines)})


def _as_block(result: ConversionResult, level: int) -> MarkdownBlock:
    nested = result.get("nested_lines")
    if nested is None:
        lines = result.markdown.split("\n")
        nested = frozenset(i for i, line in enumerate(lines) if i > 0 and _LIST_MARKER_LINE.match(line))
    return MarkdownBlock(text=result.markdown, level=level, nested_lines=frozenset(nested))


def render_list_item(block: MarkdownBlock, marker: str) -> str:
    """Lay out one item under ``marker`` at the block's nesting level.

    Parameters
    ----------
    block : MarkdownBlock
        Item content without marker or indentation
    marker : str
        List marker such as ``-`` or ``3.``

    Returns
    -------
    str
        Indented item lines

    """
    indent = " " * (BULLET_INDENT_WIDTH * block.level)
    continuation = indent + " " * (len(marker) + 1)
    nested_shift = " " * max(0, len(continuation) - BULLET_INDENT_WIDTH * (block.level + 1))

    output: list[str] = []
    started = False
    for index, line in enumerate(block.text.split("\n")):
        if not line.strip():
            if started:
                output.append("")
            continue
        if index in block.nested_lines:
            if not started:
                output.append(f"{indent}{marker}")
                started = True
            output.append(f"{nested_shift}{line}")
        elif not started:
            output.append(f"{indent}{marker} {line.strip()}")
            started = True
        else:
            output.append(f"{continuation}{line}")

    if not started:
        return f"{indent}{marker}"
    while output and not output[-1]:
        output.pop()
    return "\n".join(output)


def convert_bullet_list(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a bullet list with ``-`` markers indented two spaces per level."""
    items = [render_list_item(_as_block(child, level), BULLET_MARKER) for child in children]
    return ConversionResult("\n".join(items), {"list_items": len(items), "list_kind": "bullet"})


def convert_ordered_list(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render an ordered list numbered from its declared start.

    Numbers increase by one per item whatever the item text says.
    """
    start = _ordered_start(node)
    items = [
        render_list_item(_as_block(child, level), f"{start + offset}.") for offset, child in enumerate(children)
    ]
    return ConversionResult("\n".join(items), {"list_items": len(items), "start": start, "list_kind": "ordered"})


__all__ = [
    "convert_list_item",
    "convert_bullet_list",
    "convert_ordered_list",
    "render_list_item",
    "switch_list_markers",
    "separate_adjacent_lists",
    "iter_blocks",
]
