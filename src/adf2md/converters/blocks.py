#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/blocks.py
"""Converters for block nodes without list or table structure."""

from __future__ import annotations

import logging
from typing import Sequence

from adf2md.constants import (
    ADMONITION_BODY_INDENT,
    ADMONITION_MARKER,
    HARD_BREAK,
    HEADING_MAX_LEVEL,
    HEADING_MIN_LEVEL,
    PANEL_ADMONITION_TYPES,
    THEMATIC_BREAK,
)
from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.converters.lists import separate_adjacent_lists
from adf2md.links import escape_link_destination
from adf2md.nodes import DocumentNode
from adf2md.utils.escape import escape_block_start, escape_heading_text

logger = logging.getLogger(__name__)


def join_blocks(children: Sequence[ConversionResult]) -> str:
    """Join non-empty child blocks with one blank line between them.

    A list directly following a list of the same kind is rendered with the
    alternate marker so the two stay separate lists.
    """
    return "\n\n".join(separate_adjacent_lists(children))


def indent_block(text: str, indent: str) -> str:
    """Prefix every non-blank line of ``text`` with ``indent``."""
    return "\n".join(f"{indent}{line}" if line.strip() else "" for line in text.split("\n"))


def convert_doc(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Join the top-level blocks of a document."""
    return ConversionResult(join_blocks(children))


def convert_paragraph(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Concatenate inline content; trailing hard breaks are dropped.

    With ``escape_special`` on, a line that would open another block gets
    its leading marker escaped.
    """
    text = "".join(child.markdown for child in children)
    while text.endswith(HARD_BREAK):
        text = text[: -len(HARD_BREAK)]
    text = text.strip()
    if context.options.escape_special:
        text = "\n".join(escape_block_start(line) for line in text.split("\n"))
    return ConversionResult(text)


def convert_heading(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render an ATX heading with its level clamped to 1-6.

    Headings are single-line, so hard breaks become spaces. An empty
    heading is emitted as the bare hash sequence.
    """
    raw_level = node.attr("level", HEADING_MIN_LEVEL)
    heading_level = raw_level if isinstance(raw_level, int) and not isinstance(raw_level, bool) else HEADING_MIN_LEVEL
    heading_level = max(HEADING_MIN_LEVEL, min(HEADING_MAX_LEVEL, heading_level))

    text = "".join(child.markdown for child in children).replace(HARD_BREAK, " ").replace("\n", " ").strip()
    if context.options.escape_special:
        text = escape_heading_text(text)
    hashes = "#" * heading_level
    return ConversionResult(f"{hashes} {text}" if text else hashes)


def convert_rule(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    return ConversionResult(THEMATIC_BREAK)


def convert_blockquote(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Prefix the joined child blocks with ``> ``."""
    body = join_blocks(children)
    if not body:
        return EMPTY_RESULT
    return ConversionResult("\n".join(f"> {line}" if line else ">" for line in body.split("\n")))


def render_admonition(admonition_type: str, body: str, title: str | None = None) -> str:
    """Render admonition syntax: a ``!!!`` header followed by a 4-space indented body."""
    header = f"{ADMONITION_MARKER} {admonition_type}"
    if title:
        header = f'{header} "{title}"'
    if not body:
        return header
    return f"{header}\n\n{indent_block(body, ' ' * ADMONITION_BODY_INDENT)}"


def convert_panel(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a panel as an admonition of the matching type."""
    panel_type = str(node.attr("panelType") or "info")
    admonition_type = PANEL_ADMONITION_TYPES.get(panel_type)
    if admonition_type is None:
        logger.debug("Unknown panel type %r rendered as note", panel_type)
        admonition_type = "note"
    return ConversionResult(render_admonition(admonition_type, join_blocks(children)))


def convert_expand(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render an expand section as a titled note admonition."""
    title = " ".join(str(node.attr("title") or "").split())
    return ConversionResult(render_admonition("note", join_blocks(children), title or None))


def convert_media_single(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    return ConversionResult(join_blocks(children))


def convert_media(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render media as an image when a URL is known, otherwise as its alt text."""
    alt = str(node.attr("alt") or "").replace("]", "\\]")
    url = node.attr("url")
    if isinstance(url, str) and url.strip():
        resolved = context.link_resolver(url, node.attributes, context.base_url)
        return ConversionResult(f"![{alt}]({escape_link_destination(resolved.url)})")
    logger.debug("Media node %r has no URL; emitting alt text", node.attr("id"))
    return ConversionResult(alt)


__all__ = [
    "join_blocks",
    "indent_block",
    "render_admonition",
    "convert_doc",
    "convert_paragraph",
    "convert_heading",
    "convert_rule",
    "convert_blockquote",
    "convert_panel",
    "convert_expand",
    "convert_media_single",
    "convert_media",
]
