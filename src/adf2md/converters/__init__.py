#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/__init__.py
"""Built-in node converters.

Each converter is a pure function of a node, its converted children, the
list nesting level and the conversion context. See
:mod:`adf2md.registry` for the calling convention.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from adf2md.converters.annotation import convert_annotation
from adf2md.converters.blocks import (
    convert_blockquote,
    convert_doc,
    convert_expand,
    convert_heading,
    convert_media,
    convert_media_single,
    convert_panel,
    convert_paragraph,
    convert_rule,
)
from adf2md.converters.code_block import convert_code_block
from adf2md.converters.footnote import convert_footnote
from adf2md.converters.inline import (
    convert_date,
    convert_emoji,
    convert_hard_break,
    convert_mention,
    convert_status,
    convert_text,
)
from adf2md.converters.link import convert_card, convert_link
from adf2md.converters.lists import convert_bullet_list, convert_list_item, convert_ordered_list
from adf2md.converters.table import convert_table, convert_table_cell, convert_table_row
from adf2md.nodes import NodeType

if TYPE_CHECKING:
    from adf2md.registry import Converter, ConverterRegistry

BUILTIN_CONVERTERS: dict[NodeType, Converter] = {
    NodeType.DOC: convert_doc,
    NodeType.PARAGRAPH: convert_paragraph,
    NodeType.TEXT: convert_text,
    NodeType.HEADING: convert_heading,
    NodeType.HARD_BREAK: convert_hard_break,
    NodeType.RULE: convert_rule,
    NodeType.BLOCKQUOTE: convert_blockquote,
    NodeType.BULLET_LIST: convert_bullet_list,
    NodeType.ORDERED_LIST: convert_ordered_list,
    NodeType.LIST_ITEM: convert_list_item,
    NodeType.CODE_BLOCK: convert_code_block,
    NodeType.TABLE: convert_table,
    NodeType.TABLE_ROW: convert_table_row,
    NodeType.TABLE_HEADER: convert_table_cell,
    NodeType.TABLE_CELL: convert_table_cell,
    NodeType.LINK: convert_link,
    NodeType.INLINE_CARD: convert_card,
    NodeType.BLOCK_CARD: convert_card,
    NodeType.PANEL: convert_panel,
    NodeType.EXPAND: convert_expand,
    NodeType.NESTED_EXPAND: convert_expand,
    NodeType.EMOJI: convert_emoji,
    NodeType.STATUS: convert_status,
    NodeType.MENTION: convert_mention,
    NodeType.DATE: convert_date,
    NodeType.MEDIA_SINGLE: convert_media_single,
    NodeType.MEDIA: convert_media,
    NodeType.ANNOTATION: convert_annotation,
    NodeType.FOOTNOTE: convert_footnote,
}


def register_builtin_converters(registry: ConverterRegistry) -> None:
    """Register every built-in converter with ``registry``."""
    for node_type, converter in BUILTIN_CONVERTERS.items():
        registry.register(node_type, converter)


__all__ = ["BUILTIN_CONVERTERS", "register_builtin_converters"]
