#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/table.py
"""Converters for tables, rows and cells.

Rows hand their cells to the table through side context, so the table
never has to split rendered Markdown on ``|`` to recover them.

A table is laid out in one of two modes:

Property table
    Every row has exactly two cells, a header-like key cell and a value
    cell. Rendered as ``**key:** value`` lines, which read better than a
    two-column grid for key/value data.

GFM table
    Anything else. The first row is a header when none of its cells is
    empty, in which case a ``---`` separator row follows it.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from adf2md.constants import HARD_BREAK, TABLE_CELL_LINE_BREAK, TABLE_SEPARATOR_CELL
from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.nodes import DocumentNode, NodeType
from adf2md.utils.escape import escape_table_cell, strip_strong_markers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableCell:
    """Rendered content of one table cell."""

    text: str
    header: bool = False

    @property
    def is_header_like(self) -> bool:
        """Whether the cell can serve as a property key."""
        return self.header or bool(self.text.strip())


def convert_table_cell(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render cell content on a single line, joining blocks with ``<br>``."""
    blocks = [
        child.markdown.strip().replace(HARD_BREAK, TABLE_CELL_LINE_BREAK).replace("\n", TABLE_CELL_LINE_BREAK)
        for child in children
        if child.markdown.strip()
    ]
    text = TABLE_CELL_LINE_BREAK.join(blocks)
    cell = TableCell(text=text, header=node.kind is NodeType.TABLE_HEADER)
    return ConversionResult(text, {"cell": cell, "multiline": len(blocks) > 1 or TABLE_CELL_LINE_BREAK in text})


def convert_table_row(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Collect the cells of a row."""
    cells = tuple(
        child.get("cell") if isinstance(child.get("cell"), TableCell) else TableCell(child.markdown.strip())
        for child in children
    )
    markdown = format_row([cell.text for cell in cells]) if cells else ""
    return ConversionResult(markdown, {"cells": cells})


def format_row(texts: Sequence[str]) -> str:
    """Format cell texts as one GFM table row."""
    return "| " + " | ".join(escape_table_cell(text) for text in texts) + " |"


def is_property_table(rows: Sequence[Sequence[TableCell]]) -> bool:
    """Check whether every row is a key cell followed by a value cell.

    Parameters
    ----------
    rows : sequence of sequence of TableCell
        Cells of each row

    Returns
    -------
    bool
        True for a non-empty table whose rows all have two cells with a
        header-like first cell and a non-empty second cell

    """
    if not rows:
        return False
    return all(len(row) == 2 and row[0].is_header_like and bool(row[1].text.strip()) for row in rows)


def convert_table(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a table as property lines or as a GFM pipe table."""
    rows = [tuple(child.get("cells") or ()) for child in children]
    rows = [row for row in rows if row]
    if not rows:
        return EMPTY_RESULT

    if context.options.property_tables and is_property_table(rows):
        lines = [f"**{strip_strong_markers(key.text)}:** {escape_table_cell(value.text)}" for key, value in rows]
        return ConversionResult("\n\n".join(lines), {"property_table": True})

    has_header = all(cell.text.strip() for cell in rows[0])
    lines = [format_row([cell.text for cell in rows[0]])]
    if has_header:
        lines.append(format_row([TABLE_SEPARATOR_CELL] * len(rows[0])))
    else:
        logger.debug("First table row has empty cells; emitting table without header separator")
    lines.extend(format_row([cell.text for cell in row]) for row in rows[1:])
    return ConversionResult("\n".join(lines), {"property_table": False, "header": has_header})


__all__ = [
    "TableCell",
    "convert_table",
    "convert_table_row",
    "convert_table_cell",
    "format_row",
    "is_property_table",
]
