#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/walker.py
"""Post-order tree walk dispatching nodes to their converters."""

from __future__ import annotations

import logging
from typing import Optional

from adf2md.context import ConversionContext, ConversionResult
from adf2md.exceptions import NestingDepthError
from adf2md.nodes import DocumentNode, NodeType, extract_text
from adf2md.registry import ConverterRegistry, default_registry

logger = logging.getLogger(__name__)

# Containers whose content is rendered on its own and re-prefixed by the
# container, so lists inside them start again at level 0
LEVEL_RESET_TYPES = frozenset(
    {
        NodeType.BLOCKQUOTE,
        NodeType.PANEL,
        NodeType.EXPAND,
        NodeType.NESTED_EXPAND,
        NodeType.TABLE_HEADER,
        NodeType.TABLE_CELL,
    }
)


class TreeWalker:
    """Convert a document tree bottom-up.

    Children are converted first, in order, and their results are handed to
    the converter registered for the parent's type. The nesting level grows
    by one below each list item. Node types without a converter degrade to
    the concatenated text of their descendants.

    Parameters
    ----------
    registry : ConverterRegistry, optional
        Converters to dispatch to; the default registry when omitted

    """

    def __init__(self, registry: Optional[ConverterRegistry] = None):
        """Initialize the walker."""
        self.registry = registry if registry is not None else default_registry

    def convert(self, node: DocumentNode, level: int, context: ConversionContext) -> ConversionResult:
        """Convert ``node`` and its subtree.

        Parameters
        ----------
        node : DocumentNode
            Subtree root
        level : int
            List nesting level of ``node``
        context : ConversionContext
            Per-conversion context, passed unchanged to every converter

        Returns
        -------
        ConversionResult
            Markdown and side context of ``node``

        Raises
        ------
        NestingDepthError
            If the tree is deeper than ``context.options.max_nesting_depth``

        """
        return self._convert(node, level, context, 0)

    def _convert(self, node: DocumentNode, level: int, context: ConversionContext, depth: int) -> ConversionResult:
        if depth > context.options.max_nesting_depth:
            raise NestingDepthError(context.options.max_nesting_depth, node.type)

        converter = self.registry.get(node.kind)
        if converter is None:
            logger.debug("No converter for node type %r, falling back to text extraction", node.type)
            return ConversionResult(extract_text(node, max_depth=context.options.max_nesting_depth - depth))

        child_level = self.child_level(node, level)
        children = [self._convert(child, child_level, context, depth + 1) for child in node.children]
        return converter(node, children, level, context)

    @staticmethod
    def child_level(node: DocumentNode, level: int) -> int:
        """Return the nesting level handed to the children of ``node``."""
        kind = node.kind
        if kind is NodeType.LIST_ITEM:
            return level + 1
        if kind in LEVEL_RESET_TYPES:
            return 0
        return level


__all__ = ["TreeWalker", "LEVEL_RESET_TYPES"]
