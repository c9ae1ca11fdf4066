#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/footnote.py
"""Converter for footnote references and definitions."""

from __future__ import annotations

import logging
from typing import Sequence

from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.nodes import DocumentNode

logger = logging.getLogger(__name__)


def convert_footnote(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a footnote node.

    References become ``[^N]`` where ``N`` is the number the footnote id
    received on first encounter. Definitions emit nothing; their text is
    stored in the footnote state and written once at the end of the
    document. Nodes without an ``id`` produce no output.

    Parameters
    ----------
    node : DocumentNode
        Footnote node with ``id`` and optional ``footnoteType`` attributes
    children : sequence of ConversionResult
        Converted content of a definition
    level : int
        Unused
    context : ConversionContext
        Conversion context holding the footnote state

    Returns
    -------
    ConversionResult
        Reference marker, or empty output for definitions

    """
    ref_id = node.attr("id")
    ref_id = str(ref_id).strip() if ref_id is not None else ""
    if not ref_id:
        logger.debug("Footnote node without id skipped")
        return EMPTY_RESULT

    if node.attr("footnoteType") == "definition":
        content = " ".join(child.markdown.strip() for child in children if child.markdown.strip())
        number = context.footnotes.define(ref_id, content)
        return ConversionResult("", {"footnote_definition": ref_id, "number": number})

    number = context.footnotes.reference(ref_id)
    return ConversionResult(f"[^{number}]", {"footnote_reference": ref_id, "number": number})


__all__ = ["convert_footnote"]
