#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/code_block.py
"""Converter for fenced code blocks."""

from __future__ import annotations

import logging
from typing import Sequence

from adf2md.constants import MERMAID_LANGUAGE
from adf2md.context import ConversionContext, ConversionResult
from adf2md.nodes import DocumentNode
from adf2md.utils.text import detect_mermaid_syntax, fence_for

logger = logging.getLogger(__name__)


def resolve_language(language: str, code: str) -> str:
    """Normalize the info string of a code block.

    Backticks are removed. Any language mentioning Mermaid becomes
    ``mermaid``, and code without a language that starts with a Mermaid
    diagram keyword is tagged ``mermaid`` as well.
    """
    language = language.replace("`", "").strip()
    if not language:
        return MERMAID_LANGUAGE if detect_mermaid_syntax(code) else ""
    if MERMAID_LANGUAGE in language.lower():
        return MERMAID_LANGUAGE
    return language


def convert_code_block(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a fenced code block from the raw text of the node's children.

    The content is taken verbatim from the child text nodes, ignoring their
    marks. Fences are always on their own lines, and grow beyond three
    backticks only when the content itself contains a run of three or more.
    """
    if node.children:
        code = "".join(child.text or "" for child in node.children)
    else:
        code = node.text or ""

    raw_language = node.attr("language")
    language = resolve_language(raw_language if isinstance(raw_language, str) else "", code)
    if language == MERMAID_LANGUAGE and raw_language != MERMAID_LANGUAGE:
        logger.debug("Tagged code block as mermaid (declared language %r)", raw_language)

    fence = fence_for(code)
    code = code.rstrip("\n")
    if not code:
        return ConversionResult(f"{fence}{language}\n{fence}", {"language": language})
    return ConversionResult(f"{fence}{language}\n{code}\n{fence}", {"language": language})


__all__ = ["convert_code_block", "resolve_language"]
