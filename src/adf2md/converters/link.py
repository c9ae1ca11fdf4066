#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/link.py
"""Converters for link nodes and smart-link cards.

All targets go through the link resolver of the conversion context. Link
text comes from the converted children when there are any, otherwise from
the resolver.
"""

from __future__ import annotations

import logging
from typing import Sequence

from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.links import format_link
from adf2md.nodes import DocumentNode

logger = logging.getLogger(__name__)


def _card_url(node: DocumentNode) -> str:
    url = node.attr("url") or node.attr("href")
    if isinstance(url, str):
        return url
    data = node.attr("data")
    if isinstance(data, dict) and isinstance(data.get("url"), str):
        return data["url"]
    return ""


def convert_link(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render ``[text](url)``, escaping unescaped ``)`` in the destination."""
    href = node.attr("href")
    href = href if isinstance(href, str) else ""
    resolved = context.link_resolver(href, node.attributes, context.base_url)
    text = "".join(child.markdown for child in children)
    if not text.strip():
        text = resolved.text
    return ConversionResult(format_link(text, resolved.url), {"link": dict(resolved.metadata)})


def convert_card(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render an inline or block card as a plain link to its URL."""
    url = _card_url(node)
    if not url.strip():
        logger.debug("Card node without URL skipped")
        return EMPTY_RESULT
    resolved = context.link_resolver(url, node.attributes, context.base_url)
    return ConversionResult(format_link(resolved.text, resolved.url), {"link": dict(resolved.metadata)})


__all__ = ["convert_link", "convert_card"]
