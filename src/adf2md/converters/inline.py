#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/converters/inline.py
"""Converters for inline nodes: text runs, breaks, emoji, status, mentions and dates.

Mark precedence for text runs
-----------------------------
1. ``code`` wraps the raw text in a code span; strong, emphasis and
   strikethrough are ignored inside it.
2. Otherwise strong and emphasis together give ``***text***``, strong alone
   ``**text**`` and emphasis alone ``*text*``; strikethrough wraps the result
   in ``~~``.
3. A ``link`` mark wraps whatever the previous steps produced, code spans
   included.
4. Unknown marks are ignored.

Outside code spans the text is backslash-escaped first unless the
``escape_special`` option is off.

"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from adf2md.constants import HARD_BREAK, ICON_MAP
from adf2md.context import EMPTY_RESULT, ConversionContext, ConversionResult
from adf2md.links import format_link
from adf2md.nodes import DocumentNode, MarkType
from adf2md.utils.escape import escape_markdown

logger = logging.getLogger(__name__)


def _wrap(text: str, delimiter: str) -> str:
    """Wrap ``text`` in ``delimiter``, keeping edge whitespace outside the markers."""
    core = text.strip()
    if not core:
        return text
    leading = text[: len(text) - len(text.lstrip())]
    trailing = text[len(text.rstrip()) :]
    return f"{leading}{delimiter}{core}{delimiter}{trailing}"


def _code_span(text: str) -> str:
    if "`" not in text:
        return f"`{text}`"
    return f"`` {text} ``"


def convert_text(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a text run with its marks."""
    text = node.text or ""
    if not text:
        return EMPTY_RESULT

    if node.has_mark(MarkType.CODE):
        text = _code_span(text)
    else:
        if context.options.escape_special:
            text = escape_markdown(text)
        strong = node.has_mark(MarkType.STRONG)
        em = node.has_mark(MarkType.EM)
        if strong and em:
            text = _wrap(text, "***")
        elif strong:
            text = _wrap(text, "**")
        elif em:
            text = _wrap(text, "*")
        if node.has_mark(MarkType.STRIKE):
            text = _wrap(text, "~~")

    link = node.find_mark(MarkType.LINK)
    if link is not None:
        href = link.attributes.get("href")
        if isinstance(href, str):
            resolved = context.link_resolver(href, link.attributes, context.base_url)
            text = format_link(text, resolved.url)
        else:
            logger.debug("Ignoring link mark without href on text %r", node.text)

    return ConversionResult(text)


def convert_hard_break(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a hard line break as a backslash at the end of the line."""
    return ConversionResult(HARD_BREAK)


def convert_emoji(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render an emoji from its short name, falling back to its text attribute."""
    short_name = str(node.attr("shortName") or "").strip(":")
    if short_name in ICON_MAP:
        return ConversionResult(ICON_MAP[short_name])
    fallback = node.attr("text") or (f":{short_name}:" if short_name else "")
    return ConversionResult(str(fallback))


def convert_status(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a status lozenge as its colour icon followed by its text."""
    text = str(node.attr("text") or "").strip()
    icon = ICON_MAP.get(str(node.attr("color") or "neutral"), "")
    if not text:
        return EMPTY_RESULT
    return ConversionResult(f"{icon} **{text}**" if icon else f"**{text}**")


def convert_mention(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a user mention as ``@name``."""
    name = str(node.attr("text") or node.attr("displayName") or node.attr("id") or "").strip()
    if not name:
        return EMPTY_RESULT
    return ConversionResult(name if name.startswith("@") else f"@{name}")


def convert_date(
    node: DocumentNode, children: Sequence[ConversionResult], level: int, context: ConversionContext
) -> ConversionResult:
    """Render a date node from its epoch-milliseconds timestamp as an ISO date."""
    timestamp = node.attr("timestamp")
    try:
        moment = datetime.fromtimestamp(int(timestamp) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug("Unreadable date timestamp %r", timestamp)
        return ConversionResult(str(timestamp) if timestamp is not None else "")
    return ConversionResult(moment.date().isoformat())


__all__ = [
    "convert_text",
    "convert_hard_break",
    "convert_emoji",
    "convert_status",
    "convert_mention",
    "convert_date",
]
