#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/escape.py
"""Escaping for Markdown text runs, table cells and HTML output."""

from __future__ import annotations

import html
import re

_STRONG_EDGES = re.compile(r"^\*\*|\*\*$")

# Inline characters that are escaped wherever they occur in a text run
_ALWAYS_ESCAPE = "\\`*{}[]~<"

_BULLET_START = re.compile(r"^[-+*](?=[ \t]|$)")
_ORDERED_START = re.compile(r"^(\d{1,9})([.)])(?=[ \t]|$)")
_RULE_LIKE = re.compile(r"^[-=_*:| \t]+$")
_HEADING_CLOSER = re.compile(r"(^|[ \t])(#+)[ \t]*$")
_UNESCAPED_PIPE = re.compile(r"(?<!\\)((?:\\\\)*)\|")


def escape_markdown(text: str) -> str:
    r"""Escape characters in a text run that Markdown would read as syntax.

    Backslashes, backticks, asterisks, braces, brackets, tildes and ``<`` are
    always escaped. ``#`` is escaped only at the start of the run and ``_``
    only where it is not inside a word, so ``snake_case`` stays readable.

    Parameters
    ----------
    text : str
        Literal text

    Returns
    -------
    str
        Text whose characters all render literally inside a paragraph

    Examples
    --------
        >>> escape_markdown("*not bold* and my_var")
        '\\*not bold\\* and my_var'
        >>> escape_markdown("# tag")
        '\\# tag'

    """
    escaped_chars = []
    for i, char in enumerate(text):
        if char in _ALWAYS_ESCAPE:
            escaped_chars.append("\\")
        elif char == "#" and i == 0:
            escaped_chars.append("\\")
        elif char == "_":
            prev_alnum = i > 0 and text[i - 1].isalnum()
            next_alnum = i < len(text) - 1 and text[i + 1].isalnum()
            if not (prev_alnum and next_alnum):
                escaped_chars.append("\\")
        escaped_chars.append(char)
    return "".join(escaped_chars)


def escape_block_start(line: str) -> str:
    r"""Escape a leading marker that would turn a paragraph line into another block.

    Covers ATX headings, list markers, block quotes and admonition headers.
    Lines made only of rule characters (thematic breaks, setext underlines,
    table delimiter rows) get their first ``-``, ``=``, ``_`` or ``*``
    escaped, or their first ``|`` when they hold none of those. Leading
    whitespace is kept.

    Parameters
    ----------
    line : str
        One line of rendered paragraph text

    Returns
    -------
    str
        The line, with a backslash before its first marker character if needed

    Examples
    --------
        >>> escape_block_start("1. not a list")
        '1\\. not a list'
        >>> escape_block_start("- item")
        '\\- item'

    """
    body = line.lstrip(" \t")
    indent = line[: len(line) - len(body)]
    if not body:
        return line

    ordered = _ORDERED_START.match(body)
    if ordered:
        return f"{indent}{ordered.group(1)}\\{body[len(ordered.group(1)) :]}"
    if body[0] in "#>" or body.startswith("!!!"):
        return f"{indent}\\{body}"
    if _BULLET_START.match(body):
        return f"{indent}\\{body}"
    if _RULE_LIKE.match(body):
        index = 0 if body[0] in "-=_*" else body.find("-")
        if index < 0:
            index = body.find("|")
        if index >= 0:
            return f"{indent}{body[:index]}\\{body[index:]}"
    return line


def escape_heading_text(text: str) -> str:
    r"""Escape a trailing ``#`` run that an ATX heading would drop as its closing sequence.

    Examples
    --------
        >>> escape_heading_text("Issue #")
        'Issue \\#'

    """
    match = _HEADING_CLOSER.search(text)
    if match is None:
        return text
    start = match.start(2)
    return f"{text[:start]}\\{text[start:]}"


def escape_table_cell(text: str) -> str:
    r"""Escape pipe characters and trim a table cell.

    A pipe that already follows an odd number of backslashes is left as is.

    Parameters
    ----------
    text : str
        Cell content

    Returns
    -------
    str
        Content safe to place between ``|`` delimiters

    Examples
    --------
        >>> escape_table_cell(" a | b ")
        'a \\| b'

    """
    return _UNESCAPED_PIPE.sub(r"\1\\|", text).strip()


def strip_strong_markers(text: str) -> str:
    """Remove strong-emphasis markers wrapping a property-table key."""
    return _STRONG_EDGES.sub("", text.strip()).strip()


def escape_html(text: str, quote: bool = True) -> str:
    """Escape text for inclusion in HTML."""
    return html.escape(text, quote=quote)
