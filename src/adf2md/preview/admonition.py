#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/preview/admonition.py
"""Admonition block syntax for mistune.

Admonitions are callouts written as a header line followed by an indented
body::

    !!! warning "Careful"
        Body text, indented by four spaces.

        More body paragraphs.

    !!! note
        A sibling admonition.

Scanning
--------
:class:`AdmonitionScanner` reads the ``!!! type ["title"]`` header line,
then collects body lines until the body ends. A missing or empty title
falls back to the default title of the type. In the body:

- blank lines belong to the body;
- lines indented by four spaces (or a tab) belong to the body, dedented;
- a new ``!!!`` header at column 0 starts a sibling and ends the body;
- any other line ends the body.

Lines that end the body are not consumed. Leading and trailing blank body
lines are trimmed. Headers with an unknown type or malformed syntax are
declined, so the host treats the line as ordinary paragraph text.

Recursion
---------
The body is tokenized as an independent sub-document through a
:class:`BlockHost`. The host saves its cursor state before and restores it
after the nested tokenization, so scanning continues exactly after the
consumed lines.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Optional, Protocol

from adf2md.constants import (
    ADMONITION_ALIASES,
    ADMONITION_BODY_INDENT,
    ADMONITION_DEFAULT_TITLES,
    AdmonitionEventKind,
)
from adf2md.utils.escape import escape_html

if TYPE_CHECKING:
    from mistune import BlockParser, BlockState, Markdown

logger = logging.getLogger(__name__)

ADMONITION_PATTERN = r"^!!![ \t]+[^\n]*$"

_HEADER = re.compile(r'^!!![ \t]+(?P<type>[A-Za-z][\w-]*)(?:[ \t]+"(?P<title>[^\n]*)")?[ \t]*$')
_BODY_INDENT = " " * ADMONITION_BODY_INDENT


@dataclass(frozen=True)
class AdmonitionHeader:
    """Parsed admonition header line.

    Parameters
    ----------
    type_tag : str
        Canonical admonition type after alias resolution
    title : str
        Title to display; the type's default title when none is given

    """

    type_tag: str
    title: str


@dataclass(frozen=True)
class ScannedAdmonition:
    """A recognized admonition and the source extent it covers.

    Parameters
    ----------
    header : AdmonitionHeader
        Type and title
    body : str
        Dedented body text, newline-terminated, empty for a bodiless
        admonition
    end : int
        Offset just past the last consumed character
    line_range : tuple of int
        First line and one past the last consumed line, counted from the
        start of the scanned text

    """

    header: AdmonitionHeader
    body: str
    end: int
    line_range: tuple[int, int]


def parse_header(line: str) -> Optional[AdmonitionHeader]:
    """Parse a ``!!! type ["title"]`` line.

    Parameters
    ----------
    line : str
        Candidate header line, without the line terminator

    Returns
    -------
    AdmonitionHeader or None
        The header, or None when the line is malformed or names an unknown
        admonition type

    """
    match = _HEADER.match(line.rstrip("\n"))
    if not match:
        return None
    type_tag = ADMONITION_ALIASES.get(match.group("type").casefold())
    if type_tag is None:
        logger.debug("Declining admonition with unknown type %r", match.group("type"))
        return None
    title = (match.group("title") or "").strip()
    if not title:
        title = ADMONITION_DEFAULT_TITLES.get(type_tag, type_tag.capitalize())
    return AdmonitionHeader(type_tag=type_tag, title=title)


def _line_end(source: str, pos: int) -> int:
    """Return the offset just past the line starting at ``pos``."""
    newline = source.find("\n", pos)
    return len(source) if newline == -1 else newline + 1


class AdmonitionScanner:
    """Scan one admonition starting at a given offset of a source text."""

    def scan(self, source: str, start: int = 0) -> Optional[ScannedAdmonition]:
        """Scan the admonition whose header starts at ``start``.

        Parameters
        ----------
        source : str
            Complete source text
        start : int, default 0
            Offset of the header line; must be at the start of a line

        Returns
        -------
        ScannedAdmonition or None
            The admonition, or None when the header is declined

        """
        header_end = _line_end(source, start)
        header = parse_header(source[start:header_end].rstrip("\n"))
        if header is None:
            return None

        body_lines: list[str] = []
        pos = end = header_end
        while pos < len(source):
            next_pos = _line_end(source, pos)
            line = source[pos:next_pos].rstrip("\n")
            if not line.strip():
                body_lines.append("")
            elif line.startswith(_BODY_INDENT):
                body_lines.append(line[ADMONITION_BODY_INDENT:])
            elif line.startswith("\t"):
                body_lines.append(line[1:])
            else:
                break
            pos = end = next_pos

        while body_lines and not body_lines[0].strip():
            body_lines.pop(0)
        while body_lines and not body_lines[-1].strip():
            body_lines.pop()

        first_line = source.count("\n", 0, start)
        last_line = first_line + source.count("\n", start, end) + (0 if source[start:end].endswith("\n") else 1)
        body = "\n".join(body_lines) + "\n" if body_lines else ""
        return ScannedAdmonition(header=header, body=body, end=end, line_range=(first_line, last_line))


class BlockHost(Protocol):
    """Block tokenizer that admonition bodies are handed to."""

    def snapshot(self) -> Any:
        """Capture the cursor state before a nested tokenization."""

    def restore(self, snapshot: Any) -> None:
        """Reinstate a state captured by :meth:`snapshot`."""

    def tokenize(self, text: str) -> list[dict[str, Any]]:
        """Tokenize ``text`` as an independent sub-document."""


@dataclass(frozen=True)
class _CursorState:
    cursor: int
    cursor_max: int
    list_tight: bool


class MistuneBlockHost:
    """:class:`BlockHost` backed by a mistune block parser and state.

    Nested bodies are parsed on a child state, so the parent's tokens and
    cursor are never shared with the recursion.
    """

    def __init__(self, block: BlockParser, state: BlockState, rule_name: str = "admonition"):
        """Wrap the parser and the state the admonition was found in."""
        self.block = block
        self.state = state
        self.rule_name = rule_name

    def snapshot(self) -> _CursorState:
        return _CursorState(self.state.cursor, self.state.cursor_max, self.state.list_tight)

    def restore(self, snapshot: _CursorState) -> None:
        self.state.cursor = snapshot.cursor
        self.state.cursor_max = snapshot.cursor_max
        self.state.list_tight = snapshot.list_tight

    def tokenize(self, text: str) -> list[dict[str, Any]]:
        rules = list(self.block.rules)
        if self.state.depth() >= self.block.max_nested_level - 1 and self.rule_name in rules:
            rules.remove(self.rule_name)
        child = self.state.child_state(text)
        self.block.parse(child, rules)
        return child.tokens


def build_admonition_token(scanned: ScannedAdmonition, host: BlockHost) -> dict[str, Any]:
    """Tokenize the body of ``scanned`` through ``host`` and build its token."""
    children: list[dict[str, Any]] = [{"type": "admonition_title", "text": scanned.header.title}]

    saved = host.snapshot()
    try:
        content = host.tokenize(scanned.body) if scanned.body else []
    finally:
        host.restore(saved)
    children.append({"type": "admonition_content", "children": content})

    return {
        "type": "admonition",
        "children": children,
        "attrs": {"name": scanned.header.type_tag, "line_range": scanned.line_range},
    }


def parse_admonition(block: BlockParser, m: re.Match[str], state: BlockState) -> Optional[int]:
    """Block rule callback: consume an admonition or decline it.

    Returns
    -------
    int or None
        Offset after the admonition, or None to let the host treat the
        header line as paragraph text

    """
    scanned = AdmonitionScanner().scan(state.src, m.start())
    if scanned is None:
        return None
    state.append_token(build_admonition_token(scanned, MistuneBlockHost(block, state)))
    return scanned.end


def render_admonition(renderer: Any, text: str, name: str, **attrs: Any) -> str:
    return f'<div class="admonition {escape_html(name)}">\n{text}</div>\n'


def render_admonition_title(renderer: Any, text: str) -> str:
    return f'<p class="admonition-title">{text}</p>\n'


def render_admonition_content(renderer: Any, text: str) -> str:
    return text


def admonition(md: Markdown) -> None:
    """Mistune plugin adding ``!!!`` admonition blocks.

    The rule runs before fenced code, also inside list items and block
    quotes.

    Examples
    --------
        >>> import mistune
        >>> md = mistune.create_markdown(plugins=[admonition])
        >>> md('!!! tip\\n    Use it.\\n')
        '<div class="admonition tip">\\n<p class="admonition-title">Tip</p>\\n<p>Use it.</p>\\n</div>\\n'

    """
    md.block.register("admonition", ADMONITION_PATTERN, parse_admonition, before="fenced_code")
    for rules in (md.block.list_rules, md.block.block_quote_rules):
        if "admonition" not in rules:
            md.block.insert_rule(rules, "admonition", before="fenced_code")

    if md.renderer is not None and md.renderer.NAME == "html":
        md.renderer.register("admonition", render_admonition)
        md.renderer.register("admonition_title", render_admonition_title)
        md.renderer.register("admonition_content", render_admonition_content)


@dataclass(frozen=True)
class AdmonitionEvent:
    """One event of the flattened admonition stream.

    Parameters
    ----------
    kind : str
        ``open``, ``title_open``, ``inline_title``, ``title_close`` or ``close``
    type_tag : str
        Canonical admonition type
    line_range : tuple of int
        Source lines of the admonition
    text : str, default ""
        Title text, for ``inline_title`` events

    """

    kind: AdmonitionEventKind
    type_tag: str
    line_range: tuple[int, int]
    text: str = ""


def _title_text(token: dict[str, Any]) -> str:
    if "text" in token:
        return str(token["text"])
    parts: list[str] = []
    for child in token.get("children", ()):
        if "raw" in child:
            parts.append(str(child["raw"]))
        elif "children" in child:
            parts.append(_title_text(child))
    return "".join(parts)


def iter_admonition_events(tokens: Iterable[dict[str, Any]]) -> Iterator[AdmonitionEvent]:
    """Flatten admonition tokens into a well-nested event stream.

    Tokens of other types are searched for nested admonitions but produce
    no events themselves.

    Parameters
    ----------
    tokens : iterable of dict
        Tokens from a mistune instance using the :func:`admonition` plugin
        and no renderer

    Yields
    ------
    AdmonitionEvent
        ``open``, ``title_open``/``inline_title``/``title_close``,
        events of nested admonitions, then ``close``

    """
    for token in tokens:
        if token.get("type") != "admonition":
            yield from iter_admonition_events(token.get("children", ()))
            continue

        attrs = token.get("attrs", {})
        type_tag = attrs.get("name", "")
        line_range = tuple(attrs.get("line_range", (0, 0)))
        yield AdmonitionEvent("open", type_tag, line_range)
        for child in token.get("children", ()):
            if child.get("type") == "admonition_title":
                yield AdmonitionEvent("title_open", type_tag, line_range)
                yield AdmonitionEvent("inline_title", type_tag, line_range, _title_text(child))
                yield AdmonitionEvent("title_close", type_tag, line_range)
            else:
                yield from iter_admonition_events(child.get("children", ()))
        yield AdmonitionEvent("close", type_tag, line_range)


__all__ = [
    "ADMONITION_PATTERN",
    "AdmonitionHeader",
    "ScannedAdmonition",
    "AdmonitionScanner",
    "BlockHost",
    "MistuneBlockHost",
    "AdmonitionEvent",
    "admonition",
    "parse_header",
    "parse_admonition",
    "build_admonition_token",
    "iter_admonition_events",
    "render_admonition",
    "render_admonition_title",
    "render_admonition_content",
]
