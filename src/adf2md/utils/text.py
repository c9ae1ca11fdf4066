#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/text.py
"""Plain-text inspection helpers."""

from __future__ import annotations

import re

from adf2md.constants import CODE_FENCE, MERMAID_DIAGRAM_KEYWORDS

_BACKTICK_RUN = re.compile(r"`+")
_FENCE_LINE = re.compile(r"^\s*(`{3,}|~{3,})")


def detect_mermaid_syntax(code: str) -> bool:
    """Check whether source code looks like a Mermaid diagram.

    The first non-blank line must start with a diagram keyword such as
    ``graph`` or ``sequenceDiagram``, followed by whitespace or the end of
    the line.

    Parameters
    ----------
    code : str
        Code block content

    Returns
    -------
    bool
        True when the content is recognized as Mermaid

    """
    for line in code.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        head = stripped.split(None, 1)[0]
        return head in MERMAID_DIAGRAM_KEYWORDS
    return False


def longest_backtick_run(text: str) -> int:
    """Return the length of the longest run of backticks in ``text``."""
    return max((len(m.group(0)) for m in _BACKTICK_RUN.finditer(text)), default=0)


def fence_for(code: str) -> str:
    """Return a backtick fence longer than any backtick run in ``code``."""
    run = longest_backtick_run(code)
    if run < len(CODE_FENCE):
        return CODE_FENCE
    return "`" * (run + 1)


def _closes_fence(line: str, marker: str, fence: str) -> bool:
    return marker.startswith(fence) and not line.strip()[len(marker) :]


def collapse_blank_lines(text: str) -> str:
    """Collapse runs of blank lines into a single blank line.

    Lines inside fenced code blocks are left untouched.
    """
    output: list[str] = []
    fence: str | None = None
    blank_run = 0
    for line in text.split("\n"):
        match = _FENCE_LINE.match(line)
        if fence is None and match:
            fence = match.group(1)
        elif fence is not None and match and _closes_fence(line, match.group(1), fence):
            fence = None
        elif fence is None and not line.strip():
            blank_run += 1
            if blank_run > 1:
                continue
            output.append("")
            continue
        blank_run = 0
        output.append(line)
    return "\n".join(output)
