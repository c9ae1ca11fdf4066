#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for adf2md.

This module centralizes hardcoded values, lookup tables and default
configuration constants used across the converter and the preview
pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Conversion Defaults - Markdown output settings
3. Syntax Surfaces - Sentinels and markers recognized in Markdown text
4. Lookup Tables - Admonition aliases, panel mapping, icons
5. Preview Defaults - HTML preview settings
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

AnnotationType = Literal["reference", "definition", "block"]
FootnoteType = Literal["reference", "definition"]
AdmonitionEventKind = Literal["open", "title_open", "inline_title", "title_close", "close"]

# =============================================================================
# Conversion Defaults
# =============================================================================

DEFAULT_BASE_URL = ""
DEFAULT_MAX_NESTING_DEPTH = 64
MAX_NESTING_DEPTH_LIMIT = 256
DEFAULT_PROPERTY_TABLES = True
DEFAULT_EMIT_ANNOTATION_DEFINITIONS = False
DEFAULT_COLLAPSE_BLANK_LINES = True
DEFAULT_INCLUDE_FOOTNOTES = True
DEFAULT_ESCAPE_SPECIAL = True

BULLET_MARKER = "-"
BULLET_INDENT_WIDTH = 2
CODE_FENCE = "```"
HEADING_MIN_LEVEL = 1
HEADING_MAX_LEVEL = 6
TABLE_SEPARATOR_CELL = "---"
TABLE_CELL_LINE_BREAK = "<br>"
HARD_BREAK = "\\\n"
THEMATIC_BREAK = "---"
ADMONITION_BODY_INDENT = 4

# =============================================================================
# Syntax Surfaces
# =============================================================================

ANNOTATE_SENTINEL = "{ .annotate }"
ADMONITION_MARKER = "!!!"
MERMAID_LANGUAGE = "mermaid"

# First-line keywords that identify Mermaid diagram sources
MERMAID_DIAGRAM_KEYWORDS = (
    "graph",
    "flowchart",
    "sequenceDiagram",
    "classDiagram",
    "stateDiagram",
    "stateDiagram-v2",
    "erDiagram",
    "journey",
    "gantt",
    "pie",
    "quadrantChart",
    "requirementDiagram",
    "gitGraph",
    "mindmap",
    "timeline",
    "C4Context",
    "sankey-beta",
    "xychart-beta",
    "block-beta",
)

# =============================================================================
# Lookup Tables
# =============================================================================

# Accepted admonition spellings mapped to their canonical type
ADMONITION_ALIASES: dict[str, str] = {
    "note": "note",
    "abstract": "abstract",
    "summary": "abstract",
    "tldr": "abstract",
    "info": "info",
    "todo": "info",
    "tip": "tip",
    "hint": "tip",
    "important": "tip",
    "success": "success",
    "check": "success",
    "done": "success",
    "question": "question",
    "help": "question",
    "faq": "question",
    "warning": "warning",
    "caution": "warning",
    "attention": "warning",
    "failure": "failure",
    "fail": "failure",
    "missing": "failure",
    "danger": "danger",
    "error": "danger",
    "bug": "bug",
    "example": "example",
    "quote": "quote",
    "cite": "quote",
}

ADMONITION_DEFAULT_TITLES: dict[str, str] = {
    "note": "Note",
    "abstract": "Abstract",
    "info": "Info",
    "tip": "Tip",
    "success": "Success",
    "question": "Question",
    "warning": "Warning",
    "failure": "Failure",
    "danger": "Danger",
    "bug": "Bug",
    "example": "Example",
    "quote": "Quote",
}

# Panel types of the source editor mapped to admonition types
PANEL_ADMONITION_TYPES: dict[str, str] = {
    "info": "info",
    "note": "note",
    "warning": "warning",
    "success": "success",
    "error": "danger",
    "tip": "tip",
    "custom": "note",
}

ICON_MAP: dict[str, str] = {
    "custom": "📝",
    "warning": "⚠️",
    "success": "✅",
    "error": "⛔",
    "info": "💡",
    "note": "📝",
    "neutral": "⚪",
    "blue": "🔵",
    "green": "🟢",
    "yellow": "🟡",
    "red": "🔴",
    "purple": "🟣",
    "x": "❌",
    "check_mark": "✔️",
    "smile": "😃",
    "sad": "😢",
    "wink": "😉",
    "laugh": "😆",
    "angry": "😠",
    "thumbs_up": "👍",
    "thumbs_down": "👎",
    "blush": "😊",
    "surprised": "😮",
    "cry": "😭",
    "cool": "😎",
}

# =============================================================================
# Preview Defaults
# =============================================================================

DEFAULT_PREVIEW_TITLE = "Preview"
DEFAULT_ESCAPE_HTML = False
DEFAULT_PROCESS_ANNOTATIONS = True
ENV_PREFIX = "ADF2MD_"
