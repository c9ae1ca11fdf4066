#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/utils/__init__.py
"""Text helpers shared by the converters and the preview renderer."""

from adf2md.utils.escape import escape_html, escape_table_cell, strip_strong_markers
from adf2md.utils.text import collapse_blank_lines, detect_mermaid_syntax, fence_for, longest_backtick_run

__all__ = [
    "escape_html",
    "escape_table_cell",
    "strip_strong_markers",
    "collapse_blank_lines",
    "detect_mermaid_syntax",
    "fence_for",
    "longest_backtick_run",
]
