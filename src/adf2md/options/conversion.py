#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for document-to-Markdown conversion."""
# src/adf2md/options/conversion.py

from __future__ import annotations

from dataclasses import dataclass, field

from adf2md.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_COLLAPSE_BLANK_LINES,
    DEFAULT_EMIT_ANNOTATION_DEFINITIONS,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_INCLUDE_FOOTNOTES,
    DEFAULT_MAX_NESTING_DEPTH,
    DEFAULT_PROPERTY_TABLES,
    MAX_NESTING_DEPTH_LIMIT,
)
from adf2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    """Configuration options for converting a document tree to Markdown.

    Parameters
    ----------
    base_url : str, default ""
        Base URL used to resolve relative link targets
    max_nesting_depth : int, default 64
        Recursion ceiling for loading and walking the tree, at most 256;
        deeper documents raise NestingDepthError
    property_tables : bool, default True
        Render two-column key/value tables as ``**key:** value`` lines
    emit_annotation_definitions : bool, default False
        Keep annotation definitions as ``N. text`` lines after each annotated
        block instead of collecting them only as tooltip content
    collapse_blank_lines : bool, default True
        Collapse runs of three or more newlines into one blank line
    include_footnotes : bool, default True
        Append collected footnote definitions at the end of the document
    escape_special : bool, default True
        Backslash-escape text that Markdown would otherwise read as
        formatting or block syntax

    """

    base_url: str = field(
        default=DEFAULT_BASE_URL,
        metadata={"help": "Base URL used to resolve relative link targets", "importance": "core"},
    )
    max_nesting_depth: int = field(
        default=DEFAULT_MAX_NESTING_DEPTH,
        metadata={"help": "Maximum document nesting depth before conversion fails", "importance": "security"},
    )
    property_tables: bool = field(
        default=DEFAULT_PROPERTY_TABLES,
        metadata={"help": "Render two-column key/value tables as bold key lines", "importance": "core"},
    )
    emit_annotation_definitions: bool = field(
        default=DEFAULT_EMIT_ANNOTATION_DEFINITIONS,
        metadata={"help": "Keep annotation definitions as numbered lines in the output", "importance": "advanced"},
    )
    collapse_blank_lines: bool = field(
        default=DEFAULT_COLLAPSE_BLANK_LINES,
        metadata={"help": "Collapse multiple blank lines into one", "importance": "advanced"},
    )
    include_footnotes: bool = field(
        default=DEFAULT_INCLUDE_FOOTNOTES,
        metadata={"help": "Append footnote definitions at the end of the document", "importance": "core"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape special Markdown characters in text", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate numeric ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.max_nesting_depth < 1:
            raise ValueError(f"max_nesting_depth must be positive, got {self.max_nesting_depth}")
        if self.max_nesting_depth > MAX_NESTING_DEPTH_LIMIT:
            raise ValueError(
                f"max_nesting_depth must be at most {MAX_NESTING_DEPTH_LIMIT}, got {self.max_nesting_depth}"
            )
