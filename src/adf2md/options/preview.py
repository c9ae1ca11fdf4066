#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML preview rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from adf2md.constants import DEFAULT_ESCAPE_HTML, DEFAULT_PREVIEW_TITLE, DEFAULT_PROCESS_ANNOTATIONS
from adf2md.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class PreviewOptions(CloneFrozenMixin):
    """Configuration options for rendering Markdown to an HTML preview.

    Parameters
    ----------
    stylesheet_path : Path or None, default None
        Stylesheet inlined into preview pages; the built-in minimal style is
        used when unset or unreadable
    escape_html : bool, default False
        Escape raw HTML found in the Markdown source
    process_annotations : bool, default True
        Rewrite ``{ .annotate }`` blocks into annotation markers
    title : str, default "Preview"
        Title of generated preview pages

    """

    stylesheet_path: Optional[Path] = field(
        default=None,
        metadata={"help": "Stylesheet to inline into preview pages", "importance": "core"},
    )
    escape_html: bool = field(
        default=DEFAULT_ESCAPE_HTML,
        metadata={"help": "Escape raw HTML in the Markdown source", "importance": "security"},
    )
    process_annotations: bool = field(
        default=DEFAULT_PROCESS_ANNOTATIONS,
        metadata={"help": "Turn annotated blocks into annotation markers", "importance": "core"},
    )
    title: str = field(
        default=DEFAULT_PREVIEW_TITLE,
        metadata={"help": "Title of generated preview pages", "importance": "advanced"},
    )
