#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/preview/__init__.py
"""HTML preview of converted Markdown, including the admonition block syntax."""

from adf2md.preview.admonition import (
    AdmonitionEvent,
    AdmonitionScanner,
    BlockHost,
    MistuneBlockHost,
    admonition,
    iter_admonition_events,
)
from adf2md.preview.renderer import (
    PreviewRenderer,
    RenderedPreview,
    create_preview_markdown,
    default_highlight,
    parse_preview_tokens,
    render_preview,
)
from adf2md.preview.theme import MINIMAL_STYLESHEET, build_preview_page, load_stylesheet, write_preview_page

__all__ = [
    "AdmonitionEvent",
    "AdmonitionScanner",
    "BlockHost",
    "MistuneBlockHost",
    "admonition",
    "iter_admonition_events",
    "PreviewRenderer",
    "RenderedPreview",
    "create_preview_markdown",
    "default_highlight",
    "parse_preview_tokens",
    "render_preview",
    "MINIMAL_STYLESHEET",
    "build_preview_page",
    "load_stylesheet",
    "write_preview_page",
]
