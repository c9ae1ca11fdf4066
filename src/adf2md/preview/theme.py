#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/preview/theme.py
"""Standalone HTML pages for previews."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from adf2md.exceptions import RenderingError
from adf2md.options import PreviewOptions
from adf2md.preview.renderer import RenderedPreview
from adf2md.utils.escape import escape_html

logger = logging.getLogger(__name__)

MINIMAL_STYLESHEET = """\
body { font-family: system-ui, sans-serif; line-height: 1.6; max-width: 48rem; margin: 2rem auto; padding: 0 1rem; }
pre { background: #f5f5f5; padding: 0.75rem; overflow-x: auto; }
code { font-family: ui-monospace, monospace; }
table { border-collapse: collapse; }
th, td { border: 1px solid #ccc; padding: 0.25rem 0.5rem; }
blockquote { border-left: 4px solid #ddd; margin-left: 0; padding-left: 1rem; color: #555; }
.admonition { border-left: 4px solid #448aff; background: #f7f9ff; margin: 1rem 0; padding: 0.5rem 1rem; }
.admonition-title { font-weight: bold; margin: 0 0 0.5rem; }
.admonition.warning, .admonition.danger, .admonition.failure, .admonition.bug { border-color: #ff9100; }
.admonition.success, .admonition.tip { border-color: #00c853; }
.md-annotation__index [data-md-annotation-id]::before { content: "+"; font-weight: bold; }
.footnote { font-size: 0.9em; }
.md-annotation-tooltips { display: none; }
"""


def load_stylesheet(path: Optional[Union[str, Path]]) -> str:
    """Read a stylesheet, falling back to the built-in minimal style.

    A missing or unreadable file is not an error: a warning is logged and
    :data:`MINIMAL_STYLESHEET` is returned.
    """
    if path is None:
        return MINIMAL_STYLESHEET
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load stylesheet %s (%s); using the built-in minimal style", path, e)
        return MINIMAL_STYLESHEET


def _tooltip_section(annotations: Mapping[str, str]) -> str:
    if not annotations:
        return ""
    items = "".join(
        f'<div data-md-annotation-content="{escape_html(gid)}">{content}</div>\n'
        for gid, content in annotations.items()
    )
    return f'<div class="md-annotation-tooltips" hidden>\n{items}</div>\n'


def build_preview_page(preview: RenderedPreview, options: Optional[PreviewOptions] = None) -> str:
    """Wrap a rendered preview in a complete HTML document.

    Parameters
    ----------
    preview : RenderedPreview
        Output of :func:`adf2md.preview.render_preview`
    options : PreviewOptions, optional
        Supplies the page title and the stylesheet path

    Returns
    -------
    str
        HTML document with the stylesheet inlined and annotation tooltip
        contents appended in a hidden container

    """
    options = options or PreviewOptions()
    stylesheet = load_stylesheet(options.stylesheet_path)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="utf-8">\n'
        f"<title>{escape_html(options.title)}</title>\n"
        f"<style>\n{stylesheet}</style>\n"
        "</head>\n<body>\n"
        f"{preview.html}"
        f"{_tooltip_section(preview.annotations)}"
        "</body>\n</html>\n"
    )


def write_preview_page(
    preview: RenderedPreview, output_path: Union[str, Path], options: Optional[PreviewOptions] = None
) -> Path:
    """Write a preview page to ``output_path``.

    Raises
    ------
    RenderingError
        If the file cannot be written

    """
    path = Path(output_path)
    try:
        path.write_text(build_preview_page(preview, options), encoding="utf-8")
    except OSError as e:
        raise RenderingError(f"Cannot write preview to {path}: {e}", output_path=str(path), original_error=e) from e
    logger.info("Wrote preview to %s", path)
    return path


__all__ = ["MINIMAL_STYLESHEET", "load_stylesheet", "build_preview_page", "write_preview_page"]
