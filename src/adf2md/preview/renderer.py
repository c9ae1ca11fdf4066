#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/preview/renderer.py
"""HTML preview rendering of converted Markdown.

The preview pipeline is a mistune HTML renderer with tables,
strikethrough, footnotes and the admonition plugin. On top of the stock
output it:

- renders footnotes in the Material for MkDocs layout (``fnref:N`` and
  ``fn:N`` anchors with a back-reference arrow);
- runs the annotation line processor over the source first, then turns the
  renumbered ``(N)`` markers inside paragraphs into annotation markers and
  renders each definition as tooltip HTML;
- hands fenced code to an injected highlighter.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping, Optional

import mistune

from adf2md.annotations import ANNOTATE_BLOCK_PATTERN, AnnotationProcessor, AnnotationState
from adf2md.footnotes import validate_footnotes
from adf2md.options import PreviewOptions
from adf2md.preview.admonition import admonition
from adf2md.utils.escape import escape_html

logger = logging.getLogger(__name__)

Highlighter = Callable[[str, Optional[str]], str]

_MARKER_PATTERN = re.compile(r"\((\d+)\)")

ANNOTATION_MARKER_TEMPLATE = (
    '<span class="md-annotation" tabindex="0" data-md-visible="">'
    '<span class="md-annotation__index" tabindex="-1">'
    '<span data-md-annotation-id="{id}"></span>'
    "</span></span>"
)


def default_highlight(code: str, language: Optional[str]) -> str:
    """Render code without highlighting, as an escaped ``<pre><code>`` block."""
    css_class = f' class="language-{escape_html(language)}"' if language else ""
    return f"<pre><code{css_class}>{escape_html(code, quote=False)}</code></pre>\n"


class PreviewRenderer(mistune.HTMLRenderer):
    """Mistune HTML renderer with preview-specific overrides.

    Parameters
    ----------
    options : PreviewOptions, optional
        Preview settings
    highlight : callable, optional
        ``(code, language) -> html`` used for fenced code blocks
    annotation_ids : iterable of str, optional
        Global annotation ids whose ``(N)`` markers are turned into
        annotation markers

    """

    def __init__(
        self,
        options: Optional[PreviewOptions] = None,
        highlight: Optional[Highlighter] = None,
        annotation_ids: Iterable[str] = (),
    ):
        """Initialize the renderer."""
        self.options = options or PreviewOptions()
        super().__init__(escape=self.options.escape_html)
        self._highlight = highlight or default_highlight
        self.annotation_ids = set(annotation_ids)

    def block_code(self, code: str, info: Optional[str] = None) -> str:
        language = info.split(None, 1)[0] if info and info.strip() else None
        return self._highlight(code, language)

    def paragraph(self, text: str) -> str:
        if ANNOTATE_BLOCK_PATTERN.fullmatch(text.strip()):
            return ""
        if self.annotation_ids:
            text = _MARKER_PATTERN.sub(self._annotation_marker, text)
        return super().paragraph(text)

    def _annotation_marker(self, match: re.Match[str]) -> str:
        annotation_id = match.group(1)
        if annotation_id not in self.annotation_ids:
            return match.group(0)
        return ANNOTATION_MARKER_TEMPLATE.format(id=annotation_id)

    def footnote_ref(self, key: str, index: int) -> str:
        ref_id = escape_html(key)
        return (
            f'<sup id="fnref:{ref_id}"><a href="#fn:{ref_id}" class="footnote-ref" '
            f'data-footnote-id="{ref_id}">{index}</a></sup>'
        )

    def footnotes(self, text: str) -> str:
        return f'<div class="footnote">\n<hr />\n<ol>\n{text}</ol>\n</div>\n'

    def footnote_item(self, text: str, key: str, index: int) -> str:
        ref_id = escape_html(key)
        back = f'<a href="#fnref:{ref_id}" class="footnote-backref">&#8617;</a>'
        text = text.rstrip()
        if text.endswith("</p>"):
            text = f"{text[:-4]} {back}</p>"
        else:
            text = f"{text}\n{back}"
        return f'<li id="fn:{ref_id}">{text}</li>\n'


@dataclass(frozen=True)
class RenderedPreview:
    """HTML body of a preview plus its side tables.

    Parameters
    ----------
    html : str
        Rendered HTML fragment
    annotations : Mapping
        Tooltip HTML keyed by global annotation id
    footnotes : Mapping
        Footnote definition source text keyed by footnote label
    findings : tuple of str
        Orphaned footnotes and annotations found in the source

    """

    html: str
    annotations: Mapping[str, str] = field(default_factory=dict)
    footnotes: Mapping[str, str] = field(default_factory=dict)
    findings: tuple[str, ...] = ()


def create_preview_markdown(renderer: Optional[mistune.BaseRenderer] = None) -> mistune.Markdown:
    """Create the mistune pipeline used for previews.

    Parameters
    ----------
    renderer : BaseRenderer, optional
        Renderer instance; None produces the token AST instead of HTML

    """
    return mistune.create_markdown(renderer=renderer, plugins=["table", "strikethrough", "footnotes", admonition])


def render_preview(
    markdown: str,
    options: Optional[PreviewOptions] = None,
    highlight: Optional[Highlighter] = None,
    annotations: Optional[Mapping[str, str]] = None,
) -> RenderedPreview:
    """Render Markdown to preview HTML.

    Parameters
    ----------
    markdown : str
        Markdown source, typically produced by :func:`adf2md.to_markdown`
    options : PreviewOptions, optional
        Preview settings
    highlight : callable, optional
        ``(code, language) -> html`` used for fenced code blocks
    annotations : Mapping, optional
        Annotation definition contents keyed by global id, as collected by
        :func:`adf2md.convert_document`; they back markers whose definitions
        were not written into ``markdown``

    Returns
    -------
    RenderedPreview
        HTML fragment with annotation tooltips, footnotes and findings

    """
    options = options or PreviewOptions()
    state = AnnotationState()
    source = markdown
    if options.process_annotations:
        source = AnnotationProcessor(state).process(markdown)
        if annotations:
            state.add_definitions(annotations)

    annotation_ids = set(state.referenced) | set(state.global_definitions)
    renderer = PreviewRenderer(options, highlight, annotation_ids)
    md = create_preview_markdown(renderer)
    html, block_state = md.parse(source)

    tooltip_md = mistune.create_markdown(escape=options.escape_html, plugins=["strikethrough"])
    tooltips = {gid: str(tooltip_md(content)) for gid, content in state.tooltip_contents().items()}

    footnote_sources: dict[str, str] = {
        str(key): str(text).strip() for key, text in block_state.env.get("ref_footnotes", {}).items()
    }

    findings = validate_footnotes(markdown)
    if options.process_annotations:
        findings.extend(state.findings())
    if findings:
        logger.debug("Preview source has %d findings", len(findings))

    return RenderedPreview(html=str(html), annotations=tooltips, footnotes=footnote_sources, findings=tuple(findings))


def parse_preview_tokens(markdown: str) -> list[dict[str, Any]]:
    """Parse Markdown with the preview syntax into mistune tokens."""
    tokens, _ = create_preview_markdown().parse(markdown)
    return list(tokens)


__all__ = [
    "Highlighter",
    "PreviewRenderer",
    "RenderedPreview",
    "default_highlight",
    "create_preview_markdown",
    "render_preview",
    "parse_preview_tokens",
    "ANNOTATION_MARKER_TEMPLATE",
]
