"""Unit tests for preview rendering and preview pages."""

import logging

import pytest

from adf2md.exceptions import RenderingError
from adf2md.options import PreviewOptions
from adf2md.preview import (
    MINIMAL_STYLESHEET,
    RenderedPreview,
    build_preview_page,
    default_highlight,
    load_stylesheet,
    render_preview,
    write_preview_page,
)


@pytest.mark.unit
class TestRenderPreview:
    """Test the HTML renderer overrides."""

    def test_annotation_markers(self):
        preview = render_preview("{ .annotate }\n\nSee (1).\n\n1. A note")

        assert 'data-md-annotation-id="1"' in preview.html
        assert ".annotate" not in preview.html
        assert "A note" not in preview.html
        assert preview.annotations == {"1": "<p>A note</p>\n"}
        assert preview.findings == ()

    def test_numbers_outside_blocks_untouched(self):
        preview = render_preview("Released in (2024).\n\n{ .annotate }\n\nSee (1).\n\n1. Note")
        assert "<p>Released in (2024).</p>" in preview.html

    def test_annotations_disabled(self):
        preview = render_preview("{ .annotate }\n\nSee (1).", PreviewOptions(process_annotations=False))
        assert "<p>See (1).</p>" in preview.html
        assert preview.annotations == {}

    def test_footnote_layout(self):
        preview = render_preview("Text[^1]\n\n[^1]: The note\n")

        assert (
            '<sup id="fnref:1"><a href="#fn:1" class="footnote-ref" data-footnote-id="1">1</a></sup>' in preview.html
        )
        assert '<div class="footnote">\n<hr />\n<ol>\n' in preview.html
        assert (
            '<li id="fn:1"><p>The note <a href="#fnref:1" class="footnote-backref">&#8617;</a></p></li>'
            in preview.html
        )
        assert preview.footnotes == {"1": "The note"}

    def test_orphaned_footnote_reported(self):
        preview = render_preview("Text[^9]")
        assert preview.findings == ("Orphaned footnote reference: [^9]",)

    def test_highlighter_injected(self):
        preview = render_preview("```python\nx = 1\n```\n", highlight=lambda code, lang: f"<X {lang}>{code}</X>")
        assert "<X python>x = 1\n</X>" in preview.html

    def test_default_highlight_escapes(self):
        assert default_highlight("a<b", "py") == '<pre><code class="language-py">a&lt;b</code></pre>\n'
        assert default_highlight("x", None) == "<pre><code>x</code></pre>\n"

    def test_raw_html_escaping(self):
        assert "<b>x</b>" in render_preview("<b>x</b> text").html
        assert "&lt;b&gt;" in render_preview("<b>x</b> text", PreviewOptions(escape_html=True)).html

    def test_tables_and_strikethrough(self):
        html = render_preview("| a | b |\n| --- | --- |\n| 1 | 2 |\n\n~~gone~~").html
        assert "<table>" in html
        assert "<del>gone</del>" in html

    def test_admonition_rendered(self):
        html = render_preview("!!! warning\n\n    Careful\n").html
        assert '<div class="admonition warning">' in html
        assert "<p>Careful</p>" in html


@pytest.mark.unit
class TestPreviewPage:
    """Test stylesheet loading and page assembly."""

    def test_default_stylesheet(self):
        assert load_stylesheet(None) == MINIMAL_STYLESHEET

    def test_custom_stylesheet(self, tmp_path):
        css = tmp_path / "theme.css"
        css.write_text("body { color: red; }\n", encoding="utf-8")
        assert load_stylesheet(css) == "body { color: red; }\n"

    def test_missing_stylesheet_falls_back(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="adf2md"):
            assert load_stylesheet(tmp_path / "missing.css") == MINIMAL_STYLESHEET
        assert "Could not load stylesheet" in caplog.text

    def test_page_contents(self):
        preview = RenderedPreview(html="<p>Body</p>\n", annotations={"1": "<p>Tip</p>\n"})
        page = build_preview_page(preview, PreviewOptions(title="Notes <draft>"))

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Notes &lt;draft&gt;</title>" in page
        assert "<p>Body</p>" in page
        assert '<div data-md-annotation-content="1"><p>Tip</p>\n</div>' in page

    def test_page_without_annotations(self):
        page = build_preview_page(RenderedPreview(html="<p>x</p>\n"))
        assert "md-annotation-tooltips" not in page.split("</style>")[1]

    def test_write_page(self, tmp_path):
        target = write_preview_page(RenderedPreview(html="<p>x</p>\n"), tmp_path / "out.html")
        assert target.read_text(encoding="utf-8").endswith("</html>\n")

    def test_write_page_failure(self, tmp_path):
        with pytest.raises(RenderingError) as exc_info:
            write_preview_page(RenderedPreview(html=""), tmp_path / "missing" / "out.html")
        assert exc_info.value.output_path.endswith("out.html")
