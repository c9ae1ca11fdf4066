"""Integration tests rendering converted documents as HTML previews."""

import pytest
from utils import doc, para, text

from adf2md import convert_document, to_markdown
from adf2md.preview import build_preview_page, render_preview


def annotated_document():
    def ref(local_id):
        return {"type": "annotation", "attrs": {"annotationType": "reference", "localId": local_id}}

    def definition(local_id, *content):
        attrs = {"annotationType": "definition", "localId": local_id}
        return {"type": "annotation", "attrs": attrs, "content": [para(*content)]}

    block = {
        "type": "annotation",
        "attrs": {"annotationType": "block"},
        "content": [para("Deploy ", ref("1"), " then verify ", ref("2"), "."), definition("1", "Staging first")],
    }
    second = {
        "type": "annotation",
        "attrs": {"annotationType": "block"},
        "content": [para("Roll back ", ref("1"), "."), definition("1", "Keep the ", text("old", "strong"), " build")],
    }
    return doc(block, second)


@pytest.mark.integration
class TestConvertThenPreview:
    """Test the Markdown produced by the converter inside the preview."""

    def test_sample_document_preview(self, sample_document):
        html = render_preview(to_markdown(sample_document)).html

        assert "<h2>Overview</h2>" in html
        assert "<strong>bold</strong>" in html
        assert "<ul>" in html
        assert 'class="language-python"' in html
        assert '<div class="admonition warning">' in html
        assert '<p class="admonition-title">Warning</p>' in html
        assert "<table>" in html

    def test_annotations_flow_into_tooltips(self):
        converted = convert_document(annotated_document(), emit_annotation_definitions=True)
        preview = render_preview(converted.markdown)

        assert 'data-md-annotation-id="1"' in preview.html
        assert 'data-md-annotation-id="3"' in preview.html
        assert preview.annotations["1"] == "<p>Staging first</p>\n"
        assert preview.annotations["3"] == "<p>Keep the <strong>old</strong> build</p>\n"
        assert "Staging first" not in preview.html

    def test_annotation_maps_agree(self):
        converted = convert_document(annotated_document(), emit_annotation_definitions=True)
        preview = render_preview(converted.markdown)
        assert set(preview.annotations) == set(converted.annotations)

    def test_annotation_map_backs_unwritten_definitions(self):
        converted = convert_document(annotated_document())
        preview = render_preview(converted.markdown, annotations=converted.annotations)

        assert "Staging first" not in converted.markdown
        assert preview.annotations == {
            "1": "<p>Staging first</p>\n",
            "3": "<p>Keep the <strong>old</strong> build</p>\n",
        }
        assert 'data-md-annotation-id="3"' in preview.html
        assert preview.findings == ("Orphaned annotation reference: (2)",)

    def test_without_annotation_map_markers_are_orphans(self):
        converted = convert_document(annotated_document())
        preview = render_preview(converted.markdown)

        assert preview.annotations == {}
        assert "Orphaned annotation reference: (1)" in preview.findings

    def test_footnotes_flow_into_preview(self):
        tree = doc(
            para("Claim", {"type": "footnote", "attrs": {"id": "src"}}),
            {"type": "footnote", "attrs": {"id": "src", "footnoteType": "definition"}, "content": [para("Source")]},
        )
        converted = convert_document(tree)
        preview = render_preview(converted.markdown)

        assert preview.footnotes == dict(converted.footnotes) == {"1": "Source"}
        assert '<li id="fn:1">' in preview.html
        assert preview.findings == ()

    def test_sibling_admonitions(self):
        panels = [
            {"type": "panel", "attrs": {"panelType": kind}, "content": [para(kind.title())]}
            for kind in ("note", "warning")
        ]
        html = render_preview(to_markdown(doc(*panels))).html

        assert html.count('<div class="admonition') == 2
        assert html.index("admonition note") < html.index("admonition warning")

    def test_full_page(self, sample_document):
        page = build_preview_page(render_preview(to_markdown(sample_document)))
        assert page.startswith("<!DOCTYPE html>")
        assert "<h2>Overview</h2>" in page
