"""Unit tests for headings, rules, block quotes, panels, expands and media."""

import pytest
from utils import doc, para, text

from adf2md import to_markdown
from adf2md.converters.blocks import indent_block, render_admonition


def heading(level, *content):
    content = [text(c) if isinstance(c, str) else c for c in content]
    return {"type": "heading", "attrs": {"level": level}, "content": content}


@pytest.mark.unit
class TestHeadings:
    """Test ATX heading output."""

    @pytest.mark.parametrize(
        "level,expected",
        [(1, "# Title"), (3, "### Title"), (6, "###### Title"), (9, "###### Title"), (0, "# Title"), ("2", "# Title")],
    )
    def test_level_is_clamped(self, level, expected):
        assert to_markdown(doc(heading(level, "Title"))) == expected

    def test_hard_break_becomes_space(self):
        assert to_markdown(doc(heading(2, "a", {"type": "hardBreak"}, "b"))) == "## a b"

    def test_empty_heading(self):
        assert to_markdown(doc(heading(2))) == "##"

    def test_inline_formatting_kept(self):
        assert to_markdown(doc(heading(2, text("API", "code"), " usage"))) == "## `API` usage"


@pytest.mark.unit
class TestSimpleBlocks:
    """Test paragraphs, rules and block quotes."""

    def test_paragraphs_separated_by_blank_line(self):
        assert to_markdown(doc(para("a"), para("b"))) == "a\n\nb"

    def test_empty_paragraph_skipped(self):
        assert to_markdown(doc(para("a"), para(), para("b"))) == "a\n\nb"

    def test_rule(self):
        assert to_markdown(doc(para("a"), {"type": "rule"}, para("b"))) == "a\n\n---\n\nb"

    def test_blockquote(self):
        quote = {"type": "blockquote", "content": [para("first"), para("second")]}
        assert to_markdown(doc(quote)) == "> first\n>\n> second"

    def test_empty_blockquote(self):
        assert to_markdown(doc({"type": "blockquote", "content": []})) == ""


@pytest.mark.unit
class TestAdmonitions:
    """Test panels and expands rendered as admonitions."""

    @pytest.mark.parametrize(
        "panel_type,admonition_type",
        [("info", "info"), ("note", "note"), ("warning", "warning"), ("error", "danger"), ("success", "success")],
    )
    def test_panel_types(self, panel_type, admonition_type):
        panel = {"type": "panel", "attrs": {"panelType": panel_type}, "content": [para("Body")]}
        assert to_markdown(doc(panel)) == f"!!! {admonition_type}\n\n    Body"

    def test_unknown_panel_type_is_note(self):
        panel = {"type": "panel", "attrs": {"panelType": "fancy"}, "content": [para("Body")]}
        assert to_markdown(doc(panel)).startswith("!!! note\n")

    def test_panel_body_blocks_indented(self):
        panel = {"type": "panel", "attrs": {"panelType": "info"}, "content": [para("one"), para("two")]}
        assert to_markdown(doc(panel)) == "!!! info\n\n    one\n\n    two"

    def test_panel_with_list_restarts_indentation(self):
        panel = {
            "type": "panel",
            "attrs": {"panelType": "tip"},
            "content": [{"type": "bulletList", "content": [{"type": "listItem", "content": [para("x")]}]}],
        }
        assert to_markdown(doc(panel)) == "!!! tip\n\n    - x"

    def test_expand_has_title(self):
        expand = {"type": "expand", "attrs": {"title": "More   details"}, "content": [para("Hidden")]}
        assert to_markdown(doc(expand)) == '!!! note "More details"\n\n    Hidden'

    def test_expand_without_title(self):
        expand = {"type": "nestedExpand", "content": [para("Hidden")]}
        assert to_markdown(doc(expand)) == "!!! note\n\n    Hidden"

    def test_render_admonition_without_body(self):
        assert render_admonition("warning", "") == "!!! warning"

    def test_indent_block_leaves_blank_lines_empty(self):
        assert indent_block("a\n\nb", "    ") == "    a\n\n    b"


@pytest.mark.unit
class TestMedia:
    """Test media nodes."""

    def test_media_with_url(self):
        media = {
            "type": "mediaSingle",
            "content": [{"type": "media", "attrs": {"url": "images/a b.png", "alt": "Pic"}}],
        }
        result = to_markdown(doc(media), base_url="https://example.com/wiki/")
        assert result == "![Pic](https://example.com/wiki/images/a%20b.png)"

    def test_media_without_url_uses_alt_text(self):
        media = {"type": "mediaSingle", "content": [{"type": "media", "attrs": {"id": "abc", "alt": "Diagram"}}]}
        assert to_markdown(doc(media)) == "Diagram"
