"""Unit tests for escaping Markdown syntax in converted text."""

import mistune
import pytest
from utils import cell, doc, para, table, text

from adf2md import to_markdown
from adf2md.preview import render_preview
from adf2md.utils.escape import escape_block_start, escape_heading_text, escape_markdown, escape_table_cell

HARD_BREAK = {"type": "hardBreak"}


def parse_blocks(markdown):
    tokens, _ = mistune.create_markdown(renderer=None, plugins=["strikethrough", "table"]).parse(markdown)
    return [token for token in tokens if token["type"] != "blank_line"]


def literal_text(token):
    """Text of an inline token tree; any inline markup shows up as ``<type>``."""
    kind = token["type"]
    if kind == "text":
        return token["raw"]
    if kind in ("linebreak", "softbreak"):
        return "\n"
    inner = "".join(literal_text(child) for child in token.get("children", []))
    if kind in ("paragraph", "heading", "block_text"):
        return inner
    return f"<{kind}>{inner}"


@pytest.mark.unit
class TestEscapeMarkdown:
    """Test escaping of single text runs."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("*stars*", "\\*stars\\*"),
            ("a\\b", "a\\\\b"),
            ("[x](y)", "\\[x\\](y)"),
            ("`tick`", "\\`tick\\`"),
            ("{braces}", "\\{braces\\}"),
            ("~~old~~", "\\~\\~old\\~\\~"),
            ("<b>", "\\<b>"),
            ("#1 and #2", "\\#1 and #2"),
        ],
    )
    def test_special_characters(self, value, expected):
        assert escape_markdown(value) == expected

    def test_underscore_inside_word_kept(self):
        assert escape_markdown("snake_case") == "snake_case"

    def test_underscore_at_word_edges_escaped(self):
        assert escape_markdown("_lead and trail_") == "\\_lead and trail\\_"

    def test_plain_text_unchanged(self):
        assert escape_markdown("Hello, world (1).") == "Hello, world (1)."


@pytest.mark.unit
class TestEscapeBlockStart:
    """Test escaping of markers that would open a block."""

    @pytest.mark.parametrize(
        "line,expected",
        [
            ("- item", "\\- item"),
            ("+ item", "\\+ item"),
            ("-", "\\-"),
            ("1. first", "1\\. first"),
            ("2) second", "2\\) second"),
            ("123456789. big", "123456789\\. big"),
            ("> quote", "\\> quote"),
            ("#tag", "\\#tag"),
            ("---", "\\---"),
            ("===", "\\==="),
            ("- - -", "\\- - -"),
            ("| --- | --- |", "| \\--- | --- |"),
            (":-|-", ":\\-|-"),
            ("|", "\\|"),
            ("| |", "\\| |"),
            ("!!! note", "\\!!! note"),
            ("  - indented", "  \\- indented"),
        ],
    )
    def test_markers_escaped(self, line, expected):
        assert escape_block_start(line) == expected

    @pytest.mark.parametrize("line", ["-dash", "1.5 percent", "2024 was", "\\# done", "text - more", "a|b", ":", ""])
    def test_ordinary_lines_unchanged(self, line):
        assert escape_block_start(line) == line

    def test_table_cell_pipes(self):
        assert escape_table_cell("a | b") == "a \\| b"
        assert escape_table_cell("\\| b") == "\\| b"
        assert escape_table_cell("\\\\| b") == "\\\\\\| b"

    def test_heading_closing_sequence(self):
        assert escape_heading_text("Issue #") == "Issue \\#"
        assert escape_heading_text("C# guide") == "C# guide"
        assert escape_heading_text("###") == "\\###"


@pytest.mark.unit
class TestEscapedConversion:
    """Test that converted text reads back literally."""

    @pytest.mark.parametrize(
        "value",
        [
            "# not a heading",
            "- not a list",
            "+ not a list",
            "1. not a list",
            "2) not a list",
            "> not a quote",
            "---",
            "===",
            "*not emphasis*",
            "_not emphasis_",
            "~~not struck~~",
            "[not](a link)",
            "`not code`",
            "<b>not html</b>",
            "back\\slash",
            "!!! note",
        ],
    )
    def test_paragraph_text_reads_back(self, value):
        blocks = parse_blocks(to_markdown(doc(para(value))))

        assert [block["type"] for block in blocks] == ["paragraph"]
        assert literal_text(blocks[0]) == value

    def test_line_after_hard_break(self):
        blocks = parse_blocks(to_markdown(doc(para("intro", HARD_BREAK, "- item", HARD_BREAK, "# title"))))

        assert [block["type"] for block in blocks] == ["paragraph"]
        assert literal_text(blocks[0]) == "intro\n- item\n# title"

    def test_heading_keeps_trailing_hash(self):
        heading = {"type": "heading", "attrs": {"level": 2}, "content": [text("Issue #")]}
        markdown = to_markdown(doc(heading))
        blocks = parse_blocks(markdown)

        assert markdown == "## Issue \\#"
        assert literal_text(blocks[0]) == "Issue #"

    def test_marks_wrap_escaped_text(self):
        assert to_markdown(doc(para(text("2*3", "strong")))) == "**2\\*3**"

    def test_code_span_not_escaped(self):
        assert to_markdown(doc(para(text("a*b_c", "code")))) == "`a*b_c`"

    def test_link_text_escaped(self):
        link = {"type": "link", "attrs": {"href": "https://x.org"}}
        assert to_markdown(doc(para(text("[1]", link)))) == "[\\[1\\]](https://x.org)"

    def test_escaping_can_be_disabled(self):
        assert to_markdown(doc(para("*raw* markdown")), escape_special=False) == "*raw* markdown"

    def test_admonition_header_text_stays_paragraph(self):
        html = render_preview(to_markdown(doc(para("!!! warning")))).html

        assert "admonition" not in html
        assert "<p>!!! warning</p>" in html

    def test_pipe_line_after_hard_break_is_not_a_delimiter_row(self):
        blocks = parse_blocks(to_markdown(doc(para("a|b", HARD_BREAK, "|"))))

        assert [block["type"] for block in blocks] == ["paragraph"]
        assert literal_text(blocks[0]) == "a|b\n|"

    @pytest.mark.parametrize("value", ["|", "||", "-|-", "a\\|b"])
    def test_table_cell_reads_back(self, value):
        tree = doc(table([cell("Key", header=True), cell("Value", header=True)], [cell(value), cell("x")]))
        blocks = parse_blocks(to_markdown(tree, property_tables=False))

        assert [block["type"] for block in blocks] == ["table"]
        row = blocks[0]["children"][1]["children"][0]["children"]
        assert ["".join(literal_text(child) for child in item["children"]) for item in row] == [value, "x"]
