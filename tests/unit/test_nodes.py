"""Unit tests for the document tree classes."""

import pytest
from utils import para, text

from adf2md.exceptions import NestingDepthError
from adf2md.nodes import DocumentNode, Mark, MarkType, NodeType, extract_text


def nested_node(depth):
    node = DocumentNode(type="text", text="deep")
    for _ in range(depth):
        node = DocumentNode(type="extension", children=(node,))
    return node


@pytest.mark.unit
class TestDocumentNodeLoading:
    """Test building trees from JSON-like dictionaries."""

    def test_from_dict_builds_children_and_marks(self):
        node = DocumentNode.from_dict(para("plain ", text("bold", "strong")))

        assert node.kind is NodeType.PARAGRAPH
        assert len(node.children) == 2
        assert node.children[1].text == "bold"
        assert node.children[1].has_mark(MarkType.STRONG)
        assert not node.children[0].marks

    def test_from_dict_is_forgiving(self):
        """Malformed pieces are dropped instead of raising."""
        node = DocumentNode.from_dict(
            {"type": "paragraph", "attrs": "nope", "content": [{"type": "text", "text": 5}, "junk", None]}
        )

        assert node.attributes == {}
        assert len(node.children) == 1
        assert node.children[0].text is None

    def test_missing_content_means_no_children(self):
        assert DocumentNode.from_dict({"type": "rule"}).children == ()

    def test_unknown_tags_resolve_to_unknown(self):
        assert DocumentNode(type="extension").kind is NodeType.UNKNOWN
        assert Mark(type="underline").kind is MarkType.UNKNOWN

    def test_emphasis_alias(self):
        assert MarkType.from_tag("emphasis") is MarkType.EM
        assert MarkType.from_tag("em") is MarkType.EM

    def test_find_mark_returns_attributes(self):
        node = DocumentNode.from_dict(text("x", {"type": "link", "attrs": {"href": "https://example.com"}}))

        link = node.find_mark(MarkType.LINK)
        assert link is not None
        assert link.attributes["href"] == "https://example.com"
        assert node.find_mark(MarkType.CODE) is None

    def test_attr_default(self):
        node = DocumentNode(type="heading", attributes={"level": 2})
        assert node.attr("level") == 2
        assert node.attr("missing", "fallback") == "fallback"


@pytest.mark.unit
class TestTextExtraction:
    """Test the text-extraction fallback."""

    def test_iter_descendants_is_preorder(self):
        tree = DocumentNode.from_dict({"type": "doc", "content": [para("a", "b"), para("c")]})

        kinds = [node.type for node in tree.iter_descendants()]
        assert kinds == ["paragraph", "text", "text", "paragraph", "text"]

    def test_extract_text_concatenates(self):
        tree = DocumentNode.from_dict({"type": "doc", "content": [para("a", "b"), para("c")]})
        assert extract_text(tree) == "abc"

    def test_extract_text_with_block_separator(self):
        tree = DocumentNode.from_dict({"type": "doc", "content": [para("a"), para("c")]})
        assert extract_text(tree, block_separator=" ").strip() == "a c"

    def test_extract_text_depth_limit(self):
        with pytest.raises(NestingDepthError) as exc_info:
            extract_text(nested_node(3000))
        assert exc_info.value.max_depth == 64

    def test_extract_text_within_depth_limit(self):
        assert extract_text(nested_node(5), max_depth=5) == "deep"


@pytest.mark.unit
class TestLoadingDepthLimit:
    """Test that loading stops at the nesting ceiling instead of exhausting the stack."""

    @staticmethod
    def nested_dict(depth):
        node = para("deep")
        for _ in range(depth):
            node = {"type": "blockquote", "content": [node]}
        return node

    def test_deep_dictionary_rejected(self):
        with pytest.raises(NestingDepthError) as exc_info:
            DocumentNode.from_dict(self.nested_dict(3000))
        assert exc_info.value.max_depth == 64
        assert exc_info.value.node_type == "blockquote"

    def test_custom_ceiling(self):
        with pytest.raises(NestingDepthError):
            DocumentNode.from_dict(self.nested_dict(4), max_depth=3)
        assert DocumentNode.from_dict(self.nested_dict(3), max_depth=4).type == "blockquote"
