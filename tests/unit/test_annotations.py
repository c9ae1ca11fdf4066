"""Unit tests for annotation numbering, the annotation converter and the line processor."""

import pytest
from utils import doc, para

from adf2md import convert_document
from adf2md.annotations import AnnotationProcessor, AnnotationState, validate_annotations


def ref(local_id):
    return {"type": "annotation", "attrs": {"annotationType": "reference", "localId": local_id}}


def definition(local_id, content):
    attrs = {"annotationType": "definition", "localId": local_id}
    return {"type": "annotation", "attrs": attrs, "content": [para(content)]}


def annotated(*content):
    return {"type": "annotation", "attrs": {"annotationType": "block"}, "content": list(content)}


@pytest.mark.unit
class TestAnnotationState:
    """Test local to global identifier mapping."""

    def test_ids_unique_across_blocks(self):
        state = AnnotationState()
        assert state.reference("1") == "1"
        assert state.reference("2") == "2"
        assert state.reference("1") == "1"
        state.close_block()
        assert state.reference("1") == "3"

    def test_definitions_survive_close(self):
        state = AnnotationState()
        state.reference("1")
        state.define("1", " text ")
        state.close_block()
        assert state.tooltip_contents() == {"1": "text"}
        assert not state.is_known("1")

    def test_rewrite_references(self):
        state = AnnotationState(counter=4)
        assert state.rewrite_references("a (1) b (2) c (1)") == "a (5) b (6) c (5)"

    def test_findings(self):
        state = AnnotationState()
        state.reference("1")
        state.define("2", "unused")
        assert state.findings() == ["Orphaned annotation reference: (1)", "Orphaned annotation definition: 2."]


@pytest.mark.unit
class TestAnnotationConverter:
    """Test annotated blocks in document trees."""

    def test_two_blocks_get_distinct_ids(self):
        body = para("See ", ref("1"), " and ", ref("2"), ".")
        tree = doc(
            annotated(body, definition("1", "First"), definition("2", "Second")),
            annotated(body, definition("1", "Third"), definition("2", "Fourth")),
        )
        converted = convert_document(tree)

        assert converted.markdown == "{ .annotate }\n\nSee (1) and (2).\n\n{ .annotate }\n\nSee (3) and (4)."
        assert converted.annotations == {"1": "First", "2": "Second", "3": "Third", "4": "Fourth"}
        assert converted.findings == ()

    def test_definitions_emitted_when_enabled(self):
        tree = doc(annotated(para("See ", ref("1"), "."), definition("1", "First")))
        converted = convert_document(tree, emit_annotation_definitions=True)
        assert converted.markdown == "{ .annotate }\n\nSee (1).\n\n1. First"

    def test_missing_definition_reported(self):
        converted = convert_document(doc(annotated(para("See ", ref("1"), "."))))
        assert converted.findings == ("Orphaned annotation reference: (1)",)

    def test_definition_without_local_id_is_positional(self):
        untagged = {"type": "annotation", "attrs": {"annotationType": "definition"}, "content": [para("Only")]}
        converted = convert_document(doc(annotated(para("See ", ref("1"), "."), untagged)))
        assert converted.annotations == {"1": "Only"}

    def test_empty_block(self):
        assert convert_document(doc(annotated())).markdown == ""


@pytest.mark.unit
class TestAnnotationProcessor:
    """Test the line state machine over Markdown text."""

    def test_definition_lifted_out(self):
        state = AnnotationState()
        result = AnnotationProcessor(state).process("{ .annotate }\n\nSee (1).\n\n1. A note")

        assert result == "{ .annotate }\n\nSee (1).\n"
        assert state.tooltip_contents() == {"1": "A note"}

    def test_blocks_renumbered(self):
        source = "{ .annotate }\n\nA (1)\n\n1. one\n\n{ .annotate }\n\nB (1)\n\n1. two\n"
        state = AnnotationState()
        result = AnnotationProcessor(state).process(source)

        assert "A (1)" in result
        assert "B (2)" in result
        assert "1. one" not in result
        assert state.tooltip_contents() == {"1": "one", "2": "two"}

    def test_unknown_numbers_stay_in_text(self):
        state = AnnotationState()
        result = AnnotationProcessor(state).process("{ .annotate }\n\nSteps (1)\n\n1. one\n2. two")

        assert result.endswith("2. two")
        assert state.tooltip_contents() == {"1": "one"}

    def test_indented_continuation(self):
        state = AnnotationState()
        source = "{ .annotate }\n\nA (1)\n\n1. first line\n    second line\n\nAfter"
        result = AnnotationProcessor(state).process(source)

        assert state.tooltip_contents() == {"1": "first line\nsecond line"}
        assert result.endswith("\n\nAfter")

    def test_blank_line_ends_block(self):
        processor = AnnotationProcessor()
        processor.feed("{ .annotate }\n\nA (1)\n\nPlain text")
        assert not processor.in_block

    def test_text_outside_blocks_untouched(self):
        source = "See (1)\n\n1. x"
        assert AnnotationProcessor().process(source) == source

    def test_chunked_feed_resumes(self):
        state = AnnotationState()
        processor = AnnotationProcessor(state)
        processor.feed("{ .annotate }\n\nA (1)\n")
        assert processor.in_block

        rest = processor.feed("1. def\nmore (1)")
        processor.finish()

        assert state.tooltip_contents() == {"1": "def"}
        assert rest == "more (1)"
        assert not processor.in_block

    def test_validate_annotations(self):
        errors = validate_annotations("A (1) (2)\n\n1. x\n3. y")
        assert errors == ["Orphaned annotation reference: (2)", "Orphaned annotation definition: 3."]
