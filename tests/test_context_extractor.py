"""Tests for selection context capture in both capture modes."""

from text_explainer.domain.entities.selection import CursorSelection, Position
from text_explainer.domain.services.context_extractor import (
    CONTEXT_RANGE,
    context_window,
    extract,
    nearest_block,
)
from text_explainer.infrastructure.file_document import TextDocument
from text_explainer.infrastructure.rendered_document import RenderedDocument


class TestCursorMode:
    def test_captures_selection_and_context(self, sample_document):
        selection = sample_document.find_selection("idiom")
        context = extract(sample_document, selection, "notes/memory.md")

        assert context.selected_text == "idiom"
        assert context.text_before.endswith("In C++ the RAII")
        assert context.text_after.startswith("is everywhere")
        assert context.paragraph_text == (
            "In C++ the RAII idiom is everywhere, and RAII makes cleanup automatic."
        )
        assert context.editor is sample_document
        assert context.can_replace_in_place
        assert context.source_path == "notes/memory.md"

    def test_backward_selection_is_ordered(self, sample_document):
        forward = sample_document.find_selection("idiom")
        backward = CursorSelection(anchor=forward.head, head=forward.anchor)

        assert extract(sample_document, backward).selected_text == "idiom"

    def test_empty_selection_returns_none(self, sample_document):
        cursor = Position(2, 3)
        assert extract(sample_document, CursorSelection(cursor, cursor)) is None

    def test_no_selection_returns_none(self, sample_document):
        assert extract(sample_document, None) is None
        assert extract(None, CursorSelection(Position(0, 0), Position(0, 2))) is None

    def test_context_is_bounded_and_excludes_selection(self):
        text = "a" * 500 + "SEL" + "b" * 500
        document = TextDocument(text)
        context = extract(document, document.find_selection("SEL"))

        assert context.text_before == "a" * CONTEXT_RANGE
        assert context.text_after == "b" * CONTEXT_RANGE
        assert "SEL" not in context.text_before + context.text_after

    def test_context_clamped_at_document_edges(self):
        document = TextDocument("word")
        context = extract(document, document.find_selection("word"))

        assert context.text_before == ""
        assert context.text_after == ""
        assert context.paragraph_text == "word"


def test_context_window_trims_whitespace():
    assert context_window("  before  X  after  ", 10, 11) == ("before", "after")


class TestRangeMode:
    def test_captures_from_rendered_view(self):
        view = RenderedDocument(
            "# Title\n\nThe **borrow checker** enforces ownership.\n\nNext paragraph.\n"
        )
        selection = view.find_selection("checker")
        context = extract(None, selection, "rust.md")

        assert context.selected_text == "checker"
        assert context.editor is None
        assert not context.can_replace_in_place
        assert context.paragraph_text == "The borrow checker enforces ownership."
        assert context.text_before.endswith("The borrow")
        assert context.text_after.startswith("enforces ownership.")
        assert "Next paragraph." in context.text_after

    def test_nearest_block_walks_up_from_inline_node(self):
        view = RenderedDocument("- first item with *emphasis*\n- second\n")
        selection = view.find_selection("emphasis")

        block = nearest_block(selection.node)
        assert block.name == "li"
        assert block.get_text() == "first item with emphasis"

    def test_missing_text_yields_no_selection(self):
        view = RenderedDocument("Hello world\n")
        assert view.find_selection("absent") is None
        assert extract(None, None) is None
