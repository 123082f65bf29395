"""Tests for relocating a selection in a possibly changed document."""

from text_explainer.domain.entities.selection import LocationConfidence
from text_explainer.domain.services.selection_relocator import locate, locate_context


class TestContextMatch:
    def test_picks_occurrence_with_matching_context(self):
        document = "The cat sat.\nA dog and a cat played outside."
        location = locate(document, "cat", "A dog and a", "played outside", "")

        assert location is not None
        assert location.offset == document.index("cat played")
        assert location.confidence is LocationConfidence.CONTEXT

    def test_empty_context_accepts_first_occurrence(self):
        document = "cat cat cat"
        location = locate(document, "cat", "", "", "")

        assert location.offset == 0
        assert location.confidence is LocationConfidence.CONTEXT

    def test_one_sided_context(self):
        document = "x word y\nz word w"
        location = locate(document, "word", "z", "", "")

        assert location.offset == document.rindex("word")

    def test_context_tolerates_trimmed_whitespace(self):
        document = "first\n\n   target\n\nsecond target  \n  tail"
        location = locate(document, "target", "second", "tail", "")

        assert location.offset == document.rindex("target")
        assert location.confidence is LocationConfidence.CONTEXT

    def test_uses_captured_context(self, sample_document_text, word_context):
        location = locate_context(sample_document_text, word_context)

        assert location.offset == sample_document_text.index("idiom")


class TestFallbacks:
    def test_not_found_when_selection_absent(self):
        assert locate("nothing here", "missing", "a", "b", "nothing here") is None

    def test_empty_selection_is_not_found(self):
        assert locate("text", "", "", "", "") is None

    def test_paragraph_fallback_when_context_drifted(self):
        document = "beta first.\n\nthe beta line\n"
        location = locate(document, "beta", "something else", "edited away", "the beta line")

        assert location.offset == document.index("the beta line") + len("the ")
        assert location.confidence is LocationConfidence.PARAGRAPH
        assert not location.is_low_confidence

    def test_first_occurrence_fallback_is_low_confidence(self):
        document = "beta one. beta two."
        location = locate(document, "beta", "gone", "also gone", "paragraph no longer here")

        assert location.offset == 0
        assert location.confidence is LocationConfidence.FIRST_OCCURRENCE
        assert location.is_low_confidence
