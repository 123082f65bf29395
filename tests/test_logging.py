"""Tests for logging configuration."""

import json
import logging

from text_explainer.utils.logging import (
    UserFacingConsoleFilter,
    UserFriendlyConsoleRenderer,
    configure_logging,
    get_logger,
)


def make_record(event, level=logging.INFO):
    record = logging.LogRecord("test", level, __file__, 1, {"event": event}, None, None)
    return record


class TestConsoleFilter:
    def test_user_facing_events_pass(self):
        assert UserFacingConsoleFilter().filter(make_record("note_created"))

    def test_internal_events_hidden(self):
        assert not UserFacingConsoleFilter().filter(make_record("completion_request"))

    def test_errors_always_pass(self):
        assert UserFacingConsoleFilter().filter(make_record("anything", logging.ERROR))

    def test_verbose_passes_everything(self):
        assert UserFacingConsoleFilter(verbose=True).filter(make_record("completion_request"))


class TestConsoleRenderer:
    def test_renders_known_events(self):
        renderer = UserFriendlyConsoleRenderer()

        assert (
            renderer(None, "info", {"event": "explanation_started", "strategy": "summary"})
            == "Generating explanation (summary)..."
        )
        assert (
            renderer(None, "info", {"event": "explanation_completed", "duration_seconds": 1.26})
            == "Explanation ready in 1.3s"
        )
        assert (
            renderer(None, "info", {"event": "note_created", "path": "Explanations/a.md"})
            == "Note created: Explanations/a.md"
        )

    def test_errors_show_error_field(self):
        renderer = UserFriendlyConsoleRenderer()
        rendered = renderer(None, "error", {"event": "x", "level": "error", "error": "boom"})

        assert rendered == "ERROR: boom"


def test_json_structure_in_file_logs(tmp_path):
    """File logs are one JSON object per line, with structured fields."""
    log_file = tmp_path / "logs" / "text-explainer.log"
    configure_logging(log_level="WARNING", log_file=log_file)

    logger = get_logger("test")
    logger.info("note_created", path="Explanations/a.md")
    logger.debug("completion_request", model="m")

    logging.shutdown()

    entries = [
        json.loads(line)
        for line in log_file.read_text(encoding="utf-8").splitlines()
        if line.strip()
    ]
    events = {entry["event"]: entry for entry in entries}
    assert events["note_created"]["path"] == "Explanations/a.md"
    assert events["note_created"]["level"] == "info"
    assert "completion_request" in events
