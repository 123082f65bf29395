"""Pytest configuration and fixtures for the test suite."""

import pytest

from text_explainer.config import Settings
from text_explainer.domain.entities.selection import SelectionContext
from text_explainer.infrastructure.file_document import TextDocument
from tests.fixtures import InMemoryStorage, MockCompletionClient, RecordingNotifier


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep TEXT_EXPLAINER_* variables and .env files out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("TEXT_EXPLAINER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    """Settings with an API key and a non-English target language."""
    return Settings(api_key="sk-test", language="Chinese", note_directory="Explanations")


@pytest.fixture
def mock_client():
    return MockCompletionClient()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sample_document_text():
    return (
        "# Memory\n"
        "\n"
        "RAII ties resource lifetime to object scope.\n"
        "In C++ the RAII idiom is everywhere, and RAII makes cleanup automatic.\n"
    )


@pytest.fixture
def sample_document(sample_document_text):
    return TextDocument(sample_document_text)


@pytest.fixture
def word_context():
    return SelectionContext(
        selected_text="idiom",
        text_before="In C++ the RAII",
        text_after="is everywhere",
        paragraph_text="In C++ the RAII idiom is everywhere, and RAII makes cleanup automatic.",
        source_path="notes/memory.md",
    )
