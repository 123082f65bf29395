"""CLI command tests."""

import logging

import httpx
import pytest
import respx
import yaml
from typer.testing import CliRunner

from text_explainer.cli import app
from text_explainer.cli_commands.shared import setup
from text_explainer.utils import logging as logging_utils

runner = CliRunner()

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


@pytest.fixture
def vault(tmp_path):
    root = tmp_path / "vault"
    (root / "notes").mkdir(parents=True)
    (root / "notes" / "memory.md").write_text(
        "# Memory\n\nIn C++ the RAII idiom is everywhere.\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "text-explainer.yaml"
    path.write_text("api_key: sk-test\nlanguage: English\n", encoding="utf-8")
    return path


def completion(content):
    return httpx.Response(
        200, json={"choices": [{"message": {"role": "assistant", "content": content}}]}
    )


class TestExplain:
    def test_explain_and_save_linked_note(self, vault, config_file):
        note = vault / "notes" / "memory.md"
        with respx.mock:
            route = respx.post(COMPLETIONS_URL).mock(
                return_value=completion("<p>A recurring pattern.</p>")
            )

            result = runner.invoke(
                app,
                ["explain", str(note), "--select", "idiom", "--vault", str(vault), "--save-note"],
            )

        assert result.exit_code == 0, result.output
        assert route.called
        assert "A recurring pattern." in result.output
        assert "Explanations/idiom.md" in result.output
        assert (vault / "Explanations" / "idiom.md").exists()
        assert "the RAII [[idiom]] is everywhere" in note.read_text(encoding="utf-8")

    def test_explain_without_saving_leaves_note_untouched(self, vault, config_file):
        note = vault / "notes" / "memory.md"
        original = note.read_text(encoding="utf-8")
        with respx.mock:
            respx.post(COMPLETIONS_URL).mock(return_value=completion("plain answer"))

            result = runner.invoke(
                app, ["explain", str(note), "-s", "RAII", "--vault", str(vault), "--html"]
            )

        assert result.exit_code == 0, result.output
        assert "<p>plain answer</p>" in result.output
        assert note.read_text(encoding="utf-8") == original
        assert not (vault / "Explanations").exists()

    def test_request_error_exits_nonzero(self, vault, config_file):
        with respx.mock:
            respx.post(COMPLETIONS_URL).mock(return_value=httpx.Response(401, text="bad key"))

            result = runner.invoke(
                app,
                ["explain", str(vault / "notes" / "memory.md"), "-s", "idiom", "--vault", str(vault)],
            )

        assert result.exit_code == 1
        assert "API request failed: 401" in result.output

    def test_missing_api_key_is_reported(self, vault):
        result = runner.invoke(
            app, ["explain", str(vault / "notes" / "memory.md"), "-s", "idiom", "--vault", str(vault)]
        )

        assert result.exit_code == 1
        assert "Please configure your API key in settings" in result.output

    def test_unknown_selection_is_reported(self, vault, config_file):
        result = runner.invoke(
            app, ["explain", str(vault / "notes" / "memory.md"), "-s", "absent", "--vault", str(vault)]
        )

        assert result.exit_code == 1
        assert "No text selected" in result.output


class TestPrompt:
    def test_prompt_shows_strategy(self, vault, config_file):
        result = runner.invoke(app, ["prompt", str(vault / "notes" / "memory.md"), "-s", "idiom"])

        assert result.exit_code == 0, result.output
        assert "Strategy: explain" in result.output

    def test_prompt_on_rendered_view(self, vault, config_file):
        result = runner.invoke(
            app,
            ["prompt", str(vault / "notes" / "memory.md"), "-s", "In C++ the RAII idiom", "--rendered"],
        )

        assert result.exit_code == 0, result.output
        assert "Strategy: translation" in result.output


class TestCommandsAndConfig:
    def test_commands_lists_hotkey(self, config_file):
        result = runner.invoke(app, ["commands"])

        assert result.exit_code == 0, result.output
        assert "explain-selected-text" in result.output
        assert "Alt+D" in result.output

    def test_config_set_persists(self, config_file):
        result = runner.invoke(app, ["config", "set", "language", "Spanish"])

        assert result.exit_code == 0, result.output
        data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
        assert data["language"] == "Spanish"
        assert data["api_key"] == "sk-test"

    def test_config_set_rejects_invalid_value(self, config_file):
        result = runner.invoke(app, ["config", "set", "hotkey_key", "F5"])

        assert result.exit_code == 1
        assert "Invalid settings" in result.output
        assert "hotkey_key: F5" not in config_file.read_text(encoding="utf-8")

    def test_config_set_rejects_unknown_key(self, config_file):
        result = runner.invoke(app, ["config", "set", "log_level", "DEBUG"])

        assert result.exit_code == 1
        assert "Unknown setting" in result.output

    def test_config_show_redacts_api_key(self, config_file):
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "sk-test" not in result.output
        assert "English" in result.output


class TestDoctor:
    def test_reports_configured_model(self, config_file):
        with respx.mock:
            respx.get("https://api.openai.com/v1/models").mock(
                return_value=httpx.Response(200, json={"data": [{"id": "gpt-3.5-turbo"}]})
            )

            result = runner.invoke(app, ["doctor"])

        assert result.exit_code == 0, result.output
        assert "Model: gpt-3.5-turbo" in result.output

    def test_fails_when_model_not_offered(self, config_file):
        with respx.mock:
            respx.get("https://api.openai.com/v1/models").mock(
                return_value=httpx.Response(200, json={"data": [{"id": "other-model"}]})
            )

            result = runner.invoke(app, ["doctor"])

        assert result.exit_code == 1
        assert "not offered by the endpoint" in result.output

    def test_fails_without_api_key(self):
        result = runner.invoke(app, ["doctor"])

        assert result.exit_code == 1
        assert "API key: not configured" in result.output


def test_settings_log_level_applies_without_flag(config_file):
    config_file.write_text("api_key: sk-test\nlog_level: ERROR\n", encoding="utf-8")

    setup(None, None, None, False)
    assert logging_utils._handlers[0].level == logging.ERROR

    setup(None, None, "DEBUG", False)
    assert logging_utils._handlers[0].level == logging.DEBUG
