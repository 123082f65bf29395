"""Tests for settings validation and loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from text_explainer.config import Settings, load_config
from text_explainer.config_loader import (
    build_settings,
    read_config_data,
    resolve_config_path,
)
from text_explainer.exceptions import ConfigurationError


class TestDefaults:
    def test_defaults(self):
        settings = Settings()

        assert settings.model == "gpt-3.5-turbo"
        assert settings.api_key == ""
        assert settings.base_url == "https://api.openai.com/v1"
        assert settings.language == "Chinese"
        assert settings.hotkey_modifiers == ["Alt"]
        assert settings.hotkey_key == "d"
        assert settings.hotkey == "Alt+D"
        assert settings.note_directory == "Explanations"
        assert settings.llm_max_retries == 0

    def test_api_key_not_in_repr(self):
        assert "sk-secret" not in repr(Settings(api_key="sk-secret"))

    def test_persisted_keys(self):
        data = Settings(api_key="sk").persisted()

        assert list(data) == [
            "model",
            "api_key",
            "base_url",
            "language",
            "hotkey_modifiers",
            "hotkey_key",
            "note_directory",
        ]
        assert data["api_key"] == "sk"


class TestHotkeyValidation:
    def test_modifiers_from_comma_string(self):
        settings = Settings(hotkey_modifiers="ctrl, Shift")
        assert settings.hotkey_modifiers == ["Ctrl", "Shift"]
        assert settings.hotkey == "Ctrl+Shift+D"

    def test_duplicate_modifiers_collapsed(self):
        assert Settings(hotkey_modifiers=["Alt", "alt"]).hotkey_modifiers == ["Alt"]

    def test_unknown_modifier_rejected(self):
        with pytest.raises(ValidationError, match="Unknown hotkey modifier"):
            Settings(hotkey_modifiers=["Hyper"])

    def test_empty_modifiers_rejected(self):
        with pytest.raises(ValidationError):
            Settings(hotkey_modifiers=[])

    def test_key_is_single_character(self):
        assert Settings(hotkey_key="E").hotkey_key == "e"
        with pytest.raises(ValidationError):
            Settings(hotkey_key="F5")


class TestFieldNormalization:
    def test_base_url_trailing_slash_stripped(self):
        assert Settings(base_url="http://localhost:8080/v1/").base_url == "http://localhost:8080/v1"

    def test_free_text_language_accepted(self):
        assert Settings(language="Klingon").language == "Klingon"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(llm_timeout=0)

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("TEXT_EXPLAINER_LANGUAGE", "German")
        assert Settings().language == "German"


class TestLoading:
    def test_resolve_prefers_explicit_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TEXT_EXPLAINER_CONFIG", str(tmp_path / "env.yaml"))

        assert resolve_config_path(tmp_path / "explicit.yaml") == tmp_path / "explicit.yaml"
        assert resolve_config_path() == tmp_path / "env.yaml"

    def test_resolve_defaults_to_working_directory(self, tmp_path):
        assert resolve_config_path() == Path.cwd() / "text-explainer.yaml"

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_config(tmp_path / "absent.yaml")
        assert settings == Settings()

    def test_file_values_merged_over_defaults(self, tmp_path):
        path = tmp_path / "text-explainer.yaml"
        path.write_text("language: Spanish\nhotkey_key: x\n", encoding="utf-8")

        settings = load_config(path)

        assert settings.language == "Spanish"
        assert settings.hotkey == "Alt+X"
        assert settings.model == "gpt-3.5-turbo"

    def test_malformed_yaml_raises_configuration_error(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("language: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_data(path)

        assert "Failed to parse config file" in exc_info.value.message
        assert exc_info.value.suggestion

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            read_config_data(path)

    def test_invalid_value_wrapped(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_settings({"hotkey_key": "too long"})

        assert exc_info.value.context["fields"] == ["hotkey_key"]
        assert exc_info.value.error_code == "CFG-INVALID-001"
