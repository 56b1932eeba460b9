"""Tests for session configuration."""

import pytest

from fieldrules.config import SessionConfig
from fieldrules.types import ConfigurationError


class TestSessionConfig:
    def test_defaults(self):
        config = SessionConfig()
        assert config.fail_fast is True
        assert config.locale == "en"
        assert config.hooks_on_query is False

    def test_from_dict_snake_case(self):
        config = SessionConfig.from_dict(
            {"fail_fast": False, "locale": "fr", "hooks_on_query": True}
        )
        assert config == SessionConfig(fail_fast=False, locale="fr", hooks_on_query=True)

    def test_from_dict_attribute_style(self):
        config = SessionConfig.from_dict(
            {
                "failsOnFirst": False,
                "local": {"lang": "fr"},
                "validClass": "valid",
                "invalidClass": "error",
            }
        )
        assert config.fail_fast is False
        assert config.locale == "fr"
        assert config.valid_class == "valid"
        assert config.invalid_class == "error"

    def test_from_dict_empty(self):
        assert SessionConfig.from_dict({}) == SessionConfig()

    def test_from_dict_string_booleans(self):
        assert SessionConfig.from_dict({"fail_fast": "no"}).fail_fast is False

    def test_from_dict_rejects_bad_boolean(self):
        with pytest.raises(ConfigurationError):
            SessionConfig.from_dict({"fail_fast": "sometimes"})

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FIELDRULES_LOCALE", "fr")
        monkeypatch.setenv("FIELDRULES_FAIL_FAST", "false")
        config = SessionConfig.from_env()
        assert config.locale == "fr"
        assert config.fail_fast is False

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("FIELDRULES_LOCALE", raising=False)
        monkeypatch.delenv("FIELDRULES_FAIL_FAST", raising=False)
        assert SessionConfig.from_env() == SessionConfig()

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "fieldrules.yaml"
        path.write_text("failsOnFirst: no\nlocal:\n  lang: fr\n", encoding="utf-8")
        config = SessionConfig.from_yaml(path)
        assert config.fail_fast is False
        assert config.locale == "fr"

    def test_from_yaml_rejects_non_mapping(self, tmp_path):
        path = tmp_path / "fieldrules.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            SessionConfig.from_yaml(path)
