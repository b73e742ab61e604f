"""Tests for repro_platform.runtime.config."""

import pytest

from repro_platform.runtime.config import (
    AVAILABLE_MODELS,
    DEFAULT_MODEL,
    default_summary_model,
    resolve_api_key,
    resolve_model,
    summary_timeout_seconds,
)


class TestResolveModel:

    def test_known_model(self):
        cfg = resolve_model("sonnet")
        assert cfg["provider"] == "anthropic"
        assert cfg["max_tokens"] > 0

    def test_unknown_model(self):
        with pytest.raises(ValueError, match="Unknown model"):
            resolve_model("gpt-2")

    def test_default_is_available(self):
        assert DEFAULT_MODEL in AVAILABLE_MODELS


class TestResolveApiKey:

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "env-key")
        assert resolve_api_key("anthropic", "cli-key") == "cli-key"

    def test_env_key(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        assert resolve_api_key("openai") == "sk-test"

    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            resolve_api_key("anthropic")


class TestSummaryTimeout:

    def test_default(self, monkeypatch):
        monkeypatch.delenv("REPRO_TRACKER_SUMMARY_TIMEOUT_SECONDS", raising=False)
        assert summary_timeout_seconds() == 60

    def test_override(self, monkeypatch):
        monkeypatch.setenv("REPRO_TRACKER_SUMMARY_TIMEOUT_SECONDS", "15")
        assert summary_timeout_seconds() == 15

    @pytest.mark.parametrize("raw", ["abc", "0", "-3"])
    def test_invalid_values_fall_back(self, monkeypatch, raw):
        monkeypatch.setenv("REPRO_TRACKER_SUMMARY_TIMEOUT_SECONDS", raw)
        assert summary_timeout_seconds() == 60


class TestDefaultSummaryModel:

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("REPRO_TRACKER_SUMMARY_MODEL", "gpt-4o-mini")
        assert default_summary_model() == "gpt-4o-mini"

    def test_unknown_env_value_ignored(self, monkeypatch):
        monkeypatch.setenv("REPRO_TRACKER_SUMMARY_MODEL", "llama")
        assert default_summary_model() == DEFAULT_MODEL
