"""Tests for llmkit.config and llmkit.providers."""

from __future__ import annotations

import pytest

from llmkit import DEFAULT_TIMEOUT, LLMConfig, get_provider, list_providers


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all provider env vars so tests are isolated."""
    for key in (
        "COBEAN_PROVIDER",
        "COBEAN_MODEL",
        "COBEAN_API_BASE",
        "COBEAN_API_KEY",
        "COBEAN_TIMEOUT",
        "DEEPSEEK_API_KEY",
        "OPENAI_API_KEY",
        "SILICONFLOW_API_KEY",
        "DOUBAO_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)


class TestProviders:
    def test_deepseek_registered(self) -> None:
        info = get_provider("deepseek")
        assert info is not None
        assert info.env_key == "DEEPSEEK_API_KEY"
        assert info.api_base == "https://api.deepseek.com/v1"

    def test_lookup_is_case_insensitive(self) -> None:
        assert get_provider(" DeepSeek ") is get_provider("deepseek")

    def test_unknown_provider(self) -> None:
        assert get_provider("nope") is None

    def test_list_providers(self) -> None:
        names = list_providers()
        assert "deepseek" in names
        assert "openrouter" in names


class TestFromEnv:
    def test_defaults_to_deepseek(self) -> None:
        cfg = LLMConfig.from_env()
        assert cfg.provider == "deepseek"
        assert cfg.model == "openai/deepseek-chat"
        assert cfg.api_base == "https://api.deepseek.com/v1"
        assert cfg.api_key is None
        assert cfg.timeout == DEFAULT_TIMEOUT

    def test_provider_key_fallback(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-deep")
        cfg = LLMConfig.from_env()
        assert cfg.api_key == "sk-deep"
        assert cfg.has_credentials

    def test_prefixed_key_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEEPSEEK_API_KEY", "sk-deep")
        monkeypatch.setenv("COBEAN_API_KEY", "sk-explicit")
        assert LLMConfig.from_env().api_key == "sk-explicit"

    def test_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COBEAN_PROVIDER", "siliconflow")
        monkeypatch.setenv("COBEAN_MODEL", "openai/custom")
        monkeypatch.setenv("COBEAN_API_BASE", "http://localhost:9000/v1")
        monkeypatch.setenv("COBEAN_TIMEOUT", "12.5")
        cfg = LLMConfig.from_env()
        assert cfg.provider == "siliconflow"
        assert cfg.model == "openai/custom"
        assert cfg.api_base == "http://localhost:9000/v1"
        assert cfg.timeout == 12.5

    def test_other_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ALT_PROVIDER", "openai")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
        cfg = LLMConfig.from_env(prefix="ALT")
        assert cfg.model == "openai/gpt-4o-mini"
        assert cfg.api_base is None
        assert cfg.api_key == "sk-openai"

    def test_json_mode_follows_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert LLMConfig.from_env().json_mode is True
        monkeypatch.setenv("COBEAN_PROVIDER", "doubao")
        cfg = LLMConfig.from_env()
        assert cfg.provider == "doubao"
        assert cfg.json_mode is False

    def test_unknown_provider_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COBEAN_PROVIDER", "mystery")
        with pytest.raises(ValueError, match="mystery"):
            LLMConfig.from_env()


class TestLitellmKwargs:
    def test_full(self) -> None:
        cfg = LLMConfig(api_key="sk-1")
        assert cfg.to_litellm_kwargs() == {
            "model": "openai/deepseek-chat",
            "api_base": "https://api.deepseek.com/v1",
            "api_key": "sk-1",
        }

    def test_omits_empty_fields(self) -> None:
        cfg = LLMConfig(model="openai/gpt-4o-mini", api_base=None)
        assert cfg.to_litellm_kwargs() == {"model": "openai/gpt-4o-mini"}

    def test_blank_key_is_not_a_credential(self) -> None:
        assert not LLMConfig(api_key="   ").has_credentials
