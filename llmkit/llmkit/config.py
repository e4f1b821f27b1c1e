"""LLM connection settings shared by every caller of the upstream API."""

from __future__ import annotations

import os
from dataclasses import dataclass

from llmkit.providers import DEFAULT_PROVIDER, get_provider

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class LLMConfig:
    """LLM connection settings.

    Read-only after construction, so one instance can be shared by any
    number of concurrent requests.
    """

    model: str = "openai/deepseek-chat"
    api_base: str | None = "https://api.deepseek.com/v1"
    api_key: str | None = None
    provider: str | None = DEFAULT_PROVIDER
    timeout: float = DEFAULT_TIMEOUT
    json_mode: bool = True

    @classmethod
    def from_env(cls, prefix: str = "COBEAN") -> LLMConfig:
        """Build config from ``<prefix>_*`` environment variables.

        Unset values fall back to the provider preset, and the API key
        falls back to the provider's own variable (``DEEPSEEK_API_KEY``
        for the default provider). ``json_mode`` follows the provider's
        JSON-output support.
        """
        provider_name = os.getenv(f"{prefix}_PROVIDER") or DEFAULT_PROVIDER
        provider = get_provider(provider_name)
        if provider is None:
            raise ValueError(f"Unknown LLM provider: {provider_name}")

        model = os.getenv(f"{prefix}_MODEL") or provider.default_model
        api_base = os.getenv(f"{prefix}_API_BASE") or provider.api_base
        api_key = os.getenv(f"{prefix}_API_KEY") or os.getenv(provider.env_key)
        timeout = float(os.getenv(f"{prefix}_TIMEOUT", str(DEFAULT_TIMEOUT)))

        return cls(
            model=model,
            api_base=api_base,
            api_key=api_key or None,
            provider=provider.name,
            timeout=timeout,
            json_mode=provider.supports_json_mode,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def to_litellm_kwargs(self) -> dict[str, str]:
        """Return kwargs suitable for litellm.acompletion()."""
        kwargs: dict[str, str] = {"model": self.model}
        if self.api_base:
            kwargs["api_base"] = self.api_base
        if self.api_key:
            kwargs["api_key"] = self.api_key
        return kwargs
