"""llmkit — Shared LLM configuration and provider presets."""

from llmkit.config import DEFAULT_TIMEOUT, LLMConfig
from llmkit.providers import (
    DEFAULT_PROVIDER,
    PROVIDERS,
    ProviderInfo,
    get_provider,
    list_providers,
)

__all__ = [
    "DEFAULT_PROVIDER",
    "DEFAULT_TIMEOUT",
    "LLMConfig",
    "PROVIDERS",
    "ProviderInfo",
    "get_provider",
    "list_providers",
]
