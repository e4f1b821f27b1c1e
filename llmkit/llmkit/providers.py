"""Provider registry — base URLs, key variables and default models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderInfo:
    """Metadata for an OpenAI-compatible chat-completion provider."""

    name: str
    api_base: str | None  # None = use litellm default
    env_key: str  # environment variable for the API key
    default_model: str
    supports_json_mode: bool = True


# --- Direct providers ---

_DEEPSEEK = ProviderInfo(
    name="deepseek",
    api_base="https://api.deepseek.com/v1",
    env_key="DEEPSEEK_API_KEY",
    default_model="openai/deepseek-chat",
)

_OPENAI = ProviderInfo(
    name="openai",
    api_base=None,
    env_key="OPENAI_API_KEY",
    default_model="openai/gpt-4o-mini",
)

_GLM = ProviderInfo(
    name="glm",
    api_base="https://open.bigmodel.cn/api/paas/v4",
    env_key="GLM_API_KEY",
    default_model="openai/glm-4-flash",
)

_DOUBAO = ProviderInfo(
    name="doubao",
    api_base="https://ark.cn-beijing.volces.com/api/v3",
    env_key="DOUBAO_API_KEY",
    default_model="openai/doubao-1.5-pro-32k",
    supports_json_mode=False,
)

# --- Proxy providers serving DeepSeek models ---

_SILICONFLOW = ProviderInfo(
    name="siliconflow",
    api_base="https://api.siliconflow.cn/v1",
    env_key="SILICONFLOW_API_KEY",
    default_model="openai/deepseek-ai/DeepSeek-V3",
)

_OPENROUTER = ProviderInfo(
    name="openrouter",
    api_base="https://openrouter.ai/api/v1",
    env_key="OPENROUTER_API_KEY",
    default_model="openai/deepseek/deepseek-chat",
)

# --- Registry ---

DEFAULT_PROVIDER = "deepseek"

PROVIDERS: dict[str, ProviderInfo] = {
    p.name: p
    for p in [_DEEPSEEK, _OPENAI, _GLM, _DOUBAO, _SILICONFLOW, _OPENROUTER]
}


def get_provider(name: str) -> ProviderInfo | None:
    """Look up a provider by name (case-insensitive)."""
    return PROVIDERS.get(name.strip().lower())


def list_providers() -> list[str]:
    """Return all registered provider names."""
    return list(PROVIDERS.keys())
