"""Suggestion orchestration — prompt composition, upstream call, normalization."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

import litellm

from cobean.config import Config
from cobean.errors import (
    AuthenticationError,
    ResponseFormatError,
    map_upstream_error,
)
from cobean.models import (
    ChatMessage,
    ChatReply,
    HealthStatus,
    Personality,
    PriorSuggestion,
    SuggestionRequest,
    SuggestionResult,
    TokenUsage,
)
from cobean.normalizer import normalize, parse_content
from cobean.prompts import get_chat_prompt, get_template

logger = logging.getLogger(__name__)

TOPIC_PREFIX = "焦虑主题："
CONTEXT_LABEL = "补充描述："
HISTORY_HEADER = "历史建议记录："
DEDUP_INSTRUCTION = "请基于历史记录提供新的、不重复的建议。"

_HEALTH_PROBE = [{"role": "user", "content": "Hello"}]
_HEALTH_MAX_TOKENS = 10

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def build_user_prompt(
    topic: str,
    context: str | None = None,
    history: Sequence[PriorSuggestion] = (),
) -> str:
    """Compose the user message for a suggestion request."""
    prompt = f"{TOPIC_PREFIX}{topic}"

    extra = (context or "").strip()
    if extra:
        prompt += f"\n{CONTEXT_LABEL}{extra}"

    if history:
        listing = "\n".join(
            f"{index}. {item.text} (类型: {item.type})"
            for index, item in enumerate(history, start=1)
        )
        prompt += f"\n\n{HISTORY_HEADER}\n{listing}"
        prompt += f"\n\n{DEDUP_INSTRUCTION}"

    return prompt


def _read_field(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _usage_from(response: Any) -> TokenUsage:
    """Copy token counts from the upstream response, missing values as 0."""
    usage = _read_field(response, "usage")
    if usage is None:
        return TokenUsage()
    return TokenUsage(
        prompt_tokens=int(_read_field(usage, "prompt_tokens") or 0),
        completion_tokens=int(_read_field(usage, "completion_tokens") or 0),
        total_tokens=int(_read_field(usage, "total_tokens") or 0),
    )


def _message_content(response: Any) -> str:
    """Return the text of the single completion choice."""
    if not response.choices:
        raise ResponseFormatError("LLM returned empty choices list")
    content = response.choices[0].message.content
    if content is None:
        raise ResponseFormatError(
            "LLM returned None content (possibly content-filtered)"
        )
    return content


def _chat_messages(
    personality: Personality,
    messages: Sequence[ChatMessage],
) -> list[dict[str, str]]:
    if not messages:
        raise ValueError("chat needs at least one message")
    return [
        {"role": "system", "content": get_chat_prompt(personality)},
        *({"role": m.role, "content": m.content} for m in messages),
    ]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class SuggestionOrchestrator:
    """Stateless front for the upstream chat-completion API.

    Each public call makes exactly one upstream request. Nothing is retried
    here: every failure reaches the caller as a distinct CobeanError kind.
    """

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    async def _complete(self, **params: Any) -> Any:
        """Issue one completion call and map any failure to our taxonomy."""
        llm = self.config.llm
        if not llm.has_credentials:
            raise AuthenticationError(
                "LLM API authentication failed",
                detail=f"no API key configured for provider {llm.provider}",
            )

        kwargs = llm.to_litellm_kwargs()
        kwargs.update(params)
        kwargs.update({"timeout": llm.timeout, "num_retries": 0})
        try:
            return await litellm.acompletion(**kwargs)
        except Exception as exc:
            error = map_upstream_error(exc)
            logger.warning(
                "Upstream call to %s failed (%s)", llm.model, error.kind, exc_info=True
            )
            raise error from exc

    async def generate_suggestions(self, request: SuggestionRequest) -> SuggestionResult:
        """Generate a batch of suggestions for *request*."""
        template = get_template(request.personality)
        user_prompt = build_user_prompt(request.topic, request.context, request.history)

        params: dict[str, Any] = {
            "messages": [
                {"role": "system", "content": template.system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
        }
        # Providers without JSON mode still get the JSON instructions in the prompt.
        if self.config.llm.json_mode:
            params["response_format"] = {"type": "json_object"}

        response = await self._complete(**params)

        content = _message_content(response)
        logger.debug("Raw upstream response (%s): %s", template.personality.value, content)

        try:
            parsed = parse_content(content)
        except ResponseFormatError:
            logger.error("Unparseable upstream response: %r", content)
            raise

        suggestions = normalize(parsed)
        logger.info(
            "Normalized %d suggestions (%s)", len(suggestions), template.personality.value
        )
        return SuggestionResult(
            suggestions=suggestions,
            usage=_usage_from(response),
            personality=template.personality,
        )

    async def generate_chat_reply(
        self,
        messages: Sequence[ChatMessage],
        personality: Personality | str = Personality.GREEN,
    ) -> ChatReply:
        """Answer the last turn of *messages* in the given personality."""
        resolved = Personality.resolve(personality)
        response = await self._complete(
            messages=_chat_messages(resolved, messages),
            temperature=self.config.chat_temperature,
            max_tokens=self.config.chat_max_tokens,
        )
        return ChatReply(
            message=_message_content(response),
            usage=_usage_from(response),
            personality=resolved,
        )

    async def stream_chat_reply(
        self,
        messages: Sequence[ChatMessage],
        personality: Personality | str = Personality.GREEN,
    ) -> AsyncIterator[str]:
        """Yield the reply text as the upstream streams it."""
        resolved = Personality.resolve(personality)
        stream = await self._complete(
            messages=_chat_messages(resolved, messages),
            temperature=self.config.chat_temperature,
            max_tokens=self.config.chat_max_tokens,
            stream=True,
        )
        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta.content
                if delta:
                    yield delta
        except Exception as exc:
            error = map_upstream_error(exc)
            logger.warning("Upstream stream interrupted (%s)", error.kind, exc_info=True)
            raise error from exc

    async def check_health(self) -> HealthStatus:
        """Probe upstream reachability and credentials. Never raises."""
        try:
            response = await self._complete(
                messages=_HEALTH_PROBE,
                max_tokens=_HEALTH_MAX_TOKENS,
            )
        except Exception as exc:
            detail = getattr(exc, "detail", None) or str(exc) or exc.__class__.__name__
            return HealthStatus(healthy=False, error=detail)
        model = _read_field(response, "model")
        if not isinstance(model, str) or not model:
            model = self.config.llm.model
        return HealthStatus(healthy=True, model=model)
