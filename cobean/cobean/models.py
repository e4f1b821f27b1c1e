"""Core data models for cobean."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)


class Personality(str, Enum):
    """Response-tone preset selecting a system prompt."""

    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"

    @classmethod
    def resolve(cls, value: object) -> Personality:
        """Return the matching personality, or ``GREEN`` for anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.debug("Unrecognized personality %r, using green", value)
        return cls.GREEN


class PromptTemplate(BaseModel, frozen=True):
    """A personality's fixed system prompt and the output shape it asks for."""

    personality: Personality
    system_prompt: str
    output_contract: str


class PriorSuggestion(BaseModel, frozen=True):
    """A previously generated suggestion, echoed back to avoid repeats."""

    text: str = Field(min_length=1)
    type: str = Field(min_length=1)


class SuggestionRequest(BaseModel, frozen=True):
    """Everything needed to ask for one batch of suggestions."""

    topic: str = Field(min_length=1, max_length=200)
    context: str | None = Field(default=None, max_length=1000)
    history: list[PriorSuggestion] = Field(default_factory=list)
    personality: Personality

    @field_validator("topic", mode="before")
    @classmethod
    def _strip_topic(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("personality", mode="before")
    @classmethod
    def _resolve_personality(cls, value: Any) -> Personality:
        return Personality.resolve(value)

    @classmethod
    def from_payload(cls, body: Mapping[str, Any]) -> SuggestionRequest:
        """Map a parsed request body onto a SuggestionRequest.

        ``title`` becomes the topic, ``title_context`` (or else
        ``description``) the context. History items may use either the
        stored column names (``suggestion_text``/``suggestion_type``) or
        the short ``text``/``type`` form. A missing personality defaults
        to green.
        """
        history: list[PriorSuggestion] = []
        for item in body.get("history") or []:
            if not isinstance(item, Mapping):
                raise ValueError(f"history items must be objects, got {type(item).__name__}")
            history.append(PriorSuggestion(
                text=item.get("suggestion_text") or item.get("text") or "",
                type=item.get("suggestion_type") or item.get("type") or "",
            ))
        return cls(
            topic=body.get("title", ""),
            context=body.get("title_context") or body.get("description"),
            history=history,
            personality=body.get("personality") or Personality.GREEN,
        )


class NormalizedSuggestion(BaseModel, frozen=True):
    """Canonical suggestion shape every accepted upstream variant becomes."""

    text: str
    type: str


class TokenUsage(BaseModel, frozen=True):
    """Token accounting reported by the upstream API."""

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)


class SuggestionResult(BaseModel, frozen=True):
    """Outcome of one successful generation call."""

    suggestions: list[NormalizedSuggestion] = Field(default_factory=list)
    usage: TokenUsage = Field(default_factory=TokenUsage)
    personality: Personality


class HealthStatus(BaseModel, frozen=True):
    """Result of an upstream liveness probe."""

    healthy: bool
    model: str | None = None
    error: str | None = None


class ChatMessage(BaseModel, frozen=True):
    """One turn of a chat conversation as sent upstream."""

    role: Literal["user", "assistant"]
    content: str = Field(min_length=1)


class ChatReply(BaseModel, frozen=True):
    """A single non-streamed chat answer."""

    message: str
    usage: TokenUsage = Field(default_factory=TokenUsage)
    personality: Personality
