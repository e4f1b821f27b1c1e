"""Configuration for cobean."""

from __future__ import annotations

import os
from dataclasses import dataclass

from llmkit import LLMConfig


@dataclass(frozen=True)
class Config:
    """Runtime configuration, populated from environment variables.

    ``temperature`` defaults to 2.0, the top of the 0-2 range. Suggestions
    for the same topic are meant to read differently on every call, at the
    cost of the occasional malformed JSON reply.
    """

    llm: LLMConfig = LLMConfig()
    temperature: float = 2.0
    max_tokens: int = 1500
    chat_temperature: float = 1.5
    chat_max_tokens: int = 800
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            llm=LLMConfig.from_env(prefix="COBEAN"),
            temperature=float(os.getenv("COBEAN_TEMPERATURE", str(cls.temperature))),
            max_tokens=int(os.getenv("COBEAN_MAX_TOKENS", str(cls.max_tokens))),
            chat_temperature=float(
                os.getenv("COBEAN_CHAT_TEMPERATURE", str(cls.chat_temperature))
            ),
            chat_max_tokens=int(
                os.getenv("COBEAN_CHAT_MAX_TOKENS", str(cls.chat_max_tokens))
            ),
            log_level=os.getenv("COBEAN_LOG_LEVEL", cls.log_level).upper(),
        )
