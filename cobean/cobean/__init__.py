"""cobean — personality-driven anxiety coping suggestions."""

from cobean.errors import (
    AuthenticationError,
    CobeanError,
    RateLimitedError,
    ResponseFormatError,
    UpstreamUnavailableError,
)
from cobean.models import (
    HealthStatus,
    NormalizedSuggestion,
    Personality,
    PriorSuggestion,
    SuggestionRequest,
    SuggestionResult,
    TokenUsage,
)
from cobean.orchestrator import SuggestionOrchestrator
from cobean.prompts import get_template

__all__ = [
    "AuthenticationError",
    "CobeanError",
    "HealthStatus",
    "NormalizedSuggestion",
    "Personality",
    "PriorSuggestion",
    "RateLimitedError",
    "ResponseFormatError",
    "SuggestionOrchestrator",
    "SuggestionRequest",
    "SuggestionResult",
    "TokenUsage",
    "UpstreamUnavailableError",
    "get_template",
]
