"""Collapse the JSON shapes the model returns into one suggestion list.

The model is asked for an array of ``{message, type}`` objects but does not
always comply. A small closed set of variants is accepted, tried in a fixed
order; anything else normalizes to an empty list rather than an error.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any

from cobean.errors import ResponseFormatError
from cobean.models import NormalizedSuggestion

DEFAULT_TYPE = "immediate"

_CODE_FENCE_RE = re.compile(
    r"^\s*```(?:json)?\s*\n(.*?)\n\s*```\s*$",
    re.DOTALL,
)


class ResponseShape(Enum):
    ARRAY = "array"
    SUGGESTIONS_FIELD = "suggestions_field"
    SINGLE_MESSAGE = "single_message"
    UNRECOGNIZED = "unrecognized"


def _strip_code_fences(content: str) -> str:
    """Remove wrapping ```json fences if the model added them."""
    match = _CODE_FENCE_RE.match(content.strip())
    if match:
        return match.group(1).strip()
    return content.strip()


def parse_content(content: str) -> Any:
    """Parse completion text as JSON, raising ResponseFormatError on failure."""
    try:
        return json.loads(_strip_code_fences(content))
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(
            "Failed to parse LLM response as JSON",
            detail=f"{exc.msg} at position {exc.pos}",
        ) from exc


def classify(parsed: Any) -> ResponseShape:
    """Return which accepted shape *parsed* has; first match wins."""
    if isinstance(parsed, list):
        return ResponseShape.ARRAY
    if isinstance(parsed, dict):
        if isinstance(parsed.get("suggestions"), list):
            return ResponseShape.SUGGESTIONS_FIELD
        if parsed.get("message"):
            return ResponseShape.SINGLE_MESSAGE
    return ResponseShape.UNRECOGNIZED


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _normalize_item(item: Any) -> NormalizedSuggestion:
    if not isinstance(item, dict):
        return NormalizedSuggestion(text="", type=DEFAULT_TYPE)
    text = item.get("message") or item.get("text") or ""
    kind = item.get("type") or DEFAULT_TYPE
    return NormalizedSuggestion(text=_as_text(text), type=_as_text(kind))


def normalize(parsed: Any) -> list[NormalizedSuggestion]:
    """Map a parsed completion onto a list of NormalizedSuggestion."""
    shape = classify(parsed)
    if shape is ResponseShape.ARRAY:
        return [_normalize_item(item) for item in parsed]
    if shape is ResponseShape.SUGGESTIONS_FIELD:
        return [_normalize_item(item) for item in parsed["suggestions"]]
    if shape is ResponseShape.SINGLE_MESSAGE:
        return [_normalize_item({"message": parsed["message"], "type": parsed.get("type")})]
    return []
