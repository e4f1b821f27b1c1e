"""Error taxonomy for upstream LLM failures."""

from __future__ import annotations

from typing import Any

import litellm

USER_FACING_MESSAGE = "Could not generate suggestions right now. Please try again later."


class CobeanError(Exception):
    """Base class for every failure surfaced by the suggestion core.

    Each subclass is a distinct kind so the HTTP layer can pick a status
    code without looking at the message text.
    """

    kind: str = "internal_error"
    http_status: int = 500
    retryable: bool = False

    def __init__(self, message: str, *, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(message)


class AuthenticationError(CobeanError):
    """Upstream rejected the credentials, or none are configured."""

    kind = "authentication_failed"
    http_status = 401


class RateLimitedError(CobeanError):
    """Upstream is throttling; retry later with backoff."""

    kind = "rate_limited"
    http_status = 429
    retryable = True


class UpstreamUnavailableError(CobeanError):
    """Timeout, connection failure, 5xx or any other upstream fault."""

    kind = "upstream_unavailable"
    http_status = 503
    retryable = True


class ResponseFormatError(CobeanError):
    """The completion text could not be read as JSON."""

    kind = "response_format"
    http_status = 500


def map_upstream_error(exc: BaseException) -> CobeanError:
    """Translate an exception raised by the upstream call into our taxonomy."""
    if isinstance(exc, CobeanError):
        return exc

    status = getattr(exc, "status_code", None)
    detail = str(exc) or exc.__class__.__name__

    if isinstance(exc, litellm.AuthenticationError) or status == 401:
        return AuthenticationError("LLM API authentication failed", detail=detail)
    if isinstance(exc, litellm.RateLimitError) or status == 429:
        return RateLimitedError("LLM API rate limit exceeded", detail=detail)
    return UpstreamUnavailableError("LLM API unavailable", detail=detail)


def error_response(error: CobeanError, *, expose_detail: bool = False) -> dict[str, Any]:
    """Build the JSON body returned to a client for *error*.

    End users only ever see the generic message; the kind and the upstream
    detail are added when *expose_detail* is set (operator-facing or
    development deployments).
    """
    body: dict[str, Any] = {"error": USER_FACING_MESSAGE}
    if expose_detail:
        body["kind"] = error.kind
        body["message"] = str(error)
        if error.detail:
            body["detail"] = error.detail
    return body
