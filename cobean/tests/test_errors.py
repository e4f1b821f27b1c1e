"""Tests for the upstream error taxonomy."""

from __future__ import annotations

import litellm
import pytest

from cobean.errors import (
    USER_FACING_MESSAGE,
    AuthenticationError,
    CobeanError,
    RateLimitedError,
    ResponseFormatError,
    UpstreamUnavailableError,
    error_response,
    map_upstream_error,
)


class _StatusError(Exception):
    def __init__(self, status_code: int) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code


class TestMapUpstreamError:
    def test_litellm_authentication(self) -> None:
        exc = litellm.AuthenticationError(
            message="invalid key", llm_provider="openai", model="deepseek-chat"
        )
        assert isinstance(map_upstream_error(exc), AuthenticationError)

    def test_litellm_rate_limit(self) -> None:
        exc = litellm.RateLimitError(
            message="slow down", llm_provider="openai", model="deepseek-chat"
        )
        assert isinstance(map_upstream_error(exc), RateLimitedError)

    def test_litellm_timeout(self) -> None:
        exc = litellm.Timeout(
            message="timed out", model="deepseek-chat", llm_provider="openai"
        )
        assert isinstance(map_upstream_error(exc), UpstreamUnavailableError)

    @pytest.mark.parametrize(
        ("status", "expected"),
        [
            (401, AuthenticationError),
            (429, RateLimitedError),
            (500, UpstreamUnavailableError),
            (503, UpstreamUnavailableError),
        ],
    )
    def test_status_code_fallback(self, status: int, expected: type[CobeanError]) -> None:
        assert type(map_upstream_error(_StatusError(status))) is expected

    def test_network_error(self) -> None:
        error = map_upstream_error(ConnectionError("connection reset"))
        assert isinstance(error, UpstreamUnavailableError)
        assert error.detail == "connection reset"

    def test_empty_message_uses_class_name(self) -> None:
        assert map_upstream_error(TimeoutError()).detail == "TimeoutError"

    def test_own_errors_pass_through(self) -> None:
        original = ResponseFormatError("bad")
        assert map_upstream_error(original) is original


class TestErrorKinds:
    def test_statuses_are_disjoint(self) -> None:
        kinds = [AuthenticationError, RateLimitedError, UpstreamUnavailableError, ResponseFormatError]
        assert [k.http_status for k in kinds] == [401, 429, 503, 500]
        assert len({k.kind for k in kinds}) == 4

    def test_retryable(self) -> None:
        assert not AuthenticationError("x").retryable
        assert RateLimitedError("x").retryable
        assert UpstreamUnavailableError("x").retryable
        assert not ResponseFormatError("x").retryable


class TestErrorResponse:
    def test_generic_by_default(self) -> None:
        error = AuthenticationError("LLM API authentication failed", detail="sk-*** rejected")
        assert error_response(error) == {"error": USER_FACING_MESSAGE}

    def test_detail_when_exposed(self) -> None:
        error = RateLimitedError("LLM API rate limit exceeded", detail="quota")
        body = error_response(error, expose_detail=True)
        assert body["kind"] == "rate_limited"
        assert body["message"] == "LLM API rate limit exceeded"
        assert body["detail"] == "quota"
