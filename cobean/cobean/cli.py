"""CLI entry point for cobean."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from cobean.config import Config
from cobean.errors import CobeanError, error_response
from cobean.models import ChatMessage, Personality, SuggestionRequest

_PERSONALITY_CHOICE = click.Choice([p.value for p in Personality], case_sensitive=False)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _fail(error: CobeanError, verbose: bool) -> None:
    click.echo(json.dumps(error_response(error, expose_detail=verbose), ensure_ascii=False), err=True)
    sys.exit(1)


def _load_history(path: str | None) -> list[dict[str, Any]]:
    """Read prior suggestions from a JSON array file."""
    if not path:
        return []
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"history file is not valid JSON: {exc.msg}", param_hint="--history") from exc
    if not isinstance(data, list):
        raise click.BadParameter("history file must hold a JSON array", param_hint="--history")
    return data


def _orchestrator(ctx: click.Context):
    from cobean.orchestrator import SuggestionOrchestrator

    return SuggestionOrchestrator(ctx.obj["config"])


@click.group()
@click.option("--provider", default=None, help="LLM provider (deepseek/openai/glm/doubao/siliconflow/openrouter)")
@click.option("--model", "-m", default=None, help="LLM model (e.g. openai/deepseek-chat)")
@click.option("--api-base", default=None, help="LLM API base URL")
@click.option("--api-key", default=None, help="LLM API key")
@click.option("--verbose", "-v", is_flag=True, help="Log upstream traffic and show error details")
@click.pass_context
def main(
    ctx: click.Context,
    provider: str | None,
    model: str | None,
    api_base: str | None,
    api_key: str | None,
    verbose: bool,
) -> None:
    """cobean — anxiety coping suggestions from an AI personality."""
    from llmkit import get_provider, list_providers

    config = Config.from_env()

    # Build LLM overrides from CLI flags
    llm_overrides: dict[str, object] = {}
    if provider:
        pinfo = get_provider(provider)
        if not pinfo:
            click.echo(f"Unknown provider: {provider}")
            click.echo(f"Available: {', '.join(list_providers())}")
            sys.exit(1)
        llm_overrides["api_base"] = pinfo.api_base
        llm_overrides["provider"] = pinfo.name
        llm_overrides["json_mode"] = pinfo.supports_json_mode
        if not model:
            llm_overrides["model"] = pinfo.default_model
        if not api_key:
            llm_overrides["api_key"] = os.getenv(pinfo.env_key)
    if model:
        llm_overrides["model"] = model
    if api_base:
        llm_overrides["api_base"] = api_base
    if api_key:
        llm_overrides["api_key"] = api_key
    if llm_overrides:
        config = replace(config, llm=replace(config.llm, **llm_overrides))

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


@main.command()
@click.argument("title")
@click.option("--context", "-c", "context", default=None, help="Extra description of the situation")
@click.option("--personality", "-p", type=_PERSONALITY_CHOICE, default="green", help="Response tone")
@click.option("--history", "history_file", default=None, type=click.Path(exists=True, dir_okay=False), help="JSON file of prior suggestions")
@click.pass_context
def suggest(
    ctx: click.Context,
    title: str,
    context: str | None,
    personality: str,
    history_file: str | None,
) -> None:
    """Generate coping suggestions for TITLE."""
    try:
        request = SuggestionRequest.from_payload({
            "title": title,
            "description": context,
            "history": _load_history(history_file),
            "personality": personality,
        })
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    try:
        result = asyncio.run(_orchestrator(ctx).generate_suggestions(request))
    except CobeanError as exc:
        _fail(exc, ctx.obj["verbose"])
        return

    _echo_json(result.model_dump(mode="json"))


@main.command()
@click.argument("message")
@click.option("--personality", "-p", type=_PERSONALITY_CHOICE, default="green", help="Response tone")
@click.option("--stream", is_flag=True, help="Print the reply as it arrives")
@click.pass_context
def chat(ctx: click.Context, message: str, personality: str, stream: bool) -> None:
    """Send MESSAGE to the chat personality and print the reply."""
    orchestrator = _orchestrator(ctx)
    try:
        messages = [ChatMessage(role="user", content=message)]
    except ValidationError as exc:
        raise click.BadParameter("message must not be empty", param_hint="MESSAGE") from exc

    async def _stream() -> None:
        async for delta in orchestrator.stream_chat_reply(messages, personality):
            click.echo(delta, nl=False)
        click.echo()

    try:
        if stream:
            asyncio.run(_stream())
        else:
            reply = asyncio.run(orchestrator.generate_chat_reply(messages, personality))
            click.echo(reply.message)
    except CobeanError as exc:
        _fail(exc, ctx.obj["verbose"])


@main.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Probe the upstream LLM API."""
    status = asyncio.run(_orchestrator(ctx).check_health())
    _echo_json(status.model_dump(mode="json", exclude_none=True))
    if not status.healthy:
        sys.exit(1)


@main.command()
@click.option("--personality", "-p", default="green", help="Personality name (unknown names fall back to green)")
def prompt(personality: str) -> None:
    """Print the system prompt a personality resolves to (no LLM call)."""
    from cobean.prompts import get_template

    template = get_template(personality)
    click.echo(f"# {template.personality.value}\n")
    click.echo(template.system_prompt)


if __name__ == "__main__":
    main()
