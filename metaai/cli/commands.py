"""Command line interface for the Meta AI client."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import click

from metaai.client import MetaAIError, ResponseParseError, SessionStateError
from metaai.utils.logger import configure_logging, get_logger

from .utils import EXIT_COMMANDS, format_sources, get_client, is_sources_request

LOGGER = get_logger(__name__)

PROMPT_LABEL = "Ask me anything"
PROMPT_ERROR = "There was an error sending your prompt."
SOURCES_ERROR = "There was an error grabbing sources."


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Path to config file.")
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Chat with Meta AI from the terminal."""
    from metaai.cli import load_settings as _load_settings

    settings = _load_settings(config_path)
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.log_level, structured=settings.structured_logging)
    ctx.obj = {"settings": settings}

    if ctx.invoked_subcommand is None:
        ctx.invoke(chat)


def _echo_sources(ctx: click.Context) -> None:
    client = get_client(ctx)
    try:
        sources = client.fetch_sources()
    except SessionStateError:
        click.echo("No reply to show sources for yet. Ask something first.")
        return
    except ResponseParseError as exc:
        LOGGER.error("Unexpected sources response: %s", exc)
        click.echo(SOURCES_ERROR)
        return
    except MetaAIError as exc:
        LOGGER.error("Sources lookup failed: %s", exc)
        click.echo(SOURCES_ERROR)
        return

    if sources is False:
        click.echo(SOURCES_ERROR)
        return
    for line in format_sources(sources):
        click.echo(line)


def _echo_reply(ctx: click.Context, message: str) -> None:
    client = get_client(ctx)
    try:
        reply = client.send_prompt(message)
    except MetaAIError as exc:
        LOGGER.error("Prompt failed: %s", exc)
        click.echo(PROMPT_ERROR)
        return

    click.echo()
    click.echo(PROMPT_ERROR if reply is False else reply)
    click.echo()


@cli.command()
@click.pass_context
def chat(ctx: click.Context) -> None:
    """Start an interactive conversation. Type SOURCES to list citations."""
    click.echo("Meta AI chat")
    click.echo("Type a message, SOURCES for the citations behind the last reply, and 'exit' to quit.")
    click.echo("=" * 50)

    while True:
        try:
            user_input = click.prompt(
                PROMPT_LABEL, default="", show_default=False, prompt_suffix=": "
            ).strip()
        except (KeyboardInterrupt, EOFError, click.Abort):
            click.echo("\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            click.echo("Goodbye!")
            break

        if is_sources_request(user_input):
            _echo_sources(ctx)
            continue

        _echo_reply(ctx, user_input)


@cli.command()
@click.argument("prompt", nargs=-1, required=True)
@click.option("--sources", "with_sources", is_flag=True, help="Also print the citations behind the reply.")
@click.pass_context
def ask(ctx: click.Context, prompt: Tuple[str, ...], with_sources: bool) -> None:
    """Send a single prompt and print the reply."""
    message = " ".join(prompt).strip()
    if not message:
        raise click.UsageError("Provide a prompt to send.")

    client = get_client(ctx)
    try:
        reply = client.send_prompt(message)
    except MetaAIError as exc:
        raise click.ClickException(f"Meta AI request failed: {exc}") from exc
    if reply is False:
        raise click.ClickException(PROMPT_ERROR)
    click.echo(reply)

    if not with_sources:
        return
    try:
        sources = client.fetch_sources()
    except MetaAIError as exc:
        raise click.ClickException(f"Meta AI request failed: {exc}") from exc
    if sources is False:
        raise click.ClickException(SOURCES_ERROR)
    click.echo()
    for line in format_sources(sources):
        click.echo(line)


def main() -> None:
    cli(prog_name="metaai")


if __name__ == "__main__":  # pragma: no cover
    main()
