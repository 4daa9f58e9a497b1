"""Command line entry points for running bots locally."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.markup import escape

from parley.activity_handler import ActivityHandler
from parley.adapters.console import ConsoleAdapter
from parley.bots import EchoBot
from parley.config import Settings, get_settings
from parley.errors import ActivityFormatError
from parley.schema import Activity, ActivityTypes, message_activity
from parley.turn_context import TurnContext

app = typer.Typer(name="parley", help="Dispatch activities to bot hooks.", add_completion=False)


def load_activities(lines: Iterable[str], source: str) -> list[Activity]:
    """Parse JSON lines into activities, skipping blank lines."""

    activities: list[Activity] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            activities.append(Activity.model_validate_json(line))
        except ValidationError as exc:
            reason = exc.errors()[0]["msg"] if exc.errors() else str(exc)
            raise ActivityFormatError(f"{source}:{lineno}", reason) from exc
    return activities


def _settings(**overrides: Any) -> Settings:
    return get_settings(**{key: value for key, value in overrides.items() if value is not None})


def _build_adapter(settings: Settings) -> ConsoleAdapter:
    adapter = ConsoleAdapter(settings.conversation_reference())

    async def report_error(context: TurnContext, error: Exception) -> None:
        adapter.console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")

    adapter.on_turn_error = report_error
    return adapter


async def _drive(adapter: ConsoleAdapter, bot: ActivityHandler, activities: Iterable[Activity]) -> None:
    for activity in activities:
        await adapter.receive(activity, bot.on_turn)


@app.command("run")
def run(
    text: str = typer.Argument(..., help="Message text sent as the user"),
    bot_id: str | None = typer.Option(None, "--bot-id", help="Bot account id"),
    user_id: str | None = typer.Option(None, "--user-id", help="User account id"),
    channel_id: str | None = typer.Option(None, "--channel", help="Channel id"),
) -> None:
    """Send one message to the echo bot."""

    settings = _settings(bot_id=bot_id, user_id=user_id, channel_id=channel_id)
    adapter = _build_adapter(settings)
    asyncio.run(_drive(adapter, EchoBot(), [message_activity(text)]))


@app.command("replay")
def replay(
    path: str = typer.Argument(..., help="JSON lines file with one activity per line, or - for stdin"),
    bot_id: str | None = typer.Option(None, "--bot-id", help="Bot account id"),
    channel_id: str | None = typer.Option(None, "--channel", help="Channel id"),
) -> None:
    """Replay recorded activities through the echo bot."""

    settings = _settings(bot_id=bot_id, channel_id=channel_id)
    try:
        if path == "-":
            activities = load_activities(sys.stdin, "<stdin>")
        else:
            activities = load_activities(Path(path).read_text(encoding="utf-8").splitlines(), path)
    except UnicodeDecodeError as exc:
        typer.echo(f"error: cannot read {path}: not valid UTF-8 (byte {exc.start})", err=True)
        raise typer.Exit(1) from exc
    except OSError as exc:
        typer.echo(f"error: cannot read {path}: {exc.strerror or exc}", err=True)
        raise typer.Exit(1) from exc
    except ActivityFormatError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(1) from exc

    adapter = _build_adapter(settings)
    asyncio.run(_drive(adapter, EchoBot(), activities))


@app.command("types")
def list_types() -> None:
    """List the activity types routed to dedicated hooks."""

    for activity_type in ActivityTypes:
        typer.echo(activity_type.value)
