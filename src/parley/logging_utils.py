"""Runtime logging helpers."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "console"]

NO_TURN = "-"

_PROFILE_FORMATS: dict[LogProfile, str] = {
    "console": "[{extra[turn]}] {message}",
    "default": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {extra[turn]} | {name}:{function}:{line} | {message}",
}
_CONFIGURED: tuple[LogProfile, str] | None = None


def turn_label(channel_id: str | None, activity_id: str | None) -> str:
    return f"{channel_id or '?'}:{activity_id or '?'}"


@contextmanager
def turn_scope(channel_id: str | None, activity_id: str | None) -> Iterator[str]:
    """Tag every record logged inside the block with the turn it belongs to."""
    label = turn_label(channel_id, activity_id)
    with logger.contextualize(turn=label):
        yield label


def configure_logging(*, profile: LogProfile = "default", level: str | None = None) -> None:
    """Configure process-level logging once per profile and level."""

    global _CONFIGURED
    resolved_level = (level or os.getenv("PARLEY_LOG_LEVEL", "INFO")).upper()
    if _CONFIGURED == (profile, resolved_level):
        return

    logger.remove()
    # Records outside a turn still need a value for {extra[turn]}.
    logger.configure(extra={"turn": NO_TURN})
    sink: Handler | object = _build_console_handler() if profile == "console" else sys.stderr
    logger.add(
        sink,  # type: ignore[arg-type]
        level=resolved_level,
        format=_PROFILE_FORMATS[profile],
        backtrace=False,
        diagnose=False,
    )
    _CONFIGURED = (profile, resolved_level)


def _build_console_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
