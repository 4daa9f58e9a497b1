"""Framework-neutral callable aliases."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from parley.schema import Activity, ConversationReference, ResourceResponse
    from parley.turn_context import TurnContext

type TurnState = dict[str, Any]

type BotCallback = Callable[[TurnContext], Awaitable[None]]
type TurnErrorHandler = Callable[[TurnContext, Exception], Awaitable[None]]

type SendNext = Callable[[], Awaitable[list[ResourceResponse]]]
type UpdateNext = Callable[[], Awaitable[ResourceResponse | None]]
type DeleteNext = Callable[[], Awaitable[None]]

type SendActivitiesHandler = Callable[[TurnContext, list[Activity], SendNext], Awaitable[list[ResourceResponse]]]
type UpdateActivityHandler = Callable[[TurnContext, Activity, UpdateNext], Awaitable[ResourceResponse | None]]
type DeleteActivityHandler = Callable[[TurnContext, ConversationReference, DeleteNext], Awaitable[None]]
