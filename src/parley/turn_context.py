"""Per-turn context: the inbound activity plus the means to respond."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any, Protocol

from loguru import logger

from parley.errors import InvalidTurnError
from parley.schema import Activity, ActivityTypes, ConversationReference, InputHints, ResourceResponse, message_activity
from parley.types import DeleteActivityHandler, SendActivitiesHandler, TurnState, UpdateActivityHandler

if TYPE_CHECKING:
    from parley.adapter import BotAdapter


class TurnContextProtocol(Protocol):
    """Capabilities a turn exposes to bot logic."""

    @property
    def adapter(self) -> BotAdapter: ...

    @property
    def activity(self) -> Activity: ...

    @property
    def turn_state(self) -> TurnState: ...

    @property
    def responded(self) -> bool: ...

    async def send_activity(
        self,
        activity_or_text: Activity | str,
        speak: str | None = None,
        input_hint: str | InputHints | None = None,
    ) -> ResourceResponse | None: ...

    async def send_activities(self, activities: Sequence[Activity]) -> list[ResourceResponse]: ...

    async def update_activity(self, activity: Activity) -> ResourceResponse | None: ...

    async def delete_activity(self, target: str | ConversationReference) -> None: ...

    def on_send_activities(self, handler: SendActivitiesHandler) -> TurnContextProtocol: ...

    def on_update_activity(self, handler: UpdateActivityHandler) -> TurnContextProtocol: ...

    def on_delete_activity(self, handler: DeleteActivityHandler) -> TurnContextProtocol: ...


class TurnContext:
    """Context for one inbound activity, created by the adapter for each turn.

    Outbound calls run through the registered interception handlers in
    registration order before reaching the adapter. A handler that does not
    await its ``next_handler`` stops delivery.
    """

    def __init__(self, adapter: BotAdapter, activity: Activity) -> None:
        if adapter is None:
            raise InvalidTurnError("TurnContext requires an adapter")
        if activity is None:
            raise InvalidTurnError("TurnContext requires an activity")
        self._adapter = adapter
        self._activity = activity
        self._turn_state: TurnState = {}
        self._responded = False
        self._on_send_activities: list[SendActivitiesHandler] = []
        self._on_update_activity: list[UpdateActivityHandler] = []
        self._on_delete_activity: list[DeleteActivityHandler] = []

    @property
    def adapter(self) -> BotAdapter:
        return self._adapter

    @property
    def activity(self) -> Activity:
        return self._activity

    @property
    def turn_state(self) -> TurnState:
        return self._turn_state

    @property
    def responded(self) -> bool:
        return self._responded

    @responded.setter
    def responded(self, value: bool) -> None:
        if not value:
            raise ValueError("responded cannot be reset to False")
        self._responded = True

    def on_send_activities(self, handler: SendActivitiesHandler) -> TurnContext:
        self._on_send_activities.append(handler)
        return self

    def on_update_activity(self, handler: UpdateActivityHandler) -> TurnContext:
        self._on_update_activity.append(handler)
        return self

    def on_delete_activity(self, handler: DeleteActivityHandler) -> TurnContext:
        self._on_delete_activity.append(handler)
        return self

    async def send_activity(
        self,
        activity_or_text: Activity | str,
        speak: str | None = None,
        input_hint: str | InputHints | None = None,
    ) -> ResourceResponse | None:
        """Send one activity, or a text message built from ``activity_or_text``."""

        if isinstance(activity_or_text, str):
            activity = message_activity(
                activity_or_text,
                speak=speak,
                input_hint=input_hint or InputHints.ACCEPTING_INPUT,
            )
        else:
            activity = activity_or_text
        responses = await self.send_activities([activity])
        return responses[0] if responses else None

    async def send_activities(self, activities: Sequence[Activity]) -> list[ResourceResponse]:
        """Address and send a batch of activities in order."""

        if not activities:
            return []
        reference = self._activity.get_conversation_reference()
        outbound: list[Activity] = []
        for activity in activities:
            prepared = activity.model_copy().apply_conversation_reference(reference)
            if not prepared.type:
                prepared.type = ActivityTypes.MESSAGE.value
            outbound.append(prepared)

        async def deliver() -> list[ResourceResponse]:
            logger.debug("turn.send count={} channel={}", len(outbound), reference.channel_id)
            responses = await self._adapter.send_activities(self, outbound)
            self._responded = True
            return responses

        return await self._emit(self._on_send_activities, outbound, deliver)

    async def update_activity(self, activity: Activity) -> ResourceResponse | None:
        """Replace a previously sent activity; ``activity.id`` names the target."""

        reference = self._activity.get_conversation_reference()
        prepared = activity.model_copy().apply_conversation_reference(reference)

        async def deliver() -> ResourceResponse | None:
            logger.debug("turn.update activity_id={}", prepared.id)
            return await self._adapter.update_activity(self, prepared)

        return await self._emit(self._on_update_activity, prepared, deliver)

    async def delete_activity(self, target: str | ConversationReference) -> None:
        """Delete a previously sent activity by id or by full reference."""

        if isinstance(target, str):
            reference = self._activity.get_conversation_reference()
            reference.activity_id = target
        else:
            reference = target

        async def deliver() -> None:
            logger.debug("turn.delete activity_id={}", reference.activity_id)
            await self._adapter.delete_activity(self, reference)

        await self._emit(self._on_delete_activity, reference, deliver)

    async def _emit(
        self,
        handlers: Sequence[Callable[..., Awaitable[Any]]],
        payload: Any,
        logic: Callable[[], Awaitable[Any]],
    ) -> Any:
        chain = list(handlers)

        async def run(index: int) -> Any:
            if index == len(chain):
                return await logic()
            return await chain[index](self, payload, lambda: run(index + 1))

        return await run(0)
