"""Activity classification and dispatch to overridable turn hooks."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, cast

from loguru import logger

from parley.errors import InvalidTurnError
from parley.schema import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationReference,
    InputHints,
    MessageActivity,
    ResourceResponse,
    StateChangeActivity,
    normalize_enum_value,
)
from parley.turn_context import TurnContextProtocol
from parley.types import DeleteActivityHandler, SendActivitiesHandler, TurnState, UpdateActivityHandler

if TYPE_CHECKING:
    from parley.adapter import BotAdapter


class TypedTurnContext[T](TurnContextProtocol, Protocol):
    """A turn whose ``activity`` is statically known to be a ``T`` payload."""

    @property
    def activity(self) -> T: ...  # type: ignore[override]


class ActivityHandler:
    """Route each turn to exactly one hook by the activity's type.

    Subclasses override the hooks they care about; every hook defaults to a
    no-op. Exceptions raised by hooks reach the caller of ``on_turn``
    unchanged.

    Membership changes fan out per member in list order, awaiting each
    ``on_member_added``/``on_member_removed`` before starting the next, so
    hooks that send (e.g. one greeting per new member) never interleave.
    The recipient, i.e. the bot itself, is never reported as added or removed.
    """

    async def on_turn(self, turn_context: TurnContextProtocol) -> None:
        if turn_context is None:
            raise InvalidTurnError("turn_context is required")
        activity = turn_context.activity
        if activity is None:
            raise InvalidTurnError("turn_context must have a non-None activity")
        activity_type = normalize_enum_value(activity.type)
        if activity_type is None:
            raise InvalidTurnError("turn_context.activity must have a non-None type")

        logger.debug("activity.dispatch type={} id={}", activity_type, activity.id)
        if activity_type == ActivityTypes.MESSAGE.value:
            message_context: TypedTurnContext[MessageActivity] = _DelegatingTurnContext(turn_context)
            await self.on_message(message_context)
        elif activity_type == ActivityTypes.STATE_CHANGE.value:
            state_context: TypedTurnContext[StateChangeActivity] = _DelegatingTurnContext(turn_context)
            await self.on_state_change(state_context)
        elif activity_type == ActivityTypes.SYSTEM_NOTIFICATION.value:
            await self.on_system_notification(turn_context)
        elif activity_type == ActivityTypes.DATA_DELETION_REQUEST.value:
            await self.on_data_deletion_request(turn_context)
        elif activity_type == ActivityTypes.RELATIONSHIP_CHANGE.value:
            await self.on_relationship_change(turn_context)
        else:
            await self.on_unrecognized(turn_context)

    async def on_message(self, turn_context: TypedTurnContext[MessageActivity]) -> None:
        return None

    async def on_state_change(self, turn_context: TypedTurnContext[StateChangeActivity]) -> None:
        """Dispatch to ``on_members_added`` or ``on_members_removed``.

        Added members take precedence: when both lists are non-empty only
        ``on_members_added`` runs.
        """
        activity = turn_context.activity
        if activity.members_added:
            await self.on_members_added(activity.members_added, turn_context)
        elif activity.members_removed:
            await self.on_members_removed(activity.members_removed, turn_context)

    async def on_members_added(
        self,
        members_added: Sequence[ChannelAccount],
        turn_context: TypedTurnContext[StateChangeActivity],
    ) -> None:
        recipient_id = _recipient_id(turn_context)
        inner = _untyped(turn_context)
        for member in members_added:
            if member.id != recipient_id:
                await self.on_member_added(member, inner)

    async def on_members_removed(
        self,
        members_removed: Sequence[ChannelAccount],
        turn_context: TypedTurnContext[StateChangeActivity],
    ) -> None:
        recipient_id = _recipient_id(turn_context)
        inner = _untyped(turn_context)
        for member in members_removed:
            if member.id != recipient_id:
                await self.on_member_removed(member, inner)

    async def on_member_added(self, member: ChannelAccount, turn_context: TurnContextProtocol) -> None:
        return None

    async def on_member_removed(self, member: ChannelAccount, turn_context: TurnContextProtocol) -> None:
        return None

    async def on_system_notification(self, turn_context: TurnContextProtocol) -> None:
        return None

    async def on_data_deletion_request(self, turn_context: TurnContextProtocol) -> None:
        return None

    async def on_relationship_change(self, turn_context: TurnContextProtocol) -> None:
        return None

    async def on_unrecognized(self, turn_context: TurnContextProtocol) -> None:
        return None


def _recipient_id(turn_context: TurnContextProtocol | TypedTurnContext[StateChangeActivity]) -> str | None:
    recipient = turn_context.activity.recipient
    return recipient.id if recipient is not None else None


def _untyped(turn_context: TurnContextProtocol | TypedTurnContext[StateChangeActivity]) -> TurnContextProtocol:
    if isinstance(turn_context, _DelegatingTurnContext):
        return turn_context.inner
    return cast(TurnContextProtocol, turn_context)


class _DelegatingTurnContext[T]:
    """Narrow the ``activity`` of a turn to ``T`` and forward everything else.

    Built only by ``ActivityHandler.on_turn`` after it has checked the
    activity type, so the narrowing is never re-validated here.
    """

    def __init__(self, inner: TurnContextProtocol) -> None:
        self._inner = inner

    @property
    def inner(self) -> TurnContextProtocol:
        return self._inner

    @property
    def activity(self) -> T:
        return cast(T, self._inner.activity)

    @property
    def adapter(self) -> BotAdapter:
        return self._inner.adapter

    @property
    def turn_state(self) -> TurnState:
        return self._inner.turn_state

    @property
    def responded(self) -> bool:
        return self._inner.responded

    async def send_activity(
        self,
        activity_or_text: Activity | str,
        speak: str | None = None,
        input_hint: str | InputHints | None = None,
    ) -> ResourceResponse | None:
        return await self._inner.send_activity(activity_or_text, speak, input_hint)

    async def send_activities(self, activities: Sequence[Activity]) -> list[ResourceResponse]:
        return await self._inner.send_activities(activities)

    async def update_activity(self, activity: Activity) -> ResourceResponse | None:
        return await self._inner.update_activity(activity)

    async def delete_activity(self, target: str | ConversationReference) -> None:
        await self._inner.delete_activity(target)

    def on_send_activities(self, handler: SendActivitiesHandler) -> TurnContextProtocol:
        return self._inner.on_send_activities(handler)

    def on_update_activity(self, handler: UpdateActivityHandler) -> TurnContextProtocol:
        return self._inner.on_update_activity(handler)

    def on_delete_activity(self, handler: DeleteActivityHandler) -> TurnContextProtocol:
        return self._inner.on_delete_activity(handler)
