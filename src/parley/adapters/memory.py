"""In-memory adapter that records outbound traffic."""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Sequence

from parley.adapter import BotAdapter
from parley.adapters.utils import default_reference, stamp_inbound
from parley.schema import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationReference,
    ResourceResponse,
    message_activity,
)
from parley.turn_context import TurnContext
from parley.types import BotCallback, TurnErrorHandler


class MemoryAdapter(BotAdapter):
    """Adapter that keeps every outbound, update and delete in lists."""

    name = "memory"

    def __init__(
        self,
        reference: ConversationReference | None = None,
        *,
        on_turn_error: TurnErrorHandler | None = None,
    ) -> None:
        super().__init__(on_turn_error)
        self.reference = reference or default_reference()
        self.sent: list[Activity] = []
        self.updated: list[Activity] = []
        self.deleted: list[ConversationReference] = []
        self._ids = itertools.count(1)

    async def send_activities(self, context: TurnContext, activities: Sequence[Activity]) -> list[ResourceResponse]:
        responses: list[ResourceResponse] = []
        for activity in activities:
            if activity.id is None:
                activity.id = self._next_id("out")
            self.sent.append(activity)
            responses.append(ResourceResponse(id=activity.id))
        return responses

    async def update_activity(self, context: TurnContext, activity: Activity) -> ResourceResponse | None:
        self.updated.append(activity)
        return ResourceResponse(id=activity.id or self._next_id("out"))

    async def delete_activity(self, context: TurnContext, reference: ConversationReference) -> None:
        self.deleted.append(reference)

    def make_activity(self, activity: Activity) -> Activity:
        return stamp_inbound(activity.model_copy(), self.reference, self._next_id("in"))

    async def send(self, message: str | Activity, logic: BotCallback) -> TurnContext:
        """Run ``message`` as the user's next inbound activity."""
        activity = message_activity(message) if isinstance(message, str) else message
        return await self.process_activity(self.make_activity(activity), logic)

    async def add_members(self, members: Iterable[ChannelAccount], logic: BotCallback) -> TurnContext:
        activity = Activity(type=ActivityTypes.STATE_CHANGE, members_added=list(members))
        return await self.process_activity(self.make_activity(activity), logic)

    async def remove_members(self, members: Iterable[ChannelAccount], logic: BotCallback) -> TurnContext:
        activity = Activity(type=ActivityTypes.STATE_CHANGE, members_removed=list(members))
        return await self.process_activity(self.make_activity(activity), logic)

    def sent_texts(self) -> list[str]:
        return [activity.text or "" for activity in self.sent]

    def _next_id(self, prefix: str) -> str:
        return f"{prefix}-{next(self._ids)}"
