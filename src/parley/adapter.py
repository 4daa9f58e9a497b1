"""Base transport adapter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from loguru import logger

from parley.logging_utils import turn_scope
from parley.schema import Activity, ConversationReference, ResourceResponse
from parley.turn_context import TurnContext
from parley.types import BotCallback, TurnErrorHandler


class BotAdapter(ABC):
    """Abstract base class for channel adapters.

    Subclasses deliver outbound traffic; ``process_activity`` drives one turn.
    """

    name: str = "base"

    def __init__(self, on_turn_error: TurnErrorHandler | None = None) -> None:
        self.on_turn_error = on_turn_error

    @abstractmethod
    async def send_activities(self, context: TurnContext, activities: Sequence[Activity]) -> list[ResourceResponse]:
        """Deliver activities to the channel, returning one receipt per activity."""

    @abstractmethod
    async def update_activity(self, context: TurnContext, activity: Activity) -> ResourceResponse | None:
        """Replace an activity that was already delivered."""

    @abstractmethod
    async def delete_activity(self, context: TurnContext, reference: ConversationReference) -> None:
        """Remove an activity that was already delivered."""

    def create_context(self, activity: Activity) -> TurnContext:
        return TurnContext(self, activity)

    async def process_activity(self, activity: Activity, logic: BotCallback) -> TurnContext:
        """Run one inbound activity through ``logic`` and return its context.

        Log records emitted during the turn carry ``extra["turn"]``.
        """
        context = self.create_context(activity)
        with turn_scope(activity.channel_id, activity.id):
            try:
                await logic(context)
            except Exception as exc:
                if self.on_turn_error is None:
                    raise
                logger.opt(exception=True).warning(
                    "{}.turn.error activity_type={} activity_id={}",
                    self.name,
                    activity.type,
                    activity.id,
                )
                await self.on_turn_error(context, exc)
        return context
