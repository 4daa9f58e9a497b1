"""Console adapter that renders outbound activities with rich."""

from __future__ import annotations

import itertools
from collections.abc import Sequence

from loguru import logger
from rich.console import Console
from rich.markup import escape

from parley.adapter import BotAdapter
from parley.adapters.utils import default_reference, stamp_inbound
from parley.schema import Activity, ActivityTypes, ConversationReference, ResourceResponse
from parley.turn_context import TurnContext
from parley.types import BotCallback, TurnErrorHandler


class ConsoleAdapter(BotAdapter):
    """Adapter for local runs: inbound from the caller, outbound to the terminal."""

    name = "console"

    def __init__(
        self,
        reference: ConversationReference | None = None,
        *,
        console: Console | None = None,
        on_turn_error: TurnErrorHandler | None = None,
    ) -> None:
        super().__init__(on_turn_error)
        self.reference = reference or default_reference(channel_id="console")
        self.console = console or Console()
        self._ids = itertools.count(1)

    async def send_activities(self, context: TurnContext, activities: Sequence[Activity]) -> list[ResourceResponse]:
        responses: list[ResourceResponse] = []
        for activity in activities:
            if activity.id is None:
                activity.id = f"out-{next(self._ids)}"
            self._render(activity)
            responses.append(ResourceResponse(id=activity.id))
        return responses

    async def update_activity(self, context: TurnContext, activity: Activity) -> ResourceResponse | None:
        self.console.print(f"[dim]updated {escape(activity.id or '?')}:[/dim] {escape(activity.text or '')}")
        return ResourceResponse(id=activity.id) if activity.id else None

    async def delete_activity(self, context: TurnContext, reference: ConversationReference) -> None:
        self.console.print(f"[dim]deleted {escape(reference.activity_id or '?')}[/dim]")

    async def receive(self, activity: Activity, logic: BotCallback) -> TurnContext:
        inbound = stamp_inbound(activity.model_copy(), self.reference, f"in-{next(self._ids)}")
        logger.debug("console.inbound type={} id={}", inbound.type, inbound.id)
        return await self.process_activity(inbound, logic)

    def _render(self, activity: Activity) -> None:
        speaker = "bot"
        if activity.from_ is not None:
            speaker = activity.from_.name or activity.from_.id
        if activity.type == ActivityTypes.MESSAGE.value:
            self.console.print(f"[bold green]{escape(speaker)}:[/bold green] {escape(activity.text or '')}")
            return
        self.console.print(f"[dim]{escape(speaker)} sent {escape(activity.type or 'activity')}[/dim]")
