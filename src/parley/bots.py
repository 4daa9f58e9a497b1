"""Sample bots built on ActivityHandler."""

from __future__ import annotations

from parley.activity_handler import ActivityHandler, TypedTurnContext
from parley.schema import ChannelAccount, MessageActivity
from parley.turn_context import TurnContextProtocol


class EchoBot(ActivityHandler):
    """Echo every message back and greet members as they come and go."""

    def __init__(self, prefix: str = "echo: ") -> None:
        self.prefix = prefix

    async def on_message(self, turn_context: TypedTurnContext[MessageActivity]) -> None:
        text = (turn_context.activity.text or "").strip()
        if not text:
            return
        await turn_context.send_activity(f"{self.prefix}{text}")

    async def on_member_added(self, member: ChannelAccount, turn_context: TurnContextProtocol) -> None:
        await turn_context.send_activity(f"Welcome, {member.name or member.id}!")

    async def on_member_removed(self, member: ChannelAccount, turn_context: TurnContextProtocol) -> None:
        await turn_context.send_activity(f"Goodbye, {member.name or member.id}.")
