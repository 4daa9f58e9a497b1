from __future__ import annotations

from typing import Any

import pytest

import parley
from parley.activity_handler import ActivityHandler, TypedTurnContext
from parley.adapters.memory import MemoryAdapter
from parley.schema import Activity, ConversationReference, MessageActivity, ResourceResponse
from parley.turn_context import TurnContext
from parley.types import SendNext


class CapturingHandler(ActivityHandler):
    def __init__(self) -> None:
        self.context: Any = None

    async def on_message(self, turn_context: TypedTurnContext[MessageActivity]) -> None:
        self.context = turn_context


async def _typed_context(adapter: MemoryAdapter, text: str = "hi") -> tuple[Any, TurnContext]:
    handler = CapturingHandler()
    context = await adapter.send(text, handler.on_turn)
    return handler.context, context


def _dump(activity: Activity) -> dict[str, Any]:
    return activity.model_dump(exclude={"id", "timestamp"})


@pytest.mark.asyncio
async def test_typed_context_shares_underlying_turn() -> None:
    adapter = MemoryAdapter()
    typed, context = await _typed_context(adapter)

    assert typed.inner is context
    assert typed.activity is context.activity
    assert typed.adapter is adapter

    typed.turn_state["seen"] = True
    context.turn_state["other"] = 1
    assert context.turn_state == {"seen": True, "other": 1}
    assert typed.turn_state is context.turn_state


@pytest.mark.asyncio
async def test_typed_context_payload_mutations_are_visible_on_turn() -> None:
    adapter = MemoryAdapter()
    typed, context = await _typed_context(adapter)

    typed.activity.text = "changed"

    assert context.activity.text == "changed"


@pytest.mark.asyncio
async def test_send_through_typed_context_matches_direct_send() -> None:
    adapter = MemoryAdapter()
    typed, context = await _typed_context(adapter)

    assert typed.responded is False
    await typed.send_activity("reply", "spoken reply")
    assert typed.responded is True
    assert context.responded is True
    await context.send_activity("reply", "spoken reply")

    assert len(adapter.sent) == 2
    assert _dump(adapter.sent[0]) == _dump(adapter.sent[1])


@pytest.mark.asyncio
async def test_batch_update_and_delete_are_forwarded() -> None:
    adapter = MemoryAdapter()
    typed, context = await _typed_context(adapter)

    responses = await typed.send_activities([Activity(text="one"), Activity(text="two")])
    assert [response.id for response in responses] == [activity.id for activity in adapter.sent]

    await typed.update_activity(Activity(id=responses[0].id, text="one, edited"))
    await typed.delete_activity(responses[1].id)
    reference = context.activity.get_conversation_reference()
    reference.activity_id = "explicit"
    await typed.delete_activity(reference)

    assert adapter.updated[0].id == responses[0].id
    assert adapter.updated[0].text == "one, edited"
    assert [ref.activity_id for ref in adapter.deleted] == [responses[1].id, "explicit"]


@pytest.mark.asyncio
async def test_callbacks_registered_on_typed_context_apply_to_turn() -> None:
    adapter = MemoryAdapter()
    typed, context = await _typed_context(adapter)
    seen: list[str] = []

    async def on_send(ctx: TurnContext, activities: list[Activity], next_send: SendNext) -> list[ResourceResponse]:
        seen.extend(activity.text or "" for activity in activities)
        return await next_send()

    async def on_update(ctx: TurnContext, activity: Activity, next_update: Any) -> ResourceResponse | None:
        seen.append(f"update:{activity.id}")
        return await next_update()

    async def on_delete(ctx: TurnContext, reference: ConversationReference, next_delete: Any) -> None:
        seen.append(f"delete:{reference.activity_id}")
        await next_delete()

    assert typed.on_send_activities(on_send) is context
    assert typed.on_update_activity(on_update) is context
    assert typed.on_delete_activity(on_delete) is context

    await context.send_activity("direct")
    await typed.update_activity(Activity(id="a1", text="x"))
    await typed.delete_activity("a1")

    assert seen == ["direct", "update:a1", "delete:a1"]


def test_delegating_context_is_not_exported() -> None:
    assert "_DelegatingTurnContext" not in parley.__all__
    assert not hasattr(parley, "DelegatingTurnContext")
