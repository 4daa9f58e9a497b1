from __future__ import annotations

from parley.schema import Activity, ActivityTypes, ChannelAccount, ConversationAccount, InputHints, message_activity


def test_from_field_uses_wire_alias() -> None:
    activity = Activity.model_validate({"type": "message", "from": {"id": "u1", "name": "Ann"}, "text": "hi"})

    assert activity.from_ is not None
    assert activity.from_.id == "u1"
    dumped = activity.model_dump(by_alias=True, exclude_none=True)
    assert dumped["from"] == {"id": "u1", "name": "Ann"}


def test_channel_specific_fields_are_kept() -> None:
    activity = Activity.model_validate_json('{"type": "message", "locale": "en-US"}')

    assert activity.model_extra == {"locale": "en-US"}


def test_enum_tags_are_stored_as_wire_values() -> None:
    activity = message_activity("hi", input_hint=InputHints.IGNORING_INPUT)

    assert activity.type == "message"
    assert activity.input_hint == "ignoringInput"
    assert Activity(type=ActivityTypes.STATE_CHANGE).type == "state_change"


def test_create_reply_swaps_accounts() -> None:
    inbound = Activity(
        type="message",
        id="in-1",
        channel_id="test",
        conversation=ConversationAccount(id="c1"),
        from_=ChannelAccount(id="user"),
        recipient=ChannelAccount(id="bot"),
    )

    reply = inbound.create_reply("pong")

    assert reply.type == "message"
    assert reply.text == "pong"
    assert reply.reply_to_id == "in-1"
    assert reply.from_ == inbound.recipient
    assert reply.recipient == inbound.from_
    assert reply.conversation == inbound.conversation


def test_conversation_reference_round_trips_addressing() -> None:
    inbound = Activity(
        type="message",
        id="in-7",
        channel_id="web",
        service_url="https://example.invalid",
        conversation=ConversationAccount(id="c9"),
        from_=ChannelAccount(id="user"),
        recipient=ChannelAccount(id="bot"),
    )

    reference = inbound.get_conversation_reference()
    incoming = Activity(type="message").apply_conversation_reference(reference, is_incoming=True)
    outgoing = Activity(type="message").apply_conversation_reference(reference)

    assert incoming.id == "in-7"
    assert incoming.from_ == inbound.from_
    assert outgoing.from_ == inbound.recipient
    assert outgoing.recipient == inbound.from_
    assert outgoing.reply_to_id == "in-7"
    assert outgoing.service_url == "https://example.invalid"
