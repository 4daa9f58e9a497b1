"""Adapter utility helpers."""

from __future__ import annotations

from datetime import datetime

from parley.schema import Activity, ChannelAccount, ConversationAccount, ConversationReference


def default_reference(
    *,
    channel_id: str = "test",
    user_id: str = "user",
    user_name: str | None = "User",
    bot_id: str = "bot",
    bot_name: str | None = "Bot",
    conversation_id: str = "conversation",
) -> ConversationReference:
    return ConversationReference(
        channel_id=channel_id,
        service_url=f"{channel_id}://localhost",
        user=ChannelAccount(id=user_id, name=user_name, role="user"),
        bot=ChannelAccount(id=bot_id, name=bot_name, role="bot"),
        conversation=ConversationAccount(id=conversation_id),
    )


def stamp_inbound(activity: Activity, reference: ConversationReference, activity_id: str) -> Activity:
    """Fill the addressing an inbound activity is missing from ``reference``, in place."""

    if activity.channel_id is None:
        activity.channel_id = reference.channel_id
    if activity.service_url is None:
        activity.service_url = reference.service_url
    if activity.conversation is None:
        activity.conversation = reference.conversation
    if activity.from_ is None:
        activity.from_ = reference.user
    if activity.recipient is None:
        activity.recipient = reference.bot
    if activity.id is None:
        activity.id = activity_id
    if activity.timestamp is None:
        activity.timestamp = datetime.now().astimezone()
    return activity
