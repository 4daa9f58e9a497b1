"""Activity schema models exchanged between channels and bots."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActivityTypes(str, Enum):
    """Closed set of activity tags the dispatcher routes on."""

    MESSAGE = "message"
    STATE_CHANGE = "state_change"
    SYSTEM_NOTIFICATION = "system_notification"
    DATA_DELETION_REQUEST = "data_deletion_request"
    RELATIONSHIP_CHANGE = "relationship_change"


class InputHints(str, Enum):
    ACCEPTING_INPUT = "acceptingInput"
    IGNORING_INPUT = "ignoringInput"
    EXPECTING_INPUT = "expectingInput"


def normalize_enum_value(value: Any) -> str | None:
    """Return the wire value of an Enum member, or ``value`` as a string."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class _SchemaModel(BaseModel):
    # Channels attach their own fields; keep them instead of rejecting.
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ChannelAccount(_SchemaModel):
    """A participant of a conversation. Identity is the ``id``."""

    id: str
    name: str | None = None
    role: str | None = None


class ConversationAccount(_SchemaModel):
    id: str
    name: str | None = None
    is_group: bool = False


class ConversationReference(_SchemaModel):
    """Enough addressing information to reach a conversation again."""

    activity_id: str | None = None
    user: ChannelAccount | None = None
    bot: ChannelAccount | None = None
    conversation: ConversationAccount | None = None
    channel_id: str | None = None
    service_url: str | None = None


class ResourceResponse(_SchemaModel):
    """Receipt returned by a channel for one delivered activity."""

    id: str


class Activity(_SchemaModel):
    """One inbound or outbound activity."""

    type: str | None = None
    id: str | None = None
    timestamp: datetime | None = None
    channel_id: str | None = None
    service_url: str | None = None
    conversation: ConversationAccount | None = None
    from_: ChannelAccount | None = Field(default=None, alias="from")
    recipient: ChannelAccount | None = None
    reply_to_id: str | None = None
    text: str | None = None
    speak: str | None = None
    input_hint: str | None = None
    attachments: list[dict[str, Any]] = Field(default_factory=list)
    members_added: list[ChannelAccount] | None = None
    members_removed: list[ChannelAccount] | None = None
    name: str | None = None
    value: Any = None
    action: str | None = None

    @field_validator("type", "input_hint", mode="before")
    @classmethod
    def _normalize_enum(cls, value: Any) -> str | None:
        return normalize_enum_value(value)

    def get_conversation_reference(self) -> ConversationReference:
        """Build a reference that addresses replies back to this activity's sender."""
        return ConversationReference(
            activity_id=self.id,
            user=self.from_,
            bot=self.recipient,
            conversation=self.conversation,
            channel_id=self.channel_id,
            service_url=self.service_url,
        )

    def apply_conversation_reference(self, reference: ConversationReference, *, is_incoming: bool = False) -> Activity:
        """Stamp addressing from ``reference`` onto this activity in place."""
        self.channel_id = reference.channel_id
        self.service_url = reference.service_url
        self.conversation = reference.conversation
        if is_incoming:
            self.from_ = reference.user
            self.recipient = reference.bot
            if reference.activity_id is not None:
                self.id = reference.activity_id
        else:
            self.from_ = reference.bot
            self.recipient = reference.user
            if reference.activity_id is not None:
                self.reply_to_id = reference.activity_id
        return self

    def create_reply(self, text: str | None = None) -> Activity:
        """Create a message addressed back to the sender of this activity."""
        return Activity(
            type=ActivityTypes.MESSAGE,
            timestamp=datetime.now().astimezone(),
            channel_id=self.channel_id,
            service_url=self.service_url,
            conversation=self.conversation,
            from_=self.recipient,
            recipient=self.from_,
            reply_to_id=self.id,
            text=text or "",
        )


def message_activity(text: str, speak: str | None = None, input_hint: str | InputHints | None = None) -> Activity:
    return Activity(type=ActivityTypes.MESSAGE, text=text, speak=speak, input_hint=input_hint)


class MessageActivity(Protocol):
    """Payload view of an activity tagged ``message``."""

    type: str | None
    id: str | None
    text: str | None
    speak: str | None
    input_hint: str | None
    attachments: list[dict[str, Any]]
    from_: ChannelAccount | None
    recipient: ChannelAccount | None
    conversation: ConversationAccount | None


class StateChangeActivity(Protocol):
    """Payload view of an activity tagged ``state_change``."""

    type: str | None
    id: str | None
    members_added: list[ChannelAccount] | None
    members_removed: list[ChannelAccount] | None
    recipient: ChannelAccount | None
    conversation: ConversationAccount | None
