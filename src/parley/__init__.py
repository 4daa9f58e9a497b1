"""parley - route conversation activities to bot hooks."""

from .activity_handler import ActivityHandler, TypedTurnContext
from .adapter import BotAdapter
from .schema import (
    Activity,
    ActivityTypes,
    ChannelAccount,
    ConversationAccount,
    ConversationReference,
    InputHints,
    MessageActivity,
    ResourceResponse,
    StateChangeActivity,
)
from .turn_context import TurnContext, TurnContextProtocol

__version__ = "0.1.0"

__all__ = [
    "Activity",
    "ActivityHandler",
    "ActivityTypes",
    "BotAdapter",
    "ChannelAccount",
    "ConversationAccount",
    "ConversationReference",
    "InputHints",
    "MessageActivity",
    "ResourceResponse",
    "StateChangeActivity",
    "TurnContext",
    "TurnContextProtocol",
    "TypedTurnContext",
]
