"""Configuration management for parley."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from parley.adapters.utils import default_reference
from parley.logging_utils import LogProfile, configure_logging
from parley.schema import ConversationReference


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PARLEY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_profile: LogProfile = Field(default="default", description="Log profile: default or console")

    # Conversation Configuration
    bot_id: str = Field(default="bot", description="Account id the bot answers as")
    bot_name: str = Field(default="parley", description="Display name of the bot")
    user_id: str = Field(default="user", description="Account id of the local user")
    user_name: str | None = Field(default=None, description="Display name of the local user")
    channel_id: str = Field(default="console", description="Channel id stamped on inbound activities")
    conversation_id: str = Field(default="local", description="Conversation id for local runs")

    def conversation_reference(self) -> ConversationReference:
        return default_reference(
            channel_id=self.channel_id,
            user_id=self.user_id,
            user_name=self.user_name,
            bot_id=self.bot_id,
            bot_name=self.bot_name,
            conversation_id=self.conversation_id,
        )


def get_settings(**overrides: object) -> Settings:
    """Build settings from the environment and configure logging.

    Args:
        overrides: Field values that take precedence over the environment

    Returns:
        Settings instance
    """
    settings = Settings(**overrides)  # type: ignore[arg-type]
    configure_logging(profile=settings.log_profile, level=settings.log_level)
    return settings
