"""Configuration schema using Pydantic.

Values come from ``TELESHELL_*`` environment variables or a ``.env`` file,
e.g. ``TELESHELL_API_TOKEN`` or ``TELESHELL_LIMITS__MAX_MESSAGES_COUNT``.
"""

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from teleshell.segment.limits import (
    MIN_CHUNK_LENGTH,
    TELEGRAM_MAX_MESSAGE_LENGTH,
    TELEGRAM_MAX_MESSAGES_COUNT,
    LimitPolicy,
)


class LimitsConfig(BaseModel):
    """Reply size limits imposed by the Telegram Bot API."""
    max_message_length: int = TELEGRAM_MAX_MESSAGE_LENGTH
    max_messages_count: int = TELEGRAM_MAX_MESSAGES_COUNT

    @field_validator("max_message_length")
    @classmethod
    def _valid_length(cls, v: int) -> int:
        if v < MIN_CHUNK_LENGTH:
            raise ValueError(f"limits.max_message_length must be >= {MIN_CHUNK_LENGTH}")
        return v

    @field_validator("max_messages_count")
    @classmethod
    def _valid_count(cls, v: int) -> int:
        if v < 1:
            raise ValueError("limits.max_messages_count must be >= 1")
        return v


class Config(BaseSettings):
    """Root configuration for teleshell."""

    model_config = SettingsConfigDict(
        env_prefix="TELESHELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    api_token: str = ""
    password: str = ""
    bash_path: str = "/bin/bash"
    proxy: str | None = None
    command_timeout: int = 300  # seconds
    debug: bool = False
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @field_validator("command_timeout")
    @classmethod
    def _positive_timeout(cls, v: int) -> int:
        if v < 1:
            raise ValueError("command_timeout must be >= 1")
        return v

    def limit_policy(self) -> LimitPolicy:
        return LimitPolicy(
            max_chunk_length=self.limits.max_message_length,
            max_chunk_count=self.limits.max_messages_count,
        )
