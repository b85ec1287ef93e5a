"""Chunk limits injected by the transport."""

from __future__ import annotations

from dataclasses import dataclass

# Telegram Bot API: message text is capped at 4096 UTF-16 code units.
TELEGRAM_MAX_MESSAGE_LENGTH = 4096
TELEGRAM_MAX_MESSAGES_COUNT = 10

# A supplementary-plane character needs two code units.
MIN_CHUNK_LENGTH = 2


@dataclass(frozen=True)
class LimitPolicy:
    max_chunk_length: int = TELEGRAM_MAX_MESSAGE_LENGTH
    max_chunk_count: int = TELEGRAM_MAX_MESSAGES_COUNT

    def __post_init__(self) -> None:
        if self.max_chunk_length < MIN_CHUNK_LENGTH:
            raise ValueError(f"max_chunk_length must be >= {MIN_CHUNK_LENGTH}, got {self.max_chunk_length}")
        if self.max_chunk_count < 1:
            raise ValueError(f"max_chunk_count must be >= 1, got {self.max_chunk_count}")
