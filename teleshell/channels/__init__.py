"""Chat channels."""

from teleshell.channels.telegram import TelegramChannel

__all__ = ["TelegramChannel"]
