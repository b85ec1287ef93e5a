"""Chat session state."""

from teleshell.session.manager import ChatStage, ChatState, ChatStateManager, Reply

__all__ = ["ChatStage", "ChatState", "ChatStateManager", "Reply"]
