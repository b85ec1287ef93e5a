"""Per-chat login and command state."""

from __future__ import annotations

import enum
import hmac
from dataclasses import dataclass

from loguru import logger

CMD_LOGIN = "/login"
CMD_LOGOUT = "/logout"
CMD_SHELL = "/shell"


class ChatStage(enum.Enum):
    INITIAL = "initial"
    AWAITING_PASSWORD = "awaiting_password"
    AWAITING_COMMAND = "awaiting_command"


@dataclass
class ChatState:
    """Conversation state of one chat."""

    stage: ChatStage = ChatStage.INITIAL
    logged_in: bool = False


@dataclass
class Reply:
    """
    What the channel should do in response to a message.

    Either a text reply (optionally forcing the user to reply to it), or a
    script to run whose output becomes the reply.
    """

    text: str | None = None
    force_reply: bool = False
    command: str | None = None


class ChatStateManager:
    """Tracks :class:`ChatState` per chat and decides replies."""

    def __init__(self, password: str = ""):
        self._password = password
        self._chats: dict[int, ChatState] = {}

    def get_or_create(self, chat_id: int) -> ChatState:
        state = self._chats.get(chat_id)
        if state is None:
            state = ChatState()
            self._chats[chat_id] = state
        return state

    def handle(self, chat_id: int, text: str) -> Reply:
        """Advance the chat's state for an incoming *text* and return the reply."""
        state = self.get_or_create(chat_id)

        if text == CMD_LOGIN:
            state.stage = ChatStage.AWAITING_PASSWORD
            return Reply(text="Specify password", force_reply=True)

        if state.stage is ChatStage.AWAITING_PASSWORD:
            # Always leave the password prompt, even on failure
            state.stage = ChatStage.INITIAL
            if not self._check_password(text):
                logger.warning(f"Invalid password attempt in chat {chat_id}")
                return Reply(text="Invalid password")
            state.logged_in = True
            logger.info(f"Chat {chat_id} logged in")
            return Reply(text="Logged in")

        if text == CMD_LOGOUT:
            if not state.logged_in:
                return Reply(text="Not logged in")
            state.logged_in = False
            logger.info(f"Chat {chat_id} logged out")
            return Reply(text="Logged out")

        if text == CMD_SHELL:
            if not state.logged_in:
                return Reply(text="Not logged in")
            state.stage = ChatStage.AWAITING_COMMAND
            return Reply(text="Specify command", force_reply=True)

        if state.stage is ChatStage.AWAITING_COMMAND:
            state.stage = ChatStage.INITIAL
            if not state.logged_in:
                return Reply(text="Not logged in")
            return Reply(command=text)

        if not state.logged_in:
            return Reply(text="Not logged in")
        return Reply(text="Unknown command")

    def _check_password(self, candidate: str) -> bool:
        if not self._password:
            return False
        return hmac.compare_digest(candidate.encode(), self._password.encode())
