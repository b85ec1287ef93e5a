"""Telegram channel implementation using python-telegram-bot."""

from __future__ import annotations

import asyncio

from loguru import logger
from telegram import BotCommand, ForceReply, Message, MessageEntity, Update
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from teleshell.config.schema import Config
from teleshell.segment import Chunk
from teleshell.session.manager import ChatStage, ChatStateManager, Reply
from teleshell.shell.executor import execute_in_bash
from teleshell.shell.report import render_result


def chunk_to_entities(chunk: Chunk) -> list[MessageEntity]:
    """Map chunk annotations to Telegram entities (both count UTF-16 code units)."""
    return [
        MessageEntity(type=a.kind, offset=a.offset, length=a.length)
        for a in chunk.annotations
    ]


def strip_bot_mention(text: str) -> str:
    """Drop the bot name from a command: "/login@my_bot" -> "/login".

    Anything after the command is kept, so "/login secret" stays as it is
    and is not mistaken for a bare "/login".
    """
    head, sep, rest = text.partition(" ")
    return head.split("@")[0] + sep + rest


class TelegramChannel:
    """
    Telegram channel using long polling.

    Each chat logs in with the shared password, then every ``/shell`` command
    runs in its own task and its output is sent back as one or more replies.
    """

    name = "telegram"

    BOT_COMMANDS = [
        BotCommand("login", "Log in with the shared password"),
        BotCommand("logout", "Log out"),
        BotCommand("shell", "Run a shell command"),
    ]

    def __init__(self, config: Config, sessions: ChatStateManager | None = None):
        self.config = config
        self.sessions = sessions or ChatStateManager(password=config.password)
        self.limits = config.limit_policy()
        self._app: Application | None = None
        self._running = False
        self._command_tasks: set[asyncio.Task] = set()

    async def start(self) -> None:
        """Start the Telegram bot with long polling."""
        if not self.config.api_token:
            logger.error("Telegram API token not configured (TELESHELL_API_TOKEN)")
            return

        self._running = True

        builder = Application.builder().token(self.config.api_token)
        if self.config.proxy:
            builder = builder.proxy(self.config.proxy).get_updates_proxy(self.config.proxy)
        self._app = builder.build()

        self._app.add_handler(CommandHandler(["login", "logout", "shell"], self._on_command))
        self._app.add_handler(MessageHandler(filters.TEXT, self._on_message))

        logger.info("Starting Telegram bot (polling mode)...")

        await self._app.initialize()
        await self._app.start()

        bot_info = await self._app.bot.get_me()
        logger.info(f"Authenticated in the Telegram API as @{bot_info.username}")

        try:
            await self._app.bot.set_my_commands(self.BOT_COMMANDS)
        except TelegramError as e:
            logger.warning(f"Failed to register bot commands: {e}")

        await self._app.updater.start_polling(allowed_updates=["message"], timeout=60)

        while self._running:
            await asyncio.sleep(1)

    async def stop(self) -> None:
        """Stop the Telegram bot and abandon running commands."""
        self._running = False

        for task in list(self._command_tasks):
            task.cancel()

        if self._app:
            logger.info("Stopping Telegram bot...")
            await self._app.updater.stop()
            await self._app.stop()
            await self._app.shutdown()
            self._app = None

    async def _on_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /login, /logout and /shell."""
        if not update.message or not update.message.text:
            return
        await self.handle_text(update.message, strip_bot_mention(update.message.text))

    async def _on_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle plain text: passwords, scripts and unknown input."""
        if not update.message or update.message.text is None:
            return
        await self.handle_text(update.message, update.message.text)

    async def handle_text(self, message: Message, text: str) -> None:
        """Route one incoming text through the chat state machine."""
        username = message.from_user.username if message.from_user else None
        state = self.sessions.get_or_create(message.chat_id)
        logged_text = "<password>" if state.stage is ChatStage.AWAITING_PASSWORD else text[:50]
        logger.info(f"Message accepted from {username} (id={message.message_id}): {logged_text}")

        reply: Reply = self.sessions.handle(message.chat_id, text)
        if reply.command is not None:
            task = asyncio.create_task(self._run_command(message, reply.command))
            self._command_tasks.add(task)
            task.add_done_callback(self._command_tasks.discard)
            return

        await self._reply(message, reply.text, force_reply=reply.force_reply)

    async def _run_command(self, message: Message, script: str) -> None:
        result = await execute_in_bash(
            script,
            bash_path=self.config.bash_path,
            timeout=self.config.command_timeout,
        )
        segmentation = render_result(result, self.limits)
        if segmentation.truncated:
            logger.warning(
                f"Output for message {message.message_id} exceeded "
                f"{self.limits.max_chunk_count} messages, remainder dropped"
            )
        await self.send_chunks(message, segmentation.chunks)

    async def send_chunks(self, message: Message, chunks: list[Chunk]) -> None:
        """Send *chunks* in order as replies to *message*."""
        for chunk in chunks:
            await self._reply(message, chunk.text, entities=chunk_to_entities(chunk))

    async def _reply(
        self,
        message: Message,
        text: str,
        entities: list[MessageEntity] | None = None,
        force_reply: bool = False,
    ) -> None:
        try:
            sent = await message.reply_text(
                text,
                entities=entities or None,
                reply_markup=ForceReply() if force_reply else None,
                do_quote=True,
            )
        except TelegramError as e:
            logger.warning(f"Failed to send message to chat {message.chat_id}: {e}")
            return
        logger.info(f"Message sent to chat {message.chat_id} (id={sent.message_id}): {text[:50]}")
