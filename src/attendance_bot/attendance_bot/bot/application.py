from __future__ import annotations

import logging

from telegram import BotCommand, BotCommandScopeAllPrivateChats, BotCommandScopeChat
from telegram.error import TelegramError
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from ..container import Container
from ..settings import BotSettings
from .commands import (
    ATTENDANCE_COMMANDS,
    CAPTION_COMMAND_PATTERN,
    COMMAND_DESCRIPTIONS,
    COMMAND_HELP,
    HELP_COMMANDS,
)
from .dispatcher import CommandDispatcher

logger = logging.getLogger(__name__)


def bot_commands() -> list[BotCommand]:
    names = list(ATTENDANCE_COMMANDS) + [COMMAND_HELP]
    return [BotCommand(name, COMMAND_DESCRIPTIONS[name]) for name in names]


async def register_commands(application: Application, attend_chat_id: int) -> None:
    """Publish the command menu for private chats and the class group chat."""

    logger.info("Registering bot commands...")
    try:
        commands = bot_commands()
        await application.bot.set_my_commands(commands, scope=BotCommandScopeAllPrivateChats())
        await application.bot.set_my_commands(commands, scope=BotCommandScopeChat(chat_id=attend_chat_id))
        logger.info("Bot commands registered")
    except TelegramError as e:
        logger.error("Error registering commands: %s", e)

    logger.info("Logged in as @%s", application.bot.username)


def command_filter(attend_chat_id: int) -> filters.BaseFilter:
    """New messages only, from a private chat or the class group chat.

    Passing ``filters=`` to a handler replaces PTB's default update-type filter,
    so edited messages would otherwise run the command a second time.
    """

    return filters.UpdateType.MESSAGE & (filters.ChatType.PRIVATE | filters.Chat(chat_id=attend_chat_id))


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Exception while handling an update", exc_info=context.error)


def build_application(settings: BotSettings, container: Container) -> Application:
    dispatcher = CommandDispatcher(container.attendance_service)

    async def post_init(application: Application) -> None:
        await register_commands(application, settings.attend_chat_id)

    async def post_shutdown(application: Application) -> None:
        container.conn.dispose()

    application = (
        Application.builder()
        .token(settings.telegram_bot_token)
        .post_init(post_init)
        .post_shutdown(post_shutdown)
        .build()
    )

    chat_filter = command_filter(settings.attend_chat_id)
    application.add_handler(
        CommandHandler(list(ATTENDANCE_COMMANDS) + list(HELP_COMMANDS), dispatcher.dispatch, filters=chat_filter)
    )
    application.add_handler(
        MessageHandler(filters.CaptionRegex(CAPTION_COMMAND_PATTERN) & chat_filter, dispatcher.dispatch)
    )
    application.add_error_handler(on_error)

    return application
