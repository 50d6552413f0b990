from __future__ import annotations

import logging

from dotenv import load_dotenv
from telegram import Update
from telegram.ext import Application

from .bot.application import build_application
from .container import build_container
from .core.exceptions import ConfigurationError
from .database.connection import redacted_url
from .settings import BotSettings, load_settings

logger = logging.getLogger("attendance_bot")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(format=LOG_FORMAT, level=level)
    logging.getLogger().setLevel(level)
    # httpx logs every request URL, and Telegram URLs carry the bot token.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def log_startup(settings: BotSettings) -> None:
    logger.info(
        "settings=%s db=%s chat=%s", settings.settings_module, redacted_url(settings.database_url), settings.attend_chat_id
    )


def create_application(settings: BotSettings) -> Application:
    if settings.debug:
        log_startup(settings)

    container = build_container(database_url=settings.database_url, init_schema=settings.auto_init_db)
    return build_application(settings, container)


def run() -> None:
    load_dotenv(override=False)
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error("%s", e)
        raise SystemExit(1)

    configure_logging(settings.log_level)
    application = create_application(settings)

    logger.info("Bot running (polling mode)")
    application.run_polling(allowed_updates=Update.ALL_TYPES)
