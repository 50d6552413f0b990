from __future__ import annotations

import importlib
from dataclasses import dataclass
from typing import Optional

from config import get_settings_module

from .core.constants import DEFAULT_DATABASE_URL
from .core.exceptions import ConfigurationError


@dataclass(frozen=True)
class BotSettings:
    telegram_bot_token: str
    attend_chat_id: int
    database_url: str = DEFAULT_DATABASE_URL
    debug: bool = False
    log_level: str = "INFO"
    auto_init_db: bool = True
    settings_module: str = ""


def load_settings(settings_module: Optional[str] = None) -> BotSettings:
    """Read the environment-selected settings module into a BotSettings.

    Raises ConfigurationError when the bot token or class chat id is missing.
    """

    module_name = settings_module or get_settings_module()
    settings = importlib.import_module(module_name)

    token = str(getattr(settings, "TELEGRAM_BOT_TOKEN", "") or "").strip()
    raw_chat_id = str(getattr(settings, "ATTEND_CHAT_ID", "") or "").strip()
    if not token or not raw_chat_id:
        raise ConfigurationError("Please set TELEGRAM_BOT_TOKEN and ATTEND_CHAT_ID in the environment.")

    try:
        attend_chat_id = int(raw_chat_id)
    except ValueError:
        raise ConfigurationError(f"ATTEND_CHAT_ID must be a numeric chat id, got {raw_chat_id!r}") from None

    return BotSettings(
        telegram_bot_token=token,
        attend_chat_id=attend_chat_id,
        database_url=str(getattr(settings, "DATABASE_URL", None) or DEFAULT_DATABASE_URL),
        debug=bool(getattr(settings, "DEBUG", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", True)),
        settings_module=module_name,
    )
