from .config import Config, env_flag

TELEGRAM_BOT_TOKEN = Config.TELEGRAM_BOT_TOKEN
ATTEND_CHAT_ID = Config.ATTEND_CHAT_ID

DATABASE_URL = Config.DATABASE_URL

DEBUG = env_flag("DEBUG", "0")
LOG_LEVEL = Config.LOG_LEVEL

AUTO_INIT_DB = Config.AUTO_INIT_DB
