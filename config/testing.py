import os

TELEGRAM_BOT_TOKEN = "test-token"
ATTEND_CHAT_ID = "-1001234567890"

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///attendance_test.db")

DEBUG = False
TESTING = True
LOG_LEVEL = "DEBUG"

AUTO_INIT_DB = True
