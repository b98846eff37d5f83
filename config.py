import os
from datetime import time

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def get_env_var(name: str) -> str:
    """Get environment variable or raise a clear error if missing."""
    value = os.getenv(name)
    if not value:
        raise RuntimeError(
            f"❌ Missing required environment variable: {name}\n"
            f"👉 Did you copy .env.example to .env and fill in your keys?"
        )
    return value


def _parse_clock(value: str) -> time:
    hour, _, minute = value.partition(":")
    return time(hour=int(hour), minute=int(minute or 0))


# Secrets are resolved when first needed so the domain core imports without them
def get_bot_token() -> str:
    return get_env_var("TELEGRAM_BOT_TOKEN")


def get_google_api_key() -> str:
    return get_env_var("GOOGLE_API_KEY")


# Optional vars (with defaults)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-2.0-flash")
ADVICE_TIMEOUT_SECONDS = float(os.getenv("ADVICE_TIMEOUT_SECONDS", "30"))

FEEDBACK_CSV_PATH = os.getenv("FEEDBACK_CSV_PATH", "feedback.csv")
MENU_IMAGE_PATH = os.getenv("MENU_IMAGE_PATH", "menu_image.jpg")

REMINDER_TIME = _parse_clock(os.getenv("REMINDER_TIME", "16:19"))
REMINDER_TIMEZONE = os.getenv("REMINDER_TIMEZONE", "Asia/Singapore")

MAX_TEXT_LENGTH = int(os.getenv("MAX_TEXT_LENGTH", "1000"))
