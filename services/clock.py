# services/clock.py
from datetime import date, datetime, timezone
from typing import Callable
from zoneinfo import ZoneInfo

from config import REMINDER_TIMEZONE

Clock = Callable[[], date]


def get_today() -> date:
    """Today's date in the bot's configured local time zone."""
    return datetime.now(ZoneInfo(REMINDER_TIMEZONE)).date()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
