# app/utils/clock.py
"""Business-local "now", injected wherever today's date or time matters"""
from datetime import datetime
from typing import Callable
from zoneinfo import ZoneInfo

from app.config.settings import get_settings

# Zero-arg callable returning a naive business-local datetime
Clock = Callable[[], datetime]


def business_now() -> datetime:
    """Current wall-clock time in the configured business timezone, tz-naive."""
    tz = ZoneInfo(get_settings().BUSINESS_TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def fixed_clock(moment: datetime) -> Clock:
    """Clock frozen at a given moment."""
    return lambda: moment


def get_clock() -> Clock:
    """Clock dependency for FastAPI"""
    return business_now
