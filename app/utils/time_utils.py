# app/utils/time_utils.py
"""
Wall-clock helpers shared by the availability engine and the booking ledger.

Slots travel to the booking page in 12-hour form ("9:30 AM") and are
stored in 24-hour form ("09:30").
"""
import re
from datetime import date, datetime, time, timedelta
from typing import List, Union

TIME_12H_PATTERN = re.compile(r"^(0?[1-9]|1[0-2]):([0-5][0-9]) (AM|PM)$")
TIME_24H_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):([0-5][0-9])(?::([0-5][0-9]))?$")

# Any fixed day works, only the time of day matters
_ANCHOR_DAY = date(2000, 1, 1)


def to_12_hour(time24: str) -> str:
    """Convert "HH:MM" to "H:MM AM/PM"."""
    match = TIME_24H_PATTERN.match(time24)
    if not match:
        raise ValueError(f"Invalid 24-hour time: {time24!r}")

    hour = int(match.group(1))
    minutes = match.group(2)
    ampm = "PM" if hour >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minutes} {ampm}"


def to_24_hour(time12: str) -> str:
    """Convert "H:MM AM/PM" to zero-padded "HH:MM"."""
    match = TIME_12H_PATTERN.match(time12)
    if not match:
        raise ValueError(f"Invalid 12-hour time: {time12!r}")

    hour = int(match.group(1))
    minutes = match.group(2)
    ampm = match.group(3)

    if ampm == "AM" and hour == 12:
        hour = 0
    elif ampm == "PM" and hour != 12:
        hour += 12

    return f"{hour:02d}:{minutes}"


def parse_time(value: str) -> time:
    """
    Parse a wall-clock time given either as "2:30 PM" or "14:30" / "14:30:00".

    Raises ValueError for anything else.
    """
    value = value.strip()
    if TIME_12H_PATTERN.match(value):
        value = to_24_hour(value)

    match = TIME_24H_PATTERN.match(value)
    if not match:
        raise ValueError(
            'Time must be in 12-hour format (e.g., "2:30 PM") or 24-hour format (e.g., "14:30")'
        )

    return time(int(match.group(1)), int(match.group(2)), int(match.group(3) or 0))


def parse_slot_time(value: str) -> time:
    """
    Parse a booking start time at minute precision.

    Slots are keyed by "HH:MM", so seconds are accepted and dropped:
    "10:00:30" and "10:00 AM" name the same slot.
    """
    return parse_time(value).replace(second=0, microsecond=0)


def format_time_24(value: Union[time, str]) -> str:
    """Render a stored time as "HH:MM" (seconds dropped)."""
    if isinstance(value, str):
        return value[:5]
    return value.strftime("%H:%M")


def generate_slots(open_time: time, close_time: time, duration_minutes: int) -> List[str]:
    """
    Candidate start times from open_time in steps of duration_minutes,
    strictly before close_time, in 12-hour display form.

    The last slot may run past closing; only its start is checked.
    """
    if not duration_minutes or duration_minutes <= 0:
        raise ValueError("Slot duration must be a positive number of minutes")

    current = datetime.combine(_ANCHOR_DAY, open_time)
    end = datetime.combine(_ANCHOR_DAY, close_time)
    step = timedelta(minutes=duration_minutes)

    slots = []
    while current < end:
        slots.append(to_12_hour(current.strftime("%H:%M")))
        current += step

    return slots
