# roomsched/utils/timefmt.py
"""
12-hour clock strings <-> minutes since midnight.

Canonical form is what gets stored and shown: no leading zero on the hour,
two-digit minutes, uppercase meridiem glued on ("9:05AM", "2:00PM").
Ordering and overlap are always computed on minutes, never on the strings.
"""
import re

TIME_PATTERN = re.compile(r"^(1[0-2]|0?[1-9]):([0-5][0-9])([AP]M)$", re.IGNORECASE)

MINUTES_PER_DAY = 24 * 60


class InvalidTimeError(ValueError):
    pass


def is_valid_time(s) -> bool:
    return isinstance(s, str) and TIME_PATTERN.match(s) is not None


def parse_time(s: str) -> int:
    """
    "9:30AM" -> 570, "12:00AM" -> 0, "12:15PM" -> 735
    Anything not matching TIME_PATTERN raises InvalidTimeError.
    """
    m = TIME_PATTERN.match(s) if isinstance(s, str) else None
    if not m:
        raise InvalidTimeError(f"Invalid time: {s!r}")

    hour = int(m.group(1)) % 12
    minute = int(m.group(2))
    if m.group(3).upper() == "PM":
        hour += 12
    return hour * 60 + minute


def format_time(hour: int, minute: int) -> str:
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"hour/minute out of range: {hour}:{minute}")
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d}{suffix}"


def format_minutes(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"minutes out of range: {minutes}")
    return format_time(*divmod(minutes, 60))


def canonical_time(s: str) -> str:
    return format_minutes(parse_time(s))
