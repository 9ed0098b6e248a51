# roomsched/utils/rules.py
from typing import Iterable, NamedTuple, Optional

from roomsched.config import settings
from roomsched.utils.timefmt import is_valid_time, parse_time

TIME_FORMAT_MESSAGE = "Invalid time format. Please use format like 9:00AM or 2:30PM."


class RuleResult(NamedTuple):
    valid: bool
    message: Optional[str] = None


def restriction_message(days: Iterable[str], start: str, end: str) -> str:
    return f"{'/'.join(days)} classes cannot be scheduled between {start} and {end}."


def touches_window(start: int, end: int, window_start: int, window_end: int) -> bool:
    # unlike overlaps(), starting exactly at the window start or ending
    # exactly at the window end also counts
    return (start < window_end and end > window_start) or start == window_start or end == window_end


def check_restriction(
    days: Iterable[str],
    start_time: str,
    end_time: str,
    restricted_days: Optional[Iterable[str]] = None,
    window_start: Optional[str] = None,
    window_end: Optional[str] = None,
) -> RuleResult:
    """
    Tuesday/Thursday blackout: no class may touch 2:00PM-4:00PM on those days.
    A malformed time short-circuits with the format message.
    """
    if not is_valid_time(start_time) or not is_valid_time(end_time):
        return RuleResult(False, TIME_FORMAT_MESSAGE)

    restricted_days = list(restricted_days or settings.RESTRICTED_DAYS)
    window_start = window_start or settings.RESTRICTED_START
    window_end = window_end or settings.RESTRICTED_END

    if any(d in restricted_days for d in days):
        hit = touches_window(
            parse_time(start_time), parse_time(end_time),
            parse_time(window_start), parse_time(window_end),
        )
        if hit:
            return RuleResult(False, restriction_message(restricted_days, window_start, window_end))

    return RuleResult(True)
