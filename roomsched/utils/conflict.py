# roomsched/utils/conflict.py
from typing import Iterable, Optional

from roomsched.utils.days import days_intersect
from roomsched.utils.timefmt import parse_time


def overlaps(s1: int, e1: int, s2: int, e2: int) -> bool:
    """
    Half-open [start, end) in minutes.
    9:00-10:00 and 10:00-11:00 touch but do not overlap.
    """
    return s1 < e2 and e1 > s2


def conflict_label(cls) -> str:
    return f"{cls.course_code}-{cls.course_number}-{cls.section}"


def find_first_conflict(candidates: Iterable, start: int, end: int, days: Iterable[str]) -> Optional[object]:
    """
    candidates: existing classes, already narrowed to one room or one semester
    Returns the first one (iteration order) sharing a day and overlapping [start, end).
    """
    days = list(days)
    for c in candidates:
        if not days_intersect(c.days, days):
            continue
        if overlaps(start, end, parse_time(c.start_time), parse_time(c.end_time)):
            return c
    return None
