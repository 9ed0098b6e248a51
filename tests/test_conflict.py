"""
Tests for day sets and interval overlap.
Run with: pytest tests/test_conflict.py -v
"""

from types import SimpleNamespace

import pytest

from roomsched.utils.conflict import conflict_label, find_first_conflict, overlaps
from roomsched.utils.days import WEEKDAYS, days_intersect, normalize_days
from roomsched.utils.timefmt import parse_time


def cls(code, start, end, days, number="101", section="A"):
    return SimpleNamespace(
        course_code=code, course_number=number, section=section,
        start_time=start, end_time=end, days=days,
    )


class TestDays:
    def test_weekdays_only(self):
        assert WEEKDAYS == ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday")

    def test_intersect(self):
        assert days_intersect(["Monday", "Wednesday"], ["Wednesday"])
        assert not days_intersect(["Monday"], ["Tuesday", "Thursday"])
        assert not days_intersect([], ["Monday"])

    def test_intersect_is_exact_match(self):
        assert not days_intersect(["Tue"], ["Tuesday"])
        assert not days_intersect(["monday"], ["Monday"])

    def test_normalize_orders_and_dedupes(self):
        assert normalize_days(["Friday", "Monday", "Monday"]) == ["Monday", "Friday"]

    @pytest.mark.parametrize("days", [[], None, ["Saturday"], ["Mon"]])
    def test_normalize_rejects(self, days):
        with pytest.raises(ValueError):
            normalize_days(days)


class TestOverlaps:
    def test_self_overlap(self):
        assert overlaps(540, 600, 540, 600)

    def test_touching_does_not_overlap(self):
        # 9:00-10:00 vs 10:00-11:00
        assert not overlaps(540, 600, 600, 660)
        assert not overlaps(600, 660, 540, 600)

    def test_partial_and_nested(self):
        assert overlaps(540, 600, 570, 630)
        assert overlaps(540, 720, 600, 660)
        assert overlaps(600, 660, 540, 720)

    def test_disjoint(self):
        assert not overlaps(540, 600, 700, 760)


class TestClassConflicts:
    def test_label(self):
        assert conflict_label(cls("CS", "9:00AM", "10:00AM", ["Monday"], "101", "B")) == "CS-101-B"

    def test_needs_shared_day_and_overlap(self):
        existing = [cls("CS", "9:00AM", "10:00AM", ["Monday", "Wednesday"])]

        def hit(start, end, days):
            return find_first_conflict(existing, parse_time(start), parse_time(end), days)

        assert hit("9:30AM", "10:30AM", ["Wednesday"]) is existing[0]
        assert hit("9:30AM", "10:30AM", ["Tuesday"]) is None
        assert hit("10:00AM", "11:00AM", ["Monday"]) is None

    def test_first_match_in_iteration_order(self):
        existing = [
            cls("BIO", "8:00AM", "8:50AM", ["Monday"]),
            cls("CS", "9:00AM", "10:00AM", ["Monday"]),
            cls("MATH", "9:15AM", "9:45AM", ["Wednesday"]),
        ]
        hit = find_first_conflict(existing, parse_time("9:30AM"), parse_time("10:30AM"), ["Monday", "Wednesday"])
        assert hit is existing[1]

    def test_no_conflict(self):
        existing = [cls("CS", "9:00AM", "10:00AM", ["Monday"])]
        assert find_first_conflict(existing, parse_time("10:00AM"), parse_time("11:00AM"), ["Monday"]) is None
