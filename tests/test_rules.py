"""
Tests for the Tuesday/Thursday 2:00PM-4:00PM blackout rule.
Run with: pytest tests/test_rules.py -v
"""

import pytest

from roomsched.utils.conflict import overlaps
from roomsched.utils.rules import TIME_FORMAT_MESSAGE, check_restriction
from roomsched.utils.timefmt import parse_time

BLACKOUT = "Tuesday/Thursday classes cannot be scheduled between 2:00PM and 4:00PM."


class TestRestriction:
    def test_tuesday_across_window_start(self):
        result = check_restriction(["Tuesday"], "1:00PM", "2:30PM")
        assert not result.valid
        assert result.message == BLACKOUT

    def test_thursday_inside_window(self):
        assert not check_restriction(["Monday", "Thursday"], "2:30PM", "3:30PM").valid

    def test_other_days_unrestricted(self):
        assert check_restriction(["Monday", "Wednesday", "Friday"], "2:00PM", "4:00PM").valid

    @pytest.mark.parametrize("start, end", [
        ("12:00PM", "2:00PM"),   # ends where the window starts
        ("4:00PM", "5:15PM"),    # starts where the window ends
        ("9:00AM", "10:15AM"),
    ])
    def test_outside_window(self, start, end):
        assert check_restriction(["Tuesday", "Thursday"], start, end).valid

    def test_boundary_touch_flagged_even_without_overlap(self):
        # start == 2:00PM
        assert not overlaps(parse_time("2:00PM"), parse_time("2:00PM"), parse_time("2:00PM"), parse_time("4:00PM"))
        assert not check_restriction(["Tuesday"], "2:00PM", "2:00PM").valid
        # end == 4:00PM
        assert not overlaps(parse_time("4:00PM"), parse_time("4:00PM"), parse_time("2:00PM"), parse_time("4:00PM"))
        assert not check_restriction(["Thursday"], "4:00PM", "4:00PM").valid

    def test_bad_format_short_circuits(self):
        result = check_restriction(["Monday"], "9:00", "10:00AM")
        assert not result.valid
        assert result.message == TIME_FORMAT_MESSAGE

        result = check_restriction(["Tuesday"], "2:30PM", "25:00PM")
        assert result.message == TIME_FORMAT_MESSAGE

    def test_custom_window(self):
        result = check_restriction(
            ["Friday"], "11:30AM", "12:30PM",
            restricted_days=["Friday"], window_start="12:00PM", window_end="1:00PM",
        )
        assert not result.valid
        assert result.message == "Friday classes cannot be scheduled between 12:00PM and 1:00PM."
