# tests/test_calendar_utils.py
from datetime import date, datetime, timedelta

import pytest

from utils.lead_tracker.calendar_utils import (
    current_week,
    make_week_key,
    parse_week_key,
    shift_week,
    week_date_range,
    week_number_of,
    weeks_in_month,
    weeks_overlapping_month,
    year_options,
)


class TestWeekNumberOf:

    def test_every_day_maps_into_range(self):
        d = date(2019, 1, 1)
        while d < date(2031, 1, 1):
            assert 1 <= week_number_of(d) <= 53
            d += timedelta(days=1)

    def test_matches_thursday_rule(self):
        d = date(2015, 1, 1)
        while d < date(2027, 1, 1):
            assert week_number_of(d) == d.isocalendar()[1]
            d += timedelta(days=3)

    @pytest.mark.parametrize("d, expected", [
        (date(2024, 1, 1), 1),
        (date(2024, 10, 16), 42),
        (date(2021, 1, 1), 53),
        (date(2024, 12, 31), 1),
        (date(2023, 1, 1), 52),
    ])
    def test_known_dates(self, d, expected):
        assert week_number_of(d) == expected

    def test_accepts_datetime(self):
        assert week_number_of(datetime(2024, 1, 1, 23, 59)) == 1

    def test_deterministic(self):
        assert week_number_of(date(2020, 6, 15)) == week_number_of(date(2020, 6, 15))


class TestWeekDateRange:

    def test_year_starting_on_monday(self):
        week = week_date_range(2024, 1)
        assert week.start == date(2024, 1, 1)
        assert week.end == date(2024, 1, 7)
        assert week.label() == "Jan 1 - Jan 7"

    def test_offset_week(self):
        week = week_date_range(2024, 42)
        assert week.start == date(2024, 10, 14)
        assert week.end == date(2024, 10, 20)

    def test_sunday_snaps_back_to_previous_monday(self):
        week = week_date_range(2023, 1)
        assert week.start == date(2022, 12, 26)
        assert week.end == date(2023, 1, 1)

    def test_not_the_inverse_of_week_number(self):
        # Week 1 of 2023 by the range algorithm contains days of week 52
        week = week_date_range(2023, 1)
        assert week_number_of(week.start) == 52

    def test_always_monday_to_sunday(self):
        for year in (2020, 2021, 2022, 2023, 2024, 2025):
            for week_number in (1, 10, 26, 52):
                week = week_date_range(year, week_number)
                assert week.start.weekday() == 0
                assert (week.end - week.start).days == 6


class TestWeeksInMonth:

    def test_january_2024(self):
        weeks = weeks_in_month(2024, 0)
        assert weeks[0] == week_number_of(date(2024, 1, 1))
        assert weeks == [1, 2, 3, 4, 5]

    def test_contiguous_and_increasing(self):
        for month_index in range(1, 11):
            weeks = weeks_in_month(2024, month_index)
            assert weeks == list(range(weeks[0], weeks[-1] + 1))

    def test_year_wrap_gives_empty_range(self):
        # Jan 1 2021 is in week 53, Jan 31 in week 4
        assert weeks_in_month(2021, 0) == []
        # Dec 31 2024 is already week 1
        assert weeks_in_month(2024, 11) == []


class TestWeeksOverlappingMonth:

    def test_january_2024(self):
        assert weeks_overlapping_month(1, 2024) == [1, 2, 3, 4, 5]

    def test_keeps_wraparound_week_first(self):
        assert weeks_overlapping_month(1, 2021) == [53, 1, 2, 3, 4]

    def test_differs_from_timeline_range(self):
        assert weeks_overlapping_month(1, 2021) != weeks_in_month(2021, 0)

    def test_december_2024_samples_every_seventh_day(self):
        assert weeks_overlapping_month(12, 2024) == [48, 49, 50, 51, 52]

    def test_deduplicated(self):
        for month in range(1, 13):
            weeks = weeks_overlapping_month(month, 2025)
            assert len(weeks) == len(set(weeks))


class TestNavigation:

    def test_previous_from_week_one_rolls_to_52(self):
        assert shift_week(2024, 1, -1) == (2023, 52)

    def test_next_from_week_52_rolls_to_next_year(self):
        assert shift_week(2024, 52, 1) == (2025, 1)

    def test_week_53_moves_to_next_year(self):
        assert shift_week(2020, 53, 1) == (2021, 1)
        assert shift_week(2020, 53, -1) == (2020, 52)

    def test_multi_step(self):
        assert shift_week(2024, 2, -3) == (2023, 51)
        assert shift_week(2024, 10, 0) == (2024, 10)

    def test_current_week(self):
        assert current_week(date(2024, 10, 16)) == (2024, 42)
        # Calendar year is kept even when the week number wraps
        assert current_week(date(2021, 1, 1)) == (2021, 53)

    def test_year_options(self):
        years = year_options(today=date(2024, 5, 1))
        assert years[0] == 2020
        assert years[-1] == 2029


class TestWeekKeys:

    def test_make_and_parse(self):
        assert make_week_key(2024, 7) == "2024-W7"
        assert parse_week_key("2024-W7") == (2024, 7)
        assert parse_week_key("2024-W42") == (2024, 42)

    @pytest.mark.parametrize("bad", ["", "2024", "2024-7", "W7-2024", "2024-W", None])
    def test_malformed_keys(self, bad):
        assert parse_week_key(bad) is None
