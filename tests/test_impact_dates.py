"""Tests for the impact date math: shared-date codec, age and breakdowns."""

import logging
from calendar import monthrange
from datetime import date, datetime, timedelta, timezone

import pytest
from dateutil.relativedelta import relativedelta

from impact_dates import (
    IMPACT_MOMENT,
    TARGET_DATE,
    DurationBreakdown,
    age_at_impact,
    age_breakdown,
    duration_between,
    format_impact_date,
    format_shared_date,
    parse_shared_date,
    time_until_impact,
)


class TestSharedDateCodec:
    def test_parses_dd_mm_yyyy(self):
        assert parse_shared_date("01-01-2000") == date(2000, 1, 1)

    def test_strips_whitespace(self):
        assert parse_shared_date(" 22-12-1990 ") == date(1990, 12, 22)

    @pytest.mark.parametrize("raw", [None, "", "   ", "not-a-date", "31-02-2020", "1-1-2000",
                                     "2000-01-01", "01/01/2000", "32-01-2000", "01-13-2000"])
    def test_malformed_returns_none(self, raw):
        assert parse_shared_date(raw) is None

    def test_malformed_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="impact_dates"):
            assert parse_shared_date("31-02-2020") is None
        assert "31-02-2020" in caplog.text

    def test_format_is_zero_padded(self):
        assert format_shared_date(date(2001, 2, 3)) == "03-02-2001"

    @pytest.mark.parametrize("value", [date(2000, 1, 1), date(2024, 2, 29), date(1905, 7, 9),
                                       TARGET_DATE, date(9999, 12, 31)])
    def test_round_trip(self, value):
        assert parse_shared_date(format_shared_date(value)) == value

    def test_impact_date_in_spanish(self):
        assert format_impact_date() == "22 diciembre, 2032"
        assert format_impact_date(date(2030, 3, 5)) == "05 marzo, 2030"


class TestAgeAtImpact:
    def test_born_2000_is_32(self):
        assert age_at_impact(date(2000, 1, 1)) == 32

    def test_no_birth_date(self):
        assert age_at_impact(None) is None
        assert age_breakdown(None) is None

    def test_anniversary_on_target_counts(self):
        assert age_at_impact(date(2000, 12, 22)) == 32

    def test_day_after_anniversary_truncates(self):
        assert age_at_impact(date(2000, 12, 23)) == 31

    def test_leap_day_birth(self):
        # 2032 is a leap year, so the last anniversary falls on 29 February
        assert age_at_impact(date(2004, 2, 29)) == 28
        assert age_breakdown(date(2004, 2, 29)) == DurationBreakdown(years=28, months=9, days=23)

    def test_born_after_target_clamps_to_zero(self):
        assert age_at_impact(date(2040, 1, 1)) == 0

    def test_age_matches_anniversary_count(self):
        for birth in [date(1950, 6, 15), date(1987, 12, 21), date(1987, 12, 23), date(2031, 12, 22)]:
            anniversaries = sum(
                1 for year in range(birth.year + 1, TARGET_DATE.year + 1)
                if birth.replace(year=year) <= TARGET_DATE
            )
            assert age_at_impact(birth) == anniversaries


class TestDurationBetween:
    def test_calendar_breakdown(self):
        assert age_breakdown(date(2000, 1, 1)) == DurationBreakdown(years=32, months=11, days=21)

    def test_respects_month_length(self):
        # 2031-12-23 + 11 months = 2032-11-23, then 29 days to 2032-12-22
        assert age_breakdown(date(2000, 12, 23)) == DurationBreakdown(years=31, months=11, days=29)

    def test_end_before_start_is_zero(self):
        assert duration_between(date(2030, 1, 1), date(2020, 1, 1)).is_zero()
        assert duration_between(date(2030, 1, 1), date(2030, 1, 1)).is_zero()

    def test_rejects_non_dates(self):
        with pytest.raises(TypeError):
            duration_between("2000-01-01", TARGET_DATE)

    def test_components_within_bounds(self):
        starts = [date(1999, 1, 31), date(2000, 2, 29), date(2010, 8, 31), date(2023, 12, 1)]
        ends = [datetime(2024, 3, 1, 5, 59, tzinfo=timezone.utc), datetime(2032, 12, 22, 23, 59),
                date(2031, 2, 28), date(2024, 1, 31)]
        for start in starts:
            for end in ends:
                bd = duration_between(start, end)
                # remaining days fall in the month reached after years and months
                anchor = start + relativedelta(years=bd.years, months=bd.months)
                assert bd.years >= 0
                assert 0 <= bd.months <= 11
                assert 0 <= bd.days <= monthrange(anchor.year, anchor.month)[1] - 1
                assert 0 <= bd.hours <= 23
                assert 0 <= bd.minutes <= 59


class TestTimeUntilImpact:
    def test_hours_and_minutes_before_impact(self):
        now = IMPACT_MOMENT - timedelta(hours=1, minutes=30)
        assert time_until_impact(now) == DurationBreakdown(hours=1, minutes=30)

    def test_naive_now_is_utc(self):
        assert time_until_impact(datetime(2032, 12, 21, 23, 0)) == DurationBreakdown(hours=1)

    def test_other_timezone_is_converted(self):
        now = datetime(2032, 12, 21, 20, 0, tzinfo=timezone(timedelta(hours=-3)))
        assert time_until_impact(now) == DurationBreakdown(hours=1)

    def test_years_ahead(self):
        remaining = time_until_impact(datetime(2025, 1, 1, tzinfo=timezone.utc))
        assert (remaining.years, remaining.months, remaining.days) == (7, 11, 21)

    def test_after_impact_stays_at_zero(self):
        assert time_until_impact(IMPACT_MOMENT + timedelta(days=3)).is_zero()
        assert time_until_impact(IMPACT_MOMENT).is_zero()

    def test_default_now(self):
        # Real clock: either still counting down or clamped, never negative
        remaining = time_until_impact()
        assert remaining.years >= 0 and remaining.minutes >= 0
