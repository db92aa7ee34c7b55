"""날짜/시각 유틸리티 테스트.

Date utility tests — month ranges, "HH:MM" parsing, durations across
midnight, half-up rounding and day-category bucketing.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from shiftboard.utils.date_utils import (
    calculate_duration_in_minutes,
    day_bounds,
    day_category,
    get_month_date_range,
    local_date,
    parse_date,
    parse_time_string,
    round_half_up,
    to_local,
)


class TestMonthRange:
    """월 범위 테스트."""

    def test_february_non_leap(self):
        """2025년 2월은 28일까지."""
        start, end = get_month_date_range(2025, 2)
        assert start == datetime(2025, 2, 1, 0, 0, 0)
        assert end == datetime(2025, 2, 28, 23, 59, 59, 999000)

    def test_february_leap(self):
        """윤년 2월은 29일까지."""
        _, end = get_month_date_range(2024, 2)
        assert end.date() == date(2024, 2, 29)

    def test_december_rolls_year(self):
        """12월 말일은 31일."""
        start, end = get_month_date_range(2025, 12)
        assert start.date() == date(2025, 12, 1)
        assert end.date() == date(2025, 12, 31)

    @pytest.mark.parametrize("month", [0, 13])
    def test_invalid_month(self, month):
        """1~12 범위 밖의 월은 ValueError."""
        with pytest.raises(ValueError):
            get_month_date_range(2025, month)

    def test_day_bounds(self):
        """하루 범위는 00:00:00.000 ~ 23:59:59.999."""
        start, end = day_bounds(date(2025, 4, 1))
        assert start == datetime(2025, 4, 1)
        assert end == datetime(2025, 4, 1, 23, 59, 59, 999000)


class TestTimeStrings:
    """시각 문자열 테스트."""

    def test_parse(self):
        assert parse_time_string("09:30") == (9, 30)

    def test_parse_missing_minutes(self):
        """분이 없으면 0."""
        assert parse_time_string("7") == (7, 0)

    def test_parse_garbage(self):
        """숫자가 아니면 0."""
        assert parse_time_string("xx:yy") == (0, 0)

    def test_duration_same_day(self):
        assert calculate_duration_in_minutes("09:00", "17:30") == 510

    def test_duration_crosses_midnight(self):
        """종료가 시작보다 이르면 자정을 넘긴 것으로 계산."""
        assert calculate_duration_in_minutes("22:00", "01:00") == 180

    def test_duration_zero(self):
        assert calculate_duration_in_minutes("10:00", "10:00") == 0


class TestRounding:
    """반올림 테스트."""

    def test_half_rounds_up(self):
        """0.5는 올림 (banker's rounding 아님)."""
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(2.5, 0) == 3.0

    def test_two_thirds(self):
        assert round_half_up(460 / 60, 2) == 7.67


class TestDayCategory:
    """요일 구분 테스트."""

    def test_weekday(self):
        assert day_category(date(2025, 4, 2)) == "weekday"

    def test_weekend(self):
        assert day_category(date(2025, 4, 5)) == "saturday"
        assert day_category(date(2025, 4, 6)) == "sunday"

    def test_holiday_wins(self):
        """공휴일은 요일보다 우선."""
        assert day_category(date(2025, 4, 29), holidays=[date(2025, 4, 29)]) == "holiday"


class TestTimezone:
    """타임존 정규화 테스트 (기본 Asia/Tokyo)."""

    def test_naive_is_kept(self):
        value = datetime(2025, 4, 1, 9, 0)
        assert to_local(value) == value

    def test_aware_is_converted(self):
        """UTC 23:30은 도쿄 기준 다음날 08:30."""
        value = datetime(2025, 4, 1, 23, 30, tzinfo=timezone.utc)
        assert to_local(value) == datetime(2025, 4, 2, 8, 30)
        assert local_date(value) == date(2025, 4, 2)

    def test_parse_date(self):
        assert parse_date("2025-04-01") == date(2025, 4, 1)
        assert parse_date("2025-04-01T10:00:00") == date(2025, 4, 1)
        assert parse_date(datetime(2025, 4, 1, 23, 0, tzinfo=timezone(timedelta(hours=9)))) == date(2025, 4, 1)
