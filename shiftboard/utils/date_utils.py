"""날짜/시각 변환 유틸리티 모듈.

Date and time conversion utility module.
All attendance instants are kept as naive wall-clock datetimes in the
business timezone (settings.TIMEZONE); calendar dates are those instants
truncated to the day. Aware datetimes coming from clients are converted
to that wall clock on entry.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from shiftboard.config import settings

# 요일 이름 — Weekday names indexed by date.weekday() (Monday == 0)
WEEKDAY_NAMES: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

MINUTES_PER_DAY: int = 24 * 60
MS_PER_HOUR: int = 1000 * 60 * 60


def business_tz() -> ZoneInfo:
    """영업 기준 타임존 (Business timezone from settings)."""
    return ZoneInfo(settings.TIMEZONE)


def local_now() -> datetime:
    """영업 타임존 기준 현재 벽시계 시각을 반환합니다.

    Return the current wall-clock time in the business timezone as a naive datetime.
    Used as the default clock for services; tests inject their own.
    """
    return datetime.now(business_tz()).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()


def to_local(value: datetime) -> datetime:
    """시각을 영업 타임존의 naive 벽시계 시각으로 정규화합니다.

    Normalize a datetime to a naive wall-clock time in the business timezone.
    Naive inputs are assumed to already be business-local.

    Args:
        value: 정규화할 시각 (Datetime to normalize, naive or aware)

    Returns:
        datetime: tzinfo가 제거된 현지 시각 (Naive business-local datetime)
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(business_tz()).replace(tzinfo=None)


def local_date(value: datetime) -> date:
    """시각을 달력 날짜로 절삭합니다 (Truncate an instant to its business-local calendar date)."""
    return to_local(value).date()


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """하루 전체 범위 — 00:00:00.000 ~ 23:59:59.999.

    Return the closed whole-day range for a calendar date.
    """
    start: datetime = datetime.combine(day, time(0, 0, 0))
    end: datetime = datetime.combine(day, time(23, 59, 59, 999000))
    return start, end


def get_month_date_range(year: int, month: int) -> tuple[datetime, datetime]:
    """월 단위 날짜 범위를 생성합니다.

    Return [first-of-month 00:00:00, last-of-month 23:59:59.999] for a 1-based month.

    Args:
        year: 연도 (Year)
        month: 월, 1부터 시작 (Month, 1-based)

    Returns:
        tuple[datetime, datetime]: (월초 시작 시각, 월말 종료 시각)

    Raises:
        ValueError: 월이 1~12 범위를 벗어날 때 (When month is outside 1..12)

    Example:
        get_month_date_range(2025, 2)
        # (datetime(2025, 2, 1, 0, 0), datetime(2025, 2, 28, 23, 59, 59, 999000))
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    first_day: date = date(year, month, 1)
    # 다음 달 1일의 전날 = 이번 달 말일 (Day before the 1st of next month)
    next_month_first: date = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    last_day: date = next_month_first - timedelta(days=1)
    return day_bounds(first_day)[0], day_bounds(last_day)[1]


def parse_time_string(time_str: str) -> tuple[int, int]:
    """시각 문자열을 (시, 분)으로 파싱합니다.

    Parse an "HH:MM" string. Missing or non-numeric parts count as 0.

    Args:
        time_str: "HH:MM" 형식 문자열 (Time string)

    Returns:
        tuple[int, int]: (hours, minutes)
    """
    parts: list[str] = time_str.split(":")

    def _part(index: int) -> int:
        if index >= len(parts):
            return 0
        try:
            return int(parts[index].strip())
        except ValueError:
            return 0

    return _part(0), _part(1)


def calculate_duration_in_minutes(start_time: str, end_time: str) -> int:
    """근무 시간(분)을 계산합니다. 종료가 시작보다 이르면 자정을 넘긴 것으로 봅니다.

    Compute the duration between two "HH:MM" strings in minutes.
    When end < start the shift is assumed to cross midnight (+1440 minutes).
    Multi-day shifts are not supported.

    Example:
        calculate_duration_in_minutes("22:00", "01:00")  # 180
        calculate_duration_in_minutes("09:00", "17:30")  # 510
    """
    start_hours, start_minutes = parse_time_string(start_time)
    end_hours, end_minutes = parse_time_string(end_time)

    start_total: int = start_hours * 60 + start_minutes
    end_total: int = end_hours * 60 + end_minutes

    if end_total < start_total:
        return end_total + MINUTES_PER_DAY - start_total
    return end_total - start_total


def round_half_up(value: float, digits: int = 2) -> float:
    """소수점 반올림 — 0.5는 항상 양의 방향으로 올립니다.

    Round like round(x * 10^digits) / 10^digits with .5 always rounded toward +inf.
    Python's round() uses banker's rounding, which this must not.
    """
    factor: int = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def day_category(day: date, holidays: Iterable[date] = ()) -> str:
    """날짜의 요일 구분 — "weekday" | "saturday" | "sunday" | "holiday".

    Bucket a calendar date into the store staffing day-category.
    Holidays take priority over the weekday.
    """
    if day in set(holidays):
        return "holiday"
    weekday: int = day.weekday()
    if weekday == 5:
        return "saturday"
    if weekday == 6:
        return "sunday"
    return "weekday"


def format_date(day: date | datetime) -> str:
    """YYYY-MM-DD 형식 문자열 (ISO calendar date string)."""
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def parse_date(value: str | date | datetime) -> date:
    """YYYY-MM-DD 문자열 또는 날짜/시각을 달력 날짜로 변환합니다.

    Raises:
        ValueError: 형식이 잘못된 경우 (When the string is not an ISO date)
    """
    if isinstance(value, datetime):
        return local_date(value)
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])
