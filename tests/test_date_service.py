from datetime import datetime, timezone

import pytest

from dishle.models.errors import MalformedDate
from dishle.services.date_service import (
    DateResolver, decrement_date, increment_date, is_valid_date, parse_date
)


@pytest.mark.parametrize("value", ["2024-02-29", "2000-01-01", "2100-12-31", "2026-10-18"])
def test_valid_dates(value):
    assert is_valid_date(value)


@pytest.mark.parametrize("value", [
    "2023-02-29",   # not a leap year
    "2024-04-31",
    "2024-13-01",
    "2024-00-10",
    "2024-01-00",
    "2024-01-32",
    "1999-12-31",
    "2101-01-01",
    "2024-2-01",
    "20240201",
    " 2024-02-01",
    "",
    None,
    20240201,
])
def test_invalid_dates(value):
    assert not is_valid_date(value)


@pytest.mark.parametrize("day, following", [
    ("2024-02-28", "2024-02-29"),
    ("2024-02-29", "2024-03-01"),
    ("2023-02-28", "2023-03-01"),
    ("2024-12-31", "2025-01-01"),
    ("2026-04-30", "2026-05-01"),
])
def test_increment_and_decrement(day, following):
    assert increment_date(day) == following
    assert decrement_date(following) == day


@pytest.mark.parametrize("day", ["2024-02-29", "2024-12-31", "2025-01-01", "2026-03-31"])
def test_decrement_undoes_increment(day):
    assert decrement_date(increment_date(day)) == day


@pytest.mark.parametrize("value", ["garbage", "2024-02-30", "2024/02/01", ""])
def test_arithmetic_on_malformed_input_returns_it_unchanged(value):
    assert increment_date(value) == value
    assert decrement_date(value) == value


def test_arithmetic_stays_inside_supported_years():
    assert increment_date("2100-12-31") == "2100-12-31"
    assert decrement_date("2000-01-01") == "2000-01-01"
    assert increment_date("2100-12-30") == "2100-12-31"


def test_parse_date_raises_malformed_date():
    with pytest.raises(MalformedDate):
        parse_date("2024-02-30")
    with pytest.raises(MalformedDate):
        parse_date("tomorrow")


def test_real_date_uses_helsinki_time():
    # 22:30 UTC on Oct 17 is already 01:30 on Oct 18 in Helsinki (UTC+3)
    resolver = DateResolver('Europe/Helsinki', lambda: datetime(2026, 10, 17, 22, 30, tzinfo=timezone.utc))
    assert resolver.current_real_date() == "2026-10-18"


def test_real_date_in_winter_time():
    # Helsinki is UTC+2 in winter
    before = DateResolver('Europe/Helsinki', lambda: datetime(2026, 12, 31, 21, 59, tzinfo=timezone.utc))
    after = DateResolver('Europe/Helsinki', lambda: datetime(2026, 12, 31, 22, 0, tzinfo=timezone.utc))

    assert before.current_real_date() == "2026-12-31"
    assert after.current_real_date() == "2027-01-01"


def test_naive_clock_is_treated_as_utc():
    resolver = DateResolver('Europe/Helsinki', lambda: datetime(2026, 10, 17, 22, 30))
    assert resolver.current_real_date() == "2026-10-18"


def test_current_date_prefers_valid_override(clock):
    resolver = DateResolver('Europe/Helsinki', clock)

    assert resolver.current_date() == "2026-10-18"
    assert resolver.current_date("2026-10-20") == "2026-10-20"


@pytest.mark.parametrize("override", ["2026-02-30", "not-a-date", ""])
def test_current_date_ignores_invalid_override(clock, override):
    resolver = DateResolver('Europe/Helsinki', clock)
    assert resolver.current_date(override) == "2026-10-18"
