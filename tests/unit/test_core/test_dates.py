#!/usr/bin/env python3
"""Tests for FinancialDate and the calendar helpers."""

from datetime import date, datetime

import pytest

from finboard.core.dates import (
    FinancialDate,
    Period,
    days_remaining,
    is_past,
    is_within,
    month_diff,
    month_end,
    period_start,
    previous_month,
    shift_month,
)
from finboard.core.exceptions import InvalidInputError


class TestFinancialDateConstruction:
    """Test FinancialDate construction."""

    @pytest.mark.parametrize(
        "constructor,expected_date",
        [
            (lambda: FinancialDate(date=date(2024, 1, 15)), date(2024, 1, 15)),
            (lambda: FinancialDate.from_string("2024-01-15"), date(2024, 1, 15)),
            (lambda: FinancialDate.from_string("01/15/2024", date_format="%m/%d/%Y"), date(2024, 1, 15)),
            (lambda: FinancialDate.parse("2024-01-15T18:30:00"), date(2024, 1, 15)),
            (lambda: FinancialDate.parse(datetime(2024, 1, 15, 23, 59)), date(2024, 1, 15)),
        ],
        ids=["from_date", "from_string", "from_string_custom_format", "parse_timestamp", "parse_datetime"],
    )
    def test_financial_date_construction(self, constructor, expected_date):
        assert constructor().date == expected_date

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            FinancialDate.parse("not a date")
        with pytest.raises(ValueError):
            FinancialDate.parse(20240115)  # type: ignore[arg-type]

    def test_formatting_and_parts(self):
        fd = FinancialDate(date=date(2024, 1, 15))
        assert fd.to_iso_string() == "2024-01-15"
        assert str(fd) == "2024-01-15"
        assert (fd.year, fd.month) == (2024, 1)
        assert fd.at_midnight() == datetime(2024, 1, 15, 0, 0)

    def test_ordering_and_age(self):
        early = FinancialDate(date=date(2024, 1, 1))
        late = FinancialDate(date=date(2024, 1, 11))
        assert early < late
        assert early.age_days(late) == 10

    def test_frozen_dataclass(self):
        fd = FinancialDate(date=date(2024, 1, 15))
        with pytest.raises(AttributeError):
            fd.date = date(2024, 1, 16)  # type: ignore


class TestMonthArithmetic:
    """Test month difference and shifting."""

    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (date(2024, 1, 31), date(2024, 2, 1), 1),
            (date(2024, 3, 1), date(2024, 3, 31), 0),
            (date(2023, 11, 15), date(2024, 2, 1), 3),
            (date(2024, 5, 1), date(2024, 2, 28), -3),
        ],
        ids=["next_month", "same_month", "across_year", "negative"],
    )
    def test_month_diff_ignores_day(self, start, end, expected):
        assert month_diff(start, end) == expected

    def test_month_diff_accepts_financial_date(self):
        assert month_diff(FinancialDate.parse("2024-01-10"), date(2024, 4, 1)) == 3

    def test_shift_month_wraps_years(self):
        assert shift_month(2024, 1, -1) == (2023, 12)
        assert shift_month(2024, 12, 1) == (2025, 1)
        assert shift_month(2024, 3, -14) == (2023, 1)
        assert previous_month(2024, 1) == (2023, 12)

    def test_month_end(self):
        assert month_end(2024, 2) == date(2024, 2, 29)
        assert month_end(2023, 2) == date(2023, 2, 28)
        assert month_end(2024, 12) == date(2024, 12, 31)


class TestDeadlines:
    """Test days_remaining, is_past and is_within."""

    def test_days_remaining_rounds_up(self):
        now = datetime(2024, 3, 15, 12, 0)
        assert days_remaining(date(2024, 3, 25), now) == 10  # 9.5 days
        assert days_remaining(date(2024, 3, 16), now) == 1

    def test_days_remaining_signed(self):
        now = datetime(2024, 3, 15, 12, 0)
        assert days_remaining(date(2024, 3, 15), now) == 0  # midnight already passed
        assert days_remaining(date(2024, 3, 10), now) == -5

    def test_days_remaining_without_deadline(self):
        assert days_remaining(None) is None

    def test_is_past(self):
        now = datetime(2024, 3, 15, 12, 0)
        assert is_past(date(2024, 3, 15), now)
        assert not is_past(date(2024, 3, 16), now)
        assert not is_past(None, now)

    def test_is_within(self):
        now = datetime(2024, 3, 15, 12, 0)
        assert is_within(date(2024, 3, 20), 30, now)
        assert is_within(date(2024, 4, 14), 30, now)
        assert not is_within(date(2024, 4, 15), 30, now)
        assert not is_within(date(2024, 3, 15), 30, now)
        assert not is_within(None, 30, now)


class TestPeriodStart:
    """Test period tag to start-instant mapping."""

    @pytest.mark.parametrize(
        "period,expected",
        [
            ("today", datetime(2024, 3, 15, 0, 0)),
            ("week", datetime(2024, 3, 8, 12, 0)),
            ("month", datetime(2024, 3, 1)),
            ("year", datetime(2024, 1, 1)),
            ("all", datetime.min),
        ],
    )
    def test_period_start(self, period, expected):
        assert period_start(period, datetime(2024, 3, 15, 12, 0)) == expected

    def test_accepts_enum(self):
        assert period_start(Period.MONTH, datetime(2024, 3, 15)) == datetime(2024, 3, 1)

    def test_unknown_period_raises(self):
        with pytest.raises(InvalidInputError, match="Unknown period"):
            period_start("fortnight", datetime(2024, 3, 15))
