#!/usr/bin/env python3
"""Tests for the aggregation engine."""

from datetime import date

import pytest

from finboard.analysis.aggregation import (
    category_breakdown,
    category_shares,
    filter_by_period,
    monthly_series,
    monthly_summary,
    monthly_transactions,
    sum_by_type,
    wealth_series,
    wealth_trend,
)
from finboard.core.dates import Period
from finboard.core.exceptions import InvalidInputError
from finboard.core.models import TransactionType
from finboard.core.money import Money
from tests.fixtures.synthetic_data import make_transaction


@pytest.mark.analysis
class TestFilterByPeriod:
    """Test period filtering against a fixed clock."""

    def test_week_compares_by_day(self, fixed_now):
        inside = make_transaction(10, on="2024-03-08")
        outside = make_transaction(10, on="2024-03-07")
        assert filter_by_period([inside, outside], Period.WEEK, fixed_now) == [inside]

    def test_month_and_year(self, fixed_now):
        march = make_transaction(10, on="2024-03-01")
        february = make_transaction(10, on="2024-02-29")
        last_year = make_transaction(10, on="2023-12-31")
        txs = [march, february, last_year]

        assert filter_by_period(txs, "month", fixed_now) == [march]
        assert filter_by_period(txs, "year", fixed_now) == [march, february]
        assert filter_by_period(txs, "all", fixed_now) == txs

    def test_today(self, fixed_now):
        today = make_transaction(10, on="2024-03-15")
        yesterday = make_transaction(10, on="2024-03-14")
        assert filter_by_period([today, yesterday], "today", fixed_now) == [today]

    def test_unknown_period_rejected(self, fixed_now):
        with pytest.raises(InvalidInputError):
            filter_by_period([], "fortnight", fixed_now)


@pytest.mark.analysis
class TestSumsAndBreakdown:
    def test_sum_by_type(self):
        txs = [
            make_transaction("100.10", "income"),
            make_transaction("40.05", "expense"),
            make_transaction("0.20", "expense"),
        ]
        assert sum_by_type(txs, TransactionType.INCOME) == Money.from_cents(10010)
        assert sum_by_type(txs, "expense") == Money.from_cents(4025)
        assert sum_by_type([], "expense") == Money.zero()

    def test_many_small_amounts_stay_exact(self):
        txs = [make_transaction("0.10") for _ in range(10)]
        assert sum_by_type(txs, "expense") == Money.from_dollars(1)

    def test_breakdown_ranks_largest_first(self, fixed_now):
        txs = [
            make_transaction(20, category="food"),
            make_transaction(50, category="rent"),
            make_transaction(15, category="food"),
            make_transaction(500, "income", category="salary"),
        ]
        breakdown = category_breakdown(txs, Period.MONTH, 8, fixed_now)
        assert [(c.category_id, c.total) for c in breakdown] == [
            ("rent", Money.from_dollars(50)),
            ("food", Money.from_dollars(35)),
        ]

    def test_breakdown_ties_keep_first_seen_order(self, fixed_now):
        txs = [
            make_transaction(10, category="fun"),
            make_transaction(10, category="food"),
            make_transaction(10, category="rent"),
        ]
        breakdown = category_breakdown(txs, "month", 2, fixed_now)
        assert [c.category_id for c in breakdown] == ["fun", "food"]

    def test_breakdown_without_limit(self, fixed_now):
        txs = [make_transaction(i + 1, category=f"c{i}") for i in range(10)]
        assert len(category_breakdown(txs, "month", None, fixed_now)) == 10
        assert len(category_breakdown(txs, "month", 8, fixed_now)) == 8

    def test_breakdown_ignores_other_periods(self, fixed_now):
        txs = [make_transaction(10, on="2024-01-10")]
        assert category_breakdown(txs, "month", 8, fixed_now) == []

    def test_shares(self, fixed_now):
        txs = [make_transaction(30, category="food"), make_transaction(70, category="rent")]
        breakdown = category_breakdown(txs, "month", 8, fixed_now)
        shares = category_shares(breakdown, sum_by_type(txs, "expense"))
        assert [(s.category_id, s.percentage) for s in shares] == [("rent", 70.0), ("food", 30.0)]

    def test_shares_of_zero_total(self):
        assert category_shares([], Money.zero()) == []


@pytest.mark.analysis
class TestMonthlySeries:
    def test_buckets_oldest_first(self, fixed_now):
        txs = [
            make_transaction(100, "income", on="2024-01-05"),
            make_transaction(30, on="2024-01-20"),
            make_transaction(40, on="2024-03-02"),
            make_transaction(999, on="2023-12-31"),
            make_transaction(999, on="2024-04-01"),
        ]
        series = monthly_series(txs, 3, fixed_now)

        assert [(b.year, b.month) for b in series] == [(2024, 1), (2024, 2), (2024, 3)]
        assert series[0].income == Money.from_dollars(100)
        assert series[0].expense == Money.from_dollars(30)
        assert series[0].net == Money.from_dollars(70)
        assert series[1].income == Money.zero()
        assert series[2].expense == Money.from_dollars(40)
        assert series[0].label == "Jan 24"

    def test_series_crosses_year_boundary(self, fixed_now):
        series = monthly_series([], 6, fixed_now)
        assert [(b.year, b.month) for b in series][0] == (2023, 10)
        assert len(series) == 6

    def test_zero_months(self, fixed_now):
        assert monthly_series([], 0, fixed_now) == []


@pytest.mark.analysis
class TestWealth:
    def test_cumulative_at_month_ends(self, fixed_now):
        txs = [
            make_transaction(1000, "income", on="2023-11-15"),
            make_transaction(200, on="2024-01-31"),
            make_transaction(300, "income", on="2024-02-01"),
            make_transaction(50, on="2024-03-10"),
        ]
        series = wealth_series(txs, 3, fixed_now)

        assert [p.boundary for p in series] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
        assert [p.balance for p in series] == [
            Money.from_dollars(800),
            Money.from_dollars(1100),
            Money.from_dollars(1050),
        ]

    def test_balance_can_go_negative(self, fixed_now):
        series = wealth_series([make_transaction(75, on="2024-03-01")], 1, fixed_now)
        assert series[0].balance == Money.from_cents(-7500)

    def test_trend_of_straight_line(self, fixed_now):
        txs = [make_transaction(100, "income", on=f"2024-0{m}-10") for m in (1, 2, 3)]
        trend = wealth_trend(wealth_series(txs, 3, fixed_now))

        assert trend.slope_per_month == pytest.approx(100.0)
        assert trend.intercept == pytest.approx(100.0)
        assert trend.fitted == pytest.approx((100.0, 200.0, 300.0))
        assert trend.direction == "growing"

    def test_trend_of_flat_series(self, fixed_now):
        trend = wealth_trend(wealth_series([], 4, fixed_now))
        assert trend.slope_per_month == pytest.approx(0.0)
        assert trend.r_value == 0.0
        assert trend.direction == "declining"

    def test_trend_of_single_point(self, fixed_now):
        txs = [make_transaction(10, "income", on="2024-03-01")]
        trend = wealth_trend(wealth_series(txs, 1, fixed_now))
        assert trend.slope_per_month == 0.0
        assert trend.fitted == (10.0,)


@pytest.mark.analysis
class TestMonthlySummary:
    def test_savings_rate(self):
        txs = [make_transaction(100, "income"), make_transaction(40)]
        summary = monthly_summary(txs, 3, 2024)

        assert summary.label == "March 2024"
        assert summary.total_income == Money.from_dollars(100)
        assert summary.total_expense == Money.from_dollars(40)
        assert summary.balance == Money.from_dollars(60)
        assert summary.savings_rate == 60.0

    def test_no_income_means_zero_rate(self):
        summary = monthly_summary([make_transaction(40)], 3, 2024)
        assert summary.balance == Money.from_cents(-4000)
        assert summary.savings_rate == 0.0

    def test_overspending_gives_negative_rate(self):
        txs = [make_transaction(100, "income"), make_transaction(150)]
        assert monthly_summary(txs, 3, 2024).savings_rate == -50.0

    def test_monthly_transactions_by_type(self):
        txs = [
            make_transaction(100, "income", on="2024-03-01"),
            make_transaction(40, on="2024-03-02"),
            make_transaction(40, on="2023-03-02"),
        ]
        assert len(monthly_transactions(txs, 3, 2024)) == 2
        assert monthly_transactions(txs, 3, 2024, "income") == [txs[0]]
