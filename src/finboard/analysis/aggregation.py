#!/usr/bin/env python3
"""
Aggregation Engine

Period, category and month bucketing of transactions. Every function here is
a pure function of its inputs: the dashboard summary, the chart renderer and
the monthly report all recompute from the same transaction list.

Sums stay in integer cents; only ratios (savings rate, shares, trend) are
rounded.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime

import numpy as np
from scipy import stats

from ..core.currency import percentage
from ..core.dates import Period, month_diff, month_end, period_start, shift_month
from ..core.models import PeriodSummary, Transaction, TransactionType
from ..core.money import Money, sum_money


@dataclass(frozen=True)
class CategoryTotal:
    """Summed expense for one category."""

    category_id: str
    total: Money


@dataclass(frozen=True)
class CategoryShare:
    """A category total with its share of all expenses, in percent."""

    category_id: str
    total: Money
    percentage: float


@dataclass(frozen=True)
class MonthBucket:
    """Income and expense summed for one calendar month."""

    year: int
    month: int
    income: Money
    expense: Money

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%b %y")

    @property
    def net(self) -> Money:
        return self.income - self.expense


@dataclass(frozen=True)
class WealthPoint:
    """Cumulative balance of all transactions up to a month-end boundary."""

    boundary: date
    balance: Money

    @property
    def label(self) -> str:
        return self.boundary.strftime("%b %y")


@dataclass(frozen=True)
class WealthTrend:
    """Least-squares fit over a wealth series."""

    slope_per_month: float
    intercept: float
    r_value: float
    fitted: tuple[float, ...]

    @property
    def direction(self) -> str:
        return "growing" if self.slope_per_month > 0 else "declining"


def _coerce_type(tx_type: TransactionType | str) -> TransactionType:
    if isinstance(tx_type, TransactionType):
        return tx_type
    return TransactionType(tx_type)


def filter_by_period(
    transactions: Iterable[Transaction], period: Period | str, now: datetime | None = None
) -> list[Transaction]:
    """
    Transactions dated on or after the start of ``period``.

    Comparison is by calendar day, so a 'week' window includes the whole day
    seven days ago. Input order is preserved.
    """
    start = period_start(period, now)
    if start == datetime.min:
        return list(transactions)
    start_day = start.date()
    return [t for t in transactions if t.date.date >= start_day]


def sum_by_type(transactions: Iterable[Transaction], tx_type: TransactionType | str) -> Money:
    """Sum of amounts for transactions of one type. Empty input yields zero."""
    wanted = _coerce_type(tx_type)
    return sum_money(t.amount for t in transactions if t.type is wanted)


def category_breakdown(
    transactions: Iterable[Transaction],
    period: Period | str = Period.MONTH,
    top_n: int | None = 8,
    now: datetime | None = None,
) -> list[CategoryTotal]:
    """
    Expense totals per category for a period, largest first.

    Ties keep the order in which categories were first seen. ``top_n=None``
    returns every category.
    """
    totals: dict[str, int] = {}
    for t in filter_by_period(transactions, period, now):
        if t.type is not TransactionType.EXPENSE:
            continue
        totals[t.category] = totals.get(t.category, 0) + t.amount.cents

    # sorted() is stable, so equal totals stay in first-seen order
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    if top_n is not None:
        ranked = ranked[:top_n]

    return [CategoryTotal(category_id=category_id, total=Money(cents)) for category_id, cents in ranked]


def category_shares(breakdown: Sequence[CategoryTotal], total_expense: Money) -> list[CategoryShare]:
    """Attach each category's percentage of ``total_expense`` (1 decimal)."""
    return [
        CategoryShare(
            category_id=item.category_id,
            total=item.total,
            percentage=percentage(item.total.cents, total_expense.cents),
        )
        for item in breakdown
    ]


def monthly_series(
    transactions: Iterable[Transaction], month_count: int = 6, now: datetime | None = None
) -> list[MonthBucket]:
    """
    Income and expense per month for the last ``month_count`` months.

    Buckets run oldest first and end at the current month. Transactions
    outside the window are ignored.
    """
    if month_count <= 0:
        return []
    if now is None:
        now = datetime.now()

    income = [0] * month_count
    expense = [0] * month_count

    for t in transactions:
        diff = month_diff(t.date, now)
        if 0 <= diff < month_count:
            index = month_count - diff - 1
            if t.type is TransactionType.INCOME:
                income[index] += t.amount.cents
            else:
                expense[index] += t.amount.cents

    buckets = []
    for index in range(month_count):
        year, month = shift_month(now.year, now.month, index - (month_count - 1))
        buckets.append(MonthBucket(year=year, month=month, income=Money(income[index]), expense=Money(expense[index])))
    return buckets


def wealth_series(
    transactions: Iterable[Transaction], month_count: int = 12, now: datetime | None = None
) -> list[WealthPoint]:
    """
    Net worth-to-date at each of the last ``month_count`` month ends.

    Each point is the running total of income minus expense over every
    transaction dated on or before that month's last day, not the month's
    own flow.
    """
    if month_count <= 0:
        return []
    if now is None:
        now = datetime.now()

    ordered = sorted(transactions, key=lambda t: t.date.date)
    boundaries = [
        month_end(*shift_month(now.year, now.month, index - (month_count - 1))) for index in range(month_count)
    ]

    points = []
    running = 0
    position = 0
    for boundary in boundaries:
        while position < len(ordered) and ordered[position].date.date <= boundary:
            t = ordered[position]
            running += t.amount.cents if t.type is TransactionType.INCOME else -t.amount.cents
            position += 1
        points.append(WealthPoint(boundary=boundary, balance=Money(running)))
    return points


def wealth_trend(series: Sequence[WealthPoint]) -> WealthTrend:
    """Fit a straight line through a wealth series (dollars per month)."""
    x = np.arange(len(series))
    y = np.array([float(point.balance.to_decimal()) for point in series])

    if len(x) < 2:
        # Not enough points for a regression
        slope = intercept = r_value = 0.0
        if len(y):
            intercept = float(y[0])
    else:
        result = stats.linregress(x, y)
        slope, intercept = float(result.slope), float(result.intercept)
        r_value = 0.0 if np.isnan(result.rvalue) else float(result.rvalue)

    fitted = tuple(float(v) for v in slope * x + intercept)
    return WealthTrend(slope_per_month=slope, intercept=intercept, r_value=r_value, fitted=fitted)


def monthly_transactions(
    transactions: Iterable[Transaction],
    month: int,
    year: int,
    tx_type: TransactionType | str | None = None,
) -> list[Transaction]:
    """Transactions in a calendar month, optionally of a single type."""
    wanted = _coerce_type(tx_type) if tx_type is not None else None
    return [
        t
        for t in transactions
        if t.date.month == month and t.date.year == year and (wanted is None or t.type is wanted)
    ]


def summarize(transactions: Sequence[Transaction], label: str) -> PeriodSummary:
    """Totals, balance and savings rate for an already-filtered list."""
    total_income = sum_by_type(transactions, TransactionType.INCOME)
    total_expense = sum_by_type(transactions, TransactionType.EXPENSE)
    balance = total_income - total_expense
    savings_rate = percentage(balance.cents, total_income.cents) if total_income.cents > 0 else 0.0

    return PeriodSummary(
        label=label,
        total_income=total_income,
        total_expense=total_expense,
        balance=balance,
        savings_rate=savings_rate,
    )


def monthly_summary(transactions: Iterable[Transaction], month: int, year: int) -> PeriodSummary:
    """
    Income, expense, balance and savings rate for one calendar month.

    Savings rate is balance / income × 100 rounded to one decimal, or 0 when
    there was no income.
    """
    label = date(year, month, 1).strftime("%B %Y")
    return summarize(monthly_transactions(transactions, month, year), label)
