#!/usr/bin/env python3
"""
Dashboard Overview

The numbers on the dashboard's summary row: this month's flow, account and
card totals, goal progress and the latest transactions.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from ..core.models import Account, Card, Goal, PeriodSummary, Transaction
from ..core.money import Money, sum_money
from ..goals.pacing import active_goals, average_progress
from .aggregation import monthly_summary

RECENT_TRANSACTION_COUNT = 5


@dataclass(frozen=True)
class DashboardOverview:
    """Snapshot of the dashboard summary cards."""

    month: PeriodSummary
    account_count: int
    total_account_balance: Money
    card_count: int
    total_credit_limit: Money
    total_credit_used: Money
    goal_count: int
    active_goal_count: int
    average_goal_progress: float
    recent_transactions: list[Transaction] = field(default_factory=list)

    @property
    def available_credit(self) -> Money:
        return self.total_credit_limit - self.total_credit_used


def recent_transactions(transactions: Iterable[Transaction], count: int = RECENT_TRANSACTION_COUNT) -> list[Transaction]:
    """Newest transactions first; same-day entries keep their stored order."""
    return sorted(transactions, key=lambda t: t.date.date, reverse=True)[:count]


def build_overview(
    transactions: Sequence[Transaction],
    accounts: Sequence[Account],
    cards: Sequence[Card],
    goals: Sequence[Goal],
    now: datetime | None = None,
) -> DashboardOverview:
    """
    Compute the dashboard summary for the month containing ``now``.

    Average goal progress covers active goals only and is 0 when none are
    active.
    """
    if now is None:
        now = datetime.now()

    return DashboardOverview(
        month=monthly_summary(transactions, now.month, now.year),
        account_count=len(accounts),
        total_account_balance=sum_money(a.balance for a in accounts),
        card_count=len(cards),
        total_credit_limit=sum_money(c.limit for c in cards),
        total_credit_used=sum_money(c.used for c in cards),
        goal_count=len(goals),
        active_goal_count=len(active_goals(goals)),
        average_goal_progress=average_progress(goals),
        recent_transactions=recent_transactions(transactions),
    )
