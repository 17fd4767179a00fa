#!/usr/bin/env python3
"""
Insight Generator

Compares a month with the one before it and looks at goal deadlines to
produce short advisories for the dashboard and the monthly report. Purely
advisory: nothing here changes data.

Rules, evaluated in this order (each optional):
1. Expense spike - expenses grew past ``expense_spike_ratio`` x last month
2. Low savings rate - savings rate under ``low_savings_rate`` percent
3. Category concentration - top category above ``category_concentration`` percent of expenses
4. Upcoming goals - active goals due within ``upcoming_goal_days`` days
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..core.config import InsightConfig
from ..core.currency import percentage
from ..core.dates import Period, previous_month
from ..core.models import (
    Advisory,
    CategoryLookup,
    Goal,
    PeriodSummary,
    Severity,
    Transaction,
    TransactionType,
    category_label,
)
from ..goals.pacing import upcoming_goals
from .aggregation import CategoryTotal, category_breakdown, monthly_summary, monthly_transactions

logger = logging.getLogger(__name__)


class InsightGenerator:
    """
    Produces the ordered insight list for a month.

    Category names are resolved through the injected lookup; unknown ids
    show up as the default label.
    """

    def __init__(self, config: InsightConfig | None = None, category_lookup: CategoryLookup | None = None):
        self.config = config or InsightConfig()
        self.category_lookup = category_lookup

    def generate(
        self,
        current: PeriodSummary,
        prior: PeriodSummary,
        breakdown: Sequence[CategoryTotal],
        goals: Iterable[Goal],
        now: datetime | None = None,
    ) -> list[Advisory]:
        """
        Evaluate every rule against precomputed inputs.

        Args:
            current: Summary of the month being analyzed
            prior: Summary of the month before it
            breakdown: Expense totals per category for the current month, largest first
            goals: Goal collection (only active goals are considered)
            now: Reference time for goal deadlines

        Returns:
            Advisories in rule order
        """
        if now is None:
            now = datetime.now()

        insights = []

        spike = self._expense_spike(current, prior)
        if spike:
            insights.append(spike)

        if current.savings_rate < self.config.low_savings_rate:
            insights.append(
                Advisory(
                    severity=Severity.INFO,
                    title="Savings opportunity",
                    message=(
                        f"Your savings rate is {current.savings_rate:g}%. "
                        f"Aim for at least {self.config.recommended_savings_rate:g}% to build up a reserve."
                    ),
                )
            )

        concentration = self._category_concentration(current, breakdown)
        if concentration:
            insights.append(concentration)

        upcoming = upcoming_goals(goals, self.config.upcoming_goal_days, now)
        if upcoming:
            count = len(upcoming)
            insights.append(
                Advisory(
                    severity=Severity.INFO,
                    title="Goals nearing their deadline",
                    message=(
                        f"You have {count} goal(s) due in the next {self.config.upcoming_goal_days} days. "
                        "Check your progress."
                    ),
                    count=count,
                )
            )

        logger.debug(f"Generated {len(insights)} insights for {current.label}")
        return insights

    def insights_for_month(
        self,
        transactions: Sequence[Transaction],
        goals: Iterable[Goal],
        month: int,
        year: int,
        now: datetime | None = None,
    ) -> list[Advisory]:
        """Compute summaries and breakdown for a month and its predecessor, then generate."""
        current = monthly_summary(transactions, month, year)
        prior_year, prior_month = previous_month(year, month)
        prior = monthly_summary(transactions, prior_month, prior_year)

        expenses = monthly_transactions(transactions, month, year, TransactionType.EXPENSE)
        breakdown = category_breakdown(expenses, Period.ALL, top_n=None)

        return self.generate(current, prior, breakdown, goals, now)

    def _expense_spike(self, current: PeriodSummary, prior: PeriodSummary) -> Advisory | None:
        ratio = Decimal(str(self.config.expense_spike_ratio))
        if not current.total_expense.cents > prior.total_expense.cents * ratio:
            return None

        if prior.total_expense.cents == 0:
            message = (
                f"You spent {current.total_expense} this month after no expenses last month. "
                "Consider reviewing your spending."
            )
        else:
            increase = (
                Decimal(current.total_expense.cents) / Decimal(prior.total_expense.cents) - 1
            ) * 100
            increase = increase.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
            message = (
                f"Your expenses rose {increase}% compared with last month. "
                "Consider reviewing your spending."
            )

        return Advisory(severity=Severity.WARNING, title="Expenses on the rise", message=message)

    def _category_concentration(
        self, current: PeriodSummary, breakdown: Sequence[CategoryTotal]
    ) -> Advisory | None:
        if not breakdown or current.total_expense.cents <= 0:
            return None

        top = breakdown[0]
        share = percentage(top.total.cents, current.total_expense.cents)
        if share <= self.config.category_concentration:
            return None

        name = category_label(self.category_lookup, top.category_id)
        return Advisory(
            severity=Severity.INFO,
            title="Spending concentration",
            message=f"{name} accounts for {share:g}% of your spending. Look for ways to cut back there.",
        )
