#!/usr/bin/env python3
"""
Dashboard Charts

Renders the dashboard's charts to a single PNG: expense categories, monthly
income vs expense, wealth over time with its trend, and a text summary.
All numbers come from the aggregation engine; this module only draws.
"""

import logging

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Use non-interactive backend
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import matplotlib.pyplot as plt

from ..core.config import AnalysisConfig
from ..core.dates import Period
from ..core.models import CategoryLookup, PeriodSummary, Transaction, category_color, category_label
from .aggregation import (
    CategoryTotal,
    MonthBucket,
    WealthPoint,
    WealthTrend,
    category_breakdown,
    monthly_series,
    monthly_summary,
    wealth_series,
    wealth_trend,
)

logger = logging.getLogger(__name__)

INCOME_COLOR = "#4ECDC4"
EXPENSE_COLOR = "#FF6B6B"
WEALTH_COLOR = "#2E86AB"


@dataclass
class ChartData:
    """Everything the dashboard charts draw, computed up front."""

    breakdown: list[CategoryTotal]
    months: list[MonthBucket]
    wealth: list[WealthPoint]
    trend: WealthTrend
    generated_at: datetime

    def monthly_frame(self) -> pd.DataFrame:
        """Monthly buckets as a DataFrame indexed by month label (dollars)."""
        return pd.DataFrame(
            {
                "Income": [float(b.income.to_decimal()) for b in self.months],
                "Expense": [float(b.expense.to_decimal()) for b in self.months],
            },
            index=[b.label for b in self.months],
        )

    def wealth_frame(self) -> pd.DataFrame:
        """Wealth points with the fitted trend line (dollars)."""
        return pd.DataFrame(
            {
                "Balance": [float(p.balance.to_decimal()) for p in self.wealth],
                "Trend": list(self.trend.fitted),
            },
            index=[p.label for p in self.wealth],
        )


class ChartRenderer:
    """
    Matplotlib renderer for the dashboard charts.

    Category names and colours come from the injected lookup, so the
    renderer never needs the full category list.
    """

    def __init__(self, config: AnalysisConfig, category_lookup: CategoryLookup | None = None):
        self.config = config
        self.category_lookup = category_lookup

    def prepare(
        self,
        transactions: Sequence[Transaction],
        now: datetime | None = None,
        months: int | None = None,
    ) -> ChartData:
        """
        Aggregate transactions for the charts.

        Args:
            transactions: All transactions
            now: Reference time (default: now)
            months: Override for the income/expense window
        """
        if now is None:
            now = datetime.now()

        wealth = wealth_series(transactions, self.config.wealth_months, now)
        return ChartData(
            breakdown=category_breakdown(transactions, Period.MONTH, self.config.top_categories, now),
            months=monthly_series(transactions, months or self.config.income_expense_months, now),
            wealth=wealth,
            trend=wealth_trend(wealth),
            generated_at=now,
        )

    def render_dashboard(
        self,
        transactions: Sequence[Transaction],
        output_dir: Path | None = None,
        now: datetime | None = None,
        months: int | None = None,
    ) -> Path:
        """
        Generate the 4-panel dashboard chart.

        Returns:
            Path to generated dashboard image.
        """
        data = self.prepare(transactions, now, months)
        month = monthly_summary(transactions, data.generated_at.month, data.generated_at.year)

        output_dir = output_dir or self.config.output_dir / "charts"
        output_dir.mkdir(parents=True, exist_ok=True)

        fig = plt.figure(figsize=(self.config.chart_width, self.config.chart_height))

        self._create_category_panel(plt.subplot(2, 2, 1), data)
        self._create_income_expense_panel(plt.subplot(2, 2, 2), data)
        self._create_wealth_panel(plt.subplot(2, 2, 3), data)
        self._create_summary_panel(plt.subplot(2, 2, 4), data, month)

        plt.suptitle("Financial Dashboard", fontsize=14, fontweight="bold", y=0.98)
        plt.tight_layout()

        timestamp = data.generated_at.strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_dir / f"{timestamp}_dashboard.png"

        plt.savefig(output_file, dpi=self.config.dpi, bbox_inches="tight")
        plt.close(fig)

        logger.info(f"Dashboard chart written to {output_file}")
        return output_file

    def _create_category_panel(self, ax, data: ChartData) -> None:
        """Doughnut of this month's expenses by category."""
        ax.set_title("Expenses by Category", fontsize=12, fontweight="bold")

        if not data.breakdown:
            ax.axis("off")
            ax.text(0.5, 0.5, "No expenses this month", ha="center", va="center", transform=ax.transAxes)
            return

        values = [float(item.total.to_decimal()) for item in data.breakdown]
        labels = [category_label(self.category_lookup, item.category_id) for item in data.breakdown]
        colors = [category_color(self.category_lookup, item.category_id) for item in data.breakdown]

        ax.pie(
            values,
            labels=labels,
            colors=colors,
            autopct="%1.1f%%",
            startangle=90,
            wedgeprops={"width": 0.4, "edgecolor": "white"},
            textprops={"fontsize": 8},
        )
        ax.axis("equal")

    def _create_income_expense_panel(self, ax, data: ChartData) -> None:
        """Side-by-side monthly income and expense bars."""
        frame = data.monthly_frame()
        positions = range(len(frame))
        width = 0.4

        ax.bar([p - width / 2 for p in positions], frame["Income"], width, color=INCOME_COLOR, label="Income")
        ax.bar([p + width / 2 for p in positions], frame["Expense"], width, color=EXPENSE_COLOR, label="Expense")

        ax.set_xticks(list(positions))
        ax.set_xticklabels(frame.index, fontsize=8)
        ax.set_title("Income vs Expense", fontsize=12, fontweight="bold")
        ax.set_ylabel("Amount ($)", fontsize=10)
        ax.legend(loc="best", fontsize=8)
        ax.grid(True, alpha=0.3, axis="y")
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f"${x:,.0f}"))

    def _create_wealth_panel(self, ax, data: ChartData) -> None:
        """Cumulative balance at each month end, with the fitted trend."""
        frame = data.wealth_frame()
        positions = list(range(len(frame)))

        ax.plot(positions, frame["Balance"], color=WEALTH_COLOR, linewidth=2, marker="o", label="Balance")
        ax.fill_between(positions, frame["Balance"], alpha=0.15, color=WEALTH_COLOR)
        ax.plot(positions, frame["Trend"], "r--", alpha=0.7, linewidth=1, label="Trend Line")

        ax.set_xticks(positions)
        ax.set_xticklabels(frame.index, fontsize=8, rotation=45)
        ax.set_title("Wealth Over Time", fontsize=12, fontweight="bold")
        ax.set_ylabel("Balance ($)", fontsize=10)
        ax.legend(loc="best", fontsize=8)
        ax.grid(True, alpha=0.3)
        ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f"${x:,.0f}"))

    def _create_summary_panel(self, ax, data: ChartData, month: PeriodSummary) -> None:
        """Text panel with the month's totals and the wealth trend."""
        ax.axis("off")

        trend = data.trend
        arrow = "↗" if trend.slope_per_month > 0 else "↘"
        latest = data.wealth[-1].balance if data.wealth else None

        stats_text = f"""
{month.label.upper()}
{'='*32}

• Income:        {month.total_income}
• Expense:       {month.total_expense}
• Balance:       {month.balance}
• Savings Rate:  {month.savings_rate:.1f}%

WEALTH TREND:
• Current:       {latest if latest is not None else 'n/a'}
• Trend:         ${trend.slope_per_month:,.0f}/month
• Direction:     {arrow} {trend.direction.capitalize()}
• Confidence:    {abs(trend.r_value)*100:.1f}%
"""

        ax.text(
            0.05,
            0.95,
            stats_text,
            transform=ax.transAxes,
            fontsize=9,
            fontfamily="monospace",
            verticalalignment="top",
            bbox={"boxstyle": "round,pad=1", "facecolor": "lightgray", "alpha": 0.8},
        )
