#!/usr/bin/env python3
"""
Monthly Report

Two halves:
- MonthlyReportBuilder assembles a MonthlyReport from transactions and goals
  (pure data, easy to test)
- PdfReportRenderer lays a MonthlyReport out as a multi-page PDF with
  matplotlib

Report sections: executive summary, income details, expense details,
category analysis, active goals, insights.
"""

import logging

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Use non-interactive backend
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from ..core.config import AnalysisConfig
from ..core.dates import Period, month_diff
from ..core.models import Advisory, CategoryLookup, Goal, PeriodSummary, Transaction, TransactionType, category_label
from ..core.money import Money
from ..goals.pacing import active_goals, progress
from .aggregation import category_breakdown, category_shares, monthly_summary, monthly_transactions
from .insights import InsightGenerator

logger = logging.getLogger(__name__)

ROWS_PER_PAGE = 25
PAGE_SIZE = (8.27, 11.69)  # A4 portrait, inches

INCOME_COLOR = "#4CAF50"
EXPENSE_COLOR = "#F44336"
CATEGORY_COLOR = "#3B82F6"
GOAL_COLOR = "#FFC107"
ACCENT_COLOR = "#49AC2A"


@dataclass(frozen=True)
class ReportLine:
    """One transaction row in the income or expense tables."""

    date: date
    description: str
    category: str
    amount: Money


@dataclass(frozen=True)
class CategoryRow:
    name: str
    total: Money
    percentage: float


@dataclass(frozen=True)
class GoalRow:
    name: str
    target: Money
    current: Money
    progress: float
    estimate: str


@dataclass
class MonthlyReport:
    """Everything printed in a monthly report, already computed."""

    month: int
    year: int
    generated_at: datetime
    summary: PeriodSummary
    income: list[ReportLine] = field(default_factory=list)
    expenses: list[ReportLine] = field(default_factory=list)
    categories: list[CategoryRow] = field(default_factory=list)
    goals: list[GoalRow] = field(default_factory=list)
    insights: list[Advisory] = field(default_factory=list)

    @property
    def title(self) -> str:
        return date(self.year, self.month, 1).strftime("%B %Y")


def goal_estimate(goal: Goal, now: datetime | None = None) -> str:
    """
    Monthly amount needed by whole calendar months left.

    Coarser than pacing.monthly_needed: a deadline later in the current
    month counts as overdue.
    """
    if goal.deadline is None:
        return "No deadline"

    if now is None:
        now = datetime.now()
    months_left = month_diff(now.date(), goal.deadline)
    if months_left <= 0:
        return "Overdue"

    per_month = Money.from_decimal(goal.remaining.to_decimal() / Decimal(months_left))
    return f"{per_month}/month"


class MonthlyReportBuilder:
    """Builds MonthlyReport data for a calendar month."""

    def __init__(
        self,
        category_lookup: CategoryLookup | None = None,
        insight_generator: InsightGenerator | None = None,
    ):
        self.category_lookup = category_lookup
        self.insight_generator = insight_generator or InsightGenerator(category_lookup=category_lookup)

    def build(
        self,
        transactions: Sequence[Transaction],
        goals: Iterable[Goal],
        month: int,
        year: int,
        now: datetime | None = None,
    ) -> MonthlyReport:
        if now is None:
            now = datetime.now()
        goals = list(goals)

        summary = monthly_summary(transactions, month, year)
        expenses = monthly_transactions(transactions, month, year, TransactionType.EXPENSE)
        breakdown = category_breakdown(expenses, Period.ALL, top_n=None)

        report = MonthlyReport(
            month=month,
            year=year,
            generated_at=now,
            summary=summary,
            income=self._lines(monthly_transactions(transactions, month, year, TransactionType.INCOME)),
            expenses=self._lines(expenses),
            categories=[
                CategoryRow(
                    name=category_label(self.category_lookup, share.category_id),
                    total=share.total,
                    percentage=share.percentage,
                )
                for share in category_shares(breakdown, summary.total_expense)
            ],
            goals=[
                GoalRow(
                    name=goal.name,
                    target=goal.target,
                    current=goal.current,
                    progress=round(progress(goal), 1),
                    estimate=goal_estimate(goal, now),
                )
                for goal in active_goals(goals)
            ],
            insights=self.insight_generator.insights_for_month(transactions, goals, month, year, now),
        )

        logger.debug(
            f"Built report for {report.title}: {len(report.income)} income, "
            f"{len(report.expenses)} expense lines, {len(report.insights)} insights"
        )
        return report

    def _lines(self, transactions: Iterable[Transaction]) -> list[ReportLine]:
        return [
            ReportLine(
                date=t.date.date,
                description=t.description,
                category=category_label(self.category_lookup, t.category),
                amount=t.amount,
            )
            for t in transactions
        ]


class PdfReportRenderer:
    """
    Writes a MonthlyReport to PDF.

    Each section is drawn on its own matplotlib figure; long tables spill
    onto extra pages. Page numbers are stamped once the page count is known.
    """

    def __init__(self, config: AnalysisConfig):
        self.config = config

    def render(self, report: MonthlyReport, output_dir: Path | None = None) -> Path:
        """
        Render the report.

        Returns:
            Path to the generated PDF.
        """
        output_dir = output_dir or self.config.output_dir / "reports"
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = report.generated_at.strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_dir / f"{timestamp}_report_{report.year}-{report.month:02d}.pdf"

        pages = [self._summary_page(report)]
        pages.extend(self._transaction_pages("Income Details", report.income, INCOME_COLOR, "No income recorded this month."))
        pages.extend(
            self._transaction_pages("Expense Details", report.expenses, EXPENSE_COLOR, "No expenses recorded this month.")
        )
        pages.append(self._category_page(report))
        if report.goals:
            pages.append(self._goals_page(report))
        pages.append(self._insights_page(report))

        with PdfPages(output_file) as pdf:
            for number, fig in enumerate(pages, start=1):
                self._add_footer(fig, number, len(pages))
                pdf.savefig(fig)
                plt.close(fig)

            info = pdf.infodict()
            info["Title"] = f"Monthly Financial Report - {report.title}"
            info["CreationDate"] = report.generated_at

        logger.info(f"Report for {report.title} written to {output_file} ({len(pages)} pages)")
        return output_file

    # Pages

    def _new_page(self, title: str):
        fig = plt.figure(figsize=PAGE_SIZE)
        fig.text(0.08, 0.95, title, fontsize=14, fontweight="bold")
        return fig

    def _summary_page(self, report: MonthlyReport):
        fig = plt.figure(figsize=PAGE_SIZE)
        fig.text(0.5, 0.95, "Monthly Financial Report", ha="center", fontsize=20, fontweight="bold", color=ACCENT_COLOR)
        fig.text(0.5, 0.92, report.title, ha="center", fontsize=14, color="#646464")
        fig.text(0.92, 0.89, f"Generated: {report.generated_at:%Y-%m-%d}", ha="right", fontsize=9)
        fig.add_artist(plt.Line2D([0.08, 0.92], [0.88, 0.88], color=ACCENT_COLOR, linewidth=1))

        summary = report.summary
        fig.text(0.08, 0.83, "Executive Summary", fontsize=12, fontweight="bold")
        rows = [
            ("Total income:", str(summary.total_income)),
            ("Total expenses:", str(summary.total_expense)),
            ("Balance:", str(summary.balance)),
            ("Savings rate:", f"{summary.savings_rate:.1f}% of income"),
        ]
        for index, (label, value) in enumerate(rows):
            y = 0.79 - index * 0.03
            fig.text(0.1, y, label, fontsize=10)
            fig.text(0.35, y, value, fontsize=10)

        ax = fig.add_axes([0.55, 0.62, 0.35, 0.25])
        values = [float(summary.total_income.to_decimal()), float(summary.total_expense.to_decimal())]
        if sum(values) > 0:
            ax.pie(values, labels=["Income", "Expense"], colors=[INCOME_COLOR, EXPENSE_COLOR], startangle=90)
            ax.axis("equal")
        else:
            ax.axis("off")
        return fig

    def _transaction_pages(self, title: str, lines: Sequence[ReportLine], color: str, empty_text: str) -> list:
        if not lines:
            fig = self._new_page(title)
            fig.text(0.08, 0.9, empty_text, fontsize=10)
            return [fig]

        frame = pd.DataFrame(
            {
                "Date": [line.date.isoformat() for line in lines],
                "Description": [line.description for line in lines],
                "Category": [line.category for line in lines],
                "Amount": [str(line.amount) for line in lines],
            }
        )

        pages = []
        for start in range(0, len(frame), ROWS_PER_PAGE):
            chunk = frame.iloc[start : start + ROWS_PER_PAGE]
            suffix = "" if start == 0 else " (continued)"
            fig = self._new_page(f"{title}{suffix}")
            self._draw_table(fig, chunk, color, right_align=["Amount"])
            pages.append(fig)
        return pages

    def _category_page(self, report: MonthlyReport):
        fig = self._new_page("Category Analysis")

        if not report.categories:
            fig.text(0.08, 0.9, "No expenses recorded this month.", fontsize=10)
            return fig

        top = report.categories[:5]
        ax = fig.add_axes([0.25, 0.62, 0.6, 0.28])
        names = [row.name for row in reversed(top)]
        values = [float(row.total.to_decimal()) for row in reversed(top)]
        ax.barh(names, values, color=ACCENT_COLOR)
        for position, value in enumerate(values):
            ax.text(value, position, f" ${value:,.2f}", va="center", fontsize=8)
        ax.grid(True, alpha=0.3, axis="x")
        ax.xaxis.set_major_formatter(plt.FuncFormatter(lambda x, p: f"${x:,.0f}"))

        frame = pd.DataFrame(
            {
                "Category": [row.name for row in report.categories],
                "Amount": [str(row.total) for row in report.categories],
                "% of Total": [f"{row.percentage:.1f}%" for row in report.categories],
            }
        )
        self._draw_table(fig, frame, CATEGORY_COLOR, top=0.55, right_align=["Amount", "% of Total"])
        return fig

    def _goals_page(self, report: MonthlyReport):
        fig = self._new_page("Goal Tracking")
        frame = pd.DataFrame(
            {
                "Goal": [row.name for row in report.goals],
                "Target": [str(row.target) for row in report.goals],
                "Current": [str(row.current) for row in report.goals],
                "Progress": [f"{row.progress:.1f}%" for row in report.goals],
                "Estimate": [row.estimate for row in report.goals],
            }
        )
        self._draw_table(fig, frame, GOAL_COLOR)
        return fig

    def _insights_page(self, report: MonthlyReport):
        fig = self._new_page("Insights and Recommendations")

        if not report.insights:
            fig.text(0.08, 0.9, "Nothing stands out this month.", fontsize=10)
            return fig

        y = 0.9
        for index, insight in enumerate(report.insights, start=1):
            fig.text(0.08, y, f"{index}. {insight.title}", fontsize=10, color="#323232", fontweight="bold")
            fig.text(0.1, y - 0.025, insight.message, fontsize=9, color="#646464", wrap=True)
            y -= 0.07
        return fig

    # Helpers

    def _draw_table(self, fig, frame: pd.DataFrame, header_color: str, top: float = 0.92, right_align=()):
        height = min(top - 0.08, 0.03 * (len(frame) + 1))
        ax = fig.add_axes([0.08, top - height, 0.84, height])
        ax.axis("off")

        table = ax.table(cellText=frame.values.tolist(), colLabels=list(frame.columns), loc="upper center", cellLoc="left")
        table.auto_set_font_size(False)
        table.set_fontsize(8)

        aligned = {list(frame.columns).index(name) for name in right_align}
        for (row, col), cell in table.get_celld().items():
            if row == 0:
                cell.set_facecolor(header_color)
                cell.set_text_props(color="white", fontweight="bold")
            elif row % 2 == 0:
                cell.set_facecolor("#F2F2F2")
            if col in aligned and row > 0:
                cell.get_text().set_horizontalalignment("right")
        return table

    def _add_footer(self, fig, number: int, total: int) -> None:
        fig.text(0.5, 0.02, f"Page {number} of {total}", ha="center", fontsize=8, color="#969696")
        fig.text(0.08, 0.02, "Confidential", fontsize=8, color="#969696")
