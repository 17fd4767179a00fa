#!/usr/bin/env python3
"""Tests for the monthly report builder and PDF renderer."""

from datetime import date

import pytest

from finboard.analysis.report import MonthlyReportBuilder, PdfReportRenderer, goal_estimate
from finboard.core.config import get_config
from finboard.core.models import GoalStatus
from finboard.core.money import Money
from tests.fixtures.synthetic_data import make_goal, make_transaction


@pytest.fixture
def transactions():
    return [
        make_transaction(3000, "income", on="2024-03-01", category="salary", description="Paycheck"),
        make_transaction(1200, on="2024-03-03", category="rent", description="Rent"),
        make_transaction(300, on="2024-03-08", category="food", description="Groceries"),
        make_transaction(500, on="2024-02-10", category="food", description="Groceries"),
    ]


@pytest.mark.goals
class TestGoalEstimate:
    def test_no_deadline(self, fixed_now):
        assert goal_estimate(make_goal(1000, 0), fixed_now) == "No deadline"

    def test_same_month_is_overdue(self, fixed_now):
        assert goal_estimate(make_goal(1000, 0, deadline="2024-03-31"), fixed_now) == "Overdue"

    def test_per_month(self, fixed_now):
        assert goal_estimate(make_goal(1000, 400, deadline="2024-06-01"), fixed_now) == "$200.00/month"


@pytest.mark.analysis
class TestMonthlyReportBuilder:
    """Test report assembly."""

    def test_build(self, transactions, category_lookup, fixed_now):
        goals = [
            make_goal(1000, 250, deadline="2024-05-15", name="Trip"),
            make_goal(500, 500, name="Done", status=GoalStatus.COMPLETED),
        ]
        report = MonthlyReportBuilder(category_lookup).build(transactions, goals, 3, 2024, fixed_now)

        assert report.title == "March 2024"
        assert report.summary.total_income == Money.from_dollars(3000)
        assert report.summary.total_expense == Money.from_dollars(1500)
        assert report.summary.savings_rate == 50.0

        assert [line.description for line in report.income] == ["Paycheck"]
        assert [line.description for line in report.expenses] == ["Rent", "Groceries"]
        assert report.expenses[0].category == "Housing"
        assert report.expenses[0].date == date(2024, 3, 3)

        assert [(row.name, row.percentage) for row in report.categories] == [("Housing", 80.0), ("Food", 20.0)]

        assert len(report.goals) == 1
        assert report.goals[0].name == "Trip"
        assert report.goals[0].progress == 25.0
        assert report.goals[0].estimate == "$375.00/month"

        assert [i.title for i in report.insights] == ["Expenses on the rise", "Spending concentration"]

    def test_empty_month(self, category_lookup, fixed_now):
        report = MonthlyReportBuilder(category_lookup).build([], [], 1, 2024, fixed_now)
        assert report.income == []
        assert report.expenses == []
        assert report.categories == []
        assert report.summary.savings_rate == 0.0


@pytest.mark.analysis
@pytest.mark.slow
class TestPdfReportRenderer:
    def test_writes_pdf(self, transactions, category_lookup, temp_dir, fixed_now):
        goals = [make_goal(1000, 250, deadline="2024-05-15", name="Trip")]
        report = MonthlyReportBuilder(category_lookup).build(transactions, goals, 3, 2024, fixed_now)

        output = PdfReportRenderer(get_config().analysis).render(report, temp_dir)

        assert output.name == "2024-03-15_12-00-00_report_2024-03.pdf"
        assert output.read_bytes().startswith(b"%PDF")

    def test_long_tables_and_empty_sections(self, category_lookup, fixed_now):
        txs = [make_transaction(i + 1, on="2024-03-05", description=f"Item {i}") for i in range(60)]
        report = MonthlyReportBuilder(category_lookup).build(txs, [], 3, 2024, fixed_now)

        output = PdfReportRenderer(get_config().analysis).render(report)
        assert output.parent == get_config().output_dir / "reports"
        assert output.stat().st_size > 0
