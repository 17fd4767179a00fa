"""
Financial Analysis Package

Aggregation, insights and rendering for the dashboard and monthly report.

Key Components:
- aggregation: Period, category and month bucketing of transactions
- dashboard: Summary-card numbers for the dashboard
- insights: Month-over-month advisories
- charts: Matplotlib dashboard chart
- report: Monthly report builder and PDF renderer
"""

from .charts import ChartRenderer
from .dashboard import DashboardOverview, build_overview
from .insights import InsightGenerator
from .report import MonthlyReport, MonthlyReportBuilder, PdfReportRenderer

__all__ = [
    "ChartRenderer",
    "DashboardOverview",
    "InsightGenerator",
    "MonthlyReport",
    "MonthlyReportBuilder",
    "PdfReportRenderer",
    "build_overview",
]
