"""
finboard - Personal Finance Dashboard Engine

Tracks transactions, accounts, cards and savings goals, and turns them into
monthly summaries, insights, dashboard charts and PDF reports.

Domain Packages:
- core: Currency handling, dates, data models, configuration, storage
- analysis: Aggregation engine, insights, charts and reports
- goals: Savings goal tracking and persistence
- cli: Command-line interface

Example Usage:
    from finboard.analysis.aggregation import monthly_summary
    from finboard.goals import GoalTracker
    from finboard.core.money import Money
"""

__version__ = "0.1.0"
__author__ = "finboard contributors"

from .core.config import Environment, get_config
from .core.currency import cents_to_dollars_str, format_cents, safe_currency_to_cents
from .core.models import Goal, Transaction
from .core.money import Money

__all__ = [
    # Core currency functions
    "cents_to_dollars_str",
    "format_cents",
    "safe_currency_to_cents",
    # Core models
    "Goal",
    "Money",
    "Transaction",
    # Configuration
    "get_config",
    "Environment",
]
