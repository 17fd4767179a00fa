"""
Core Utilities Package

Shared primitives used by the analysis and goal packages.

This package provides:
- Currency handling with integer cents for precision
- Date helpers for periods, month arithmetic and deadlines
- Data models for transactions, categories, accounts, cards and goals
- Configuration management for environment-specific settings
- JSON persistence for finance records
"""

from .config import (
    Config,
    Environment,
    get_config,
    is_test,
    reload_config,
)
from .currency import (
    cents_to_dollars_str,
    format_cents,
    parse_dollars_to_cents,
    safe_currency_to_cents,
)
from .dates import FinancialDate, Period, days_remaining, month_diff, period_start
from .exceptions import FinanceError, InvalidAmountError, InvalidInputError, NotFoundError
from .models import (
    Account,
    Achievement,
    Advisory,
    Card,
    Category,
    Goal,
    GoalPriority,
    GoalStatus,
    PeriodSummary,
    Severity,
    Transaction,
    TransactionType,
)
from .money import Money

__all__ = [
    "Account",
    "Achievement",
    "Advisory",
    "Card",
    "Category",
    # Configuration
    "Config",
    "Environment",
    # Errors
    "FinanceError",
    "FinancialDate",
    "Goal",
    "GoalPriority",
    "GoalStatus",
    "InvalidAmountError",
    "InvalidInputError",
    "Money",
    "NotFoundError",
    "Period",
    "PeriodSummary",
    "Severity",
    # Data models
    "Transaction",
    "TransactionType",
    # Currency utilities
    "cents_to_dollars_str",
    "days_remaining",
    "format_cents",
    "get_config",
    "is_test",
    "month_diff",
    "parse_dollars_to_cents",
    "period_start",
    "reload_config",
    "safe_currency_to_cents",
]
