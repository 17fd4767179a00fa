#!/usr/bin/env python3
"""
Demo Data Generator

Builds a plausible household data set (categories, accounts, cards, six
months of transactions and a couple of goals) for first runs and demos.
Uses a seeded random generator so the same seed gives the same data.

Note: Uses standard random module for demo data (not cryptographic use).
"""

import random
from datetime import date, timedelta
from typing import Any

from .currency import cents_to_dollars_str
from .dates import shift_month

DEFAULT_CATEGORIES: list[dict[str, Any]] = [
    {"id": "1", "name": "Food", "color": "#FF6B6B", "icon": "utensils", "type": "expense"},
    {"id": "2", "name": "Transportation", "color": "#4ECDC4", "icon": "car", "type": "expense"},
    {"id": "3", "name": "Housing", "color": "#45B7D1", "icon": "home", "type": "expense"},
    {"id": "4", "name": "Education", "color": "#96CEB4", "icon": "graduation-cap", "type": "expense"},
    {"id": "5", "name": "Leisure", "color": "#FFEAA7", "icon": "gamepad", "type": "expense"},
    {"id": "6", "name": "Salary", "color": "#98D8C8", "icon": "money-bill-wave", "type": "income"},
    {"id": "7", "name": "Freelance", "color": "#F7DC6F", "icon": "laptop-code", "type": "income"},
]

INCOME_DESCRIPTIONS = ["Salary", "Freelance", "Dividends", "Interest"]
EXPENSE_DESCRIPTIONS = ["Supermarket", "Fuel", "Rent", "Internet", "Cinema"]


def generate_sample_data(
    seed: int | None = None,
    num_transactions: int = 50,
    months: int = 6,
    today: date | None = None,
) -> dict[str, Any]:
    """
    Generate a demo finance data set in the stored (dict) format.

    Args:
        seed: Random seed for reproducible output
        num_transactions: Number of transactions to generate
        months: How many months back (including the current one) to spread them over
        today: Reference date (default: today)

    Returns:
        Dictionary with 'categories', 'accounts', 'cards' and 'transactions',
        transactions sorted newest first
    """
    rng = random.Random(seed)
    if today is None:
        today = date.today()

    income_categories = [c for c in DEFAULT_CATEGORIES if c["type"] == "income"]
    expense_categories = [c for c in DEFAULT_CATEGORIES if c["type"] == "expense"]

    transactions = []
    for i in range(num_transactions):
        year, month = shift_month(today.year, today.month, -rng.randrange(months))
        transaction_date = date(year, month, rng.randint(1, 28))

        is_income = rng.random() > 0.7
        if is_income:
            category = rng.choice(income_categories)
            description = rng.choice(INCOME_DESCRIPTIONS)
            amount_cents = rng.randint(200000, 700000)  # 2,000 - 7,000
        else:
            category = rng.choice(expense_categories)
            description = rng.choice(EXPENSE_DESCRIPTIONS)
            amount_cents = rng.randint(5000, 55000)  # 50 - 550

        transactions.append(
            {
                "id": f"t{i}",
                "date": transaction_date.isoformat(),
                "description": description,
                "type": "income" if is_income else "expense",
                "category": category["id"],
                "amount": cents_to_dollars_str(amount_cents),
                "status": "completed",
            }
        )

    transactions.sort(key=lambda t: t["date"], reverse=True)

    accounts = [
        {"id": "1", "name": "Checking Account", "bank": "Example Bank", "balance": "4500.00", "type": "checking"},
        {"id": "2", "name": "Savings Account", "bank": "Example Bank", "balance": "12000.00", "type": "savings"},
    ]

    cards = [
        {"id": "1", "bank": "Example Bank", "brand": "visa", "last4": "1234", "limit": "5000.00", "used": "1250.00", "due_day": 10},
        {"id": "2", "bank": "Other Bank", "brand": "mastercard", "last4": "5678", "limit": "3000.00", "used": "500.00", "due_day": 15},
    ]

    return {
        "categories": [dict(c) for c in DEFAULT_CATEGORIES],
        "accounts": accounts,
        "cards": cards,
        "transactions": transactions,
    }


def generate_sample_goals(today: date | None = None) -> list[dict[str, Any]]:
    """
    Demo goals with deadlines relative to ``today`` so they stay active.

    Returns:
        Goal dicts suitable for GoalTracker.create_goal
    """
    if today is None:
        today = date.today()
    return [
        {
            "name": "Trip to Europe",
            "target": "10000.00",
            "current": "3500.00",
            "deadline": (today + timedelta(days=240)).isoformat(),
            "priority": "high",
        },
        {
            "name": "New laptop",
            "target": "5000.00",
            "current": "2000.00",
            "deadline": (today + timedelta(days=45)).isoformat(),
            "priority": "medium",
        },
    ]
