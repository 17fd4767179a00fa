#!/usr/bin/env python3
"""Tests for the demo data generator."""

from datetime import date

import pytest

from finboard.core.datastore import FinanceData
from finboard.core.dates import FinancialDate
from finboard.core.sample_data import DEFAULT_CATEGORIES, generate_sample_data, generate_sample_goals


@pytest.mark.unit
class TestGenerateSampleData:
    def test_same_seed_same_data(self):
        today = date(2024, 3, 15)
        assert generate_sample_data(seed=7, today=today) == generate_sample_data(seed=7, today=today)

    def test_shape(self):
        raw = generate_sample_data(seed=1, num_transactions=30, months=6, today=date(2024, 3, 15))
        data = FinanceData.from_dict(raw)

        assert len(data.transactions) == 30
        assert len(data.categories) == len(DEFAULT_CATEGORIES)
        assert len(data.accounts) == 2
        assert len(data.cards) == 2

    def test_transactions_within_window_and_newest_first(self):
        raw = generate_sample_data(seed=3, num_transactions=40, months=6, today=date(2024, 3, 15))
        dates = [FinancialDate.parse(t["date"]) for t in raw["transactions"]]

        assert dates == sorted(dates, reverse=True)
        assert min(dates).date >= date(2023, 10, 1)
        assert max(dates).date <= date(2024, 3, 28)

    def test_categories_match_transaction_type(self):
        raw = generate_sample_data(seed=5, num_transactions=40)
        types = {c["id"]: c["type"] for c in DEFAULT_CATEGORIES}
        for t in raw["transactions"]:
            assert types[t["category"]] == t["type"]

    def test_no_transactions(self):
        assert generate_sample_data(num_transactions=0)["transactions"] == []


@pytest.mark.goals
class TestGenerateSampleGoals:
    def test_deadlines_in_future(self):
        today = date(2024, 3, 15)
        goals = generate_sample_goals(today)
        assert len(goals) == 2
        for goal in goals:
            assert date.fromisoformat(goal["deadline"]) > today
            assert set(goal) >= {"name", "target", "current", "deadline"}
