#!/usr/bin/env python3
"""Tests for YAML goal persistence."""

from datetime import datetime

import pytest
import yaml

from finboard.core.models import Achievement, GoalPriority, GoalStatus
from finboard.core.money import Money
from finboard.goals.store import GoalStore
from tests.fixtures.synthetic_data import make_goal


@pytest.mark.goals
class TestGoalStore:
    """Test loading and saving goals and achievements."""

    def test_empty_store(self, temp_dir):
        store = GoalStore(temp_dir)
        assert not store.exists()
        assert store.load_goals() == {}
        assert store.load_achievements() == []
        assert store.summary_text() == "No goals"

    def test_round_trip(self, temp_dir):
        goals = [
            make_goal(5000, "2000.50", deadline="2024-06-30", name="Laptop", priority=GoalPriority.HIGH),
            make_goal(100, 100, name="Jar", status=GoalStatus.COMPLETED),
        ]
        achievements = [
            Achievement(
                goal_id=goals[1].id,
                goal_name="Jar",
                target=Money.from_dollars(100),
                completed_at=datetime(2024, 2, 1, 8, 30),
                completion_time_days=31,
            )
        ]
        store = GoalStore(temp_dir)
        store.save({g.id: g for g in goals}, achievements)

        loaded = store.load_goals()
        assert set(loaded) == {g.id for g in goals}
        laptop = loaded[goals[0].id]
        assert laptop.current == Money.from_cents(200050)
        assert laptop.deadline.to_iso_string() == "2024-06-30"
        assert laptop.priority is GoalPriority.HIGH
        assert laptop.created_at == datetime(2024, 1, 1, 9, 0)
        assert loaded[goals[1].id].status is GoalStatus.COMPLETED
        assert store.load_achievements() == achievements
        assert store.summary_text() == "2 goals, 1 achievements"

    def test_file_layout(self, temp_dir):
        goal = make_goal(250, 10, name="Bike")
        GoalStore(temp_dir).save({goal.id: goal}, [])

        raw = yaml.safe_load((temp_dir / "goals" / "goals.yaml").read_text())
        assert list(raw) == [goal.id]
        assert "id" not in raw[goal.id]
        assert raw[goal.id]["target"] == "250.00"
        assert yaml.safe_load((temp_dir / "goals" / "achievements.yaml").read_text()) == []

    def test_malformed_goal(self, temp_dir):
        (temp_dir / "goals").mkdir()
        (temp_dir / "goals" / "goals.yaml").write_text("abc:\n  name: Broken\n  target: lots\n")
        with pytest.raises(ValueError, match="Malformed goal 'abc'"):
            GoalStore(temp_dir).load_goals()
