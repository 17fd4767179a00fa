#!/usr/bin/env python3
"""
Goal Store - YAML persistence for goals and achievements.

Goals live in ``goals/goals.yaml`` keyed by id; the achievement history is an
append-only list in ``goals/achievements.yaml``.
"""

import logging
from pathlib import Path

import yaml

from ..core.models import Achievement, Goal

logger = logging.getLogger(__name__)


class GoalStore:
    """Loads and saves the goal collection for a GoalTracker."""

    def __init__(self, data_dir: Path):
        """
        Initialize goal store.

        Args:
            data_dir: Base data directory; files live under data_dir/goals
        """
        self.data_dir = data_dir
        self.goals_dir = data_dir / "goals"
        self.goals_file = self.goals_dir / "goals.yaml"
        self.achievements_file = self.goals_dir / "achievements.yaml"

    def exists(self) -> bool:
        return self.goals_file.exists()

    def load_goals(self) -> dict[str, Goal]:
        """
        Load goals keyed by id. A missing file means no goals yet.

        Raises:
            ValueError: If the file holds a malformed goal
        """
        if not self.goals_file.exists():
            return {}

        with open(self.goals_file) as f:
            data = yaml.safe_load(f) or {}

        goals = {}
        for goal_id, goal_data in data.items():
            try:
                goal = Goal.from_dict({"id": goal_id, **goal_data})
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Malformed goal {goal_id!r} in {self.goals_file}: {e}") from e
            goals[goal.id] = goal

        logger.debug(f"Loaded {len(goals)} goals from {self.goals_file}")
        return goals

    def save_goals(self, goals: dict[str, Goal]) -> None:
        """Save all goals, replacing the file."""
        self.goals_dir.mkdir(parents=True, exist_ok=True)

        data = {}
        for goal_id, goal in goals.items():
            record = goal.to_dict()
            del record["id"]
            data[goal_id] = record

        with open(self.goals_file, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=True)
        logger.info(f"Saved {len(goals)} goals to {self.goals_file}")

    def load_achievements(self) -> list[Achievement]:
        if not self.achievements_file.exists():
            return []

        with open(self.achievements_file) as f:
            entries = yaml.safe_load(f) or []

        try:
            return [Achievement.from_dict(entry) for entry in entries]
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed achievement in {self.achievements_file}: {e}") from e

    def save_achievements(self, achievements: list[Achievement]) -> None:
        self.goals_dir.mkdir(parents=True, exist_ok=True)
        with open(self.achievements_file, "w") as f:
            yaml.dump([a.to_dict() for a in achievements], f, default_flow_style=False, sort_keys=True)

    def save(self, goals: dict[str, Goal], achievements: list[Achievement]) -> None:
        """Save goals and achievement history together."""
        self.save_goals(goals)
        self.save_achievements(achievements)

    def summary_text(self) -> str:
        """Get human-readable summary of current data state."""
        if not self.exists():
            return "No goals"
        return f"{len(self.load_goals())} goals, {len(self.load_achievements())} achievements"
