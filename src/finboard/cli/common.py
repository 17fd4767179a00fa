#!/usr/bin/env python3
"""
Shared CLI helpers: loading stores and turning core errors into click errors.
"""

import logging
from datetime import datetime

import click

from ..core.config import Config
from ..core.datastore import FinanceData, FinanceDataStore
from ..goals.store import GoalStore
from ..goals.tracker import GoalCompleted, GoalTracker

logger = logging.getLogger(__name__)

SEVERITY_MARKERS = {"info": "ℹ️ ", "warning": "⚠️ ", "danger": "❌"}


def load_finance_data(config: Config) -> FinanceData:
    """Load finance records or fail with a CLI error."""
    store = FinanceDataStore(config.data_dir)
    try:
        return store.load()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not load finance data: {e}")
        raise click.ClickException(str(e)) from e


def load_tracker(config: Config, data: FinanceData | None = None, clock=None) -> tuple[GoalTracker, GoalStore]:
    """
    Build a GoalTracker from the goal store.

    Goals whose deadline passed since the last run are marked failed and
    saved right away.
    """
    store = GoalStore(config.data_dir)
    try:
        goals = store.load_goals()
        achievements = store.load_achievements()
    except ValueError as e:
        logger.error(f"Could not load goals: {e}")
        raise click.ClickException(str(e)) from e

    tracker = GoalTracker(
        goals,
        achievements=achievements,
        category_lookup=data.category_lookup() if data is not None else None,
        on_goal_completed=announce_completion,
        clock=clock or datetime.now,
    )

    changed = tracker.refresh_statuses()
    if changed:
        logger.info(f"Status changed for {len(changed)} goal(s) on load")
        store.save(tracker.goals, tracker.achievements)

    return tracker, store


def announce_completion(event: GoalCompleted) -> None:
    click.echo(
        f"🎉 Goal '{event.goal.name}' completed in {event.achievement.completion_time_days} days "
        f"({event.goal.target})"
    )
