#!/usr/bin/env python3
"""
Savings Goal Management

Goal tracking with progress, pacing and recommendations, persisted as YAML.
"""

from .store import GoalStore
from .tracker import GoalCompleted, GoalTracker

__all__ = [
    "GoalCompleted",
    "GoalStore",
    "GoalTracker",
]
