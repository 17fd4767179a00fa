#!/usr/bin/env python3
"""
Goal Progress and Pacing

Read-only calculations over goals: how far along a goal is, how much must be
saved each month to hit its deadline, and aggregate recommendations across
the whole goal collection.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from ..core.dates import days_remaining, is_past, is_within
from ..core.models import Advisory, Goal, GoalStatus, Severity
from ..core.money import Money

# Average month length. Pacing amounts depend on this exact value.
DAYS_PER_MONTH = Decimal("30.44")


def progress(goal: Goal) -> float:
    """
    Percentage of the target already saved, clamped to [0, 100].

    A goal without a target (0) reports no progress.
    """
    if goal.target.cents <= 0:
        return 0.0
    ratio = goal.current.cents * 100 / goal.target.cents
    return max(0.0, min(ratio, 100.0))


def monthly_needed(goal: Goal, now: datetime | None = None) -> Money | None:
    """
    Contribution per month needed to reach the target by the deadline.

    Returns None when the goal has no deadline and zero once the deadline has
    arrived. Months are counted as days_remaining / 30.44.
    """
    if goal.deadline is None:
        return None

    remaining_days = days_remaining(goal.deadline, now)
    if remaining_days is None or remaining_days <= 0:
        return Money.zero()

    gap = goal.remaining
    if gap.cents == 0:
        return Money.zero()

    # gap / (days / 30.44) == gap * 30.44 / days
    per_month = gap.to_decimal() * DAYS_PER_MONTH / Decimal(remaining_days)
    return Money.from_decimal(per_month)


def active_goals(goals: Iterable[Goal]) -> list[Goal]:
    return [g for g in goals if g.status is GoalStatus.ACTIVE]


def upcoming_goals(goals: Iterable[Goal], days: int = 30, now: datetime | None = None) -> list[Goal]:
    """Active goals whose deadline falls within the next ``days`` days."""
    return [g for g in active_goals(goals) if is_within(g.deadline, days, now)]


def overdue_goals(goals: Iterable[Goal], now: datetime | None = None) -> list[Goal]:
    """Active goals whose deadline has already passed."""
    return [g for g in active_goals(goals) if is_past(g.deadline, now)]


def lagging_goals(
    goals: Iterable[Goal],
    max_progress: float = 50.0,
    max_days: int = 60,
    now: datetime | None = None,
) -> list[Goal]:
    """
    Active goals below ``max_progress`` percent with fewer than ``max_days`` days left.

    Overdue goals count too, their remaining days are negative. Goals due
    today are left to the deadline warnings.
    """
    lagging = []
    for goal in active_goals(goals):
        remaining_days = days_remaining(goal.deadline, now)
        if remaining_days is None or remaining_days == 0:
            continue
        if progress(goal) < max_progress and remaining_days < max_days:
            lagging.append(goal)
    return lagging


def recommendations(
    goals: Iterable[Goal],
    now: datetime | None = None,
    upcoming_days: int = 30,
    low_progress_percent: float = 50.0,
    low_progress_days: int = 60,
) -> list[Advisory]:
    """
    Aggregate advice over the goal collection.

    Checked in a fixed order (no deadline, overdue, due soon, lagging); each
    condition that applies yields one entry carrying the number of goals.
    """
    if now is None:
        now = datetime.now()
    goals = list(goals)
    active = active_goals(goals)
    advice = []

    without_deadline = [g for g in active if g.deadline is None]
    if without_deadline:
        count = len(without_deadline)
        advice.append(
            Advisory(
                severity=Severity.WARNING,
                title="Goals without a deadline",
                message=f"{count} goal(s) without a deadline. Setting one helps you stay focused.",
                count=count,
            )
        )

    overdue = overdue_goals(active, now)
    if overdue:
        count = len(overdue)
        advice.append(
            Advisory(
                severity=Severity.DANGER,
                title="Overdue goals",
                message=f"{count} goal(s) overdue. Consider moving the deadline or increasing contributions.",
                count=count,
            )
        )

    upcoming = upcoming_goals(active, upcoming_days, now)
    if upcoming:
        count = len(upcoming)
        advice.append(
            Advisory(
                severity=Severity.INFO,
                title="Deadlines approaching",
                message=f"{count} goal(s) due in the next {upcoming_days} days. Check your progress.",
                count=count,
            )
        )

    lagging = lagging_goals(active, low_progress_percent, low_progress_days, now)
    if lagging:
        count = len(lagging)
        advice.append(
            Advisory(
                severity=Severity.WARNING,
                title="Goals falling behind",
                message=(
                    f"{count} goal(s) below {low_progress_percent:g}% progress "
                    f"with fewer than {low_progress_days} days left."
                ),
                count=count,
            )
        )

    return advice


def total_target(goals: Iterable[Goal]) -> Money:
    """Sum of all goal targets."""
    return Money(sum(g.target.cents for g in goals))


def completed_target(goals: Iterable[Goal]) -> Money:
    """Sum of targets for completed goals."""
    return Money(sum(g.target.cents for g in goals if g.status is GoalStatus.COMPLETED))


def overall_progress(goals: Iterable[Goal]) -> float:
    """Total saved over total targeted, in percent (not clamped)."""
    goals = list(goals)
    target_cents = sum(g.target.cents for g in goals)
    if target_cents == 0:
        return 0.0
    return sum(g.current.cents for g in goals) * 100 / target_cents


def average_progress(goals: Iterable[Goal]) -> float:
    """Mean of per-goal progress for active goals; 0 when there are none."""
    active = active_goals(goals)
    if not active:
        return 0.0
    return sum(progress(g) for g in active) / len(active)
