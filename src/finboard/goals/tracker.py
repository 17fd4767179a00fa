#!/usr/bin/env python3
"""
Savings Goal Tracker

Owns the goal collection: creation, edits, contributions and deletion, plus
the status rules that move a goal from active to completed or failed.

Status rules (checked after every mutation):
- active -> completed once current >= target
- active -> failed once the deadline has passed with current < target
- completed and failed are terminal
"""

import logging
import math
import threading
import uuid
from collections.abc import Callable, Iterable, Mapping, MutableMapping
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

from ..core.dates import FinancialDate, is_past
from ..core.exceptions import InvalidAmountError, InvalidInputError, NotFoundError
from ..core.models import Achievement, CategoryLookup, Goal, GoalPriority, GoalStatus
from ..core.money import Money
from . import pacing

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "type", "target", "current", "deadline", "category", "priority", "notes"})


@dataclass(frozen=True)
class GoalCompleted:
    """Notification emitted when a goal reaches its target."""

    goal: Goal
    achievement: Achievement


class GoalTracker:
    """
    Goal collection with validated mutations.

    Every mutating call validates its input before touching the stored goal
    and runs under a re-entrant lock, so a failed call leaves the collection
    as it was and concurrent readers never see half an update.

    Mutations return the changed goal; persisting it is the caller's job.
    """

    def __init__(
        self,
        goals: Mapping[str, Goal] | Iterable[Goal] | None = None,
        achievements: list[Achievement] | None = None,
        category_lookup: CategoryLookup | None = None,
        on_goal_completed: Callable[[GoalCompleted], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Initialize the tracker.

        Args:
            goals: Existing goals, as an id -> Goal mapping or a plain iterable.
                A mutable mapping is used as is, so creates and deletes show
                up in it; read-only mappings and iterables are copied
            achievements: Existing achievement history (appended to in place)
            category_lookup: Resolves category ids; unknown ids are rejected
            on_goal_completed: Called once per goal that reaches its target
            clock: Source of "now" (default: datetime.now)
        """
        if goals is None:
            self.goals: MutableMapping[str, Goal] = {}
        elif isinstance(goals, MutableMapping):
            self.goals = goals
        elif isinstance(goals, Mapping):
            self.goals = dict(goals)
        else:
            self.goals = {goal.id: goal for goal in goals}

        self.achievements: list[Achievement] = achievements if achievements is not None else []
        self.category_lookup = category_lookup
        self.on_goal_completed = on_goal_completed
        self._clock = clock or datetime.now
        self._lock = threading.RLock()

    # Queries

    def get_goal(self, goal_id: str) -> Goal:
        """Get a goal by id, raising NotFoundError if absent."""
        goal = self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    def list_goals(self) -> list[Goal]:
        return list(self.goals.values())

    def goals_by_status(self, status: GoalStatus | str = GoalStatus.ACTIVE) -> list[Goal]:
        status = GoalStatus(status)
        return [g for g in self.goals.values() if g.status is status]

    def goals_by_type(self, goal_type: str) -> list[Goal]:
        return [g for g in self.goals.values() if g.type == goal_type]

    def goals_by_priority(self, priority: GoalPriority | str) -> list[Goal]:
        priority = GoalPriority(priority)
        return [g for g in self.goals.values() if g.priority is priority]

    def upcoming_goals(self, days: int = 30) -> list[Goal]:
        return pacing.upcoming_goals(self.goals.values(), days, self._clock())

    def overdue_goals(self) -> list[Goal]:
        return pacing.overdue_goals(self.goals.values(), self._clock())

    def total_target(self) -> Money:
        return pacing.total_target(self.goals.values())

    def completed_target(self) -> Money:
        return pacing.completed_target(self.goals.values())

    def overall_progress(self) -> float:
        return pacing.overall_progress(self.goals.values())

    def progress(self, goal: Goal) -> float:
        return pacing.progress(goal)

    def monthly_needed(self, goal: Goal, now: datetime | None = None) -> Money | None:
        return pacing.monthly_needed(goal, now or self._clock())

    def recommendations(self, now: datetime | None = None, **thresholds: Any):
        return pacing.recommendations(self.goals.values(), now or self._clock(), **thresholds)

    # Mutations

    def create_goal(self, data: Mapping[str, Any]) -> Goal:
        """
        Validate and add a new goal.

        Requires ``name`` and ``target``. ``current`` defaults to 0,
        ``priority`` to medium and ``type`` to savings.

        Raises:
            InvalidInputError: Missing name/target, unknown field or bad value
            InvalidAmountError: Target not positive or current negative
            NotFoundError: Category id the lookup cannot resolve
        """
        unknown = set(data) - EDITABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown goal field(s): {', '.join(sorted(unknown))}")
        for required in ("name", "target"):
            if data.get(required) in (None, ""):
                raise InvalidInputError(f"Missing required field: {required}")

        fields = self._validate_fields(data)
        now = self._clock()

        goal = Goal(
            id=uuid.uuid4().hex,
            name=fields["name"],
            target=fields["target"],
            current=fields.get("current", Money.zero()),
            type=fields.get("type", "savings"),
            deadline=fields.get("deadline"),
            category=fields.get("category"),
            priority=fields.get("priority", GoalPriority.MEDIUM),
            status=GoalStatus.ACTIVE,
            created_at=now,
            updated_at=now,
            notes=fields.get("notes", ""),
        )

        with self._lock:
            self.goals[goal.id] = goal
            event = self._apply_status_rules(goal, now)

        logger.info(f"Created goal {goal.name!r} ({goal.id}) with target {goal.target}")
        self._notify(event)
        return goal

    def update_goal(self, goal_id: str, patch: Mapping[str, Any]) -> Goal:
        """
        Apply an edit to a goal and re-check its status.

        Raises:
            NotFoundError: Goal (or referenced category) does not exist
            InvalidInputError: Field not editable or value not allowed
            InvalidAmountError: Target not positive or current negative
        """
        with self._lock:
            goal = self.get_goal(goal_id)

            not_editable = set(patch) - EDITABLE_FIELDS
            if not_editable:
                raise InvalidInputError(f"Field(s) not editable: {', '.join(sorted(not_editable))}")
            if "name" in patch and patch["name"] in (None, ""):
                raise InvalidInputError("Goal name cannot be empty")
            if "target" in patch and patch["target"] in (None, ""):
                raise InvalidInputError("Goal target cannot be empty")

            changes = self._validate_fields(patch)
            now = self._clock()
            # Build the full record first so a bad value can't leave a half-applied edit
            candidate = replace(goal, **changes, updated_at=now)
            for name in (*changes, "updated_at"):
                setattr(goal, name, getattr(candidate, name))

            event = self._apply_status_rules(goal, now)

        logger.info(f"Updated goal {goal.name!r} ({goal.id}): {', '.join(sorted(changes)) or 'no changes'}")
        self._notify(event)
        return goal

    def delete_goal(self, goal_id: str) -> Goal:
        """
        Remove a goal.

        Raises:
            NotFoundError: Goal does not exist
        """
        with self._lock:
            goal = self.get_goal(goal_id)
            del self.goals[goal_id]

        logger.info(f"Deleted goal {goal.name!r} ({goal.id})")
        return goal

    def add_contribution(self, goal_id: str, amount: Money | str | int | float) -> Goal:
        """
        Add money to a goal and re-check its status.

        A goal that reaches its target here emits exactly one GoalCompleted
        and one Achievement; later contributions to a completed goal only
        raise ``current``.

        Raises:
            NotFoundError: Goal does not exist
            InvalidAmountError: Amount is not a positive number
        """
        with self._lock:
            goal = self.get_goal(goal_id)
            contribution = _parse_amount(amount, "contribution")
            if contribution.cents <= 0:
                raise InvalidAmountError(f"Contribution must be positive, got {contribution}")

            now = self._clock()
            goal.current = goal.current + contribution
            goal.updated_at = now
            event = self._apply_status_rules(goal, now)

        logger.info(f"Added {contribution} to goal {goal.name!r}; now {goal.current} of {goal.target}")
        self._notify(event)
        return goal

    def refresh_statuses(self, now: datetime | None = None) -> list[Goal]:
        """
        Re-check every active goal, e.g. after loading from storage.

        Returns:
            Goals whose status changed
        """
        changed = []
        events = []
        with self._lock:
            now = now or self._clock()
            for goal in self.goals.values():
                before = goal.status
                event = self._apply_status_rules(goal, now)
                if goal.status is not before:
                    changed.append(goal)
                if event:
                    events.append(event)

        for event in events:
            self._notify(event)
        return changed

    # Internals

    def _validate_fields(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Parse and validate editable fields without touching any goal."""
        fields: dict[str, Any] = {}

        if "name" in data:
            fields["name"] = str(data["name"]).strip()
            if not fields["name"]:
                raise InvalidInputError("Goal name cannot be empty")

        if "target" in data:
            target = _parse_amount(data["target"], "target")
            if target.cents <= 0:
                raise InvalidAmountError(f"Goal target must be positive, got {target}")
            fields["target"] = target

        if "current" in data:
            current = _parse_amount(data["current"] if data["current"] not in (None, "") else 0, "current")
            if current.cents < 0:
                raise InvalidAmountError(f"Goal current amount cannot be negative, got {current}")
            fields["current"] = current

        if "type" in data:
            fields["type"] = str(data["type"] or "savings")

        if "deadline" in data:
            deadline = data["deadline"]
            if deadline in (None, ""):
                fields["deadline"] = None
            else:
                try:
                    fields["deadline"] = FinancialDate.parse(deadline)
                except ValueError as e:
                    raise InvalidInputError(f"Invalid deadline {deadline!r}: {e}") from e

        if "category" in data:
            category = data["category"] or None
            if category is not None:
                category = str(category)
                if self.category_lookup is not None and self.category_lookup(category) is None:
                    raise NotFoundError("Category", category)
            fields["category"] = category

        if "priority" in data:
            try:
                fields["priority"] = GoalPriority(data["priority"] or "medium")
            except ValueError:
                raise InvalidInputError(f"Invalid priority {data['priority']!r} (expected low, medium or high)") from None

        if "notes" in data:
            fields["notes"] = str(data["notes"] or "")

        return fields

    def _apply_status_rules(self, goal: Goal, now: datetime) -> GoalCompleted | None:
        """Move an active goal to completed or failed when the rules say so."""
        if goal.status.is_terminal:
            return None

        if goal.current >= goal.target:
            goal.status = GoalStatus.COMPLETED
            achievement = Achievement(
                goal_id=goal.id,
                goal_name=goal.name,
                target=goal.target,
                completed_at=now,
                completion_time_days=max(0, math.ceil((now - goal.created_at).total_seconds() / 86400)),
            )
            self.achievements.append(achievement)
            logger.info(f"Goal {goal.name!r} completed after {achievement.completion_time_days} days")
            return GoalCompleted(goal=goal, achievement=achievement)

        if is_past(goal.deadline, now):
            goal.status = GoalStatus.FAILED
            logger.info(f"Goal {goal.name!r} failed: deadline {goal.deadline} passed at {goal.current} of {goal.target}")

        return None

    def _notify(self, event: GoalCompleted | None) -> None:
        if event is not None and self.on_goal_completed is not None:
            self.on_goal_completed(event)


def _parse_amount(value: Any, field_name: str) -> Money:
    try:
        return Money.parse(value)
    except (ValueError, TypeError, ArithmeticError):
        raise InvalidAmountError(f"Invalid {field_name} amount: {value!r}") from None
