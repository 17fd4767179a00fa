#!/usr/bin/env python3
"""
Core Data Models for finboard

Records shared by the aggregation engine, the goal tracker, the insight
generator and the rendering collaborators. Money values use the Money
primitive and calendar dates use FinancialDate.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .money import Money

DEFAULT_CATEGORY_LABEL = "General"
DEFAULT_CATEGORY_COLOR = "#CCCCCC"


class TransactionType(Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class GoalStatus(Enum):
    """Lifecycle states of a goal. COMPLETED and FAILED are terminal."""

    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not GoalStatus.ACTIVE


class GoalPriority(Enum):
    """How much a goal matters relative to the others."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Severity(Enum):
    """Tag attached to advisories for the rendering layer."""

    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Category:
    """
    Transaction category.

    A static reference set looked up by id from transactions and goals.
    """

    id: str
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    icon: str = ""
    type: TransactionType = TransactionType.EXPENSE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            color=data.get("color", DEFAULT_CATEGORY_COLOR),
            icon=data.get("icon", ""),
            type=TransactionType(data.get("type", "expense")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
            "type": self.type.value,
        }


CategoryLookup = Callable[[str], "Category | None"]


def make_category_lookup(categories: Iterable[Category]) -> CategoryLookup:
    """Build an id -> Category lookup function from a category list."""
    by_id = {category.id: category for category in categories}
    return by_id.get


def category_label(lookup: CategoryLookup | None, category_id: str | None) -> str:
    """Display name for a category id, falling back to the default label."""
    if lookup is None or category_id is None:
        return DEFAULT_CATEGORY_LABEL
    category = lookup(category_id)
    return category.name if category else DEFAULT_CATEGORY_LABEL


def category_color(lookup: CategoryLookup | None, category_id: str | None) -> str:
    """Chart colour for a category id, falling back to neutral grey."""
    if lookup is None or category_id is None:
        return DEFAULT_CATEGORY_COLOR
    category = lookup(category_id)
    return category.color if category else DEFAULT_CATEGORY_COLOR


@dataclass(frozen=True)
class Transaction:
    """
    A single income or expense record.

    Created by a store or the sample generator and never mutated by the core.
    Amounts are non-negative; ``type`` carries the direction.
    """

    id: str
    date: FinancialDate
    description: str
    type: TransactionType
    category: str
    amount: Money
    status: str = "completed"

    def __post_init__(self):
        if self.amount.cents < 0:
            raise ValueError(f"Transaction {self.id} has a negative amount: {self.amount}")

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """
        Create a Transaction from a stored dict.

        Amounts are decimal text ("123.45"); numbers are accepted too.
        """
        return cls(
            id=str(data["id"]),
            date=FinancialDate.parse(data["date"]),
            description=data.get("description", ""),
            type=TransactionType(data["type"]),
            category=str(data.get("category", "")),
            amount=Money.parse(data["amount"]),
            status=data.get("status", "completed"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.to_iso_string(),
            "description": self.description,
            "type": self.type.value,
            "category": self.category,
            "amount": self.amount.to_dollars(),
            "status": self.status,
        }


@dataclass(frozen=True)
class Account:
    """Bank account shown on the dashboard."""

    id: str
    name: str
    bank: str
    balance: Money
    type: str = "checking"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Account":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            bank=data.get("bank", ""),
            balance=Money.parse(data.get("balance", "0")),
            type=data.get("type", "checking"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "bank": self.bank,
            "balance": self.balance.to_dollars(),
            "type": self.type,
        }


@dataclass(frozen=True)
class Card:
    """Credit card with its limit and the portion already used."""

    id: str
    bank: str
    brand: str
    last4: str
    limit: Money
    used: Money = field(default_factory=Money.zero)
    due_day: int = 1

    @property
    def available(self) -> Money:
        return self.limit - self.used

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Card":
        return cls(
            id=str(data["id"]),
            bank=data.get("bank", ""),
            brand=data.get("brand", ""),
            last4=str(data.get("last4", "")),
            limit=Money.parse(data.get("limit", "0")),
            used=Money.parse(data.get("used", "0")),
            due_day=int(data.get("due_day", 1)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "bank": self.bank,
            "brand": self.brand,
            "last4": self.last4,
            "limit": self.limit.to_dollars(),
            "used": self.used.to_dollars(),
            "due_day": self.due_day,
        }


@dataclass
class Goal:
    """
    A savings goal.

    Owned by the GoalTracker, which is the only component that mutates it.
    Everything else reads goals.
    """

    id: str
    name: str
    target: Money
    current: Money = field(default_factory=Money.zero)
    type: str = "savings"
    deadline: FinancialDate | None = None
    category: str | None = None
    priority: GoalPriority = GoalPriority.MEDIUM
    status: GoalStatus = GoalStatus.ACTIVE
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    notes: str = ""

    @property
    def is_active(self) -> bool:
        return self.status is GoalStatus.ACTIVE

    @property
    def remaining(self) -> Money:
        """Amount still missing to reach the target (never negative)."""
        gap = self.target - self.current
        return gap if gap.cents > 0 else Money.zero()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        created_at = data.get("created_at")
        updated_at = data.get("updated_at")
        deadline = data.get("deadline")
        return cls(
            id=str(data["id"]),
            name=data["name"],
            target=Money.parse(data["target"]),
            current=Money.parse(data.get("current") or "0"),
            type=data.get("type") or "savings",
            deadline=FinancialDate.parse(deadline) if deadline else None,
            category=data.get("category"),
            priority=GoalPriority(data.get("priority") or "medium"),
            status=GoalStatus(data.get("status") or "active"),
            created_at=_parse_timestamp(created_at),
            updated_at=_parse_timestamp(updated_at or created_at),
            notes=data.get("notes") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "target": self.target.to_dollars(),
            "current": self.current.to_dollars(),
            "deadline": self.deadline.to_iso_string() if self.deadline else None,
            "category": self.category,
            "priority": self.priority.value,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "notes": self.notes,
        }


@dataclass(frozen=True)
class Achievement:
    """Record of a goal reaching its target. Appended once per goal."""

    goal_id: str
    goal_name: str
    target: Money
    completed_at: datetime
    completion_time_days: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Achievement":
        return cls(
            goal_id=str(data["goal_id"]),
            goal_name=data["goal_name"],
            target=Money.parse(data["target"]),
            completed_at=_parse_timestamp(data["completed_at"]),
            completion_time_days=int(data["completion_time_days"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal_id": self.goal_id,
            "goal_name": self.goal_name,
            "target": self.target.to_dollars(),
            "completed_at": self.completed_at.isoformat(),
            "completion_time_days": self.completion_time_days,
        }


@dataclass(frozen=True)
class PeriodSummary:
    """Income/expense totals for a month or window. Recomputed on demand."""

    label: str
    total_income: Money
    total_expense: Money
    balance: Money
    savings_rate: float


@dataclass(frozen=True)
class Advisory:
    """
    Human-readable recommendation or insight.

    ``count`` is set for aggregate advisories (how many goals matched).
    """

    severity: Severity
    title: str
    message: str
    count: int | None = None


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now()
    return datetime.fromisoformat(str(value))
