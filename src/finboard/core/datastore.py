#!/usr/bin/env python3
"""
Finance DataStore - JSON persistence for dashboard records.

Stands in for the external key-value store: categories, accounts, cards and
transactions live in a single ``finance.json`` under the data directory.
Goals are persisted separately by ``finboard.goals.store.GoalStore``.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from .json_utils import read_json, write_json
from .models import Account, Card, Category, Transaction, make_category_lookup

logger = logging.getLogger(__name__)


@dataclass
class FinanceData:
    """Everything the dashboard reads, keyed the way the core expects it."""

    categories: list[Category] = field(default_factory=list)
    accounts: list[Account] = field(default_factory=list)
    cards: list[Card] = field(default_factory=list)
    transactions: dict[str, Transaction] = field(default_factory=dict)

    def category_lookup(self):
        """id -> Category lookup to inject into analysis components."""
        return make_category_lookup(self.categories)

    def transaction_list(self) -> list[Transaction]:
        """Transactions in stored order."""
        return list(self.transactions.values())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinanceData":
        transactions = [Transaction.from_dict(t) for t in data.get("transactions", [])]
        return cls(
            categories=[Category.from_dict(c) for c in data.get("categories", [])],
            accounts=[Account.from_dict(a) for a in data.get("accounts", [])],
            cards=[Card.from_dict(c) for c in data.get("cards", [])],
            transactions={t.id: t for t in transactions},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "categories": [c.to_dict() for c in self.categories],
            "accounts": [a.to_dict() for a in self.accounts],
            "cards": [c.to_dict() for c in self.cards],
            "transactions": [t.to_dict() for t in self.transactions.values()],
        }


class FinanceDataStore:
    """
    DataStore for the dashboard's finance records.

    Follows the exists/load/save/metadata shape used by the other stores so
    the CLI can describe what is on disk.
    """

    def __init__(self, data_dir: Path):
        """
        Initialize finance store.

        Args:
            data_dir: Base data directory; the file lives at data_dir/finance.json
        """
        self.data_dir = data_dir
        self.data_file = data_dir / "finance.json"

    def exists(self) -> bool:
        """Check if the finance file exists."""
        return self.data_file.exists()

    def load(self) -> FinanceData:
        """
        Load finance records.

        Raises:
            FileNotFoundError: If the data file doesn't exist
            ValueError: If a record is malformed
        """
        if not self.exists():
            raise FileNotFoundError(f"Finance data not found: {self.data_file}. Run 'finboard init' first.")

        raw = read_json(self.data_file)
        try:
            data = FinanceData.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Malformed finance data in {self.data_file}: {e}") from e

        logger.debug(
            f"Loaded {len(data.transactions)} transactions, {len(data.categories)} categories "
            f"from {self.data_file}"
        )
        return data

    def save(self, data: FinanceData) -> None:
        """Save finance records, replacing the file."""
        write_json(self.data_file, data.to_dict())
        logger.info(f"Saved {len(data.transactions)} transactions to {self.data_file}")

    def last_modified(self) -> datetime | None:
        """Get timestamp of the finance file."""
        if not self.exists():
            return None
        return datetime.fromtimestamp(self.data_file.stat().st_mtime)

    def age_days(self) -> int | None:
        """Get age in days of the finance file."""
        last_mod = self.last_modified()
        if last_mod is None:
            return None
        return (datetime.now() - last_mod).days

    def item_count(self) -> int | None:
        """Get count of stored transactions."""
        if not self.exists():
            return None

        raw = read_json(self.data_file)
        transactions = raw.get("transactions", []) if isinstance(raw, dict) else []
        return len(transactions)

    def summary_text(self) -> str:
        """Get human-readable summary of current data state."""
        if not self.exists():
            return "No finance data"
        count = self.item_count() or 0
        age = self.age_days()
        return f"{count} transactions (updated {age} days ago)"
