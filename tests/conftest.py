"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest

from finboard.core.config import reload_config
from finboard.core.models import Category, make_category_lookup


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_path:
        yield Path(temp_path)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference time used by time-dependent tests (mid-March, midday)."""
    return datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def categories() -> list[Category]:
    """Small category set covering both transaction types."""
    return [
        Category(id="food", name="Food", color="#FF6B6B"),
        Category(id="rent", name="Housing", color="#45B7D1"),
        Category(id="fun", name="Leisure", color="#FFEAA7"),
        Category.from_dict({"id": "salary", "name": "Salary", "color": "#98D8C8", "type": "income"}),
    ]


@pytest.fixture
def category_lookup(categories):
    """id -> Category lookup for the test categories."""
    return make_category_lookup(categories)


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """Point the configuration at a throwaway data directory."""
    # Ensure tests don't use real data
    monkeypatch.setenv("FINBOARD_ENV", "test")
    monkeypatch.setenv("FINBOARD_DATA_DIR", str(tmp_path / "finboard_data"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    return reload_config()


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "goals: Tests for savings goal tracking")
    config.addinivalue_line("markers", "analysis: Tests for aggregation, insights and rendering")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
