#!/usr/bin/env python3
"""
Configuration Management for finboard

Handles environment-based configuration with sensible defaults and
validation. Supports development, test and production environments.
"""

import logging
import os
import tempfile
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class AnalysisConfig:
    """Chart and aggregation settings."""

    output_dir: Path
    chart_width: int = 16
    chart_height: int = 12
    dpi: int = 150
    income_expense_months: int = 6
    wealth_months: int = 12
    top_categories: int = 8


@dataclass
class GoalsConfig:
    """Goal tracking settings."""

    data_dir: Path
    upcoming_window_days: int = 30
    low_progress_percent: float = 50.0
    low_progress_days: int = 60


@dataclass
class InsightConfig:
    """Thresholds for the monthly insight rules."""

    expense_spike_ratio: float = 1.2
    low_savings_rate: float = 10.0
    recommended_savings_rate: float = 15.0
    category_concentration: float = 30.0
    upcoming_goal_days: int = 30


@dataclass
class Config:
    """
    Main configuration class for finboard.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path
    output_dir: Path

    # Component configurations
    analysis: AnalysisConfig
    goals: GoalsConfig
    insights: InsightConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINBOARD_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_finboard"
            base_dir = Path(os.getenv("FINBOARD_DATA_DIR", str(default_test_dir)))
        else:
            base_dir = Path(os.getenv("FINBOARD_DATA_DIR", "./data")).expanduser().resolve()

        data_dir = base_dir
        output_dir = data_dir / "output"

        for directory in [data_dir, output_dir]:
            directory.mkdir(parents=True, exist_ok=True)

        analysis = AnalysisConfig(
            output_dir=output_dir,
            chart_width=int(os.getenv("CHART_WIDTH", "16")),
            chart_height=int(os.getenv("CHART_HEIGHT", "12")),
            dpi=int(os.getenv("CHART_DPI", "150")),
            income_expense_months=int(os.getenv("INCOME_EXPENSE_MONTHS", "6")),
            wealth_months=int(os.getenv("WEALTH_MONTHS", "12")),
            top_categories=int(os.getenv("TOP_CATEGORIES", "8")),
        )

        goals = GoalsConfig(
            data_dir=data_dir / "goals",
            upcoming_window_days=int(os.getenv("GOAL_UPCOMING_DAYS", "30")),
        )

        insights = InsightConfig(
            expense_spike_ratio=float(os.getenv("EXPENSE_SPIKE_RATIO", "1.2")),
            low_savings_rate=float(os.getenv("LOW_SAVINGS_RATE", "10")),
            recommended_savings_rate=float(os.getenv("RECOMMENDED_SAVINGS_RATE", "15")),
            category_concentration=float(os.getenv("CATEGORY_CONCENTRATION", "30")),
            upcoming_goal_days=int(os.getenv("GOAL_UPCOMING_DAYS", "30")),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            analysis=analysis,
            goals=goals,
            insights=insights,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        for name, path in [
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
        ]:
            if not path.exists():
                errors.append(f"{name} does not exist: {path}")

        if self.analysis.chart_width <= 0 or self.analysis.chart_height <= 0:
            errors.append("Chart dimensions must be positive")
        if self.analysis.dpi <= 0:
            errors.append("Chart DPI must be positive")
        if self.analysis.income_expense_months <= 0 or self.analysis.wealth_months <= 0:
            errors.append("Chart month windows must be positive")
        if self.analysis.top_categories <= 0:
            errors.append("TOP_CATEGORIES must be positive")
        if self.goals.upcoming_window_days <= 0:
            errors.append("GOAL_UPCOMING_DAYS must be positive")
        if self.insights.expense_spike_ratio <= 0:
            errors.append("EXPENSE_SPIKE_RATIO must be positive")
        if not 0 <= self.insights.category_concentration <= 100:
            errors.append("CATEGORY_CONCENTRATION must be between 0 and 100")
        if not 0 < self.insights.recommended_savings_rate <= 100:
            errors.append("RECOMMENDED_SAVINGS_RATE must be between 0 and 100")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # matplotlib is chatty about fonts at DEBUG
        logging.getLogger("matplotlib").setLevel(logging.WARNING)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the configuration; paths and enums become strings."""
        return {key: _plain(value) for key, value in asdict(self).items()}


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    return value


_config: Config | None = None


def get_config() -> Config:
    """
    Get the process-wide configuration, loading it on first use.

    Raises:
        ValueError: If the environment holds invalid settings
    """
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Drop the cached configuration and load it again from the environment."""
    global _config
    _config = None
    return get_config()


def is_test() -> bool:
    return get_config().environment is Environment.TEST
