#!/usr/bin/env python3
"""Tests for dashboard chart rendering."""

from datetime import date

import pytest

from finboard.analysis.charts import ChartRenderer
from finboard.core.config import get_config
from finboard.core.datastore import FinanceData
from tests.fixtures.synthetic_data import generate_synthetic_transactions, make_transaction


@pytest.fixture
def renderer(category_lookup):
    return ChartRenderer(get_config().analysis, category_lookup)


@pytest.mark.analysis
class TestChartData:
    """Test the aggregated data behind the charts."""

    def test_prepare_uses_configured_windows(self, renderer, fixed_now):
        data = renderer.prepare([], fixed_now)
        assert len(data.months) == 6
        assert len(data.wealth) == 12
        assert data.generated_at == fixed_now

    def test_months_override(self, renderer, fixed_now):
        assert len(renderer.prepare([], fixed_now, months=3).months) == 3

    def test_frames_in_dollars(self, renderer, fixed_now):
        txs = [
            make_transaction("1500.50", "income", on="2024-03-01", category="salary"),
            make_transaction(200, on="2024-03-02"),
        ]
        data = renderer.prepare(txs, fixed_now, months=2)

        monthly = data.monthly_frame()
        assert list(monthly.index) == ["Feb 24", "Mar 24"]
        assert monthly.loc["Mar 24", "Income"] == pytest.approx(1500.50)
        assert monthly.loc["Mar 24", "Expense"] == pytest.approx(200.0)

        wealth = data.wealth_frame()
        assert list(wealth.columns) == ["Balance", "Trend"]
        assert wealth["Balance"].iloc[-1] == pytest.approx(1300.50)
        assert len(wealth) == 12


@pytest.mark.analysis
@pytest.mark.slow
class TestRenderDashboard:
    def test_writes_png(self, renderer, temp_dir, fixed_now):
        data = FinanceData.from_dict({"transactions": generate_synthetic_transactions(today=date(2024, 3, 15))})
        output = renderer.render_dashboard(data.transaction_list(), output_dir=temp_dir, now=fixed_now)

        assert output.parent == temp_dir
        assert output.name == "2024-03-15_12-00-00_dashboard.png"
        assert output.stat().st_size > 0

    def test_renders_without_transactions(self, renderer, fixed_now):
        output = renderer.render_dashboard([], now=fixed_now)
        assert output.parent == get_config().output_dir / "charts"
        assert output.exists()
