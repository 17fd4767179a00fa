#!/usr/bin/env python3
"""
Dashboard CLI - Monthly Summary and Charts
"""

from datetime import datetime
from pathlib import Path

import click

from ..analysis.aggregation import (
    category_breakdown,
    category_shares,
    filter_by_period,
    monthly_summary,
    sum_by_type,
)
from ..analysis.charts import ChartRenderer
from ..analysis.dashboard import build_overview
from ..analysis.insights import InsightGenerator
from ..core.dates import Period
from ..core.models import TransactionType, category_label
from ..goals.pacing import recommendations
from .common import SEVERITY_MARKERS, load_finance_data, load_tracker


@click.command()
@click.option("--month", type=click.IntRange(1, 12), help="Month to summarize (default: current)")
@click.option("--year", type=int, help="Year to summarize (default: current)")
@click.option(
    "--period",
    type=click.Choice([p.value for p in Period]),
    default=Period.MONTH.value,
    help="Window for the category breakdown (default: month)",
)
@click.pass_context
def summary(ctx: click.Context, month: int | None, year: int | None, period: str) -> None:
    """
    Show the dashboard summary, insights and goal recommendations.

    Examples:
      finboard summary
      finboard summary --month 3 --year 2024
      finboard summary --period year
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)
    tracker, _ = load_tracker(config, data)

    now = datetime.now()
    month = month or now.month
    year = year or now.year
    transactions = data.transaction_list()
    lookup = data.category_lookup()

    overview = build_overview(transactions, data.accounts, data.cards, tracker.list_goals(), now)
    generator = InsightGenerator(config.insights, lookup)
    insights = generator.insights_for_month(transactions, tracker.list_goals(), month, year, now)

    month_summary = monthly_summary(transactions, month, year)

    click.echo(f"📊 {month_summary.label}")
    click.echo("=" * 50)
    click.echo(f"   Income:       {month_summary.total_income}")
    click.echo(f"   Expense:      {month_summary.total_expense}")
    click.echo(f"   Balance:      {month_summary.balance}")
    click.echo(f"   Savings Rate: {month_summary.savings_rate:.1f}%")

    click.echo("\nAccounts & Cards:")
    click.echo(f"   {overview.account_count} accounts, total balance {overview.total_account_balance}")
    click.echo(
        f"   {overview.card_count} cards, limit {overview.total_credit_limit}, "
        f"available {overview.available_credit}"
    )
    click.echo(
        f"   {overview.goal_count} goals ({overview.active_goal_count} active), "
        f"average progress {overview.average_goal_progress:.1f}%"
    )

    in_period = filter_by_period(transactions, period, now)
    total_expense = sum_by_type(in_period, TransactionType.EXPENSE)
    breakdown = category_breakdown(transactions, period, config.analysis.top_categories, now)
    click.echo(f"\nTop Categories ({period}):")
    if not breakdown:
        click.echo("   No expenses in this period")
    for share in category_shares(breakdown, total_expense):
        click.echo(f"   {category_label(lookup, share.category_id):<16} {share.total!s:>12}  {share.percentage:5.1f}%")

    click.echo("\nRecent Transactions:")
    for t in overview.recent_transactions:
        sign = "+" if t.is_income else "-"
        click.echo(f"   {t.date}  {t.description:<20} {category_label(lookup, t.category):<16} {sign}{t.amount}")

    advice = insights + recommendations(
        tracker.list_goals(),
        now,
        upcoming_days=config.goals.upcoming_window_days,
        low_progress_percent=config.goals.low_progress_percent,
        low_progress_days=config.goals.low_progress_days,
    )
    if advice:
        click.echo("\nInsights:")
        for item in advice:
            click.echo(f"   {SEVERITY_MARKERS[item.severity.value]} {item.title}: {item.message}")


@click.command()
@click.option("--output-dir", type=click.Path(file_okay=False), help="Override output directory")
@click.option("--months", type=click.IntRange(1, 36), help="Months in the income/expense chart")
@click.pass_context
def charts(ctx: click.Context, output_dir: str | None, months: int | None) -> None:
    """
    Render the dashboard charts to a PNG.

    Examples:
      finboard charts
      finboard charts --months 12 --output-dir ./charts
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)

    if ctx.obj.get("verbose", False):
        click.echo(f"Rendering {len(data.transactions)} transactions")

    renderer = ChartRenderer(config.analysis, data.category_lookup())
    try:
        output_file = renderer.render_dashboard(
            data.transaction_list(),
            output_dir=Path(output_dir) if output_dir else None,
            months=months,
        )
    except OSError as e:
        raise click.ClickException(f"Could not write chart: {e}") from e

    click.echo(f"✅ Dashboard saved to: {output_file}")
