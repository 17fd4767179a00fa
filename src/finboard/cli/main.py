#!/usr/bin/env python3
"""
Main CLI Entry Point for finboard

Provides the command-line interface for the personal finance dashboard.
"""

import logging
import os
from datetime import date

import click

from ..core.config import get_config, reload_config
from ..core.datastore import FinanceData, FinanceDataStore
from ..core.exceptions import FinanceError
from ..core.json_utils import format_json
from ..core.sample_data import generate_sample_data, generate_sample_goals
from ..goals.store import GoalStore
from ..goals.tracker import GoalTracker


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    finboard - Personal Finance Dashboard

    Tracks transactions and savings goals, summarizes each month, and
    renders dashboard charts and PDF reports.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["FINBOARD_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    # Environment overrides only take effect on a fresh config
    config_obj = reload_config() if (config_env or debug) else get_config()

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("finboard").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {config_obj.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from finboard import __author__, __version__

    click.echo(f"finboard v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the full configuration as JSON")
@click.pass_context
def config(ctx: click.Context, as_json: bool) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    if as_json:
        click.echo(format_json(config_obj.to_dict()))
        return

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")
    click.echo(f"  Chart Size: {config_obj.analysis.chart_width}x{config_obj.analysis.chart_height} @ {config_obj.analysis.dpi} dpi")
    click.echo(f"  Income/Expense Months: {config_obj.analysis.income_expense_months}")
    click.echo(f"  Wealth Months: {config_obj.analysis.wealth_months}")
    click.echo(f"  Top Categories: {config_obj.analysis.top_categories}")
    click.echo(f"  Goal Upcoming Window: {config_obj.goals.upcoming_window_days} days")


@main.command()
@click.option("--sample/--empty", default=True, help="Seed with demo data (default) or start empty")
@click.option("--seed", type=int, help="Random seed for reproducible demo data")
@click.option("--force", is_flag=True, help="Overwrite existing data")
@click.pass_context
def init(ctx: click.Context, sample: bool, seed: int | None, force: bool) -> None:
    """
    Create the data files.

    Examples:
      finboard init
      finboard init --seed 42 --force
      finboard init --empty
    """
    config_obj = ctx.obj["config"]
    finance_store = FinanceDataStore(config_obj.data_dir)
    goal_store = GoalStore(config_obj.data_dir)

    if finance_store.exists() and not force:
        raise click.ClickException(
            f"Finance data already exists at {finance_store.data_file}. Use --force to overwrite."
        )

    if sample:
        data = FinanceData.from_dict(generate_sample_data(seed=seed))
    else:
        data = FinanceData.from_dict(generate_sample_data(num_transactions=0))
        data.accounts = []
        data.cards = []
    finance_store.save(data)

    tracker = GoalTracker(category_lookup=data.category_lookup())
    if sample:
        try:
            for goal_data in generate_sample_goals(date.today()):
                tracker.create_goal(goal_data)
        except FinanceError as e:
            raise click.ClickException(str(e)) from e
    goal_store.save(tracker.goals, tracker.achievements)

    click.echo(f"✅ Initialized {finance_store.data_dir}")
    click.echo(f"   Finance data: {finance_store.summary_text()}")
    click.echo(f"   Goals: {goal_store.summary_text()}")


# Import command groups
from .dashboard import charts, summary  # noqa: E402
from .goals import goals  # noqa: E402
from .report import report  # noqa: E402

main.add_command(summary)
main.add_command(charts)
main.add_command(goals)
main.add_command(report)


if __name__ == "__main__":
    main()
