#!/usr/bin/env python3
"""
Report CLI - Monthly PDF Report
"""

from datetime import datetime
from pathlib import Path

import click

from ..analysis.insights import InsightGenerator
from ..analysis.report import MonthlyReportBuilder, PdfReportRenderer
from .common import load_finance_data, load_tracker


@click.command()
@click.option("--month", type=click.IntRange(1, 12), help="Report month (default: current)")
@click.option("--year", type=int, help="Report year (default: current)")
@click.option("--output-dir", type=click.Path(file_okay=False), help="Override output directory")
@click.pass_context
def report(ctx: click.Context, month: int | None, year: int | None, output_dir: str | None) -> None:
    """
    Generate the monthly PDF report.

    Examples:
      finboard report
      finboard report --month 1 --year 2024 --output-dir ./reports
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)
    tracker, _ = load_tracker(config, data)

    now = datetime.now()
    month = month or now.month
    year = year or now.year

    lookup = data.category_lookup()
    builder = MonthlyReportBuilder(lookup, InsightGenerator(config.insights, lookup))
    monthly = builder.build(data.transaction_list(), tracker.list_goals(), month, year, now)

    if ctx.obj.get("verbose", False):
        click.echo(f"Report for {monthly.title}")
        click.echo(f"   {len(monthly.income)} income, {len(monthly.expenses)} expense transactions")
        click.echo(f"   {len(monthly.goals)} active goals, {len(monthly.insights)} insights")

    renderer = PdfReportRenderer(config.analysis)
    try:
        output_file = renderer.render(monthly, Path(output_dir) if output_dir else None)
    except OSError as e:
        raise click.ClickException(f"Could not write report: {e}") from e

    click.echo(f"✅ Report saved to: {output_file}")
