#!/usr/bin/env python3
"""
Goals CLI - Savings Goal Management

Create, edit, fund and review savings goals. Every change is saved to the
goal store straight away.
"""

from datetime import datetime

import click

from ..core.exceptions import FinanceError
from ..core.models import GoalPriority, GoalStatus, category_label
from ..goals.pacing import recommendations
from .common import SEVERITY_MARKERS, load_finance_data, load_tracker


@click.group()
def goals() -> None:
    """Savings goal commands."""
    pass


@goals.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in GoalStatus]),
    help="Only show goals with this status",
)
@click.pass_context
def list_goals(ctx: click.Context, status: str | None) -> None:
    """
    List goals with progress and monthly pacing.

    Example:
      finboard goals list --status active
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)
    tracker, _ = load_tracker(config, data)
    lookup = data.category_lookup()

    selected = tracker.goals_by_status(status) if status else tracker.list_goals()
    if not selected:
        click.echo("No goals found.")
        return

    click.echo("Savings Goals:")
    click.echo("=" * 60)
    for goal in selected:
        click.echo(f"\n{goal.name} [{goal.status.value}]  ({goal.id})")
        click.echo(f"  Saved: {goal.current} of {goal.target} ({tracker.progress(goal):.1f}%)")
        click.echo(f"  Priority: {goal.priority.value}")
        if goal.category:
            click.echo(f"  Category: {category_label(lookup, goal.category)}")
        if goal.deadline:
            click.echo(f"  Deadline: {goal.deadline}")
            if goal.is_active:
                click.echo(f"  Needed per month: {tracker.monthly_needed(goal)}")
        if goal.notes:
            click.echo(f"  Notes: {goal.notes}")

    click.echo(f"\n{'-' * 60}")
    click.echo(
        f"Total: {len(selected)} goals, overall progress {tracker.overall_progress():.1f}% "
        f"({tracker.completed_target()} of {tracker.total_target()} completed)"
    )


@goals.command()
@click.option("--name", required=True, help="Goal name")
@click.option("--target", required=True, help="Target amount (e.g. 5000.00)")
@click.option("--current", default="0", help="Amount already saved")
@click.option("--deadline", help="Deadline (YYYY-MM-DD)")
@click.option("--category", help="Category id")
@click.option("--priority", type=click.Choice([p.value for p in GoalPriority]), default="medium")
@click.option("--type", "goal_type", default="savings", help="Goal type")
@click.option("--notes", default="", help="Free-form notes")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    target: str,
    current: str,
    deadline: str | None,
    category: str | None,
    priority: str,
    goal_type: str,
    notes: str,
) -> None:
    """
    Create a goal.

    Example:
      finboard goals add --name "Emergency fund" --target 6000 --deadline 2026-12-31
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)
    tracker, store = load_tracker(config, data)

    payload = {
        "name": name,
        "target": target,
        "current": current,
        "deadline": deadline,
        "category": category,
        "priority": priority,
        "type": goal_type,
        "notes": notes,
    }
    try:
        goal = tracker.create_goal(payload)
    except FinanceError as e:
        raise click.ClickException(str(e)) from e

    store.save(tracker.goals, tracker.achievements)
    click.echo(f"✅ Created goal '{goal.name}' ({goal.id})")


@goals.command()
@click.argument("goal_id")
@click.option("--name", help="New name")
@click.option("--target", help="New target amount")
@click.option("--current", help="New saved amount")
@click.option("--deadline", help="New deadline (YYYY-MM-DD, empty to clear)")
@click.option("--category", help="New category id")
@click.option("--priority", type=click.Choice([p.value for p in GoalPriority]))
@click.option("--type", "goal_type", help="New goal type")
@click.option("--notes", help="New notes")
@click.pass_context
def update(ctx: click.Context, goal_id: str, goal_type: str | None, **fields) -> None:
    """
    Edit a goal. Only the options given are changed.

    Example:
      finboard goals update 3f2a... --target 8000 --priority high
    """
    config = ctx.obj["config"]
    data = load_finance_data(config)
    tracker, store = load_tracker(config, data)

    patch = {key: value for key, value in fields.items() if value is not None}
    if goal_type is not None:
        patch["type"] = goal_type
    if not patch:
        raise click.UsageError("Nothing to update. Pass at least one option.")

    try:
        goal = tracker.update_goal(goal_id, patch)
    except FinanceError as e:
        raise click.ClickException(str(e)) from e

    store.save(tracker.goals, tracker.achievements)
    click.echo(f"✅ Updated goal '{goal.name}' [{goal.status.value}]")


@goals.command()
@click.argument("goal_id")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete(ctx: click.Context, goal_id: str, yes: bool) -> None:
    """Delete a goal."""
    config = ctx.obj["config"]
    tracker, store = load_tracker(config)

    try:
        goal = tracker.get_goal(goal_id)
    except FinanceError as e:
        raise click.ClickException(str(e)) from e

    if not yes:
        click.confirm(f"Delete goal '{goal.name}'?", abort=True)

    tracker.delete_goal(goal_id)
    store.save(tracker.goals, tracker.achievements)
    click.echo(f"🗑️  Deleted goal '{goal.name}'")


@goals.command()
@click.argument("goal_id")
@click.argument("amount")
@click.pass_context
def contribute(ctx: click.Context, goal_id: str, amount: str) -> None:
    """
    Add money to a goal.

    Example:
      finboard goals contribute 3f2a... 250.00
    """
    config = ctx.obj["config"]
    tracker, store = load_tracker(config)

    try:
        goal = tracker.add_contribution(goal_id, amount)
    except FinanceError as e:
        raise click.ClickException(str(e)) from e

    store.save(tracker.goals, tracker.achievements)
    click.echo(f"✅ '{goal.name}': {goal.current} of {goal.target} ({tracker.progress(goal):.1f}%)")


@goals.command()
@click.pass_context
def recommend(ctx: click.Context) -> None:
    """Show recommendations across all goals."""
    config = ctx.obj["config"]
    tracker, _ = load_tracker(config)

    advice = recommendations(
        tracker.list_goals(),
        datetime.now(),
        upcoming_days=config.goals.upcoming_window_days,
        low_progress_percent=config.goals.low_progress_percent,
        low_progress_days=config.goals.low_progress_days,
    )
    if not advice:
        click.echo("✅ All goals are on track.")
        return

    for item in advice:
        click.echo(f"{SEVERITY_MARKERS[item.severity.value]} {item.title}: {item.message}")
