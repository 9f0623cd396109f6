"""Progress tracking commands."""

import click

from ..services.achievements import ACHIEVEMENTS
from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
)


@click.group()
def progress():
    """Track weekly and monthly goals, adaptations and achievements."""
    pass


def _echo_period(label: str, summary: dict) -> None:
    bar_width = 20
    filled = min(bar_width, summary["percentage"] * bar_width // 100)
    bar = "#" * filled + "-" * (bar_width - filled)

    click.echo(click.style(label, bold=True))
    click.echo(
        f"  [{bar}] {summary['completed']}/{summary['target']} workouts "
        f"({summary['percentage']}%)"
    )
    if summary["completed"] >= summary["target"]:
        echo_success("Target reached!")


@progress.command("weekly")
@click.pass_context
@async_command
async def weekly(ctx: click.Context):
    """Show workouts completed this week."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    _echo_period("This week", await engine.get_weekly_progress())


@progress.command("monthly")
@click.pass_context
@async_command
async def monthly(ctx: click.Context):
    """Show workouts completed this month."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    _echo_period("This month", await engine.get_monthly_progress())


@progress.command("targets")
@click.option("--weekly", "weekly_target", type=int, help="Workouts per week")
@click.option("--monthly", "monthly_target", type=int, help="Workouts per month")
@click.pass_context
@async_command
async def targets(ctx: click.Context, weekly_target: int | None, monthly_target: int | None):
    """Show or change the weekly and monthly targets."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    if weekly_target is None and monthly_target is None:
        state = await engine.load()
        click.echo(f"Weekly target: {state.weekly_progress.target}")
        click.echo(f"Monthly target: {state.monthly_progress.target}")
        return

    state = await engine.set_targets(weekly=weekly_target, monthly=monthly_target)
    echo_success(
        f"Targets set: {state.weekly_progress.target}/week, "
        f"{state.monthly_progress.target}/month"
    )


@progress.command("adaptation")
@click.argument("exercise_id")
@click.pass_context
@async_command
async def adaptation(ctx: click.Context, exercise_id: str):
    """Show recommended reps and weight for EXERCISE_ID."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    recommendation = await engine.get_adaptation(exercise_id)
    state = await engine.load()

    click.echo(f"{exercise_id}: {recommendation['reps']} reps @ {recommendation['weight']}")
    current = state.adaptations.get(exercise_id)
    if current is None:
        echo_info("No feedback for this exercise yet; showing defaults.")
    else:
        click.echo(f"Progression trend: {current.progression:+.2f}")


@progress.command("achievements")
@click.pass_context
@async_command
async def achievements(ctx: click.Context):
    """List achievements you currently hold."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    earned = await engine.check_achievements()

    if not earned:
        echo_info("No achievements right now. Keep going!")
        return

    rows = []
    for achievement_id in earned:
        achievement = ACHIEVEMENTS[achievement_id]
        rows.append([achievement.icon, achievement.title, achievement_id])
    click.echo(format_table(["", "Achievement", "ID"], rows))
