"""Streak commands."""

import click

from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    echo_warning,
    ensure_initialized,
    load_dispatcher,
)


@click.group()
def streak():
    """View or reset your workout streak."""
    pass


@streak.command("status")
@click.pass_context
@async_command
async def status(ctx: click.Context):
    """Show the current streak and how long until it breaks."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    snapshot = await engine.get_streak_status()
    record = await engine.get_streak_record()

    click.echo()
    click.echo(click.style(f"Streak: {snapshot.current_streak} day(s)", bold=True))
    click.echo("=" * 40)
    click.echo(snapshot.motivational_message)
    click.echo()
    click.echo(f"Longest streak: {record.longest_streak} day(s)")
    if record.streak_start_date:
        click.echo(f"Started: {record.streak_start_date.isoformat()}")
    if record.last_workout_date:
        click.echo(f"Last workout: {record.last_workout_date.isoformat()}")

    if snapshot.is_on_streak:
        echo_success(f"On track ({snapshot.days_until_break} day(s) until the streak breaks)")
    elif snapshot.current_streak > 0:
        echo_warning("Streak at risk!")

    if await engine.needs_rest_day():
        echo_info("You've trained 5+ days in a row. Consider a rest day tomorrow.")

    click.echo()
    click.echo(click.style("Badges", bold=True))
    for badge_status in await engine.get_streak_badges():
        badge = badge_status.badge
        marker = click.style("[x]", fg="green") if badge_status.earned else "[ ]"
        click.echo(
            f"  {marker} {badge.name:<12} {badge.description} ({badge_status.progress}%)"
        )


@streak.command("reset")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def reset(ctx: click.Context, yes: bool):
    """Reset the streak to zero. Workout history is kept."""
    ensure_initialized(ctx)

    if not yes and not click.confirm("Reset your streak to 0?"):
        return

    dispatcher = await load_dispatcher(ctx)
    engine = build_engine(ctx, dispatcher=dispatcher)
    await engine.reset_streak()

    echo_success("Streak reset.")
