"""Workout feedback commands."""

from datetime import datetime

import click
import questionary

from ..models.feedback import Difficulty
from .base import (
    async_command,
    build_engine,
    echo_info,
    echo_success,
    ensure_initialized,
    format_table,
    load_dispatcher,
    save_dispatcher_state,
)

DIFFICULTY_CHOICES = [d.value for d in Difficulty]


@click.group()
def feedback():
    """Log how workouts felt.

    Feedback drives the streak, weekly/monthly goals and the per-exercise
    reps and weight recommendations.
    """
    pass


async def _ask_difficulty() -> str | None:
    return await questionary.select(
        "How did the workout feel?",
        choices=[
            questionary.Choice("Too easy", Difficulty.TOO_EASY.value),
            questionary.Choice("Just right", Difficulty.PERFECT.value),
            questionary.Choice("Too hard", Difficulty.TOO_HARD.value),
        ],
    ).ask_async()


@feedback.command("log")
@click.argument("workout_id")
@click.option(
    "--difficulty", "-d", type=click.Choice(DIFFICULTY_CHOICES),
    help="How the workout felt (prompted if omitted)",
)
@click.option("--exercise", "exercise_id", help="Exercise the feedback applies to")
@click.option("--target-reps", type=int, help="Reps you were asked to do")
@click.option("--completed-reps", type=int, help="Reps you actually did")
@click.option("--target-weight", type=float, help="Weight you were asked to use")
@click.option("--weight-used", type=float, help="Weight you actually used")
@click.option("--note", "feedback_text", help="Free-text feedback")
@click.option(
    "--at", "timestamp", type=click.DateTime(),
    help="When the workout happened (default: now)",
)
@click.pass_context
@async_command
async def log(
    ctx: click.Context,
    workout_id: str,
    difficulty: str | None,
    exercise_id: str | None,
    target_reps: int | None,
    completed_reps: int | None,
    target_weight: float | None,
    weight_used: float | None,
    feedback_text: str | None,
    timestamp: datetime | None,
):
    """Record feedback for WORKOUT_ID."""
    ensure_initialized(ctx)

    if difficulty is None:
        difficulty = await _ask_difficulty()
        if difficulty is None:
            echo_info("Cancelled.")
            return

    dispatcher = await load_dispatcher(ctx)
    engine = build_engine(ctx, dispatcher=dispatcher)

    entry = {
        "workout_id": workout_id,
        "difficulty": difficulty,
        "timestamp": timestamp or engine.clock(),
        "exercise_id": exercise_id,
        "target_reps": target_reps,
        "completed_reps": completed_reps,
        "target_weight": target_weight,
        "weight_used": weight_used,
        "feedback_text": feedback_text,
    }
    progress = await engine.record_feedback(entry)

    echo_success(f"Logged {difficulty} feedback for {workout_id}")
    click.echo(f"Streak: {progress.streak_days} day(s)")
    click.echo(
        f"This week: {progress.weekly_progress.completed}/{progress.weekly_progress.target}"
    )

    if exercise_id:
        recommendation = engine.adaptation.get(progress, exercise_id)
        click.echo(
            f"Next time for {exercise_id}: "
            f"{recommendation['reps']} reps @ {recommendation['weight']}"
        )

    if await engine.needs_rest_day():
        dispatcher.rest_day_reminder()

    await save_dispatcher_state(ctx, dispatcher)


@feedback.command("recent")
@click.option("--limit", "-n", default=10, type=int, help="Number of entries to show")
@click.pass_context
@async_command
async def recent(ctx: click.Context, limit: int):
    """Show the most recent feedback entries."""
    ensure_initialized(ctx)

    engine = build_engine(ctx)
    entries = await engine.get_recent_workouts(limit)

    if not entries:
        echo_info("No workouts logged yet.")
        return

    rows = [
        [
            e.timestamp.strftime("%Y-%m-%d %H:%M"),
            e.workout_id,
            e.difficulty.value,
            e.exercise_id or "-",
        ]
        for e in entries
    ]
    click.echo(format_table(["When", "Workout", "Difficulty", "Exercise"], rows))
