"""Progress routes."""

from fastapi import APIRouter, Depends, Form

from ...services.engine import ProgressEngine
from ..deps import get_engine

router = APIRouter(prefix="/progress", tags=["progress"])


def _state_summary(engine: ProgressEngine, progress) -> dict:
    return {
        "streak_days": progress.streak_days,
        "longest_streak": progress.longest_streak,
        "last_workout_date": (
            progress.last_workout_date.isoformat() if progress.last_workout_date else None
        ),
        "total_workouts": progress.total_workouts,
        "weekly_progress": engine.periods.summary(progress.weekly_progress),
        "monthly_progress": engine.periods.summary(progress.monthly_progress),
        "adaptations": {
            exercise_id: adaptation.to_dict()
            for exercise_id, adaptation in progress.adaptations.items()
        },
    }


@router.get("/{user_id}")
async def get_progress(engine: ProgressEngine = Depends(get_engine)):
    """Full progress summary with the ten most recent workouts."""
    progress = await engine.load()
    engine.periods.recompute(progress, engine.clock())
    summary = _state_summary(engine, progress)
    summary["recent_workouts"] = [
        entry.to_dict() for entry in engine.feedback_log.recent(progress, 10)
    ]
    return summary


@router.post("/{user_id}/feedback")
async def record_feedback(
    workout_id: str = Form(...),
    difficulty: str = Form(...),
    timestamp: str | None = Form(None),
    exercise_id: str | None = Form(None),
    target_reps: int | None = Form(None),
    completed_reps: int | None = Form(None),
    target_weight: float | None = Form(None),
    weight_used: float | None = Form(None),
    feedback: str | None = Form(None),
    engine: ProgressEngine = Depends(get_engine),
):
    """Record workout feedback. Timestamp defaults to now."""
    progress = await engine.record_feedback(
        {
            "workout_id": workout_id,
            "difficulty": difficulty,
            "timestamp": timestamp or engine.clock(),
            "exercise_id": exercise_id,
            "target_reps": target_reps,
            "completed_reps": completed_reps,
            "target_weight": target_weight,
            "weight_used": weight_used,
            "feedback_text": feedback,
        }
    )
    return {"status": "recorded", **_state_summary(engine, progress)}


@router.get("/{user_id}/streak")
async def streak_status(engine: ProgressEngine = Depends(get_engine)):
    """Current streak status, the legacy streak record and streak badges."""
    snapshot = await engine.get_streak_status()
    record = await engine.get_streak_record()
    badges = await engine.get_streak_badges()
    return {
        **snapshot.to_dict(),
        "record": record.to_dict(),
        "badges": [badge.to_dict() for badge in badges],
    }


@router.post("/{user_id}/streak/reset")
async def reset_streak(engine: ProgressEngine = Depends(get_engine)):
    """Reset the streak; history is kept."""
    progress = await engine.reset_streak()
    return {"status": "reset", "streak_days": progress.streak_days}


@router.get("/{user_id}/weekly")
async def weekly_progress(engine: ProgressEngine = Depends(get_engine)):
    return await engine.get_weekly_progress()


@router.get("/{user_id}/monthly")
async def monthly_progress(engine: ProgressEngine = Depends(get_engine)):
    return await engine.get_monthly_progress()


@router.get("/{user_id}/adaptations/{exercise_id}")
async def adaptation(exercise_id: str, engine: ProgressEngine = Depends(get_engine)):
    """Recommended reps and weight for an exercise."""
    return await engine.get_adaptation(exercise_id)


@router.get("/{user_id}/achievements")
async def achievements(engine: ProgressEngine = Depends(get_engine)):
    return {"achievements": await engine.check_achievements()}
