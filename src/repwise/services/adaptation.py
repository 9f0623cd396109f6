"""Per-exercise difficulty adaptation from workout feedback.

Each piece of feedback recommends new reps and weight computed from the
targets the user was given for that workout, not from the previous
recommendation. Re-submitting the same targets therefore never compounds
the load; only the progression trend accumulates.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

from ..models.feedback import Difficulty, WorkoutFeedbackEntry
from ..models.progress import (
    DEFAULT_REPS,
    DEFAULT_WEIGHT,
    ExerciseAdaptation,
    ProgressState,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdjustmentRule:
    """Multipliers and trend change applied for one difficulty rating."""

    reps_factor: Decimal
    weight_factor: Decimal
    progression_delta: float
    increase: bool


ADJUSTMENT_RULES = {
    Difficulty.TOO_EASY: AdjustmentRule(Decimal("1.15"), Decimal("1.10"), 0.15, True),
    Difficulty.PERFECT: AdjustmentRule(Decimal("1.05"), Decimal("1.05"), 0.05, True),
    Difficulty.TOO_HARD: AdjustmentRule(Decimal("0.85"), Decimal("0.90"), -0.20, False),
}

# Keeps the persisted trend free of float noise (0.15 + 0.05 == 0.2)
PROGRESSION_PRECISION = 4


def _scale(value: float, factor: Decimal, increase: bool) -> int:
    # str() keeps 50 * 1.10 at exactly 55 instead of 55.000000000000007
    scaled = Decimal(str(value)) * factor
    rounding = ROUND_CEILING if increase else ROUND_FLOOR
    return int(scaled.to_integral_value(rounding=rounding))


class AdaptiveDifficultyEngine:
    """Adjusts recommended reps and weight per exercise."""

    def adapt(
        self, progress: ProgressState, entry: WorkoutFeedbackEntry
    ) -> ExerciseAdaptation | None:
        """Update the adaptation for the entry's exercise.

        Returns:
            The updated adaptation, or None if the entry has no exercise_id
        """
        if not entry.exercise_id:
            return None

        adaptation = progress.adaptations.get(entry.exercise_id)
        if adaptation is None:
            adaptation = ExerciseAdaptation(
                current_reps=entry.target_reps or DEFAULT_REPS,
                current_weight=entry.target_weight or DEFAULT_WEIGHT,
                progression=0.0,
            )
            progress.adaptations[entry.exercise_id] = adaptation

        rule = ADJUSTMENT_RULES[entry.difficulty]

        if entry.target_reps:
            reps = _scale(entry.target_reps, rule.reps_factor, rule.increase)
            adaptation.current_reps = max(1, reps)

        if entry.target_weight and entry.target_weight > 0:
            weight = _scale(entry.target_weight, rule.weight_factor, rule.increase)
            adaptation.current_weight = max(0, weight)

        adaptation.progression = round(
            adaptation.progression + rule.progression_delta, PROGRESSION_PRECISION
        )

        logger.debug(
            "Adapted %s after %s feedback: reps=%s weight=%s progression=%+.2f",
            entry.exercise_id,
            entry.difficulty.value,
            adaptation.current_reps,
            adaptation.current_weight,
            adaptation.progression,
        )
        return adaptation

    def get(self, progress: ProgressState, exercise_id: str) -> dict:
        """Get the recommended reps and weight for an exercise.

        Exercises without any feedback get the default of 10 reps at 0.
        """
        adaptation = progress.adaptations.get(exercise_id)
        if adaptation is None:
            return {"reps": DEFAULT_REPS, "weight": DEFAULT_WEIGHT}
        return {"reps": adaptation.current_reps, "weight": adaptation.current_weight}
