"""Daily calorie target calculation."""

import math

from burnfit.domain.profile import Goal

ACTIVITY_FACTOR = 1.2
LOSE_DEFICIT_KCAL = 400


def compute_target(age: int, height_cm: float, weight_kg: float, goal: Goal) -> int:
    """Return the daily calorie budget for the given biometrics and goal.

    Uses a Mifflin-St Jeor base with a fixed sedentary-to-light activity
    factor. The weight-loss deficit is applied before rounding. Inputs are
    not validated here.
    """
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age + 5
    target = base * ACTIVITY_FACTOR
    if goal == Goal.LOSE:
        target -= LOSE_DEFICIT_KCAL
    return round_half_up(target)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
