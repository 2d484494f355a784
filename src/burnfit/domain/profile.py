"""Domain models for the user profile."""

from dataclasses import dataclass, field
from enum import StrEnum

SEARCH_HISTORY_LIMIT = 50


class Goal(StrEnum):
    """Weight goal chosen at setup."""

    LOSE = "lose"
    MAINTAIN = "maintain"


class DietaryPreference(StrEnum):
    """Diet used to filter meal suggestions and estimates."""

    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non-vegetarian"
    NONE = "none"


@dataclass(frozen=True)
class Profile:
    """Biometrics, goal and the daily calorie target derived at setup.

    ``daily_target_kcal`` is computed once when setup completes and is left
    untouched by later biometric edits.
    """

    age: int
    height_cm: float
    weight_kg: float
    goal: Goal
    dietary_preference: DietaryPreference
    daily_target_kcal: int
    setup_complete: bool = False
    email: str | None = None
    phone_number: str | None = None
    search_history: tuple[str, ...] = field(default_factory=tuple)


def push_search_history(
    history: tuple[str, ...], query: str, limit: int = SEARCH_HISTORY_LIMIT
) -> tuple[str, ...]:
    """Return history with ``query`` prepended, keeping the newest ``limit``."""
    return ((query,) + history)[:limit]
