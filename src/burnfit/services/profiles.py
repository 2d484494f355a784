"""Profile setup and editing."""

import logging
from dataclasses import dataclass, field, replace
from enum import StrEnum

from burnfit.domain.errors import InvalidInputError, ProfileNotReadyError
from burnfit.domain.profile import (
    DietaryPreference,
    Goal,
    Profile,
    push_search_history,
)
from burnfit.services.storage import StateStore
from burnfit.services.targets import compute_target

_logger = logging.getLogger(__name__)

# Contact details may be cleared by passing None.
_CLEARABLE_FIELDS = frozenset({"email", "phone_number"})


@dataclass
class ProfileService:
    """Application service for the single user profile."""

    store: StateStore
    _profile: Profile | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        self._profile = self.store.load_profile()

    def get(self) -> Profile | None:
        """Return the current profile, if one exists."""
        return self._profile

    def require_ready(self) -> Profile:
        """Return the profile or raise when setup has not been completed."""
        if self._profile is None or not self._profile.setup_complete:
            raise ProfileNotReadyError("Profile setup is not complete")
        return self._profile

    def complete_setup(  # noqa: PLR0913
        self,
        *,
        age: int,
        height_cm: float,
        weight_kg: float,
        goal: Goal,
        dietary_preference: DietaryPreference = DietaryPreference.NONE,
        email: str | None = None,
        phone_number: str | None = None,
    ) -> Profile:
        """Validate biometrics, derive the daily target and mark setup complete."""
        _require_positive("age", age)
        _require_positive("height_cm", height_cm)
        _require_positive("weight_kg", weight_kg)
        goal = _parse(Goal, goal)
        history = self._profile.search_history if self._profile else ()
        profile = Profile(
            age=age,
            height_cm=height_cm,
            weight_kg=weight_kg,
            goal=goal,
            dietary_preference=_parse(DietaryPreference, dietary_preference),
            daily_target_kcal=compute_target(age, height_cm, weight_kg, goal),
            setup_complete=True,
            email=email,
            phone_number=phone_number,
            search_history=history,
        )
        _logger.info(
            "Profile setup complete: goal=%s target=%s",
            profile.goal,
            profile.daily_target_kcal,
        )
        return self._save(profile)

    def update(self, **changes: object) -> Profile:
        """Edit profile fields without re-deriving the daily target."""
        profile = self.require_ready()
        allowed = {
            "age",
            "height_cm",
            "weight_kg",
            "goal",
            "dietary_preference",
            "email",
            "phone_number",
        }
        unknown = set(changes) - allowed
        if unknown:
            fields = ", ".join(sorted(unknown))
            raise InvalidInputError(f"Cannot edit fields: {fields}")
        updates = {
            key: value
            for key, value in changes.items()
            if value is not None or key in _CLEARABLE_FIELDS
        }
        for key in ("age", "height_cm", "weight_kg"):
            if key in updates:
                _require_positive(key, updates[key])
        if "goal" in updates:
            updates["goal"] = _parse(Goal, updates["goal"])
        if "dietary_preference" in updates:
            updates["dietary_preference"] = _parse(
                DietaryPreference, updates["dietary_preference"]
            )
        return self._save(replace(profile, **updates))

    def record_search(self, query: str) -> Profile:
        """Prepend a coach query to the bounded search history."""
        profile = self.require_ready()
        updated = replace(
            profile, search_history=push_search_history(profile.search_history, query)
        )
        return self._save(updated)

    def forget(self) -> None:
        """Drop the in-memory profile after the store was cleared."""
        self._profile = None

    def _save(self, profile: Profile) -> Profile:
        self._profile = profile
        try:
            self.store.save_profile(profile)
        except Exception:
            _logger.exception("Failed to persist profile")
        return profile


def _require_positive(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        raise InvalidInputError(f"{name} must be a positive number")


def _parse(enum_type: type[StrEnum], value: object) -> StrEnum:
    try:
        return enum_type(value)
    except ValueError as exc:
        raise InvalidInputError(f"Unsupported {enum_type.__name__}: {value}") from exc
