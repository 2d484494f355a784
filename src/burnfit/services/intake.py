"""Intake capture flow: manual, photo and text estimates into one entry."""

from dataclasses import dataclass

from burnfit.domain.errors import InvalidInputError
from burnfit.domain.ledger import EntryKind, LedgerEntry
from burnfit.domain.profile import DietaryPreference
from burnfit.services.estimator import TextEstimatorService
from burnfit.services.ledger import LedgerService
from burnfit.services.profiles import ProfileService
from burnfit.services.targets import round_half_up
from burnfit.services.vision import VisionService

DEFAULT_MEAL_DESCRIPTION = "Meal"


@dataclass(frozen=True)
class IntakeDraft:
    """Suggested description and calories the user may edit before saving."""

    description: str
    calories: int | None
    source: str


@dataclass
class IntakeService:
    """Builds intake drafts and commits confirmed ones to the ledger."""

    ledger: LedgerService
    profiles: ProfileService
    vision: VisionService
    estimator: TextEstimatorService

    def manual_draft(self, description: str, calories: int | None) -> IntakeDraft:
        """Return a draft typed in by the user."""
        return IntakeDraft(description=description, calories=calories, source="manual")

    async def draft_from_photo(
        self, image_bytes: bytes, mime_type: str | None = None
    ) -> IntakeDraft:
        """Suggest a dish name and calories from a meal photo."""
        guess = await self.vision.estimate(
            image_bytes,
            mime_type=mime_type,
            dietary_preference=self._dietary_preference(),
        )
        return IntakeDraft(
            description=guess.food_name,
            calories=round_half_up(guess.estimated_calories),
            source="photo",
        )

    async def draft_from_text(self, description: str) -> IntakeDraft:
        """Suggest calories for a described meal.

        Calories are only suggested for a positive estimate; the description
        is replaced by the confirmed food name when the estimator returns one.
        """
        cleaned = description.strip()
        if not cleaned:
            raise InvalidInputError("Describe the meal to estimate its calories")
        estimate = await self.estimator.estimate(
            cleaned, dietary_preference=self._dietary_preference()
        )
        calories = None
        if estimate.estimated_calories > 0:
            calories = round_half_up(estimate.estimated_calories)
        confirmed = (estimate.confirmed_food_name or "").strip()
        return IntakeDraft(
            description=confirmed or cleaned, calories=calories, source="text"
        )

    def submit(self, description: str, calories: int | None) -> LedgerEntry:
        """Validate a confirmed draft and append it to the ledger."""
        if calories is None or calories <= 0:
            raise InvalidInputError("Calories must be greater than zero")
        return self.ledger.add_entry(
            EntryKind.INTAKE,
            calories,
            description.strip() or DEFAULT_MEAL_DESCRIPTION,
        )

    def _dietary_preference(self) -> DietaryPreference:
        profile = self.profiles.get()
        if profile is None:
            return DietaryPreference.NONE
        return profile.dietary_preference
