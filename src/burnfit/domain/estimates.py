"""Models for AI calorie estimation results."""

from pydantic import BaseModel, ConfigDict, Field

# Upper bound for a single dish; anything larger is treated as a bad estimate.
MAX_ESTIMATE_KCAL = 20000


class FoodGuess(BaseModel):
    """Dish name and calories guessed from a photo."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(alias="foodName")
    estimated_calories: float = Field(
        alias="estimatedCalories", ge=0, le=MAX_ESTIMATE_KCAL, allow_inf_nan=False
    )


class CalorieEstimate(BaseModel):
    """Calories estimated from a free-text description."""

    model_config = ConfigDict(populate_by_name=True)

    estimated_calories: float = Field(
        default=0,
        alias="estimatedCalories",
        ge=0,
        le=MAX_ESTIMATE_KCAL,
        allow_inf_nan=False,
    )
    confirmed_food_name: str | None = Field(default=None, alias="confirmedFoodName")


UNKNOWN_DISH = FoodGuess(food_name="Unknown Dish", estimated_calories=0)
NO_ESTIMATE = CalorieEstimate(estimated_calories=0)
