"""Pydantic models for HTTP request payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fitbit_link.domain.models import FoodItem, MealType


class RedirectPayload(BaseModel):
    """Full redirect URL captured by the callback page, fragment included."""

    redirect_url: str


class FoodLogRequest(BaseModel):
    """Food log entry, either by catalog food id or by name and calories."""

    food_id: str | None = Field(default=None, alias="foodId")
    food_name: str | None = Field(default=None, alias="foodName")
    calories: int | None = None
    meal_type: MealType = Field(alias="mealTypeId")
    unit: int = Field(alias="unitId")
    amount: float = Field(gt=0)
    day: date | None = Field(default=None, alias="date")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def _check_food_reference(self) -> "FoodLogRequest":
        if self.food_id is None and (self.food_name is None or self.calories is None):
            raise ValueError("Provide foodId, or foodName together with calories")
        return self

    def to_item(self, default_day: date) -> FoodItem:
        """Convert to a domain food item, defaulting the date."""
        day = self.day or default_day
        if self.food_id is not None:
            return FoodItem.from_catalog(
                food_id=self.food_id,
                meal_type=self.meal_type,
                unit=self.unit,
                amount=self.amount,
                day=day,
            )
        return FoodItem.custom(
            food_name=self.food_name or "",
            calories=self.calories or 0,
            meal_type=self.meal_type,
            unit=self.unit,
            amount=self.amount,
            day=day,
        )
