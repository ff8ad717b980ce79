"""Domain models for the Fitbit client."""

from dataclasses import dataclass
from datetime import date
from enum import IntEnum, StrEnum


class Scope(StrEnum):
    """Permission categories requested during authorization."""

    NUTRITION = "nutrition"
    ACTIVITY = "activity"


class MealType(IntEnum):
    """Fitbit meal type identifiers."""

    BREAKFAST = 1
    MORNING_SNACK = 2
    LUNCH = 3
    AFTERNOON_SNACK = 4
    DINNER = 5
    ANYTIME = 7


@dataclass(frozen=True)
class ClientConfig:
    """OAuth client registration details."""

    client_id: str
    callback_url: str
    scopes: tuple[Scope, ...] = (Scope.NUTRITION, Scope.ACTIVITY)


@dataclass(frozen=True)
class Credentials:
    """Access token and user id as currently stored."""

    access_token: str | None = None
    user_id: str | None = None

    @property
    def is_complete(self) -> bool:
        """Return True when both the token and the user id are present."""
        return bool(self.access_token) and bool(self.user_id)


@dataclass(frozen=True)
class FoodItem:
    """A food log entry to post, either by catalog id or by name and calories."""

    meal_type: MealType
    unit: int
    amount: float
    date: date
    food_id: str | None = None
    food_name: str | None = None
    calories: int | None = None

    @classmethod
    def from_catalog(
        cls,
        food_id: str,
        meal_type: MealType,
        unit: int,
        amount: float,
        day: date,
    ) -> "FoodItem":
        """Build an entry referencing a Fitbit catalog food."""
        return cls(
            meal_type=meal_type, unit=unit, amount=amount, date=day, food_id=food_id
        )

    @classmethod
    def custom(  # noqa: PLR0913
        cls,
        food_name: str,
        calories: int,
        meal_type: MealType,
        unit: int,
        amount: float,
        day: date,
    ) -> "FoodItem":
        """Build a free-form entry with a name and calorie count."""
        return cls(
            meal_type=meal_type,
            unit=unit,
            amount=amount,
            date=day,
            food_name=food_name,
            calories=calories,
        )
