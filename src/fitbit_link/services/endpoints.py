"""Fitbit resource URL and request body builders."""

from datetime import date

from fitbit_link.domain.models import FoodItem

API_BASE_URL = "https://api.fitbit.com"
DATE_FORMAT = "%Y-%m-%d"


def format_date(day: date) -> str:
    """Format a date the way Fitbit expects it."""
    return day.strftime(DATE_FORMAT)


def food_logs_url(
    user_id: str | None, day: date, base_url: str = API_BASE_URL
) -> str | None:
    """Return the food log URL for a day, or None without a user id."""
    if not user_id:
        return None
    return f"{base_url}/1/user/{user_id}/foods/log/date/{format_date(day)}.json"


def daily_activity_url(
    user_id: str | None, day: date, base_url: str = API_BASE_URL
) -> str | None:
    """Return the daily activity summary URL, or None without a user id."""
    if not user_id:
        return None
    return f"{base_url}/1/user/{user_id}/activities/date/{format_date(day)}.json"


def post_food_log_url(base_url: str = API_BASE_URL) -> str:
    """Return the URL for creating a food log entry as the current user."""
    return f"{base_url}/1/user/-/foods/log.json"


def food_log_form(item: FoodItem) -> dict[str, str]:
    """Build the form body for a food log entry, omitting absent fields."""
    form: dict[str, str] = {}
    if item.food_id is not None:
        form["foodId"] = item.food_id
    if item.food_name is not None:
        form["foodName"] = item.food_name
    form["amount"] = f"{item.amount:.2f}"
    form["mealTypeId"] = str(int(item.meal_type))
    form["unitId"] = str(item.unit)
    form["date"] = format_date(item.date)
    if item.calories is not None:
        form["calories"] = str(item.calories)
    return form
