"""Command-line entrypoint."""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date

import httpx

from fitbit_link.app_logging import configure_logging
from fitbit_link.containers import AppContainer, build_container
from fitbit_link.domain.errors import FitbitError
from fitbit_link.domain.models import FoodItem, MealType

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(prog="fitbit-link")
    subcommands = parser.add_subparsers(dest="command", required=True)
    subcommands.add_parser("login", help="Open the Fitbit authorization page")
    complete = subcommands.add_parser(
        "complete", help="Store credentials from a redirect URL"
    )
    complete.add_argument("redirect_url")
    subcommands.add_parser("logout", help="Forget stored credentials")
    subcommands.add_parser("status", help="Show whether credentials are stored")
    subcommands.add_parser("foods", help="Print today's food log")
    subcommands.add_parser("activity", help="Print today's activity summary")

    log_food = subcommands.add_parser("log-food", help="Log a food entry")
    reference = log_food.add_mutually_exclusive_group(required=True)
    reference.add_argument("--food-id")
    reference.add_argument("--food-name")
    log_food.add_argument("--calories", type=int)
    log_food.add_argument(
        "--meal",
        choices=[meal.name.lower() for meal in MealType],
        default="anytime",
    )
    log_food.add_argument("--unit", type=int, required=True)
    log_food.add_argument("--amount", type=float, default=1.0)
    log_food.add_argument("--date", type=date.fromisoformat)
    return parser


def main(argv: list[str] | None = None, container: AppContainer | None = None) -> int:
    """Run a command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "log-food" and args.food_name and args.calories is None:
        parser.error("--calories is required with --food-name")
    resolved = container or build_container()
    configure_logging(resolved.settings.log_level)
    try:
        result = asyncio.run(_run(args, resolved))
    except (FitbitError, httpx.HTTPError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    print(json.dumps(result, indent=2))
    return 0


async def _run(args: argparse.Namespace, container: AppContainer) -> object:
    client = container.fitbit_client
    await client.initialize()
    try:
        if args.command == "login":
            client.login()
            return {"authorize_url": client.authorize_url()}
        if args.command == "complete":
            if not await client.handle_redirect(args.redirect_url):
                raise FitbitError("Redirect URL is missing access_token or user_id")
            return {"logged_in": True}
        if args.command == "logout":
            await client.logout()
            return {"logged_in": False}
        if args.command == "status":
            return {"logged_in": client.is_logged_in}
        if args.command == "foods":
            return await client.get_food_logs()
        if args.command == "activity":
            return await client.get_daily_activity()
        return await client.post_food_logs(_food_item(args, client.today()))
    finally:
        await container.close_resources()


def _food_item(args: argparse.Namespace, today: date) -> FoodItem:
    meal_type = MealType[args.meal.upper()]
    day = args.date or today
    if args.food_id:
        return FoodItem.from_catalog(
            food_id=args.food_id,
            meal_type=meal_type,
            unit=args.unit,
            amount=args.amount,
            day=day,
        )
    return FoodItem.custom(
        food_name=args.food_name,
        calories=args.calories,
        meal_type=meal_type,
        unit=args.unit,
        amount=args.amount,
        day=day,
    )


if __name__ == "__main__":
    sys.exit(main())
