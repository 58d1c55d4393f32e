#!/usr/bin/env python3
"""Ad hoc runner for Snap Chef.

Detect the food in an image and print recipe suggestions without any UI.

Usage:
    python query.py images/pasta.png
    python query.py https://example.com/sushi.jpg
    python query.py --count 6 --nutrition --insights images/salad.jpg
    python query.py --search "thai green curry"
    python query.py --debug images/pasta.png  # Show full JSON results

Features:
- Ordered provider fallback for detection and recipes
- Demo mode notice when results come from the mock catalog
- Optional nutrition lookup for the first recipe's ingredients
- Optional cooking insights for the detected food
- Debug mode to display full JSON of every result
"""

import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table

from snap_chef.models.models import DetectionResult, RecipeResult
from snap_chef.services.coordinator import ProviderFallbackCoordinator, build_coordinator
from snap_chef.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--count N] [--nutrition] [--insights] [--search "query"] <image>'


def parse_args(argv: list[str]) -> dict:
    """Parse command-line flags.

    Returns:
        Dict with image, search, count, debug, nutrition and insights keys.

    Raises:
        ValueError: On unknown flags, a bad --count, or no image/search given.
    """
    options = {"image": None, "search": None, "count": None, "debug": False, "nutrition": False, "insights": False}
    index = 0

    while index < len(argv) and argv[index].startswith("--"):
        flag = argv[index]
        if flag in ("--debug", "--nutrition", "--insights"):
            options[flag[2:]] = True
            index += 1
        elif flag in ("--count", "--search"):
            index += 1
            if index >= len(argv):
                raise ValueError(f"{flag} flag requires a value")
            options[flag[2:]] = argv[index]
            index += 1
        else:
            raise ValueError(f"Unknown flag: {flag}")

    if options["count"] is not None:
        try:
            options["count"] = int(options["count"])
        except ValueError:
            raise ValueError(f"--count must be an integer, got: {options['count']}") from None
        if options["count"] < 1:
            raise ValueError("--count must be at least 1")

    if index < len(argv):
        # Join remaining arguments (handles paths with spaces)
        options["image"] = " ".join(argv[index:])
    if options["image"] is None and options["search"] is None:
        raise ValueError("No image or --search query provided")
    return options


def render_detection(detection: DetectionResult) -> None:
    console.print(
        f"[bold green]{detection.name}[/bold green] "
        f"[dim]({detection.category.value}, {detection.confidence:.0%} via {detection.source})[/dim]"
    )
    if detection.ingredients:
        console.print(f"Ingredients: {', '.join(detection.ingredients)}")


def render_recipes(recipes: list[RecipeResult], title: str = "Recipes") -> None:
    table = Table(title=title)
    table.add_column("Title", style="bold")
    table.add_column("Time")
    table.add_column("Difficulty")
    table.add_column("Calories", justify="right")
    table.add_column("Source", style="dim")
    for recipe in recipes:
        calories = str(recipe.nutrition.calories) if recipe.nutrition else "-"
        table.add_row(recipe.title, recipe.cook_time, recipe.difficulty.value, calories, recipe.source)
    console.print(table)


async def run(options: dict, coordinator: Optional[ProviderFallbackCoordinator] = None) -> None:
    """Execute one detection (or search) and print the results."""
    coordinator = coordinator or build_coordinator()

    if coordinator.is_demo_mode():
        console.print("[yellow]Demo mode: no providers configured, showing sample data[/yellow]")

    if options["search"]:
        logger.info(f"Searching recipes: {options['search']}")
        recipes = await coordinator.search_recipes(options["search"], options["count"])
        render_recipes(recipes, title=f"Results for '{options['search']}'")
        if options["debug"]:
            console.print_json(data=[recipe.model_dump(mode="json") for recipe in recipes])
        if options["image"] is None:
            return

    logger.info(f"Detecting food: {options['image']}")
    detection = await coordinator.detect_food(options["image"])
    recipes = await coordinator.get_recipes(detection, options["count"])

    console.print()
    render_detection(detection)
    render_recipes(recipes)
    if detection.is_mock or any(recipe.source == "mock" for recipe in recipes):
        console.print("[dim]Some results come from sample data (fallback mode).[/dim]")

    if options["insights"]:
        for insight in await coordinator.get_insights(detection):
            console.print(f"[bold cyan]{insight.title}[/bold cyan]: {insight.content}")

    if options["nutrition"] and recipes:
        facts = await coordinator.analyze_nutrition(recipes[0].ingredients)
        console.print(
            f"Nutrition for {recipes[0].title} ({facts.source}): {facts.calories} kcal, "
            f"protein {facts.protein}, carbs {facts.carbs}, fat {facts.fat}, "
            f"fiber {facts.fiber}, sugar {facts.sugar}"
        )

    if options["debug"]:
        console.print("[bold cyan]Debug Mode: Full Results[/bold cyan]")
        console.print_json(
            data={
                "detection": detection.model_dump(mode="json"),
                "recipes": [recipe.model_dump(mode="json") for recipe in recipes],
            }
        )


def main(argv: list[str]) -> int:
    try:
        options = parse_args(argv)
    except ValueError as e:
        print(f"Error: {e}")
        print(USAGE)
        return 1

    try:
        asyncio.run(run(options))
    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        return 0
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
