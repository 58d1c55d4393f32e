"""Spoonacular recipe provider.

Two-step lookup: findByIngredients for candidate ids, then one
/information call per id (run concurrently). Individual detail failures are
dropped; the provider only fails when no detail call succeeds.
"""

import asyncio
import re
from typing import Any, Optional

from snap_chef.catalog.mock_data import DEFAULT_INGREDIENTS, DEFAULT_INSTRUCTIONS, DEFAULT_RECIPE_IMAGE
from snap_chef.models.models import DetectionResult, Difficulty, Nutrition, RecipeResult
from snap_chef.providers.base import HttpProvider, RecipeProvider
from snap_chef.utils.errors import ProviderError, ProviderParseError
from snap_chef.utils.logger import logger

SPOONACULAR_URL = "https://api.spoonacular.com/recipes"
SUMMARY_LENGTH = 150
DEFAULT_READY_MINUTES = 30
HTML_TAG = re.compile(r"<[^>]*>")


def determine_difficulty(minutes: int, ingredient_count: int) -> Difficulty:
    if minutes <= 15 and ingredient_count <= 5:
        return Difficulty.EASY
    if minutes <= 45 and ingredient_count <= 10:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def summarize(summary: Optional[str]) -> str:
    """Strip HTML and cut to 150 characters."""
    if not summary:
        return "Delicious recipe"
    text = HTML_TAG.sub("", summary).strip()
    return f"{text[:SUMMARY_LENGTH]}..."


def parse_nutrition(nutrition: Any) -> Optional[Nutrition]:
    """Map Spoonacular's nutrients list onto Nutrition, or None if absent."""
    if not isinstance(nutrition, dict):
        return None
    amounts = {
        item.get("name"): item.get("amount", 0)
        for item in nutrition.get("nutrients") or []
        if isinstance(item, dict)
    }
    if "Calories" not in amounts:
        return None
    return Nutrition(
        calories=amounts["Calories"],
        protein=amounts.get("Protein", 0),
        carbs=amounts.get("Carbohydrates", 0),
        fat=amounts.get("Fat", 0),
    )


def parse_recipe_information(data: Any) -> RecipeResult:
    """Build a RecipeResult from a /recipes/{id}/information body."""
    if not isinstance(data, dict) or not data.get("title"):
        raise ProviderParseError("spoonacular", "recipe information has no title")

    minutes = data.get("readyInMinutes") or DEFAULT_READY_MINUTES
    ingredients = [
        item.get("original")
        for item in data.get("extendedIngredients") or []
        if isinstance(item, dict) and item.get("original")
    ]
    steps = []
    for block in data.get("analyzedInstructions") or []:
        steps.extend(step.get("step") for step in block.get("steps") or [] if step.get("step"))

    return RecipeResult(
        id=data.get("id") or data["title"],
        title=data["title"],
        description=summarize(data.get("summary")),
        image_url=data.get("image") or DEFAULT_RECIPE_IMAGE,
        cook_time=f"{minutes} mins",
        difficulty=determine_difficulty(minutes, len(ingredients)),
        ingredients=ingredients or list(DEFAULT_INGREDIENTS),
        instructions=steps or list(DEFAULT_INSTRUCTIONS),
        nutrition=parse_nutrition(data.get("nutrition")),
        source_url=data.get("sourceUrl"),
        source="spoonacular",
    )


class SpoonacularRecipeSearch(HttpProvider, RecipeProvider):
    name = "spoonacular"

    def __init__(self, api_key: str, timeout_seconds: float = 15.0) -> None:
        super().__init__(timeout_seconds)
        self.api_key = api_key

    async def recipes(self, detection: DetectionResult, count: int) -> list[RecipeResult]:
        ingredients = detection.ingredients or [detection.name]
        candidates = await self._request_json(
            "GET",
            f"{SPOONACULAR_URL}/findByIngredients",
            params={"ingredients": ",".join(ingredients), "number": count, "apiKey": self.api_key},
        )
        if not isinstance(candidates, list):
            raise ProviderParseError(self.name, "findByIngredients did not return a list")
        recipe_ids = [item["id"] for item in candidates if isinstance(item, dict) and item.get("id") is not None]
        if not recipe_ids:
            raise ProviderError(self.name, f"no recipes found for {', '.join(ingredients)}")

        results = await asyncio.gather(
            *(self.get_recipe_details(recipe_id) for recipe_id in recipe_ids[:count]),
            return_exceptions=True,
        )

        recipes = []
        for recipe_id, result in zip(recipe_ids, results):
            if isinstance(result, BaseException):
                logger.warning(f"Skipping Spoonacular recipe {recipe_id}: {result}", extra={"provider": self.name})
                continue
            recipes.append(result)

        if not recipes:
            raise ProviderError(self.name, "no recipe details could be fetched")
        return recipes

    async def get_recipe_details(self, recipe_id) -> RecipeResult:
        data = await self._request_json(
            "GET",
            f"{SPOONACULAR_URL}/{recipe_id}/information",
            params={"includeNutrition": "true", "apiKey": self.api_key},
        )
        return parse_recipe_information(data)
